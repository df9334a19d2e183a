"""Top-level client wiring the engine's components together."""

from __future__ import annotations

from chaintx.amm.uniswap_v3 import (
    DEFAULT_UNISWAP_V3_CONFIG,
    SwapExecutor,
    SwapQuoteEngine,
    UniswapV3Config,
    UniswapV3PoolReader,
)
from chaintx.config import DEFAULT_TIMEOUT, ClientConfig
from chaintx.ledger import node_config_for, select_ledger
from chaintx.node.client import NodeClient
from chaintx.tokens import Erc20, WethWrapper
from chaintx.transaction.confirmation import ConfirmationWaiter
from chaintx.transaction.pipeline import TransactionPipeline


class Web3Client:
    """One endpoint, with every component built on top of it.

    The ledger adapter is chosen here, once, from the URL. Components are
    rebuilt only by :meth:`set_header`, which must not be called while other
    calls on this client are in flight.

    Attributes:
        config: Configuration as given (original URL)
        node: JSON-RPC reads and simulated calls
        pipeline: EIP-1559 build/sign/broadcast
        waiter: Confirmation polling
        ledger: Submit-and-await adapter for this endpoint
        erc20: ERC20 reads and approvals
        weth: Native token wrapping
        pools: UniswapV3 pool reads
        quotes: UniswapV3 quotes and slippage bounds
        swaps: UniswapV3 swap execution
    """

    def __init__(
        self, config: ClientConfig, uniswap: UniswapV3Config = DEFAULT_UNISWAP_V3_CONFIG
    ) -> None:
        self.uniswap_config = uniswap
        self._build(config)

    def _build(self, config: ClientConfig) -> None:
        self.config = config
        self.node = NodeClient.from_config(node_config_for(config))
        self.pipeline = TransactionPipeline(self.node)
        self.waiter = ConfirmationWaiter(self.node)
        self.ledger = select_ledger(config, self.node, self.pipeline, self.waiter)
        self.erc20 = Erc20(self.node, self.ledger)
        self.weth = WethWrapper(self.ledger, self.uniswap_config.weth)
        self.pools = UniswapV3PoolReader(self.node, self.uniswap_config)
        self.quotes = SwapQuoteEngine(self.node, self.pools, self.uniswap_config)
        self.swaps = SwapExecutor(
            self.node, self.ledger, self.quotes, self.erc20, self.uniswap_config
        )

    @property
    def url(self) -> str:
        return self.config.url

    async def set_header(self, key: str, value: str) -> None:
        """Add or replace an HTTP header, rebuild the transport and close the old one."""
        node, ledger = self.node, self.ledger
        self._build(self.config.with_header(key, value))
        await ledger.close()
        await node.close()

    async def close(self) -> None:
        """Close the ledger adapter's and the node's HTTP sessions."""
        await self.ledger.close()
        await self.node.close()


def connect(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    *,
    check_sync: bool = False,
    uniswap: UniswapV3Config = DEFAULT_UNISWAP_V3_CONFIG,
) -> Web3Client:
    """Create a client for ``url``.

    Args:
        url: Node endpoint. ``<base>/jsonrpc[/<api key>]`` selects the Tron adapter.
        timeout: Per-request timeout in seconds
        check_sync: Refuse reads from a syncing node
        uniswap: UniswapV3 deployment addresses
    """
    return Web3Client(ClientConfig(url=url, timeout=timeout, check_sync=check_sync), uniswap)
