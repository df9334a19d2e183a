"""Async JSON-RPC client for an Ethereum-compatible node.

Every request goes through :meth:`NodeClient._request`, which sends a raw
JSON-RPC call over web3's ``AsyncHTTPProvider`` and turns error objects into
:class:`~chaintx.errors.RpcError`. Results are parsed into ints and pydantic
models here so that the rest of the engine never handles hex strings.

Network failures are never retried. The only repeating loops live in
:mod:`chaintx.transaction.confirmation`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import aiohttp
import structlog
from hexbytes import HexBytes
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.types import RPCEndpoint

from chaintx.config import ClientConfig
from chaintx.constants import INTRINSIC_GAS
from chaintx.errors import BadInput, BadResponse, InsufficientGas, RpcError, SyncingNode
from chaintx.fees.simulation import GasSimulator
from chaintx.abi import event_topic
from chaintx.models.chain import Block, JsonRpcError, Log, TransactionResponse
from chaintx.models.types import parse_quantity

logger = structlog.get_logger()

BlockId = int | str


def to_quantity(value: int) -> str:
    """Encode an int as a JSON-RPC quantity."""
    return hex(value)


def to_block_id(block: BlockId) -> str:
    return to_quantity(block) if isinstance(block, int) else block


class NodeClient:
    """Reads, simulated calls and raw broadcast against one node.

    Args:
        w3: AsyncWeb3 instance whose provider carries the endpoint
        check_sync: Refuse reads from a node that reports it is syncing
    """

    def __init__(self, w3: AsyncWeb3, *, check_sync: bool = False) -> None:
        self.w3 = w3
        self.check_sync = check_sync
        self.gas_simulator = GasSimulator(self)

    @classmethod
    def from_config(cls, config: ClientConfig) -> NodeClient:
        """Build a client whose transport uses the config's URL, timeout and headers."""
        headers = {"Content-Type": "application/json", **config.header_dict()}
        provider = AsyncHTTPProvider(
            config.url,
            request_kwargs={
                "timeout": aiohttp.ClientTimeout(total=config.timeout),
                "headers": headers,
            },
            exception_retry_configuration=None,
        )
        return cls(AsyncWeb3(provider), check_sync=config.check_sync)

    async def close(self) -> None:
        """Release the provider's HTTP session."""
        await self.w3.provider.disconnect()

    # =========================================================================
    # Transport
    # =========================================================================

    async def _request(self, method: str, params: Sequence[Any] = ()) -> Any:
        """Send one JSON-RPC request and return its ``result`` member.

        Raises:
            RpcError: If the node answered with an error object
            BadResponse: If the response has neither result nor error
        """
        response = await self.w3.provider.make_request(RPCEndpoint(method), list(params))
        if response.get("error") is not None:
            error = JsonRpcError.model_validate(response["error"])
            raise RpcError(error.code, error.message, error.data)
        if "result" not in response:
            raise BadResponse(f"{method} response has no result")
        return response["result"]

    async def is_syncing(self) -> bool:
        result = await self._request("eth_syncing")
        return result is not False

    async def _ensure_synced(self, method: str) -> None:
        if self.check_sync and await self.is_syncing():
            raise SyncingNode(f"Node is syncing, {method} result would be unreliable")

    async def _warn_if_syncing(self, method: str) -> None:
        if self.check_sync and await self.is_syncing():
            logger.warning("node_syncing", method=method)

    # =========================================================================
    # Account and chain state
    # =========================================================================

    async def get_balance(self, address: str, block: BlockId = "latest") -> int:
        await self._ensure_synced("eth_getBalance")
        return parse_quantity(await self._request("eth_getBalance", [address, to_block_id(block)]))

    async def get_transaction_count(self, address: str, block: BlockId = "latest") -> int:
        """Nonce of the next transaction from ``address``."""
        await self._ensure_synced("eth_getTransactionCount")
        result = await self._request("eth_getTransactionCount", [address, to_block_id(block)])
        return parse_quantity(result)

    async def block_number(self) -> int:
        await self._ensure_synced("eth_blockNumber")
        return parse_quantity(await self._request("eth_blockNumber"))

    async def chain_id(self) -> int:
        return parse_quantity(await self._request("eth_chainId"))

    async def get_block(self, block: BlockId = "latest") -> Block | None:
        """Fetch a block header without transaction bodies.

        Returns:
            The block, or None if the node does not have it
        """
        result = await self._request("eth_getBlockByNumber", [to_block_id(block), False])
        if result is None:
            return None
        return Block.model_validate(result)

    async def get_latest_block(self) -> Block:
        block = await self.get_block("latest")
        if block is None:
            raise BadResponse("Node returned no latest block")
        return block

    async def get_base_fee_per_gas(self) -> int | None:
        """Base fee of the latest block, or None on a chain without EIP-1559."""
        return (await self.get_latest_block()).base_fee_per_gas

    async def gas_price(self) -> int:
        """Legacy gas price, floored at the latest base fee.

        Some nodes report an eth_gasPrice below the base fee; a transaction
        priced that way could never be included.
        """
        await self._ensure_synced("eth_gasPrice")
        price = parse_quantity(await self._request("eth_gasPrice"))
        base_fee = await self.get_base_fee_per_gas()
        if base_fee is not None and base_fee > price:
            return base_fee
        return price

    # =========================================================================
    # Execution
    # =========================================================================

    async def estimate_gas(self, tx: dict[str, Any]) -> int:
        """Estimate gas for a transaction in JSON-RPC form (see TransactionRequest.to_rpc)."""
        await self._warn_if_syncing("eth_estimateGas")
        return parse_quantity(await self._request("eth_estimateGas", [tx]))

    async def call(self, tx: dict[str, Any], block: BlockId = "latest") -> bytes:
        await self._ensure_synced("eth_call")
        result = await self._request("eth_call", [tx, to_block_id(block)])
        return bytes(HexBytes(result))

    async def send_raw_transaction(self, raw: bytes) -> str:
        """Broadcast a signed transaction and return its hash."""
        result = await self._request("eth_sendRawTransaction", [HexBytes(raw).to_0x_hex()])
        return result.lower()

    async def get_transaction_by_hash(self, tx_hash: str) -> TransactionResponse | None:
        """Look up a transaction; None means the node has not seen it (yet)."""
        await self._warn_if_syncing("eth_getTransactionByHash")
        result = await self._request("eth_getTransactionByHash", [tx_hash])
        if result is None:
            return None
        return TransactionResponse.model_validate(result)

    async def simulate_transaction(
        self,
        contract: str,
        data: bytes,
        caller: str,
        *,
        value: int = 0,
        height: int | None = None,
    ) -> bytes:
        """Execute a read-only call and return its output.

        When ``check_sync`` is enabled the call carries the caller's nonce and
        the largest gas allowance the caller could pay for, which some nodes
        require before they will execute a call.

        Args:
            contract: Address being called
            data: Calldata
            caller: ``from`` address of the call
            value: Wei attached to the call
            height: Execute against this block instead of latest

        Raises:
            InsufficientGas: If check_sync is on and the caller cannot pay intrinsic gas
            BadInput: If ``height`` is beyond the latest block
        """
        tx: dict[str, Any] = {
            "from": caller,
            "to": contract,
            "value": to_quantity(value),
            "data": HexBytes(data).to_0x_hex(),
        }

        if self.check_sync:
            balance = await self.get_balance(caller)
            if balance < INTRINSIC_GAS:
                raise InsufficientGas(balance, INTRINSIC_GAS, INTRINSIC_GAS)
            nonce = await self.get_transaction_count(caller)
            simulated = await self.gas_simulator.simulated_gas(caller, balance=balance)
            tx.update(
                nonce=to_quantity(nonce),
                gas=to_quantity(simulated.gas_limit),
                gasPrice=to_quantity(simulated.gas_price),
            )

        block: BlockId = "latest"
        if height is not None:
            latest = await self.block_number()
            if height > latest:
                raise BadInput(f"Block {height} is beyond the latest block {latest}")
            block = height

        return await self.call(tx, block)

    # =========================================================================
    # Events
    # =========================================================================

    async def get_logs(
        self,
        from_block: BlockId,
        to_block: BlockId = "latest",
        address: str | Sequence[str] | None = None,
        topics: Sequence[str | Sequence[str] | None] | None = None,
    ) -> list[Log]:
        """Fetch event logs matching an eth_getLogs filter.

        Args:
            from_block: First block of the range, inclusive
            to_block: Last block of the range, inclusive
            address: Contract address, or several, that emitted the logs
            topics: Positional topic filter; None matches anything at that position
        """
        log_filter: dict[str, Any] = {
            "fromBlock": to_block_id(from_block),
            "toBlock": to_block_id(to_block),
        }
        if address is not None:
            log_filter["address"] = address
        if topics is not None:
            log_filter["topics"] = list(topics)
        result = await self._request("eth_getLogs", [log_filter])
        return [Log.model_validate(entry) for entry in result or []]

    async def check_for_event(
        self,
        start_block: BlockId,
        end_block: BlockId | None,
        contract: str,
        event_signature: str,
    ) -> list[Log]:
        """Logs of one event emitted by ``contract`` between two blocks.

        Args:
            start_block: First block to search
            end_block: Last block to search, or None for the latest block
            contract: Emitting contract
            event_signature: Solidity event signature, e.g. "Transfer(address,address,uint256)"
        """
        topic = event_topic(event_signature)
        logs = await self.get_logs(
            start_block,
            "latest" if end_block is None else end_block,
            address=contract,
            topics=[topic],
        )
        logger.debug(
            "event_logs_fetched", contract=contract, event=event_signature, count=len(logs)
        )
        return logs
