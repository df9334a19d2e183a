"""Executing exact-input swaps through the UniswapV3 SwapRouter."""

from __future__ import annotations

import structlog

from chaintx.ledger.base import LedgerAdapter
from chaintx.node.client import NodeClient
from chaintx.tokens.erc20 import Erc20
from chaintx.transaction.options import SendOptions
from chaintx.transaction.signing import address_from_key

from .config import DEFAULT_UNISWAP_V3_CONFIG, UniswapV3Config
from .constants import DEFAULT_DEADLINE_SECONDS, DEFAULT_FEE, SWAP_GAS_LIMIT_MULTIPLIER
from .encoding import encode_exact_input_single
from .quoter import SwapQuoteEngine
from .sqrt_price import validate_swap_bounds

logger = structlog.get_logger()


class SwapExecutor:
    """Builds and submits SwapRouter.exactInputSingle transactions.

    Args:
        node: Node for block and nonce reads
        ledger: Adapter the swap and approval transactions are submitted through
        quotes: Used to derive amount_out_min when the caller gives none
        erc20: Approval helper; built from ``node`` and ``ledger`` if omitted
        config: Deployment addresses
    """

    def __init__(
        self,
        node: NodeClient,
        ledger: LedgerAdapter,
        quotes: SwapQuoteEngine | None = None,
        erc20: Erc20 | None = None,
        config: UniswapV3Config = DEFAULT_UNISWAP_V3_CONFIG,
    ) -> None:
        self.node = node
        self.ledger = ledger
        self.config = config
        self.quotes = quotes or SwapQuoteEngine(node, config=config)
        self.erc20 = erc20 or Erc20(node, ledger)

    async def default_deadline(self) -> int:
        """Latest block timestamp plus ten minutes."""
        latest = await self.node.get_latest_block()
        return latest.timestamp + DEFAULT_DEADLINE_SECONDS

    async def swap(
        self,
        private_key: str,
        token_in: str,
        token_out: str,
        amount: int,
        fee: int | None = None,
        deadline: int | None = None,
        amount_out_min: int | None = None,
        sqrt_price_limit: int | None = None,
        router: str | None = None,
        options: SendOptions | None = None,
        wait_timeout: float | None = None,
    ) -> str:
        """Swap an exact amount of an ERC20 for another ERC20.

        If the router is not yet approved to spend ``token_in``, an unlimited
        approval is submitted first. Without ``wait_timeout`` the swap is not
        delayed until the approval is mined; it is given the next nonce so
        both can sit in the mempool together.

        Args:
            private_key: Key of the account swapping and receiving the output
            token_in: Token sold
            token_out: Token bought
            amount: Exact amount of ``token_in`` to sell
            fee: Pool fee tier (default 3000)
            deadline: Unix time after which the router reverts
                (default: latest block timestamp + 600)
            amount_out_min: Minimum output; derived from ``sqrt_price_limit`` if omitted
            sqrt_price_limit: Price limit as sqrtPriceX96 (0 or None = none)
            router: SwapRouter address (default from config)
            options: Overrides; a gas limit multiplier of 1.2 is used unless set
            wait_timeout: If set, wait for the swap (and approval) to confirm

        Returns:
            Transaction id of the swap

        Raises:
            BadInput: If fee or price limit are out of range (before any call)
            TransactionTimeout: If waiting was requested and timed out
        """
        fee = DEFAULT_FEE if fee is None else fee
        validate_swap_bounds(fee, sqrt_price_limit)

        sender = address_from_key(private_key)
        router = router or self.config.router
        options = self._swap_options(options)
        deadline, amount_out_min = await self._bounds(
            sender, token_in, token_out, amount, fee, deadline, amount_out_min, sqrt_price_limit
        )

        if not await self.erc20.check_approved(token_in, sender, router):
            logger.info("swap_router_approval_needed", token=token_in, router=router)
            # An unconfirmed approval holds the next nonce, so the swap takes the one after.
            chain_after_approval = wait_timeout is None or options.nonce is not None
            nonce = options.nonce
            if nonce is None and chain_after_approval:
                nonce = await self.ledger.next_nonce(sender)
            await self.erc20.approve(token_in, private_key, router, wait_timeout, options)
            if chain_after_approval:
                options = options.replace(nonce=nonce + 1)

        payload = encode_exact_input_single(
            token_in,
            token_out,
            fee,
            sender,
            deadline,
            amount,
            amount_out_min,
            sqrt_price_limit or 0,
        )
        return await self._submit(router, payload, 0, sender, private_key, options, wait_timeout)

    async def swap_eth_in(
        self,
        private_key: str,
        token_out: str,
        amount: int,
        fee: int | None = None,
        deadline: int | None = None,
        amount_out_min: int | None = None,
        sqrt_price_limit: int | None = None,
        router: str | None = None,
        options: SendOptions | None = None,
        wait_timeout: float | None = None,
    ) -> str:
        """Swap an exact amount of native ETH for an ERC20.

        Same as :meth:`swap` with WETH as the input token, except that the
        amount travels as the transaction value and no approval is needed.
        """
        fee = DEFAULT_FEE if fee is None else fee
        validate_swap_bounds(fee, sqrt_price_limit)

        sender = address_from_key(private_key)
        router = router or self.config.router
        token_in = self.config.weth
        options = self._swap_options(options)
        deadline, amount_out_min = await self._bounds(
            sender, token_in, token_out, amount, fee, deadline, amount_out_min, sqrt_price_limit
        )

        payload = encode_exact_input_single(
            token_in,
            token_out,
            fee,
            sender,
            deadline,
            amount,
            amount_out_min,
            sqrt_price_limit or 0,
        )
        return await self._submit(
            router, payload, amount, sender, private_key, options, wait_timeout
        )

    @staticmethod
    def _swap_options(options: SendOptions | None) -> SendOptions:
        return (options or SendOptions()).with_default_gas_limit_multiplier(
            SWAP_GAS_LIMIT_MULTIPLIER
        )

    async def _bounds(
        self,
        sender: str,
        token_in: str,
        token_out: str,
        amount: int,
        fee: int,
        deadline: int | None,
        amount_out_min: int | None,
        sqrt_price_limit: int | None,
    ) -> tuple[int, int]:
        if deadline is None:
            deadline = await self.default_deadline()
        if amount_out_min is None:
            amount_out_min = await self.quotes.minimum_acceptable_output(
                sqrt_price_limit, amount, token_in, token_out, fee, sender
            )
        return deadline, amount_out_min

    async def _submit(
        self,
        router: str,
        payload: bytes,
        value: int,
        sender: str,
        private_key: str,
        options: SendOptions,
        wait_timeout: float | None,
    ) -> str:
        tx_id = await self.ledger.submit(router, payload, value, sender, private_key, options)
        logger.info("swap_submitted", tx_id=tx_id, router=router, value=value)
        if wait_timeout is not None:
            await self.ledger.wait_for_transaction(tx_id, wait_timeout)
        return tx_id


__all__ = ["SwapExecutor"]
