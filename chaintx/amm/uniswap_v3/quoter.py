"""Swap quotes and slippage bounds from the UniswapV3 Quoter."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from chaintx.abi import WORD_SIZE, decode_uint
from chaintx.errors import BadResponse, ContractCallError
from chaintx.models.types import same_address
from chaintx.node.client import NodeClient

from .config import DEFAULT_UNISWAP_V3_CONFIG, UniswapV3Config
from .constants import DEFAULT_FEE
from .encoding import encode_quote_exact_input_single
from .pool import UniswapV3PoolReader
from .sqrt_price import decode_sqrt_price, validate_swap_bounds

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapQuote:
    """A quoted exact-input swap and the minimum output it must honour."""

    token_in: str
    token_out: str
    fee: int
    amount_in: int
    sqrt_price_limit: int
    amount_out: int
    amount_out_min: int


class SwapQuoteEngine:
    """Quotes exact-input swaps and derives minimum outputs from price limits.

    Args:
        node: Node used for simulated calls
        pools: Pool reader; built from ``node`` and ``config`` if omitted
        config: Deployment addresses
    """

    def __init__(
        self,
        node: NodeClient,
        pools: UniswapV3PoolReader | None = None,
        config: UniswapV3Config = DEFAULT_UNISWAP_V3_CONFIG,
    ) -> None:
        self.node = node
        self.config = config
        self.pools = pools or UniswapV3PoolReader(node, config)

    async def minimum_acceptable_output(
        self,
        sqrt_price_limit: int | None,
        amount_in: int,
        token_in: str,
        token_out: str,
        fee: int,
        caller: str,
    ) -> int:
        """Lowest output consistent with trading ``amount_in`` at the price limit.

        A limit of None or 0 means no protection and yields 0 without any
        network call. Otherwise the pool's token order decides whether the
        limit (always token1 per token0) is used as is or inverted.

        The product is computed in floating point, so for very large amounts
        the result is only as precise as a double.

        Raises:
            BadResponse: If the pool does not exist
        """
        if not sqrt_price_limit:
            return 0

        pool = await self.pools.get_pool_address(caller, token_in, token_out, fee)
        _, token1 = await self.pools.get_pool_tokens(caller, pool)
        zero_for_one = same_address(token1, token_out)

        price = decode_sqrt_price(sqrt_price_limit)
        if not zero_for_one:
            price = 1.0 / price
        return int(price * float(amount_in))

    async def quote_with_bounds(
        self,
        caller: str,
        token_in: str,
        token_out: str,
        amount_in: int,
        fee: int | None = None,
        sqrt_price_limit: int | None = None,
    ) -> SwapQuote:
        """Quote an exact-input single-pool swap and check it against its price limit.

        Args:
            caller: Address the quote is simulated from
            token_in: Input token
            token_out: Output token
            amount_in: Input amount
            fee: Pool fee tier (default 3000)
            sqrt_price_limit: Price limit as sqrtPriceX96; None or 0 for no limit

        Returns:
            SwapQuote with the quoted output and derived minimum

        Raises:
            BadInput: If fee or price limit are out of range (before any call)
            ContractCallError: If the quoter returns fewer than 32 bytes
            BadResponse: If the quoted output is below the minimum ("Liquidity too low")
        """
        fee = DEFAULT_FEE if fee is None else fee
        validate_swap_bounds(fee, sqrt_price_limit)
        limit = sqrt_price_limit or 0

        payload = encode_quote_exact_input_single(token_in, token_out, fee, amount_in, limit)
        result = await self.node.simulate_transaction(self.config.quoter, payload, caller)
        if len(result) < WORD_SIZE:
            raise ContractCallError("Bad response from swap price")
        amount_out = decode_uint(result)

        amount_out_min = await self.minimum_acceptable_output(
            limit, amount_in, token_in, token_out, fee, caller
        )
        if amount_out < amount_out_min:
            logger.warning(
                "swap_liquidity_too_low",
                token_in=token_in,
                token_out=token_out,
                fee=fee,
                amount_in=amount_in,
                amount_out=amount_out,
                amount_out_min=amount_out_min,
            )
            raise BadResponse("Liquidity too low")

        return SwapQuote(
            token_in=token_in,
            token_out=token_out,
            fee=fee,
            amount_in=amount_in,
            sqrt_price_limit=limit,
            amount_out=amount_out,
            amount_out_min=amount_out_min,
        )

    async def quote(
        self,
        caller: str,
        token_in: str,
        token_out: str,
        amount_in: int,
        fee: int | None = None,
        sqrt_price_limit: int | None = None,
    ) -> int:
        """Quoted output amount; see :meth:`quote_with_bounds`."""
        quote = await self.quote_with_bounds(
            caller, token_in, token_out, amount_in, fee, sqrt_price_limit
        )
        return quote.amount_out


__all__ = ["SwapQuote", "SwapQuoteEngine"]
