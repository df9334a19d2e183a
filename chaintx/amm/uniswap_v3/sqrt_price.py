"""Q64.96 square-root price codec.

Pools store ``sqrt(token1 / token0)`` as a fixed-point number with 96
fractional bits (``sqrtPriceX96``). These helpers convert between that
representation, spot prices and reserve amounts, and apply slippage to a
price limit.

Integer paths use exact arithmetic; the price paths go through float on
purpose, since their inputs are already approximate.
"""

from __future__ import annotations

import math

from chaintx.errors import BadInput
from chaintx.models.types import UINT24_MAX, UINT160_MAX

Q96 = 2**96
Q192 = 2**192


def decode_sqrt_price(sqrt_price_x96: int) -> float:
    """Spot price (token1 per token0) encoded by a sqrtPriceX96 value."""
    return (sqrt_price_x96 / Q96) ** 2


def sqrt_price_from_amounts(amount1: int, amount0: int) -> int:
    """Encode the price implied by two reserve amounts.

    Computes ``sqrt(amount1 * 2^192 / amount0)`` with integer arithmetic
    throughout, so the result is exact to the floor.

    Raises:
        BadInput: If amount0 is zero or either amount is negative
    """
    if amount0 <= 0 or amount1 < 0:
        raise BadInput(f"Invalid reserve amounts: amount1={amount1}, amount0={amount0}")
    return math.isqrt((amount1 << 192) // amount0)


def sqrt_price_from_price(price: float) -> int:
    """Encode a spot price as ``floor(sqrt(price * 2^192))``.

    Raises:
        BadInput: If price is negative or not finite
    """
    if not math.isfinite(price) or price < 0:
        raise BadInput(f"Invalid price: {price}")
    return math.floor(math.sqrt(price * Q192))


def scale_sqrt_price(sqrt_price_x96: int, slippage: float, zero_for_one: bool) -> int:
    """Move a sqrt price by a fractional slippage tolerance.

    A token0 -> token1 swap pushes the price down, so the bound is
    ``price * (1 - slippage)``; the other direction uses ``(1 + slippage)``.

    Args:
        sqrt_price_x96: Reference price, usually the pool's current slot0 price
        slippage: Fractional tolerance, e.g. 0.005 for 0.5%
        zero_for_one: True when swapping token0 for token1

    Returns:
        Scaled sqrtPriceX96
    """
    if slippage < 0:
        raise BadInput(f"Slippage cannot be negative: {slippage}")
    price = decode_sqrt_price(sqrt_price_x96)
    factor = (1.0 - slippage) if zero_for_one else (1.0 + slippage)
    return sqrt_price_from_price(price * factor)


def is_bad_fee(fee: int) -> bool:
    """True if the fee tier does not fit a uint24."""
    return not 0 <= fee <= UINT24_MAX


def is_bad_sqrt_price_limit(sqrt_price_limit: int) -> bool:
    """True if the price limit does not fit a uint160."""
    return not 0 <= sqrt_price_limit <= UINT160_MAX


def validate_swap_bounds(fee: int, sqrt_price_limit: int | None) -> None:
    """Reject fee tiers and price limits that cannot be ABI-encoded.

    Raises:
        BadInput: If the fee is outside uint24 or the limit outside uint160
    """
    if is_bad_fee(fee):
        raise BadInput(f"Bad fee {fee}: must be less than 2^24")
    if sqrt_price_limit is not None and is_bad_sqrt_price_limit(sqrt_price_limit):
        raise BadInput(f"Bad sqrt_price_limit {sqrt_price_limit}: must be less than 2^160")


__all__ = [
    "Q96",
    "Q192",
    "decode_sqrt_price",
    "sqrt_price_from_amounts",
    "sqrt_price_from_price",
    "scale_sqrt_price",
    "is_bad_fee",
    "is_bad_sqrt_price_limit",
    "validate_swap_bounds",
]
