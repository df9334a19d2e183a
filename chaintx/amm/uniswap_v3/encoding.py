"""Calldata encoding for the UniswapV3 Quoter, SwapRouter, Factory and pools."""

from __future__ import annotations

from chaintx.abi import address_bytes, encode_call

# Quoter (v1): returns amountOut as a single uint256
QUOTE_EXACT_INPUT_SINGLE = "quoteExactInputSingle(address,address,uint24,uint256,uint160)"

# SwapRouter (v1) struct:
# (tokenIn, tokenOut, fee, recipient, deadline, amountIn, amountOutMinimum, sqrtPriceLimitX96)
EXACT_INPUT_SINGLE = (
    "exactInputSingle((address,address,uint24,address,uint256,uint256,uint256,uint160))"
)

GET_POOL = "getPool(address,address,uint24)"
TOKEN0 = "token0()"
TOKEN1 = "token1()"
SLOT0 = "slot0()"

# slot0 return layout
SLOT0_TYPES = ["uint160", "int24", "uint16", "uint16", "uint16", "uint8", "bool"]


def encode_quote_exact_input_single(
    token_in: str,
    token_out: str,
    fee: int,
    amount_in: int,
    sqrt_price_limit_x96: int = 0,
) -> bytes:
    """Encode Quoter.quoteExactInputSingle.

    Args:
        token_in: Input token address
        token_out: Output token address
        fee: Pool fee tier (e.g., 3000 for 0.3%)
        amount_in: Amount of input tokens
        sqrt_price_limit_x96: Price limit (0 = no limit)

    Returns:
        Calldata bytes
    """
    return encode_call(
        QUOTE_EXACT_INPUT_SINGLE,
        [address_bytes(token_in), address_bytes(token_out), fee, amount_in, sqrt_price_limit_x96],
    )


def encode_exact_input_single(
    token_in: str,
    token_out: str,
    fee: int,
    recipient: str,
    deadline: int,
    amount_in: int,
    amount_out_minimum: int,
    sqrt_price_limit_x96: int = 0,
) -> bytes:
    """Encode SwapRouter.exactInputSingle.

    Args:
        token_in: Input token address
        token_out: Output token address
        fee: Pool fee tier
        recipient: Address to receive output tokens
        deadline: Unix timestamp after which the router reverts
        amount_in: Amount of input tokens
        amount_out_minimum: Minimum output amount (slippage protection)
        sqrt_price_limit_x96: Price limit (0 = no limit)

    Returns:
        Calldata bytes
    """
    params = (
        address_bytes(token_in),
        address_bytes(token_out),
        fee,
        address_bytes(recipient),
        deadline,
        amount_in,
        amount_out_minimum,
        sqrt_price_limit_x96,
    )
    return encode_call(EXACT_INPUT_SINGLE, [params])


def encode_get_pool(token_a: str, token_b: str, fee: int) -> bytes:
    """Encode Factory.getPool; token order does not matter."""
    return encode_call(GET_POOL, [address_bytes(token_a), address_bytes(token_b), fee])


def encode_pool_token(first: bool) -> bytes:
    """Encode pool.token0() or pool.token1()."""
    return encode_call(TOKEN0 if first else TOKEN1)


def encode_slot0() -> bytes:
    return encode_call(SLOT0)


__all__ = [
    "QUOTE_EXACT_INPUT_SINGLE",
    "EXACT_INPUT_SINGLE",
    "GET_POOL",
    "TOKEN0",
    "TOKEN1",
    "SLOT0",
    "SLOT0_TYPES",
    "encode_quote_exact_input_single",
    "encode_exact_input_single",
    "encode_get_pool",
    "encode_pool_token",
    "encode_slot0",
]
