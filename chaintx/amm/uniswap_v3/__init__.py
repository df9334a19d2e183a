"""UniswapV3 quoting and swap execution.

This package provides:
- Deployment configuration (UniswapV3Config)
- The Q64.96 sqrt-price codec and bounds validation
- Calldata encoding for the Quoter, SwapRouter, Factory and pools
- Pool reads (UniswapV3PoolReader, PoolKey, Slot0)
- Quotes with slippage bounds (SwapQuoteEngine)
- Swap execution (SwapExecutor)

Usage:
    from chaintx.amm.uniswap_v3 import SwapQuoteEngine, V3_FEE_LOW

    amount_out = await SwapQuoteEngine(node).quote(caller, WETH, DAI, 10**18, V3_FEE_LOW)
"""

from .config import DEFAULT_UNISWAP_V3_CONFIG, UniswapV3Config
from .constants import (
    DEFAULT_DEADLINE_SECONDS,
    DEFAULT_FEE,
    FACTORY_ADDRESS,
    QUOTER_V1_ADDRESS,
    SWAP_GAS_LIMIT_MULTIPLIER,
    SWAP_ROUTER_ADDRESS,
    V3_FEE_HIGH,
    V3_FEE_LOW,
    V3_FEE_LOWEST,
    V3_FEE_MEDIUM,
    V3_FEE_TIERS,
    V3_TICK_SPACING,
)
from .encoding import (
    encode_exact_input_single,
    encode_get_pool,
    encode_pool_token,
    encode_quote_exact_input_single,
    encode_slot0,
)
from .executor import SwapExecutor
from .pool import PoolKey, Slot0, UniswapV3PoolReader
from .quoter import SwapQuote, SwapQuoteEngine
from .sqrt_price import (
    Q96,
    decode_sqrt_price,
    is_bad_fee,
    is_bad_sqrt_price_limit,
    scale_sqrt_price,
    sqrt_price_from_amounts,
    sqrt_price_from_price,
    validate_swap_bounds,
)

__all__ = [
    # Constants
    "V3_FEE_LOWEST",
    "V3_FEE_LOW",
    "V3_FEE_MEDIUM",
    "V3_FEE_HIGH",
    "V3_FEE_TIERS",
    "V3_TICK_SPACING",
    "DEFAULT_FEE",
    "DEFAULT_DEADLINE_SECONDS",
    "SWAP_GAS_LIMIT_MULTIPLIER",
    "QUOTER_V1_ADDRESS",
    "SWAP_ROUTER_ADDRESS",
    "FACTORY_ADDRESS",
    # Config
    "UniswapV3Config",
    "DEFAULT_UNISWAP_V3_CONFIG",
    # Sqrt price
    "Q96",
    "decode_sqrt_price",
    "sqrt_price_from_amounts",
    "sqrt_price_from_price",
    "scale_sqrt_price",
    "is_bad_fee",
    "is_bad_sqrt_price_limit",
    "validate_swap_bounds",
    # Encoding
    "encode_quote_exact_input_single",
    "encode_exact_input_single",
    "encode_get_pool",
    "encode_pool_token",
    "encode_slot0",
    # Pools
    "PoolKey",
    "Slot0",
    "UniswapV3PoolReader",
    # Quotes and swaps
    "SwapQuote",
    "SwapQuoteEngine",
    "SwapExecutor",
]
