"""UniswapV3 constants including fee tiers and contract addresses."""

# V3 Fee tiers in Uniswap units (hundredths of a basis point)
# Fee = units / 1,000,000 (e.g., 3000 = 0.3%)
V3_FEE_LOWEST = 100  # 0.01% - stable pairs
V3_FEE_LOW = 500  # 0.05% - stable pairs
V3_FEE_MEDIUM = 3000  # 0.30% - most pairs
V3_FEE_HIGH = 10000  # 1.00% - exotic pairs

V3_FEE_TIERS = [V3_FEE_LOWEST, V3_FEE_LOW, V3_FEE_MEDIUM, V3_FEE_HIGH]

# Fee tier used when the caller does not name one
DEFAULT_FEE = V3_FEE_MEDIUM

# Tick spacing per fee tier
V3_TICK_SPACING = {
    V3_FEE_LOWEST: 1,
    V3_FEE_LOW: 10,
    V3_FEE_MEDIUM: 60,
    V3_FEE_HIGH: 200,
}

# Swap gas usage varies between otherwise identical calls
SWAP_GAS_LIMIT_MULTIPLIER = 1.2

# Seconds added to the latest block timestamp for the default swap deadline
DEFAULT_DEADLINE_SECONDS = 600

# Contract addresses (mainnet)
QUOTER_V1_ADDRESS = "0xb27308f9F90D607463bb33eA1BeBb41C27CE5AB6"
SWAP_ROUTER_ADDRESS = "0xE592427A0AEce92De3Edee1F18E0157C05861564"
FACTORY_ADDRESS = "0x1F98431c8aD98523631AE4a59f267346ea31F984"

__all__ = [
    "V3_FEE_LOWEST",
    "V3_FEE_LOW",
    "V3_FEE_MEDIUM",
    "V3_FEE_HIGH",
    "V3_FEE_TIERS",
    "V3_TICK_SPACING",
    "DEFAULT_FEE",
    "SWAP_GAS_LIMIT_MULTIPLIER",
    "DEFAULT_DEADLINE_SECONDS",
    "QUOTER_V1_ADDRESS",
    "SWAP_ROUTER_ADDRESS",
    "FACTORY_ADDRESS",
]
