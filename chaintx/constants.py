"""Chain constants and well-known addresses.

Addresses are lowercase and validated at import time to catch typos early.
"""

from chaintx.models.types import is_valid_address

# Gas charged for any transaction before calldata or execution
INTRINSIC_GAS = 21_000

# Upper bound on the gas limit supplied to simulated calls; stays below
# the call gas caps of common nodes and relays
SIMULATED_GAS_CAP = 12_450_000

# Gas-limit multiplier used when the caller does not supply one
DEFAULT_GAS_LIMIT_MULTIPLIER = 1.0

# Priority fee used when no GasPriorityFee option is given (wei)
DEFAULT_PRIORITY_FEE = 1

# Confirmation polling interval (seconds)
POLL_INTERVAL = 1.0


def _validate_token_address(name: str, address: str) -> str:
    """Validate and return a token address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Well-known token addresses on mainnet
WETH = _validate_token_address("WETH", "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2")
DAI = _validate_token_address("DAI", "0x6b175474e89094c44da98b954eedeac495271d0f")
