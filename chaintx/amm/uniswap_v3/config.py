"""Contract addresses used by the UniswapV3 components."""

import os
from dataclasses import dataclass

from chaintx.constants import WETH

from .constants import FACTORY_ADDRESS, QUOTER_V1_ADDRESS, SWAP_ROUTER_ADDRESS


@dataclass(frozen=True)
class UniswapV3Config:
    """Deployment addresses for a UniswapV3 instance.

    Defaults are the Ethereum mainnet deployments. Pass a different
    instance to target a fork, a testnet, or another chain.

    Attributes:
        quoter: Quoter (v1) contract used for read-only quotes
        router: SwapRouter contract that executes exactInputSingle
        factory: Factory contract used to look up pool addresses
        weth: Wrapped native token, the implicit input of ETH swaps
    """

    quoter: str = QUOTER_V1_ADDRESS
    router: str = SWAP_ROUTER_ADDRESS
    factory: str = FACTORY_ADDRESS
    weth: str = WETH

    @classmethod
    def from_env(cls) -> "UniswapV3Config":
        """Override the default addresses from environment variables."""
        return cls(
            quoter=os.environ.get("UNISWAP_V3_QUOTER", QUOTER_V1_ADDRESS),
            router=os.environ.get("UNISWAP_V3_ROUTER", SWAP_ROUTER_ADDRESS),
            factory=os.environ.get("UNISWAP_V3_FACTORY", FACTORY_ADDRESS),
            weth=os.environ.get("WETH_ADDRESS", WETH),
        )


# Default configuration instance
DEFAULT_UNISWAP_V3_CONFIG = UniswapV3Config()

__all__ = ["UniswapV3Config", "DEFAULT_UNISWAP_V3_CONFIG"]
