"""UniswapV3 pool identity and on-chain pool state reads."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from chaintx.abi import WORD_SIZE, decode_address, decode_return
from chaintx.errors import BadResponse, ContractCallError
from chaintx.models.types import UINT160_MAX, ZERO_ADDRESS, normalize_address, same_address
from chaintx.node.client import NodeClient

from .config import DEFAULT_UNISWAP_V3_CONFIG, UniswapV3Config
from .constants import DEFAULT_FEE, V3_TICK_SPACING
from .encoding import SLOT0_TYPES, encode_get_pool, encode_pool_token, encode_slot0

logger = structlog.get_logger()


@dataclass(frozen=True)
class PoolKey:
    """Identifies a UniswapV3 pool.

    token0 and token1 are in the pool's canonical order, which can only be
    learned by asking the pool. The fee is any uint24, usually one of the
    standard tiers.
    """

    token0: str
    token1: str
    fee: int

    @property
    def fee_percent(self) -> float:
        """Fee as percentage (e.g., 0.3 for 0.3%)."""
        return self.fee / 10000

    @property
    def tick_spacing(self) -> int:
        """Tick spacing for standard tiers; medium spacing for custom fees."""
        return V3_TICK_SPACING.get(self.fee, 60)

    def is_token0(self, token: str) -> bool:
        return same_address(token, self.token0)

    def get_token_out(self, token_in: str) -> str:
        """Get the output token for a given input token."""
        if same_address(token_in, self.token0):
            return self.token1
        elif same_address(token_in, self.token1):
            return self.token0
        else:
            raise ValueError(f"Token {token_in} not in pool")

    def zero_for_one(self, token_out: str) -> bool:
        """True when buying ``token_out`` means selling token0 for token1."""
        return same_address(token_out, self.token1)


@dataclass(frozen=True)
class Slot0:
    """Decoded return value of ``pool.slot0()``."""

    sqrt_price_x96: int
    tick: int
    observation_index: int
    observation_cardinality: int
    observation_cardinality_next: int
    fee_protocol: int
    unlocked: bool


class UniswapV3PoolReader:
    """Read-only queries against the UniswapV3 factory and pools.

    All reads are simulated calls made from ``caller``.
    """

    def __init__(self, node: NodeClient, config: UniswapV3Config = DEFAULT_UNISWAP_V3_CONFIG):
        self.node = node
        self.config = config

    async def get_pool_address(
        self, caller: str, token_a: str, token_b: str, fee: int = DEFAULT_FEE
    ) -> str:
        """Look up the pool for a token pair and fee tier.

        Raises:
            BadResponse: If the factory has no such pool
        """
        result = await self.node.simulate_transaction(
            self.config.factory, encode_get_pool(token_a, token_b, fee), caller
        )
        if len(result) < WORD_SIZE:
            raise ContractCallError("Bad response from getPool")
        pool = decode_address(result)
        if pool == ZERO_ADDRESS:
            raise BadResponse("No such Uniswap pool")
        return pool

    async def get_pool_token(self, caller: str, pool: str, first: bool) -> str:
        """Read token0 (``first=True``) or token1 of a pool."""
        result = await self.node.simulate_transaction(pool, encode_pool_token(first), caller)
        if len(result) < WORD_SIZE:
            raise ContractCallError(f"Bad response from token{0 if first else 1}")
        return decode_address(result)

    async def get_pool_tokens(self, caller: str, pool: str) -> tuple[str, str]:
        token0 = await self.get_pool_token(caller, pool, first=True)
        token1 = await self.get_pool_token(caller, pool, first=False)
        return token0, token1

    async def get_pool_key(
        self, caller: str, token_a: str, token_b: str, fee: int = DEFAULT_FEE
    ) -> tuple[str, PoolKey]:
        """Resolve a pair to its pool address and canonically ordered key."""
        pool = await self.get_pool_address(caller, token_a, token_b, fee)
        token0, token1 = await self.get_pool_tokens(caller, pool)
        logger.debug("pool_resolved", pool=pool, token0=token0, token1=token1, fee=fee)
        return pool, PoolKey(normalize_address(token0), normalize_address(token1), fee)

    async def get_slot0(self, caller: str, pool: str) -> Slot0:
        result = await self.node.simulate_transaction(pool, encode_slot0(), caller)
        return Slot0(*decode_return(SLOT0_TYPES, result))

    async def get_sqrt_price(self, caller: str, pool: str) -> int:
        """Current sqrtPriceX96: the low 160 bits of the first slot0 word."""
        result = await self.node.simulate_transaction(pool, encode_slot0(), caller)
        if len(result) < WORD_SIZE:
            raise ContractCallError("Bad response from slot0")
        return int.from_bytes(result[:WORD_SIZE], "big") & UINT160_MAX


__all__ = ["PoolKey", "Slot0", "UniswapV3PoolReader"]
