"""Test helpers module for shared test utilities.

- constants: Token addresses, test accounts and common amounts
- fake_node: In-memory JSON-RPC node and a recording signer
- uniswap: Fake UniswapV3 factory, pool and quoter responses
"""

from tests.helpers.constants import (
    DAI,
    FACTORY,
    GWEI,
    ONE_ETH,
    OTHER,
    OTHER_KEY,
    QUOTER,
    ROUTER,
    SENDER,
    SENDER_KEY,
    USDC,
    WETH,
    WETH_DAI_POOL,
)
from tests.helpers.fake_node import FakeNode, RecordingSigner, SentTransaction, address_word, word

__all__ = [
    # Constants
    "WETH",
    "DAI",
    "USDC",
    "SENDER",
    "SENDER_KEY",
    "OTHER",
    "OTHER_KEY",
    "WETH_DAI_POOL",
    "ROUTER",
    "QUOTER",
    "FACTORY",
    "ONE_ETH",
    "GWEI",
    # Fakes
    "FakeNode",
    "RecordingSigner",
    "SentTransaction",
    "word",
    "address_word",
]
