"""Pytest configuration and fixtures."""

import pytest

from chaintx.amm.uniswap_v3 import SwapExecutor, SwapQuoteEngine, UniswapV3Config
from chaintx.ledger import StandardLedgerAdapter
from chaintx.tokens import Erc20
from chaintx.transaction import ConfirmationWaiter, TransactionPipeline
from tests.helpers import (
    FACTORY,
    ONE_ETH,
    QUOTER,
    ROUTER,
    SENDER,
    WETH,
    FakeNode,
    RecordingSigner,
    word,
)
from tests.helpers.uniswap import install_pool

# =============================================================================
# Node and pipeline
# =============================================================================


@pytest.fixture
def node() -> FakeNode:
    """FakeNode with a funded SENDER, base fee 10 gwei and a 50k gas estimate."""
    fake = FakeNode()
    fake.balances[SENDER] = 10 * ONE_ETH
    return fake


@pytest.fixture
def signer() -> RecordingSigner:
    return RecordingSigner()


@pytest.fixture
def pipeline(node: FakeNode, signer: RecordingSigner) -> TransactionPipeline:
    return TransactionPipeline(node, signer=signer)


@pytest.fixture
def waiter(node: FakeNode) -> ConfirmationWaiter:
    """Waiter that polls without sleeping."""
    return ConfirmationWaiter(node, poll_interval=0)


@pytest.fixture
def ledger(
    node: FakeNode, pipeline: TransactionPipeline, waiter: ConfirmationWaiter
) -> StandardLedgerAdapter:
    return StandardLedgerAdapter(node, pipeline, waiter)


# =============================================================================
# UniswapV3
# =============================================================================


@pytest.fixture
def uniswap_config() -> UniswapV3Config:
    return UniswapV3Config(quoter=QUOTER, router=ROUTER, factory=FACTORY, weth=WETH)


@pytest.fixture
def uniswap_node(node: FakeNode) -> FakeNode:
    """FakeNode with a WETH/DAI pool, a quoter and a zero WETH allowance."""
    install_pool(node)
    node.register_call(WETH, "allowance(address,address)", word(0))
    return node


@pytest.fixture
def quotes(uniswap_node: FakeNode, uniswap_config: UniswapV3Config) -> SwapQuoteEngine:
    return SwapQuoteEngine(uniswap_node, config=uniswap_config)


@pytest.fixture
def swaps(
    uniswap_node: FakeNode,
    ledger: StandardLedgerAdapter,
    quotes: SwapQuoteEngine,
    uniswap_config: UniswapV3Config,
) -> SwapExecutor:
    return SwapExecutor(
        uniswap_node, ledger, quotes, Erc20(uniswap_node, ledger), config=uniswap_config
    )
