"""Unit tests for ConfirmationWaiter and wait_for_next_block."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from structlog.testing import capture_logs

from chaintx.errors import NoBlockProduced, RpcError, TransactionTimeout
from chaintx.models import TransactionResponse
from chaintx.transaction import (
    ConfirmationWaiter,
    WaitState,
    has_enough_confirmations,
    wait_for_next_block,
)

TX_HASH = "0x" + "ab" * 32


def mined(block: int | None) -> TransactionResponse:
    return TransactionResponse(hash=TX_HASH, block_number=block)


def mock_node(transactions, blocks=None) -> MagicMock:
    node = MagicMock()
    node.get_transaction_by_hash = AsyncMock(side_effect=transactions)
    node.block_number = AsyncMock(side_effect=blocks)
    return node


class TestHasEnoughConfirmations:
    def test_deep_enough(self):
        assert has_enough_confirmations(103, 101, 2)

    def test_not_deep_enough(self):
        assert not has_enough_confirmations(102, 101, 2)

    def test_young_chain_does_not_underflow(self):
        assert not has_enough_confirmations(1, 0, 5)

    def test_zero_blocks(self):
        assert has_enough_confirmations(101, 101, 0)


class TestWait:
    """Polling until a transaction is mined."""

    @pytest.mark.asyncio
    async def test_returns_once_mined(self):
        node = mock_node([None, mined(None), mined(101)])
        waiter = ConfirmationWaiter(node, poll_interval=0)

        tx = await waiter.wait(TX_HASH, timeout=5)

        assert tx.block_number == 101
        assert node.get_transaction_by_hash.await_count == 3
        node.block_number.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_waits_for_depth(self):
        node = mock_node([mined(101)] * 3, blocks=[101, 102, 103])
        waiter = ConfirmationWaiter(node, poll_interval=0)

        tx = await waiter.wait(TX_HASH, timeout=5, blocks_to_wait=2)

        assert tx.block_number == 101
        assert node.block_number.await_count == 3

    @pytest.mark.asyncio
    async def test_never_mined_times_out_pending(self):
        node = MagicMock()
        node.get_transaction_by_hash = AsyncMock(return_value=None)
        waiter = ConfirmationWaiter(node, poll_interval=0.01)

        with pytest.raises(TransactionTimeout) as exc_info:
            await waiter.wait(TX_HASH, timeout=0.05)

        assert exc_info.value.tx_hash == TX_HASH
        assert exc_info.value.last_state is WaitState.PENDING

    @pytest.mark.asyncio
    async def test_shallow_chain_times_out_included(self):
        """A chain shorter than the requested depth never confirms."""
        node = MagicMock()
        node.get_transaction_by_hash = AsyncMock(return_value=mined(0))
        node.block_number = AsyncMock(return_value=1)
        waiter = ConfirmationWaiter(node, poll_interval=0.01)

        with pytest.raises(TransactionTimeout) as exc_info:
            await waiter.wait(TX_HASH, timeout=0.05, blocks_to_wait=5)

        assert exc_info.value.last_state is WaitState.INCLUDED

    @pytest.mark.asyncio
    async def test_timeout_is_a_timeout_error(self):
        node = MagicMock()
        node.get_transaction_by_hash = AsyncMock(return_value=None)
        waiter = ConfirmationWaiter(node, poll_interval=0.01)

        with pytest.raises(TimeoutError):
            await waiter.wait(TX_HASH, timeout=0.02)

    @pytest.mark.asyncio
    async def test_transport_timeout_is_not_the_deadline(self):
        """A poll that times out at the transport level ends the wait with that error."""
        node = mock_node([None, TimeoutError("request timed out")])
        waiter = ConfirmationWaiter(node, poll_interval=0)

        with pytest.raises(TimeoutError, match="request timed out") as exc_info:
            await waiter.wait(TX_HASH, timeout=60)

        assert not isinstance(exc_info.value, TransactionTimeout)

    @pytest.mark.asyncio
    async def test_timeout_logs_timed_out_state(self):
        node = MagicMock()
        node.get_transaction_by_hash = AsyncMock(return_value=None)
        waiter = ConfirmationWaiter(node, poll_interval=0.01)

        with capture_logs() as logs, pytest.raises(TransactionTimeout):
            await waiter.wait(TX_HASH, timeout=0.05)

        states = [entry["state"] for entry in logs if entry["event"] == "transaction_state"]
        assert states == [WaitState.TIMED_OUT.value]

    @pytest.mark.asyncio
    async def test_poll_error_propagates(self):
        node = mock_node([None, RpcError(-32000, "boom")])
        waiter = ConfirmationWaiter(node, poll_interval=0)

        with pytest.raises(RpcError, match="boom"):
            await waiter.wait(TX_HASH, timeout=5)


class TestWaitForNextBlock:
    @pytest.mark.asyncio
    async def test_returns_new_block(self):
        node = mock_node([], blocks=[100, 100, 101])

        assert await wait_for_next_block(node, timeout=5, poll_interval=0) == 101

    @pytest.mark.asyncio
    async def test_poll_errors_are_skipped(self):
        node = mock_node([], blocks=[100, RpcError(-32000, "flaky"), 102])

        assert await wait_for_next_block(node, timeout=5, poll_interval=0) == 102

    @pytest.mark.asyncio
    async def test_no_block(self):
        node = MagicMock()
        node.block_number = AsyncMock(return_value=100)

        with pytest.raises(NoBlockProduced) as exc_info:
            await wait_for_next_block(node, timeout=0.05, poll_interval=0.01)

        assert exc_info.value.time == 0.05

    @pytest.mark.asyncio
    async def test_initial_transport_timeout_propagates(self):
        node = mock_node([], blocks=[TimeoutError("request timed out")])

        with pytest.raises(TimeoutError) as exc_info:
            await wait_for_next_block(node, timeout=60, poll_interval=0)

        assert not isinstance(exc_info.value, NoBlockProduced)

    @pytest.mark.asyncio
    async def test_initial_read_error_propagates(self):
        node = mock_node([], blocks=[RpcError(-32000, "down")])

        with pytest.raises(RpcError):
            await wait_for_next_block(node, timeout=1, poll_interval=0)
