"""Waiting for transactions and blocks.

These are the only loops in the engine that repeat network calls. Both are
bounded by a caller-supplied deadline enforced with ``asyncio.timeout``;
on expiry the in-flight request is abandoned and a timeout error raised.
A ``TimeoutError`` raised by a poll itself (a transport timeout) is not the
deadline and propagates unchanged.
"""

from __future__ import annotations

import asyncio
from enum import Enum

import structlog

from chaintx.constants import POLL_INTERVAL
from chaintx.errors import NoBlockProduced, TransactionTimeout
from chaintx.models.chain import TransactionResponse
from chaintx.node.client import NodeClient

logger = structlog.get_logger()


class WaitState(str, Enum):
    """Progress of a transaction towards confirmation."""

    PENDING = "pending"
    INCLUDED = "included"
    CONFIRMED = "confirmed"
    TIMED_OUT = "timed_out"


def has_enough_confirmations(current_block: int, inclusion_block: int, blocks_to_wait: int) -> bool:
    """True once ``current_block - blocks_to_wait >= inclusion_block``.

    The subtraction is only done when it cannot go below zero, which happens
    on young chains or right after a reorganization.
    """
    return current_block > blocks_to_wait and current_block - blocks_to_wait >= inclusion_block


class ConfirmationWaiter:
    """Polls a node until a transaction is mined and, optionally, buried.

    Args:
        node: Node to poll
        poll_interval: Seconds to sleep before each poll
    """

    def __init__(self, node: NodeClient, poll_interval: float = POLL_INTERVAL) -> None:
        self.node = node
        self.poll_interval = poll_interval

    async def wait(
        self,
        tx_hash: str,
        timeout: float,
        blocks_to_wait: int | None = None,
    ) -> TransactionResponse:
        """Wait for ``tx_hash`` to be mined.

        Only "not found yet" and "not deep enough yet" keep the loop going; an
        error from any poll ends the wait with that error.

        Args:
            tx_hash: Transaction hash
            timeout: Overall deadline in seconds
            blocks_to_wait: If set, also wait until the transaction is this
                many blocks deep

        Returns:
            The mined transaction

        Raises:
            TransactionTimeout: If the deadline passes first
            TimeoutError: If a single poll times out at the transport level
        """
        progress = {"state": WaitState.PENDING}
        try:
            async with asyncio.timeout(timeout) as deadline:
                return await self._poll(tx_hash, blocks_to_wait, progress)
        except TimeoutError:
            if not deadline.expired():
                raise
            last_state = progress["state"]
            self._transition(tx_hash, progress, WaitState.TIMED_OUT)
            logger.warning(
                "transaction_wait_timeout",
                tx_hash=tx_hash,
                timeout=timeout,
                last_state=last_state.value,
            )
            raise TransactionTimeout(tx_hash, timeout, last_state) from None

    async def _poll(
        self,
        tx_hash: str,
        blocks_to_wait: int | None,
        progress: dict[str, WaitState],
    ) -> TransactionResponse:
        while True:
            await asyncio.sleep(self.poll_interval)
            tx = await self.node.get_transaction_by_hash(tx_hash)
            if tx is None or tx.block_number is None:
                logger.debug("transaction_pending", tx_hash=tx_hash)
                continue

            if blocks_to_wait is None:
                self._transition(tx_hash, progress, WaitState.CONFIRMED, block=tx.block_number)
                return tx

            self._transition(tx_hash, progress, WaitState.INCLUDED, block=tx.block_number)
            current = await self.node.block_number()
            if has_enough_confirmations(current, tx.block_number, blocks_to_wait):
                self._transition(tx_hash, progress, WaitState.CONFIRMED, block=tx.block_number)
                return tx

    @staticmethod
    def _transition(
        tx_hash: str, progress: dict[str, WaitState], state: WaitState, **context: object
    ) -> None:
        if progress["state"] is state:
            return
        progress["state"] = state
        logger.info("transaction_state", tx_hash=tx_hash, state=state.value, **context)


async def wait_for_next_block(
    node: NodeClient, timeout: float, poll_interval: float = POLL_INTERVAL
) -> int:
    """Wait until the node reports a block number different from the current one.

    Poll errors are logged and polling continues; only the deadline ends the
    wait early.

    Returns:
        The new block number

    Raises:
        NoBlockProduced: If no new block appears within ``timeout`` seconds
        Exception: Whatever the initial block_number read raises
    """
    start = await node.block_number()

    async def _poll() -> int:
        while True:
            await asyncio.sleep(poll_interval)
            try:
                current = await node.block_number()
            except Exception as e:  # transient RPC failures
                logger.warning("block_number_poll_failed", error=str(e))
                continue
            if current != start:
                return current

    try:
        async with asyncio.timeout(timeout) as deadline:
            return await _poll()
    except TimeoutError:
        if not deadline.expired():
            raise
        raise NoBlockProduced(timeout) from None
