"""Ethereum-style ledger adapter."""

from __future__ import annotations

from chaintx.node.client import NodeClient
from chaintx.transaction.confirmation import ConfirmationWaiter
from chaintx.transaction.options import SendOptions
from chaintx.transaction.pipeline import TransactionPipeline


class StandardLedgerAdapter:
    """Submits through the EIP-1559 pipeline and waits with the confirmation poller."""

    def __init__(
        self,
        node: NodeClient,
        pipeline: TransactionPipeline | None = None,
        waiter: ConfirmationWaiter | None = None,
    ) -> None:
        self.node = node
        self.pipeline = pipeline or TransactionPipeline(node)
        self.waiter = waiter or ConfirmationWaiter(node)

    async def submit(
        self,
        destination: str,
        calldata: bytes,
        value: int,
        sender: str,
        private_key: str,
        options: SendOptions | None = None,
    ) -> str:
        return await self.pipeline.build_and_submit(
            destination, calldata, value, sender, private_key, options
        )

    async def wait_for_transaction(
        self, tx_id: str, timeout: float, blocks_to_wait: int | None = None
    ) -> None:
        await self.waiter.wait(tx_id, timeout, blocks_to_wait)

    async def next_nonce(self, sender: str) -> int:
        return await self.node.get_transaction_count(sender)

    async def close(self) -> None:
        # The node is shared with the client, which closes it.
        pass
