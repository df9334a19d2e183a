"""Ledger adapter interface.

A ledger adapter is how higher layers (tokens, swaps) put a contract call
on chain and wait for it. The adapter is chosen once, when the client is
built, from the endpoint URL.
"""

from typing import Protocol, runtime_checkable

from chaintx.transaction.options import SendOptions


@runtime_checkable
class LedgerAdapter(Protocol):
    """Submit-and-await capability shared by all supported ledgers."""

    async def submit(
        self,
        destination: str,
        calldata: bytes,
        value: int,
        sender: str,
        private_key: str,
        options: SendOptions | None = None,
    ) -> str:
        """Sign and broadcast a contract call.

        Returns:
            Transaction id as 0x-prefixed hex
        """
        ...

    async def wait_for_transaction(
        self, tx_id: str, timeout: float, blocks_to_wait: int | None = None
    ) -> None:
        """Block until the transaction is confirmed or the timeout elapses."""
        ...

    async def next_nonce(self, sender: str) -> int:
        """Nonce the next transaction from ``sender`` will use."""
        ...

    async def close(self) -> None:
        """Release any transport the adapter opened itself."""
        ...
