"""Wrapping and unwrapping the native token."""

from __future__ import annotations

from chaintx.abi import encode_call
from chaintx.constants import WETH
from chaintx.ledger.base import LedgerAdapter
from chaintx.transaction.options import SendOptions
from chaintx.transaction.signing import address_from_key

DEPOSIT = "deposit()"
WITHDRAW = "withdraw(uint256)"


class WethWrapper:
    """Moves value between native ETH and a WETH9-style contract."""

    def __init__(self, ledger: LedgerAdapter, weth: str = WETH) -> None:
        self.ledger = ledger
        self.weth = weth

    async def wrap(
        self,
        amount: int,
        private_key: str,
        wait_timeout: float | None = None,
        options: SendOptions | None = None,
    ) -> str:
        """Deposit ``amount`` wei of ETH and receive the same amount of WETH."""
        sender = address_from_key(private_key)
        tx_id = await self.ledger.submit(
            self.weth, encode_call(DEPOSIT), amount, sender, private_key, options
        )
        if wait_timeout is not None:
            await self.ledger.wait_for_transaction(tx_id, wait_timeout)
        return tx_id

    async def unwrap(
        self,
        amount: int,
        private_key: str,
        wait_timeout: float | None = None,
        options: SendOptions | None = None,
    ) -> str:
        """Burn ``amount`` WETH and receive the same amount of ETH."""
        sender = address_from_key(private_key)
        data = encode_call(WITHDRAW, [amount])
        tx_id = await self.ledger.submit(self.weth, data, 0, sender, private_key, options)
        if wait_timeout is not None:
            await self.ledger.wait_for_transaction(tx_id, wait_timeout)
        return tx_id
