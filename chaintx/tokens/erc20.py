"""ERC20 reads and approvals."""

from __future__ import annotations

import structlog

from chaintx.abi import address_bytes, decode_uint, encode_call
from chaintx.ledger.base import LedgerAdapter
from chaintx.models.types import UINT256_MAX
from chaintx.node.client import NodeClient
from chaintx.transaction.options import SendOptions
from chaintx.transaction.signing import address_from_key

logger = structlog.get_logger()

ALLOWANCE = "allowance(address,address)"
APPROVE = "approve(address,uint256)"
BALANCE_OF = "balanceOf(address)"

# An allowance above this is treated as unlimited
APPROVED_THRESHOLD = UINT256_MAX // 2


class Erc20:
    """ERC20 helper bound to a node (reads) and a ledger adapter (writes)."""

    def __init__(self, node: NodeClient, ledger: LedgerAdapter) -> None:
        self.node = node
        self.ledger = ledger

    async def allowance(self, token: str, owner: str, spender: str) -> int:
        data = encode_call(ALLOWANCE, [address_bytes(owner), address_bytes(spender)])
        return decode_uint(await self.node.simulate_transaction(token, data, owner))

    async def check_approved(self, token: str, owner: str, spender: str) -> bool:
        """True if ``spender`` holds an effectively unlimited allowance from ``owner``."""
        return await self.allowance(token, owner, spender) > APPROVED_THRESHOLD

    async def balance_of(self, token: str, owner: str) -> int:
        data = encode_call(BALANCE_OF, [address_bytes(owner)])
        return decode_uint(await self.node.simulate_transaction(token, data, owner))

    async def approve(
        self,
        token: str,
        private_key: str,
        spender: str,
        wait_timeout: float | None = None,
        options: SendOptions | None = None,
    ) -> str:
        """Grant ``spender`` an unlimited allowance.

        Args:
            token: ERC20 contract
            private_key: Key of the token owner
            spender: Address being approved (usually a router)
            wait_timeout: If set, wait this many seconds for confirmation
            options: Overrides for the approval transaction

        Returns:
            Transaction id of the approval
        """
        owner = address_from_key(private_key)
        data = encode_call(APPROVE, [address_bytes(spender), UINT256_MAX])
        tx_id = await self.ledger.submit(token, data, 0, owner, private_key, options)
        logger.info("erc20_approval_submitted", token=token, spender=spender, tx_id=tx_id)
        if wait_timeout is not None:
            await self.ledger.wait_for_transaction(tx_id, wait_timeout)
        return tx_id
