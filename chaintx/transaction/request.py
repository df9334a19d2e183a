"""Draft EIP-1559 transaction.

A :class:`TransactionRequest` is created empty for each submission, filled
in field by field, validated, signed once and discarded. Reusing a signed
draft would rebroadcast the same nonce, so signing it twice is an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from eth_utils import to_checksum_address
from hexbytes import HexBytes

from chaintx.errors import BadInput
from chaintx.models.types import UINT64_MAX, UINT256_MAX, is_valid_address
from chaintx.transaction.options import AccessListEntry

EIP1559_TX_TYPE = 2


@dataclass
class TransactionRequest:
    """Mutable EIP-1559 transaction draft.

    ``gas_limit`` starts at 0 as a placeholder until it is estimated.
    """

    to: str
    nonce: int = 0
    chain_id: int = 0
    priority_fee: int = 0
    max_fee: int = 0
    gas_limit: int = 0
    value: int = 0
    data: bytes = b""
    access_list: tuple[AccessListEntry, ...] = ()
    signed: bool = field(default=False, init=False)

    def validation_errors(self) -> list[str]:
        """Return every structural problem with the draft; empty when valid."""
        errors = []
        if not is_valid_address(self.to):
            errors.append(f"invalid destination {self.to!r}")
        if not 0 <= self.nonce <= UINT64_MAX:
            errors.append(f"nonce {self.nonce} out of range")
        if self.chain_id <= 0:
            errors.append(f"chain id {self.chain_id} must be positive")
        if not 0 < self.gas_limit <= UINT64_MAX:
            errors.append(f"gas limit {self.gas_limit} out of range")
        if not 0 <= self.max_fee <= UINT256_MAX:
            errors.append(f"max fee {self.max_fee} out of range")
        if not 0 <= self.priority_fee <= self.max_fee:
            errors.append(f"priority fee {self.priority_fee} exceeds max fee {self.max_fee}")
        if not 0 <= self.value <= UINT256_MAX:
            errors.append(f"value {self.value} out of range")
        for entry in self.access_list:
            if not is_valid_address(entry.address):
                errors.append(f"invalid access list address {entry.address!r}")
        return errors

    def is_valid(self) -> bool:
        return not self.validation_errors()

    def validate(self) -> None:
        """Raise BadInput describing every structural problem with the draft."""
        errors = self.validation_errors()
        if errors:
            raise BadInput("Invalid transaction: " + "; ".join(errors))

    def to_signable(self) -> dict[str, Any]:
        """Dict in the shape eth_account.Account.sign_transaction expects."""
        return {
            "type": EIP1559_TX_TYPE,
            "chainId": self.chain_id,
            "nonce": self.nonce,
            "maxPriorityFeePerGas": self.priority_fee,
            "maxFeePerGas": self.max_fee,
            "gas": self.gas_limit,
            "to": to_checksum_address(self.to),
            "value": self.value,
            "data": HexBytes(self.data).to_0x_hex(),
            "accessList": [entry.to_dict() for entry in self.access_list],
        }

    def to_rpc(self, sender: str) -> dict[str, Any]:
        """JSON-RPC transaction object, as sent to eth_estimateGas.

        The placeholder gas limit is omitted so the node estimates freely.
        """
        tx: dict[str, Any] = {
            "from": sender,
            "to": self.to,
            "nonce": hex(self.nonce),
            "maxPriorityFeePerGas": hex(self.priority_fee),
            "maxFeePerGas": hex(self.max_fee),
            "value": hex(self.value),
            "data": HexBytes(self.data).to_0x_hex(),
        }
        if self.gas_limit:
            tx["gas"] = hex(self.gas_limit)
        if self.access_list:
            tx["accessList"] = [entry.to_dict() for entry in self.access_list]
        return tx
