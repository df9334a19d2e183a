"""Transaction signing.

Signing is a pluggable capability: the pipeline only needs something that
turns a validated draft into raw bytes and can tell who signed a blob.
:class:`AccountSigner` does this locally with eth_account.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from eth_account import Account
from eth_keys.exceptions import ValidationError as KeyValidationError
from eth_utils import ValidationError
from hexbytes import HexBytes

from chaintx.errors import BadInput
from chaintx.transaction.request import TransactionRequest


@dataclass(frozen=True)
class SignedTransaction:
    """Raw signed transaction ready for eth_sendRawTransaction."""

    raw: bytes
    hash: str


class TransactionSigner(Protocol):
    """Protocol for signing backends."""

    def sign(self, request: TransactionRequest, private_key: str) -> SignedTransaction:
        """Sign a draft, marking it as used."""
        ...

    def recover_sender(self, signed: SignedTransaction) -> str:
        """Address whose key produced the signature."""
        ...


class AccountSigner:
    """Signs with a local private key via eth_account."""

    def sign(self, request: TransactionRequest, private_key: str) -> SignedTransaction:
        """Sign the draft.

        Raises:
            BadInput: If the draft was already signed or the key is unusable
        """
        if request.signed:
            raise BadInput("Transaction request has already been signed")
        try:
            signed = Account.sign_transaction(request.to_signable(), private_key)
        except (TypeError, ValueError, ValidationError, KeyValidationError) as e:
            raise BadInput(f"Could not sign transaction: {e}") from e
        request.signed = True
        return SignedTransaction(
            raw=bytes(signed.raw_transaction),
            hash=HexBytes(signed.hash).to_0x_hex(),
        )

    def recover_sender(self, signed: SignedTransaction) -> str:
        return Account.recover_transaction(signed.raw)


def address_from_key(private_key: str) -> str:
    """Checksummed address controlled by a private key.

    Raises:
        BadInput: If the key is malformed
    """
    try:
        return Account.from_key(private_key).address
    except (TypeError, ValueError, ValidationError, KeyValidationError) as e:
        raise BadInput(f"Invalid private key: {e}") from e
