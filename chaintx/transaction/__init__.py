"""Transaction building, submission and confirmation."""

from chaintx.transaction.confirmation import (
    ConfirmationWaiter,
    WaitState,
    has_enough_confirmations,
    wait_for_next_block,
)
from chaintx.transaction.options import (
    AccessList,
    AccessListEntry,
    GasLimit,
    GasLimitMultiplier,
    GasMaxFee,
    GasMaxFeeMultiplier,
    GasPrice,
    GasPriceMultiplier,
    GasPriorityFee,
    NetworkId,
    Nonce,
    SendOption,
    SendOptions,
)
from chaintx.transaction.pipeline import TransactionPipeline
from chaintx.transaction.request import TransactionRequest
from chaintx.transaction.signing import (
    AccountSigner,
    SignedTransaction,
    TransactionSigner,
    address_from_key,
)

__all__ = [
    # Options
    "SendOptions",
    "SendOption",
    "AccessList",
    "AccessListEntry",
    "GasLimit",
    "GasLimitMultiplier",
    "GasMaxFee",
    "GasMaxFeeMultiplier",
    "GasPrice",
    "GasPriceMultiplier",
    "GasPriorityFee",
    "NetworkId",
    "Nonce",
    # Building and signing
    "TransactionRequest",
    "TransactionSigner",
    "AccountSigner",
    "SignedTransaction",
    "address_from_key",
    "TransactionPipeline",
    # Confirmation
    "ConfirmationWaiter",
    "WaitState",
    "has_enough_confirmations",
    "wait_for_next_block",
]
