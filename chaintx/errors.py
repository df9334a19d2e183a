"""Error classes for the transaction engine.

Every failure surfaced by a public operation is one of these. Validation
errors are raised before any network I/O where the inputs allow it;
transport exceptions from the HTTP layer are not wrapped.
"""

from __future__ import annotations

from typing import Any


class TxEngineError(Exception):
    """Base error for all transaction engine operations."""

    pass


class BadInput(TxEngineError):
    """Client-side validation failure (out-of-range field, invalid transaction, bad option)."""

    pass


class InsufficientGas(TxEngineError):
    """Balance cannot cover the gas required at the applicable price.

    Attributes:
        balance: Sender balance in wei
        base_gas: Per-gas price the check was made against (intrinsic gas for
            the minimum-balance check, base fee for the affordability check)
        gas_required: Gas units that had to be paid for
    """

    def __init__(self, balance: int, base_gas: int, gas_required: int) -> None:
        self.balance = balance
        self.base_gas = base_gas
        self.gas_required = gas_required
        super().__init__(
            f"Insufficient balance {balance} for gas: base {base_gas}, required {gas_required}"
        )


class PreLondon(TxEngineError):
    """Target chain has no base fee, so EIP-1559 transactions cannot be built."""

    pass


class SyncingNode(TxEngineError):
    """Node reports that it is still syncing; its answer cannot be trusted."""

    pass


class ContractCallError(TxEngineError):
    """A simulated call returned data that could not be decoded."""

    pass


class BadResponse(TxEngineError):
    """A decoded value failed a semantic check (missing pool, low liquidity)."""

    pass


class RpcError(TxEngineError):
    """The node answered a JSON-RPC request with an error object."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"JSON-RPC error {code}: {message}")


class TransactionTimeout(TxEngineError, TimeoutError):
    """Deadline elapsed before the transaction was confirmed."""

    def __init__(self, tx_hash: str, timeout: float, last_state: Any = None) -> None:
        self.tx_hash = tx_hash
        self.timeout = timeout
        self.last_state = last_state
        super().__init__(f"Transaction {tx_hash} not confirmed within {timeout}s")


class NoBlockProduced(TxEngineError, TimeoutError):
    """No new block appeared within the deadline."""

    def __init__(self, time: float) -> None:
        self.time = time
        super().__init__(f"No block produced in {time}s")
