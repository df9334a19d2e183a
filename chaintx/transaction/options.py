"""Overrides for how a transaction is priced and sequenced.

Callers either build a :class:`SendOptions` directly with named fields or
fold a list of directives (``[GasLimit(100_000), Nonce(7)]``) into one with
:meth:`SendOptions.from_directives`. Directives apply in order: a later
directive of the same kind replaces an earlier one, and an explicit max fee
and a max-fee multiplier replace each other.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from chaintx.errors import BadInput


@dataclass(frozen=True)
class AccessListEntry:
    """One EIP-2930 access list item."""

    address: str
    storage_keys: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {"address": self.address, "storageKeys": list(self.storage_keys)}


# =============================================================================
# Directives
# =============================================================================


@dataclass(frozen=True)
class GasMaxFee:
    """Explicit max fee per gas (wei)."""

    value: int


@dataclass(frozen=True)
class GasPriorityFee:
    """Explicit priority fee per gas (wei)."""

    value: int


@dataclass(frozen=True)
class GasMaxFeeMultiplier:
    """Max fee as a multiple of the current base fee."""

    value: float


@dataclass(frozen=True)
class GasLimit:
    """Explicit gas limit; skips eth_estimateGas."""

    value: int


@dataclass(frozen=True)
class GasLimitMultiplier:
    """Factor applied to the estimated or explicit gas limit."""

    value: float


@dataclass(frozen=True)
class Nonce:
    value: int


@dataclass(frozen=True)
class AccessList:
    entries: tuple[AccessListEntry, ...]


@dataclass(frozen=True)
class NetworkId:
    """Legacy replay-protection id; rejected for EIP-1559 transactions."""

    value: int


# Legacy names
GasPrice = GasMaxFee
GasPriceMultiplier = GasMaxFeeMultiplier

SendOption = (
    GasMaxFee
    | GasPriorityFee
    | GasMaxFeeMultiplier
    | GasLimit
    | GasLimitMultiplier
    | Nonce
    | AccessList
    | NetworkId
)


@dataclass(frozen=True)
class SendOptions:
    """Named overrides for one transaction. ``None`` means "use the default".

    Precedence when building the fee pair: ``max_fee`` if set, else
    ``max_fee_multiplier`` times the base fee, else twice the base fee.

    Attributes:
        max_fee: Max fee per gas in wei
        priority_fee: Priority fee per gas in wei (default 1)
        max_fee_multiplier: Max fee as a multiple of the base fee
        gas_limit: Gas limit; estimated by the node when unset
        gas_limit_multiplier: Factor applied to the gas limit (default 1.0)
        nonce: Nonce; read from the node when unset
        access_list: EIP-2930 access list
        network_id: Legacy option, always rejected by the EIP-1559 pipeline
    """

    max_fee: int | None = None
    priority_fee: int | None = None
    max_fee_multiplier: float | None = None
    gas_limit: int | None = None
    gas_limit_multiplier: float | None = None
    nonce: int | None = None
    access_list: tuple[AccessListEntry, ...] = field(default_factory=tuple)
    network_id: int | None = None

    @classmethod
    def from_directives(cls, directives: Iterable[SendOption]) -> SendOptions:
        """Fold an ordered list of directives into one options value.

        Raises:
            BadInput: If an element is not a known directive
        """
        options = cls()
        for directive in directives:
            options = options.apply(directive)
        return options

    def apply(self, directive: SendOption) -> SendOptions:
        """Return a copy with one directive applied."""
        match directive:
            case GasMaxFee(value):
                return replace(self, max_fee=value, max_fee_multiplier=None)
            case GasMaxFeeMultiplier(value):
                return replace(self, max_fee_multiplier=value, max_fee=None)
            case GasPriorityFee(value):
                return replace(self, priority_fee=value)
            case GasLimit(value):
                return replace(self, gas_limit=value)
            case GasLimitMultiplier(value):
                return replace(self, gas_limit_multiplier=value)
            case Nonce(value):
                return replace(self, nonce=value)
            case AccessList(entries):
                return replace(self, access_list=tuple(entries))
            case NetworkId(value):
                return replace(self, network_id=value)
        raise BadInput(f"Unknown send option: {directive!r}")

    def replace(self, **changes: object) -> SendOptions:
        return replace(self, **changes)  # type: ignore[arg-type]

    def with_default_gas_limit_multiplier(self, multiplier: float) -> SendOptions:
        """Set the gas limit multiplier only if the caller has not set one."""
        if self.gas_limit_multiplier is not None:
            return self
        return replace(self, gas_limit_multiplier=multiplier)


__all__ = [
    "AccessListEntry",
    "GasMaxFee",
    "GasPrice",
    "GasPriorityFee",
    "GasMaxFeeMultiplier",
    "GasPriceMultiplier",
    "GasLimit",
    "GasLimitMultiplier",
    "Nonce",
    "AccessList",
    "NetworkId",
    "SendOption",
    "SendOptions",
]
