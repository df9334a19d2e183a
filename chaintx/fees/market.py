"""EIP-1559 fee pair derivation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from chaintx.constants import DEFAULT_PRIORITY_FEE
from chaintx.errors import BadInput, PreLondon
from chaintx.models.types import UINT128_MAX

if TYPE_CHECKING:
    from chaintx.transaction.options import SendOptions

logger = structlog.get_logger()


def apply_multiplier(value: int, multiplier: float) -> int:
    """Scale an integer quantity by a float multiplier.

    Values that fit in 128 bits are scaled in floating point and rounded.
    Larger values would lose too much precision as floats, so they are
    multiplied by the rounded multiplier instead.
    """
    if multiplier < 0:
        raise BadInput(f"Multiplier cannot be negative: {multiplier}")
    if value <= UINT128_MAX:
        return round(float(value) * multiplier)
    return value * round(multiplier)


@dataclass(frozen=True)
class FeePair:
    """Priority fee and max fee per gas, plus the base fee they were derived from."""

    priority_fee: int
    max_fee: int
    base_fee: int


class FeeMarketEstimator:
    """Derives a (priority fee, max fee) pair from the base fee and overrides.

    Defaults are a max fee of twice the base fee, which survives several
    consecutive full blocks, and a priority fee of 1 wei.
    """

    def __init__(self, default_priority_fee: int = DEFAULT_PRIORITY_FEE) -> None:
        self.default_priority_fee = default_priority_fee

    def estimate(self, base_fee: int | None, options: SendOptions) -> FeePair:
        """Build the fee pair for one transaction.

        Args:
            base_fee: Base fee of the latest block, None if the chain has none
            options: Caller overrides

        Returns:
            FeePair

        Raises:
            PreLondon: If the chain has no base fee
            BadInput: If a legacy-only option such as network_id is present
        """
        if base_fee is None:
            raise PreLondon("Latest block has no base fee; chain does not support EIP-1559")
        if options.network_id is not None:
            raise BadInput("Invalid option for eip1559 tx")

        if options.max_fee is not None:
            max_fee = options.max_fee
        elif options.max_fee_multiplier is not None:
            max_fee = apply_multiplier(base_fee, options.max_fee_multiplier)
        else:
            max_fee = base_fee * 2

        priority_fee = (
            options.priority_fee if options.priority_fee is not None else self.default_priority_fee
        )

        logger.debug(
            "fee_pair_estimated", base_fee=base_fee, max_fee=max_fee, priority_fee=priority_fee
        )
        return FeePair(priority_fee=priority_fee, max_fee=max_fee, base_fee=base_fee)
