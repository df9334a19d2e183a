"""Fee and gas pricing.

- FeeMarketEstimator: EIP-1559 (priority fee, max fee) pair for a transaction
- GasSimulator: gas price and limit for read-only simulated calls

Usage:
    from chaintx.fees import FeeMarketEstimator
    from chaintx.transaction.options import SendOptions

    fees = FeeMarketEstimator().estimate(base_fee, SendOptions(max_fee_multiplier=1.5))
    fees.max_fee  # round(base_fee * 1.5)
"""

from chaintx.fees.market import FeeMarketEstimator, FeePair, apply_multiplier
from chaintx.fees.simulation import GasSimulator, SimulatedGas

__all__ = [
    "FeeMarketEstimator",
    "FeePair",
    "apply_multiplier",
    "GasSimulator",
    "SimulatedGas",
]
