"""Gas price and limit for read-only simulated calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from chaintx.constants import SIMULATED_GAS_CAP

if TYPE_CHECKING:
    from chaintx.node.client import NodeClient

logger = structlog.get_logger()


@dataclass(frozen=True)
class SimulatedGas:
    """Price/limit pair attached to a simulated call."""

    gas_price: int
    gas_limit: int


class GasSimulator:
    """Computes the largest gas allowance a caller can fund for an eth_call.

    A simulated call changes no state, but some nodes still refuse to run
    it without a price and limit the caller could pay for. Asking for the
    most the balance can cover avoids spurious out-of-gas failures on calls
    that are expensive to simulate.

    Args:
        node: Source of the gas price and caller balance
        gas_cap: Upper bound on the returned limit
    """

    def __init__(self, node: NodeClient, gas_cap: int = SIMULATED_GAS_CAP) -> None:
        self.node = node
        self.gas_cap = gas_cap

    async def simulated_gas(self, caller: str, *, balance: int | None = None) -> SimulatedGas:
        """Return ``(gas_price, min(gas_cap, balance // gas_price))``.

        Args:
            caller: Account the call is simulated from
            balance: Caller balance if already known; fetched otherwise
        """
        gas_price = await self.node.gas_price()
        if balance is None:
            balance = await self.node.get_balance(caller)
        affordable = balance // gas_price if gas_price > 0 else self.gas_cap
        gas_limit = min(self.gas_cap, affordable)
        logger.debug("simulated_gas", caller=caller, gas_price=gas_price, gas_limit=gas_limit)
        return SimulatedGas(gas_price=gas_price, gas_limit=gas_limit)
