"""Unit tests for GasSimulator."""

import pytest

from chaintx.constants import SIMULATED_GAS_CAP
from chaintx.fees import GasSimulator, SimulatedGas
from tests.helpers import ONE_ETH, SENDER, FakeNode


class TestSimulatedGas:
    @pytest.mark.asyncio
    async def test_capped_for_rich_caller(self):
        node = FakeNode(gas_price=10**10)
        node.balances[SENDER] = ONE_ETH

        gas = await GasSimulator(node).simulated_gas(SENDER)

        assert gas == SimulatedGas(gas_price=10**10, gas_limit=SIMULATED_GAS_CAP)

    @pytest.mark.asyncio
    async def test_limited_by_balance(self):
        node = FakeNode(gas_price=10**10)
        node.balances[SENDER] = 10**14

        gas = await GasSimulator(node).simulated_gas(SENDER)

        assert gas.gas_limit == 10_000

    @pytest.mark.asyncio
    async def test_known_balance_is_not_fetched(self):
        node = FakeNode()

        gas = await GasSimulator(node, gas_cap=1_000).simulated_gas(SENDER, balance=ONE_ETH)

        assert gas.gas_limit == 1_000
        assert "eth_getBalance" not in node.methods()

    @pytest.mark.asyncio
    async def test_price_floored_at_base_fee(self):
        node = FakeNode(gas_price=5, base_fee=10)

        gas = await GasSimulator(node).simulated_gas(SENDER, balance=100)

        assert gas == SimulatedGas(gas_price=10, gas_limit=10)
