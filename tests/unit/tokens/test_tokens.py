"""Unit tests for ERC20 and WETH helpers."""

import pytest
from eth_abi import decode

from chaintx.models.types import UINT256_MAX
from chaintx.tokens import Erc20, WethWrapper
from tests.helpers import DAI, ONE_ETH, ROUTER, SENDER, SENDER_KEY, WETH, word


class TestErc20Reads:
    @pytest.mark.asyncio
    async def test_allowance(self, node, ledger):
        node.register_call(DAI, "allowance(address,address)", word(500))

        assert await Erc20(node, ledger).allowance(DAI, SENDER, ROUTER) == 500

    @pytest.mark.asyncio
    async def test_allowance_calldata(self, node, ledger):
        seen = []
        node.register_call(
            DAI, "allowance(address,address)", lambda data: seen.append(data) or word(0)
        )

        await Erc20(node, ledger).allowance(DAI, SENDER, ROUTER)

        assert seen[0][:4] == bytes.fromhex("dd62ed3e")
        owner, spender = decode(["address", "address"], seen[0][4:])
        assert (owner.lower(), spender.lower()) == (SENDER, ROUTER)

    @pytest.mark.parametrize(
        "allowance,approved",
        [(0, False), (UINT256_MAX // 2, False), (UINT256_MAX // 2 + 1, True), (UINT256_MAX, True)],
    )
    @pytest.mark.asyncio
    async def test_check_approved(self, node, ledger, allowance, approved):
        node.register_call(DAI, "allowance(address,address)", word(allowance))

        assert await Erc20(node, ledger).check_approved(DAI, SENDER, ROUTER) is approved

    @pytest.mark.asyncio
    async def test_balance_of(self, node, ledger):
        node.register_call(DAI, "balanceOf(address)", word(3 * ONE_ETH))

        assert await Erc20(node, ledger).balance_of(DAI, SENDER) == 3 * ONE_ETH


class TestErc20Approve:
    @pytest.mark.asyncio
    async def test_unlimited_approval(self, node, ledger, signer):
        tx_id = await Erc20(node, ledger).approve(DAI, SENDER_KEY, ROUTER)

        assert tx_id == node.sent[0].hash
        request = signer.signed_requests[0]
        assert request.to == DAI
        assert request.value == 0
        assert request.data[:4] == bytes.fromhex("095ea7b3")
        spender, amount = decode(["address", "uint256"], request.data[4:])
        assert spender.lower() == ROUTER
        assert amount == UINT256_MAX

    @pytest.mark.asyncio
    async def test_waits_when_asked(self, node, ledger):
        node.auto_mine = False
        erc20 = Erc20(node, ledger)

        tx_id = await erc20.approve(DAI, SENDER_KEY, ROUTER)
        node.mine()

        await ledger.wait_for_transaction(tx_id, timeout=1)
        assert node.methods()[-1] == "eth_getTransactionByHash"

    @pytest.mark.asyncio
    async def test_wait_timeout_confirms(self, node, ledger):
        await Erc20(node, ledger).approve(DAI, SENDER_KEY, ROUTER, wait_timeout=1)

        assert "eth_getTransactionByHash" in node.methods()


class TestWethWrapper:
    @pytest.mark.asyncio
    async def test_wrap(self, node, ledger, signer):
        await WethWrapper(ledger, WETH).wrap(ONE_ETH, SENDER_KEY)

        request = signer.signed_requests[0]
        assert request.to == WETH
        assert request.value == ONE_ETH
        assert request.data == bytes.fromhex("d0e30db0")

    @pytest.mark.asyncio
    async def test_unwrap(self, node, ledger, signer):
        await WethWrapper(ledger, WETH).unwrap(ONE_ETH, SENDER_KEY, wait_timeout=1)

        request = signer.signed_requests[0]
        assert request.value == 0
        assert request.data == bytes.fromhex("2e1a7d4d") + word(ONE_ETH)
        assert "eth_getTransactionByHash" in node.methods()
