"""Unit tests for SendOptions and its directives."""

import pytest

from chaintx.errors import BadInput
from chaintx.transaction import (
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
    SendOptions,
)
from tests.helpers import WETH


class TestDefaults:
    def test_everything_unset(self):
        options = SendOptions()
        assert options.max_fee is None
        assert options.gas_limit_multiplier is None
        assert options.access_list == ()


class TestFromDirectives:
    """Folding ordered directives into named fields."""

    def test_each_kind(self):
        entry = AccessListEntry(WETH, ("0x" + "00" * 32,))
        options = SendOptions.from_directives(
            [
                GasMaxFee(100),
                GasPriorityFee(2),
                GasLimit(90_000),
                GasLimitMultiplier(1.3),
                Nonce(4),
                AccessList((entry,)),
                NetworkId(1),
            ]
        )
        assert options == SendOptions(
            max_fee=100,
            priority_fee=2,
            gas_limit=90_000,
            gas_limit_multiplier=1.3,
            nonce=4,
            access_list=(entry,),
            network_id=1,
        )

    def test_later_same_kind_wins(self):
        options = SendOptions.from_directives([Nonce(1), GasLimit(1), Nonce(2), GasLimit(3)])
        assert options.nonce == 2
        assert options.gas_limit == 3

    def test_multiplier_after_max_fee_replaces_it(self):
        options = SendOptions.from_directives([GasMaxFee(100), GasMaxFeeMultiplier(1.5)])
        assert options.max_fee is None
        assert options.max_fee_multiplier == 1.5

    def test_max_fee_after_multiplier_replaces_it(self):
        options = SendOptions.from_directives([GasMaxFeeMultiplier(1.5), GasMaxFee(100)])
        assert options.max_fee == 100
        assert options.max_fee_multiplier is None

    def test_legacy_names(self):
        """GasPrice and GasPriceMultiplier are the max-fee directives."""
        assert SendOptions.from_directives([GasPrice(7)]).max_fee == 7
        assert SendOptions.from_directives([GasPriceMultiplier(2.0)]).max_fee_multiplier == 2.0

    def test_unknown_directive(self):
        with pytest.raises(BadInput, match="Unknown send option"):
            SendOptions.from_directives(["gas"])


class TestGasLimitMultiplierDefault:
    def test_injected_when_unset(self):
        assert SendOptions().with_default_gas_limit_multiplier(1.2).gas_limit_multiplier == 1.2

    def test_kept_when_set(self):
        options = SendOptions(gas_limit_multiplier=3.0)
        assert options.with_default_gas_limit_multiplier(1.2) is options

    def test_replace_returns_copy(self):
        options = SendOptions(nonce=1)
        assert options.replace(nonce=2).nonce == 2
        assert options.nonce == 1
