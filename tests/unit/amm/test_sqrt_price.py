"""Unit tests for the Q64.96 sqrt-price codec."""

import math

import pytest

from chaintx.amm.uniswap_v3 import (
    Q96,
    decode_sqrt_price,
    is_bad_fee,
    is_bad_sqrt_price_limit,
    scale_sqrt_price,
    sqrt_price_from_amounts,
    sqrt_price_from_price,
    validate_swap_bounds,
)
from chaintx.errors import BadInput


class TestDecode:
    """Tests for decode_sqrt_price."""

    def test_unit_price(self):
        """2^96 encodes a price of exactly 1."""
        assert decode_sqrt_price(Q96) == 1.0

    def test_double_sqrt_is_quadruple_price(self):
        assert decode_sqrt_price(2 * Q96) == 4.0

    def test_zero(self):
        assert decode_sqrt_price(0) == 0.0


class TestEncodeFromPrice:
    """Tests for sqrt_price_from_price."""

    def test_unit_price(self):
        assert sqrt_price_from_price(1.0) == Q96

    @pytest.mark.parametrize("price", [1e-12, 0.0005, 1.0, 2000.0, 3.5e12])
    def test_decode_recovers_price(self, price):
        """decode(encode(p)) recovers p within rounding error."""
        assert decode_sqrt_price(sqrt_price_from_price(price)) == pytest.approx(price, rel=1e-12)

    def test_result_is_int(self):
        assert isinstance(sqrt_price_from_price(2000.0), int)

    @pytest.mark.parametrize("price", [-1.0, math.nan, math.inf])
    def test_rejects_invalid_price(self, price):
        with pytest.raises(BadInput):
            sqrt_price_from_price(price)


class TestEncodeFromAmounts:
    """Tests for sqrt_price_from_amounts."""

    def test_equal_amounts(self):
        assert sqrt_price_from_amounts(1, 1) == Q96

    def test_exact_powers(self):
        """Integer path is exact for perfect squares."""
        assert sqrt_price_from_amounts(4, 1) == 2 * Q96
        assert sqrt_price_from_amounts(1, 4) == Q96 // 2

    def test_large_amounts_stay_exact(self):
        """Amounts far beyond float precision are handled exactly."""
        amount0 = 10**30
        amount1 = 4 * 10**30
        assert sqrt_price_from_amounts(amount1, amount0) == 2 * Q96

    def test_rejects_zero_amount0(self):
        with pytest.raises(BadInput):
            sqrt_price_from_amounts(10, 0)


class TestScale:
    """Tests for scale_sqrt_price."""

    def test_zero_for_one_lowers_price(self):
        """token0 -> token1 bound sits below the reference price."""
        scaled = scale_sqrt_price(Q96, 0.01, zero_for_one=True)
        assert scaled < Q96
        assert decode_sqrt_price(scaled) == pytest.approx(0.99, rel=1e-12)

    def test_one_for_zero_raises_price(self):
        """token1 -> token0 bound sits above the reference price."""
        scaled = scale_sqrt_price(Q96, 0.01, zero_for_one=False)
        assert scaled > Q96
        assert decode_sqrt_price(scaled) == pytest.approx(1.01, rel=1e-12)

    @pytest.mark.parametrize("price", [0.0005, 1.0, 2000.0])
    def test_direction_antisymmetry(self, price):
        """Same tolerance moves the price in opposite directions."""
        reference = sqrt_price_from_price(price)
        down = decode_sqrt_price(scale_sqrt_price(reference, 0.005, zero_for_one=True))
        up = decode_sqrt_price(scale_sqrt_price(reference, 0.005, zero_for_one=False))
        spot = decode_sqrt_price(reference)
        assert down < spot < up

    def test_zero_slippage_is_identity(self):
        assert scale_sqrt_price(Q96, 0.0, zero_for_one=True) == Q96

    def test_rejects_negative_slippage(self):
        with pytest.raises(BadInput):
            scale_sqrt_price(Q96, -0.01, zero_for_one=True)


class TestBounds:
    """Tests for fee and price-limit width validation."""

    def test_fee_limits(self):
        assert not is_bad_fee(0)
        assert not is_bad_fee(3000)
        assert not is_bad_fee(2**24 - 1)
        assert is_bad_fee(2**24)
        assert is_bad_fee(-1)

    def test_price_limit_limits(self):
        assert not is_bad_sqrt_price_limit(0)
        assert not is_bad_sqrt_price_limit(2**160 - 1)
        assert is_bad_sqrt_price_limit(2**160)

    def test_validate_rejects_wide_fee(self):
        with pytest.raises(BadInput, match="fee"):
            validate_swap_bounds(2**24, None)

    def test_validate_rejects_wide_limit(self):
        with pytest.raises(BadInput, match="sqrt_price_limit"):
            validate_swap_bounds(3000, 2**160)

    def test_validate_accepts_edges(self):
        validate_swap_bounds(2**24 - 1, 2**160 - 1)
        validate_swap_bounds(500, None)
