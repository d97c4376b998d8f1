"""Tests for exact dollar arithmetic."""

from decimal import Decimal

import pytest

from taxengine.exceptions import ArithmeticOverflowError, InvalidAmountError
from taxengine.money import (
    MAX_CENTS,
    add,
    apply_rate,
    clamp_min,
    from_cents,
    multiply,
    prorate,
    round_to_cents,
    round_to_whole_dollar,
    subtract,
    sum_all,
    to_cents,
)


class TestConversion:
    def test_to_cents(self):
        assert to_cents("123.45") == 12345
        assert to_cents(10) == 1000

    def test_half_cent_rounds_away_from_zero(self):
        assert to_cents("1.005") == 101
        assert to_cents("-1.005") == -101

    def test_float_uses_shortest_repr(self):
        # Binary 1.005 is 1.00499999..., but str() gives "1.005"
        assert to_cents(1.005) == 101

    def test_from_cents_has_two_places(self):
        assert str(from_cents(12345)) == "123.45"
        assert str(from_cents(0)) == "0.00"
        assert str(from_cents(-5)) == "-0.05"


class TestArithmetic:
    def test_point_one_plus_point_two(self):
        assert add(0.1, 0.2) == Decimal("0.30")
        assert str(add(0.1, 0.2)) == "0.30"

    def test_subtract(self):
        assert subtract("100.10", "0.15") == Decimal("99.95")

    def test_multiply_rounds_once(self):
        # 1000 cents x 0.333 = 333 cents
        assert multiply("10.00", "0.333") == Decimal("3.33")

    def test_multiply_by_fractional_shares(self):
        assert multiply("200", "0.5") == Decimal("100.00")

    def test_apply_rate(self):
        assert apply_rate(100, "0.075") == Decimal("7.50")
        assert apply_rate("273762.50", "0.28") == Decimal("76653.50")

    def test_prorate(self):
        # 900000 cents x 20 / 50 = 360000 cents
        assert prorate("9000", 20, 50) == Decimal("3600.00")
        assert prorate("100.00", 1, 3) == Decimal("33.33")

    def test_prorate_zero_whole(self):
        assert prorate("100.00", 1, 0) == Decimal("0")

    def test_sum_all_exact_for_any_count(self):
        assert sum_all(["0.01"] * 100) == Decimal("1.00")
        assert sum_all([0.1] * 10) == Decimal("1.00")
        assert sum_all([]) == Decimal("0")

    def test_clamp_min(self):
        assert clamp_min("-5.00") == Decimal("0")
        assert clamp_min("5.00", "10") == Decimal("10.00")
        assert clamp_min("12.34") == Decimal("12.34")


class TestRounding:
    def test_round_to_cents(self):
        assert round_to_cents("2.675") == Decimal("2.68")

    def test_round_to_whole_dollar(self):
        assert round_to_whole_dollar("2.50") == Decimal("3")
        assert round_to_whole_dollar("2.49") == Decimal("2")
        assert round_to_whole_dollar("-2.50") == Decimal("-3")


class TestFailures:
    def test_largest_representable_amount(self):
        assert to_cents("92233720368547758.07") == MAX_CENTS

    def test_overflow_raises(self):
        with pytest.raises(ArithmeticOverflowError):
            to_cents("92233720368547758.08")

    def test_overflow_from_multiplication(self):
        with pytest.raises(ArithmeticOverflowError):
            multiply("92233720368547758.07", 2)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "NaN", "-Infinity", "abc"])
    def test_non_finite_raises(self, value):
        with pytest.raises(InvalidAmountError):
            to_cents(value)
