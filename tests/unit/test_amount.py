"""
Unit tests for the Amount value type.

Verifies:
- Non-negative construction
- Exact decimal precision (no float)
- Saturating subtraction
- Equality and ordering by value
"""

from decimal import Decimal

import pytest

from payments_kernel.domain.values import Amount
from payments_kernel.exceptions import (
    AmountError,
    InvalidAmountError,
    NegativeAmountError,
)


class TestAmountConstruction:
    """Tests for Amount.of and the constructor."""

    def test_from_decimal(self):
        assert Amount.of(Decimal("3.14")).value == Decimal("3.14")

    def test_from_string(self):
        assert Amount.of("10.50").value == Decimal("10.50")

    def test_from_int(self):
        assert Amount.of(7).value == Decimal("7")

    def test_zero_is_allowed(self):
        assert Amount.of("0").is_zero

    def test_negative_rejected(self):
        with pytest.raises(NegativeAmountError) as exc_info:
            Amount.of(Decimal("-1.2345"))
        assert exc_info.value.code == "NEGATIVE_AMOUNT"
        assert exc_info.value.value == "-1.2345"

    def test_negative_zero_normalized(self):
        amount = Amount.of(Decimal("-0.00"))
        assert amount.is_zero
        assert not amount.value.is_signed()

    def test_float_rejected(self):
        with pytest.raises(InvalidAmountError):
            Amount.of(1.5)  # type: ignore[arg-type]

    def test_bool_rejected(self):
        with pytest.raises(InvalidAmountError):
            Amount.of(True)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_rejected(self, value):
        with pytest.raises(AmountError):
            Amount.of(Decimal(value))

    def test_garbage_string_rejected(self):
        with pytest.raises(InvalidAmountError):
            Amount.of("1.23.44")

    def test_high_precision_preserved(self):
        value = "123456789012345678901234567890.123456789"
        assert Amount.of(value).value == Decimal(value)

    def test_integer_digit_bound(self):
        assert Amount.of("9" * 64).value == Decimal("9" * 64)
        with pytest.raises(InvalidAmountError):
            Amount.of("1" + "0" * 64)

    def test_huge_exponent_rejected(self):
        with pytest.raises(InvalidAmountError):
            Amount.of(Decimal("1E+1000000"))

    def test_fractional_digit_bound(self):
        assert Amount.of("0." + "0" * 63 + "1").value == Decimal("1E-64")
        with pytest.raises(InvalidAmountError):
            Amount.of("0." + "0" * 64 + "1")

    def test_zero_with_large_exponent_allowed(self):
        assert Amount.of(Decimal("0E+100")).is_zero


class TestAmountArithmetic:
    """Tests for + and - on amounts."""

    def test_addition(self):
        assert Amount.of("1.2345") + Amount.of("5.4321") == Amount.of("6.6666")

    def test_addition_is_exact(self):
        total = Amount.zero()
        for _ in range(10):
            total = total + Amount.of("0.1")
        assert total == Amount.of("1.0")

    def test_addition_does_not_round_wide_values(self):
        big = Amount.of("9" * 40 + ".0001")
        assert (big + Amount.of("0.0001")).value == Decimal("9" * 40 + ".0002")

    def test_addition_across_full_digit_range_is_exact(self):
        big = Amount.of("9" * 64)
        tiny = Amount.of(Decimal("1E-64"))
        assert (big + tiny).value == Decimal("9" * 64 + "." + "0" * 63 + "1")
        assert (big + tiny) - tiny == big

    def test_large_plus_one_is_not_lost(self):
        total = Amount.of(Decimal("1E+60")) + Amount.of("1")
        assert total.value == Decimal("1" + "0" * 59 + "1")
        assert total != Amount.of(Decimal("1E+60"))

    def test_subtraction(self):
        assert Amount.of("10") - Amount.of("2.5") == Amount.of("7.5")

    def test_subtraction_floors_at_zero(self):
        assert Amount.of("1") - Amount.of("2") == Amount.zero()

    def test_add_non_amount_is_type_error(self):
        with pytest.raises(TypeError):
            Amount.of("1") + Decimal("1")  # type: ignore[operator]


class TestAmountComparison:
    """Equality and ordering follow the wrapped decimal."""

    def test_equal_regardless_of_scale(self):
        assert Amount.of("1.0") == Amount.of("1.00")
        assert hash(Amount.of("1.0")) == hash(Amount.of("1.00"))

    def test_ordering(self):
        assert Amount.of("1") < Amount.of("2")
        assert Amount.of("2") >= Amount.of("2.00")

    def test_immutable(self):
        amount = Amount.of("1")
        with pytest.raises(AttributeError):
            amount.value = Decimal("2")  # type: ignore[misc]

    def test_str_and_repr(self):
        assert str(Amount.of("1.50")) == "1.50"
        assert repr(Amount.of("1.50")) == "Amount('1.50')"
