"""
test_arithmetic.py — Operators, percentages and interest
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from monie import (
    MonieError,
    add_money,
    calculate_compound_interest,
    calculate_discount,
    calculate_percentage_of_total,
    calculate_simple_interest,
    calculate_tax,
    calculate_tip,
    divide_money,
    multiply_money,
    subtract_money,
)


cents = st.integers(min_value=-1_000_000_00, max_value=1_000_000_00)


class TestOperators:

    def test_add_removes_float_noise(self):
        assert add_money(0.1, 0.2) == 0.3

    def test_subtract(self):
        assert subtract_money(10.10, 5.05) == 5.05

    def test_multiply(self):
        assert multiply_money(19.99, 3) == 59.97

    def test_divide(self):
        assert divide_money(100, 3) == 33.33

    def test_divide_by_zero(self):
        with pytest.raises(MonieError, match="Cannot divide by zero"):
            divide_money(100, 0)

    def test_invalid_operand_names_the_operand(self):
        with pytest.raises(MonieError, match="Invalid second amount"):
            add_money(1, float("nan"))
        with pytest.raises(MonieError, match="Invalid multiplier"):
            multiply_money(1, float("inf"))
        with pytest.raises(MonieError, match="Invalid divisor"):
            divide_money(1, "2")

    def test_known_currency_is_accepted(self):
        assert add_money(1, 2, "usd") == 3.0

    def test_unknown_currency_is_rejected(self):
        with pytest.raises(MonieError, match="Invalid currency"):
            add_money(1, 2, "XYZ")


class TestPercentages:

    def test_tip(self):
        assert calculate_tip(50, 18) == 9.0

    def test_tax(self):
        assert calculate_tax(100, 8.25) == 8.25

    def test_discount_amount(self):
        assert calculate_discount(200, 15) == 30.0

    def test_discount_above_hundred_is_rejected(self):
        with pytest.raises(MonieError, match="between 0 and 100"):
            calculate_discount(200, 101)

    def test_negative_tip_is_rejected(self):
        with pytest.raises(MonieError, match="Invalid percentage"):
            calculate_tip(50, -5)

    def test_percentage_of_total(self):
        assert calculate_percentage_of_total(25, 200).percentage == 12.5

    def test_percentage_of_zero_total(self):
        with pytest.raises(MonieError, match="Total cannot be zero"):
            calculate_percentage_of_total(25, 0)


class TestInterest:

    def test_simple_interest(self):
        result = calculate_simple_interest(1000, 5, 2)
        assert result.interest == 100.0
        assert result.final_amount == 1100.0
        assert result.kind == "simple"
        assert result.frequency is None

    def test_compound_interest(self):
        result = calculate_compound_interest(1000, 5, 10)
        assert result.final_amount == 1628.89
        assert result.interest == 628.89
        assert result.frequency == 1

    def test_monthly_compounding_earns_more(self):
        yearly = calculate_compound_interest(1000, 5, 10, 1)
        monthly = calculate_compound_interest(1000, 5, 10, 12)
        assert monthly.final_amount > yearly.final_amount

    @pytest.mark.parametrize("frequency", [0, -1, 1.5])
    def test_frequency_must_be_positive_int(self, frequency):
        with pytest.raises(MonieError, match="Invalid frequency"):
            calculate_compound_interest(1000, 5, 10, frequency)

    def test_negative_rate_is_rejected(self):
        with pytest.raises(MonieError, match="Invalid rate"):
            calculate_simple_interest(1000, -1, 1)

    def test_compound_growth_overflow(self):
        with pytest.raises(MonieError, match="too large"):
            calculate_compound_interest(1000, 100, 2000, 12)


class TestArithmeticProperties:

    @given(a=cents, b=cents)
    @settings(max_examples=300)
    def test_add_is_commutative(self, a, b):
        assert add_money(a / 100, b / 100) == add_money(b / 100, a / 100)

    @given(a=cents, b=cents)
    @settings(max_examples=300)
    def test_add_is_exact_in_cents(self, a, b):
        assert round(add_money(a / 100, b / 100) * 100) == a + b

    @given(a=cents, b=cents)
    @settings(max_examples=300)
    def test_subtract_undoes_add(self, a, b):
        total = add_money(a / 100, b / 100)
        assert subtract_money(total, b / 100) == round(a / 100, 2)
