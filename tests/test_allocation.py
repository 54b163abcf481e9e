"""
test_allocation.py — split_amount and distribute_proportionally

Checked invariants:
- split: sum(parts) == total to the cent, parts within one minor unit
- distribute: sum(amounts) + remainder == total
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from monie import MonieError, distribute_proportionally, split_amount


def in_cents(values):
    return sum(round(v * 100) for v in values)


class TestSplitAmount:

    def test_hundred_in_three(self):
        result = split_amount(100, 3)
        assert result.amounts == [33.33, 33.33, 33.34]
        assert result.remainder == 0.0
        assert result.number_of_parts == 3

    def test_extra_cents_go_to_the_last_parts(self):
        assert split_amount(0.1, 3).amounts == [0.03, 0.03, 0.04]
        assert split_amount(100, 7).amounts[-2:] == [14.29, 14.29]

    def test_negative_total(self):
        result = split_amount(-100, 3)
        assert result.amounts == [-33.34, -33.33, -33.33]
        assert in_cents(result.amounts) == -10000

    def test_even_split(self):
        assert split_amount(90, 3).amounts == [30.0, 30.0, 30.0]

    def test_currency_decimals(self):
        assert split_amount(1000, 3, "JPY").amounts == [333.0, 333.0, 334.0]

    def test_single_part(self):
        assert split_amount(42.42, 1).amounts == [42.42]

    @pytest.mark.parametrize("parts", [0, -2, 2.5, True])
    def test_parts_must_be_positive_int(self, parts):
        with pytest.raises(MonieError, match="Invalid number of parts"):
            split_amount(100, parts)

    def test_unknown_currency(self):
        with pytest.raises(MonieError, match="Unsupported currency"):
            split_amount(100, 3, "XXX")

    def test_total_too_large_for_cents(self):
        with pytest.raises(MonieError, match="too large"):
            split_amount(1e307, 2)


class TestDistributeProportionally:

    def test_weighted(self):
        result = distribute_proportionally(100, [1, 2, 1])
        assert result.amounts == [25.0, 50.0, 25.0]
        assert result.remainder == 0.0
        assert result.ratios == [1, 2, 1]

    def test_remainder_is_reported(self):
        result = distribute_proportionally(100, [1, 1, 1])
        assert result.amounts == [33.33, 33.33, 33.33]
        assert result.remainder == 0.01

    def test_zero_weight_gets_nothing(self):
        assert distribute_proportionally(50, [0, 1]).amounts == [0.0, 50.0]

    def test_empty_ratios(self):
        with pytest.raises(MonieError, match="non-empty"):
            distribute_proportionally(100, [])

    def test_string_is_not_a_ratio_list(self):
        with pytest.raises(MonieError, match="non-empty"):
            distribute_proportionally(100, "121")

    def test_negative_ratio(self):
        with pytest.raises(MonieError, match="Invalid ratio"):
            distribute_proportionally(100, [-1, 2])

    def test_zero_sum(self):
        with pytest.raises(MonieError, match="Sum of ratios cannot be zero"):
            distribute_proportionally(100, [0, 0])


class TestAllocationProperties:

    @given(
        total=st.integers(min_value=-10_000_000, max_value=10_000_000),
        n=st.integers(min_value=1, max_value=100),
    )
    @settings(max_examples=500)
    def test_split_sums_to_total(self, total, n):
        result = split_amount(total / 100, n)
        assert in_cents(result.amounts) == total
        assert len(result.amounts) == n

    @given(
        total=st.integers(min_value=0, max_value=10_000_000),
        n=st.integers(min_value=1, max_value=100),
    )
    @settings(max_examples=300)
    def test_split_parts_differ_by_at_most_one_cent(self, total, n):
        parts = [round(p * 100) for p in split_amount(total / 100, n).amounts]
        assert max(parts) - min(parts) <= 1

    @given(
        total=st.integers(min_value=0, max_value=10_000_000),
        ratios=st.lists(st.integers(min_value=1, max_value=1000), min_size=1, max_size=20),
    )
    @settings(max_examples=300)
    def test_distribution_identity(self, total, ratios):
        result = distribute_proportionally(total / 100, ratios)
        assert in_cents(result.amounts) + round(result.remainder * 100) == total
