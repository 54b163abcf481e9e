"""
test_conversion.py — Demo rate table, fees, bulk conversion
"""

import pytest

from monie import (
    DEFAULT_RATES,
    MonieError,
    bulk_convert,
    convert_currency,
    convert_with_fee,
    get_exchange_rate,
)


class TestExchangeRate:

    def test_table_lookup(self):
        assert get_exchange_rate("USD", "EUR") == 0.85
        assert get_exchange_rate("NGN", "JPY") == 0.24

    def test_identity(self):
        assert get_exchange_rate("EUR", "EUR") == 1.0

    def test_custom_rate_wins(self):
        assert get_exchange_rate("USD", "EUR", 0.9) == 0.9
        assert get_exchange_rate("USD", "USD", 2) == 2

    def test_missing_pair(self):
        with pytest.raises(MonieError, match="Exchange rate not available for USD to CHF"):
            get_exchange_rate("USD", "CHF")

    def test_codes_are_case_insensitive(self):
        assert get_exchange_rate("usd", "eur") == 0.85

    @pytest.mark.parametrize("source, target, match", [
        (None, "USD", "Invalid source currency"),
        ("USD", None, "Invalid target currency"),
        ("XYZ", "USD", "Invalid source currency"),
        (840, "EUR", "Invalid source currency"),
    ])
    def test_rejects_invalid_codes(self, source, target, match):
        with pytest.raises(MonieError, match=match):
            get_exchange_rate(source, target)

    def test_custom_rate_still_needs_valid_codes(self):
        with pytest.raises(MonieError, match="Invalid source currency"):
            get_exchange_rate(None, "USD", 0.9)

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_RATES["USD"]["EUR"] = 1.0


class TestConvertCurrency:

    def test_default_rate(self):
        result = convert_currency(100, "USD", "EUR")
        assert result.converted_amount == pytest.approx(85.0)
        assert result.exchange_rate == 0.85

    def test_codes_are_upper_cased(self):
        result = convert_currency(100, "usd", "eur")
        assert (result.from_currency, result.to_currency) == ("USD", "EUR")

    def test_custom_rate(self):
        assert convert_currency(100, "USD", "EUR", 0.9).converted_amount == pytest.approx(90.0)

    def test_same_currency(self):
        assert convert_currency(100, "GBP", "GBP").converted_amount == 100

    def test_invalid_source(self):
        with pytest.raises(MonieError, match="Invalid source currency"):
            convert_currency(100, "XYZ", "EUR")

    def test_invalid_target(self):
        with pytest.raises(MonieError, match="Invalid target currency"):
            convert_currency(100, "USD", "XYZ")

    def test_invalid_amount(self):
        with pytest.raises(MonieError, match="Invalid amount"):
            convert_currency(float("nan"), "USD", "EUR")

    def test_results_are_deterministic(self):
        assert convert_currency(100, "USD", "EUR") == convert_currency(100, "USD", "EUR")


class TestConvertWithFee:

    def test_fee_taken_before_conversion(self):
        result = convert_with_fee(100, 0.85, 2.5)
        assert result.fee_amount == pytest.approx(2.5)
        assert result.amount_after_fee == pytest.approx(97.5)
        assert result.converted_amount == pytest.approx(82.875)

    def test_fee_bounds(self):
        with pytest.raises(MonieError, match="Invalid fee percentage"):
            convert_with_fee(100, 0.85, 101)

    def test_rate_must_be_positive(self):
        with pytest.raises(MonieError, match="Invalid exchange rate"):
            convert_with_fee(100, 0, 1)


class TestBulkConvert:

    def test_totals(self):
        result = bulk_convert([100, 200, 300], "USD", "EUR")
        assert len(result.conversions) == 3
        assert result.total_original_amount == 600
        assert result.total_converted_amount == pytest.approx(510.0)
        assert result.conversions[1].converted_amount == pytest.approx(170.0)

    def test_empty(self):
        with pytest.raises(MonieError, match="non-empty"):
            bulk_convert([], "USD", "EUR")

    def test_invalid_member(self):
        with pytest.raises(MonieError, match="Invalid amount in sequence"):
            bulk_convert([100, float("inf")], "USD", "EUR")
