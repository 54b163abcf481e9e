"""
test_validation.py — Predicates, parsers and the Money value
"""

import math

import pytest

from monie import (
    Money,
    MonieError,
    is_positive_amount,
    is_valid_amount,
    is_valid_currency,
    is_within_range,
    normalize_amount,
    parse_amount,
    parse_currency_string,
    parse_formatted_currency,
    validate_money_object,
)


class TestPredicates:

    @pytest.mark.parametrize("value, expected", [
        (100.5, True),
        (0, True),
        (-3, True),
        (float("nan"), False),
        (float("inf"), False),
        ("100", False),
        (None, False),
        (True, False),
    ])
    def test_is_valid_amount(self, value, expected):
        assert is_valid_amount(value) is expected

    def test_is_valid_currency(self):
        assert is_valid_currency("usd") is True
        assert is_valid_currency("BTC") is True
        assert is_valid_currency("XYZ") is False
        assert is_valid_currency(None) is False

    def test_is_positive_amount(self):
        assert is_positive_amount(0.01) is True
        assert is_positive_amount(0) is False
        assert is_positive_amount(float("nan")) is False

    def test_is_within_range(self):
        assert is_within_range(5, 1, 10) is True
        assert is_within_range(10, 1, 10) is True
        assert is_within_range(10, 1, 10, inclusive=False) is False
        assert is_within_range(float("nan"), 1, 10) is False


class TestMoney:

    def test_validate_mapping(self):
        assert validate_money_object({"amount": 10, "currency": "usd"}) is True
        assert validate_money_object({"amount": "10", "currency": "USD"}) is False
        assert validate_money_object({"amount": 10, "currency": "XYZ"}) is False
        assert validate_money_object(None) is False

    def test_validate_dataclass(self):
        assert validate_money_object(Money(10, "EUR")) is True

    def test_dict_round_trip(self):
        money = Money.from_dict({"amount": 5, "currency": "eur"})
        assert money == Money(5, "EUR")
        assert money.to_dict() == {"amount": 5, "currency": "EUR"}

    def test_from_invalid_dict(self):
        with pytest.raises(MonieError, match="Invalid money object"):
            Money.from_dict({"amount": 5})


class TestParsing:

    def test_parse_amount(self):
        result = parse_amount("$1,234.56")
        assert result.amount == 1234.56
        assert result.is_valid is True
        assert result.original_string == "$1,234.56"

    def test_parentheses_are_dropped(self):
        assert parse_amount("(100)").amount == 100.0

    def test_parse_garbage(self):
        result = parse_amount("abc")
        assert result.is_valid is False
        assert math.isnan(result.amount)

    def test_parse_non_string(self):
        result = parse_amount(123)
        assert result.is_valid is False
        assert result.original_string == "123"

    def test_parse_currency_string(self):
        result = parse_currency_string("100.50 USD")
        assert result.amount == 100.5
        assert result.currency == "USD"
        assert result.is_valid is True

    def test_code_first(self):
        result = parse_currency_string("EUR 1,000")
        assert result.amount == 1000.0
        assert result.is_valid is True

    def test_unknown_code(self):
        result = parse_currency_string("100 XYZ")
        assert result.currency == "XYZ"
        assert result.is_valid is False

    def test_missing_code(self):
        result = parse_currency_string("100 dollars")
        assert result.currency == ""
        assert result.is_valid is False


class TestNormalize:

    def test_default(self):
        assert normalize_amount(123.456) == 123.46

    def test_modes(self):
        assert normalize_amount(123.456, rounding_mode="floor") == 123.45
        assert normalize_amount(123.451, rounding_mode="ceil") == 123.46

    def test_places(self):
        assert normalize_amount(123.456, decimal_places=0) == 123.0

    def test_unknown_mode(self):
        with pytest.raises(MonieError, match="Unknown rounding mode"):
            normalize_amount(1.0, rounding_mode="bankers")

    def test_bad_places(self):
        with pytest.raises(MonieError, match="Invalid decimal places"):
            normalize_amount(1.0, decimal_places=-1)


class TestParseFormattedCurrency:

    def test_us_format(self):
        assert parse_formatted_currency("$1,234.56") == 1234.56

    def test_german_format(self):
        assert parse_formatted_currency("1.234,56 €", "de-DE") == 1234.56

    def test_french_format_with_narrow_spaces(self):
        assert parse_formatted_currency("1 234,56 €", "fr-FR") == 1234.56

    def test_code_is_ignored(self):
        assert parse_formatted_currency("EUR 99.99") == 99.99

    def test_negative(self):
        assert parse_formatted_currency("-$5.00") == -5.0

    def test_garbage(self):
        with pytest.raises(MonieError, match="Failed to parse"):
            parse_formatted_currency("abc")

    def test_non_string(self):
        with pytest.raises(MonieError, match="Must be a string"):
            parse_formatted_currency(123)
