"""
validation.py — Predicates and parsers for user-supplied amounts

Predicates (is_*, validate_money_object) and the parse_amount /
parse_currency_string parsers never raise: they answer False or return a
result with is_valid=False. normalize_amount and parse_formatted_currency
raise MonieError, like the calculators.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ._guards import is_non_negative_int, is_valid_amount
from .currencies import is_valid_currency
from .errors import MonieError
from .rounding import RoundingMode, round_money

__all__ = [
    "Money",
    "ParsedAmount",
    "ParsedCurrency",
    "is_valid_amount",
    "is_valid_currency",
    "is_positive_amount",
    "is_within_range",
    "validate_money_object",
    "parse_amount",
    "parse_currency_string",
    "normalize_amount",
    "parse_formatted_currency",
]

_SYMBOLS_RE = re.compile(r"[$£€¥₦₹]")
_NOISE_RE = re.compile(r"[,\s()]")
_CODE_RE = re.compile(r"\b([A-Z]{3})\b")
_ANY_CODE_RE = re.compile(r"[A-Z]{3}")
# Leading numeric literal; trailing text is ignored
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# Locales writing 1.234,56
_COMMA_DECIMAL_LANGUAGES = ("de", "fr", "es")

_NORMALIZE_MODES = ("round", "floor", "ceil")


@dataclass(frozen=True, slots=True)
class Money:
    """An amount tagged with its currency code."""
    amount: float
    currency: str

    def to_dict(self) -> dict[str, Any]:
        return {"amount": self.amount, "currency": self.currency}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Money":
        if not validate_money_object(data):
            raise MonieError(f"Invalid money object: {data!r}")
        return cls(amount=data["amount"], currency=data["currency"].upper())


@dataclass(frozen=True, slots=True)
class ParsedAmount:
    amount: float
    is_valid: bool
    original_string: str


@dataclass(frozen=True, slots=True)
class ParsedCurrency:
    amount: float
    currency: str
    is_valid: bool
    original_string: str


def is_positive_amount(amount: object) -> bool:
    return is_valid_amount(amount) and amount > 0


def is_within_range(amount: object, min_value: object, max_value: object, inclusive: bool = True) -> bool:
    """False (never an error) when any argument is not a finite number."""
    if not all(is_valid_amount(v) for v in (amount, min_value, max_value)):
        return False
    if inclusive:
        return min_value <= amount <= max_value
    return min_value < amount < max_value


def validate_money_object(value: object) -> bool:
    """True for a Money, or a mapping with a finite `amount` and a known `currency`."""
    if isinstance(value, Money):
        return is_valid_amount(value.amount) and is_valid_currency(value.currency)
    if not isinstance(value, Mapping):
        return False
    return is_valid_amount(value.get("amount")) and is_valid_currency(value.get("currency"))


def _leading_number(text: str) -> float:
    match = _NUMBER_RE.match(text)
    if match is None:
        return math.nan
    return float(match.group())


def parse_amount(text: str) -> ParsedAmount:
    """
    Parse a loosely formatted amount.

    Currency symbols, commas, whitespace and parentheses are dropped, then
    the leading number is read:

        parse_amount("$1,234.56").amount -> 1234.56
        parse_amount("abc").is_valid     -> False

    Parentheses are removed, not read as a negative sign.
    """
    if not isinstance(text, str):
        return ParsedAmount(amount=math.nan, is_valid=False, original_string=str(text))

    cleaned = _NOISE_RE.sub("", _SYMBOLS_RE.sub("", text))
    amount = _leading_number(cleaned)

    return ParsedAmount(amount=amount, is_valid=is_valid_amount(amount), original_string=text)


def parse_currency_string(text: str) -> ParsedCurrency:
    """
    Extract an ISO-style code and an amount from text like "100.50 USD".

    The code must be three upper-case letters standing alone, and must be a
    supported currency for the result to be valid.
    """
    if not isinstance(text, str):
        return ParsedCurrency(amount=math.nan, currency="", is_valid=False, original_string=str(text))

    match = _CODE_RE.search(text)
    currency = match.group(1) if match else ""
    without_code = _CODE_RE.sub("", text) if currency else text
    parsed = parse_amount(without_code)

    return ParsedCurrency(
        amount=parsed.amount,
        currency=currency,
        is_valid=parsed.is_valid and is_valid_currency(currency),
        original_string=text,
    )


def normalize_amount(
    amount: float,
    decimal_places: int = 2,
    rounding_mode: str = "round",
) -> float:
    """
    normalize_amount(123.456)                       -> 123.46
    normalize_amount(123.456, rounding_mode="floor") -> 123.45
    """
    if not is_valid_amount(amount):
        raise MonieError(f"Invalid amount: {amount}. Amount must be a finite number.")
    if not is_non_negative_int(decimal_places):
        raise MonieError(
            f"Invalid decimal places: {decimal_places}. Must be a non-negative integer."
        )
    if rounding_mode not in _NORMALIZE_MODES:
        raise MonieError(f"Unknown rounding mode: {rounding_mode}")

    return round_money(amount, decimal_places, RoundingMode(rounding_mode))


def _uses_comma_decimal(locale: str) -> bool:
    language = re.split(r"[-_]", locale, maxsplit=1)[0].lower()
    return language in _COMMA_DECIMAL_LANGUAGES


def parse_formatted_currency(text: str, locale: Optional[str] = "en-US") -> float:
    """
    Read back an amount produced by the formatting layer.

        parse_formatted_currency("$1,234.56")            -> 1234.56
        parse_formatted_currency("1.234,56 €", "de-DE")  -> 1234.56

    Raises:
        MonieError: text is not a string or holds no number
    """
    if not isinstance(text, str):
        raise MonieError(f"Invalid formatted string: {text}. Must be a string.")

    cleaned = _ANY_CODE_RE.sub("", _SYMBOLS_RE.sub("", text)).strip()
    # Narrow/no-break spaces used as group separators (fr-FR)
    cleaned = re.sub(r"\s", "", cleaned)

    if _uses_comma_decimal(locale or "en-US"):
        integer_part, sep, fraction = cleaned.rpartition(",")
        if sep:
            cleaned = f"{integer_part.replace('.', '')}.{fraction}"
    else:
        cleaned = cleaned.replace(",", "")

    amount = _leading_number(cleaned)
    if not is_valid_amount(amount):
        raise MonieError(f"Failed to parse formatted currency: {text}")
    return amount
