"""
utils.py — Text helpers: digit grouping, number words, account masking
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional

from ._guards import is_non_negative_int, is_valid_amount
from .errors import MonieError
from .formatting import DEFAULT_LOCALE, format_number

# Largest magnitude convert_to_words can spell
MAX_WORDS_AMOUNT: Final[float] = 999_999_999_999.99

# Fraction digits kept by format_thousands when decimal_places is not given
THOUSANDS_MAX_FRACTION_DIGITS: Final[int] = 10

_ONES: Final[tuple[str, ...]] = (
    "", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine",
    "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen", "sixteen",
    "seventeen", "eighteen", "nineteen",
)
_TENS: Final[tuple[str, ...]] = (
    "", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety",
)
_SCALES: Final[tuple[str, ...]] = ("", "thousand", "million", "billion")


@dataclass(frozen=True, slots=True)
class NumberToWordsResult:
    words: str
    original_number: float
    is_negative: bool
    currency: Optional[str] = None


@dataclass(frozen=True, slots=True)
class FormattedAccountResult:
    formatted: str
    original: str
    is_masked: bool
    masked_characters: int


# ==============================================================================
# GROUPING
# ==============================================================================

def format_thousands(
    number: float,
    separator: str = ",",
    locale: str = DEFAULT_LOCALE,
    include_decimals: bool = True,
    decimal_places: Optional[int] = None,
) -> str:
    """
    Group thousands.

    A custom separator is honored for the en-US locale only; other locales
    use their own separators.

        format_thousands(1234567.89)                   -> "1,234,567.89"
        format_thousands(1234567, separator=" ")       -> "1 234 567"
        format_thousands(1234.5, decimal_places=2)     -> "1,234.50"
        format_thousands(1234.56, include_decimals=False) -> "1,235"
    """
    if not is_valid_amount(number):
        raise MonieError("Number must be a valid number")
    if decimal_places is not None and not is_non_negative_int(decimal_places):
        raise MonieError(
            f"Invalid decimal places: {decimal_places}. Must be a non-negative integer."
        )

    if not include_decimals:
        min_digits = max_digits = 0
    elif decimal_places is not None:
        min_digits = max_digits = decimal_places
    else:
        min_digits, max_digits = 0, THOUSANDS_MAX_FRACTION_DIGITS

    formatted = format_number(
        number,
        locale,
        min_fraction_digits=min_digits,
        max_fraction_digits=max_digits,
        use_grouping=True,
    )
    if separator != "," and locale == DEFAULT_LOCALE:
        formatted = formatted.replace(",", separator)
    return formatted


def format_to_hundreds(
    minor_units: float,
    separator: str = ",",
    locale: str = DEFAULT_LOCALE,
    decimal_places: Optional[int] = None,
) -> str:
    """format_to_hundreds(123456) -> "1,234.56" """
    if not is_valid_amount(minor_units):
        raise MonieError("Amount must be a valid number")
    return format_thousands(
        minor_units / 100,
        separator=separator,
        locale=locale,
        include_decimals=True,
        decimal_places=2 if decimal_places is None else decimal_places,
    )


def remove_formatting_from_number(text: str) -> str:
    """
    Strip everything but the number.

    Only the last "." survives and "-" is kept only as a leading sign:

        remove_formatting_from_number("$1,234.56")  -> "1234.56"
        remove_formatting_from_number("-€1.234.56") -> "-1234.56"
    """
    if not isinstance(text, str) or not text.strip():
        raise MonieError("Formatted string must be a non-empty string")

    kept = "".join(ch for ch in text if ch.isdigit() and ch.isascii() or ch in ".-")

    last_dot = kept.rfind(".")
    if last_dot != -1:
        kept = kept[:last_dot].replace(".", "") + kept[last_dot:]

    cleaned = kept[:1] + kept[1:].replace("-", "")

    try:
        float(cleaned)
    except ValueError:
        raise MonieError("String does not contain a valid number") from None
    return cleaned


# ==============================================================================
# WORDS
# ==============================================================================

def _hundreds_to_words(num: int) -> str:
    parts = []
    hundreds, rest = divmod(num, 100)
    if hundreds:
        parts.append(f"{_ONES[hundreds]} hundred")
    if rest:
        if rest < 20:
            parts.append(_ONES[rest])
        else:
            tens, ones = divmod(rest, 10)
            parts.append(_TENS[tens] + (f"-{_ONES[ones]}" if ones else ""))
    return " ".join(parts)


def _integer_to_words(num: int) -> str:
    if num == 0:
        return "zero"
    chunks = []
    scale = 0
    while num > 0:
        num, chunk = divmod(num, 1000)
        if chunk:
            words = _hundreds_to_words(chunk)
            chunks.append(f"{words} {_SCALES[scale]}" if scale else words)
        scale += 1
    return " ".join(reversed(chunks))


def convert_to_words(amount: float, currency: Optional[str] = None) -> NumberToWordsResult:
    """
    Spell an amount in English, cents included.

        convert_to_words(1234.56).words        -> "one thousand two hundred thirty-four and fifty-six"
        convert_to_words(100, "USD").words     -> "one hundred usd"
        convert_to_words(1.5, "USD").words     -> "one and fifty usd cents"

    Raises:
        MonieError: non-finite amount, or |amount| > 999,999,999,999.99
    """
    if not is_valid_amount(amount):
        raise MonieError("Amount must be a valid number")
    if abs(amount) > MAX_WORDS_AMOUNT:
        raise MonieError("Amount too large to convert to words")

    suffix = f" {currency.lower()}" if currency else ""

    if amount == 0:
        return NumberToWordsResult(
            words=f"zero{suffix}", original_number=amount, is_negative=False, currency=currency
        )

    integer_text, cents_text = f"{abs(amount):.2f}".split(".")
    cents = int(cents_text)

    words = _integer_to_words(int(integer_text))
    if cents:
        words += f" and {_hundreds_to_words(cents)}"
        if currency:
            words += f"{suffix} cents"
    else:
        words += suffix

    is_negative = amount < 0
    if is_negative:
        words = f"negative {words}"

    return NumberToWordsResult(
        words=words.strip(),
        original_number=amount,
        is_negative=is_negative,
        currency=currency,
    )


# ==============================================================================
# ACCOUNT NUMBERS
# ==============================================================================

def format_account_number(
    account_number: str,
    mask_char: str = "*",
    show_first: int = 4,
    show_last: int = 4,
    apply_mask: bool = True,
    separator: str = " ",
    group_size: int = 4,
) -> FormattedAccountResult:
    """
    Mask the middle digits and split into groups.

        format_account_number("1234567890123456").formatted -> "1234 **** **** 3456"

    Numbers no longer than show_first + show_last are left unmasked.
    """
    if not isinstance(account_number, str) or not account_number.strip():
        raise MonieError("Account number must be a non-empty string")

    digits = "".join(account_number.split())
    if not (digits.isascii() and digits.isdigit()):
        raise MonieError("Account number must contain only digits")
    if not is_non_negative_int(show_first) or not is_non_negative_int(show_last):
        raise MonieError("show_first and show_last must be non-negative")
    if not isinstance(group_size, int) or group_size <= 0:
        raise MonieError("group_size must be positive")

    formatted = digits
    masked = 0
    if apply_mask and len(digits) > show_first + show_last:
        masked = len(digits) - show_first - show_last
        formatted = digits[:show_first] + mask_char * masked + digits[len(digits) - show_last:]

    if separator:
        formatted = separator.join(
            formatted[i:i + group_size] for i in range(0, len(formatted), group_size)
        )

    return FormattedAccountResult(
        formatted=formatted,
        original=account_number,
        is_masked=masked > 0,
        masked_characters=masked,
    )
