"""
formatting.py — Display layer for currency amounts and percentages

Numbers are rendered by Babel (CLDR data) through format_number(), the only
function in the package that talks to the locale formatter. Everything else
composes strings around its output: sign, symbol or code, compact suffix.

Amounts are rounded with round_money() BEFORE reaching Babel, so display
rounding matches the arithmetic layer (half away from zero) instead of
Babel's half-even quantization.

Locale tags are accepted in either form: "de-DE" or "de_DE".
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final, Optional

from babel import Locale, UnknownLocaleError
from babel.numbers import format_decimal

from ._guards import is_non_negative_int, require_amount
from .currencies import Currency, get_currency
from .errors import MonieError
from .logging_config import get_logger
from .rounding import round_money

logger = get_logger(__name__)


DEFAULT_LOCALE: Final[str] = "en-US"

# Decimal places shown in compact notation (1.5M)
COMPACT_DECIMALS: Final[int] = 1

# Largest first
COMPACT_THRESHOLDS: Final[tuple[tuple[float, str], ...]] = (
    (1_000_000_000_000, "T"),
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)

SYMBOL_POSITIONS: Final[tuple[str, ...]] = ("start", "end")


# ==============================================================================
# OPTIONS & RESULTS
# ==============================================================================

@dataclass(frozen=True)
class FormatCurrencyOptions:
    """
    Currency display options.

    decimal_places=None uses the currency's own precision (JPY 0, BTC 8).
    show_code takes precedence over show_symbol; custom_symbol replaces the
    currency symbol.
    """
    locale: str = DEFAULT_LOCALE
    show_symbol: bool = True
    show_code: bool = False
    decimal_places: Optional[int] = None
    compact: bool = False
    use_grouping: bool = True
    custom_symbol: Optional[str] = None
    symbol_position: str = "start"


@dataclass(frozen=True)
class FormatPercentageOptions:
    precision: int = 2
    locale: str = DEFAULT_LOCALE
    use_grouping: bool = True
    suffix: str = "%"
    space_before: bool = False


@dataclass(frozen=True, slots=True)
class FormattedCurrency:
    formatted: str
    amount: float
    currency: str
    locale: str
    is_compact: bool


@dataclass(frozen=True, slots=True)
class FormattedPercentage:
    formatted: str
    decimal: float
    percentage: float
    precision: int
    locale: str


# ==============================================================================
# NUMBER FORMATTER
# ==============================================================================

def resolve_locale(locale: str) -> Locale:
    """Parse a locale tag into a Babel Locale, raising MonieError if unknown."""
    if not isinstance(locale, str) or not locale:
        raise MonieError(f"Invalid locale: {locale}. Locale must be a valid locale string.")
    try:
        return Locale.parse(locale.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logger.debug("locale_rejected", locale=locale, error=str(e))
        raise MonieError(
            f"Invalid locale: {locale}. Locale must be a valid locale string."
        ) from e


def is_valid_locale(locale: object) -> bool:
    try:
        resolve_locale(locale)
    except MonieError:
        return False
    return True


def _pattern(min_fraction: int, max_fraction: int, use_grouping: bool) -> str:
    pattern = "#,##0" if use_grouping else "0"
    if max_fraction:
        pattern += "." + "0" * min_fraction + "#" * (max_fraction - min_fraction)
    return pattern


def format_number(
    amount: float,
    locale: str = DEFAULT_LOCALE,
    min_fraction_digits: int = 2,
    max_fraction_digits: Optional[int] = None,
    use_grouping: bool = True,
) -> str:
    """
    Locale-aware decimal rendering (no currency, no percent sign).

        format_number(1234.5)                    -> "1,234.50"
        format_number(1234.5, "de-DE")           -> "1.234,50"
        format_number(1234.5, use_grouping=False) -> "1234.50"
    """
    require_amount(amount)
    if max_fraction_digits is None:
        max_fraction_digits = min_fraction_digits
    if not is_non_negative_int(min_fraction_digits) or not is_non_negative_int(max_fraction_digits):
        raise MonieError("Fraction digits must be non-negative integers")
    if max_fraction_digits < min_fraction_digits:
        raise MonieError("Maximum fraction digits cannot be less than minimum fraction digits")

    babel_locale = resolve_locale(locale)
    rounded = round_money(amount, max_fraction_digits)

    return format_decimal(
        rounded,
        format=_pattern(min_fraction_digits, max_fraction_digits, use_grouping),
        locale=babel_locale,
    )


# ==============================================================================
# CURRENCY
# ==============================================================================

def _check_currency_options(options: FormatCurrencyOptions) -> None:
    if options.decimal_places is not None and not is_non_negative_int(options.decimal_places):
        raise MonieError(
            f"Invalid decimal places: {options.decimal_places}. Must be a non-negative integer."
        )
    if options.symbol_position not in SYMBOL_POSITIONS:
        raise MonieError(
            f"Invalid symbol position: {options.symbol_position}. Must be 'start' or 'end'."
        )


def _compact_number(magnitude: float) -> str:
    for threshold, suffix in COMPACT_THRESHOLDS:
        if magnitude >= threshold:
            return f"{magnitude / threshold:.{COMPACT_DECIMALS}f}{suffix}"
    return f"{magnitude:.{COMPACT_DECIMALS}f}"


def _decorate(number: str, currency: Currency, options: FormatCurrencyOptions) -> str:
    at_end = options.symbol_position == "end"
    if options.show_code:
        return f"{number} {currency.code}" if at_end else f"{currency.code} {number}"
    if options.show_symbol:
        symbol = options.custom_symbol if options.custom_symbol is not None else currency.symbol
        return f"{number}{symbol}" if at_end else f"{symbol}{number}"
    return number


def format_currency(
    amount: float,
    currency: str,
    options: Optional[FormatCurrencyOptions] = None,
) -> FormattedCurrency:
    """
    Format an amount in a currency.

    The minus sign always leads the whole string: -$1,234.56, not $-1,234.56.

    Examples:
        format_currency(1234.56, "USD").formatted                 -> "$1,234.56"
        format_currency(1234.56, "EUR", FormatCurrencyOptions(
            locale="de-DE", show_code=True, symbol_position="end")
        ).formatted                                               -> "1.234,56 EUR"
        format_currency(1500000, "USD",
            FormatCurrencyOptions(compact=True)).formatted        -> "$1.5M"

    Raises:
        MonieError: non-finite amount, unsupported currency, invalid locale or options
    """
    require_amount(amount)
    info = get_currency(currency)
    opts = options if options is not None else FormatCurrencyOptions()
    _check_currency_options(opts)

    magnitude = abs(amount)
    if opts.compact:
        number = _compact_number(magnitude)
    else:
        decimals = opts.decimal_places if opts.decimal_places is not None else info.decimals
        number = format_number(
            magnitude,
            opts.locale,
            min_fraction_digits=decimals,
            use_grouping=opts.use_grouping,
        )

    formatted = _decorate(number, info, opts)
    # -0.001 renders as $0.00, not -$0.00
    if amount < 0 and any(ch in "123456789" for ch in number):
        formatted = f"-{formatted}"

    return FormattedCurrency(
        formatted=formatted,
        amount=amount,
        currency=info.code,
        locale=opts.locale,
        is_compact=opts.compact,
    )


def format_money(amount: float, currency: str, locale: Optional[str] = None) -> str:
    """format_money(1234.56, "USD") -> "$1,234.56" """
    options = FormatCurrencyOptions(locale=locale) if locale else None
    return format_currency(amount, currency, options).formatted


def format_cents(
    minor_units: float,
    currency: str,
    options: Optional[FormatCurrencyOptions] = None,
) -> FormattedCurrency:
    """
    Format an amount given in minor units.

        format_cents(12345, "USD").formatted -> "$123.45"
        format_cents(100, "JPY").formatted   -> "¥100"
    """
    require_amount(minor_units, "cents amount")
    info = get_currency(currency)
    return format_currency(minor_units / info.multiplier, info.code, options)


def format_compact_currency(
    amount: float,
    currency: str,
    options: Optional[FormatCurrencyOptions] = None,
) -> FormattedCurrency:
    """format_compact_currency(2300000000, "EUR").formatted -> "€2.3B" """
    opts = options if options is not None else FormatCurrencyOptions()
    return format_currency(amount, currency, replace(opts, compact=True))


# ==============================================================================
# PERCENTAGE
# ==============================================================================

def format_percentage(
    decimal: float,
    options: Optional[FormatPercentageOptions] = None,
) -> FormattedPercentage:
    """
    Format a decimal ratio as a percentage.

        format_percentage(0.25).formatted                                   -> "25.00%"
        format_percentage(0.1234, FormatPercentageOptions(precision=1)).formatted -> "12.3%"
    """
    require_amount(decimal, "decimal")
    opts = options if options is not None else FormatPercentageOptions()
    if not is_non_negative_int(opts.precision):
        raise MonieError(f"Invalid precision: {opts.precision}. Must be a non-negative integer.")

    percentage = decimal * 100
    number = format_number(
        percentage,
        opts.locale,
        min_fraction_digits=opts.precision,
        use_grouping=opts.use_grouping,
    )
    separator = " " if opts.space_before else ""

    return FormattedPercentage(
        formatted=f"{number}{separator}{opts.suffix}",
        decimal=decimal,
        percentage=percentage,
        precision=opts.precision,
        locale=opts.locale,
    )
