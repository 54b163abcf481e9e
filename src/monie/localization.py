"""
localization.py — Locale metadata and locale-driven formatting

LOCALE_CURRENCY_MAP is a small read-only table mapping the locales the
package knows about to their home currency. Formatting itself accepts any
locale Babel knows; only get_locale_currency_info() is limited to the table.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Final, Mapping, Optional

from ._guards import is_non_negative_int, require_amount
from .errors import MonieError
from .formatting import DEFAULT_LOCALE, FormatCurrencyOptions, format_currency, format_number
from .rounding import round_money

# Fraction digits shown by format_with_grouping (trailing zeros dropped)
GROUPING_MAX_FRACTION_DIGITS: Final[int] = 3


@dataclass(frozen=True, slots=True)
class LocaleCurrencyInfo:
    currency: str
    symbol: str
    name: str
    decimal_places: int
    locale: str


@dataclass(frozen=True)
class LocaleFormatOptions:
    """Overrides forwarded to format_currency; None keeps its default."""
    use_grouping: Optional[bool] = None
    custom_symbol: Optional[str] = None
    show_code: Optional[bool] = None
    symbol_position: Optional[str] = None


@dataclass(frozen=True, slots=True)
class FormattedWithGrouping:
    formatted: str
    amount: float
    locale: str
    has_grouping: bool = True


@dataclass(frozen=True, slots=True)
class FormattedDecimalPlaces:
    formatted: str
    amount: float
    decimal_places: int


def _info(currency: str, symbol: str, name: str, decimal_places: int, locale: str) -> LocaleCurrencyInfo:
    return LocaleCurrencyInfo(currency, symbol, name, decimal_places, locale)


LOCALE_CURRENCY_MAP: Mapping[str, LocaleCurrencyInfo] = MappingProxyType({
    "en-US": _info("USD", "$", "US Dollar", 2, "en-US"),
    "en-GB": _info("GBP", "£", "British Pound", 2, "en-GB"),
    "de-DE": _info("EUR", "€", "Euro", 2, "de-DE"),
    "fr-FR": _info("EUR", "€", "Euro", 2, "fr-FR"),
    "ja-JP": _info("JPY", "¥", "Japanese Yen", 0, "ja-JP"),
    "zh-CN": _info("CNY", "¥", "Chinese Yuan", 2, "zh-CN"),
    "es-ES": _info("EUR", "€", "Euro", 2, "es-ES"),
    "pt-BR": _info("BRL", "R$", "Brazilian Real", 2, "pt-BR"),
    "en-NG": _info("NGN", "₦", "Nigerian Naira", 2, "en-NG"),
})


def format_currency_by_locale(
    amount: float,
    currency: str,
    locale: str,
    options: Optional[LocaleFormatOptions] = None,
) -> str:
    """
    format_currency_by_locale(1234.56, "EUR", "de-DE") -> "€1.234,56"

    The symbol is placed at the start unless options say otherwise; the
    locale only drives separators.
    """
    require_amount(amount)
    if not isinstance(currency, str) or not currency:
        raise MonieError(f"Invalid currency: {currency}. Currency must be a valid string.")

    format_options = FormatCurrencyOptions(locale=locale)
    if options is not None:
        overrides = {
            name: value
            for name, value in (
                ("use_grouping", options.use_grouping),
                ("custom_symbol", options.custom_symbol),
                ("show_code", options.show_code),
                ("symbol_position", options.symbol_position),
            )
            if value is not None
        }
        format_options = replace(format_options, **overrides)

    return format_currency(amount, currency, format_options).formatted


def get_locale_currency_info(locale: str) -> LocaleCurrencyInfo:
    """get_locale_currency_info("ja-JP").currency -> "JPY" """
    if not isinstance(locale, str) or not locale:
        raise MonieError(f"Invalid locale: {locale}. Locale must be a valid string.")
    info = LOCALE_CURRENCY_MAP.get(locale)
    if info is None:
        raise MonieError(f"Unsupported locale: {locale}. Check the locale code.")
    return info


def format_with_grouping(amount: float, locale: str = DEFAULT_LOCALE) -> FormattedWithGrouping:
    """
    Group digits the locale's way, keeping up to three fraction digits.

        format_with_grouping(1234567.891).formatted        -> "1,234,567.891"
        format_with_grouping(1234567, "de-DE").formatted   -> "1.234.567"
    """
    require_amount(amount)
    formatted = format_number(
        amount,
        locale,
        min_fraction_digits=0,
        max_fraction_digits=GROUPING_MAX_FRACTION_DIGITS,
        use_grouping=True,
    )
    return FormattedWithGrouping(formatted=formatted, amount=amount, locale=locale)


def format_decimal_places(amount: float, decimal_places: int) -> FormattedDecimalPlaces:
    """format_decimal_places(3.14159, 2).formatted -> "3.14" (no grouping, no locale)"""
    require_amount(amount)
    if not is_non_negative_int(decimal_places):
        raise MonieError(
            f"Invalid decimal places: {decimal_places}. Must be a non-negative integer."
        )
    rounded = round_money(amount, decimal_places)
    return FormattedDecimalPlaces(
        formatted=f"{rounded:.{decimal_places}f}",
        amount=amount,
        decimal_places=decimal_places,
    )
