"""
conversion.py — Currency conversion over a static demo rate table

DEFAULT_RATES is illustrative only: there is no rate fetching. Callers with
real rates pass them explicitly, and an explicit rate always wins over the
table (even for identical currencies).

Converted amounts are returned unrounded; display rounding belongs to the
formatting layer. Results carry no timestamp, so each call is a pure
function of its arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from ._guards import is_valid_amount, require_amount
from .currencies import is_valid_currency
from .errors import MonieError
from .logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_RATES: Mapping[str, Mapping[str, float]] = MappingProxyType({
    "USD": MappingProxyType({"EUR": 0.85, "GBP": 0.73, "JPY": 110, "NGN": 460}),
    "EUR": MappingProxyType({"USD": 1.18, "GBP": 0.86, "JPY": 129, "NGN": 542}),
    "GBP": MappingProxyType({"USD": 1.37, "EUR": 1.16, "JPY": 150, "NGN": 630}),
    "JPY": MappingProxyType({"USD": 0.0091, "EUR": 0.0077, "GBP": 0.0067, "NGN": 4.18}),
    "NGN": MappingProxyType({"USD": 0.0022, "EUR": 0.0018, "GBP": 0.0016, "JPY": 0.24}),
})


@dataclass(frozen=True, slots=True)
class ConversionResult:
    original_amount: float
    converted_amount: float
    from_currency: str
    to_currency: str
    exchange_rate: float


@dataclass(frozen=True, slots=True)
class ConversionWithFeeResult:
    """The fee is taken in the source currency, before conversion."""
    original_amount: float
    converted_amount: float
    exchange_rate: float
    fee_amount: float
    fee_percentage: float
    amount_after_fee: float


@dataclass(frozen=True, slots=True)
class BulkConversionResult:
    conversions: tuple[ConversionResult, ...]
    total_original_amount: float
    total_converted_amount: float
    exchange_rate: float
    from_currency: str
    to_currency: str


def _check_pair(from_currency: object, to_currency: object) -> tuple[str, str]:
    if not is_valid_currency(from_currency):
        raise MonieError(f"Invalid source currency: {from_currency}")
    if not is_valid_currency(to_currency):
        raise MonieError(f"Invalid target currency: {to_currency}")
    return from_currency.upper(), to_currency.upper()


def get_exchange_rate(
    from_currency: str,
    to_currency: str,
    rate: Optional[float] = None,
) -> float:
    """
    Rate to multiply a from_currency amount by.

    Lookup order: explicit rate, identity (1.0), DEFAULT_RATES.

    Raises:
        MonieError: unknown currency, pair missing from the table, or invalid
            explicit rate
    """
    source, target = _check_pair(from_currency, to_currency)
    if rate is not None:
        if not is_valid_amount(rate) or rate <= 0:
            raise MonieError(f"Invalid exchange rate: {rate}. Rate must be a positive number.")
        return rate

    if source == target:
        return 1.0

    table_rate = DEFAULT_RATES.get(source, {}).get(target)
    if table_rate is None:
        logger.debug("exchange_rate_missing", from_currency=source, to_currency=target)
        raise MonieError(f"Exchange rate not available for {source} to {target}")
    return table_rate


def convert_currency(
    amount: float,
    from_currency: str,
    to_currency: str,
    rate: Optional[float] = None,
) -> ConversionResult:
    """
    convert_currency(100, "USD", "EUR").converted_amount -> 85.0
    convert_currency(100, "usd", "eur", 0.9).to_currency -> "EUR"
    """
    require_amount(amount)
    source, target = _check_pair(from_currency, to_currency)
    exchange_rate = get_exchange_rate(source, target, rate)

    return ConversionResult(
        original_amount=amount,
        converted_amount=amount * exchange_rate,
        from_currency=source,
        to_currency=target,
        exchange_rate=exchange_rate,
    )


def convert_with_fee(amount: float, rate: float, fee_percentage: float) -> ConversionWithFeeResult:
    """
    Deduct a percentage fee, then convert what is left.

        convert_with_fee(100, 0.85, 2.5).converted_amount -> 82.875
    """
    require_amount(amount)
    if not is_valid_amount(rate) or rate <= 0:
        raise MonieError(f"Invalid exchange rate: {rate}. Rate must be a positive number.")
    if not is_valid_amount(fee_percentage) or not 0 <= fee_percentage <= 100:
        raise MonieError(
            f"Invalid fee percentage: {fee_percentage}. Must be between 0 and 100."
        )

    fee_amount = amount * fee_percentage / 100
    amount_after_fee = amount - fee_amount

    return ConversionWithFeeResult(
        original_amount=amount,
        converted_amount=amount_after_fee * rate,
        exchange_rate=rate,
        fee_amount=fee_amount,
        fee_percentage=fee_percentage,
        amount_after_fee=amount_after_fee,
    )


def bulk_convert(
    amounts: Sequence[float],
    from_currency: str,
    to_currency: str,
    rate: Optional[float] = None,
) -> BulkConversionResult:
    """Convert several amounts with one rate. Every amount is validated first."""
    if isinstance(amounts, (str, bytes)) or not isinstance(amounts, Sequence) or not amounts:
        raise MonieError("Amounts must be a non-empty sequence")
    source, target = _check_pair(from_currency, to_currency)
    for amount in amounts:
        if not is_valid_amount(amount):
            raise MonieError(f"Invalid amount in sequence: {amount}")

    exchange_rate = get_exchange_rate(source, target, rate)
    conversions = tuple(
        ConversionResult(
            original_amount=amount,
            converted_amount=amount * exchange_rate,
            from_currency=source,
            to_currency=target,
            exchange_rate=exchange_rate,
        )
        for amount in amounts
    )
    total_original = sum(amounts)

    return BulkConversionResult(
        conversions=conversions,
        total_original_amount=total_original,
        total_converted_amount=total_original * exchange_rate,
        exchange_rate=exchange_rate,
        from_currency=source,
        to_currency=target,
    )
