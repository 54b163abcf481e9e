"""
investment.py — Investment return calculators

All rates returned by this module come in two shapes:

- decimal (roi, annualized_return, effective_rate), rounded to 6 places
- percentage (roi_percentage, ...), rounded to 2 places

Inputs follow the same split: calculate_future_value takes a DECIMAL rate
(0.05 for 5%), unlike the loan and interest functions which take percents.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ._guards import growth_factor, is_non_negative_int, is_valid_amount
from .errors import MonieError
from .rounding import round_money

# Precision of decimal rates
RATE_PRECISION: Final[int] = 6


@dataclass(frozen=True, slots=True)
class ROIResult:
    roi: float
    roi_percentage: float
    gain_loss: float
    initial_investment: float
    final_value: float
    is_gain: bool


@dataclass(frozen=True, slots=True)
class AnnualizedReturnResult:
    annualized_return: float
    annualized_return_percentage: float
    total_return: float
    total_return_percentage: float
    years: float


@dataclass(frozen=True, slots=True)
class DividendYieldResult:
    dividend_yield: float
    dividend_yield_percentage: float
    annual_dividend: float
    share_price: float


@dataclass(frozen=True, slots=True)
class FutureValueResult:
    future_value: float
    present_value: float
    total_interest: float
    effective_rate: float
    periods: int


def _check_investment(initial: object, final: object) -> None:
    if not is_valid_amount(initial) or not is_valid_amount(final):
        raise MonieError("Initial investment and final value must be valid numbers")
    if initial <= 0:
        raise MonieError("Initial investment must be greater than zero")


def calculate_roi(initial_investment: float, final_value: float) -> ROIResult:
    """
    Return on investment.

        calculate_roi(1000, 1200).roi_percentage -> 20.0
    """
    _check_investment(initial_investment, final_value)

    gain = final_value - initial_investment
    roi = gain / initial_investment

    return ROIResult(
        roi=round_money(roi, RATE_PRECISION),
        roi_percentage=round_money(roi * 100),
        gain_loss=round_money(gain),
        initial_investment=round_money(initial_investment),
        final_value=round_money(final_value),
        is_gain=gain >= 0,
    )


def calculate_annualized_return(
    initial_investment: float,
    final_value: float,
    years: float,
) -> AnnualizedReturnResult:
    """
    Compound annual growth rate: (final / initial) ** (1 / years) - 1.

    A total loss (final_value == 0) yields -100%.
    """
    _check_investment(initial_investment, final_value)
    if final_value < 0:
        raise MonieError("Final value cannot be negative")
    if not is_valid_amount(years) or years <= 0:
        raise MonieError("Years must be greater than zero")

    total_return = (final_value - initial_investment) / initial_investment
    annualized = growth_factor(final_value / initial_investment, 1 / years) - 1

    return AnnualizedReturnResult(
        annualized_return=round_money(annualized, RATE_PRECISION),
        annualized_return_percentage=round_money(annualized * 100),
        total_return=round_money(total_return, RATE_PRECISION),
        total_return_percentage=round_money(total_return * 100),
        years=years,
    )


def calculate_dividend_yield(annual_dividend: float, share_price: float) -> DividendYieldResult:
    """calculate_dividend_yield(2.5, 50).dividend_yield_percentage -> 5.0"""
    if not is_valid_amount(annual_dividend) or not is_valid_amount(share_price):
        raise MonieError("Annual dividend and share price must be valid numbers")
    if share_price <= 0:
        raise MonieError("Share price must be greater than zero")
    if annual_dividend < 0:
        raise MonieError("Annual dividend cannot be negative")

    dividend_yield = annual_dividend / share_price

    return DividendYieldResult(
        dividend_yield=round_money(dividend_yield, RATE_PRECISION),
        dividend_yield_percentage=round_money(dividend_yield * 100),
        annual_dividend=round_money(annual_dividend),
        share_price=round_money(share_price),
    )


def calculate_future_value(
    present_value: float,
    rate: float,
    periods: int,
) -> FutureValueResult:
    """
    Future value with per-period compounding: PV * (1 + rate) ** periods.

    Args:
        present_value: amount invested today (> 0)
        rate: decimal rate per period (>= 0)
        periods: number of periods (integer >= 0)
    """
    if not is_valid_amount(present_value) or not is_valid_amount(rate):
        raise MonieError("Present value and rate must be valid numbers")
    if present_value <= 0:
        raise MonieError("Present value must be greater than zero")
    if rate < 0:
        raise MonieError("Rate cannot be negative")
    if not is_non_negative_int(periods):
        raise MonieError("Periods must be a non-negative integer")

    growth = growth_factor(1 + rate, periods)
    future_value = present_value * growth

    return FutureValueResult(
        future_value=round_money(future_value),
        present_value=round_money(present_value),
        total_interest=round_money(future_value - present_value),
        effective_rate=round_money(growth - 1, RATE_PRECISION),
        periods=periods,
    )
