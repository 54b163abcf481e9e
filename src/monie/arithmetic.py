"""
arithmetic.py — Arithmetic on money amounts

Every operator:
1. validates all operands BEFORE computing (no partial effects)
2. computes in float
3. passes the result through round_money() (2 decimals)

Chains of operations therefore do not accumulate floating-point noise:

    >>> 0.1 + 0.2
    0.30000000000000004
    >>> add_money(0.1, 0.2)
    0.3

The `currency` parameter, when present, must be a known currency.
It is a consistency check, not a conversion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ._guards import (
    growth_factor,
    is_positive_int,
    is_valid_amount,
    require_amount,
    require_currency,
)
from .errors import MonieError
from .rounding import round_money


# ==============================================================================
# RESULTS
# ==============================================================================

@dataclass(frozen=True, slots=True)
class InterestResult:
    """Outcome of a simple or compound interest calculation."""
    principal: float
    rate: float
    time: float
    interest: float
    final_amount: float
    kind: str
    frequency: Optional[int] = None


@dataclass(frozen=True, slots=True)
class PercentageResult:
    percentage: float
    amount: float
    total: float


# ==============================================================================
# OPERATORS
# ==============================================================================

def add_money(amount1: float, amount2: float, currency: Optional[str] = None) -> float:
    """add_money(10.10, 5.05) -> 15.15"""
    require_amount(amount1, "first amount")
    require_amount(amount2, "second amount")
    require_currency(currency)
    return round_money(amount1 + amount2)


def subtract_money(amount1: float, amount2: float, currency: Optional[str] = None) -> float:
    """subtract_money(10.10, 5.05) -> 5.05"""
    require_amount(amount1, "first amount")
    require_amount(amount2, "second amount")
    require_currency(currency)
    return round_money(amount1 - amount2)


def multiply_money(amount: float, multiplier: float, currency: Optional[str] = None) -> float:
    """multiply_money(19.99, 3) -> 59.97"""
    require_amount(amount)
    require_amount(multiplier, "multiplier")
    require_currency(currency)
    return round_money(amount * multiplier)


def divide_money(amount: float, divisor: float, currency: Optional[str] = None) -> float:
    """
    divide_money(100, 3) -> 33.33

    Raises:
        MonieError: non-finite or zero divisor
    """
    require_amount(amount)
    require_amount(divisor, "divisor")
    require_currency(currency)
    if divisor == 0:
        raise MonieError("Cannot divide by zero")
    return round_money(amount / divisor)


# ==============================================================================
# PERCENTAGES (tips, taxes, discounts)
# ==============================================================================

def _require_percentage(value: object, label: str, upper: Optional[float] = None) -> None:
    if not is_valid_amount(value) or value < 0 or (upper is not None and value > upper):
        bound = f"between 0 and {upper:g}" if upper is not None else "a non-negative number"
        raise MonieError(
            f"Invalid {label}: {value}. {label[0].upper() + label[1:]} must be {bound}."
        )


def calculate_tip(amount: float, percentage: float) -> float:
    """calculate_tip(50, 18) -> 9.0"""
    require_amount(amount)
    _require_percentage(percentage, "percentage")
    return round_money(amount * percentage / 100)


def calculate_tax(amount: float, tax_rate: float) -> float:
    """calculate_tax(100, 8.25) -> 8.25"""
    require_amount(amount)
    _require_percentage(tax_rate, "tax rate")
    return round_money(amount * tax_rate / 100)


def calculate_discount(amount: float, discount_rate: float) -> float:
    """The discount amount (not the discounted price). Rate in [0, 100]."""
    require_amount(amount)
    _require_percentage(discount_rate, "discount rate", upper=100)
    return round_money(amount * discount_rate / 100)


# ==============================================================================
# INTEREST
# ==============================================================================

def _require_non_negative(value: object, label: str) -> None:
    if not is_valid_amount(value) or value < 0:
        raise MonieError(
            f"Invalid {label}: {value}. {label.capitalize()} must be a non-negative number."
        )


def calculate_simple_interest(principal: float, rate: float, time: float) -> InterestResult:
    """
    Simple interest: I = P * r * t / 100.

    Args:
        principal: principal (>= 0)
        rate: annual rate in percent (>= 0)
        time: duration in years (>= 0)
    """
    _require_non_negative(principal, "principal")
    _require_non_negative(rate, "rate")
    _require_non_negative(time, "time")

    interest = round_money(principal * rate * time / 100)
    final_amount = round_money(principal + interest)

    return InterestResult(
        principal=principal,
        rate=rate,
        time=time,
        interest=interest,
        final_amount=final_amount,
        kind="simple",
    )


def calculate_compound_interest(
    principal: float,
    rate: float,
    time: float,
    frequency: int = 1,
) -> InterestResult:
    """
    Compound interest: A = P * (1 + r/100/f)^(f*t).

    Interest is computed from the ALREADY rounded final amount, so
    principal + interest == final_amount to the cent.

    Raises:
        MonieError: negative or non-finite inputs, a non-positive frequency,
            or growth too large to represent
    """
    _require_non_negative(principal, "principal")
    _require_non_negative(rate, "rate")
    _require_non_negative(time, "time")
    if not is_positive_int(frequency):
        raise MonieError(
            f"Invalid frequency: {frequency}. Frequency must be a positive integer."
        )

    growth = growth_factor(1 + rate / 100 / frequency, frequency * time)
    final_amount = round_money(principal * growth)
    interest = round_money(final_amount - principal)

    return InterestResult(
        principal=principal,
        rate=rate,
        time=time,
        interest=interest,
        final_amount=final_amount,
        kind="compound",
        frequency=frequency,
    )


def calculate_percentage_of_total(amount: float, total: float) -> PercentageResult:
    """calculate_percentage_of_total(25, 200).percentage -> 12.5"""
    require_amount(amount)
    require_amount(total, "total")
    if total == 0:
        raise MonieError("Total cannot be zero")

    return PercentageResult(
        percentage=round_money(amount / total * 100),
        amount=amount,
        total=total,
    )
