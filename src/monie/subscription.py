"""
subscription.py — Subscription billing, proration and plan comparison

Proration is linear: a period charge scales with the fraction of days used.
Plan upgrades reuse the same rule over a standardized 30-day month.

    prorated = amount * days_used / total_days

ROUNDING ORDER (calculate_upgrade_credit):
    net_amount_due is computed from the UNROUNDED remaining value and
    prorated cost, then rounded once. It can therefore differ by a cent from
    round(new_cost) - round(credit). This is the documented behavior.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Final, Optional, Sequence, Union

from ._guards import is_positive_int, is_valid_amount
from .errors import MonieError
from .logging_config import get_logger
from .rounding import round_money, to_minor_units

logger = get_logger(__name__)


# Standard billing month used for upgrade credits
ASSUMED_DAYS_IN_MONTH: Final[int] = 30

# Upper bound accepted for days remaining in a billing period
MAX_DAYS_IN_MONTH: Final[int] = 31


class PaymentFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUALLY = "semi-annually"
    ANNUALLY = "annually"


PAYMENTS_PER_YEAR = MappingProxyType({
    PaymentFrequency.DAILY: 365,
    PaymentFrequency.WEEKLY: 52,
    PaymentFrequency.BI_WEEKLY: 26,
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.QUARTERLY: 4,
    PaymentFrequency.SEMI_ANNUALLY: 2,
    PaymentFrequency.ANNUALLY: 1,
})

# Average payments falling in one month
PAYMENTS_PER_MONTH = MappingProxyType({
    PaymentFrequency.DAILY: 30.44,
    PaymentFrequency.WEEKLY: 4.33,
    PaymentFrequency.BI_WEEKLY: 2.17,
    PaymentFrequency.MONTHLY: 1,
    PaymentFrequency.QUARTERLY: 1 / 3,
    PaymentFrequency.SEMI_ANNUALLY: 1 / 6,
    PaymentFrequency.ANNUALLY: 1 / 12,
})

# Calendar step of each frequency: (days, months)
_CALENDAR_STEP = MappingProxyType({
    PaymentFrequency.DAILY: (1, 0),
    PaymentFrequency.WEEKLY: (7, 0),
    PaymentFrequency.BI_WEEKLY: (14, 0),
    PaymentFrequency.MONTHLY: (0, 1),
    PaymentFrequency.QUARTERLY: (0, 3),
    PaymentFrequency.SEMI_ANNUALLY: (0, 6),
    PaymentFrequency.ANNUALLY: (0, 12),
})


# ==============================================================================
# PLANS & RESULTS
# ==============================================================================

@dataclass(frozen=True)
class SubscriptionPlan:
    """
    A subscription offer.

    annual_discount is a decimal (0.2 for 20% off when billed yearly).
    """
    id: str
    name: str
    monthly_amount: float
    currency: str = "USD"
    annual_discount: float = 0.0
    features: tuple[str, ...] = field(default_factory=tuple)
    max_users: Optional[int] = None


@dataclass(frozen=True, slots=True)
class SubscriptionValueResult:
    total_cost: float
    monthly_amount: float
    months: int
    currency: str
    average_monthly_cost: float


@dataclass(frozen=True, slots=True)
class PlanAnalysis:
    plan: SubscriptionPlan
    effective_monthly_rate: float
    annual_cost: float
    value_score: float
    cost_per_user: Optional[float] = None


@dataclass(frozen=True, slots=True)
class PlanComparisonResult:
    plans: tuple[PlanAnalysis, ...]
    recommended_plan: PlanAnalysis
    max_savings: float


@dataclass(frozen=True, slots=True)
class ProrationResult:
    prorated_amount: float
    full_amount: float
    days_used: int
    total_days: int
    usage_percentage: float


@dataclass(frozen=True, slots=True)
class UpgradeCreditResult:
    """net_amount_due is positive when the customer pays, negative for a credit."""
    credit_amount: float
    old_plan_remaining_value: float
    new_plan_prorated_cost: float
    net_amount_due: float
    days_remaining: int


@dataclass(frozen=True, slots=True)
class AnnualEquivalentResult:
    annual_amount: float
    original_amount: float
    frequency: PaymentFrequency
    payments_per_year: int


@dataclass(frozen=True, slots=True)
class RecurringCostResult:
    total_cost: float
    number_of_payments: int
    amount_per_period: float
    frequency: PaymentFrequency
    duration: float
    duration_unit: str = "months"


# ==============================================================================
# HELPERS
# ==============================================================================

def _coerce_frequency(frequency: object) -> PaymentFrequency:
    try:
        return PaymentFrequency(frequency)
    except ValueError:
        raise MonieError(f"Invalid frequency: {frequency}") from None


def _check_non_negative_amount(amount: object, label: str = "Amount") -> None:
    if not is_valid_amount(amount):
        raise MonieError(f"{label} must be a valid number")
    if amount < 0:
        raise MonieError(f"{label} cannot be negative")


def _whole(value: float) -> int:
    """Nearest whole number, halves away from zero (2.5 -> 3)."""
    return to_minor_units(value, 0)


def _add_months(day: date, months: int) -> date:
    """Move by whole months, clamping to the last day of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


# ==============================================================================
# OPERATIONS
# ==============================================================================

def calculate_subscription_value(
    monthly_amount: float,
    months: int,
    currency: str = "USD",
) -> SubscriptionValueResult:
    """calculate_subscription_value(29.99, 12).total_cost -> 359.88"""
    _check_non_negative_amount(monthly_amount, "Monthly amount")
    if not is_positive_int(months):
        raise MonieError("Months must be a positive integer")

    return SubscriptionValueResult(
        total_cost=round_money(monthly_amount * months),
        monthly_amount=round_money(monthly_amount),
        months=months,
        currency=currency,
        average_monthly_cost=round_money(monthly_amount),
    )


def compare_subscription_plans(plans: Sequence[SubscriptionPlan]) -> PlanComparisonResult:
    """
    Rank plans by a simple value score (0-100).

    Cheaper plans score higher (2 points lost per unit of monthly cost) and
    each feature adds 2 points, up to 20. The first plan wins ties.
    """
    if not plans:
        raise MonieError("Plans must be a non-empty sequence")
    if len(plans) == 1:
        raise MonieError("At least two plans are required for comparison")

    for plan in plans:
        if not plan.id or not plan.name or not is_valid_amount(plan.monthly_amount):
            raise MonieError("Each plan must have valid id, name, and monthly_amount")

    analyses = []
    for plan in plans:
        effective_monthly = plan.monthly_amount * (1 - plan.annual_discount)
        annual_cost = effective_monthly * 12

        base_score = max(0.0, 100 - effective_monthly * 2)
        feature_bonus = min(20, len(plan.features) * 2)
        value_score = min(100.0, base_score + feature_bonus)

        cost_per_user = None
        if plan.max_users:
            cost_per_user = round_money(annual_cost / plan.max_users)

        analyses.append(PlanAnalysis(
            plan=plan,
            effective_monthly_rate=round_money(effective_monthly),
            annual_cost=round_money(annual_cost),
            value_score=round_money(value_score, 1),
            cost_per_user=cost_per_user,
        ))

    recommended = analyses[0]
    for analysis in analyses[1:]:
        if analysis.value_score > recommended.value_score:
            recommended = analysis

    annual_costs = [a.annual_cost for a in analyses]

    return PlanComparisonResult(
        plans=tuple(analyses),
        recommended_plan=recommended,
        max_savings=round_money(max(annual_costs) - min(annual_costs)),
    )


def calculate_proration_amount(
    amount: float,
    days_used: float,
    total_days: float,
) -> ProrationResult:
    """
    Linear proration of a period charge.

        calculate_proration_amount(100, 15, 30).prorated_amount -> 50.0
    """
    if not all(is_valid_amount(v) for v in (amount, days_used, total_days)):
        raise MonieError("Amount, days used, and total days must be valid numbers")
    if amount < 0:
        raise MonieError("Amount cannot be negative")
    if days_used < 0 or total_days <= 0:
        raise MonieError("Days used cannot be negative and total days must be positive")
    if days_used > total_days:
        raise MonieError("Days used cannot exceed total days")

    return ProrationResult(
        prorated_amount=round_money(amount * days_used / total_days),
        full_amount=round_money(amount),
        days_used=_whole(days_used),
        total_days=_whole(total_days),
        usage_percentage=round_money(days_used / total_days * 100),
    )


def calculate_upgrade_credit(
    old_plan: SubscriptionPlan,
    new_plan: SubscriptionPlan,
    days_remaining: float,
) -> UpgradeCreditResult:
    """
    Credit for the unused part of the old plan against the new plan's
    prorated cost, over a standard 30-day month.

    days_remaining must lie in [0, 31]; 31 is clamped to 30.
    """
    if old_plan is None or new_plan is None:
        raise MonieError("Both old and new plans must be provided")
    if not is_valid_amount(old_plan.monthly_amount) or not is_valid_amount(new_plan.monthly_amount):
        raise MonieError("Both plans must have valid monthly amounts")
    if not is_valid_amount(days_remaining) or not 0 <= days_remaining <= MAX_DAYS_IN_MONTH:
        raise MonieError(f"Days remaining must be between 0 and {MAX_DAYS_IN_MONTH}")

    effective_days = min(days_remaining, ASSUMED_DAYS_IN_MONTH)
    if effective_days != days_remaining:
        logger.debug("upgrade_days_clamped", days_remaining=days_remaining, clamped_to=effective_days)

    old_remaining = old_plan.monthly_amount * effective_days / ASSUMED_DAYS_IN_MONTH
    new_cost = new_plan.monthly_amount * effective_days / ASSUMED_DAYS_IN_MONTH
    credit = old_remaining

    return UpgradeCreditResult(
        credit_amount=round_money(credit),
        old_plan_remaining_value=round_money(old_remaining),
        new_plan_prorated_cost=round_money(new_cost),
        net_amount_due=round_money(new_cost - credit),
        days_remaining=_whole(effective_days),
    )


def calculate_annual_equivalent(
    amount: float,
    frequency: Union[PaymentFrequency, str],
) -> AnnualEquivalentResult:
    """calculate_annual_equivalent(500, "monthly").annual_amount -> 6000.0"""
    _check_non_negative_amount(amount)
    freq = _coerce_frequency(frequency)
    per_year = PAYMENTS_PER_YEAR[freq]

    return AnnualEquivalentResult(
        annual_amount=round_money(amount * per_year),
        original_amount=round_money(amount),
        frequency=freq,
        payments_per_year=per_year,
    )


def calculate_next_payment_date(
    start_date: Union[date, datetime],
    frequency: Union[PaymentFrequency, str],
) -> Union[date, datetime]:
    """
    Next billing date after start_date.

    Month-based frequencies clamp to the end of the month:
    2024-01-31 + monthly -> 2024-02-29.
    """
    if not isinstance(start_date, date):
        raise MonieError("Start date must be a valid date or datetime")
    freq = _coerce_frequency(frequency)

    days, months = _CALENDAR_STEP[freq]
    if months:
        return _add_months(start_date, months)
    return start_date + timedelta(days=days)


def calculate_total_recurring_cost(
    amount: float,
    frequency: Union[PaymentFrequency, str],
    duration: float,
) -> RecurringCostResult:
    """
    Total cost of a recurring charge over `duration` months.

        calculate_total_recurring_cost(100, "monthly", 24).total_cost -> 2400.0
    """
    if not is_valid_amount(amount) or not is_valid_amount(duration):
        raise MonieError("Amount and duration must be valid numbers")
    if amount < 0:
        raise MonieError("Amount cannot be negative")
    if duration <= 0:
        raise MonieError("Duration must be positive")
    freq = _coerce_frequency(frequency)

    number_of_payments = _whole(duration * PAYMENTS_PER_MONTH[freq])

    return RecurringCostResult(
        total_cost=round_money(amount * number_of_payments),
        number_of_payments=number_of_payments,
        amount_per_period=round_money(amount),
        frequency=freq,
        duration=round_money(duration),
    )
