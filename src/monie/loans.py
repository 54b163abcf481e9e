"""
loans.py — Loan amortization engine and credit utilities

================================================================================
AMORTIZATION ENGINE
================================================================================

A fixed-rate loan is walked as a sequence of discrete monthly periods:

    payment  = P * r * (1+r)^n / ((1+r)^n - 1)        r = rate / 100 / 12
    interest_k   = round(balance_{k-1} * r)
    principal_k  = min(round(payment - interest_k), balance_{k-1})
    balance_k    = round(max(0, balance_{k-1} - principal_k))

Every period is rounded to the cent, so after hundreds of periods the
formula-derived principal portions no longer add up to the original
principal. The FINAL period therefore pays exactly the balance carried into
it, not the formula principal:

    principal_n = balance_{n-1}      =>  balance_n == 0

INVARIANTS (generate_amortization_schedule):
1. payments[-1].remaining_balance == 0
2. sum(p.principal_amount for p in payments) == principal (to the cent)
3. remaining_balance never goes below zero

================================================================================
FAILURE POLICY
================================================================================

Every input is validated before any computation. There is no partial
result: a call returns a complete, internally consistent value or raises
MonieError.

================================================================================
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Final

from ._guards import growth_factor, is_non_negative_int, is_positive_int, is_valid_amount
from .errors import MonieError
from .logging_config import get_logger
from .rounding import round_money

logger = get_logger(__name__)


# Fixed floor added to the interest portion of a card minimum payment
MINIMUM_PAYMENT_FLOOR: Final[float] = 15.0

# Credit utilization tiers (percent, inclusive upper bounds)
LOW_RISK_UTILIZATION: Final[float] = 10.0
MEDIUM_RISK_UTILIZATION: Final[float] = 30.0

MONTHS_PER_YEAR: Final[int] = 12


# ==============================================================================
# RESULTS
# ==============================================================================

@dataclass(frozen=True, slots=True)
class LoanPaymentResult:
    """
    Level payment of a fully amortizing loan.

    total_amount == monthly_payment * term_months (rounded),
    total_interest == total_amount - principal.
    """
    monthly_payment: float
    principal: float
    rate: float
    term_months: int
    total_amount: float
    total_interest: float


@dataclass(frozen=True, slots=True)
class LoanBalanceResult:
    remaining_balance: float
    principal_paid: float
    interest_paid: float
    payments_made: int
    payments_remaining: int


@dataclass(frozen=True, slots=True)
class AmortizationPayment:
    payment_number: int
    payment_amount: float
    principal_amount: float
    interest_amount: float
    remaining_balance: float


@dataclass(frozen=True, slots=True)
class AmortizationSchedule:
    payments: tuple[AmortizationPayment, ...]
    summary: LoanPaymentResult

    def __len__(self) -> int:
        return len(self.payments)


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class CreditUtilizationResult:
    utilization_percentage: float
    used_credit: float
    total_credit: float
    available_credit: float
    risk_level: RiskLevel


@dataclass(frozen=True, slots=True)
class MinimumPaymentResult:
    minimum_payment: float
    balance: float
    interest_rate: float
    minimum_rate: float
    interest_portion: float
    principal_portion: float


@dataclass(frozen=True, slots=True)
class PayoffTimeResult:
    months_to_payoff: int
    years_to_payoff: float
    total_interest_paid: float
    total_amount_paid: float
    monthly_payment: float


# ==============================================================================
# VALIDATION
# ==============================================================================

def _check_positive(value: object, label: str) -> None:
    if not is_valid_amount(value) or value <= 0:
        raise MonieError(
            f"Invalid {label}: {value}. {label.capitalize()} must be a positive number."
        )


def _check_non_negative(value: object, label: str) -> None:
    if not is_valid_amount(value) or value < 0:
        raise MonieError(
            f"Invalid {label}: {value}. {label.capitalize()} must be a non-negative number."
        )


def _check_loan(principal: object, rate: object, term_months: object) -> None:
    _check_positive(principal, "principal")
    _check_non_negative(rate, "rate")
    if not is_positive_int(term_months):
        raise MonieError(
            f"Invalid term: {term_months}. Term must be a positive integer."
        )


def _monthly_rate(rate: float) -> float:
    return rate / 100 / MONTHS_PER_YEAR


# ==============================================================================
# AMORTIZATION
# ==============================================================================

def calculate_monthly_payment(
    principal: float,
    rate: float,
    term_months: int,
) -> LoanPaymentResult:
    """
    Level monthly payment for a loan.

    Args:
        principal: amount borrowed (> 0)
        rate: annual interest rate in percent (>= 0)
        term_months: number of monthly payments (positive int)

    A zero rate is the degenerate case of the annuity formula (0/0); the
    payment is then principal / term_months and no interest accrues.

    Example:
        >>> calculate_monthly_payment(100000, 5, 360).monthly_payment
        536.82
    """
    _check_loan(principal, rate, term_months)

    if rate == 0:
        monthly_payment = round_money(principal / term_months)
        return LoanPaymentResult(
            monthly_payment=monthly_payment,
            principal=principal,
            rate=rate,
            term_months=term_months,
            total_amount=round_money(monthly_payment * term_months),
            total_interest=0.0,
        )

    r = _monthly_rate(rate)
    growth = growth_factor(1 + r, term_months)
    monthly_payment = round_money(principal * r * growth / (growth - 1))
    total_amount = round_money(monthly_payment * term_months)

    return LoanPaymentResult(
        monthly_payment=monthly_payment,
        principal=principal,
        rate=rate,
        term_months=term_months,
        total_amount=total_amount,
        total_interest=round_money(total_amount - principal),
    )


def calculate_loan_balance(
    principal: float,
    rate: float,
    term_months: int,
    payments_made: int,
) -> LoanBalanceResult:
    """
    Remaining balance after `payments_made` level payments (closed form).

        B_k = P * ((1+r)^n - (1+r)^k) / ((1+r)^n - 1)
    """
    _check_loan(principal, rate, term_months)
    if not is_non_negative_int(payments_made) or payments_made > term_months:
        raise MonieError(
            f"Invalid payments made: {payments_made}. Must be between 0 and {term_months}."
        )

    if payments_made == 0:
        return LoanBalanceResult(
            remaining_balance=principal,
            principal_paid=0.0,
            interest_paid=0.0,
            payments_made=0,
            payments_remaining=term_months,
        )

    monthly_payment = calculate_monthly_payment(principal, rate, term_months).monthly_payment

    if rate == 0:
        principal_paid = round_money(monthly_payment * payments_made)
        return LoanBalanceResult(
            remaining_balance=max(0.0, round_money(principal - principal_paid)),
            principal_paid=principal_paid,
            interest_paid=0.0,
            payments_made=payments_made,
            payments_remaining=term_months - payments_made,
        )

    r = _monthly_rate(rate)
    growth_n = growth_factor(1 + r, term_months)
    growth_k = growth_factor(1 + r, payments_made)
    balance = principal * (growth_n - growth_k) / (growth_n - 1)

    remaining_balance = round_money(max(0.0, balance))
    principal_paid = round_money(principal - remaining_balance)
    total_paid = round_money(monthly_payment * payments_made)

    return LoanBalanceResult(
        remaining_balance=remaining_balance,
        principal_paid=principal_paid,
        interest_paid=round_money(total_paid - principal_paid),
        payments_made=payments_made,
        payments_remaining=term_months - payments_made,
    )


def calculate_total_interest(principal: float, rate: float, term_months: int) -> float:
    """Total interest paid over the life of the loan."""
    return calculate_monthly_payment(principal, rate, term_months).total_interest


def generate_amortization_schedule(
    principal: float,
    rate: float,
    term_months: int,
) -> AmortizationSchedule:
    """
    Full period-by-period schedule.

    The last period absorbs whatever balance the per-period rounding left
    behind, so the schedule always closes at exactly zero.
    """
    summary = calculate_monthly_payment(principal, rate, term_months)
    r = _monthly_rate(rate)

    payments = []
    balance = principal

    for number in range(1, term_months + 1):
        interest = 0.0 if rate == 0 else round_money(balance * r)

        if number == term_months:
            principal_portion = balance
        else:
            principal_portion = min(round_money(summary.monthly_payment - interest), balance)

        balance = round_money(max(0.0, balance - principal_portion))

        payments.append(AmortizationPayment(
            payment_number=number,
            payment_amount=round_money(principal_portion + interest),
            principal_amount=principal_portion,
            interest_amount=interest,
            remaining_balance=balance,
        ))

    final = payments[-1]
    logger.debug(
        "amortization_schedule_generated",
        principal=principal,
        rate=rate,
        term_months=term_months,
        monthly_payment=summary.monthly_payment,
        final_payment=final.payment_amount,
    )

    return AmortizationSchedule(payments=tuple(payments), summary=summary)


# ==============================================================================
# CREDIT & PAYOFF
# ==============================================================================

def calculate_credit_utilization(
    used_credit: float,
    total_credit: float,
) -> CreditUtilizationResult:
    """
    Share of available credit in use, with a risk tier.

    <= 10% low, <= 30% medium, above that high.
    """
    if not is_valid_amount(used_credit) or used_credit < 0:
        raise MonieError(
            f"Invalid used credit: {used_credit}. Must be a non-negative number."
        )
    if not is_valid_amount(total_credit) or total_credit <= 0:
        raise MonieError(
            f"Invalid total credit: {total_credit}. Must be a positive number."
        )
    if used_credit > total_credit:
        raise MonieError(
            f"Used credit ({used_credit}) cannot exceed total credit ({total_credit})."
        )

    utilization = round_money(used_credit / total_credit * 100)

    if utilization <= LOW_RISK_UTILIZATION:
        risk = RiskLevel.LOW
    elif utilization <= MEDIUM_RISK_UTILIZATION:
        risk = RiskLevel.MEDIUM
    else:
        risk = RiskLevel.HIGH

    return CreditUtilizationResult(
        utilization_percentage=utilization,
        used_credit=used_credit,
        total_credit=total_credit,
        available_credit=round_money(total_credit - used_credit),
        risk_level=risk,
    )


def calculate_minimum_payment(
    balance: float,
    rate: float,
    minimum_rate: float,
) -> MinimumPaymentResult:
    """
    Card-issuer style minimum payment.

    The higher of:
    - minimum_rate percent of the balance
    - this month's interest plus MINIMUM_PAYMENT_FLOOR
    """
    _check_non_negative(balance, "balance")
    _check_non_negative(rate, "rate")
    if not is_valid_amount(minimum_rate) or minimum_rate <= 0 or minimum_rate > 100:
        raise MonieError(
            f"Invalid minimum rate: {minimum_rate}. Must be between 0 and 100."
        )

    interest_portion = round_money(balance * _monthly_rate(rate))
    based_on_rate = round_money(balance * minimum_rate / 100)
    minimum_payment = round_money(max(based_on_rate, interest_portion + MINIMUM_PAYMENT_FLOOR))

    return MinimumPaymentResult(
        minimum_payment=minimum_payment,
        balance=balance,
        interest_rate=rate,
        minimum_rate=minimum_rate,
        interest_portion=interest_portion,
        principal_portion=round_money(minimum_payment - interest_portion),
    )


def calculate_payoff_time(balance: float, payment: float, rate: float) -> PayoffTimeResult:
    """
    Months needed to clear `balance` paying `payment` each month.

        n = ceil(-ln(1 - B*r/PMT) / ln(1 + r))

    Raises:
        MonieError: if the payment does not exceed the first month's interest,
            since the balance would never shrink
    """
    _check_positive(balance, "balance")
    _check_positive(payment, "payment")
    _check_non_negative(rate, "rate")

    r = _monthly_rate(rate)
    monthly_interest = balance * r
    if payment <= monthly_interest:
        raise MonieError(
            f"Payment ({payment}) must be greater than monthly interest "
            f"({round_money(monthly_interest)})."
        )

    if rate == 0:
        months = math.ceil(balance / payment)
    else:
        months = math.ceil(-math.log(1 - balance * r / payment) / math.log(1 + r))

    total_paid = round_money(payment * months)
    total_interest = 0.0 if rate == 0 else round_money(total_paid - balance)

    return PayoffTimeResult(
        months_to_payoff=months,
        years_to_payoff=round_money(months / MONTHS_PER_YEAR),
        total_interest_paid=total_interest,
        total_amount_paid=total_paid,
        monthly_payment=payment,
    )
