"""
test_loans.py — Amortization engine and credit utilities

================================================================================
INVARIANTS UNDER TEST
================================================================================

1. The schedule closes at exactly zero
2. Principal portions add up to the principal, to the cent
3. Balances never go negative

================================================================================
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from monie import (
    MonieError,
    RiskLevel,
    calculate_credit_utilization,
    calculate_loan_balance,
    calculate_minimum_payment,
    calculate_monthly_payment,
    calculate_payoff_time,
    calculate_total_interest,
    generate_amortization_schedule,
)


class TestMonthlyPayment:

    def test_thirty_year_mortgage(self):
        result = calculate_monthly_payment(100_000, 5, 360)
        assert result.monthly_payment == 536.82
        assert result.total_interest > 90_000
        assert result.total_amount == 193_255.2

    def test_zero_rate(self):
        result = calculate_monthly_payment(12_000, 0, 12)
        assert result.monthly_payment == 1000.0
        assert result.total_interest == 0.0

    def test_total_interest_shortcut(self):
        assert calculate_total_interest(100_000, 5, 360) == 93_255.2

    @pytest.mark.parametrize("principal, rate, term", [
        (0, 5, 12),
        (-1000, 5, 12),
        (1000, -1, 12),
        (1000, 5, 0),
        (1000, 5, 12.5),
        (float("nan"), 5, 12),
    ])
    def test_rejects_bad_inputs(self, principal, rate, term):
        with pytest.raises(MonieError):
            calculate_monthly_payment(principal, rate, term)

    def test_growth_overflow_is_monie_error(self):
        with pytest.raises(MonieError, match="too large"):
            calculate_monthly_payment(1000, 1_000_000, 360)

    def test_term_message(self):
        with pytest.raises(MonieError, match="Term must be a positive integer"):
            calculate_monthly_payment(1000, 5, 0)


class TestLoanBalance:

    def test_no_payments_made(self):
        result = calculate_loan_balance(100_000, 5, 360, 0)
        assert result.remaining_balance == 100_000
        assert result.payments_remaining == 360

    def test_fully_paid(self):
        assert calculate_loan_balance(100_000, 5, 360, 360).remaining_balance == 0.0

    def test_balance_decreases(self):
        early = calculate_loan_balance(100_000, 5, 360, 12).remaining_balance
        late = calculate_loan_balance(100_000, 5, 360, 120).remaining_balance
        assert 0 < late < early < 100_000

    def test_zero_rate(self):
        result = calculate_loan_balance(12_000, 0, 12, 6)
        assert result.remaining_balance == 6000.0
        assert result.principal_paid == 6000.0
        assert result.interest_paid == 0.0

    def test_too_many_payments(self):
        with pytest.raises(MonieError, match="Invalid payments made"):
            calculate_loan_balance(100_000, 5, 360, 361)


class TestAmortizationSchedule:

    def test_one_year_schedule(self):
        schedule = generate_amortization_schedule(10_000, 6, 12)
        assert len(schedule) == 12
        assert schedule.payments[0].payment_number == 1
        assert schedule.payments[0].interest_amount == 50.0
        assert schedule.payments[-1].remaining_balance == 0.0

    def test_principal_adds_up(self):
        schedule = generate_amortization_schedule(100_000, 5, 360)
        assert sum(round(p.principal_amount * 100) for p in schedule.payments) == 10_000_000

    def test_level_payments_until_the_last(self):
        schedule = generate_amortization_schedule(100_000, 5, 360)
        assert {p.payment_amount for p in schedule.payments[:-1]} == {536.82}
        assert abs(schedule.payments[-1].payment_amount - 536.82) < 5.0

    def test_zero_rate_schedule(self):
        schedule = generate_amortization_schedule(1000, 0, 3)
        assert [p.principal_amount for p in schedule.payments] == [333.33, 333.33, 333.34]
        assert all(p.interest_amount == 0.0 for p in schedule.payments)

    def test_summary_matches_payment(self):
        schedule = generate_amortization_schedule(10_000, 6, 12)
        assert schedule.summary == calculate_monthly_payment(10_000, 6, 12)

    def test_balance_retired_before_the_last_period(self):
        # 0.15 / 9 rounds up to 0.02, so seven payments leave 0.01
        schedule = generate_amortization_schedule(0.15, 0, 9)
        principals = [p.principal_amount for p in schedule.payments]

        assert principals[:7] == [0.02] * 7
        assert principals[7] == 0.01
        assert principals[8] == 0.0
        assert sum(round(p * 100) for p in principals) == 15
        assert all(p.remaining_balance >= 0 for p in schedule.payments)
        assert schedule.payments[7].remaining_balance == 0.0
        assert schedule.payments[-1].remaining_balance == 0.0
        assert schedule.payments[-1].payment_amount == 0.0

    def test_growth_overflow_is_monie_error(self):
        with pytest.raises(MonieError, match="too large"):
            generate_amortization_schedule(1000, 1_000_000, 360)


class TestCredit:

    def test_utilization(self):
        result = calculate_credit_utilization(2500, 10_000)
        assert result.utilization_percentage == 25.0
        assert result.risk_level == "medium"
        assert result.risk_level is RiskLevel.MEDIUM
        assert result.available_credit == 7500.0

    @pytest.mark.parametrize("used, risk", [
        (0, RiskLevel.LOW),
        (1000, RiskLevel.LOW),
        (3000, RiskLevel.MEDIUM),
        (3001, RiskLevel.HIGH),
        (10_000, RiskLevel.HIGH),
    ])
    def test_risk_tiers(self, used, risk):
        assert calculate_credit_utilization(used, 10_000).risk_level is risk

    def test_used_above_total(self):
        with pytest.raises(MonieError, match="cannot exceed total credit"):
            calculate_credit_utilization(11_000, 10_000)

    def test_zero_limit(self):
        with pytest.raises(MonieError, match="Invalid total credit"):
            calculate_credit_utilization(0, 0)

    def test_minimum_payment_floor(self):
        result = calculate_minimum_payment(1000, 18, 2)
        assert result.interest_portion == 15.0
        assert result.minimum_payment == 30.0
        assert result.principal_portion == 15.0

    def test_minimum_payment_rate_based(self):
        assert calculate_minimum_payment(10_000, 18, 2).minimum_payment == 200.0

    def test_minimum_rate_bounds(self):
        with pytest.raises(MonieError, match="Invalid minimum rate"):
            calculate_minimum_payment(1000, 18, 0)


class TestPayoffTime:

    def test_card_payoff(self):
        result = calculate_payoff_time(5000, 100, 18)
        assert result.months_to_payoff == 94
        assert result.years_to_payoff == 7.83
        assert result.total_amount_paid == 9400.0
        assert result.total_interest_paid == 4400.0

    def test_zero_rate(self):
        result = calculate_payoff_time(1000, 300, 0)
        assert result.months_to_payoff == 4
        assert result.total_interest_paid == 0.0

    def test_payment_must_beat_interest(self):
        with pytest.raises(MonieError, match="must be greater than monthly interest"):
            calculate_payoff_time(1000, 10, 12)


# ==============================================================================
# PROPERTY-BASED TESTS
# ==============================================================================

class TestScheduleProperties:

    @given(
        principal=st.integers(min_value=1000, max_value=1_000_000),
        rate_bp=st.integers(min_value=0, max_value=2500),
        term=st.integers(min_value=1, max_value=360),
    )
    @settings(max_examples=150, deadline=None)
    def test_schedule_closes_at_zero(self, principal, rate_bp, term):
        schedule = generate_amortization_schedule(principal, rate_bp / 100, term)

        assert len(schedule) == term
        assert schedule.payments[-1].remaining_balance == 0.0
        assert all(p.remaining_balance >= 0 for p in schedule.payments)
        assert sum(round(p.principal_amount * 100) for p in schedule.payments) == principal * 100
