#!/usr/bin/env python3
"""
basic_usage.py — A tour of monie

Run after `pip install -e .`:

    python examples/basic_usage.py
    python examples/basic_usage.py --debug     # show structlog debug events
"""

import sys
from datetime import date

from monie import (
    FormatCurrencyOptions,
    MonieError,
    SubscriptionPlan,
    add_money,
    calculate_credit_utilization,
    calculate_monthly_payment,
    calculate_next_payment_date,
    calculate_roi,
    calculate_upgrade_credit,
    convert_currency,
    convert_to_words,
    distribute_proportionally,
    format_account_number,
    format_compact_currency,
    format_currency,
    format_money,
    format_percentage,
    generate_amortization_schedule,
    round_to_bankers_rounding,
    split_amount,
)
from monie.logging_config import configure_logging


def banner(title):
    print("=" * 60)
    print(title)
    print("=" * 60)
    print()


def demonstrate_arithmetic():
    banner("ARITHMETIC")

    print(f">>> 0.1 + 0.2            -> {0.1 + 0.2}")
    print(f">>> add_money(0.1, 0.2)  -> {add_money(0.1, 0.2)}")
    print()

    parts = split_amount(100, 3).amounts
    print(f"split_amount(100, 3):   {parts}  (sum {sum(round(p * 100) for p in parts) / 100})")

    weighted = distribute_proportionally(100, [1, 1, 1])
    print(f"distribute(100, 1:1:1): {weighted.amounts}  remainder {weighted.remainder}")

    print(f"banker's 2.125 -> {round_to_bankers_rounding(2.125)}")
    print(f"banker's 2.135 -> {round_to_bankers_rounding(2.135)}")
    print()


def demonstrate_loans():
    banner("LOANS")

    mortgage = calculate_monthly_payment(100_000, 5, 360)
    print(f"30y mortgage, 100,000 at 5%: {format_money(mortgage.monthly_payment, 'USD')}/month")
    print(f"Total interest:              {format_money(mortgage.total_interest, 'USD')}")
    print()

    schedule = generate_amortization_schedule(10_000, 6, 12)
    print(f"{'#':>3} {'payment':>10} {'principal':>10} {'interest':>9} {'balance':>10}")
    for p in schedule.payments:
        print(
            f"{p.payment_number:>3} {p.payment_amount:>10.2f} {p.principal_amount:>10.2f} "
            f"{p.interest_amount:>9.2f} {p.remaining_balance:>10.2f}"
        )
    print()

    credit = calculate_credit_utilization(2500, 10_000)
    print(f"Credit utilization: {credit.utilization_percentage}% ({credit.risk_level.value} risk)")
    print()


def demonstrate_subscriptions():
    banner("SUBSCRIPTIONS")

    basic = SubscriptionPlan(id="basic", name="Basic", monthly_amount=10)
    pro = SubscriptionPlan(id="pro", name="Pro", monthly_amount=25)
    upgrade = calculate_upgrade_credit(basic, pro, 12)
    print(f"Upgrade Basic -> Pro with 12 days left: due {format_money(upgrade.net_amount_due, 'USD')}")
    print(f"Next billing after 2024-01-31: {calculate_next_payment_date(date(2024, 1, 31), 'monthly')}")
    print()


def demonstrate_display():
    banner("DISPLAY")

    print(format_money(1234.56, "USD"))
    print(format_money(1234.56, "EUR", "de-DE"))
    german = FormatCurrencyOptions(locale="de-DE", show_code=True, symbol_position="end")
    print(format_currency(1234.56, "EUR", german).formatted)
    print(format_compact_currency(2_300_000_000, "USD").formatted)
    print(format_percentage(calculate_roi(1000, 1250).roi).formatted)
    print(convert_to_words(1234.56, "USD").words)
    print(format_account_number("1234567890123456").formatted)
    print(f"100 USD in EUR (demo rate): {convert_currency(100, 'USD', 'EUR').converted_amount:.2f}")
    print()


def demonstrate_errors():
    banner("ERRORS")

    for call in (
        lambda: add_money(1, float("nan")),
        lambda: split_amount(100, 0),
        lambda: format_money(1, "XYZ"),
    ):
        try:
            call()
        except MonieError as e:
            print(f"MonieError[{e.code}]: {e}")
    print()


if __name__ == "__main__":
    configure_logging("DEBUG" if "--debug" in sys.argv else "WARNING")

    demonstrate_arithmetic()
    demonstrate_loans()
    demonstrate_subscriptions()
    demonstrate_display()
    demonstrate_errors()
