"""
monie — Money utilities: rounding, arithmetic, loans, billing, formatting

Stateless, deterministic functions over plain float amounts. Every operation
validates its inputs first and raises MonieError (a ValueError) on bad input;
results are frozen dataclasses or rounded floats.

================================================================================
QUICK START
================================================================================

Arithmetic without floating-point noise:

    from monie import add_money, split_amount, distribute_proportionally

    add_money(0.1, 0.2)                              # 0.3
    split_amount(100, 3).amounts                     # [33.33, 33.33, 33.34]
    distribute_proportionally(100, [1, 2, 1]).amounts  # [25.0, 50.0, 25.0]

Loans:

    from monie import calculate_monthly_payment, generate_amortization_schedule

    calculate_monthly_payment(100_000, 5, 360).monthly_payment   # 536.82
    schedule = generate_amortization_schedule(10_000, 6, 12)
    schedule.payments[-1].remaining_balance                      # 0.0

Display:

    from monie import format_money, format_percentage

    format_money(1234.56, "USD")            # "$1,234.56"
    format_money(1234.56, "EUR", "de-DE")   # "€1.234,56"
    format_percentage(0.25).formatted       # "25.00%"

================================================================================
"""

import logging

from .errors import MonieError
from .currencies import Currency, get_currency, is_valid_currency

from .rounding import (
    RoundingMode,
    BankersMode,
    round_money,
    to_minor_units,
    round_to_nearest_cent,
    ceil_to_nearest_cent,
    truncate_to_decimal_places,
    round_to_bankers_rounding,
)

from .arithmetic import (
    InterestResult,
    PercentageResult,
    add_money,
    subtract_money,
    multiply_money,
    divide_money,
    calculate_tip,
    calculate_tax,
    calculate_discount,
    calculate_simple_interest,
    calculate_compound_interest,
    calculate_percentage_of_total,
)

from .allocation import (
    SplitResult,
    DistributionResult,
    split_amount,
    distribute_proportionally,
)

from .loans import (
    RiskLevel,
    LoanPaymentResult,
    LoanBalanceResult,
    AmortizationPayment,
    AmortizationSchedule,
    CreditUtilizationResult,
    MinimumPaymentResult,
    PayoffTimeResult,
    calculate_monthly_payment,
    calculate_loan_balance,
    calculate_total_interest,
    generate_amortization_schedule,
    calculate_credit_utilization,
    calculate_minimum_payment,
    calculate_payoff_time,
)

from .subscription import (
    PaymentFrequency,
    SubscriptionPlan,
    calculate_subscription_value,
    compare_subscription_plans,
    calculate_proration_amount,
    calculate_upgrade_credit,
    calculate_annual_equivalent,
    calculate_next_payment_date,
    calculate_total_recurring_cost,
)

from .investment import (
    calculate_roi,
    calculate_annualized_return,
    calculate_dividend_yield,
    calculate_future_value,
)

from .conversion import (
    DEFAULT_RATES,
    get_exchange_rate,
    convert_currency,
    convert_with_fee,
    bulk_convert,
)

from .formatting import (
    FormatCurrencyOptions,
    FormatPercentageOptions,
    FormattedCurrency,
    FormattedPercentage,
    format_number,
    format_currency,
    format_money,
    format_cents,
    format_compact_currency,
    format_percentage,
)

from .localization import (
    LOCALE_CURRENCY_MAP,
    LocaleCurrencyInfo,
    LocaleFormatOptions,
    format_currency_by_locale,
    get_locale_currency_info,
    format_with_grouping,
    format_decimal_places,
)

from .validation import (
    Money,
    ParsedAmount,
    ParsedCurrency,
    is_valid_amount,
    is_positive_amount,
    is_within_range,
    validate_money_object,
    parse_amount,
    parse_currency_string,
    normalize_amount,
    parse_formatted_currency,
)

from .utils import (
    format_thousands,
    format_to_hundreds,
    remove_formatting_from_number,
    convert_to_words,
    format_account_number,
)

# Silent unless the host application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.1.1"
__license__ = "MIT"

__all__ = [
    # Errors & currencies
    "MonieError",
    "Currency",
    "get_currency",
    "is_valid_currency",
    # Rounding
    "RoundingMode",
    "BankersMode",
    "round_money",
    "to_minor_units",
    "round_to_nearest_cent",
    "ceil_to_nearest_cent",
    "truncate_to_decimal_places",
    "round_to_bankers_rounding",
    # Arithmetic
    "InterestResult",
    "PercentageResult",
    "add_money",
    "subtract_money",
    "multiply_money",
    "divide_money",
    "calculate_tip",
    "calculate_tax",
    "calculate_discount",
    "calculate_simple_interest",
    "calculate_compound_interest",
    "calculate_percentage_of_total",
    # Allocation
    "SplitResult",
    "DistributionResult",
    "split_amount",
    "distribute_proportionally",
    # Loans & credit
    "RiskLevel",
    "LoanPaymentResult",
    "LoanBalanceResult",
    "AmortizationPayment",
    "AmortizationSchedule",
    "CreditUtilizationResult",
    "MinimumPaymentResult",
    "PayoffTimeResult",
    "calculate_monthly_payment",
    "calculate_loan_balance",
    "calculate_total_interest",
    "generate_amortization_schedule",
    "calculate_credit_utilization",
    "calculate_minimum_payment",
    "calculate_payoff_time",
    # Subscription
    "PaymentFrequency",
    "SubscriptionPlan",
    "calculate_subscription_value",
    "compare_subscription_plans",
    "calculate_proration_amount",
    "calculate_upgrade_credit",
    "calculate_annual_equivalent",
    "calculate_next_payment_date",
    "calculate_total_recurring_cost",
    # Investment
    "calculate_roi",
    "calculate_annualized_return",
    "calculate_dividend_yield",
    "calculate_future_value",
    # Conversion
    "DEFAULT_RATES",
    "get_exchange_rate",
    "convert_currency",
    "convert_with_fee",
    "bulk_convert",
    # Formatting
    "FormatCurrencyOptions",
    "FormatPercentageOptions",
    "FormattedCurrency",
    "FormattedPercentage",
    "format_number",
    "format_currency",
    "format_money",
    "format_cents",
    "format_compact_currency",
    "format_percentage",
    # Localization
    "LOCALE_CURRENCY_MAP",
    "LocaleCurrencyInfo",
    "LocaleFormatOptions",
    "format_currency_by_locale",
    "get_locale_currency_info",
    "format_with_grouping",
    "format_decimal_places",
    # Validation
    "Money",
    "ParsedAmount",
    "ParsedCurrency",
    "is_valid_amount",
    "is_positive_amount",
    "is_within_range",
    "validate_money_object",
    "parse_amount",
    "parse_currency_string",
    "normalize_amount",
    "parse_formatted_currency",
    # Utils
    "format_thousands",
    "format_to_hundreds",
    "remove_formatting_from_number",
    "convert_to_words",
    "format_account_number",
]
