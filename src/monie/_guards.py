"""Input checks shared by every calculation module."""

from __future__ import annotations

import math

from .currencies import is_valid_currency
from .errors import MonieError


def is_valid_amount(amount: object) -> bool:
    """
    True for finite ints and floats.

    bool is excluded: True is not an amount, even though Python treats it as 1.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    return math.isfinite(amount)


def is_non_negative_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def is_positive_int(value: object) -> bool:
    return is_non_negative_int(value) and value > 0


def require_amount(amount: object, label: str = "amount") -> float:
    """Raise MonieError unless amount is a finite number."""
    if not is_valid_amount(amount):
        raise MonieError(
            f"Invalid {label}: {amount}. {label[0].upper() + label[1:]} must be a finite number."
        )
    return amount


def require_currency(currency: object) -> None:
    """Validate an optional currency code; None is allowed."""
    if currency is not None and not is_valid_currency(currency):
        raise MonieError(f"Invalid currency: {currency}")


def growth_factor(base: float, exponent: float) -> float:
    """base ** exponent in float arithmetic; overflow becomes MonieError."""
    try:
        return float(base) ** exponent
    except OverflowError as e:
        raise MonieError(
            f"Growth factor is too large to represent: {base} ** {exponent}"
        ) from e
