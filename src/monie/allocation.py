"""
allocation.py — Splitting amounts

================================================================================
TWO STRATEGIES, TWO GUARANTEES
================================================================================

split_amount(total, n)
    Equal parts. Invariant: sum(parts) == total (to the cent, always).
    The work happens in integer minor units: the base part is the floor of
    total_minor / n, and the shortfall k (0 <= k < n) is handed out one
    cent at a time to the LAST k parts.

        split_amount(100, 3).amounts == [33.33, 33.33, 33.34]

    No part exceeds another by more than one minor unit. Who receives the
    extra cent is not ambiguous: it is a convention, and the convention is
    "the last ones".

distribute_proportionally(total, ratios)
    Weighted parts. Each part is rounded to the cent and the leftover is
    REPORTED in `remainder`, not redistributed:

        sum(amounts) + remainder == total

    With arbitrary ratios the leftover has no "right" owner: the choice is
    left to the caller.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ._guards import is_positive_int, is_valid_amount, require_amount
from .currencies import get_currency
from .errors import MonieError
from .rounding import DEFAULT_PRECISION, round_money, to_minor_units


@dataclass(frozen=True, slots=True)
class SplitResult:
    amounts: list[float]
    total_amount: float
    number_of_parts: int
    remainder: float


@dataclass(frozen=True, slots=True)
class DistributionResult:
    amounts: list[float]
    total_amount: float
    ratios: list[float]
    remainder: float


def split_amount(
    total_amount: float,
    number_of_parts: int,
    currency: Optional[str] = None,
) -> SplitResult:
    """
    Split the amount into n parts that sum exactly to the total.

    Args:
        total_amount: amount to split (may be negative)
        number_of_parts: number of parts (integer > 0)
        currency: when given, use the currency decimals (JPY=0, BTC=8)

    Raises:
        MonieError: non-finite amount, n not a positive integer, unknown currency
    """
    require_amount(total_amount, "total amount")
    if not is_positive_int(number_of_parts):
        raise MonieError(
            f"Invalid number of parts: {number_of_parts}. Must be a positive integer."
        )
    decimals = get_currency(currency).decimals if currency is not None else DEFAULT_PRECISION

    total_minor = to_minor_units(total_amount, decimals)
    base = total_minor // number_of_parts
    shortfall = total_minor - base * number_of_parts   # 0 <= shortfall < n

    first_bumped = number_of_parts - shortfall
    minor_parts = [
        base + (1 if i >= first_bumped else 0)
        for i in range(number_of_parts)
    ]

    multiplier = 10 ** decimals
    amounts = [m / multiplier for m in minor_parts]

    # Sub-minor-unit residue (e.g. 100.005): the parts cover total_minor
    remainder = round_money(total_amount - total_minor / multiplier, decimals)

    return SplitResult(
        amounts=amounts,
        total_amount=total_amount,
        number_of_parts=number_of_parts,
        remainder=remainder,
    )


def distribute_proportionally(
    total_amount: float,
    ratios: Sequence[float],
) -> DistributionResult:
    """
    Distribute the amount in proportion to the ratios.

        distribute_proportionally(100, [1, 2, 1]).amounts == [25.0, 50.0, 25.0]

    Raises:
        MonieError: empty list, negative or non-finite ratio, ratios summing to zero
    """
    require_amount(total_amount, "total amount")
    if isinstance(ratios, (str, bytes)) or not isinstance(ratios, Sequence) or len(ratios) == 0:
        raise MonieError("Ratios must be a non-empty sequence")

    for ratio in ratios:
        if not is_valid_amount(ratio) or ratio < 0:
            raise MonieError(
                f"Invalid ratio: {ratio}. All ratios must be non-negative numbers."
            )

    total_ratio = sum(ratios)
    if total_ratio == 0:
        raise MonieError("Sum of ratios cannot be zero")

    amounts = [round_money(total_amount * r / total_ratio) for r in ratios]
    remainder = round_money(total_amount - sum(amounts))

    return DistributionResult(
        amounts=amounts,
        total_amount=total_amount,
        ratios=list(ratios),
        remainder=remainder,
    )
