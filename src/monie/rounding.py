"""
rounding.py — Rounding primitives

================================================================================
DESIGN PRINCIPLES
================================================================================

1. A SINGLE ROUNDING POINT
   Every operation in the library (arithmetic, loans, subscriptions) goes
   through round_money(). Chains of calculations do not pick up
   floating-point noise beyond money precision (2 decimals by default).

2. SCALE -> INTEGER -> SCALE
   The amount is multiplied by 10^precision, rounded to an integer with the
   chosen strategy, and scaled back. The strategy always works on a single
   number, and that is where the decision is made, once.

3. SYMMETRY
   Negative amounts round symmetrically: the magnitude is rounded and the
   sign is kept. round_money(-2.345) == -round_money(2.345).
   FLOOR and CEIL stay directional.

4. IEEE 754 TOLERANCE
   2.125 * 100 is 212.49999999999997. Without a tolerance, banker's
   rounding would never see the exact "half". The comparison uses
   BANKERS_EPSILON; FLOOR/CEIL/TRUNCATE snap values closer than
   SNAP_EPSILON to the nearest integer.

5. FINITE SCALING
   A finite amount can still overflow once scaled (1e307 * 100). That is
   reported as MonieError, never as OverflowError.

================================================================================
STRATEGIES
================================================================================

- NEAREST:     half away from zero (2.5 -> 3, -2.5 -> -3)
- FLOOR:       towards -infinity
- CEIL:        towards +infinity
- TRUNCATE:    towards zero
- BANKERS:     half to even (2.5 -> 2, 3.5 -> 4), minimises bias
- BANKERS_ODD: half to odd (2.5 -> 3, 3.5 -> 3)

================================================================================
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Final

from ._guards import is_non_negative_int, require_amount
from .errors import MonieError


# Default money precision (cents)
DEFAULT_PRECISION: Final[int] = 2

# Tolerance for recognising an exact "half" after scaling
BANKERS_EPSILON: Final[float] = 1e-9

# Tolerance for snapping near-integer scaled values to the integer
SNAP_EPSILON: Final[float] = 1e-9


# ==============================================================================
# ROUNDING STRATEGIES
# ==============================================================================

class RoundingMode(str, Enum):
    """
    Rounding strategies.

    A str Enum: round_money(x, 2, "floor") and
    round_money(x, 2, RoundingMode.FLOOR) are equivalent.
    """
    NEAREST = "round"
    FLOOR = "floor"
    CEIL = "ceil"
    TRUNCATE = "truncate"
    BANKERS = "bankers"
    BANKERS_ODD = "bankers-odd"


class BankersMode(str, Enum):
    """Tie-break rule for banker's rounding."""
    HALF_EVEN = "half-even"
    HALF_ODD = "half-odd"


def _snap(v: float) -> float:
    nearest = round(v)
    if abs(v - nearest) < SNAP_EPSILON:
        return float(nearest)
    return v


def _half_away(v: float) -> int:
    magnitude = math.floor(abs(v) + 0.5)
    return -magnitude if v < 0 else magnitude


def _half_to_parity(v: float, even: bool) -> int:
    lower = math.floor(v)
    if abs((v - lower) - 0.5) < BANKERS_EPSILON:
        lower_is_even = lower % 2 == 0
        if lower_is_even == even:
            return lower
        return lower + 1
    return _half_away(v)


def apply_rounding(value: float, mode: RoundingMode) -> int:
    """Apply the rounding strategy and return an integer."""

    def _floor(v: float) -> int:
        return math.floor(_snap(v))

    def _ceil(v: float) -> int:
        return math.ceil(_snap(v))

    def _truncate(v: float) -> int:
        return math.trunc(_snap(v))

    strategies = {
        RoundingMode.NEAREST: _half_away,
        RoundingMode.FLOOR: _floor,
        RoundingMode.CEIL: _ceil,
        RoundingMode.TRUNCATE: _truncate,
        RoundingMode.BANKERS: lambda v: _half_to_parity(v, even=True),
        RoundingMode.BANKERS_ODD: lambda v: _half_to_parity(v, even=False),
    }

    strategy = strategies.get(mode)
    if strategy is None:
        raise MonieError(f"Unknown rounding mode: {mode}")

    return strategy(value)


def _coerce_mode(mode: object) -> RoundingMode:
    try:
        return RoundingMode(mode)
    except ValueError:
        raise MonieError(f"Unknown rounding mode: {mode}") from None


def _require_precision(precision: object, label: str = "precision") -> int:
    if not is_non_negative_int(precision):
        raise MonieError(
            f"Invalid {label}: {precision}. Must be a non-negative integer."
        )
    return precision


def _scale(amount: float, precision: int) -> float:
    """amount * 10^precision, which must stay finite to become an integer."""
    try:
        scaled = amount * 10 ** precision
    except OverflowError:
        scaled = math.inf
    if math.isinf(scaled):
        raise MonieError(
            f"Invalid amount: {amount}. Amount is too large to scale to {precision} decimal places."
        )
    return scaled


# ==============================================================================
# PUBLIC API
# ==============================================================================

def round_money(
    amount: float,
    precision: int = DEFAULT_PRECISION,
    mode: RoundingMode | str = RoundingMode.NEAREST,
) -> float:
    """
    Round an amount to `precision` decimals.

    Args:
        amount: finite amount
        precision: decimals (integer >= 0, default 2)
        mode: strategy (default NEAREST)

    Raises:
        MonieError: non-finite or too-large amount, invalid precision, unknown mode

    Examples:
        round_money(123.456)                       -> 123.46
        round_money(123.456, 1)                    -> 123.5
        round_money(123.456, 2, RoundingMode.FLOOR) -> 123.45
    """
    require_amount(amount)
    _require_precision(precision)
    rounding = _coerce_mode(mode)

    return apply_rounding(_scale(amount, precision), rounding) / 10 ** precision


def to_minor_units(amount: float, decimals: int = DEFAULT_PRECISION) -> int:
    """
    Convert major -> minor units (e.g. 12.34 -> 1234), rounding to nearest.

    This is the only place a float becomes an integer: from here on
    (allocation, splitting) the work is done on integers.
    """
    require_amount(amount)
    _require_precision(decimals, "decimal places")
    return apply_rounding(_scale(amount, decimals), RoundingMode.NEAREST)


def round_to_nearest_cent(amount: float) -> float:
    """round_to_nearest_cent(123.456) -> 123.46"""
    return round_money(amount, 2, RoundingMode.NEAREST)


def ceil_to_nearest_cent(amount: float) -> float:
    """ceil_to_nearest_cent(123.451) -> 123.46; 123.00 stays 123.00."""
    return round_money(amount, 2, RoundingMode.CEIL)


def truncate_to_decimal_places(amount: float, places: int) -> float:
    """Truncate without rounding: (123.999, 1) -> 123.9."""
    require_amount(amount)
    _require_precision(places, "decimal places")
    return round_money(amount, places, RoundingMode.TRUNCATE)


def round_to_bankers_rounding(
    amount: float,
    decimal_places: int = DEFAULT_PRECISION,
    mode: BankersMode | str = BankersMode.HALF_EVEN,
) -> float:
    """
    Banker's rounding: ties go to the even (or odd) neighbour.

    When the scaled remainder is exactly 0.5 (within BANKERS_EPSILON) the
    even neighbour wins; otherwise it behaves like NEAREST. Over many
    amounts with a half cent, the upward bias of commercial rounding
    cancels out.

        round_to_bankers_rounding(2.125, 2) -> 2.12
        round_to_bankers_rounding(2.135, 2) -> 2.14
    """
    require_amount(amount)
    _require_precision(decimal_places, "decimal places")
    try:
        tie_break = BankersMode(mode)
    except ValueError:
        raise MonieError(f"Unknown bankers rounding mode: {mode}") from None

    rounding = (
        RoundingMode.BANKERS
        if tie_break is BankersMode.HALF_EVEN
        else RoundingMode.BANKERS_ODD
    )
    return round_money(amount, decimal_places, rounding)
