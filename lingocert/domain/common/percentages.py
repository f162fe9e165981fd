"""Integer percentages with round-half-up semantics."""

import math
from fractions import Fraction


def round_half_up(value: Fraction) -> int:
    """Round a non-negative exact value to the nearest integer, ties upward."""
    return math.floor(value + Fraction(1, 2))


def percent_of(part: int, whole: int) -> int:
    """
    Return ``part / whole * 100`` as an integer rounded half-up.

    Computed with exact fractions so 0.5 boundaries never drift
    through floating point error.

    Raises:
        ZeroDivisionError: If whole is zero; callers decide what an
            empty denominator means in their context.
    """
    return round_half_up(Fraction(part * 100, whole))
