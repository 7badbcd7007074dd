"""
Numeric helpers for confidence and score calculations.

Confidence formulas across the application round half away from zero
(2.5 → 3), unlike Python's built-in `round` which rounds half to even.
Centralizing them here keeps every score reproducible.
"""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves rounding up.

    Args:
        value: Value to round

    Returns:
        Nearest integer (92.5 → 93, -0.5 → 0)
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    """
    Constrain a value to [lower, upper].

    Args:
        value: Value to constrain
        lower: Minimum allowed value
        upper: Maximum allowed value

    Returns:
        lower if value < lower, upper if value > upper, value otherwise
    """
    return max(lower, min(upper, value))


def percentage(part: float, total: float) -> float:
    """Share of `part` in `total` as 0-100, 0 when total is 0."""
    if not total:
        return 0.0
    return part / total * 100
