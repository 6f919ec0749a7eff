"""Rounding helpers."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with .5 going up.

    Python's round() uses banker's rounding (round(40.5) == 40); displayed
    probabilities and chart values round halves up (40.5 -> 41).
    """
    return int(math.floor(value + 0.5))


def clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(value, high))
