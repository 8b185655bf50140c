"""Rounding helpers shared by the calculators.

Python's round() is banker's rounding (round(2.5) == 2). Money is rounded
half away from zero here so 0.5 always goes up in magnitude.
"""

import math


def round_to(value: float, decimals: int = 0) -> float:
    """Round to the given number of decimal places, half away from zero.

    Example: round_to(2.125, 2) -> 2.13, round_to(-2.5) -> -3.0
    """
    factor = 10.0 ** int(decimals)
    return math.copysign(math.floor(abs(value) * factor + 0.5), value) / factor


def round_to_dollar(amount: float) -> float:
    """Round to the nearest whole dollar (0.50+ rounds up)."""
    return round_to(amount, 0)


def round_cents(amount: float) -> float:
    """Round to the currency's minor unit (cents)."""
    return round_to(amount, 2)
