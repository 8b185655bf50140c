"""Built-in functions available to every formula.

All functions take and return plain floats. Rates are per period, as
decimals (0.005 for 6% annual paid monthly).
"""

import math

from ..rounding import round_to

# Newton-Raphson settings for rate()
RATE_INITIAL_GUESS = 0.1 / 12
RATE_MAX_ITERATIONS = 100
RATE_TOLERANCE = 0.0001
RATE_STEP = 0.0001
RATE_MIN = 0.0001
RATE_MAX = 1.0


def pmt(rate: float, nper: float, pv: float) -> float:
    """Payment for a loan: pv * rate(1 + rate)^nper / ((1 + rate)^nper - 1)."""
    if rate == 0:
        return pv / nper
    return pv * rate / (1 - (1 + rate) ** -nper)


def pv(rate: float, nper: float, payment: float) -> float:
    """Present value of a payment stream: payment * (1 - (1 + rate)^-nper) / rate."""
    if rate == 0:
        return payment * nper
    return payment * ((1 - (1 + rate) ** -nper) / rate)


def fv(rate: float, nper: float, payment: float, present_value: float) -> float:
    """Future value: pv(1 + rate)^nper + payment * ((1 + rate)^nper - 1) / rate."""
    if rate == 0:
        return present_value + payment * nper
    factor = (1 + rate) ** nper
    return present_value * factor + payment * ((factor - 1) / rate)


def solve_rate(nper: float, payment: float, present_value: float) -> float:
    """Per-period rate at which present_value amortizes to payment over nper.

    Newton-Raphson from a 10%/12 guess with a forward-difference derivative.
    The guess is clamped to [0.0001, 1.0] every iteration and the loop stops
    after 100 iterations, so pathological inputs return a clamped
    approximation rather than diverging.
    """
    rate = RATE_INITIAL_GUESS

    for _ in range(RATE_MAX_ITERATIONS):
        factor = (1 + rate) ** nper
        pmt_calc = present_value * (rate * factor) / (factor - 1)
        diff = pmt_calc - payment

        if abs(diff) < RATE_TOLERANCE:
            break

        factor_h = (1 + rate + RATE_STEP) ** nper
        pmt_h = present_value * ((rate + RATE_STEP) * factor_h) / (factor_h - 1)
        derivative = (pmt_h - pmt_calc) / RATE_STEP

        if abs(derivative) > RATE_TOLERANCE:
            rate -= diff / derivative

        rate = min(max(rate, RATE_MIN), RATE_MAX)

    return rate


def _round(value: float, decimals: float = 0) -> float:
    return round_to(value, int(decimals))


def _min(a: float, b: float, *rest: float) -> float:
    return float(min(a, b, *rest))


def _max(a: float, b: float, *rest: float) -> float:
    return float(max(a, b, *rest))


def _abs(value: float) -> float:
    return float(abs(value))


def _floor(value: float) -> float:
    return float(math.floor(value))


def _ceil(value: float) -> float:
    return float(math.ceil(value))


PRIMITIVES = {
    "pmt": pmt,
    "pv": pv,
    "fv": fv,
    "rate": solve_rate,
    "round": _round,
    "min": _min,
    "max": _max,
    "abs": _abs,
    "pow": math.pow,
    "sqrt": math.sqrt,
    "floor": _floor,
    "ceil": _ceil,
}
