"""Level-payment amortization.

Formulas (r = annual_rate / 100 / periods_per_year, n = term_periods):

    payment   = P * r(1 + r)^n / ((1 + r)^n - 1)
    principal = PMT * (1 - (1 + r)^-n) / r

Both degrade to the linear form (P / n, PMT * n) at a zero rate.
"""

from typing import Iterable, Iterator

from .errors import InvalidInput
from .rounding import round_cents
from .schemas import AmortizationPayment, ScheduleTotals


def _periodic_rate(annual_rate: float, periods_per_year: int) -> float:
    if annual_rate < 0:
        raise InvalidInput(f"Interest rate must not be negative, got {annual_rate}")
    if periods_per_year <= 0:
        raise InvalidInput("Periods per year must be greater than 0")
    return annual_rate / 100 / periods_per_year


def _check_term(term_periods: int) -> None:
    if term_periods <= 0:
        raise InvalidInput("Term must be greater than 0")


def level_payment(
    principal: float,
    annual_rate: float,
    term_periods: int,
    periods_per_year: int = 12,
) -> float:
    """Calculate the fixed per-period payment (unrounded).

    Args:
        principal: Loan amount (must be > 0)
        annual_rate: Annual interest rate in percent, e.g. 5.99
        term_periods: Number of payments (must be > 0)
        periods_per_year: Payments per year (12 = monthly)

    Example:
        level_payment(30000, 5.99, 60)  # ~579.8
    """
    if principal <= 0:
        raise InvalidInput("Principal must be greater than 0")
    _check_term(term_periods)
    r = _periodic_rate(annual_rate, periods_per_year)

    if r == 0:
        return principal / term_periods

    # Negative exponent: underflows toward 0 on long terms instead of overflowing
    return principal * r / (1 - (1 + r) ** -term_periods)


def reverse_amortize(
    payment: float,
    annual_rate: float,
    term_periods: int,
    periods_per_year: int = 12,
) -> float:
    """Solve the principal a payment supports (exact inverse of level_payment)."""
    if payment <= 0:
        raise InvalidInput("Payment must be greater than 0")
    _check_term(term_periods)
    r = _periodic_rate(annual_rate, periods_per_year)

    if r == 0:
        return payment * term_periods

    return payment * (1 - (1 + r) ** -term_periods) / r


def generate_schedule(
    principal: float,
    annual_rate: float,
    term_periods: int,
    periods_per_year: int = 12,
) -> Iterator[AmortizationPayment]:
    """Generate the payment schedule one period at a time.

    Interest and balance carry full precision between periods; only the
    emitted record is rounded to cents. The final balance is forced to
    exactly 0 regardless of floating-point drift.

    Inputs are validated here, before the first period is produced.
    """
    payment = level_payment(principal, annual_rate, term_periods, periods_per_year)
    r = _periodic_rate(annual_rate, periods_per_year)
    return _schedule(principal, r, payment, term_periods)


def _schedule(
    principal: float,
    r: float,
    payment: float,
    term_periods: int,
) -> Iterator[AmortizationPayment]:
    balance = principal

    for period in range(1, term_periods + 1):
        interest = balance * r
        principal_portion = payment - interest
        balance -= principal_portion

        if period == term_periods:
            emitted_balance = 0.0
        else:
            emitted_balance = round_cents(max(0.0, balance))

        yield AmortizationPayment(
            period=period,
            payment=round_cents(payment),
            principal=round_cents(max(0.0, principal_portion)),
            interest=round_cents(interest),
            balance=emitted_balance,
        )


def schedule_totals(schedule: Iterable[AmortizationPayment]) -> ScheduleTotals:
    """Sum payments, principal and interest over a schedule."""
    periods = 0
    total_paid = total_principal = total_interest = 0.0

    for row in schedule:
        periods += 1
        total_paid += row.payment
        total_principal += row.principal
        total_interest += row.interest

    return ScheduleTotals(
        periods=periods,
        total_paid=round_cents(total_paid),
        total_principal=round_cents(total_principal),
        total_interest=round_cents(total_interest),
    )
