"""Income projection from year-to-date earnings.

Projects annual income from YTD gross and the days worked so far:
- days worked run from the effective start (the later of the start date
  and Jan 1 of the check year) to the check date, inclusive
- annual = YTD / days * 365; monthly = annual / 12; weekly = annual / 52
- max auto payment is 12% of monthly, max rent 30% of monthly
"""

from datetime import date

from .errors import InvalidInput
from .rounding import round_to_dollar
from .schemas import IncomeData

AUTO_PAYMENT_RATIO = 0.12
RENT_RATIO = 0.30


def parse_date(date_str: str) -> date:
    """Parse a YYYY-MM-DD string.

    Raises:
        InvalidInput: wrong number of fields, non-numeric component, or a
            date that does not exist on the calendar
    """
    parts = str(date_str).strip().split("-")
    if len(parts) != 3:
        raise InvalidInput(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    labels = ("year", "month", "day")
    numbers = []
    for label, part in zip(labels, parts):
        if not (part.isascii() and part.isdigit()):
            raise InvalidInput(f"Invalid {label}: {part}")
        numbers.append(int(part))

    try:
        return date(*numbers)
    except ValueError as e:
        raise InvalidInput(f"Invalid date {date_str}: {e}") from e


def days_worked(start_date: str, check_date: str) -> int:
    """Days from the effective start to the check date, counting both ends."""
    start = parse_date(start_date)
    check = parse_date(check_date)

    effective_start = max(start, date(check.year, 1, 1))
    return (check - effective_start).days + 1


def _income_data(annual: float, monthly: float, daily: float, days: int) -> IncomeData:
    return IncomeData(
        gross_annual=round_to_dollar(annual),
        gross_monthly=round_to_dollar(monthly),
        gross_weekly=round_to_dollar(annual / 52),
        gross_daily=round_to_dollar(daily),
        days_worked=days,
        max_auto_payment=round_to_dollar(monthly * AUTO_PAYMENT_RATIO),
        max_rent=round_to_dollar(monthly * RENT_RATIO),
    )


def calculate_income(ytd_income: float, start_date: str, check_date: str) -> IncomeData:
    """Project annual income from YTD earnings.

    Args:
        ytd_income: Year-to-date gross income
        start_date: Employment start or Jan 1, YYYY-MM-DD
        check_date: Date of the most recent paycheck, YYYY-MM-DD

    Example:
        calculate_income(50000, "2024-01-01", "2024-06-30")
        # 182 days worked, gross_annual ~100275
    """
    if ytd_income <= 0:
        raise InvalidInput("YTD income must be greater than 0")

    days = days_worked(start_date, check_date)
    if days <= 0:
        raise InvalidInput("Check date must be after start date")

    daily = ytd_income / days
    annual = daily * 365
    return _income_data(annual, annual / 12, daily, days)


def income_from_monthly(monthly_income: float) -> IncomeData:
    """Income figures from a manually entered monthly gross."""
    if monthly_income <= 0:
        raise InvalidInput("Monthly income must be greater than 0")

    annual = monthly_income * 12
    return _income_data(annual, monthly_income, annual / 365, 0)


def income_from_annual(annual_income: float) -> IncomeData:
    """Income figures from an annual salary."""
    if annual_income <= 0:
        raise InvalidInput("Annual income must be greater than 0")

    return _income_data(annual_income, annual_income / 12, annual_income / 365, 0)
