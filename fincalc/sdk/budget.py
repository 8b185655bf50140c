"""50/30/20 budget allocation of net monthly income."""

from typing import List, Tuple

from .errors import InvalidInput
from .rounding import round_to_dollar
from .schemas import BudgetAllocation, BudgetCategory, QuickReference, SubCategory

WEEKS_PER_MONTH = 4.33
DAYS_PER_MONTH = 30
DEFAULT_HOURS_PER_WEEK = 40.0

# name -> (percent of net, [(subcategory, percent of net), ...])
ALLOCATION = (
    ("Needs", 50.0, [
        ("Housing", 25.0),
        ("Utilities", 5.0),
        ("Groceries", 10.0),
        ("Transportation", 10.0),
    ]),
    ("Wants", 30.0, [
        ("Dining Out", 5.0),
        ("Subscriptions", 5.0),
        ("Travel/Fun", 10.0),
        ("Personal", 10.0),
    ]),
    ("Savings", 20.0, [
        ("Emergency Fund", 10.0),
        ("Investments", 5.0),
        ("Goals", 5.0),
    ]),
)


def _category(net_monthly: float, name: str, percent: float,
              subcategories: List[Tuple[str, float]]) -> BudgetCategory:
    monthly = net_monthly * percent / 100
    return BudgetCategory(
        name=name,
        percent=percent,
        monthly=round_to_dollar(monthly),
        weekly=round_to_dollar(monthly / WEEKS_PER_MONTH),
        daily=round_to_dollar(monthly / DAYS_PER_MONTH),
        subcategories=[
            SubCategory(name=sub, percent=sub_pct, monthly=round_to_dollar(net_monthly * sub_pct / 100))
            for sub, sub_pct in subcategories
        ],
    )


def calculate_budget_allocation(net_monthly: float) -> BudgetAllocation:
    """Split net monthly income 50% needs, 30% wants, 20% savings."""
    if net_monthly <= 0:
        raise InvalidInput("Net monthly income must be greater than 0")

    needs, wants, savings = (
        _category(net_monthly, name, percent, subs) for name, percent, subs in ALLOCATION
    )
    return BudgetAllocation(
        net_monthly=round_to_dollar(net_monthly),
        needs=needs,
        wants=wants,
        savings=savings,
    )


def calculate_quick_reference(
    net_monthly: float,
    hours_per_week: float = DEFAULT_HOURS_PER_WEEK,
) -> QuickReference:
    """Daily budget, take-home hourly rate and emergency fund targets.

    Emergency funds are sized on the 50% needs share. Hours of 0 or less
    fall back to 40.
    """
    if net_monthly <= 0:
        raise InvalidInput("Net monthly income must be greater than 0")

    hours = hours_per_week if hours_per_week > 0 else DEFAULT_HOURS_PER_WEEK
    monthly_expenses = net_monthly * 0.50

    return QuickReference(
        daily_budget=round_to_dollar(net_monthly / DAYS_PER_MONTH),
        hourly_rate=round_to_dollar(net_monthly * 12 / (hours * 52)),
        emergency_fund_3mo=round_to_dollar(monthly_expenses * 3),
        emergency_fund_6mo=round_to_dollar(monthly_expenses * 6),
    )
