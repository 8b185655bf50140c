"""Auto loan and PTI (payment-to-income) calculations.

Provides:
- Maximum payment for each PTI ratio (8%, 12%, 15%)
- Loan amount from a monthly payment (reverse amortization)
- Loan estimates across credit tiers
"""

from typing import List

from ..amortization import generate_schedule, level_payment, reverse_amortize
from ..errors import InvalidInput
from ..rounding import round_to_dollar
from ..schemas import (
    AmortizationPayment,
    AutoAffordability,
    CreditTier,
    LoanEstimate,
    PaymentApproval,
    PtiRatio,
)

DEFAULT_TERM_MONTHS = 60

# Ordered best to worst; APR strictly increases down the list
CREDIT_TIERS = (
    CreditTier(name="Excellent", range="750+", apr=5.99),
    CreditTier(name="Good", range="700-749", apr=8.49),
    CreditTier(name="Fair", range="650-699", apr=12.99),
    CreditTier(name="Poor", range="550-649", apr=18.99),
)


def get_credit_tiers() -> List[CreditTier]:
    """All credit tiers, best first."""
    return list(CREDIT_TIERS)


def max_payment(monthly_income: float, ratio: PtiRatio) -> float:
    """Maximum monthly payment for one PTI ratio.

    Left unrounded so the ratio ordering holds for any positive income.
    """
    if monthly_income <= 0:
        raise InvalidInput("Monthly income must be greater than 0")
    return monthly_income * ratio.value


def calculate_payment_approvals(monthly_income: float) -> List[PaymentApproval]:
    """Calculate maximum monthly payments for every PTI ratio.

    Returns approvals ordered Conservative, Standard, Aggressive.
    """
    if monthly_income <= 0:
        raise InvalidInput("Monthly income must be greater than 0")

    return [
        PaymentApproval(
            pti_type=ratio.label,
            ratio=ratio.value,
            max_payment=max_payment(monthly_income, ratio),
            description=ratio.description,
        )
        for ratio in PtiRatio
    ]


def calculate_loan_amount(monthly_payment: float, annual_rate: float, term_months: int) -> float:
    """Loan amount a monthly payment supports, rounded to the dollar."""
    return round_to_dollar(reverse_amortize(monthly_payment, annual_rate, term_months))


def calculate_monthly_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """Monthly payment for a loan, rounded to the dollar."""
    return round_to_dollar(level_payment(principal, annual_rate, term_months))


def calculate_loan_estimates(
    monthly_payment: float,
    term_months: int = DEFAULT_TERM_MONTHS,
) -> List[LoanEstimate]:
    """Estimate the loan a payment buys at each credit tier.

    A term of 0 falls back to the default 60 months.
    """
    if monthly_payment <= 0:
        raise InvalidInput("Monthly payment must be greater than 0")

    term = term_months or DEFAULT_TERM_MONTHS
    total_cost = monthly_payment * term

    estimates = []
    for tier in CREDIT_TIERS:
        loan_amount = calculate_loan_amount(monthly_payment, tier.apr, term)
        estimates.append(LoanEstimate(
            credit_tier=tier,
            loan_amount=loan_amount,
            total_interest=round_to_dollar(max(0.0, total_cost - loan_amount)),
            total_cost=round_to_dollar(total_cost),
        ))

    return estimates


def calculate_auto_affordability(
    monthly_income: float,
    term_months: int = DEFAULT_TERM_MONTHS,
) -> AutoAffordability:
    """Full auto affordability: PTI approvals plus estimates at the standard 12%."""
    payment_approvals = calculate_payment_approvals(monthly_income)
    standard_payment = max_payment(monthly_income, PtiRatio.STANDARD)
    loan_estimates = calculate_loan_estimates(standard_payment, term_months)

    return AutoAffordability(
        monthly_income=monthly_income,
        payment_approvals=payment_approvals,
        loan_estimates=loan_estimates,
    )


def generate_auto_schedule(
    principal: float,
    annual_rate: float,
    term_months: int,
) -> List[AmortizationPayment]:
    """Monthly amortization schedule for an auto loan, as a list."""
    return list(generate_schedule(principal, annual_rate, term_months))
