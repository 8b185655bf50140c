"""Pydantic schemas for calculator results.

All schemas use extra='forbid' so a misspelled field is an error rather
than silently ignored, and frozen=True so a result cannot be altered once
a calculator has emitted it.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


# =============================================================================
# Amortization
# =============================================================================


class AmortizationPayment(_Record):
    """One period of a level-payment schedule (rounded to cents)."""

    period: int = Field(..., ge=1, description="Payment number, 1-indexed")
    payment: float = Field(..., ge=0, description="Total payment for the period")
    principal: float = Field(..., ge=0, description="Principal portion of the payment")
    interest: float = Field(..., ge=0, description="Interest portion of the payment")
    balance: float = Field(..., ge=0, description="Remaining balance after the payment")


class ScheduleTotals(_Record):
    """Sums over a full schedule."""

    periods: int
    total_paid: float
    total_principal: float
    total_interest: float


class MortgagePayment(_Record):
    """Mortgage schedule row with running totals (rounded to dollars)."""

    month: int = Field(..., ge=1)
    payment: float
    principal: float
    interest: float
    balance: float
    cumulative_interest: float
    cumulative_principal: float


# =============================================================================
# Auto loans / PTI
# =============================================================================


class CreditTier(_Record):
    """Credit tier with a typical auto-loan APR."""

    name: str
    range: str = Field(..., description="Credit score range, e.g. '700-749'")
    apr: float = Field(..., gt=0, description="Annual percentage rate")


class PtiRatio(Enum):
    """Payment-to-income ratios used by auto lenders."""

    CONSERVATIVE = 0.08
    STANDARD = 0.12
    AGGRESSIVE = 0.15

    @property
    def label(self) -> str:
        return self.name.title()

    @property
    def description(self) -> str:
        return _PTI_DESCRIPTIONS[self]


_PTI_DESCRIPTIONS = {
    PtiRatio.CONSERVATIVE: "Low risk, easier approval",
    PtiRatio.STANDARD: "Typical auto loan guideline",
    PtiRatio.AGGRESSIVE: "Maximum most lenders approve",
}


class PaymentApproval(_Record):
    """Maximum monthly payment for one PTI ratio."""

    pti_type: str
    ratio: float
    max_payment: float
    description: str


class LoanEstimate(_Record):
    """Loan amount a fixed payment buys at one credit tier."""

    credit_tier: CreditTier
    loan_amount: float
    total_interest: float
    total_cost: float


class AutoAffordability(_Record):
    """Full auto affordability analysis."""

    monthly_income: float
    payment_approvals: List[PaymentApproval]
    loan_estimates: List[LoanEstimate]


# =============================================================================
# Housing
# =============================================================================


class RentAffordability(_Record):
    """Rent caps at 30% and 25% of gross monthly income."""

    monthly_income: float
    max_rent_30: float
    max_rent_25: float
    current_rent: Optional[float] = None
    rent_percent: Optional[float] = None
    is_affordable: Optional[bool] = None


class PitiBreakdown(_Record):
    """Principal, interest, taxes, insurance (and PMI) per month."""

    principal_interest: float
    property_tax: float
    insurance: float
    pmi: float = Field(..., ge=0)
    total_monthly: float


class MortgageResult(_Record):
    """Mortgage calculation result."""

    home_price: float
    down_payment: float
    down_payment_percent: float
    loan_amount: float
    interest_rate: float
    term_years: int
    piti: PitiBreakdown
    total_payments: float = Field(..., description="Total P&I over the loan life")
    total_interest: float


class DtiAnalysis(_Record):
    """Debt-to-income analysis for mortgage qualification."""

    monthly_income: float
    housing_payment: float
    other_debts: float
    front_end_dti: float = Field(..., description="Housing / income, percent")
    back_end_dti: float = Field(..., description="(Housing + other debts) / income, percent")
    is_affordable: bool = Field(..., description="Front-end <= 28 and back-end <= 36")
    qualification: str


class MaxPriceAssumptions(_Record):
    down_payment_percent: float
    interest_rate: float
    term_years: int
    property_tax_rate: float
    annual_insurance: float


class MaxHomePrice(_Record):
    """Approximate maximum home price for an income."""

    monthly_income: float
    max_housing_payment: float
    estimated_max_price: float
    assumptions: MaxPriceAssumptions


# =============================================================================
# Income and budget
# =============================================================================


class IncomeData(_Record):
    """Annualized income projection."""

    gross_annual: float
    gross_monthly: float
    gross_weekly: float
    gross_daily: float
    days_worked: int = Field(..., ge=0, description="0 when income was entered directly")
    max_auto_payment: float = Field(..., description="12% of monthly gross")
    max_rent: float = Field(..., description="30% of monthly gross")


class SubCategory(_Record):
    name: str
    percent: float
    monthly: float


class BudgetCategory(_Record):
    name: str
    percent: float
    monthly: float
    weekly: float
    daily: float
    subcategories: List[SubCategory]


class BudgetAllocation(_Record):
    """50/30/20 budget split of net monthly income."""

    net_monthly: float
    needs: BudgetCategory
    wants: BudgetCategory
    savings: BudgetCategory


class QuickReference(_Record):
    daily_budget: float
    hourly_rate: float
    emergency_fund_3mo: float
    emergency_fund_6mo: float
