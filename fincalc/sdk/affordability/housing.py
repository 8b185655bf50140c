"""Housing affordability calculations.

Provides:
- Rent affordability (30% and 25% rules)
- Mortgage payments with PITI breakdown and PMI
- DTI (debt-to-income) qualification
- Maximum home price estimation
"""

from typing import List, Optional

from ..amortization import level_payment, reverse_amortize
from ..errors import InvalidInput
from ..rounding import round_cents, round_to, round_to_dollar
from ..schemas import (
    DtiAnalysis,
    MaxHomePrice,
    MaxPriceAssumptions,
    MortgagePayment,
    MortgageResult,
    PitiBreakdown,
    RentAffordability,
)

# PMI applies below this down payment percentage
PMI_DOWN_PAYMENT_THRESHOLD = 20.0
# Typical PMI: 0.5% of the loan amount per year
PMI_ANNUAL_RATE = 0.005

# (front-end max, back-end max, label), most favorable first
DTI_TIERS = (
    (28.0, 36.0, "Excellent - Well within guidelines"),
    (31.0, 43.0, "Good - May qualify with compensating factors"),
    (36.0, 50.0, "Fair - FHA/VA loans may be available"),
)
DTI_AT_RISK = "At risk - May not qualify for most loans"

MAX_HOUSING_RATIO = 0.28
PI_SHARE_OF_HOUSING = 0.80


def _check_income(monthly_income: float) -> None:
    if monthly_income <= 0:
        raise InvalidInput("Monthly income must be greater than 0")


def calculate_rent_affordability(
    monthly_income: float,
    current_rent: Optional[float] = None,
) -> RentAffordability:
    """Rent caps at 30% (standard) and 25% (conservative) of gross income."""
    _check_income(monthly_income)

    max_rent_30 = round_to_dollar(monthly_income * 0.30)
    max_rent_25 = round_to_dollar(monthly_income * 0.25)

    rent_percent = None
    is_affordable = None
    if current_rent is not None:
        if current_rent < 0:
            raise InvalidInput("Current rent must not be negative")
        rent_percent = current_rent / monthly_income * 100
        is_affordable = current_rent <= max_rent_30

    return RentAffordability(
        monthly_income=monthly_income,
        max_rent_30=max_rent_30,
        max_rent_25=max_rent_25,
        current_rent=current_rent,
        rent_percent=rent_percent,
        is_affordable=is_affordable,
    )


def calculate_pmi(loan_amount: float, down_payment_percent: float) -> float:
    """Monthly PMI: loan x 0.5% / 12, only when the down payment is under 20%."""
    if down_payment_percent >= PMI_DOWN_PAYMENT_THRESHOLD:
        return 0.0
    return loan_amount * PMI_ANNUAL_RATE / 12


def _pmi_cents(pmi: float) -> float:
    """Round PMI to cents; a nonzero charge never rounds down to 0."""
    if pmi <= 0:
        return 0.0
    return max(round_cents(pmi), 0.01)


def calculate_mortgage(
    home_price: float,
    down_payment_percent: float,
    interest_rate: float,
    term_years: int,
    property_tax_rate: float,
    annual_insurance: float,
) -> MortgageResult:
    """Calculate a mortgage with the monthly PITI breakdown.

    Args:
        home_price: Purchase price
        down_payment_percent: Down payment, percent of price (0 <= x < 100)
        interest_rate: Annual rate, percent
        term_years: Loan term in years
        property_tax_rate: Annual property tax, percent of price
        annual_insurance: Annual homeowners insurance

    Returns:
        MortgageResult with amounts rounded to cents
    """
    if home_price <= 0:
        raise InvalidInput("Home price must be greater than 0")
    if down_payment_percent < 0 or down_payment_percent >= 100:
        raise InvalidInput("Down payment percent must be between 0 and 100")
    if term_years <= 0:
        raise InvalidInput("Loan term must be greater than 0")
    if property_tax_rate < 0 or annual_insurance < 0:
        raise InvalidInput("Property tax rate and insurance must not be negative")

    down_payment = home_price * (down_payment_percent / 100)
    loan_amount = home_price - down_payment
    months = term_years * 12

    principal_interest = level_payment(loan_amount, interest_rate, months)
    property_tax = home_price * (property_tax_rate / 100) / 12
    insurance = annual_insurance / 12
    pmi = calculate_pmi(loan_amount, down_payment_percent)

    total_monthly = principal_interest + property_tax + insurance + pmi
    total_payments = principal_interest * months
    total_interest = total_payments - loan_amount

    return MortgageResult(
        home_price=home_price,
        down_payment=round_cents(down_payment),
        down_payment_percent=down_payment_percent,
        loan_amount=round_cents(loan_amount),
        interest_rate=interest_rate,
        term_years=term_years,
        piti=PitiBreakdown(
            principal_interest=round_cents(principal_interest),
            property_tax=round_cents(property_tax),
            insurance=round_cents(insurance),
            pmi=_pmi_cents(pmi),
            total_monthly=round_cents(total_monthly),
        ),
        total_payments=round_cents(total_payments),
        total_interest=round_cents(total_interest),
    )


def classify_dti(front_end_dti: float, back_end_dti: float) -> str:
    """Return the most favorable tier whose thresholds both ratios meet."""
    for front_max, back_max, label in DTI_TIERS:
        if front_end_dti <= front_max and back_end_dti <= back_max:
            return label
    return DTI_AT_RISK


def calculate_dti(
    monthly_income: float,
    housing_payment: float,
    other_debts: float = 0.0,
) -> DtiAnalysis:
    """Front-end and back-end DTI with a qualification tier.

    Thresholds are applied to the unrounded ratios; the record carries the
    ratios rounded to one decimal.
    """
    _check_income(monthly_income)
    if housing_payment < 0 or other_debts < 0:
        raise InvalidInput("Housing payment and other debts must not be negative")

    front_end_dti = housing_payment / monthly_income * 100
    back_end_dti = (housing_payment + other_debts) / monthly_income * 100

    return DtiAnalysis(
        monthly_income=monthly_income,
        housing_payment=round_to_dollar(housing_payment),
        other_debts=round_to_dollar(other_debts),
        front_end_dti=round_to(front_end_dti, 1),
        back_end_dti=round_to(back_end_dti, 1),
        is_affordable=front_end_dti <= 28.0 and back_end_dti <= 36.0,
        qualification=classify_dti(front_end_dti, back_end_dti),
    )


def calculate_max_home_price(
    monthly_income: float,
    down_payment_percent: float = 20.0,
    interest_rate: float = 6.5,
    term_years: int = 30,
    property_tax_rate: float = 1.2,
    annual_insurance: float = 1500.0,
) -> MaxHomePrice:
    """Estimate the maximum home price an income supports.

    This is a deliberate approximation, not an exact inverse of
    calculate_mortgage: housing is capped at 28% of gross income and 80%
    of that is assumed to cover principal and interest. That P&I is
    reverse-amortized to a loan amount and grossed up by the down payment.
    Property tax and insurance actually depend on the price, so the true
    PITI at the estimated price can differ from the 28% cap. The tax and
    insurance inputs are echoed in the assumptions only.
    """
    _check_income(monthly_income)
    if down_payment_percent < 0 or down_payment_percent >= 100:
        raise InvalidInput("Down payment percent must be between 0 and 100")
    if term_years <= 0:
        raise InvalidInput("Loan term must be greater than 0")

    max_housing_payment = monthly_income * MAX_HOUSING_RATIO
    estimated_pi = max_housing_payment * PI_SHARE_OF_HOUSING

    max_loan = reverse_amortize(estimated_pi, interest_rate, term_years * 12)
    max_price = max_loan / (1 - down_payment_percent / 100)

    return MaxHomePrice(
        monthly_income=monthly_income,
        max_housing_payment=round_to_dollar(max_housing_payment),
        estimated_max_price=round_to_dollar(max_price),
        assumptions=MaxPriceAssumptions(
            down_payment_percent=down_payment_percent,
            interest_rate=interest_rate,
            term_years=term_years,
            property_tax_rate=property_tax_rate,
            annual_insurance=annual_insurance,
        ),
    )


def generate_mortgage_schedule(
    principal: float,
    annual_rate: float,
    term_years: int,
) -> List[MortgagePayment]:
    """Monthly mortgage schedule with cumulative interest and principal.

    Rows are rounded to the dollar; the final balance is exactly 0.
    """
    if principal <= 0 or term_years <= 0:
        raise InvalidInput("Invalid loan parameters")

    payment = level_payment(principal, annual_rate, term_years * 12)
    monthly_rate = annual_rate / 100 / 12
    total_months = term_years * 12

    balance = principal
    cumulative_interest = 0.0
    cumulative_principal = 0.0
    schedule = []

    for month in range(1, total_months + 1):
        interest = balance * monthly_rate
        principal_portion = payment - interest
        balance -= principal_portion

        cumulative_interest += interest
        cumulative_principal += principal_portion

        final_balance = 0.0 if month == total_months else max(0.0, balance)

        schedule.append(MortgagePayment(
            month=month,
            payment=round_to_dollar(payment),
            principal=round_to_dollar(principal_portion),
            interest=round_to_dollar(interest),
            balance=round_to_dollar(final_balance),
            cumulative_interest=round_to_dollar(cumulative_interest),
            cumulative_principal=round_to_dollar(cumulative_principal),
        ))

    return schedule
