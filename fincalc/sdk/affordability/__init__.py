"""affordability - Auto-loan PTI and housing DTI/PITI analysis.

Scope:
- auto: PTI max payments, credit-tier loan estimates, auto schedules
- housing: rent caps, mortgage PITI with PMI, DTI qualification,
  approximate max home price, mortgage schedules

Both build on fincalc.sdk.amortization; neither keeps any state.

Usage:
    from fincalc.sdk.affordability import calculate_mortgage, calculate_dti

    result = calculate_mortgage(400000, 20, 6.5, 30, 1.2, 1500)
    result.piti.pmi  # 0.0 at 20% down
"""

from .auto import (
    CREDIT_TIERS,
    DEFAULT_TERM_MONTHS,
    get_credit_tiers,
    max_payment,
    calculate_payment_approvals,
    calculate_loan_amount,
    calculate_monthly_payment,
    calculate_loan_estimates,
    calculate_auto_affordability,
    generate_auto_schedule,
)

from .housing import (
    PMI_DOWN_PAYMENT_THRESHOLD,
    calculate_rent_affordability,
    calculate_pmi,
    calculate_mortgage,
    classify_dti,
    calculate_dti,
    calculate_max_home_price,
    generate_mortgage_schedule,
)

__all__ = [
    # Auto
    "CREDIT_TIERS",
    "DEFAULT_TERM_MONTHS",
    "get_credit_tiers",
    "max_payment",
    "calculate_payment_approvals",
    "calculate_loan_amount",
    "calculate_monthly_payment",
    "calculate_loan_estimates",
    "calculate_auto_affordability",
    "generate_auto_schedule",
    # Housing
    "PMI_DOWN_PAYMENT_THRESHOLD",
    "calculate_rent_affordability",
    "calculate_pmi",
    "calculate_mortgage",
    "classify_dti",
    "calculate_dti",
    "calculate_max_home_price",
    "generate_mortgage_schedule",
]
