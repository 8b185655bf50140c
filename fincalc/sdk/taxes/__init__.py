"""taxes - Progressive federal tax, FICA and take-home breakdown.

Scope:
- Federal tax via a single progressive-bracket schedule after the
  standard deduction
- FICA: Social Security capped at the wage base, Medicare uncapped
- Full annual breakdown with pre-tax deductions and a flat state rate

Constraints:
- Pure calculation, no I/O beyond loading packaged rules
- Year-specific rules loaded from fincalc/tax_rules/{year}.yaml

Usage:
    from fincalc.sdk.taxes import federal_tax, full_breakdown

    federal_tax(50000)          # 4016.0 with 2024 rules
    full_breakdown(60000).net_monthly
"""

from .schemas import (
    TaxBracket,
    TaxRules,
    TaxDeductions,
    TaxBreakdown,
    FicaTax,
)

from .federal import (
    load_tax_rules,
    get_available_years,
    federal_tax,
    fica_tax,
    full_breakdown,
)

__all__ = [
    # Schemas
    "TaxBracket",
    "TaxRules",
    "TaxDeductions",
    "TaxBreakdown",
    "FicaTax",
    # Calculations
    "load_tax_rules",
    "get_available_years",
    "federal_tax",
    "fica_tax",
    "full_breakdown",
]
