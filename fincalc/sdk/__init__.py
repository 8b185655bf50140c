"""Fin Calc SDK - Core personal-finance calculations and runtime formulas."""

from .errors import (
    CalcError,
    InvalidInput,
    FormulaError,
    CompileError,
    MissingInput,
    FormulaNotFound,
)

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_tax_year,
    get_formulas_dir,
    configure_logging,
)

from .rounding import (
    round_to,
    round_to_dollar,
    round_cents,
)

from .schemas import (
    AmortizationPayment,
    ScheduleTotals,
    MortgagePayment,
    CreditTier,
    PtiRatio,
    PaymentApproval,
    LoanEstimate,
    AutoAffordability,
    RentAffordability,
    PitiBreakdown,
    MortgageResult,
    DtiAnalysis,
    MaxHomePrice,
    IncomeData,
    BudgetAllocation,
    QuickReference,
)

from .amortization import (
    level_payment,
    reverse_amortize,
    generate_schedule,
    schedule_totals,
)

from .taxes import (
    TaxRules,
    TaxDeductions,
    TaxBreakdown,
    FicaTax,
    load_tax_rules,
    get_available_years,
    federal_tax,
    fica_tax,
    full_breakdown,
)

from .affordability import (
    get_credit_tiers,
    max_payment,
    calculate_payment_approvals,
    calculate_loan_amount,
    calculate_monthly_payment,
    calculate_loan_estimates,
    calculate_auto_affordability,
    generate_auto_schedule,
    calculate_rent_affordability,
    calculate_pmi,
    calculate_mortgage,
    calculate_dti,
    calculate_max_home_price,
    generate_mortgage_schedule,
)

from .income import (
    parse_date,
    days_worked,
    calculate_income,
    income_from_monthly,
    income_from_annual,
)

from .budget import (
    calculate_budget_allocation,
    calculate_quick_reference,
)

from .formulas import (
    ExpressionEngine,
    CompiledFormula,
    Formula,
    FormulaInput,
    FormulaResult,
    FormulaRegistry,
    load_formula_file,
    load_formulas_dir,
    default_formulas,
)

__all__ = [
    # Errors
    "CalcError",
    "InvalidInput",
    "FormulaError",
    "CompileError",
    "MissingInput",
    "FormulaNotFound",
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_tax_year",
    "get_formulas_dir",
    "configure_logging",
    # Rounding
    "round_to",
    "round_to_dollar",
    "round_cents",
    # Schemas
    "AmortizationPayment",
    "ScheduleTotals",
    "MortgagePayment",
    "CreditTier",
    "PtiRatio",
    "PaymentApproval",
    "LoanEstimate",
    "AutoAffordability",
    "RentAffordability",
    "PitiBreakdown",
    "MortgageResult",
    "DtiAnalysis",
    "MaxHomePrice",
    "IncomeData",
    "BudgetAllocation",
    "QuickReference",
    # Amortization
    "level_payment",
    "reverse_amortize",
    "generate_schedule",
    "schedule_totals",
    # Taxes
    "TaxRules",
    "TaxDeductions",
    "TaxBreakdown",
    "FicaTax",
    "load_tax_rules",
    "get_available_years",
    "federal_tax",
    "fica_tax",
    "full_breakdown",
    # Affordability
    "get_credit_tiers",
    "max_payment",
    "calculate_payment_approvals",
    "calculate_loan_amount",
    "calculate_monthly_payment",
    "calculate_loan_estimates",
    "calculate_auto_affordability",
    "generate_auto_schedule",
    "calculate_rent_affordability",
    "calculate_pmi",
    "calculate_mortgage",
    "calculate_dti",
    "calculate_max_home_price",
    "generate_mortgage_schedule",
    # Income
    "parse_date",
    "days_worked",
    "calculate_income",
    "income_from_monthly",
    "income_from_annual",
    # Budget
    "calculate_budget_allocation",
    "calculate_quick_reference",
    # Formulas
    "ExpressionEngine",
    "CompiledFormula",
    "Formula",
    "FormulaInput",
    "FormulaResult",
    "FormulaRegistry",
    "load_formula_file",
    "load_formulas_dir",
    "default_formulas",
]
