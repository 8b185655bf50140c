"""Federal income tax, FICA and take-home breakdown.

Tax parameters come from fincalc/tax_rules/{year}.yaml. Only one
progressive schedule (single filer) is modeled.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

from ..config import get_tax_year
from ..errors import InvalidInput
from ..rounding import round_cents, round_to
from .schemas import FicaTax, TaxBreakdown, TaxDeductions, TaxRules

logger = logging.getLogger(__name__)


def _get_tax_rules_dir() -> Path:
    """Get the tax_rules directory path."""
    package_root = Path(__file__).parent.parent.parent  # taxes -> sdk -> fincalc
    return package_root / "tax_rules"


def get_available_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = _get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


@lru_cache(maxsize=None)
def _load_tax_rules(year: str) -> TaxRules:
    config_file = _get_tax_rules_dir() / f"{year}.yaml"
    if not config_file.exists():
        raise FileNotFoundError(f"Tax rules file not found for year {year}: {config_file}")

    with open(config_file, "r") as f:
        data = yaml.safe_load(f)

    logger.debug(f"loaded tax rules from {config_file.name}")
    return TaxRules.model_validate(data)


def load_tax_rules(year: Optional[str] = None) -> TaxRules:
    """Load (cached) tax rules for a year. Defaults to the configured tax year."""
    if year is None:
        year = get_tax_year()
    return _load_tax_rules(str(year))


def federal_tax(gross_income: float, rules: Optional[TaxRules] = None) -> float:
    """Calculate federal income tax after the standard deduction.

    Walks the bracket table taxing min(remaining, bracket width) at each
    bracket's rate until nothing is left to tax. Non-decreasing in income.

    Example (2024): 50,000 - 14,600 = 35,400 taxable
        11,600 x 10% + 23,800 x 12% = 1,160 + 2,856 = 4,016
    """
    rules = rules or load_tax_rules()
    taxable_income = max(0.0, gross_income - rules.standard_deduction)

    tax = 0.0
    remaining = taxable_income

    for bracket in rules.brackets:
        if remaining <= 0:
            break

        taxable_in_bracket = min(remaining, bracket.width)
        tax += taxable_in_bracket * bracket.rate
        remaining -= taxable_in_bracket

    return tax


def fica_tax(gross_income: float, rules: Optional[TaxRules] = None) -> FicaTax:
    """Calculate FICA taxes (Social Security + Medicare).

    Social Security is capped at the wage base; Medicare applies to all
    wages (no additional Medicare surtax).
    """
    rules = rules or load_tax_rules()

    ss_taxable = min(gross_income, rules.social_security.wage_cap)
    social_security = ss_taxable * rules.social_security.tax_rate
    medicare = gross_income * rules.medicare.tax_rate

    return FicaTax(
        total=social_security + medicare,
        social_security=social_security,
        medicare=medicare,
    )


def _check_percent(name: str, value: float) -> None:
    if not 0 <= value <= 100:
        raise InvalidInput(f"{name} must be between 0 and 100, got {value}")


def full_breakdown(
    gross_annual: float,
    deductions: Optional[TaxDeductions] = None,
    rules: Optional[TaxRules] = None,
) -> TaxBreakdown:
    """Calculate the complete annual tax breakdown.

    Args:
        gross_annual: Gross annual income (must be > 0)
        deductions: Pre-tax deductions and state rate (defaults: 6% 401k,
            $2,400 health, 5% state, no other)
        rules: Tax rules (defaults to the configured year)

    Returns:
        TaxBreakdown rounded to cents

    Note:
        401k and health premiums reduce income for federal and state tax
        but NOT for FICA, which is computed on the un-adjusted gross.
    """
    if round_cents(gross_annual) <= 0:
        raise InvalidInput("Gross income must be at least 0.01")

    deductions = deductions or TaxDeductions()
    rules = rules or load_tax_rules()

    _check_percent("retirement_401k_percent", deductions.retirement_401k_percent)
    _check_percent("state_tax_rate", deductions.state_tax_rate)
    if deductions.health_insurance_annual < 0:
        raise InvalidInput("health_insurance_annual must not be negative")
    if deductions.other_pretax < 0:
        raise InvalidInput("other_pretax must not be negative")

    # Pre-tax deductions
    retirement_401k = round_cents(gross_annual * (deductions.retirement_401k_percent / 100))
    health_insurance = round_cents(deductions.health_insurance_annual)
    other_pretax = round_cents(deductions.other_pretax)

    # Adjusted gross income for federal and state tax
    agi = gross_annual - retirement_401k - health_insurance - other_pretax

    federal = round_cents(federal_tax(agi, rules))
    state = round_cents(max(0.0, agi) * (deductions.state_tax_rate / 100))

    # FICA on gross, before 401k
    fica = fica_tax(gross_annual, rules)
    social_security = round_cents(fica.social_security)
    medicare = round_cents(fica.medicare)
    fica_total = round_cents(social_security + medicare)

    total_deductions = round_cents(
        federal + state + fica_total + retirement_401k + health_insurance + other_pretax
    )
    net_annual = round_cents(gross_annual - total_deductions)

    # Effective tax rate counts taxes only
    taxes_only = federal + state + fica_total
    effective_tax_rate = round_to(taxes_only / gross_annual * 100, 1)

    logger.debug(
        f"breakdown: gross={gross_annual:.2f} agi={agi:.2f} federal={federal:.2f} "
        f"state={state:.2f} fica={fica_total:.2f} net={net_annual:.2f}"
    )

    return TaxBreakdown(
        gross_annual=round_cents(gross_annual),
        federal_tax=federal,
        state_tax=state,
        fica_tax=fica_total,
        social_security=social_security,
        medicare=medicare,
        retirement_401k=retirement_401k,
        health_insurance=health_insurance,
        other_pretax=other_pretax,
        total_deductions=total_deductions,
        net_annual=net_annual,
        net_monthly=round_cents(net_annual / 12),
        effective_tax_rate=effective_tax_rate,
    )
