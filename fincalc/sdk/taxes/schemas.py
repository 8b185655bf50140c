"""Pydantic schemas for tax rules and tax results.

TaxRules validates the packaged tax_rules/*.yaml files and provides typed
access to the standard deduction, the bracket table and FICA parameters.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaxBracket(BaseModel):
    """Single tax bracket entry. max=None marks the unbounded top bracket."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(..., ge=0, description="Lower bound of taxable income")
    max: Optional[float] = Field(default=None, description="Upper bound (None if top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")

    @property
    def width(self) -> float:
        """Amount of taxable income this bracket covers."""
        if self.max is None:
            return float("inf")
        return self.max - self.min


class SocialSecurityRules(BaseModel):
    """Social Security tax rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    wage_cap: float = Field(..., gt=0, description="SS wage base (max taxable)")
    tax_rate: float = Field(..., ge=0, le=1, description="SS tax rate (employee portion)")


class MedicareRules(BaseModel):
    """Medicare tax rules (no cap, no additional surtax tier)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_rate: float = Field(..., ge=0, le=1)


class TaxRules(BaseModel):
    """Complete tax rules for one year and filing status."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # forward compat

    year: int
    filing_status: str = "single"
    standard_deduction: float = Field(..., ge=0)
    brackets: List[TaxBracket] = Field(..., min_length=1)
    social_security: SocialSecurityRules
    medicare: MedicareRules

    @model_validator(mode="after")
    def check_brackets(self) -> "TaxRules":
        """Brackets must be ordered, contiguous and cover [0, inf)."""
        errors = []

        if self.brackets[0].min != 0:
            errors.append(f"first bracket starts at {self.brackets[0].min}, expected 0")

        for prev, nxt in zip(self.brackets, self.brackets[1:]):
            if prev.max is None:
                errors.append("only the last bracket may be unbounded")
                break
            if prev.max <= prev.min:
                errors.append(f"bracket {prev.min}-{prev.max} is empty or inverted")
            if nxt.min != prev.max:
                errors.append(f"gap or overlap between {prev.max} and {nxt.min}")

        if self.brackets[-1].max is not None:
            errors.append("last bracket must be unbounded (omit max)")

        if errors:
            raise ValueError("; ".join(errors))

        return self


class TaxDeductions(BaseModel):
    """Pre-tax deductions and state rate used by the full breakdown."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    retirement_401k_percent: float = Field(default=6.0, description="401k contribution, percent of gross")
    health_insurance_annual: float = Field(default=2400.0, description="Annual health premium ($200/month)")
    state_tax_rate: float = Field(default=5.0, description="Flat state tax rate, percent")
    other_pretax: float = Field(default=0.0, description="Other annual pre-tax deductions")


class FicaTax(BaseModel):
    """Social Security + Medicare, unrounded."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    total: float
    social_security: float
    medicare: float


class TaxBreakdown(BaseModel):
    """Annual tax and take-home breakdown. Internally coherent."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_annual: float = Field(..., gt=0)
    federal_tax: float = Field(..., ge=0)
    state_tax: float
    fica_tax: float = Field(..., ge=0)
    social_security: float = Field(..., ge=0)
    medicare: float = Field(..., ge=0)
    retirement_401k: float = Field(..., ge=0)
    health_insurance: float = Field(..., ge=0)
    other_pretax: float = Field(..., ge=0)
    total_deductions: float
    net_annual: float
    net_monthly: float
    effective_tax_rate: float = Field(..., description="Taxes only (not 401k/insurance), percent of gross")

    @model_validator(mode="after")
    def check_coherence(self) -> "TaxBreakdown":
        """Validate internal consistency of amounts."""
        errors = []
        tolerance = 0.01

        expected_fica = self.social_security + self.medicare
        if abs(self.fica_tax - expected_fica) > tolerance:
            errors.append(
                f"fica_tax ({self.fica_tax:.2f}) != "
                f"social_security + medicare ({expected_fica:.2f})"
            )

        expected_total = (
            self.federal_tax + self.state_tax + self.fica_tax
            + self.retirement_401k + self.health_insurance + self.other_pretax
        )
        if abs(self.total_deductions - expected_total) > tolerance:
            errors.append(
                f"total_deductions ({self.total_deductions:.2f}) != "
                f"sum of taxes and deductions ({expected_total:.2f})"
            )

        expected_net = self.gross_annual - self.total_deductions
        if abs(self.net_annual - expected_net) > tolerance:
            errors.append(
                f"net_annual ({self.net_annual:.2f}) != "
                f"gross - total_deductions ({expected_net:.2f})"
            )

        if errors:
            raise ValueError("; ".join(errors))

        return self
