"""Pydantic models for formula definitions and results."""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FormulaInput(BaseModel):
    """A declared input of a formula."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Variable name the script reads")
    input_type: str = Field("number", description="Input type, informational")
    description: str = ""
    default: Optional[float] = Field(None, description="Used when the caller omits the input")

    @field_validator("name")
    @classmethod
    def check_identifier(cls, v: str) -> str:
        if not v.isidentifier() or v.startswith("__"):
            raise ValueError(f"Input name must be a valid identifier: {v!r}")
        return v

    @property
    def required(self) -> bool:
        return self.default is None


class Formula(BaseModel):
    """A named, versioned calculation script.

    Formulas are immutable once built. Registering a formula under a name
    that is already taken replaces the earlier one.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1, description="Unique registry key")
    version: str = "1.0.0"
    description: str = ""
    script: str = Field(..., min_length=1)
    inputs: Tuple[FormulaInput, ...] = ()
    output_type: str = "number"

    @model_validator(mode="after")
    def check_unique_inputs(self) -> "Formula":
        seen = set()
        for inp in self.inputs:
            if inp.name in seen:
                raise ValueError(f"Duplicate input '{inp.name}' in formula '{self.name}'")
            seen.add(inp.name)
        return self

    @property
    def required_inputs(self) -> List[str]:
        return [inp.name for inp in self.inputs if inp.required]

    @property
    def defaults(self) -> Dict[str, float]:
        return {inp.name: inp.default for inp in self.inputs if not inp.required}


class FormulaResult(BaseModel):
    """Outcome of executing a formula."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: float
    formula_name: str
    formula_version: str
    inputs: Dict[str, float] = Field(
        default_factory=dict,
        description="Resolved inputs: supplied values plus injected defaults",
    )
