"""formulas - Runtime-defined calculation formulas.

Scope:
- engine: sandboxed evaluation of restricted Python-expression scripts
- primitives: pmt, pv, fv, rate, round and the math helpers scripts can call
- registry: compiled, versioned formulas keyed by name
- loader: formula definitions from YAML files

Usage:
    from fincalc.sdk.formulas import FormulaRegistry

    registry = FormulaRegistry.with_defaults()
    registry.execute("pti_max_payment", {"monthly_income": 5000}).value  # 600.0
"""

from .engine import MAX_SCRIPT_LENGTH, CompiledFormula, ExpressionEngine
from .loader import default_formulas, load_formula_file, load_formulas_dir, parse_formulas
from .primitives import PRIMITIVES, fv, pmt, pv, solve_rate
from .registry import FormulaRegistry
from .schemas import Formula, FormulaInput, FormulaResult

__all__ = [
    # Engine
    "MAX_SCRIPT_LENGTH",
    "CompiledFormula",
    "ExpressionEngine",
    "PRIMITIVES",
    "pmt",
    "pv",
    "fv",
    "solve_rate",
    # Registry
    "Formula",
    "FormulaInput",
    "FormulaResult",
    "FormulaRegistry",
    # Loading
    "parse_formulas",
    "load_formula_file",
    "load_formulas_dir",
    "default_formulas",
]
