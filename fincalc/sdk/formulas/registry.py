"""In-memory registry of compiled formulas.

Formulas are compiled once when registered and evaluated many times. Writers
(register, unregister) take a lock, copy the current map, modify the copy
and swap the reference. Readers use whatever map is current without
locking, so an execute that races a register sees either the old entry or
the new one, never a half-built map.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..errors import FormulaNotFound, InvalidInput, MissingInput
from .engine import CompiledFormula, ExpressionEngine
from .schemas import Formula, FormulaResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    formula: Formula
    compiled: CompiledFormula


def _coerce(formula_name: str, input_name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidInput(f"Input '{input_name}' for formula '{formula_name}' must be a number")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(
            f"Input '{input_name}' for formula '{formula_name}' must be a number, got {value!r}"
        ) from e


class FormulaRegistry:
    """Named, versioned formulas backed by an ExpressionEngine.

    Usage:
        registry = FormulaRegistry.with_defaults()
        result = registry.execute("loan_payment", {"principal": 30000})
        result.value  # 579.98
    """

    def __init__(self, engine: Optional[ExpressionEngine] = None):
        self._engine = engine or ExpressionEngine()
        self._entries: Dict[str, _Entry] = {}
        self._write_lock = threading.Lock()

    @classmethod
    def with_defaults(cls, engine: Optional[ExpressionEngine] = None) -> "FormulaRegistry":
        """Registry pre-loaded with the packaged default formulas."""
        from .loader import default_formulas

        registry = cls(engine)
        for formula in default_formulas():
            registry.register(formula)
        return registry

    @property
    def engine(self) -> ExpressionEngine:
        return self._engine

    def register(self, formula: Formula) -> None:
        """Compile and store a formula, replacing any entry with the same name.

        Raises:
            CompileError: the script does not compile; the registry is unchanged
        """
        compiled = self._engine.compile(formula.script, formula.name)

        undeclared = compiled.free_variables - {inp.name for inp in formula.inputs}
        if undeclared:
            logger.warning(
                f"Formula '{formula.name}' reads undeclared variables: {', '.join(sorted(undeclared))}"
            )

        with self._write_lock:
            entries = dict(self._entries)
            replaced = formula.name in entries
            entries[formula.name] = _Entry(formula=formula, compiled=compiled)
            self._entries = entries

        action = "Replaced" if replaced else "Registered"
        logger.debug(f"{action} formula '{formula.name}' v{formula.version}")

    def unregister(self, name: str) -> None:
        """Remove a formula.

        Raises:
            FormulaNotFound: no formula with that name
        """
        with self._write_lock:
            if name not in self._entries:
                raise FormulaNotFound(name)
            entries = dict(self._entries)
            del entries[name]
            self._entries = entries
        logger.debug(f"Unregistered formula '{name}'")

    def get(self, name: str) -> Formula:
        entry = self._entries.get(name)
        if entry is None:
            raise FormulaNotFound(name)
        return entry.formula

    def list(self) -> List[Formula]:
        """All registered formulas, sorted by name."""
        entries = self._entries
        return [entries[name].formula for name in sorted(entries)]

    def names(self) -> List[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def execute(self, name: str, inputs: Optional[Mapping[str, Any]] = None) -> FormulaResult:
        """Run a registered formula.

        Supplied inputs are coerced to float. Declared inputs that were not
        supplied take their default. Undeclared extra inputs are passed
        through to the script.

        Raises:
            FormulaNotFound: unknown formula name
            MissingInput: a required input was not supplied
            InvalidInput: an input is not numeric
            FormulaError: the script failed at runtime
        """
        entry = self._entries.get(name)
        if entry is None:
            raise FormulaNotFound(name)
        formula = entry.formula

        resolved: Dict[str, float] = {}
        for key, value in (inputs or {}).items():
            resolved[key] = _coerce(formula.name, key, value)

        for inp in formula.inputs:
            if inp.name in resolved:
                continue
            if inp.default is None:
                raise MissingInput(formula.name, inp.name)
            resolved[inp.name] = inp.default

        value = self._engine.evaluate(entry.compiled, resolved)
        logger.debug(f"Executed formula '{formula.name}' v{formula.version} -> {value}")

        return FormulaResult(
            value=value,
            formula_name=formula.name,
            formula_version=formula.version,
            inputs=resolved,
        )

    def eval(self, script: str, inputs: Optional[Mapping[str, Any]] = None) -> float:
        """Evaluate a one-off script without registering it."""
        scope = {key: _coerce("<eval>", key, value) for key, value in (inputs or {}).items()}
        return self._engine.eval(script, scope)
