"""Error types raised by the Fin Calc SDK.

Every error is recoverable and carries enough context for the caller to
report it without inspecting a traceback. The CLI turns these into
click.ClickException.
"""


class CalcError(Exception):
    """Base class for all SDK errors."""
    pass


class InvalidInput(CalcError, ValueError):
    """Raised when a caller-supplied value violates a precondition.

    Examples: non-positive income, zero-length term, malformed date,
    out-of-range percentage.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid input: {reason}")


class FormulaError(CalcError):
    """Raised when a formula fails during evaluation."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class CompileError(FormulaError):
    """Raised when a formula script fails to parse or validate at registration."""

    def __init__(self, formula_name: str, detail: str):
        self.formula_name = formula_name
        super().__init__(f"Failed to compile formula '{formula_name}': {detail}")
        self.detail = detail


class MissingInput(CalcError):
    """Raised when a required formula input is absent and has no default."""

    def __init__(self, formula_name: str, input_name: str):
        self.formula_name = formula_name
        self.input_name = input_name
        super().__init__(
            f"Missing required input '{input_name}' for formula '{formula_name}'"
        )


class FormulaNotFound(CalcError, KeyError):
    """Raised when a formula name is not registered."""

    def __init__(self, formula_name: str):
        self.formula_name = formula_name
        super().__init__(f"Formula '{formula_name}' not found")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]
