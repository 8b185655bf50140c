"""Sandboxed expression engine for formula scripts.

Scripts are a restricted subset of Python expression syntax:

    monthly_rate = apr / 100 / 12
    round(pmt(monthly_rate, term_months, principal), 2)

Statements are separated by newlines or ';'. Every statement but the last
may assign a simple name; the last must be an expression and its value is
the result. Scripts are parsed with `ast`, checked against a whitelist of
node types at compile time, and evaluated by walking the tree. Nothing is
ever passed to exec() or eval(), so a script can reach only its variables
and the engine's functions.
"""

import ast
import logging
import math
import operator
import textwrap
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Mapping, Optional, Tuple

from ..errors import CompileError, FormulaError
from .primitives import PRIMITIVES

logger = logging.getLogger(__name__)

MAX_SCRIPT_LENGTH = 10_000

_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: math.pow,
}

_UNARY_OPS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
    ast.Not: operator.not_,
}

_COMPARE_OPS = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
}

_ALLOWED_NODES = (
    ast.Module, ast.Expr, ast.Assign, ast.AugAssign,
    ast.Name, ast.Load, ast.Store, ast.Constant,
    ast.BinOp, ast.UnaryOp, ast.BoolOp, ast.Compare, ast.IfExp, ast.Call,
    ast.And, ast.Or,
) + tuple(_BINARY_OPS) + tuple(_UNARY_OPS) + tuple(_COMPARE_OPS)


@dataclass(frozen=True)
class CompiledFormula:
    """A validated script, ready to evaluate any number of times."""

    name: str
    source: str
    statements: Tuple[ast.stmt, ...]
    assigned: FrozenSet[str]
    referenced: FrozenSet[str]

    @property
    def free_variables(self) -> FrozenSet[str]:
        """Names the script reads but never assigns; these must come from inputs."""
        return self.referenced - self.assigned


def _node_label(node: ast.AST) -> str:
    labels = {
        ast.Attribute: "attribute access",
        ast.Subscript: "subscripts",
        ast.Lambda: "lambda",
        ast.Import: "import",
        ast.ImportFrom: "import",
    }
    return labels.get(type(node), type(node).__name__)


class ExpressionEngine:
    """Compiles and evaluates formula scripts against numeric inputs.

    Functions and variables live in separate namespaces: a call resolves
    only against the engine's functions and a bare name only against the
    evaluation scope, so an input called `rate` never hides rate().
    """

    def __init__(self, functions: Optional[Mapping[str, Callable[..., float]]] = None):
        self._functions: Dict[str, Callable[..., float]] = dict(PRIMITIVES)
        if functions:
            self._functions.update(functions)

    @property
    def function_names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._functions))

    def register_function(self, name: str, func: Callable[..., float]) -> None:
        """Expose a host function to scripts compiled after this call."""
        if not name.isidentifier():
            raise ValueError(f"Invalid function name: {name!r}")
        # Copy-on-write, like FormulaRegistry
        self._functions = {**self._functions, name: func}

    def compile(self, script: str, name: str = "<script>") -> CompiledFormula:
        """Parse and validate a script.

        Raises:
            CompileError: syntax error, disallowed construct, unknown
                function, or a script over the size limit
        """
        if not isinstance(script, str):
            raise CompileError(name, "Script must be a string")
        if len(script) > MAX_SCRIPT_LENGTH:
            raise CompileError(name, f"Script exceeds {MAX_SCRIPT_LENGTH} characters")

        source = textwrap.dedent(script).strip()
        if not source:
            raise CompileError(name, "Script is empty")

        try:
            tree = ast.parse(source, filename=name, mode="exec")
        except SyntaxError as e:
            raise CompileError(name, f"Syntax error at line {e.lineno}: {e.msg}") from e
        except (ValueError, RecursionError, MemoryError) as e:
            raise CompileError(name, f"Unable to parse script: {e}") from e

        assigned, referenced = self._validate(tree, name)

        logger.debug(f"Compiled formula '{name}' ({len(tree.body)} statements)")
        return CompiledFormula(
            name=name,
            source=source,
            statements=tuple(tree.body),
            assigned=frozenset(assigned),
            referenced=frozenset(referenced),
        )

    def _validate(self, tree: ast.Module, name: str):
        body = tree.body
        for stmt in body[:-1]:
            if not isinstance(stmt, (ast.Assign, ast.AugAssign, ast.Expr)):
                raise CompileError(name, f"Statement not allowed: {_node_label(stmt)}")
        if not isinstance(body[-1], ast.Expr):
            raise CompileError(name, "Last statement must be an expression")

        assigned = set()
        referenced = set()
        # Call targets are function names, not variables
        call_targets = {
            id(node.func) for node in ast.walk(tree) if isinstance(node, ast.Call)
        }

        for node in ast.walk(tree):
            if not isinstance(node, _ALLOWED_NODES):
                raise CompileError(name, f"Not allowed in formulas: {_node_label(node)}")

            if isinstance(node, ast.Assign):
                if len(node.targets) != 1 or not isinstance(node.targets[0], ast.Name):
                    raise CompileError(name, "Only assignment to a simple name is allowed")
            elif isinstance(node, ast.AugAssign):
                if not isinstance(node.target, ast.Name):
                    raise CompileError(name, "Only assignment to a simple name is allowed")
                referenced.add(node.target.id)
            elif isinstance(node, ast.Constant):
                self._check_constant(node, name)
            elif isinstance(node, ast.Call):
                self._check_call(node, name)
            elif isinstance(node, ast.Name) and id(node) not in call_targets:
                if node.id.startswith("__"):
                    raise CompileError(name, f"Name not allowed: {node.id}")
                if isinstance(node.ctx, ast.Store):
                    assigned.add(node.id)
                else:
                    referenced.add(node.id)

        return assigned, referenced

    @staticmethod
    def _check_constant(node: ast.Constant, name: str) -> None:
        value = node.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise CompileError(name, f"Only numeric literals are allowed, got {value!r}")
        try:
            float(value)
        except OverflowError as e:
            raise CompileError(name, f"Numeric literal out of range: {e}") from e

    def _check_call(self, node: ast.Call, name: str) -> None:
        if not isinstance(node.func, ast.Name):
            raise CompileError(name, "Only calls to built-in functions are allowed")
        if node.keywords:
            raise CompileError(name, f"Keyword arguments are not allowed in {node.func.id}()")
        if node.func.id not in self._functions:
            raise CompileError(name, f"Unknown function: {node.func.id}")

    def evaluate(self, compiled: CompiledFormula, scope: Mapping[str, float]) -> float:
        """Run a compiled script against a fresh copy of scope.

        Raises:
            FormulaError: any runtime failure, or a result that is not a
                finite number
        """
        variables = dict(scope)
        try:
            for stmt in compiled.statements[:-1]:
                self._exec(stmt, variables)
            result = self._eval(compiled.statements[-1].value, variables)
        except FormulaError:
            raise
        except RecursionError as e:
            raise FormulaError(f"Formula '{compiled.name}' is nested too deeply") from e
        except ZeroDivisionError as e:
            raise FormulaError(f"Division by zero in formula '{compiled.name}'") from e
        except Exception as e:
            raise FormulaError(f"Execution error in formula '{compiled.name}': {e}") from e

        if isinstance(result, bool) or not isinstance(result, (int, float)):
            raise FormulaError(
                f"Formula '{compiled.name}' returned a non-numeric result: {result!r}"
            )
        result = float(result)
        if not math.isfinite(result):
            raise FormulaError(f"Formula '{compiled.name}' returned a non-finite result")
        return result

    def eval(self, script: str, inputs: Optional[Mapping[str, float]] = None) -> float:
        """Compile and evaluate a one-off script."""
        compiled = self.compile(script, "<eval>")
        return self.evaluate(compiled, inputs or {})

    def _exec(self, stmt: ast.stmt, variables: Dict[str, float]) -> None:
        if isinstance(stmt, ast.Assign):
            variables[stmt.targets[0].id] = self._eval(stmt.value, variables)
        elif isinstance(stmt, ast.AugAssign):
            target = stmt.target.id
            current = self._lookup(target, variables)
            op = _BINARY_OPS[type(stmt.op)]
            variables[target] = op(current, self._eval(stmt.value, variables))
        else:
            self._eval(stmt.value, variables)

    @staticmethod
    def _lookup(name: str, variables: Mapping[str, float]) -> float:
        try:
            return variables[name]
        except KeyError:
            raise FormulaError(f"Undefined variable: {name}") from None

    def _eval(self, node: ast.expr, variables: Dict[str, float]):
        if isinstance(node, ast.Constant):
            return float(node.value)

        if isinstance(node, ast.Name):
            return self._lookup(node.id, variables)

        if isinstance(node, ast.BinOp):
            left = self._eval(node.left, variables)
            right = self._eval(node.right, variables)
            return _BINARY_OPS[type(node.op)](left, right)

        if isinstance(node, ast.UnaryOp):
            return _UNARY_OPS[type(node.op)](self._eval(node.operand, variables))

        if isinstance(node, ast.BoolOp):
            is_and = isinstance(node.op, ast.And)
            value = None
            for operand in node.values:
                value = self._eval(operand, variables)
                if bool(value) != is_and:
                    return value
            return value

        if isinstance(node, ast.Compare):
            left = self._eval(node.left, variables)
            for op, comparator in zip(node.ops, node.comparators):
                right = self._eval(comparator, variables)
                if not _COMPARE_OPS[type(op)](left, right):
                    return False
                left = right
            return True

        if isinstance(node, ast.IfExp):
            if self._eval(node.test, variables):
                return self._eval(node.body, variables)
            return self._eval(node.orelse, variables)

        if isinstance(node, ast.Call):
            func = self._functions[node.func.id]
            args = [self._eval(arg, variables) for arg in node.args]
            try:
                return func(*args)
            except TypeError as e:
                raise FormulaError(f"Bad call to {node.func.id}(): {e}") from e

        raise FormulaError(f"Unsupported expression: {type(node).__name__}")
