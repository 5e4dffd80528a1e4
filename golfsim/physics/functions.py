"""Named-variable scalar expressions compiled once and evaluated many times."""

from __future__ import annotations

import ast
from tokenize import TokenError
from typing import Callable, Dict, Mapping, Sequence, Tuple

import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import convert_xor, parse_expr, standard_transformations

_TRANSFORMATIONS = standard_transformations + (convert_xor,)

# Names accepted in expression text on top of sympy's own namespace.
_EXTRA_NAMES: Dict[str, object] = {
    "e": sp.E,
    "log10": lambda arg: sp.log(arg, 10),
    "signum": sp.sign,
}

# Functions callable from expression text. Anything else is rejected before
# sympy evaluates the text.
_FUNCTIONS = frozenset(
    {
        "sin", "cos", "tan", "asin", "acos", "atan", "atan2",
        "sinh", "cosh", "tanh", "asinh", "acosh", "atanh",
        "exp", "log", "log10", "sqrt", "abs", "Abs", "sign", "signum",
        "floor", "ceiling", "Min", "Max",
    }
)

_OPERATORS = (ast.Add, ast.Sub, ast.Mult, ast.Div, ast.Pow, ast.BitXor, ast.Mod, ast.UAdd, ast.USub)


class ParseError(ValueError):
    """Raised when expression text cannot be turned into a scalar field."""


class MissingVariableError(KeyError):
    """Raised when a declared variable has no value in the evaluation bindings."""

    def __init__(self, variable: str) -> None:
        super().__init__(variable)
        self.variable = variable

    def __str__(self) -> str:
        return f"No value provided for variable: {self.variable}"


def _check_structure(expression: str) -> None:
    """Reject text that is not plain arithmetic over names, numbers and known functions.

    ``parse_expr`` evaluates its input as Python, so attribute access,
    subscripts, lambdas, conditionals and the like must never reach it.
    """
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as exc:
        raise ParseError(f"Cannot parse expression {expression!r}: {exc.msg}") from exc
    for node in ast.walk(tree):
        if isinstance(node, (ast.Expression, ast.BinOp, ast.UnaryOp, ast.Load) + _OPERATORS):
            continue
        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
                raise ParseError(f"Expression {expression!r} contains a non-numeric literal {node.value!r}")
            continue
        if isinstance(node, ast.Name):
            if node.id.startswith("_"):
                raise ParseError(f"Expression {expression!r} uses reserved name {node.id!r}")
            continue
        if isinstance(node, ast.Call):
            if not isinstance(node.func, ast.Name) or node.keywords:
                raise ParseError(f"Expression {expression!r} contains an unsupported call")
            if node.func.id not in _FUNCTIONS:
                raise ParseError(f"Expression {expression!r} calls unknown function(s): {node.func.id}")
            if any(isinstance(arg, ast.Starred) for arg in node.args):
                raise ParseError(f"Expression {expression!r} contains an unsupported call")
            continue
        raise ParseError(f"Expression {expression!r} contains unsupported syntax: {type(node).__name__}")


def require_binding(bindings: Mapping[str, float], variable: str) -> float:
    """Look up ``variable`` in ``bindings`` or raise :class:`MissingVariableError`."""
    try:
        return bindings[variable]
    except KeyError:
        raise MissingVariableError(variable) from None


class ScalarField:
    """A real-valued expression over a fixed, ordered set of variables.

    The text is parsed with sympy (``^`` is accepted as exponentiation) and
    compiled to a plain ``math`` function, so repeated evaluation never
    re-parses::

        field = ScalarField("sin(x) * cos(y) + z", ["x", "y", "z"])
        field.evaluate({"x": 1.0, "y": 2.0, "z": 3.0})

    Every declared variable must be bound on each call; extra bindings are
    ignored. Instances are immutable and also callable, which lets them be
    used directly as ODE right-hand sides.
    """

    def __init__(self, expression: str, variables: Sequence[str] = ("x", "y")) -> None:
        names = tuple(variables)
        if len(set(names)) != len(names):
            raise ParseError(f"Duplicate variable names in {names!r}")
        if not expression or not expression.strip():
            raise ParseError("Expression text is empty")
        self._text = expression
        self._variables = names
        self._symbols = tuple(sp.Symbol(name) for name in names)
        self._expr = self._parse(expression)
        self._compiled: Callable[..., float] = sp.lambdify(self._symbols, self._expr, modules="math")

    def _parse(self, expression: str) -> sp.Expr:
        local_dict: Dict[str, object] = {k: v for k, v in _EXTRA_NAMES.items() if k not in self._variables}
        local_dict.update(zip(self._variables, self._symbols))
        _check_structure(expression)
        try:
            expr = parse_expr(expression, local_dict=local_dict, transformations=_TRANSFORMATIONS)
        except (SyntaxError, TokenError, TypeError, ValueError, AttributeError, sp.SympifyError) as exc:
            raise ParseError(f"Cannot parse expression {expression!r}: {exc}") from exc
        if not isinstance(expr, sp.Expr):
            raise ParseError(f"Expression {expression!r} is not a scalar expression")
        unknown = sorted(str(s) for s in expr.free_symbols - set(self._symbols))
        if unknown:
            raise ParseError(f"Expression {expression!r} uses undeclared variable(s): {', '.join(unknown)}")
        undefined = sorted(str(f.func) for f in expr.atoms(AppliedUndef))
        if undefined:
            raise ParseError(f"Expression {expression!r} calls unknown function(s): {', '.join(undefined)}")
        return expr

    @classmethod
    def identity(cls, variable: str) -> "ScalarField":
        """The field whose value is simply ``variable``."""
        return cls(variable, [variable])

    @property
    def expression(self) -> str:
        return self._text

    @property
    def variables(self) -> Tuple[str, ...]:
        return self._variables

    def evaluate(self, bindings: Mapping[str, float]) -> float:
        args = [require_binding(bindings, name) for name in self._variables]
        return float(self._compiled(*args))

    __call__ = evaluate

    def __repr__(self) -> str:
        return f"ScalarField({self._text!r}, {list(self._variables)!r})"


__all__ = ["MissingVariableError", "ParseError", "ScalarField", "require_binding"]
