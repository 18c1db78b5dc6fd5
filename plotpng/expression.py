from __future__ import annotations

from dataclasses import dataclass, field
import enum
import logging
import math
from typing import Any, Callable

import numpy as np
import sympy as sp
from sympy.parsing.sympy_parser import convert_xor, parse_expr, standard_transformations

from plotpng.errors import ExpressionCompileError, ExpressionEvaluationError


LOGGER = logging.getLogger(__name__)

X = sp.Symbol("x", real=True)
Y = sp.Symbol("y", real=True)
TRANSFORMS = standard_transformations + (convert_xor,)
LOCAL_NAMES: dict[str, Any] = {"x": X, "y": Y, "e": sp.E, "pi": sp.pi, "ln": sp.log}

COMPILE_HINT = (
    "Expressions should be written in terms of x and y only.\n"
    "x should be used for univariable expressions, or both x and y for multivariate expressions.\n"
    'e.g. "k^2" is invalid, and should be written "x^2".\n'
    "Equations of the form y=f(x) or z=f(x,y) are invalid, and should be written f(x) or f(x,y) respectively.\n"
    'e.g. "y=x^2" is invalid, and should be written "x^2".'
)


class PlotMode(enum.Enum):
    CURVE = "curve"
    SURFACE = "surface"


def classify_plot_mode(text: str) -> PlotMode:
    """Pick the plot mode from the expression text alone.

    Any occurrence of ``y`` makes the expression bivariate; nothing is
    parsed or evaluated here.
    """
    if "y" in text:
        return PlotMode.SURFACE
    return PlotMode.CURVE


@dataclass
class EvaluationContext:
    """Coordinate storage read by ``CompiledExpression.evaluate``."""

    x: np.float64 = field(default_factory=lambda: np.float64(0.0))
    y: np.float64 = field(default_factory=lambda: np.float64(0.0))

    def set(self, x: float | None = None, y: float | None = None) -> None:
        if x is not None:
            self.x = np.float64(x)
        if y is not None:
            self.y = np.float64(y)


class CompiledExpression:
    def __init__(self, text: str, expr: sp.Expr, fn: Callable[..., Any]) -> None:
        self._text = text
        self._expr = expr
        self._fn: Callable[..., Any] | None = fn

    @property
    def text(self) -> str:
        return self._text

    @property
    def expr(self) -> sp.Expr:
        return self._expr

    @property
    def variables(self) -> frozenset[str]:
        return frozenset(str(s) for s in self._expr.free_symbols)

    @property
    def released(self) -> bool:
        return self._fn is None

    def evaluate(self, context: EvaluationContext) -> float:
        if self._fn is None:
            raise ExpressionEvaluationError(f"expression already released: {self._text!r}")
        try:
            return _to_real(self._fn(context.x, context.y))
        except (ArithmeticError, NameError, TypeError, ValueError) as exc:
            raise ExpressionEvaluationError(
                f"failed to evaluate {self._text!r} at x={float(context.x)!r}, y={float(context.y)!r}: {exc}"
            ) from exc

    def release(self) -> None:
        self._fn = None


def compile_expression(text: str) -> CompiledExpression:
    """Parse ``text`` with SymPy and lambdify it over (x, y) onto NumPy.

    ``parse_expr`` evaluates the transformed text with Python's ``eval``, so
    any Python expression that yields a SymPy ``Expr`` is accepted (for example
    a conditional expression). Only run it on text from the local user.

    Literal division by zero folds to complex infinity at parse time; it is
    compiled to ``nan`` so it follows the same clipping rules as a runtime
    division by zero.
    """
    if not text.strip():
        raise ExpressionCompileError(f"Failed to compile math expression: empty expression.\n\n{COMPILE_HINT}")
    try:
        expr = parse_expr(text, local_dict=dict(LOCAL_NAMES), transformations=TRANSFORMS)
    except Exception as exc:
        raise ExpressionCompileError(
            f"Failed to compile math expression {text!r}: {exc}\n\n{COMPILE_HINT}"
        ) from exc

    if not isinstance(expr, sp.Expr):
        raise ExpressionCompileError(
            f"Failed to compile math expression {text!r}: not a numeric expression\n\n{COMPILE_HINT}"
        )
    unknown = sorted(str(s) for s in expr.free_symbols - {X, Y})
    if unknown:
        raise ExpressionCompileError(
            f"Failed to compile math expression {text!r}: unknown variable(s) {', '.join(unknown)}\n\n{COMPILE_HINT}"
        )

    if expr.has(sp.zoo):
        expr = expr.xreplace({sp.zoo: sp.nan})
    try:
        fn = sp.lambdify((X, Y), expr, modules="numpy")
    except Exception as exc:
        raise ExpressionCompileError(f"Failed to compile math expression {text!r}: {exc}\n\n{COMPILE_HINT}") from exc
    LOGGER.debug("compiled %r as %s", text, expr)
    return CompiledExpression(text, expr, fn)


def _to_real(raw: Any) -> float:
    if np.iscomplexobj(raw):
        value = complex(raw)
        if value.imag != 0.0:
            return float("nan")
        return value.real
    try:
        return float(raw)
    except OverflowError:
        # integers beyond float range, e.g. 10^400
        return math.inf if raw > 0 else -math.inf
