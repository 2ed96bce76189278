"""
Expression evaluator for the Calcamabob expression language.

Reduces an expression AST to a float. Pure evaluation: no I/O, no state
shared between calls, children evaluated before their parent and left
before right.

Arithmetic follows IEEE-754 doubles rather than Python's float rules:
division by zero gives an infinity or NaN, and math domain errors give NaN
(or -inf for a logarithm of zero) instead of raising.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from calcamabob.core.errors import EvaluationError
from calcamabob.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Grouping,
    NumberLiteral,
    UnaryCall,
    UnaryFunc,
)

logger = logging.getLogger(__name__)


def evaluate(expr: Expr) -> float:
    """Evaluate an expression tree to a float.

    Args:
        expr: Parsed expression AST.

    Returns:
        The computed value.

    Raises:
        EvaluationError: If the tree names an unsupported function or operator.
    """
    result = _interpret(expr)
    logger.debug("Evaluated %s = %r", expr, result)
    return result


def _interpret(expr: Expr) -> float:
    """Post-order walk with an explicit stack.

    Each node is pushed once to schedule its children and once more, marked
    ready, to combine their values. Tree depth is therefore not limited by
    the interpreter's recursion limit.
    """
    pending: list[tuple[Expr, bool]] = [(expr, False)]
    values: list[float] = []

    while pending:
        node, ready = pending.pop()

        if isinstance(node, NumberLiteral):
            values.append(node.value)

        elif isinstance(node, Grouping):
            pending.append((node.inner, False))

        elif isinstance(node, BinaryExpr):
            if ready:
                right = values.pop()
                left = values.pop()
                values.append(_apply_binary(node.op, left, right))
            else:
                pending.append((node, True))
                pending.append((node.right, False))
                pending.append((node.left, False))

        elif isinstance(node, UnaryCall):
            if ready:
                values.append(_apply_unary(node, values.pop()))
            else:
                pending.append((node, True))
                pending.append((node.operand, False))

        else:
            raise EvaluationError(f"Unknown expression type: {type(node).__name__}")

    return values.pop()


# ---------------------------------------------------------------------------
# Binary operators
# ---------------------------------------------------------------------------


def _apply_binary(op: BinaryOp, left: float, right: float) -> float:
    """Apply a binary operator to two evaluated operands."""
    if op == BinaryOp.ADD:
        return left + right
    if op == BinaryOp.SUB:
        return left - right
    if op == BinaryOp.MUL:
        return left * right
    if op == BinaryOp.DIV:
        return _divide(left, right)
    if op == BinaryOp.POW:
        return _power(left, right)

    raise EvaluationError(f"operator {op} not available")


def _divide(left: float, right: float) -> float:
    """IEEE division: x/0 is a signed infinity, 0/0 and nan/0 are NaN."""
    if right != 0:
        return left / right
    if left == 0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _power(base: float, exponent: float) -> float:
    """Real exponentiation with C ``pow`` results where ``math.pow`` raises."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # Zero to a negative power; anything else is a negative base with a
        # fractional exponent.
        if base == 0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and value % 2 == 1


# ---------------------------------------------------------------------------
# Unary functions
# ---------------------------------------------------------------------------


def _round_half_away(value: float) -> float:
    """Round to the nearest integer, halfway cases away from zero."""
    if not math.isfinite(value):
        return value
    truncated = float(math.trunc(value))
    if abs(value - truncated) >= 0.5:
        truncated += math.copysign(1.0, value)
    return math.copysign(truncated, value)


def _trunc(value: float) -> float:
    if not math.isfinite(value):
        return value
    return math.copysign(float(math.trunc(value)), value)


_UNARY_FUNCS: dict[UnaryFunc, Callable[[float], float]] = {
    UnaryFunc.SQRT: math.sqrt,
    UnaryFunc.ASIN: math.asin,
    UnaryFunc.ACOS: math.acos,
    UnaryFunc.ATAN: math.atan,
    UnaryFunc.SIN: math.sin,
    UnaryFunc.COS: math.cos,
    UnaryFunc.TAN: math.tan,
    UnaryFunc.SINH: math.sinh,
    UnaryFunc.COSH: math.cosh,
    UnaryFunc.TANH: math.tanh,
    UnaryFunc.LN: math.log,
    UnaryFunc.LOG10: math.log10,
    UnaryFunc.LOG2: math.log2,
    UnaryFunc.ABS: math.fabs,
    UnaryFunc.ROUND: _round_half_away,
    UnaryFunc.TRUNC: _trunc,
    UnaryFunc.RADIAN: math.radians,
    UnaryFunc.DEGREES: math.degrees,
}

_LOGARITHMS = frozenset({UnaryFunc.LN, UnaryFunc.LOG10, UnaryFunc.LOG2})


def _apply_unary(expr: UnaryCall, value: float) -> float:
    """Apply a built-in function (closed set, no user-defined functions)."""
    func = expr.func
    impl = _UNARY_FUNCS.get(func) if func is not None else None
    if impl is None:
        raise EvaluationError(f"prefix unary operator {expr.name} not available")

    try:
        return impl(value)
    except OverflowError:
        if func == UnaryFunc.SINH:
            return math.copysign(math.inf, value)
        return math.inf
    except ValueError:
        if func in _LOGARITHMS and value == 0:
            return -math.inf
        return math.nan
