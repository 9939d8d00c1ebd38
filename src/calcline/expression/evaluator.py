"""
Expression evaluator for calcline.

Post-order walk over the tree produced by the parser. Pure evaluation: no I/O,
no side effects, and no use of Python's eval().
"""

from __future__ import annotations

from calcline.errors import EvalErrorKind, ExpressionEvalError
from calcline.expression.nodes import BinaryExpr, BinaryOp, Expr, Number


def evaluate(expr: Expr, *, bits: int | None = 64) -> int:
    """Compute the integer value of an expression tree.

    Args:
        expr: Parsed expression tree.
        bits: Width of the signed integer every leaf and intermediate result
            must fit in. ``None`` disables the range check.

    Returns:
        The computed value.

    Raises:
        ExpressionEvalError: On division by zero or when a value leaves the
            allowed range.
    """
    bounds = None
    if bits is not None:
        bounds = (-(1 << (bits - 1)), (1 << (bits - 1)) - 1)
    return _interpret(expr, bounds)


def _interpret(expr: Expr, bounds: tuple[int, int] | None) -> int:
    if isinstance(expr, Number):
        return _checked(expr.value, bounds)

    if isinstance(expr, BinaryExpr):
        left = _interpret(expr.left, bounds)
        right = _interpret(expr.right, bounds)
        return _checked(_apply(expr.op, left, right), bounds)

    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _apply(op: BinaryOp, left: int, right: int) -> int:
    if op == BinaryOp.ADD:
        return left + right
    if op == BinaryOp.SUB:
        return left - right
    if op == BinaryOp.MUL:
        return left * right
    if op == BinaryOp.DIV:
        return _divide(left, right)
    raise TypeError(f"Unknown binary op: {op}")


def _divide(left: int, right: int) -> int:
    """Integer division truncating toward zero (floor division rounds down)."""
    if right == 0:
        raise ExpressionEvalError(EvalErrorKind.DIVISION_BY_ZERO, "Division by zero")
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


def _checked(value: int, bounds: tuple[int, int] | None) -> int:
    if bounds is not None and not bounds[0] <= value <= bounds[1]:
        raise ExpressionEvalError(
            EvalErrorKind.OVERFLOW,
            f"Value {value} does not fit in the integer range [{bounds[0]}, {bounds[1]}]",
        )
    return value
