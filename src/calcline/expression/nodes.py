"""
Expression tree types for calcline.

A tree is built bottom-up by the parser, walked once by the evaluator and then
dropped. Each node owns its children outright; nodes are frozen, so a subtree
cannot be shared or re-parented after construction.

Supports:
- Integer literals: 0, 42, 007
- Arithmetic: +, -, *, /
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators, keyed by their token character."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Number(BaseModel):
    """An integer literal."""

    value: int = Field(ge=0, description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)

    @property
    def depth(self) -> int:
        return 1

    def node_count(self) -> int:
        return 1


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"

    @property
    def depth(self) -> int:
        """Longest root-to-leaf path, counting nodes."""
        return max(level for _, level in walk(self))

    def node_count(self) -> int:
        return sum(1 for _ in walk(self))


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Number | BinaryExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()


def walk(expr: Expr) -> Iterator[tuple[Expr, int]]:
    """Yield every node with its level (the root is level 1), without recursion."""
    stack: list[tuple[Expr, int]] = [(expr, 1)]
    while stack:
        node, level = stack.pop()
        yield node, level
        if isinstance(node, BinaryExpr):
            stack.append((node.right, level + 1))
            stack.append((node.left, level + 1))


def render_tokens(expr: Expr) -> str:
    """Render a tree as a compact token stream that parses back to it.

    Every operator node is wrapped in parentheses, so the result does not rely
    on precedence or associativity: ``render_tokens(parse(s))`` re-parses to a
    tree with the same shape.
    """
    if isinstance(expr, Number):
        return str(expr.value)
    return f"({render_tokens(expr.left)}{expr.op.value}{render_tokens(expr.right)})"
