"""
Recursive descent parser for calcline expressions.

Grammar (precedence low to high):
    addition       → multiplication (("+" | "-") multiplication)*
    multiplication → parenthesis (("*" | "/") parenthesis)*
    parenthesis    → "(" addition ")" | number
    number         → digit+
"""

from __future__ import annotations

from calcline.errors import ExpressionParseError, ParseErrorKind
from calcline.expression.nodes import BinaryExpr, BinaryOp, Expr, Number
from calcline.expression.tokenizer import DIGITS

# Deepest tree, and deepest parenthesis nesting, accepted. The evaluator and
# the tree renderers recurse once per level.
MAX_DEPTH = 100

# Significant digits of 2**4095, the widest configurable result
MAX_LITERAL_DIGITS = 1233


class Cursor:
    """Read position over a token stream.

    The position only ever moves forward and stays within ``[0, length]``.
    """

    __slots__ = ("tokens", "pos", "length", "groups", "max_depth")

    def __init__(self, tokens: str, max_depth: int = MAX_DEPTH) -> None:
        self.tokens = tokens
        self.pos = 0
        self.length = len(tokens)
        self.groups = 0  # currently open parentheses
        self.max_depth = max_depth

    def __repr__(self) -> str:
        return f"Cursor({self.tokens!r}, pos={self.pos})"

    @property
    def at_end(self) -> bool:
        return self.pos >= self.length

    @property
    def current(self) -> str | None:
        """The next unconsumed token, or None at end of stream."""
        if self.at_end:
            return None
        return self.tokens[self.pos]

    def advance(self) -> str:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def match(self, *chars: str) -> str | None:
        if self.current is not None and self.current in chars:
            return self.advance()
        return None


# -- Grammar rules --


def parse_addition(cursor: Cursor, strict: bool = True) -> Expr:
    """multiplication (('+' | '-') multiplication)*"""
    left = parse_multiplication(cursor, strict)
    while op := cursor.match(BinaryOp.ADD, BinaryOp.SUB):
        right = parse_multiplication(cursor, strict)
        left = BinaryExpr(op=BinaryOp(op), left=left, right=right)
    return left


def parse_multiplication(cursor: Cursor, strict: bool = True) -> Expr:
    """parenthesis (('*' | '/') parenthesis)*"""
    left = parse_parenthesis(cursor, strict)
    while op := cursor.match(BinaryOp.MUL, BinaryOp.DIV):
        right = parse_parenthesis(cursor, strict)
        left = BinaryExpr(op=BinaryOp(op), left=left, right=right)
    return left


def parse_parenthesis(cursor: Cursor, strict: bool = True) -> Expr:
    """'(' addition ')' | number

    A missing ')' is an error when ``strict``; otherwise the group simply
    ends where the inner addition stopped.
    """
    if not cursor.match("("):
        return parse_number(cursor)

    open_pos = cursor.pos - 1
    cursor.groups += 1
    if cursor.groups > cursor.max_depth:
        raise ExpressionParseError(
            ParseErrorKind.TOO_DEEP,
            f"Parentheses nested deeper than {cursor.max_depth}",
            open_pos,
        )

    expr = parse_addition(cursor, strict)
    if not cursor.match(")") and strict:
        raise ExpressionParseError(
            ParseErrorKind.UNMATCHED_PAREN,
            f"Missing ')' for '(' at position {open_pos}",
            cursor.pos,
        )
    cursor.groups -= 1
    return expr


def parse_number(cursor: Cursor) -> Number:
    """digit+"""
    start = cursor.pos
    while cursor.current is not None and cursor.current in DIGITS:
        cursor.advance()

    if cursor.pos == start:
        if cursor.at_end:
            raise ExpressionParseError(
                ParseErrorKind.UNEXPECTED_END,
                "Unexpected end of expression, expected a number",
                cursor.pos,
            )
        raise ExpressionParseError(
            ParseErrorKind.MALFORMED_NUMBER,
            f"Expected a number, got {cursor.current!r}",
            cursor.pos,
        )

    digits = cursor.tokens[start : cursor.pos]
    if len(digits.lstrip("0")) > MAX_LITERAL_DIGITS:
        raise ExpressionParseError(
            ParseErrorKind.NUMBER_TOO_LONG,
            f"Number has more than {MAX_LITERAL_DIGITS} digits",
            start,
        )
    return Number(value=int(digits))


def parse(tokens: str, *, strict_parentheses: bool = True, max_depth: int = MAX_DEPTH) -> Expr:
    """Parse a token stream into an expression tree.

    Args:
        tokens: Output of :func:`calcline.expression.tokenizer.tokenize`.
        strict_parentheses: Reject '(' without a matching ')'.
        max_depth: Deepest tree, and deepest parenthesis nesting, accepted.

    Returns:
        Root of the parsed tree.

    Raises:
        ExpressionParseError: If the stream does not form one complete
            expression, or nests deeper than ``max_depth``.
    """
    cursor = Cursor(tokens, max_depth)
    expr = parse_addition(cursor, strict_parentheses)

    # Ensure all tokens consumed
    if not cursor.at_end:
        raise ExpressionParseError(
            ParseErrorKind.TRAILING_TOKENS,
            f"Unexpected token after expression: {cursor.current!r}",
            cursor.pos,
        )

    # Operator chains grow the tree without any parentheses
    if expr.depth > max_depth:
        raise ExpressionParseError(
            ParseErrorKind.TOO_DEEP,
            f"Expression nested deeper than {max_depth}",
            0,
        )

    return expr
