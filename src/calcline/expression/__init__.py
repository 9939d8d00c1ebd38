"""
calcline integer expression language.

Tokenizer, parser and evaluator for one-line arithmetic expressions over
non-negative integer literals, `+ - * /` and parentheses.

Usage:
    from calcline.expression import calculate, render_reply

    calculate("2 + 6 * 6 =")
    # 38
    render_reply("2 a 2")
    # 'invalid input'
"""

from __future__ import annotations

import logging

from calcline.config import CalculatorConfig
from calcline.errors import CalcError, ExpressionParseError, InvalidInputError, describe
from calcline.expression.evaluator import evaluate
from calcline.expression.nodes import BinaryExpr, BinaryOp, Expr, Number, render_tokens
from calcline.expression.parser import parse
from calcline.expression.tokenizer import tokenize

logger = logging.getLogger(__name__)


def parse_line(line: str, config: CalculatorConfig | None = None) -> Expr:
    """Tokenize and parse one input line.

    Positions in the raised error point into the raw line for tokenizer
    errors and into the token stream for parse errors.
    """
    config = config or CalculatorConfig()
    try:
        tokens = tokenize(line)
    except InvalidInputError as e:
        e.with_source(line)
        raise
    try:
        return parse(tokens, strict_parentheses=config.strict_parentheses)
    except ExpressionParseError as e:
        e.with_source(tokens)
        raise


def calculate(line: str, config: CalculatorConfig | None = None) -> int:
    """Evaluate one input line.

    Raises:
        InvalidInputError: If the line holds a character outside the alphabet.
        ExpressionParseError: If the tokens do not form one expression.
        ExpressionEvalError: On division by zero or overflow.
    """
    config = config or CalculatorConfig()
    expr = parse_line(line, config)
    return evaluate(expr, bits=config.int_bits)


def render_reply(line: str, config: CalculatorConfig | None = None) -> str:
    """Evaluate one input line into the text shown to the user."""
    config = config or CalculatorConfig()
    try:
        return str(calculate(line, config))
    except CalcError as e:
        logger.debug("Rejected %r: %s: %s", line, describe(e), e.message)
        return config.invalid_message


__all__ = [
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "Number",
    "calculate",
    "evaluate",
    "parse",
    "parse_line",
    "render_reply",
    "render_tokens",
    "tokenize",
]
