"""
calcline - a one-line integer calculator.

Tokenizes, parses and evaluates arithmetic expressions such as
``(2 + 6) * 6`` and answers with the integer result or "invalid input".
"""

from __future__ import annotations

from ._version import get_version
from .config import CalculatorConfig, load_config
from .errors import (
    CalcError,
    ConfigError,
    EvalErrorKind,
    ExpressionEvalError,
    ExpressionParseError,
    InvalidInputError,
    ParseErrorKind,
)
from .expression import calculate, render_reply

__version__ = get_version()

__all__ = [
    "__version__",
    "CalcError",
    "CalculatorConfig",
    "ConfigError",
    "EvalErrorKind",
    "ExpressionEvalError",
    "ExpressionParseError",
    "InvalidInputError",
    "ParseErrorKind",
    "calculate",
    "load_config",
    "render_reply",
]
