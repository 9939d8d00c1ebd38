"""
Error types for calcline tokenizing, parsing, evaluation and configuration.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional


class CalcError(Exception):
    """Base exception for all calcline errors."""

    def __init__(
        self,
        message: str,
        pos: int | None = None,
        context: Optional["ErrorContext"] = None,
    ):
        self.message = message
        self.pos = pos
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message

    def with_source(self, source: str) -> "CalcError":
        """Attach the offending source text so the message can point at it."""
        if self.pos is not None and self.context is None:
            self.context = ErrorContext(source=source, pos=self.pos)
            self.args = (self._format_message(),)
        return self


class InvalidInputError(CalcError):
    """
    Raised when a line contains a character outside the arithmetic alphabet.

    Spaces and '=' are ignored; every other character that is not a
    digit, an operator or a parenthesis ends up here.
    """

    def __init__(self, char: str, pos: int):
        self.char = char
        super().__init__(f"Unexpected character: {char!r}", pos)


class ParseErrorKind(StrEnum):
    """Structural grammar violations."""

    UNEXPECTED_END = "unexpected_end"
    MALFORMED_NUMBER = "malformed_number"
    TRAILING_TOKENS = "trailing_tokens"
    UNMATCHED_PAREN = "unmatched_paren"
    NUMBER_TOO_LONG = "number_too_long"
    TOO_DEEP = "too_deep"


class ExpressionParseError(CalcError):
    """
    Raised when the token stream does not match the grammar.

    Examples:
    - Empty expression or an operator with nothing after it
    - Two operators in a row
    - Leftover tokens after a complete expression
    - '(' without a matching ')'
    - A literal with more digits than any allowed integer
    - Nesting deeper than the parser and evaluator allow
    """

    def __init__(self, kind: ParseErrorKind, message: str, pos: int):
        self.kind = kind
        super().__init__(message, pos)


class EvalErrorKind(StrEnum):
    """Failures while computing the value of a tree."""

    DIVISION_BY_ZERO = "division_by_zero"
    OVERFLOW = "overflow"


class ExpressionEvalError(CalcError):
    """Raised when a well-formed tree has no integer value."""

    def __init__(self, kind: EvalErrorKind, message: str):
        self.kind = kind
        super().__init__(message)


class ConfigError(CalcError):
    """Raised when a configuration file cannot be loaded."""


@dataclass
class ErrorContext:
    """
    Location of an error inside a single input line.

    Attributes:
        source: The raw line (or token stream) the error was found in
        pos: Zero-based offset of the offending character
    """

    source: str
    pos: int

    def format(self) -> str:
        """
        Format the source with a marker under the offending character.

        Returns:
            Two lines, e.g. "  | 1++2" and "  |   ^"
        """
        pos = min(max(self.pos, 0), len(self.source))
        return f"  | {self.source}\n  | {' ' * pos}^"


def describe(error: CalcError) -> str:
    """Short diagnostic label for an error, e.g. 'parse error (trailing_tokens)'."""
    if isinstance(error, InvalidInputError):
        return "invalid input"
    if isinstance(error, ExpressionParseError):
        return f"parse error ({error.kind})"
    if isinstance(error, ExpressionEvalError):
        return f"evaluation error ({error.kind})"
    return "error"
