"""
Tokenizer for calcline expressions.

Filters a raw input line down to the token stream consumed by the parser: a
string holding only digits, the four operators and parentheses.
"""

from __future__ import annotations

from calcline.errors import InvalidInputError

DIGITS = "0123456789"
OPERATORS = "+-*/"
VALID_TOKENS = OPERATORS + DIGITS + "()"

# Characters dropped from the stream ('=' lets users type "2 + 2 =")
_IGNORED = " ="


def tokenize(source: str) -> str:
    """Filter an input line into a token stream.

    Args:
        source: One line of input, terminator already stripped.

    Returns:
        The alphabet characters of ``source`` in their original order. May be
        empty; emptiness is reported by the parser.

    Raises:
        InvalidInputError: If any character is neither a token nor ignorable.
    """
    tokens: list[str] = []

    for i, c in enumerate(source):
        if c in VALID_TOKENS:
            tokens.append(c)
        elif c in _IGNORED:
            continue
        else:
            raise InvalidInputError(c, i)

    return "".join(tokens)
