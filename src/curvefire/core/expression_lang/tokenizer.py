"""
Tokenizer for curvefire curve expressions.

Converts an expression string into a sequence of typed tokens with 1-based
line and column tracking. Newlines are kept as tokens because they separate
assignments in a ``where`` clause; the parser decides where they matter.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

from curvefire.core.errors import ExpressionSyntaxError, source_line


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    NUMBER = auto()

    # Identifiers (variables, constants, function names)
    IDENT = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    DOUBLE_SLASH = auto()
    PERCENT = auto()
    CARET = auto()
    EQUALS = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    SEMICOLON = auto()
    NEWLINE = auto()

    # End of input
    EOF = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos", "line", "column")

    def __init__(self, kind: TokenKind, value: str, pos: int, line: int, column: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos
        self.line = line
        self.column = column

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, {self.line}:{self.column})"


# Number pattern: 12, 1.5, 1., .5, with optional exponent
_NUMBER_RE = re.compile(r"([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?", re.ASCII)
# Identifier: letter followed by alphanumerics/underscores (log2, atan2)
_IDENT_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9_]*", re.ASCII)

_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "%": TokenKind.PERCENT,
    "^": TokenKind.CARET,
    "=": TokenKind.EQUALS,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ";": TokenKind.SEMICOLON,
}


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens ending in EOF."""
    tokens: list[Token] = []
    i = 0
    n = len(source)
    line = 1
    line_start = 0

    while i < n:
        c = source[i]
        column = i - line_start + 1

        if c == "\n":
            tokens.append(Token(TokenKind.NEWLINE, c, i, line, column))
            i += 1
            line += 1
            line_start = i
            continue

        # Skip whitespace
        if c in " \t\r\f\v":
            i += 1
            continue

        # Both patterns are ASCII-only; "²" or "٣" fall through to the error below
        if m := _NUMBER_RE.match(source, i):
            tokens.append(Token(TokenKind.NUMBER, m.group(0), i, line, column))
            i = m.end()
            continue

        if m := _IDENT_RE.match(source, i):
            tokens.append(Token(TokenKind.IDENT, m.group(0), i, line, column))
            i = m.end()
            continue

        if source.startswith("//", i):
            tokens.append(Token(TokenKind.DOUBLE_SLASH, "//", i, line, column))
            i += 2
            continue

        if c in _SINGLE_CHAR:
            tokens.append(Token(_SINGLE_CHAR[c], c, i, line, column))
            i += 1
            continue

        raise ExpressionSyntaxError(
            line,
            column,
            detail=f"Unexpected character: {c!r}",
            snippet=source_line(source, line),
        )

    tokens.append(Token(TokenKind.EOF, "", n, line, n - line_start + 1))
    return tokens
