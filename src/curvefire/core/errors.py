"""
Error types for curvefire expression compiling and configuration.
"""

from __future__ import annotations

from dataclasses import dataclass

# Labels of the three sources a submission is made of
WHERE_PART = "where"
X_PART = "x(t)"
Y_PART = "y(t)"


class CurvefireError(Exception):
    """Base exception for all curvefire errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ConfigError(CurvefireError):
    """
    Raised when configuration cannot be loaded.

    Examples:
    - Malformed curvefire.toml
    - Non-numeric flight time
    - Non-positive sample count
    """

    pass


class CompileError(CurvefireError):
    """
    Raised when a submitted expression cannot be compiled.

    Carries the 1-based line and column of the offending token and, once the
    compiler knows it, which of the three sources failed (``part``).
    """

    def __init__(
        self,
        message: str,
        line: int = 1,
        column: int = 1,
        part: str | None = None,
        snippet: str | None = None,
    ):
        self.line = line
        self.column = column
        self.part = part
        super().__init__(message, ErrorContext(line=line, column=column, snippet=snippet))

    def with_part(self, part: str) -> CompileError:
        """Tag the error with the source it came from and return it."""
        self.part = part
        return self

    def describe(self) -> str:
        """
        Render the one-line status shown to the player.

        Only the ``where`` clause can span several lines, so the line number
        is omitted for the single-expression sources.
        """
        if self.part == WHERE_PART:
            label = f"'{WHERE_PART}'"
            location = f"line {self.line} col {self.column}"
        else:
            label = self.part or "expression"
            location = f"col {self.column}"
        return f"Error in {label} ({location}): {self.message}"


class ExpressionSyntaxError(CompileError):
    """
    Raised when the text does not match the grammar.

    The user-facing message is always ``syntax``; ``detail`` keeps the
    parser's own explanation for logs and verbose output.
    """

    def __init__(
        self,
        line: int,
        column: int,
        detail: str | None = None,
        snippet: str | None = None,
    ):
        self.detail = detail
        super().__init__("syntax", line, column, snippet=snippet)


class SemanticError(CompileError):
    """
    Raised when grammar-valid text has no meaning.

    Examples:
    - Unknown variable or function name
    - Variable defined twice in the where clause
    - Assignment to a named constant
    """

    pass


class UnknownVariableError(SemanticError):
    def __init__(self, name: str, line: int, column: int, snippet: str | None = None):
        self.name = name
        super().__init__(f"unknown variable: {name}", line, column, snippet=snippet)


class UnknownFunctionError(SemanticError):
    def __init__(
        self,
        name: str,
        arity: int,
        line: int,
        column: int,
        snippet: str | None = None,
    ):
        self.name = name
        kind = "unary" if arity == 1 else "binary"
        super().__init__(f"unknown {kind} function: {name}", line, column, snippet=snippet)


class DuplicateVariableError(SemanticError):
    def __init__(self, name: str, line: int, column: int, snippet: str | None = None):
        self.name = name
        super().__init__(f"'{name}' is already defined", line, column, snippet=snippet)


class AssignToConstantError(SemanticError):
    def __init__(self, name: str, line: int, column: int, snippet: str | None = None):
        self.name = name
        super().__init__(f"cannot assign to constant '{name}'", line, column, snippet=snippet)


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional text of the offending line
    """

    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "2:5" followed by the marked snippet
        """
        location = f"{self.line}:{self.column}"
        if self.snippet is not None:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the snippet with its line number and an error marker."""
        prefix = f"{self.line:4d} | "
        marker_pos = len(prefix) + self.column - 1
        return f"{prefix}{self.snippet}\n{' ' * marker_pos}^^^"


def source_line(source: str, line: int) -> str | None:
    """Return the 1-indexed ``line`` of ``source``, or None if out of range."""
    lines = source.split("\n")
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return None
