"""Tests for error formatting."""

from curvefire.core.errors import (
    CompileError,
    ConfigError,
    CurvefireError,
    ErrorContext,
    ExpressionSyntaxError,
    SemanticError,
    UnknownVariableError,
    source_line,
)


class TestErrorContext:
    def test_location_only(self) -> None:
        assert ErrorContext(line=2, column=5).format() == "2:5"

    def test_snippet_marker(self) -> None:
        text = ErrorContext(line=1, column=5, snippet="t + q").format()
        lines = text.split("\n")
        assert lines[0] == "1:5"
        assert lines[1] == "   1 | t + q"
        assert lines[2].index("^") == lines[1].index("q")


class TestCompileError:
    def test_hierarchy(self) -> None:
        assert issubclass(ExpressionSyntaxError, CompileError)
        assert issubclass(UnknownVariableError, SemanticError)
        assert issubclass(SemanticError, CompileError)
        assert issubclass(CompileError, CurvefireError)
        assert issubclass(ConfigError, CurvefireError)

    def test_str_includes_location(self) -> None:
        error = UnknownVariableError("q", 1, 5, snippet="t + q")
        assert str(error).startswith("1:5\n")
        assert str(error).endswith("unknown variable: q")

    def test_describe_without_part(self) -> None:
        assert CompileError("boom", 1, 3).describe() == "Error in expression (col 3): boom"

    def test_with_part(self) -> None:
        error = ExpressionSyntaxError(3, 2, detail="Expected expression")
        assert error.with_part("where") is error
        assert error.describe() == "Error in 'where' (line 3 col 2): syntax"

    def test_curve_part_omits_line(self) -> None:
        error = CompileError("boom", 1, 4, part="y(t)")
        assert error.describe() == "Error in y(t) (col 4): boom"


def test_source_line() -> None:
    assert source_line("a\nb\nc", 2) == "b"
    assert source_line("a", 0) is None
    assert source_line("a", 2) is None
