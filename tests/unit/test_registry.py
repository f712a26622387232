"""Tests for the function and constant registry."""

import math

import pytest

from curvefire.core.registry import (
    CONSTANTS,
    BinaryFn,
    UnaryFn,
    call_binary,
    call_unary,
    lookup_binary,
    lookup_constant,
    lookup_unary,
)


class TestLookup:
    def test_sizes(self) -> None:
        assert len(UnaryFn) == 22
        assert len(BinaryFn) == 3
        assert set(CONSTANTS) == {"tau", "pi", "e"}

    def test_unary(self) -> None:
        assert lookup_unary("sin") is UnaryFn.SIN
        assert lookup_unary("log2") is UnaryFn.LOG2
        assert lookup_unary("min") is None
        assert lookup_unary("Sin") is None

    def test_binary(self) -> None:
        assert lookup_binary("atan2") is BinaryFn.ATAN2
        assert lookup_binary("sin") is None

    def test_constant(self) -> None:
        assert lookup_constant("tau") == math.tau
        assert lookup_constant("t") is None

    def test_constants_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            CONSTANTS["pi"] = 3.0  # type: ignore[index]


class TestPrimitives:
    @pytest.mark.parametrize(
        ("fn", "arg", "expected"),
        [
            (UnaryFn.SIN, 0.0, 0.0),
            (UnaryFn.COS, 0.0, 1.0),
            (UnaryFn.TAN, 0.0, 0.0),
            (UnaryFn.ASIN, 1.0, math.pi / 2),
            (UnaryFn.ACOS, 1.0, 0.0),
            (UnaryFn.ATAN, 1.0, math.pi / 4),
            (UnaryFn.SINH, 0.0, 0.0),
            (UnaryFn.COSH, 0.0, 1.0),
            (UnaryFn.TANH, 0.0, 0.0),
            (UnaryFn.ASINH, 0.0, 0.0),
            (UnaryFn.ACOSH, 1.0, 0.0),
            (UnaryFn.ATANH, 0.0, 0.0),
            (UnaryFn.LN, math.e, 1.0),
            (UnaryFn.LOG2, 8.0, 3.0),
            (UnaryFn.LOG10, 1000.0, 3.0),
            (UnaryFn.SQRT, 9.0, 3.0),
            (UnaryFn.CBRT, -27.0, -3.0),
            (UnaryFn.ABS, -2.0, 2.0),
            (UnaryFn.SIGN, -0.0, -1.0),
            (UnaryFn.SIGN, 0.0, 1.0),
            (UnaryFn.FLOOR, -1.5, -2.0),
            (UnaryFn.CEIL, -1.5, -1.0),
            (UnaryFn.FRACT, -1.25, -0.25),
        ],
    )
    def test_unary(self, fn: UnaryFn, arg: float, expected: float) -> None:
        assert call_unary(fn, arg) == pytest.approx(expected)

    def test_sign_of_nan(self) -> None:
        assert math.isnan(call_unary(UnaryFn.SIGN, math.nan))

    def test_binary(self) -> None:
        assert call_binary(BinaryFn.MIN, 2.0, -1.0) == -1.0
        assert call_binary(BinaryFn.MAX, 2.0, -1.0) == 2.0
        assert call_binary(BinaryFn.ATAN2, 0.0, -1.0) == pytest.approx(math.pi)
