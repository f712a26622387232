"""
Named functions and constants available in curve expressions.

Function names are looked up by string into a closed enum, and each enum
member is bound once, at import, to an IEEE double primitive. numpy ufuncs are
used rather than ``math`` so that domain errors and overflow produce NaN and
infinity instead of raising.

Usage:
    from curvefire.core.registry import UnaryFn, call_unary

    fn = lookup_unary("sin")
    call_unary(fn, 0.0)  # 0.0
"""

from __future__ import annotations

import math
from collections.abc import Callable
from enum import StrEnum
from types import MappingProxyType

import numpy as np


class UnaryFn(StrEnum):
    """Functions of one argument (syntax: ``sin a``)."""

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    ASINH = "asinh"
    ACOSH = "acosh"
    ATANH = "atanh"
    LN = "ln"
    LOG2 = "log2"
    LOG10 = "log10"
    SQRT = "sqrt"
    CBRT = "cbrt"
    ABS = "abs"
    SIGN = "sign"
    FLOOR = "floor"
    CEIL = "ceil"
    FRACT = "fract"


class BinaryFn(StrEnum):
    """Functions of two arguments (syntax: ``min a b``)."""

    MIN = "min"
    MAX = "max"
    ATAN2 = "atan2"


def _signum(x: float) -> float:
    # Sign bit decides, so -0.0 maps to -1.0
    return np.where(np.isnan(x), x, np.copysign(1.0, x))[()]


def _fract(x: float) -> float:
    return np.subtract(x, np.trunc(x))


_UNARY_PRIMITIVES: dict[UnaryFn, Callable[[float], float]] = {
    UnaryFn.SIN: np.sin,
    UnaryFn.COS: np.cos,
    UnaryFn.TAN: np.tan,
    UnaryFn.ASIN: np.arcsin,
    UnaryFn.ACOS: np.arccos,
    UnaryFn.ATAN: np.arctan,
    UnaryFn.SINH: np.sinh,
    UnaryFn.COSH: np.cosh,
    UnaryFn.TANH: np.tanh,
    UnaryFn.ASINH: np.arcsinh,
    UnaryFn.ACOSH: np.arccosh,
    UnaryFn.ATANH: np.arctanh,
    UnaryFn.LN: np.log,
    UnaryFn.LOG2: np.log2,
    UnaryFn.LOG10: np.log10,
    UnaryFn.SQRT: np.sqrt,
    UnaryFn.CBRT: np.cbrt,
    UnaryFn.ABS: np.fabs,
    UnaryFn.SIGN: _signum,
    UnaryFn.FLOOR: np.floor,
    UnaryFn.CEIL: np.ceil,
    UnaryFn.FRACT: _fract,
}

# fmin/fmax return the other operand when one is NaN
_BINARY_PRIMITIVES: dict[BinaryFn, Callable[[float, float], float]] = {
    BinaryFn.MIN: np.fmin,
    BinaryFn.MAX: np.fmax,
    BinaryFn.ATAN2: np.arctan2,
}

CONSTANTS: MappingProxyType[str, float] = MappingProxyType(
    {
        "tau": math.tau,
        "pi": math.pi,
        "e": math.e,
    }
)


def lookup_unary(name: str) -> UnaryFn | None:
    """Return the unary function called ``name``, or None."""
    try:
        return UnaryFn(name)
    except ValueError:
        return None


def lookup_binary(name: str) -> BinaryFn | None:
    """Return the binary function called ``name``, or None."""
    try:
        return BinaryFn(name)
    except ValueError:
        return None


def lookup_constant(name: str) -> float | None:
    return CONSTANTS.get(name)


def call_unary(fn: UnaryFn, value: float) -> float:
    return _UNARY_PRIMITIVES[fn](value)


def call_binary(fn: BinaryFn, first: float, second: float) -> float:
    return _BINARY_PRIMITIVES[fn](first, second)
