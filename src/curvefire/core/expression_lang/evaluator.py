"""
Expression evaluator for curvefire curve expressions.

Evaluates a compiled ``Function`` at a value of the curve parameter ``t``.
Pure evaluation: no I/O, no side effects, no failure modes beyond IEEE 754
arithmetic. Division by zero, domain errors and overflow produce infinities
and NaN, which propagate to the caller.

All arithmetic goes through numpy float64 ufuncs, so ``t`` may also be an
array of parameter values and the whole curve is sampled in one pass.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from curvefire.core.ir.functions import (
    Add,
    AdditiveOp,
    Call1,
    Call2,
    Const,
    Exp,
    Function,
    Mul,
    MultiplicativeOp,
    Neg,
    Var,
)
from curvefire.core.registry import call_binary, call_unary

Value = np.float64 | npt.NDArray[np.float64]


def evaluate(function: Function, t: float, assigns: Sequence[Function] = ()) -> float:
    """Evaluate ``function`` at parameter ``t``.

    Args:
        function: Compiled curve expression.
        t: Curve parameter; conceptually in [0, 1] but unrestricted.
        assigns: The where-assignments ``Var`` nodes refer to.

    Returns:
        The value as a Python float (possibly inf or NaN).
    """
    param = np.float64(t)
    with np.errstate(all="ignore"):
        return float(_interpret(function, param, _interpret_assigns(param, assigns)))


def evaluate_many(
    function: Function,
    ts: npt.ArrayLike,
    assigns: Sequence[Function] = (),
) -> npt.NDArray[np.float64]:
    """Evaluate ``function`` at every parameter value in ``ts``.

    Returns:
        A float64 array with the shape of ``ts``.
    """
    params = np.asarray(ts, dtype=np.float64)
    with np.errstate(all="ignore"):
        values = _interpret(function, params, _interpret_assigns(params, assigns))
    # Expressions without t evaluate to a scalar
    return np.broadcast_to(values, params.shape).astype(np.float64)


def _interpret_assigns(t: Value, assigns: Sequence[Function]) -> list[Value]:
    """Values of the where-assignments, in index order.

    Assignment i only refers to assignments before it, so one forward pass
    evaluates each exactly once.
    """
    values: list[Value] = []
    for assign in assigns:
        values.append(_interpret(assign, t, values))
    return values


def _interpret(function: Function, t: Value, values: Sequence[Value]) -> Value:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(function, Var):
        if function.index is None:
            return t
        return values[function.index]

    if isinstance(function, Const):
        return np.float64(function.value)

    if isinstance(function, Add):
        return _interpret_add(function, t, values)

    if isinstance(function, Mul):
        return _interpret_mul(function, t, values)

    if isinstance(function, Exp):
        return _interpret_exp(function, t, values)

    if isinstance(function, Neg):
        return np.negative(_interpret(function.operand, t, values))

    if isinstance(function, Call1):
        return call_unary(function.function, _interpret(function.operand, t, values))

    if isinstance(function, Call2):
        first, second = function.operands
        return call_binary(
            function.function,
            _interpret(first, t, values),
            _interpret(second, t, values),
        )

    raise TypeError(f"Unknown function node: {type(function).__name__}")


def _interpret_add(function: Add, t: Value, values: Sequence[Value]) -> Value:
    acc: Value = np.float64(0.0)
    for term, op in function.terms:
        value = _interpret(term, t, values)
        if op == AdditiveOp.PLUS:
            acc = np.add(acc, value)
        else:
            acc = np.subtract(acc, value)
    return acc


def _interpret_mul(function: Mul, t: Value, values: Sequence[Value]) -> Value:
    acc: Value = np.float64(1.0)
    for term, op in function.terms:
        value = _interpret(term, t, values)
        if op == MultiplicativeOp.TIMES:
            acc = np.multiply(acc, value)
        elif op == MultiplicativeOp.DIVIDE:
            acc = np.divide(acc, value)
        elif op == MultiplicativeOp.FLOOR_DIVIDE:
            acc = div_euclid(acc, value)
        else:
            acc = rem_euclid(acc, value)
    return acc


def _interpret_exp(function: Exp, t: Value, values: Sequence[Value]) -> Value:
    # a ^ b ^ c is a ^ (b ^ c): fold from the right, seeded with 1
    acc: Value = np.float64(1.0)
    for base in reversed(function.bases):
        acc = np.power(_interpret(base, t, values), acc)
    return acc


def div_euclid(a: Value, b: Value) -> Value:
    """Euclidean quotient: the q with ``a = b * q + r`` and ``0 <= r < |b|``."""
    q = np.trunc(np.divide(a, b))
    r = np.fmod(a, b)
    return np.where(r < 0, np.where(b > 0, q - 1.0, q + 1.0), q)[()]


def rem_euclid(a: Value, b: Value) -> Value:
    """Euclidean remainder, never negative for finite results."""
    r = np.fmod(a, b)
    return np.where(r < 0, r + np.fabs(b), r)[()]
