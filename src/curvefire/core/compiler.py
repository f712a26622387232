"""
Curve compiler: turns the three submitted sources into a ``Parametric``.

A submission is an ``x(t)`` expression, a ``y(t)`` expression, and a
``where`` clause of auxiliary assignments. The where clause is compiled
first; both curve expressions are then compiled against the names it
defines. Any failure rejects the whole submission with one ``CompileError``
tagged by the part that failed.

Usage:
    from curvefire.core.compiler import compile_parametric

    curve = compile_parametric("v", "u ^ 2", "u = 2 * t - 4\\nv = u + t * 0")
    curve.evaluate(0.5)  # (-3.0, 9.0)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
from pydantic import BaseModel, ConfigDict, Field

from curvefire.core.errors import (
    WHERE_PART,
    X_PART,
    Y_PART,
    CompileError,
    ExpressionSyntaxError,
)
from curvefire.core.expression_lang.builder import build_assigns, build_function
from curvefire.core.expression_lang.evaluator import evaluate, evaluate_many
from curvefire.core.ir.functions import Function
from curvefire.core.registry import CONSTANTS, BinaryFn, UnaryFn

logger = logging.getLogger(__name__)

SUCCESS_STATUS = "Successfully entered functions"


class Parametric(BaseModel):
    """
    A compiled parametric curve.

    The source strings are kept only so the entry boxes can show what was
    submitted; evaluation never reads them.
    """

    x: Function
    y: Function
    assigns: tuple[Function, ...] = Field(default=(), description="where-assignments by index")
    names: tuple[str, ...] = Field(default=(), description="where-assignment names by index")
    source_x: str = ""
    source_y: str = ""
    source_where: str = ""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def evaluate(self, t: float) -> tuple[float, float]:
        """Position on the curve at parameter ``t``."""
        return evaluate(self.x, t, self.assigns), evaluate(self.y, t, self.assigns)

    def evaluate_many(self, ts: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Positions at every value of ``ts`` as an ``(n, 2)`` array."""
        xs = evaluate_many(self.x, ts, self.assigns)
        ys = evaluate_many(self.y, ts, self.assigns)
        return np.stack([xs, ys], axis=-1)


def compile_parametric(x_source: str, y_source: str, where_source: str = "") -> Parametric:
    """Compile a submission into a ``Parametric``.

    Args:
        x_source: The x(t) expression, optionally written as ``x(t) = ...``.
        y_source: The y(t) expression, optionally written as ``y(t) = ...``.
        where_source: Newline- or ``;``-separated ``name = expr`` assignments.

    Returns:
        The compiled curve.

    Raises:
        CompileError: Tagged with ``part`` "where", "x(t)" or "y(t)".
    """
    logger.debug("Compiling curve x=%r y=%r where=%r", x_source, y_source, where_source)

    try:
        assigns, resolver = build_assigns(where_source)
    except CompileError as e:
        _log_rejected(e.with_part(WHERE_PART))
        raise

    functions: list[Function] = []
    for axis, part, source in (("x", X_PART, x_source), ("y", Y_PART, y_source)):
        try:
            functions.append(build_function(source, resolver, axis=axis))
        except CompileError as e:
            _log_rejected(e.with_part(part))
            raise

    fx, fy = functions
    logger.debug("Compiled curve (%s, %s) with %d assignment(s)", fx, fy, len(assigns))
    return Parametric(
        x=fx,
        y=fy,
        assigns=assigns,
        names=tuple(resolver.names),
        source_x=x_source,
        source_y=y_source,
        source_where=where_source,
    )


def _log_rejected(error: CompileError) -> None:
    logger.info("Rejected submission: %s", error.describe())
    if isinstance(error, ExpressionSyntaxError) and error.detail:
        logger.debug("Parser detail: %s", error.detail)


@dataclass
class Submission:
    """Outcome of a submission, as shown in the status line."""

    parametric: Parametric | None
    error: CompileError | None
    status: str

    @property
    def ok(self) -> bool:
        return self.error is None


def submit_functions(x_source: str, y_source: str, where_source: str = "") -> Submission:
    """Compile a submission without raising on bad input.

    Failed submissions leave nothing behind; the caller keeps whatever curve
    it had before and shows ``status`` to the player.
    """
    try:
        parametric = compile_parametric(x_source, y_source, where_source)
    except CompileError as e:
        return Submission(parametric=None, error=e, status=e.describe())
    return Submission(parametric=parametric, error=None, status=SUCCESS_STATUS)


def _wrap_names(names: list[str], width: int = 50) -> str:
    lines: list[str] = []
    current = ""
    for name in names:
        candidate = f"{current}, {name}" if current else name
        if len(candidate) + 1 > width and current:
            lines.append(current + ",")
            current = name
        else:
            current = candidate
    lines.append(current)
    return "\n".join(lines)


QUICK_HELP = f"""
Examples:
x(t) = v                    x(t) = -2 * t
y(t) = u^2                  y(t) = sin(3 * t)
where u = 2 * t - 4         where
      v = u + t * 0               <nothing>

Operations:
add (+), subtract (-), multiply (*), divide (/),
floor divide (//), modulo (%), exponent (^)

Constants: {", ".join(CONSTANTS)}

Unary functions (syntax: `sin a`):
{_wrap_names([fn.value for fn in UnaryFn])}

Binary functions (syntax: `min a b`): {", ".join(fn.value for fn in BinaryFn)}

Precedence (highest to lowest):
function call
^
* / // %
+ -
"""
