"""
Timed trajectory of an object following a compiled curve.

The curve is sampled at ``t = elapsed / flight_time`` and shifted so that
the object starts where its owner stands: ``offset = origin - curve(0)``.
Rendering, collision and audio collaborators read positions from here;
nothing in this module touches them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from curvefire.core.compiler import Parametric

DEFAULT_FLIGHT_TIME = 5.0

Point = tuple[float, float]


@dataclass
class Trajectory:
    """A curve bound to a starting point and a flight time in seconds."""

    parametric: Parametric
    origin: Point = (0.0, 0.0)
    flight_time: float = DEFAULT_FLIGHT_TIME
    offset: Point = field(init=False)

    def __post_init__(self) -> None:
        if not (self.flight_time > 0 and math.isfinite(self.flight_time)):
            raise ValueError(f"flight_time must be positive, got {self.flight_time}")
        start_x, start_y = self.parametric.evaluate(0.0)
        self.offset = (self.origin[0] - start_x, self.origin[1] - start_y)

    def progress(self, elapsed: float) -> float:
        """Curve parameter after ``elapsed`` seconds, clamped to [0, 1]."""
        return min(max(elapsed / self.flight_time, 0.0), 1.0)

    def finished(self, elapsed: float) -> bool:
        return elapsed >= self.flight_time

    def position_at(self, elapsed: float) -> Point:
        x, y = self.parametric.evaluate(self.progress(elapsed))
        return x + self.offset[0], y + self.offset[1]

    def sample(self, count: int) -> list[tuple[float, float, float]]:
        """Like ``sample_curve`` but shifted by the offset, i.e. where the object flies."""
        dx, dy = self.offset
        return [(t, x + dx, y + dy) for t, x, y in sample_curve(self.parametric, count)]


def sample_curve(parametric: Parametric, count: int) -> list[tuple[float, float, float]]:
    """``count`` evenly spaced ``(t, x, y)`` points of the curve over t in [0, 1]."""
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count}")
    ts = np.linspace(0.0, 1.0, count)
    points = parametric.evaluate_many(ts)
    return [(float(t), float(x), float(y)) for t, (x, y) in zip(ts, points)]


def heading(previous: Point, current: Point) -> float | None:
    """Direction of travel in radians from the x axis, None if the object did not move."""
    dx = current[0] - previous[0]
    dy = current[1] - previous[1]
    if dx == 0 and dy == 0:
        return None
    return math.atan2(dy, dx)
