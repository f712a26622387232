"""Tests for timed trajectories."""

import math

import pytest

from curvefire.core.compiler import Parametric, compile_parametric
from curvefire.core.trajectory import Trajectory, heading, sample_curve


class TestTrajectory:
    def test_starts_at_origin(self, circle_curve: Parametric) -> None:
        trajectory = Trajectory(circle_curve, origin=(3.0, 4.0))
        assert trajectory.offset == pytest.approx((2.0, 4.0))
        assert trajectory.position_at(0.0) == pytest.approx((3.0, 4.0))

    def test_position_scales_time(self) -> None:
        curve = compile_parametric("t", "t ^ 2", "")
        trajectory = Trajectory(curve, origin=(1.0, 2.0), flight_time=5.0)
        assert trajectory.position_at(2.5) == pytest.approx((1.5, 2.25))

    def test_progress_is_clamped(self, line_curve: Parametric) -> None:
        trajectory = Trajectory(line_curve, flight_time=2.0)
        assert trajectory.progress(1.0) == 0.5
        assert trajectory.progress(-1.0) == 0.0
        assert trajectory.progress(10.0) == 1.0
        assert trajectory.position_at(10.0) == (1.0, 1.0)

    def test_finished(self, line_curve: Parametric) -> None:
        trajectory = Trajectory(line_curve)
        assert not trajectory.finished(4.9)
        assert trajectory.finished(5.0)

    @pytest.mark.parametrize("flight_time", [0.0, -1.0, math.inf, math.nan])
    def test_flight_time_must_be_positive(
        self, line_curve: Parametric, flight_time: float
    ) -> None:
        with pytest.raises(ValueError):
            Trajectory(line_curve, flight_time=flight_time)

    def test_sample_is_shifted(self, line_curve: Parametric) -> None:
        trajectory = Trajectory(line_curve, origin=(10.0, 0.0))
        assert trajectory.sample(3) == [(0.0, 10.0, 0.0), (0.5, 10.5, 0.5), (1.0, 11.0, 1.0)]


class TestSampleCurve:
    def test_even_spacing(self, line_curve: Parametric) -> None:
        points = sample_curve(line_curve, 5)
        assert [t for t, _, _ in points] == [0.0, 0.25, 0.5, 0.75, 1.0]
        assert all(x == t and y == t for t, x, y in points)

    def test_single_point(self, help_curve: Parametric) -> None:
        assert sample_curve(help_curve, 1) == [(0.0, -4.0, 16.0)]

    def test_count_must_be_positive(self, line_curve: Parametric) -> None:
        with pytest.raises(ValueError):
            sample_curve(line_curve, 0)


class TestHeading:
    def test_direction(self) -> None:
        assert heading((0.0, 0.0), (1.0, 1.0)) == pytest.approx(math.pi / 4)
        assert heading((1.0, 0.0), (0.0, 0.0)) == pytest.approx(math.pi)

    def test_no_movement(self) -> None:
        assert heading((2.0, 2.0), (2.0, 2.0)) is None
