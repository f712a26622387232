"""Shared pytest fixtures for curvefire tests."""

import pytest
from typer.testing import CliRunner

from curvefire.core.compiler import Parametric, compile_parametric


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def line_curve() -> Parametric:
    """x = t, y = t."""
    return compile_parametric("x(t) = t", "y(t) = t", "")


@pytest.fixture
def help_curve() -> Parametric:
    """The first example from the quick reference."""
    return compile_parametric("v", "u^2", "u = 2 * t - 4\nv = u + t * 0")


@pytest.fixture
def circle_curve() -> Parametric:
    """Unit circle, one turn over t in [0, 1]."""
    return compile_parametric("cos (tau * t)", "sin (tau * t)", "")
