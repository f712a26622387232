"""
Configuration for curvefire.

Settings come from the ``[curvefire]`` table of ``curvefire.toml`` and can be
overridden per process with environment variables:

    CURVEFIRE_FLIGHT_TIME   seconds a trajectory takes to run t from 0 to 1
    CURVEFIRE_SAMPLES       default number of points ``curvefire sample`` prints

Example curvefire.toml:

    [curvefire]
    flight_time = 4.0
    samples = 21
    precision = 4
"""

from __future__ import annotations

import logging
import math
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from curvefire.core.errors import ConfigError
from curvefire.core.trajectory import DEFAULT_FLIGHT_TIME

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "curvefire.toml"
FLIGHT_TIME_ENV_VAR = "CURVEFIRE_FLIGHT_TIME"
SAMPLES_ENV_VAR = "CURVEFIRE_SAMPLES"

_MAX_PRECISION = 17


@dataclass
class CurvefireConfig:
    """Runtime settings."""

    flight_time: float = DEFAULT_FLIGHT_TIME
    samples: int = 11
    precision: int = 6  # digits after the decimal point in CLI output


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> CurvefireConfig:
    """Load settings from ``path`` (or ./curvefire.toml) and the environment.

    A missing default file means defaults; a missing explicit ``path`` is an
    error.

    Raises:
        ConfigError: If the file is unreadable or a value is invalid.
    """
    environ = os.environ if environ is None else environ

    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        data = _read_table(candidate) if candidate.exists() else {}
    elif not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    else:
        data = _read_table(path)

    known = {f.name for f in fields(CurvefireConfig)}
    for key in data:
        if key not in known:
            logger.warning("Ignoring unknown setting '%s' in %s", key, CONFIG_FILENAME)

    defaults = CurvefireConfig()
    config = CurvefireConfig(
        flight_time=_flight_time(data.get("flight_time", defaults.flight_time)),
        samples=_samples(data.get("samples", defaults.samples)),
        precision=_precision(data.get("precision", defaults.precision)),
    )

    if value := environ.get(FLIGHT_TIME_ENV_VAR, "").strip():
        try:
            config.flight_time = _flight_time(float(value))
        except ValueError as e:
            raise ConfigError(f"{FLIGHT_TIME_ENV_VAR} must be a number, got '{value}'") from e
    if value := environ.get(SAMPLES_ENV_VAR, "").strip():
        try:
            config.samples = _samples(int(value))
        except ValueError as e:
            raise ConfigError(f"{SAMPLES_ENV_VAR} must be an integer, got '{value}'") from e

    return config


def _read_table(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    table = data.get("curvefire", {})
    if not isinstance(table, dict):
        raise ConfigError(f"[curvefire] in {path} must be a table")
    return table


def _flight_time(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigError(f"flight_time must be a number, got {value!r}")
    if not (value > 0 and math.isfinite(value)):
        raise ConfigError(f"flight_time must be positive, got {value!r}")
    return float(value)


def _samples(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"samples must be a positive integer, got {value!r}")
    return value


def _precision(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _MAX_PRECISION:
        raise ConfigError(f"precision must be an integer from 0 to {_MAX_PRECISION}, got {value!r}")
    return value
