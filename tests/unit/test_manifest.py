"""Tests for loading curvefire.toml and environment overrides."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from curvefire.core.errors import ConfigError
from curvefire.core.manifest import CurvefireConfig, load_config


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "curvefire.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_config(environ={}) == CurvefireConfig(flight_time=5.0, samples=11, precision=6)

    def test_reads_default_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write(tmp_path, "[curvefire]\nflight_time = 4\nsamples = 21\n")
        monkeypatch.chdir(tmp_path)
        config = load_config(environ={})
        assert config.flight_time == 4.0
        assert isinstance(config.flight_time, float)
        assert config.samples == 21
        assert config.precision == 6

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[curvefire]\nprecision = 3\n")
        assert load_config(path, environ={}).precision == 3

    def test_missing_explicit_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.toml", environ={})

    def test_unreadable_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path, environ={})

    def test_default_name_is_a_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "curvefire.toml").mkdir()
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigError):
            load_config(environ={})

    def test_file_without_table(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[other]\nsamples = 3\n")
        assert load_config(path, environ={}) == CurvefireConfig()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[curvefire\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path, environ={})

    @pytest.mark.parametrize(
        "body",
        [
            "flight_time = 0",
            "flight_time = -2.5",
            'flight_time = "fast"',
            "samples = 0",
            "samples = 2.5",
            "samples = true",
            "precision = 18",
            "precision = -1",
        ],
    )
    def test_invalid_values(self, tmp_path: Path, body: str) -> None:
        path = _write(tmp_path, f"[curvefire]\n{body}\n")
        with pytest.raises(ConfigError):
            load_config(path, environ={})

    def test_unknown_key_warns(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = _write(tmp_path, "[curvefire]\ncolour = 'red'\n")
        with caplog.at_level(logging.WARNING, logger="curvefire.core.manifest"):
            config = load_config(path, environ={})
        assert config == CurvefireConfig()
        assert "colour" in caplog.text


class TestEnvironmentOverrides:
    def test_overrides_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[curvefire]\nflight_time = 4.0\nsamples = 21\n")
        config = load_config(
            path, environ={"CURVEFIRE_FLIGHT_TIME": "2.5", "CURVEFIRE_SAMPLES": " 7 "}
        )
        assert config.flight_time == 2.5
        assert config.samples == 7

    def test_blank_is_ignored(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "")
        assert load_config(path, environ={"CURVEFIRE_SAMPLES": "  "}).samples == 11

    def test_reads_process_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CURVEFIRE_FLIGHT_TIME", "8")
        monkeypatch.delenv("CURVEFIRE_SAMPLES", raising=False)
        assert load_config().flight_time == 8.0

    @pytest.mark.parametrize(
        "environ",
        [
            {"CURVEFIRE_FLIGHT_TIME": "soon"},
            {"CURVEFIRE_FLIGHT_TIME": "-1"},
            {"CURVEFIRE_SAMPLES": "many"},
            {"CURVEFIRE_SAMPLES": "0"},
        ],
    )
    def test_invalid(self, tmp_path: Path, environ: dict[str, str]) -> None:
        path = _write(tmp_path, "")
        with pytest.raises(ConfigError):
            load_config(path, environ=environ)
