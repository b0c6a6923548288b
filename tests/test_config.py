"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from street_viz.core.config import get_settings
from street_viz.core.enums import ReportFormat

KEYS = (
    "SVZ_OUTPUT_DIR", "OUTPUT_DIR", "SVZ_ASSETS_DIR", "ASSETS_DIR",
    "SVZ_LOG_DIR", "LOG_DIR", "SVZ_REPORT_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for key in KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    """Test settings defaults with an empty environment."""
    settings = get_settings()
    assert settings.output_dir == Path("reports")
    assert settings.assets_dir is None
    assert settings.log_dir == Path("logs")
    assert settings.report_format is ReportFormat.MARKDOWN


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that SVZ_ variables override the defaults."""
    monkeypatch.setenv("SVZ_OUTPUT_DIR", "out")
    monkeypatch.setenv("SVZ_ASSETS_DIR", "out/assets")
    monkeypatch.setenv("SVZ_REPORT_FORMAT", "HTML")
    settings = get_settings()
    assert settings.output_dir == Path("out")
    assert settings.assets_dir == Path("out/assets")
    assert settings.report_format is ReportFormat.HTML


def test_unprefixed_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that un-prefixed variables are used when the SVZ_ key is absent."""
    monkeypatch.setenv("OUTPUT_DIR", "fallback")
    assert get_settings().output_dir == Path("fallback")


def test_dotenv_file_is_read_without_overriding_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that .env values apply only where the environment is silent."""
    (tmp_path / ".env").write_text(
        "# local settings\nSVZ_OUTPUT_DIR='from-file'\nSVZ_LOG_DIR=file-logs\nnot a pair\n"
    )
    monkeypatch.setenv("SVZ_LOG_DIR", "env-logs")
    settings = get_settings()
    assert settings.output_dir == Path("from-file")
    assert settings.log_dir == Path("env-logs")


def test_unknown_report_format_falls_back_to_markdown(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that an unknown report format falls back to Markdown."""
    monkeypatch.setenv("SVZ_REPORT_FORMAT", "pdf")
    assert get_settings().report_format is ReportFormat.MARKDOWN
