"""Tests for CLI output formatting utilities."""

from __future__ import annotations

import pytest

from street_viz.cli import output
from street_viz.cli.output import OutputColor


def test_success_with_prefix(capsys: pytest.CaptureFixture[str]) -> None:
    """Success messages carry a checkmark by default."""
    output.success("Report written")
    captured = capsys.readouterr()
    assert "✅ Report written" in captured.out


def test_success_without_prefix(capsys: pytest.CaptureFixture[str]) -> None:
    """Test success message without emoji prefix."""
    output.success("Report written", prefix=False)
    captured = capsys.readouterr()
    assert "✅" not in captured.out
    assert "Report written" in captured.out


def test_error_writes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    """Errors go to stderr unless told otherwise."""
    output.error("Unsupported visualization type: 'pie'")
    captured = capsys.readouterr()
    assert "❌ Unsupported visualization type: 'pie'" in captured.err
    assert captured.out == ""


def test_error_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    """Test error message can be written to stdout."""
    output.error("Error message", err=False)
    captured = capsys.readouterr()
    assert "❌ Error message" in captured.out


def test_info_and_warning_prefixes(capsys: pytest.CaptureFixture[str]) -> None:
    """Test info and warning messages carry their emoji prefixes."""
    output.info("Caption")
    output.warning("Overflow")
    captured = capsys.readouterr()
    assert "ℹ️  Caption" in captured.out
    assert "⚠️  Overflow" in captured.out


def test_plain_has_no_prefix(capsys: pytest.CaptureFixture[str]) -> None:
    """Test plain message has no emoji prefix."""
    output.plain("Plain message")
    output.plain("Colored message", color=OutputColor.CYAN)
    captured = capsys.readouterr()
    assert "Plain message" in captured.out
    assert "Colored message" in captured.out
    for emoji in ("✅", "❌", "ℹ️", "⚠️"):
        assert emoji not in captured.out


def test_output_color_enum_values() -> None:
    """Test OutputColor values match typer colors."""
    assert [c.value for c in OutputColor] == ["WHITE", "CYAN", "GREEN", "YELLOW", "RED"]
