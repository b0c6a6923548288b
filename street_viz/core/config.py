from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .enums import ReportFormat


@dataclass
class Settings:
    output_dir: Path
    assets_dir: Path | None
    log_dir: Path
    report_format: ReportFormat


def _read_env_file() -> dict[str, str]:
    """Load minimal .env to support SVZ_* keys if not in the environment.

    Existing os.environ values are never overwritten.
    """
    env_path = Path.cwd() / ".env"
    env: dict[str, str] = {}
    if not env_path.exists():
        return env
    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            env[k] = v
    except (OSError, UnicodeDecodeError):
        return {}
    return env


def _get_env(
    name: str,
    fallback_names: list[str] | None = None,
    env_file: dict[str, str] | None = None,
) -> str | None:
    # Priority: process env -> .env -> fallback names
    val = os.getenv(name)
    if val:
        return val
    if env_file and name in env_file:
        return env_file[name]
    if fallback_names:
        for fb in fallback_names:
            v = os.getenv(fb)
            if v:
                return v
            if env_file and fb in env_file:
                return env_file[fb]
    return None


def get_settings() -> Settings:
    env_file = _read_env_file()
    output_dir = _get_env("SVZ_OUTPUT_DIR", ["OUTPUT_DIR"], env_file) or "reports"
    assets_dir = _get_env("SVZ_ASSETS_DIR", ["ASSETS_DIR"], env_file)
    log_dir = _get_env("SVZ_LOG_DIR", ["LOG_DIR"], env_file) or "logs"
    fmt = (_get_env("SVZ_REPORT_FORMAT", None, env_file) or "md").lower()
    try:
        report_format = ReportFormat(fmt)
    except ValueError:
        report_format = ReportFormat.MARKDOWN
    return Settings(
        output_dir=Path(output_dir),
        assets_dir=Path(assets_dir) if assets_dir else None,
        log_dir=Path(log_dir),
        report_format=report_format,
    )
