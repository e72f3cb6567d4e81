"""
Configuration for project_reclaim.

Values come from the process environment, optionally seeded from a `.env`
file. Only the command-line entry point calls `load_settings`; the discovery
and archive code receive the resulting values as arguments.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

from .format_utils import parse_duration

ENV_FILE_VAR = "PROJECT_RECLAIM_ENV_FILE"
MIN_STALE_VAR = "PROJECT_RECLAIM_MIN_STALE"
LOG_LEVEL_VAR = "PROJECT_RECLAIM_LOG_LEVEL"
GLOBAL_IGNORE_VAR = "PROJECT_RECLAIM_GLOBAL_IGNORE"

DEFAULT_MIN_STALE = "30d"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigurationError(RuntimeError):
    """Raised when a configured value is invalid."""


@dataclass(frozen=True)
class Settings:
    """Resolved configuration."""

    min_stale: timedelta = timedelta(days=30)
    log_level: int = logging.INFO
    global_ignore_file: Path | None = None
    special_dirs: frozenset[Path] = field(default_factory=frozenset)


def _resolve_env_path(env_path: str | None = None) -> str:
    """
    Determine which .env file should be loaded.

    Priority order:
      1. Explicit parameter
      2. PROJECT_RECLAIM_ENV_FILE environment variable
      3. ~/.env
    """
    if env_path:
        return env_path
    env_file = os.environ.get(ENV_FILE_VAR)
    if env_file:
        return env_file
    return str(Path.home() / ".env")


def default_global_ignore_file() -> Path:
    """Git's default global excludes file (XDG location)."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config).expanduser()
    else:
        base = Path.home() / ".config"
    return base / "git" / "ignore"


def default_special_dirs() -> frozenset[Path]:
    """OS folders that are never searched (the user's Library on macOS)."""
    if sys.platform == "darwin":
        return frozenset({(Path.home() / "Library").resolve()})
    return frozenset()


def _parse_log_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"{LOG_LEVEL_VAR} has an unknown log level: {value!r}")
    return level


def _parse_min_stale(value: str) -> timedelta:
    try:
        return parse_duration(value)
    except ValueError as exc:
        raise ConfigurationError(f"{MIN_STALE_VAR} is invalid: {exc}") from exc


def load_settings(env_path: str | None = None) -> Settings:
    """Read settings from the environment after loading the .env file, if any.

    Raises:
        ConfigurationError: If a configured value cannot be parsed.
    """
    resolved_path = _resolve_env_path(env_path)
    if Path(resolved_path).is_file():
        load_dotenv(resolved_path)

    min_stale = _parse_min_stale(os.environ.get(MIN_STALE_VAR, DEFAULT_MIN_STALE))
    log_level = _parse_log_level(os.environ.get(LOG_LEVEL_VAR, DEFAULT_LOG_LEVEL))

    global_ignore_env = os.environ.get(GLOBAL_IGNORE_VAR)
    if global_ignore_env:
        global_ignore_file = Path(global_ignore_env).expanduser()
    else:
        global_ignore_file = default_global_ignore_file()
    if not global_ignore_file.is_file():
        global_ignore_file = None

    return Settings(
        min_stale=min_stale,
        log_level=log_level,
        global_ignore_file=global_ignore_file,
        special_dirs=default_special_dirs(),
    )
