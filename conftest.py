"""Pytest configuration and shared fixtures for project_reclaim."""

# pylint: disable=wrong-import-position

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path_factory, monkeypatch):
    """Keep tests away from the developer's own .env file and git configuration.

    Points PROJECT_RECLAIM_ENV_FILE at an empty file and clears the variables
    that load_settings reads.
    """
    env_dir = tmp_path_factory.mktemp("env")
    env_file = env_dir / "isolated.env"
    env_file.write_text("")
    monkeypatch.setenv("PROJECT_RECLAIM_ENV_FILE", str(env_file))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(env_dir / "xdg-config"))
    for name in (
        "PROJECT_RECLAIM_MIN_STALE",
        "PROJECT_RECLAIM_LOG_LEVEL",
        "PROJECT_RECLAIM_GLOBAL_IGNORE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield str(env_file)

