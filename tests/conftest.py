"""Shared pytest fixtures for test files."""

from __future__ import annotations

import pytest

from project_reclaim.registry import BuildToolRegistry, default_registry
from tests.project_test_utils import make_cargo_project


@pytest.fixture(name="cargo_project")
def fixture_cargo_project(tmp_path):
    """Cargo project with 4096 bytes of build output."""
    return make_cargo_project(tmp_path.resolve() / "demo", target_bytes=4096)


@pytest.fixture(name="registry")
def fixture_registry() -> BuildToolRegistry:
    """Registry with every supported build tool and no global ignore file."""
    return default_registry()
