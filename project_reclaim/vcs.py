"""Version-control discovery for project directories."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

GIT_DIR_NAME = ".git"


@dataclass(frozen=True)
class VersionControlSystem:
    """A repository that manages a project directory."""

    name: str
    root: Path

    def __str__(self) -> str:
        return f"{self.name} ({self.root})"


def find_git_root(path: Path) -> Path | None:
    """Return the working-tree root of the Git repository containing `path`.

    Both regular `.git` directories and gitlink files (worktrees, submodules)
    are recognized.
    """
    current = path
    while True:
        if (current / GIT_DIR_NAME).exists():
            return current
        if current.parent == current:
            return None
        current = current.parent


def discover(path: Path) -> VersionControlSystem | None:
    """Look upward from `path` for a repository; only Git is supported."""
    root = find_git_root(path)
    if root is None:
        return None
    return VersionControlSystem(name="Git", root=root)
