"""Base classes and shared helpers for build-tool probes and handles."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence

from ..fs_utils import dir_size


class BuildToolKind(Enum):
    """Supported build tools, valued by their display name."""

    CARGO = "Cargo"
    NPM = "NPM"
    ELM = "Elm"
    MIX = "Mix"
    GRADLE = "Gradle"
    MAVEN = "Maven"
    FLUTTER = "Flutter"
    DOTNET = "Dotnet"

    @property
    def aliases(self) -> tuple[str, ...]:
        """Names accepted for this tool by `--type`."""
        return KIND_ALIASES[self]


KIND_ALIASES: dict[BuildToolKind, tuple[str, ...]] = {
    BuildToolKind.CARGO: ("cargo", "rust", "rs"),
    BuildToolKind.NPM: ("npm", "node", "js"),
    BuildToolKind.ELM: ("elm",),
    BuildToolKind.MIX: ("mix", "elixir", "ex", "exs"),
    BuildToolKind.GRADLE: ("gradle",),
    BuildToolKind.MAVEN: ("maven", "mvn"),
    BuildToolKind.FLUTTER: ("flutter", "dart"),
    BuildToolKind.DOTNET: ("dotnet", "cs", "csharp"),
}


class BuildState(Enum):
    """Three-way build classification."""

    CLEAN = "clean"
    BUILT = "built"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class BuildStatus:
    """Status reported by a build-tool handle."""

    state: BuildState
    freeable_bytes: int = 0

    @classmethod
    def clean(cls) -> BuildStatus:
        return cls(BuildState.CLEAN)

    @classmethod
    def built(cls, freeable_bytes: int) -> BuildStatus:
        return cls(BuildState.BUILT, freeable_bytes)

    @classmethod
    def unknown(cls) -> BuildStatus:
        return cls(BuildState.UNKNOWN)

    @property
    def is_clean(self) -> bool:
        return self.state is BuildState.CLEAN


class BuildToolError(RuntimeError):
    """Base class for build-tool failures."""


class ManifestError(BuildToolError):
    """Raised when a manifest exists but cannot be parsed."""


class CleanError(BuildToolError):
    """Raised when cleaning a project fails."""


class BuildTool:
    """Handle for one build tool recognized in one directory."""

    kind: BuildToolKind

    def __init__(self, path: Path):
        self.path = path

    def __str__(self) -> str:
        return self.kind.value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={str(self.path)!r})"

    def status(self) -> BuildStatus:
        """Classify the project; tools without known ephemeral directories are unknown."""
        return BuildStatus.unknown()

    def clean_project(self, dry_run: bool) -> list[str]:
        """Remove regenerable files and return a description of each action.

        With `dry_run`, nothing is changed and the returned actions describe
        what would have happened.
        """
        raise NotImplementedError

    def project_name(self) -> str | None:
        """Name from the tool's manifest, or None when not supported.

        Raises:
            ManifestError: If the manifest cannot be parsed.
        """
        return None


class EphemeralDirsTool(BuildTool):
    """A build tool whose artifacts live in well-known subdirectories.

    The status is measured once and reused until the project is cleaned.
    """

    ephemeral_dirs: tuple[str, ...] = ()
    _status: BuildStatus | None = None

    def reclaimable_dirs(self) -> list[Path]:
        """Ephemeral directories that currently exist."""
        return existing_dirs(self.path, self.ephemeral_dirs)

    def status(self) -> BuildStatus:
        if self._status is None:
            self._status = status_from_dirs(self.reclaimable_dirs())
        return self._status

    def clean_project(self, dry_run: bool) -> list[str]:
        if not dry_run:
            self._status = None
        return remove_dirs(self.reclaimable_dirs(), dry_run)


class BuildToolProbe:
    """Recognizes one build tool by its marker file."""

    kind: BuildToolKind

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def detect(self, directory: Path) -> BuildTool | None:
        """Return a handle if the tool is configured in `directory`."""
        raise NotImplementedError

    def applies_to(self, name: str) -> bool:
        """Whether `name` identifies this probe's tool (case-insensitive)."""
        return name.strip().lower() in self.kind.aliases


def existing_dirs(project_dir: Path, names: Sequence[str]) -> list[Path]:
    """Join `names` onto `project_dir`, keeping only existing directories."""
    dirs = [project_dir / name for name in names]
    return [path for path in dirs if path.is_dir() and not path.is_symlink()]


def status_from_dirs(dirs: Sequence[Path]) -> BuildStatus:
    """Clean when the given directories hold no bytes, built otherwise."""
    freeable_bytes = sum(dir_size(path) for path in dirs)
    if freeable_bytes == 0:
        return BuildStatus.clean()
    return BuildStatus.built(freeable_bytes)


def remove_dirs(dirs: Sequence[Path], dry_run: bool) -> list[str]:
    """Delete each directory tree (or only describe it when `dry_run`)."""
    actions: list[str] = []
    for path in dirs:
        action = f"rm -r '{path}'"
        actions.append(action)
        if dry_run:
            logging.info("Would run: %s", action)
            continue
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise CleanError(f"Failed to remove {path}: {exc}") from exc
        logging.info("Removed %s", path)
    return actions


def run_clean_command(command: Sequence[str], cwd: Path, dry_run: bool) -> list[str]:
    """Run a tool's own clean command in `cwd`; no timeout is applied.

    Raises:
        CleanError: If the executable is missing or exits non-zero.
    """
    action = f"{cwd}: {' '.join(command)}"
    if dry_run:
        logging.info("Would run: %s", action)
        return [action]
    try:
        completed = subprocess.run(list(command), cwd=cwd, check=False)
    except OSError as exc:
        raise CleanError(f"Failed to execute {' '.join(command)} for project at {cwd}: {exc}") from exc
    if completed.returncode != 0:
        raise CleanError(
            f"Unexpected exit code {completed.returncode} for {' '.join(command)} "
            f"for project at {cwd}"
        )
    return [action]


