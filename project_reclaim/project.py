"""
Project assembly: turning candidate directories into reportable projects.

A candidate becomes a `Project` when at least one build tool recognizes it,
it passes the status filter, its name can be determined and it has not been
modified more recently than the filter's minimum staleness.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from .build_tools import BuildState, BuildTool, ManifestError
from .fs_utils import canonicalize, dir_mtime
from .ignore_rules import IgnoreRules
from .registry import BuildToolRegistry
from .vcs import VersionControlSystem, discover
from .walker import WalkSettings, walk_candidates


class RootNotFoundError(RuntimeError):
    """Raised when a directory to search cannot be resolved."""


class StatusFilter(Enum):
    """Which build states make a project eligible."""

    ANY = "any"
    EXCEPT_CLEAN = "except-clean"


@dataclass(frozen=True)
class ProjectFilter:
    """Selection criteria for discovered projects."""

    min_stale: timedelta = timedelta(0)
    status: StatusFilter = StatusFilter.ANY

    def admits_age(self, mtime: datetime, now: datetime) -> bool:
        """Reject projects modified less than `min_stale` ago; the boundary itself passes."""
        return not (now - mtime) < self.min_stale


@dataclass(frozen=True)
class Project:
    """A recognized unit of source code."""

    name: str
    path: Path
    build_tools: tuple[BuildTool, ...]
    vcs: VersionControlSystem | None
    mtime: datetime

    def __str__(self) -> str:
        tools = ", ".join(str(tool) for tool in self.build_tools)
        vcs = self.vcs.name if self.vcs else "none"
        return f"{self.path} ({tools}; VCS: {vcs})"

    def freeable_bytes(self) -> int:
        """Bytes that cleaning would reclaim, as far as the build tools know."""
        total = 0
        for tool in self.build_tools:
            status = tool.status()
            if status.state is BuildState.BUILT:
                total += status.freeable_bytes
        return total

    def clean(self, dry_run: bool) -> list[str]:
        """Clean with every build tool, in registration order.

        Raises:
            CleanError: From the first build tool that fails.
        """
        logging.debug("Cleaning project at %s", self.path)
        actions: list[str] = []
        for tool in self.build_tools:
            actions.extend(tool.clean_project(dry_run))
        return actions


def project_name_from(path: Path, build_tools: Sequence[BuildTool]) -> str:
    """First name any build tool reports, else the directory name.

    Raises:
        ManifestError: If the first tool that supports naming cannot parse its manifest.
    """
    for tool in build_tools:
        name = tool.project_name()
        if name is not None:
            return name
    if not path.name:
        raise ManifestError(f"Could not determine a directory name for {path}")
    return path.name


def assemble_project(
    directory: Path,
    project_filter: ProjectFilter,
    registry: BuildToolRegistry,
    ignore_rules: IgnoreRules | None = None,
    *,
    now: datetime | None = None,
) -> Project | None:
    """Build a `Project` for `directory` or return None if it does not qualify."""
    build_tools = registry.probe(directory)
    if not build_tools:
        return None

    if project_filter.status is StatusFilter.EXCEPT_CLEAN:
        if all(tool.status().is_clean for tool in build_tools):
            logging.debug("Skipping clean project at %s", directory)
            return None

    try:
        name = project_name_from(directory, build_tools)
    except ManifestError as exc:
        logging.warning("Failed to determine project name for %s: %s", directory, exc)
        return None

    mtime = dir_mtime(directory, ignore_rules)
    if mtime is None:
        # Every file is ignored; fall back to the directory entry itself.
        mtime = datetime.fromtimestamp(directory.stat().st_mtime, tz=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if not project_filter.admits_age(mtime, now):
        logging.debug(
            "Skipping %s: modified %s, more recently than %s ago",
            directory,
            mtime.isoformat(),
            project_filter.min_stale,
        )
        return None

    return Project(
        name=name,
        path=directory,
        build_tools=tuple(build_tools),
        vcs=discover(directory),
        mtime=mtime,
    )


def resolve_roots(roots: Iterable[Path | str]) -> list[Path]:
    """Canonicalize and deduplicate the directories to search.

    Raises:
        RootNotFoundError: If a root does not exist or is not a directory.
    """
    resolved: list[Path] = []
    for root in roots:
        try:
            path = canonicalize(root)
        except OSError as exc:
            raise RootNotFoundError(f"Cannot access {root}: {exc}") from exc
        if not path.is_dir():
            raise RootNotFoundError(f"{root} is not a directory")
        if path not in resolved:
            resolved.append(path)
    return resolved


def projects_below(
    roots: Iterable[Path | str],
    project_filter: ProjectFilter,
    registry: BuildToolRegistry,
    settings: WalkSettings | None = None,
) -> Iterator[Project]:
    """Lazily discover projects in and below `roots`.

    Root resolution happens immediately so that a missing root fails the call
    rather than the first iteration.

    Raises:
        RootNotFoundError: If any root cannot be resolved.
    """
    resolved = resolve_roots(roots)
    return _iter_projects(resolved, project_filter, registry, settings)


def _iter_projects(
    roots: list[Path],
    project_filter: ProjectFilter,
    registry: BuildToolRegistry,
    settings: WalkSettings | None,
) -> Iterator[Project]:
    for candidate in walk_candidates(roots, settings):
        try:
            project = assemble_project(
                candidate.path, project_filter, registry, candidate.ignore_rules
            )
        except OSError as exc:
            logging.warning("Skipping %s: %s", candidate.path, exc)
            continue
        if project is not None:
            logging.debug("Project found at %s", project.path)
            yield project


def archive_roots(projects: Sequence[Project]) -> list[Project]:
    """Projects not nested inside another listed project.

    Archiving an outer project already captures everything below it.
    """
    paths = [project.path for project in projects]
    return [
        project
        for project in projects
        if not any(other != project.path and project.path.is_relative_to(other) for other in paths)
    ]
