"""
Project reclaim package.

Find software projects below a set of directories, report how much disk space
their build output uses, and optionally clean or archive them.
"""

from . import archive, build_tools, config, ignore_rules, project, registry, reports, vcs, walker
from .archive import ArchiveError, archive_project
from .build_tools import BuildState, BuildStatus, BuildTool, BuildToolKind, BuildToolProbe, CleanError
from .project import (
    Project,
    ProjectFilter,
    RootNotFoundError,
    StatusFilter,
    assemble_project,
    projects_below,
)
from .registry import BuildToolRegistry, default_registry

__all__ = [
    "ArchiveError",
    "BuildState",
    "BuildStatus",
    "BuildTool",
    "BuildToolKind",
    "BuildToolProbe",
    "BuildToolRegistry",
    "CleanError",
    "Project",
    "ProjectFilter",
    "RootNotFoundError",
    "StatusFilter",
    "archive",
    "archive_project",
    "assemble_project",
    "build_tools",
    "config",
    "default_registry",
    "ignore_rules",
    "project",
    "projects_below",
    "registry",
    "reports",
    "vcs",
    "walker",
]
