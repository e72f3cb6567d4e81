"""
Report generation and output functions for project_reclaim.

Handles the one-line-per-project listing (plain or JSON) and the closing summary.
"""

from __future__ import annotations

import json
from datetime import timezone
from typing import TYPE_CHECKING, Any, Sequence

from .format_utils import format_bytes

if TYPE_CHECKING:
    from .project import Project


def project_to_dict(project: Project) -> dict[str, Any]:
    """JSON-ready representation of a project."""
    vcs = None
    if project.vcs is not None:
        vcs = {"name": project.vcs.name, "root": str(project.vcs.root)}
    return {
        "name": project.name,
        "path": str(project.path),
        "build_tools": [str(tool) for tool in project.build_tools],
        "vcs": vcs,
        "mtime": project.mtime.astimezone(timezone.utc).isoformat(),
        "freeable_bytes": project.freeable_bytes(),
    }


def format_project(project: Project) -> str:
    return str(project)


def print_project(project: Project, *, json_output: bool = False) -> None:
    """Print one project, as a single JSON object per line when requested."""
    if json_output:
        print(json.dumps(project_to_dict(project)))
    else:
        print(format_project(project))


def summarise(projects: Sequence[Project]) -> tuple[int, int, list[Project]]:
    """Return (count, total freeable bytes, projects without version control)."""
    total = sum(project.freeable_bytes() for project in projects)
    unversioned = [project for project in projects if project.vcs is None]
    return len(projects), total, unversioned


def print_projects_summary(projects: Sequence[Project]) -> None:
    """Print totals and warn about projects that are not under version control."""
    count, total, unversioned = summarise(projects)
    print(f"\nFound {count} project(s); {format_bytes(total)} can be freed.")
    if unversioned:
        print(f"{len(unversioned)} project(s) are not under version control:")
        for project in unversioned:
            print(f"  - {project.path}")
