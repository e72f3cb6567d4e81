"""
Command-line interface and main entry point for project_reclaim.

Handles workflow orchestration and user interaction.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .archive import ArchiveError, archive_project
from .args_parser import parse_args
from .build_tools import CleanError
from .cli_utils import confirm_action, status_stream
from .config import ConfigurationError, Settings, load_settings
from .project import Project, RootNotFoundError, archive_roots, projects_below
from .registry import default_registry
from .reports import print_project, print_projects_summary
from .walker import WalkSettings

LOG_FORMAT = "%(levelname)s %(message)s"


def _discover(args: argparse.Namespace, settings: Settings) -> list[Project]:
    """Collect matching projects, printing each as soon as it is found."""
    registry = default_registry(settings.global_ignore_file)
    if args.types:
        registry.retain(args.types)
    walk_settings = WalkSettings(
        global_ignore_file=settings.global_ignore_file,
        special_dirs=settings.special_dirs,
    )

    projects: list[Project] = []
    for project in projects_below(args.directories, args.project_filter, registry, walk_settings):
        print_project(project, json_output=args.json)
        projects.append(project)
    return projects


def _clean_projects(projects: list[Project], dry_run: bool, stream) -> int:
    """Clean every project. Returns the number of failures."""
    failures = 0
    for project in projects:
        try:
            actions = project.clean(dry_run)
        except CleanError:
            logging.exception("Failed to clean %s", project.path)
            failures += 1
            continue
        if dry_run:
            for action in actions:
                print(action, file=stream)
    return failures


def _archive_projects(projects: list[Project], dry_run: bool) -> int:
    """Archive the outermost projects. Returns the number of failures."""
    failures = 0
    for project in archive_roots(projects):
        try:
            archive_project(project, dry_run)
        except ArchiveError:
            logging.exception("Failed to archive %s", project.path)
            failures += 1
    return failures


def _handle_cleanup(args: argparse.Namespace, projects: list[Project]) -> int:
    """Handle clean/archive logic. Returns exit code."""
    stream = status_stream(args.json)
    if not confirm_action(
        "\nClean up those projects? [Y/n] ",
        skip_prompt=args.dry_run or args.yes,
        default=True,
        stream=stream,
    ):
        print("Aborted by user.", file=stream)
        return 0

    failures = _clean_projects(projects, args.dry_run, stream)
    if args.archive:
        failures += _archive_projects(projects, args.dry_run)

    if failures:
        print(f"Completed with {failures} error(s); see log for details.", file=stream)
        return 2
    if not args.dry_run:
        print("Cleanup complete.", file=stream)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for project_reclaim CLI."""
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logging.basicConfig(format=LOG_FORMAT)
        logging.error("%s", exc)
        return 1

    args = parse_args(sys.argv[1:] if argv is None else argv, settings)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format=LOG_FORMAT,
    )

    try:
        projects = _discover(args, settings)
    except RootNotFoundError as exc:
        logging.error("%s", exc)
        return 1

    if not projects:
        if not args.json:
            print("No matching projects found.")
        return 0

    if not args.json:
        print_projects_summary(projects)
    if args.list:
        return 0
    return _handle_cleanup(args, projects)
