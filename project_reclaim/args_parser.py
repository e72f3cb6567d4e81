"""
Argument parsing for the project_reclaim CLI.

Handles command-line argument definition, parsing, and validation.
"""

from __future__ import annotations

import argparse
import sys
from datetime import timedelta
from functools import partial
from pathlib import Path

from .config import Settings
from .format_utils import parse_duration
from .project import ProjectFilter, StatusFilter
from .registry import known_type_names


def add_search_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the directories to search and the project filters."""
    parser.add_argument(
        "directories",
        nargs="*",
        type=Path,
        default=[Path(".")],
        metavar="DIRECTORY",
        help="Directories to search (default: the current directory).",
    )
    parser.add_argument(
        "--min-stale",
        type=partial(parse_duration, for_argparse=True),
        metavar="AGE",
        help=(
            'Only include projects not modified for at least AGE, e.g. "2w" or "6m" '
            "(default: 0 with --list, otherwise the configured minimum, 30d)."
        ),
    )
    parser.add_argument(
        "--type",
        dest="types",
        action="append",
        type=str.lower,
        choices=known_type_names(),
        metavar="NAME",
        help="Only consider projects of this build-tool type; repeatable.",
    )


def add_action_arguments(parser: argparse.ArgumentParser) -> None:
    """Add action and confirmation arguments."""
    parser.add_argument("--list", action="store_true", help="Only list projects; clean nothing.")
    parser.add_argument(
        "--archive",
        action="store_true",
        help="After cleaning, replace each outermost project with a .tar.xz archive.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without changing anything.",
    )
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt.")


def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    """Add output and reporting arguments."""
    parser.add_argument(
        "--json",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print one JSON object per project (default: on when stdout is not a terminal).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")


def stdout_is_terminal() -> bool:
    return sys.stdout.isatty()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="project_reclaim",
        description="Find stale software projects and reclaim the disk space their build output uses.",
    )
    add_search_arguments(parser)
    add_action_arguments(parser)
    add_output_arguments(parser)
    return parser


def _validate_and_transform_args(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
    settings: Settings,
) -> None:
    """Validate parsed arguments and derive the project filter."""
    if args.list and args.archive:
        parser.error("--archive cannot be combined with --list.")

    if args.min_stale is None:
        args.min_stale = timedelta(0) if args.list else settings.min_stale

    if args.json is None:
        args.json = not stdout_is_terminal()

    if args.list or args.archive:
        status = StatusFilter.ANY
    else:
        status = StatusFilter.EXCEPT_CLEAN
    args.project_filter = ProjectFilter(min_stale=args.min_stale, status=status)


def parse_args(argv: list[str], settings: Settings) -> argparse.Namespace:
    """Parse and process command-line arguments for project_reclaim."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _validate_and_transform_args(args, parser, settings)
    return args
