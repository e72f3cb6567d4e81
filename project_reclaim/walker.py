"""
Breadth-first directory traversal that respects ignore rules.

Hidden directories, configured special directories and anything excluded by
gitignore-style rules are pruned before descending, which keeps dependency
caches such as `node_modules` or `target` out of the walk.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from .fs_utils import canonicalize
from .ignore_rules import IgnoreRules
from .vcs import find_git_root

HIDDEN_PREFIX = "."


@dataclass(frozen=True)
class WalkSettings:
    """Injected traversal configuration."""

    global_ignore_file: Path | None = None
    special_dirs: frozenset[Path] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Candidate:
    """A directory that may hold a project, with the rules in force inside it."""

    path: Path
    ignore_rules: IgnoreRules


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def _root_is_ignored(root: Path, settings: WalkSettings) -> bool:
    """A root inside a repository may itself be excluded by the repository's rules."""
    repo_root = find_git_root(root)
    if repo_root is None or repo_root == root:
        return False
    parent_rules = IgnoreRules.for_directory(root.parent, settings.global_ignore_file)
    return parent_rules.is_ignored(root, True)


def _target_is_ignored(
    canonical: Path,
    directory: Path,
    rules: IgnoreRules,
    settings: WalkSettings,
) -> bool:
    """Whether the real directory behind a symlink is excluded where it lives."""
    if canonical.parent == directory:
        return rules.is_ignored(canonical, True)
    target_rules = IgnoreRules.for_directory(canonical.parent, settings.global_ignore_file)
    return target_rules.is_ignored(canonical, True)


def _child_dirs(
    directory: Path,
    rules: IgnoreRules,
    settings: WalkSettings,
) -> list[Path]:
    """List subdirectories worth descending into, in name order.

    Raises:
        OSError: If `directory` cannot be listed.
    """
    with os.scandir(directory) as iterator:
        entries = sorted(iterator, key=lambda entry: entry.name)

    children: list[Path] = []
    for entry in entries:
        try:
            if not entry.is_dir():
                continue
        except OSError as exc:
            logging.debug("Skipping %s: %s", entry.path, exc)
            continue
        if is_hidden(entry.name):
            continue
        lexical = directory / entry.name
        if rules.is_ignored(lexical, True):
            logging.debug("Skipping ignored directory %s", lexical)
            continue
        try:
            canonical = canonicalize(lexical)
        except OSError as exc:
            logging.warning("Cannot resolve %s: %s", lexical, exc)
            continue
        if canonical != lexical and _target_is_ignored(canonical, directory, rules, settings):
            logging.debug("Skipping %s: its target %s is ignored", lexical, canonical)
            continue
        if canonical in settings.special_dirs:
            logging.debug("Skipping special directory %s", canonical)
            continue
        children.append(canonical)
    return children


def walk_candidates(roots: Iterable[Path], settings: WalkSettings | None = None) -> Iterator[Candidate]:
    """Yield candidate directories below each canonical root, breadth-first.

    Directories reachable from several roots (or via symlinks) are yielded
    once. Errors are per directory: an unreadable directory is logged and
    skipped without ending the walk.
    """
    settings = settings or WalkSettings()
    seen: set[Path] = set()
    for root in roots:
        if root in seen:
            logging.debug("Skipping already visited root %s", root)
            continue
        if _root_is_ignored(root, settings):
            logging.debug("Skipping ignored root %s", root)
            continue
        seen.add(root)
        queue: deque[Candidate] = deque(
            [Candidate(root, IgnoreRules.for_directory(root, settings.global_ignore_file))]
        )
        while queue:
            candidate = queue.popleft()
            try:
                children = _child_dirs(candidate.path, candidate.ignore_rules, settings)
            except OSError as exc:
                logging.warning("Failed to read directory %s: %s", candidate.path, exc)
                continue
            for child in children:
                if child in seen:
                    continue
                seen.add(child)
                queue.append(Candidate(child, candidate.ignore_rules.descend(child)))
            yield candidate
