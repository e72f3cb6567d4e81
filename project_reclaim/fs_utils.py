"""Filesystem helpers shared by discovery, status and archiving."""

from __future__ import annotations

import logging
import os
import stat
from datetime import datetime, timezone
from pathlib import Path

from .ignore_rules import IgnoreRules
from .vcs import GIT_DIR_NAME


def canonicalize(path: Path | str) -> Path:
    """Return the absolute, symlink-free form of an existing path.

    Raises:
        OSError: If the path does not exist or cannot be resolved.
    """
    return Path(path).expanduser().resolve(strict=True)


def dir_size(path: Path) -> int:
    """Sum the sizes of regular files below `path` without following symlinks."""
    if not path.is_dir():
        return 0
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path, onerror=_log_walk_error):
        for filename in filenames:
            file_path = os.path.join(dirpath, filename)
            try:
                file_stat = os.lstat(file_path)
            except OSError as exc:
                logging.debug("Unable to stat %s: %s", file_path, exc)
                continue
            if stat.S_ISREG(file_stat.st_mode):
                total += file_stat.st_size
    return total


def _log_walk_error(exc: OSError) -> None:
    logging.debug("Skipping unreadable entry during walk: %s", exc)


def dir_mtime(path: Path, ignore_rules: IgnoreRules | None = None) -> datetime | None:
    """Return the newest modification time of any non-ignored file below `path`.

    Hidden files count; the `.git` directory and ignored entries do not.
    """
    rules = ignore_rules if ignore_rules is not None else IgnoreRules()
    newest: float | None = None
    stack: list[tuple[Path, IgnoreRules]] = [(path, rules)]
    while stack:
        directory, dir_rules = stack.pop()
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as exc:
            logging.debug("Unable to list %s: %s", directory, exc)
            continue
        for entry in entries:
            entry_path = directory / entry.name
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue
            if is_dir:
                if entry.name == GIT_DIR_NAME or dir_rules.is_ignored(entry_path, True):
                    continue
                stack.append((entry_path, dir_rules.descend(entry_path)))
                continue
            if dir_rules.is_ignored(entry_path, False):
                continue
            try:
                mtime = entry.stat(follow_symlinks=False).st_mtime
            except OSError as exc:
                logging.debug("Unable to stat %s: %s", entry_path, exc)
                continue
            if newest is None or mtime > newest:
                newest = mtime
    if newest is None:
        return None
    return datetime.fromtimestamp(newest, tz=timezone.utc)
