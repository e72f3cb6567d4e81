"""
Gitignore-style rule evaluation for directory traversal.

Rules are read from `.gitignore` and `.ignore` files, from a repository's
`.git/info/exclude` and from an optional global ignore file. They are applied
whether or not the directory lives inside a repository.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from pathspec.util import lookup_pattern

from .vcs import GIT_DIR_NAME, find_git_root

LOCAL_IGNORE_FILENAMES = (".gitignore", ".ignore")

_GITWILDMATCH = lookup_pattern("gitwildmatch")


@dataclass(frozen=True)
class IgnoreFile:
    """Compiled patterns of one ignore file, matched relative to `base`."""

    base: Path
    source: Path | None = None
    patterns: tuple = field(default_factory=tuple)

    def decide(self, path: Path, is_dir: bool) -> bool | None:
        """Return True (ignored), False (re-included) or None (no pattern matched)."""
        try:
            rel = path.relative_to(self.base).as_posix()
        except ValueError:
            return None
        if rel in ("", "."):
            return None
        if is_dir:
            rel += "/"
        decision = None
        for pattern in self.patterns:
            if pattern.match_file(rel) is not None:
                decision = pattern.include
        return decision


def compile_patterns(lines: Iterable[str], *, source: str = "<memory>") -> tuple:
    """Compile gitignore lines, skipping blanks, comments and invalid patterns."""
    compiled = []
    for lineno, line in enumerate(lines, start=1):
        try:
            pattern = _GITWILDMATCH(line.rstrip("\r\n"))
        except ValueError as exc:
            logging.warning("Skipping invalid ignore pattern %s:%d: %s", source, lineno, exc)
            continue
        if pattern.include is None:
            continue
        compiled.append(pattern)
    return tuple(compiled)


def load_ignore_file(path: Path, base: Path) -> IgnoreFile | None:
    """Parse the ignore file at `path`; missing files yield None."""
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logging.warning("Cannot read ignore file %s: %s", path, exc)
        return None
    patterns = compile_patterns(text.splitlines(), source=str(path))
    if not patterns:
        return None
    return IgnoreFile(base=base, source=path, patterns=patterns)


def _local_ignore_files(directory: Path) -> list[IgnoreFile]:
    """Ignore files that live directly inside `directory`."""
    files: list[IgnoreFile] = []
    exclude = load_ignore_file(directory / GIT_DIR_NAME / "info" / "exclude", directory)
    if exclude is not None:
        files.append(exclude)
    # `.ignore` is listed last so it overrides `.gitignore` in the same directory.
    for name in LOCAL_IGNORE_FILENAMES:
        ignore_file = load_ignore_file(directory / name, directory)
        if ignore_file is not None:
            files.append(ignore_file)
    return files


def _directories_from(top: Path, bottom: Path) -> list[Path]:
    """List `top` and every directory between it and `bottom` (inclusive)."""
    chain = [bottom]
    current = bottom
    while current != top and current.parent != current:
        current = current.parent
        chain.append(current)
    chain.reverse()
    return chain


@dataclass(frozen=True)
class IgnoreRules:
    """Ordered ignore files, outermost (lowest precedence) first."""

    files: tuple[IgnoreFile, ...] = ()

    @classmethod
    def for_directory(cls, directory: Path, global_ignore_file: Path | None = None) -> IgnoreRules:
        """Collect the rules that apply inside `directory`.

        Inside a repository this covers every ignore file from the repository
        root down to `directory`; outside one, only `directory`'s own files.
        """
        repo_root = find_git_root(directory)
        base = repo_root if repo_root is not None else directory
        files: list[IgnoreFile] = []
        if global_ignore_file is not None:
            global_rules = load_ignore_file(global_ignore_file, base)
            if global_rules is not None:
                files.append(global_rules)
        for current in _directories_from(base, directory):
            files.extend(_local_ignore_files(current))
        return cls(files=tuple(files))

    @classmethod
    def from_lines(cls, base: Path, lines: Sequence[str]) -> IgnoreRules:
        """Build rules from in-memory patterns."""
        return cls(files=(IgnoreFile(base=base, patterns=compile_patterns(lines)),))

    def descend(self, directory: Path) -> IgnoreRules:
        """Rules for the contents of `directory`, a child of the current level."""
        local = _local_ignore_files(directory)
        if not local:
            return self
        return IgnoreRules(files=self.files + tuple(local))

    def is_ignored(self, path: Path, is_dir: bool) -> bool:
        """Return whether `path` is excluded; deeper ignore files take precedence."""
        for ignore_file in reversed(self.files):
            decision = ignore_file.decide(path, is_dir)
            if decision is not None:
                return decision
        return False


def is_path_ignored(
    project_dir: Path,
    path: Path,
    *,
    is_dir: bool = True,
    global_ignore_file: Path | None = None,
) -> bool:
    """Check whether `path` (inside `project_dir`) is excluded by ignore rules."""
    rules = IgnoreRules.for_directory(project_dir, global_ignore_file)
    if path.parent != project_dir:
        for current in _directories_from(project_dir, path.parent)[1:]:
            rules = rules.descend(current)
    return rules.is_ignored(path, is_dir)
