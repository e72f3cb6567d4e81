"""Elixir projects built with Mix."""

from __future__ import annotations

import logging
from pathlib import Path

from ..ignore_rules import is_path_ignored
from .base import BuildToolKind, BuildToolProbe, EphemeralDirsTool, existing_dirs

ALWAYS_EPHEMERAL_DIRS = ("_build", "deps")
# Language-server cache; only reclaimed when the project ignores it.
ELIXIR_LS_DIR = ".elixir_ls"


class Mix(EphemeralDirsTool):
    """Mix project handle.

    `mix clean --deps` would need a matching Mix installation and still leaves
    directories behind, so the well-known directories are removed directly.
    The project name lives in `mix.exs`, which cannot be read reliably without
    running Elixir (and thereby compiling the project), so naming is not
    supported.
    """

    kind = BuildToolKind.MIX
    ephemeral_dirs = ALWAYS_EPHEMERAL_DIRS

    def __init__(self, path: Path, global_ignore_file: Path | None = None):
        super().__init__(path)
        self.global_ignore_file = global_ignore_file

    def reclaimable_dirs(self) -> list[Path]:
        dirs = existing_dirs(self.path, self.ephemeral_dirs)
        for cache_dir in existing_dirs(self.path, (ELIXIR_LS_DIR,)):
            if is_path_ignored(self.path, cache_dir, global_ignore_file=self.global_ignore_file):
                dirs.append(cache_dir)
            else:
                logging.debug("Keeping %s as it is not ignored by version control", cache_dir)
        return dirs


class MixProbe(BuildToolProbe):
    kind = BuildToolKind.MIX

    def __init__(self, global_ignore_file: Path | None = None):
        self.global_ignore_file = global_ignore_file

    def detect(self, directory: Path) -> Mix | None:
        if (directory / "mix.exs").is_file():
            return Mix(directory, self.global_ignore_file)
        return None
