"""JavaScript projects managed with NPM (or a compatible package manager)."""

from __future__ import annotations

from pathlib import Path

from .base import BuildToolKind, BuildToolProbe, EphemeralDirsTool

MANIFEST = "package.json"
NODE_MODULES = "node_modules"


class Npm(EphemeralDirsTool):
    kind = BuildToolKind.NPM
    ephemeral_dirs = (NODE_MODULES,)


def is_inside_node_modules(directory: Path) -> bool:
    """Whether `directory` is part of an installed dependency tree."""
    return NODE_MODULES in directory.parts


class NpmProbe(BuildToolProbe):
    """Recognizes `package.json`, except for installed third-party packages."""

    kind = BuildToolKind.NPM

    def detect(self, directory: Path) -> Npm | None:
        if is_inside_node_modules(directory):
            return None
        if (directory / MANIFEST).is_file():
            return Npm(directory)
        return None
