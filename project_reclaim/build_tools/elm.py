"""Elm projects."""

from __future__ import annotations

from pathlib import Path

from .base import BuildToolKind, BuildToolProbe, EphemeralDirsTool


class Elm(EphemeralDirsTool):
    # elm-stuff holds both compiled artifacts and downloaded dependencies.
    kind = BuildToolKind.ELM
    ephemeral_dirs = ("elm-stuff",)


class ElmProbe(BuildToolProbe):
    kind = BuildToolKind.ELM

    def detect(self, directory: Path) -> Elm | None:
        if (directory / "elm.json").is_file():
            return Elm(directory)
        return None
