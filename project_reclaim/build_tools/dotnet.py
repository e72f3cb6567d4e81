"""C# projects built with the .NET SDK."""

from __future__ import annotations

import logging
from pathlib import Path

from .base import BuildToolKind, BuildToolProbe, EphemeralDirsTool

PROJECT_SUFFIX = ".csproj"


def find_project_files(directory: Path) -> list[Path]:
    try:
        return sorted(
            entry for entry in directory.iterdir() if entry.suffix == PROJECT_SUFFIX and entry.is_file()
        )
    except OSError as exc:
        logging.debug("Unable to list %s: %s", directory, exc)
        return []


class Dotnet(EphemeralDirsTool):
    kind = BuildToolKind.DOTNET
    ephemeral_dirs = ("bin", "obj")

    def __init__(self, path: Path, project_file: Path):
        super().__init__(path)
        self.project_file = project_file

    def project_name(self) -> str | None:
        # The assembly name defaults to the project file's stem.
        return self.project_file.stem


class DotnetProbe(BuildToolProbe):
    kind = BuildToolKind.DOTNET

    def detect(self, directory: Path) -> Dotnet | None:
        project_files = find_project_files(directory)
        if not project_files:
            return None
        return Dotnet(directory, project_files[0])
