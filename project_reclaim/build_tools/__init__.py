"""
Build-tool probes and handles.

A probe inspects a directory and, when the tool's marker file is present,
returns a handle bound to that directory. Handles report how much space their
regenerable directories take up and know how to remove them.
"""

from .base import (
    BuildState,
    BuildStatus,
    BuildTool,
    BuildToolError,
    BuildToolKind,
    BuildToolProbe,
    CleanError,
    EphemeralDirsTool,
    ManifestError,
    existing_dirs,
    remove_dirs,
    run_clean_command,
    status_from_dirs,
)
from .cargo import Cargo, CargoProbe
from .dotnet import Dotnet, DotnetProbe
from .elm import Elm, ElmProbe
from .flutter import Flutter, FlutterProbe
from .gradle import Gradle, GradleProbe
from .maven import Maven, MavenProbe
from .mix import Mix, MixProbe
from .npm import Npm, NpmProbe

__all__ = [
    "BuildState",
    "BuildStatus",
    "BuildTool",
    "BuildToolError",
    "BuildToolKind",
    "BuildToolProbe",
    "Cargo",
    "CargoProbe",
    "CleanError",
    "Dotnet",
    "DotnetProbe",
    "Elm",
    "ElmProbe",
    "EphemeralDirsTool",
    "Flutter",
    "FlutterProbe",
    "Gradle",
    "GradleProbe",
    "ManifestError",
    "Maven",
    "MavenProbe",
    "Mix",
    "MixProbe",
    "Npm",
    "NpmProbe",
    "existing_dirs",
    "remove_dirs",
    "run_clean_command",
    "status_from_dirs",
]
