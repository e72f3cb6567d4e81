"""Ordered collection of build-tool probes used to recognize projects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .build_tools import (
    BuildTool,
    BuildToolKind,
    BuildToolProbe,
    CargoProbe,
    DotnetProbe,
    ElmProbe,
    FlutterProbe,
    GradleProbe,
    MavenProbe,
    MixProbe,
    NpmProbe,
)


class BuildToolRegistry:
    """Holds probes in registration order."""

    def __init__(self, probes: Iterable[BuildToolProbe] = ()):
        self._probes: list[BuildToolProbe] = list(probes)

    def __len__(self) -> int:
        return len(self._probes)

    def __repr__(self) -> str:
        return f"BuildToolRegistry({self._probes!r})"

    @property
    def probes(self) -> tuple[BuildToolProbe, ...]:
        return tuple(self._probes)

    def register(self, probe: BuildToolProbe) -> None:
        """Append a probe.

        Not idempotent: registering a probe twice runs it twice per directory.
        """
        self._probes.append(probe)

    def retain(self, names: Iterable[str]) -> None:
        """Drop every probe that matches none of `names`; cannot be undone."""
        wanted = list(names)
        self._probes = [probe for probe in self._probes if any(probe.applies_to(name) for name in wanted)]
        logging.debug("Build tools after filtering by %s: %r", wanted, self._probes)

    def probe(self, directory: Path) -> list[BuildTool]:
        """Return a handle from every probe that recognizes `directory`."""
        handles: list[BuildTool] = []
        for probe in self._probes:
            handle = probe.detect(directory)
            if handle is not None:
                handles.append(handle)
        return handles


def default_registry(global_ignore_file: Path | None = None) -> BuildToolRegistry:
    """Registry with every supported build tool."""
    return BuildToolRegistry(
        [
            CargoProbe(),
            ElmProbe(),
            MixProbe(global_ignore_file),
            NpmProbe(),
            GradleProbe(),
            MavenProbe(),
            FlutterProbe(),
            DotnetProbe(),
        ]
    )


def known_type_names() -> list[str]:
    """Every name accepted when filtering by build-tool type."""
    return sorted(alias for kind in BuildToolKind for alias in kind.aliases)
