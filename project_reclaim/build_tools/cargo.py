"""Rust projects built with Cargo."""

from __future__ import annotations

import tomllib
from pathlib import Path

from .base import BuildToolKind, BuildToolProbe, EphemeralDirsTool, ManifestError

MANIFEST = "Cargo.toml"


class Cargo(EphemeralDirsTool):
    """Cargo keeps compiled output and downloaded crates' build results in `target`.

    Deleting `target` directly matches `cargo clean` without requiring Cargo
    to be installed.
    """

    kind = BuildToolKind.CARGO
    ephemeral_dirs = ("target",)

    def project_name(self) -> str | None:
        manifest = self.path / MANIFEST
        try:
            with manifest.open("rb") as handle:
                data = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ManifestError(f"Cannot parse {manifest}: {exc}") from exc
        package = data.get("package")
        if not isinstance(package, dict):
            # Virtual workspace manifests have no [package] table.
            return None
        name = package.get("name")
        if not isinstance(name, str) or not name:
            raise ManifestError(f"{manifest} has no valid package.name")
        return name


class CargoProbe(BuildToolProbe):
    kind = BuildToolKind.CARGO

    def detect(self, directory: Path) -> Cargo | None:
        if (directory / MANIFEST).is_file():
            return Cargo(directory)
        return None
