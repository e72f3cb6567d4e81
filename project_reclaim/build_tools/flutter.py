"""Flutter (Dart) projects."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .base import BuildToolKind, BuildToolProbe, EphemeralDirsTool, ManifestError

PUBSPEC = "pubspec.yaml"
# `version` and `flutter` are what set a Flutter pubspec apart from a plain Dart package.
REQUIRED_KEYS = ("name", "version", "flutter")


def read_pubspec(path: Path) -> dict:
    """Load a pubspec and make sure it describes a Flutter project.

    Raises:
        ManifestError: If the file is unreadable, not YAML, or lacks a required key.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ManifestError(f"Cannot parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"{path} is not a mapping")
    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ManifestError(f"{path} is missing {', '.join(missing)}")
    if not isinstance(data["name"], str) or not data["name"]:
        raise ManifestError(f"{path} has no valid name")
    return data


class Flutter(EphemeralDirsTool):
    """Flutter handle.

    `flutter clean` deletes exactly `build/` and `.dart_tool/`; doing it here
    avoids requiring Flutter to be installed.
    """

    kind = BuildToolKind.FLUTTER
    ephemeral_dirs = ("build", ".dart_tool")

    def __init__(self, path: Path, pubspec: dict):
        super().__init__(path)
        self.pubspec = pubspec

    def project_name(self) -> str | None:
        return self.pubspec["name"]


class FlutterProbe(BuildToolProbe):
    kind = BuildToolKind.FLUTTER

    def detect(self, directory: Path) -> Flutter | None:
        pubspec_path = directory / PUBSPEC
        if not pubspec_path.is_file():
            return None
        try:
            pubspec = read_pubspec(pubspec_path)
        except ManifestError as exc:
            logging.debug("Not a Flutter project: %s", exc)
            return None
        return Flutter(directory, pubspec)
