"""JVM projects built with Gradle."""

from __future__ import annotations

from pathlib import Path

from .base import BuildTool, BuildToolKind, BuildToolProbe, run_clean_command

MARKERS = ("build.gradle", "build.gradle.kts", "settings.gradle", "settings.gradle.kts")
WRAPPER = "gradlew"


class Gradle(BuildTool):
    """Gradle handle; output locations are configurable, so cleaning is left to Gradle."""

    kind = BuildToolKind.GRADLE

    def clean_command(self) -> list[str]:
        wrapper = self.path / WRAPPER
        if wrapper.is_file():
            return [str(wrapper), "clean"]
        return ["gradle", "clean"]

    def clean_project(self, dry_run: bool) -> list[str]:
        return run_clean_command(self.clean_command(), self.path, dry_run)


class GradleProbe(BuildToolProbe):
    kind = BuildToolKind.GRADLE

    def detect(self, directory: Path) -> Gradle | None:
        if any((directory / marker).is_file() for marker in MARKERS):
            return Gradle(directory)
        return None
