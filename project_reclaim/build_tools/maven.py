"""JVM projects built with Maven."""

from __future__ import annotations

from pathlib import Path

from .base import BuildTool, BuildToolKind, BuildToolProbe, run_clean_command

WRAPPER = "mvnw"


class Maven(BuildTool):
    kind = BuildToolKind.MAVEN

    def clean_command(self) -> list[str]:
        wrapper = self.path / WRAPPER
        if wrapper.is_file():
            return [str(wrapper), "clean"]
        return ["mvn", "clean"]

    def clean_project(self, dry_run: bool) -> list[str]:
        return run_clean_command(self.clean_command(), self.path, dry_run)


class MavenProbe(BuildToolProbe):
    kind = BuildToolKind.MAVEN

    def detect(self, directory: Path) -> Maven | None:
        if (directory / "pom.xml").is_file():
            return Maven(directory)
        return None
