"""
Replace a project's working tree with a single `.tar.xz` archive.

The steps are ordered so that an interruption at any point leaves either the
original tree or a verified archive (usually both) on disk:

1. build and verify the archive in a private temporary directory;
2. rename the project directory aside to `.{name}~N`;
3. recreate an empty directory at the project path;
4. copy the archive into it and confirm the copy;
5. delete the renamed original.

A failure in steps 3 or 4 rolls back: the partial archive is removed and the
original tree is renamed back to the project path. If even that fails, the
verified archive is kept next to the renamed tree.
"""

from __future__ import annotations

import logging
import lzma
import os
import shutil
import tarfile
import tempfile
from pathlib import Path

from .fs_utils import canonicalize
from .project import Project

ARCHIVE_SUFFIX = ".tar.xz"
XZ_PRESET = 6
MAX_SIBLING_ATTEMPTS = 10


class ArchiveError(RuntimeError):
    """Raised when an archive transaction cannot complete."""


class ArchiveExistsError(ArchiveError):
    """Raised when the target archive path is already taken."""


class NoFreeSiblingError(ArchiveError):
    """Raised when no `.{name}~N` name is available for the original tree."""


def archive_filename(project_name: str) -> str:
    """File name of a project's archive; path separators are not allowed in it."""
    safe_name = project_name.replace(os.sep, "_")
    if os.altsep:
        safe_name = safe_name.replace(os.altsep, "_")
    return f"{safe_name}{ARCHIVE_SUFFIX}"


def archive_path_for(project: Project) -> Path:
    return project.path / archive_filename(project.name)


def create_tar_xz(src_dir: Path, dst_path: Path) -> None:
    """Pack the contents of `src_dir` (hidden files included) into `dst_path`."""
    with tarfile.open(dst_path, "w:xz", preset=XZ_PRESET) as tar:
        for child in sorted(src_dir.iterdir(), key=lambda path: path.name):
            tar.add(child, arcname=child.name)


def verify_tar_xz(path: Path) -> None:
    """Read the whole archive back to make sure it is complete.

    Raises:
        ArchiveError: If the archive is truncated or corrupt.
    """
    try:
        with tarfile.open(path, "r:xz") as tar:
            for member in tar:
                if member.isfile():
                    extracted = tar.extractfile(member)
                    if extracted is not None:
                        for _ in iter(lambda: extracted.read(1024 * 1024), b""):
                            continue
    except (tarfile.TarError, lzma.LZMAError, EOFError, OSError) as exc:
        raise ArchiveError(f"Archive verification failed for {path}: {exc}") from exc


def find_free_sibling(project_path: Path) -> Path:
    """First unused `.{name}~N` next to the project, N from 1 to 10.

    Raises:
        NoFreeSiblingError: If all ten names are taken.
    """
    parent = project_path.parent
    for index in range(1, MAX_SIBLING_ATTEMPTS + 1):
        candidate = parent / f".{project_path.name}~{index}"
        if not os.path.lexists(candidate):
            return candidate
    raise NoFreeSiblingError(
        f"Could not move the project directory aside. Please make sure there are no "
        f"'.{project_path.name}~*' directories at {parent}"
    )


def rename_project_dir(project_path: Path) -> Path:
    """Move the project directory to a free sibling name and return it."""
    target = find_free_sibling(project_path)
    try:
        project_path.rename(target)
    except OSError as exc:
        raise ArchiveError(f"Failed to rename {project_path} to {target}: {exc}") from exc
    logging.debug("Renamed %s to %s", project_path, target)
    return target


def copy_into_place(temp_archive: Path, final_path: Path) -> None:
    """Copy the finished archive to its final location and confirm the copy."""
    shutil.copyfile(temp_archive, final_path)
    with final_path.open("rb") as handle:
        os.fsync(handle.fileno())
    expected = temp_archive.stat().st_size
    actual = final_path.stat().st_size
    if actual != expected:
        raise ArchiveError(f"Copied archive {final_path} has {actual} bytes, expected {expected}")


def restore_project_dir(project_path: Path, renamed: Path, final_path: Path) -> None:
    """Undo a failed swap: drop the partial archive and move the original back."""
    if os.path.lexists(final_path):
        final_path.unlink()
    if os.path.lexists(project_path):
        project_path.rmdir()
    renamed.rename(project_path)
    logging.debug("Restored %s from %s", project_path, renamed)


def keep_temp_archive(temp_archive: Path, renamed: Path) -> Path | None:
    """Move the verified archive out of the temporary directory, next to `renamed`."""
    kept = renamed.with_name(renamed.name + ARCHIVE_SUFFIX)
    try:
        shutil.move(temp_archive, kept)
    except OSError as exc:
        logging.warning("Could not keep the verified archive %s: %s", temp_archive, exc)
        return None
    return kept


def archive_project(project: Project, dry_run: bool) -> Path:
    """Swap the project's directory contents for `<name>.tar.xz` at the same path.

    Raises:
        ArchiveExistsError: If the archive file already exists; nothing is touched.
        NoFreeSiblingError: If the original tree cannot be renamed aside.
        ArchiveError: For any other failure; the message names where the
            original content can be found.
    """
    project_path = canonicalize(project.path)
    final_path = project_path / archive_filename(project.name)

    if os.path.lexists(final_path):
        raise ArchiveExistsError(
            f"Cannot create archive at {final_path}: there's already a file at that path"
        )

    if dry_run:
        logging.info("Would replace '%s/*' with %s", project_path, final_path)
        return final_path

    # Fails early, before any work, if no sibling name is free.
    find_free_sibling(project_path)

    with tempfile.TemporaryDirectory(prefix="project_reclaim-") as tmpdir:
        temp_archive = Path(tmpdir) / final_path.name
        try:
            create_tar_xz(project_path, temp_archive)
        except (OSError, tarfile.TarError) as exc:
            raise ArchiveError(f"Failed to pack {project_path}: {exc}") from exc
        verify_tar_xz(temp_archive)

        renamed = rename_project_dir(project_path)
        try:
            project_path.mkdir()
            copy_into_place(temp_archive, final_path)
        except (OSError, ArchiveError) as exc:
            try:
                restore_project_dir(project_path, renamed, final_path)
            except OSError as restore_exc:
                try:
                    final_path.unlink(missing_ok=True)
                except OSError as unlink_exc:
                    logging.warning("Could not remove partial archive %s: %s", final_path, unlink_exc)
                kept = keep_temp_archive(temp_archive, renamed)
                kept_note = f"; a verified archive was kept at {kept}" if kept else ""
                raise ArchiveError(
                    f"Failed to put the archive in place at {final_path}: {exc}. "
                    f"Restoring {project_path} also failed ({restore_exc}). "
                    f"The original project is intact at {renamed}{kept_note}"
                ) from exc
            raise ArchiveError(
                f"Failed to put the archive in place at {final_path}: {exc}. "
                f"The project was restored at {project_path}"
            ) from exc

    try:
        shutil.rmtree(renamed)
    except OSError as exc:
        raise ArchiveError(
            f"Archive written to {final_path}, but removing the original tree at {renamed} failed: {exc}"
        ) from exc
    logging.info("Archived %s to %s", project_path, final_path)
    return final_path
