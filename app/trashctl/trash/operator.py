"""Restore and remove operations on trashed entries.

Every entry is processed independently: a failure is recorded on that
entry's result and the batch continues. Completed data moves are never
rolled back; a sidecar that cannot be deleted after a successful
restore is reported as a repairable orphan.
"""

import errno
import logging
import os
import shutil
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from trashctl.trash.errors import TrashOperationError
from trashctl.trash.models import OrphanMeta, TrashedFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TrashActionResult:
    """Result of a single restore, remove, or repair operation.

    Attributes:
        path: Path the operation is reported against (original path for
            entries, offending path for orphans).
        success: Whether the data operation completed.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (nothing modified).
        destination: Where the data was restored to, if applicable.
        orphaned_info: Sidecar left behind after a successful data
            operation, None if the sidecar was removed.
    """

    path: str
    success: bool
    error: str | None = None
    dry_run: bool = False
    destination: str | None = None
    orphaned_info: str | None = None


class TrashOperator:
    """Restores and permanently removes trashed entries.

    Attributes:
        _dry_run: If True, report what would happen without modifying anything.
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the TrashOperator.

        Args:
            dry_run: If True, simulate operations without touching the filesystem.
        """
        self._dry_run = dry_run

    def restore(
        self,
        files: Iterable[TrashedFile],
        restore_to: str = "",
    ) -> list[TrashActionResult]:
        """Move entries back to their original (or an override) location.

        Args:
            files: Entries to restore.
            restore_to: Directory to restore into instead of each entry's
                original parent. Empty string restores to the original path.

        Returns:
            List of TrashActionResult, one per entry.
        """
        return [self._restore_single(f, restore_to) for f in files]

    def remove(self, files: Iterable[TrashedFile]) -> list[TrashActionResult]:
        """Permanently delete entries and their sidecars.

        Args:
            files: Entries to delete.

        Returns:
            List of TrashActionResult, one per entry.
        """
        return [self._remove_single(f) for f in files]

    def fix_orphans(self, orphans: Iterable[OrphanMeta]) -> list[TrashActionResult]:
        """Delete orphaned sidecars and stored files.

        Args:
            orphans: Orphans to delete.

        Returns:
            List of TrashActionResult, one per orphan.
        """
        results: list[TrashActionResult] = []
        for orphan in orphans:
            path = str(orphan.path)
            if self._dry_run:
                logger.info("Dry-run: would delete orphan %s", path)
                results.append(TrashActionResult(path=path, success=True, dry_run=True))
                continue
            try:
                _delete_path(orphan.path)
            except OSError as e:
                results.append(TrashActionResult(path=path, success=False, error=str(e)))
                continue
            results.append(TrashActionResult(path=path, success=True))
        return results

    def _restore_single(self, file: TrashedFile, restore_to: str) -> TrashActionResult:
        if restore_to:
            destination = Path(restore_to).expanduser() / file.name
        else:
            destination = Path(file.original_path)

        if not os.path.lexists(file.trash_path):
            return TrashActionResult(
                path=file.original_path,
                success=False,
                error=f"Trashed file not found: {file.trash_path}",
            )

        if os.path.lexists(destination):
            return TrashActionResult(
                path=file.original_path,
                success=False,
                error=f"Destination already exists: {destination}",
            )

        if self._dry_run:
            logger.info("Dry-run: would restore %s to %s", file.trash_path, destination)
            return TrashActionResult(
                path=file.original_path,
                success=True,
                dry_run=True,
                destination=str(destination),
            )

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            _move(file.trash_path, destination)
        except OSError as e:
            return TrashActionResult(path=file.original_path, success=False, error=str(e))

        return TrashActionResult(
            path=file.original_path,
            success=True,
            destination=str(destination),
            orphaned_info=_unlink_info(file.info_path),
        )

    def _remove_single(self, file: TrashedFile) -> TrashActionResult:
        if not os.path.lexists(file.trash_path):
            return TrashActionResult(
                path=file.original_path,
                success=False,
                error=f"Trashed file not found: {file.trash_path}",
            )

        if self._dry_run:
            logger.info("Dry-run: would remove %s", file.trash_path)
            return TrashActionResult(path=file.original_path, success=True, dry_run=True)

        try:
            _delete_path(file.trash_path)
        except OSError as e:
            # Sidecar stays so the entry remains listed
            return TrashActionResult(path=file.original_path, success=False, error=str(e))

        return TrashActionResult(
            path=file.original_path,
            success=True,
            orphaned_info=_unlink_info(file.info_path),
        )


def raise_for_failures(results: Iterable[TrashActionResult]) -> None:
    """Raise TrashOperationError if any result failed.

    Raises:
        TrashOperationError: Summarizing every failed entry.
    """
    failures = {r.path: r.error or "Unknown error" for r in results if not r.success}
    if failures:
        raise TrashOperationError(failures)


def _move(source: Path, destination: Path) -> None:
    """Move source to destination without replacing an existing path.

    Files and symlinks are hard-linked and then unlinked, so a destination
    created after the caller's existence check fails with FileExistsError.
    Directories, and filesystems without hard links, fall back to rename,
    which can still replace a path created concurrently.
    """
    if not source.is_dir() or source.is_symlink():
        try:
            os.link(source, destination, follow_symlinks=False)
        except FileExistsError:
            raise
        except OSError as e:
            logger.debug("Cannot hard-link %s (%s), renaming instead", source, e)
        else:
            try:
                os.unlink(source)
            except OSError:
                os.unlink(destination)
                raise
            return

    try:
        os.rename(source, destination)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        shutil.move(source, destination)


def _delete_path(path: Path) -> None:
    """Delete a file, symlink, or directory tree."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _unlink_info(info_path: Path) -> str | None:
    """Delete a sidecar, returning its path if it had to be left behind."""
    try:
        info_path.unlink()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Data moved but metadata %s could not be removed: %s", info_path, e)
        return str(info_path)
    return None
