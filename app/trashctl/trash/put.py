"""Moving paths into the trash.

The sidecar is reserved first with an exclusive create, then the data
is renamed into ``files/``. If the rename fails the reserved sidecar is
removed again, so a failed put never leaves an orphan behind.
"""

import logging
import os
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from trashctl.core.paths import ensure_trash_dirs
from trashctl.trash.locator import TrashLocator
from trashctl.trash.models import TrashLocation
from trashctl.trash.operator import TrashActionResult
from trashctl.trash.trashinfo import TRASHINFO_SUFFIX, TrashInfo, encode_trashinfo

logger = logging.getLogger(__name__)

# Give up on name reservation after this many collisions
_MAX_NAME_ATTEMPTS = 10_000


def trash_put(
    paths: Iterable[str],
    *,
    locator: TrashLocator | None = None,
    now: datetime | None = None,
) -> list[TrashActionResult]:
    """Move paths into the trash location of their device.

    Args:
        paths: Paths to trash. Relative paths resolve against the cwd.
        locator: Trash locator. Defaults to the system locator.
        now: Deletion time to record. Defaults to the current local time.

    Returns:
        List of TrashActionResult, one per path. ``destination`` holds the
        stored path inside the trash.
    """
    locator = locator if locator is not None else TrashLocator()
    return [_put_single(path, locator, now) for path in paths]


def _put_single(raw_path: str, locator: TrashLocator, now: datetime | None) -> TrashActionResult:
    source = Path(os.path.abspath(os.path.expanduser(raw_path)))

    if not os.path.lexists(source):
        return TrashActionResult(
            path=str(source),
            success=False,
            error=f"Path does not exist: {source}",
        )

    try:
        location = locator.location_for(source)
        ensure_trash_dirs(location.root)
    except (OSError, RuntimeError) as e:
        return TrashActionResult(path=str(source), success=False, error=str(e))

    if source == location.root or location.root.is_relative_to(source):
        return TrashActionResult(
            path=str(source),
            success=False,
            error=f"Refusing to trash the trash directory itself: {source}",
        )

    info = TrashInfo(
        path=_sidecar_path(source, location),
        deleted_at=now if now is not None else datetime.now(),
    )

    try:
        name, info_path = _reserve_name(location, source.name, encode_trashinfo(info))
    except OSError as e:
        return TrashActionResult(path=str(source), success=False, error=str(e))

    stored = location.files_dir / name
    try:
        os.rename(source, stored)
    except OSError as e:
        info_path.unlink(missing_ok=True)
        return TrashActionResult(path=str(source), success=False, error=str(e))

    logger.debug("Trashed %s as %s", source, stored)
    return TrashActionResult(path=str(source), success=True, destination=str(stored))


def _sidecar_path(source: Path, location: TrashLocation) -> str:
    """Absolute path for the home trash, topdir-relative otherwise."""
    if location.topdir is None:
        return str(source)
    return os.path.relpath(source, location.topdir)


def _reserve_name(location: TrashLocation, base: str, contents: bytes) -> tuple[str, Path]:
    """Create a unique sidecar exclusively and return (stored name, sidecar path).

    Raises:
        OSError: If no name could be reserved or the sidecar cannot be written.
    """
    for attempt in range(1, _MAX_NAME_ATTEMPTS + 1):
        name = base if attempt == 1 else f"{base}_{attempt}"
        if os.path.lexists(location.files_dir / name):
            continue

        info_path = location.info_dir / f"{name}{TRASHINFO_SUFFIX}"
        try:
            fd = os.open(info_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        except FileExistsError:
            continue

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(contents)
        except OSError:
            info_path.unlink(missing_ok=True)
            raise
        return name, info_path

    raise OSError(f"Cannot reserve a trash name for {base!r}")
