"""Entry loading for a single trash location.

Pairs every ``info/<name>.trashinfo`` sidecar with its ``files/<name>``
data. Loading is best-effort per entry: a corrupt sidecar or a missing
pair becomes an orphan, and the rest of the location still loads.
"""

import logging
import os
from pathlib import Path

from trashctl.trash.errors import TrashInfoError
from trashctl.trash.models import OrphanKind, OrphanMeta, TrashedFile, TrashLocation
from trashctl.trash.trashinfo import TRASHINFO_SUFFIX, decode_trashinfo

logger = logging.getLogger(__name__)


def load_location(location: TrashLocation) -> tuple[list[TrashedFile], list[OrphanMeta]]:
    """Load trashed entries and orphans from one trash location.

    Args:
        location: Trash location to load.

    Returns:
        Tuple of (entries, orphans). Both are empty when the location
        does not exist or cannot be listed.
    """
    files: list[TrashedFile] = []
    orphans: list[OrphanMeta] = []

    info_names = _list_dir(location.info_dir)
    stored_names = set(_list_dir(location.files_dir))
    paired: set[str] = set()

    for info_name in sorted(info_names):
        if not info_name.endswith(TRASHINFO_SUFFIX):
            continue

        info_path = location.info_dir / info_name
        stored_name = info_name[: -len(TRASHINFO_SUFFIX)]
        trash_path = location.files_dir / stored_name

        try:
            info = decode_trashinfo(info_path.read_bytes())
            original_path = _resolve_original(info.path, location)
        except (OSError, TrashInfoError) as e:
            logger.warning("Invalid trash metadata %s: %s", info_path, e)
            orphans.append(
                OrphanMeta(
                    path=info_path,
                    kind=OrphanKind.INVALID_METADATA,
                    location=location,
                    reason=str(e),
                )
            )
            # Keep the data out of the file-without-metadata bucket
            paired.add(stored_name)
            continue

        if stored_name not in stored_names and not os.path.lexists(trash_path):
            orphans.append(
                OrphanMeta(
                    path=info_path,
                    kind=OrphanKind.METADATA_WITHOUT_FILE,
                    location=location,
                    reason=f"Stored file not found: {trash_path}",
                )
            )
            continue

        paired.add(stored_name)
        files.append(
            TrashedFile(
                original_path=original_path,
                deleted_at=info.deleted_at,
                trash_path=trash_path,
                info_path=info_path,
                location=location,
            )
        )

    for stored_name in sorted(stored_names - paired):
        orphans.append(
            OrphanMeta(
                path=location.files_dir / stored_name,
                kind=OrphanKind.FILE_WITHOUT_METADATA,
                location=location,
                reason="No matching .trashinfo",
            )
        )

    logger.debug(
        "Loaded %d entries and %d orphans from %s", len(files), len(orphans), location.root
    )
    return files, orphans


def _list_dir(directory: Path) -> list[str]:
    """List entry names of a directory, empty if missing or unreadable."""
    try:
        return os.listdir(directory)
    except FileNotFoundError:
        return []
    except OSError as e:
        logger.warning("Cannot list trash directory %s: %s", directory, e)
        return []


def _resolve_original(raw_path: str, location: TrashLocation) -> str:
    """Resolve a sidecar Path value to an absolute, normalized path.

    Raises:
        TrashInfoError: If a home trash sidecar holds a relative path.
    """
    if os.path.isabs(raw_path):
        return os.path.normpath(raw_path)
    if location.topdir is None:
        raise TrashInfoError(f"Relative Path {raw_path!r} in home trash")
    return os.path.normpath(os.path.join(location.topdir, raw_path))
