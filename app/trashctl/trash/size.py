"""Size computation for trashed entries.

Sizes are computed only on demand because directories require a full
recursive walk. A failure marks the entry's size as unknown instead of
failing the whole catalog.
"""

import logging
import os
import stat
from collections.abc import Iterable
from pathlib import Path

from trashctl.trash.models import SizeState, TrashedFile

logger = logging.getLogger(__name__)


def get_size(path: Path) -> int:
    """Get size in bytes for a path.

    For files and symlinks, returns the lstat size. For directories,
    returns the sum of all files recursively (symlinks are not followed).

    Args:
        path: Path to measure.

    Returns:
        Size in bytes.

    Raises:
        OSError: If the path or any part of a directory tree cannot be read.
    """
    st = os.lstat(path)
    if not stat.S_ISDIR(st.st_mode):
        return st.st_size

    def _raise(error: OSError) -> None:
        raise error

    total = 0
    for dirpath, _dirnames, filenames in os.walk(path, onerror=_raise):
        for name in filenames:
            total += os.lstat(os.path.join(dirpath, name)).st_size
    return total


def fill_size(file: TrashedFile) -> None:
    """Compute and store the size of one entry if still pending."""
    if file.size_state != SizeState.PENDING:
        return

    try:
        file.size_bytes = get_size(file.trash_path)
        file.size_state = SizeState.KNOWN
    except OSError as e:
        logger.warning("Cannot get size of %s: %s", file.trash_path, e)
        file.size_bytes = None
        file.size_state = SizeState.UNKNOWN


def fill_sizes(files: Iterable[TrashedFile]) -> None:
    """Compute sizes for every pending entry."""
    for file in files:
        fill_size(file)


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string, '-' when unknown."""
    if size_bytes is None:
        return "-"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"
