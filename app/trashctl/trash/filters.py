"""Filter predicates, size parsing, and sorting for trashed entries.

Filters are independent predicates combined with logical AND. Sorting
is stable with the original path as tie breaker, and the "last N"
truncation always runs after sorting.
"""

import os
import re
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timedelta

from trashctl.trash.errors import ConfigError
from trashctl.trash.models import SortBy, TrashedFile

Predicate = Callable[[TrashedFile], bool]

# Size strings like "5MB", "1.5 GiB", "100k", "42"
_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmgtp]?i?)b?\s*$", re.IGNORECASE)

# Decimal suffixes are powers of 1000, "i" suffixes powers of 1024
_SIZE_MULTIPLIERS: dict[str, int] = {
    "": 1,
    "k": 1000,
    "m": 1000**2,
    "g": 1000**3,
    "t": 1000**4,
    "p": 1000**5,
    "ki": 1024,
    "mi": 1024**2,
    "gi": 1024**3,
    "ti": 1024**4,
    "pi": 1024**5,
}


def parse_size(size_str: str) -> int:
    """Parse a human-readable size string to bytes.

    Args:
        size_str: Size string like "5MB", "1GB", "512KiB" or "100".

    Returns:
        Size in bytes.

    Raises:
        ConfigError: If the string cannot be parsed.
    """
    match = _SIZE_PATTERN.match(size_str)
    if not match or match.group(2).lower() == "i":
        raise ConfigError(f"Invalid size: {size_str!r} (e.g. 5MB, 1GB)")

    value = float(match.group(1))
    multiplier = _SIZE_MULTIPLIERS[match.group(2).lower()]
    return int(value * multiplier)


def resolve_directory(directory: str) -> str:
    """Normalize a directory for parent comparison (expand ~, make absolute)."""
    return os.path.normpath(os.path.abspath(os.path.expanduser(directory)))


def directory_filter(directory: str) -> Predicate:
    """Keep entries whose original parent directory equals ``directory``."""
    target = resolve_directory(directory)
    return lambda f: os.path.dirname(f.original_path) == target


def day_new_filter(days: int, now: datetime) -> Predicate:
    """Keep entries deleted within the last ``days`` days (boundary included)."""
    cutoff = now - timedelta(days=days)
    return lambda f: f.deleted_at >= cutoff


def day_old_filter(days: int, now: datetime) -> Predicate:
    """Keep entries deleted more than ``days`` days ago."""
    cutoff = now - timedelta(days=days)
    return lambda f: f.deleted_at < cutoff


def size_large_filter(threshold: int) -> Predicate:
    """Keep entries of at least ``threshold`` bytes. Unknown sizes never pass."""
    return lambda f: f.size_bytes is not None and f.size_bytes >= threshold


def size_small_filter(threshold: int) -> Predicate:
    """Keep entries of at most ``threshold`` bytes. Unknown sizes never pass."""
    return lambda f: f.size_bytes is not None and f.size_bytes <= threshold


def apply_filters(
    files: Iterable[TrashedFile],
    predicates: Sequence[Predicate],
) -> list[TrashedFile]:
    """Return entries satisfying every predicate, preserving order."""
    return [f for f in files if all(p(f) for p in predicates)]


def _sort_key(sort_by: SortBy) -> Callable[[TrashedFile], object]:
    if sort_by == SortBy.PATH:
        return lambda f: f.original_path
    if sort_by == SortBy.SIZE:
        # Unknown sizes order before every known size
        return lambda f: -1 if f.size_bytes is None else f.size_bytes
    return lambda f: f.deleted_at


def sort_files(
    files: Iterable[TrashedFile],
    sort_by: SortBy = SortBy.DATE,
    ascending: bool = True,
) -> list[TrashedFile]:
    """Sort entries by key, ties ordered by original path then trash path.

    The direction applies to the primary key only; tied entries always
    keep ascending path order.
    """
    ordered = sorted(files, key=lambda f: (f.original_path, str(f.trash_path)))
    # reverse=True keeps equal elements in their existing order
    return sorted(ordered, key=_sort_key(sort_by), reverse=not ascending)  # type: ignore[arg-type]


def limit_last(files: Sequence[TrashedFile], n: int) -> list[TrashedFile]:
    """Keep the last ``n`` entries of a sorted sequence (0 keeps all)."""
    if n <= 0:
        return list(files)
    return list(files[-n:])
