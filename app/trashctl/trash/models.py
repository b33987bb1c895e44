"""Trash domain models.

This module defines the core data structures for representing trash
locations, trashed entries, and inconsistent metadata discovered while
loading trash directories.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class SizeState(str, Enum):
    """Lazy size computation state of a trashed entry.

    Attributes:
        PENDING: Size has not been requested yet.
        KNOWN: Size was computed successfully.
        UNKNOWN: Size computation failed.
    """

    PENDING = "pending"
    KNOWN = "known"
    UNKNOWN = "unknown"


class OrphanKind(str, Enum):
    """Kind of inconsistency between sidecars and stored files.

    Attributes:
        METADATA_WITHOUT_FILE: Sidecar exists, stored file is missing.
        FILE_WITHOUT_METADATA: Stored file exists, sidecar is missing.
        INVALID_METADATA: Sidecar could not be read or decoded.
    """

    METADATA_WITHOUT_FILE = "metadata_without_file"
    FILE_WITHOUT_METADATA = "file_without_metadata"
    INVALID_METADATA = "invalid_metadata"


class SortBy(str, Enum):
    """Sort key for trashed entries."""

    DATE = "date"
    PATH = "path"
    SIZE = "size"


class QueryMode(str, Enum):
    """Matching mode for free-text queries.

    Attributes:
        REGEX: Regular expression searched anywhere in the path.
        GLOB: Shell-style wildcard matched against the full path.
        LITERAL: Case-insensitive substring.
        FULL: Case-sensitive exact path equality.
    """

    REGEX = "regex"
    GLOB = "glob"
    LITERAL = "literal"
    FULL = "full"


@dataclass(frozen=True, slots=True)
class TrashLocation:
    """A trash directory pair belonging to one device.

    Attributes:
        root: Trash directory containing ``files`` and ``info``.
        device: Device identifier (st_dev) hosting the trash.
        topdir: Mount point that relative sidecar paths resolve against.
            None for the home trash, whose sidecar paths are absolute.
        usable: Whether the process may read and write the directory.
    """

    root: Path
    device: int | None
    topdir: Path | None = None
    usable: bool = True

    @property
    def files_dir(self) -> Path:
        """Directory holding the trashed data."""
        return self.root / "files"

    @property
    def info_dir(self) -> Path:
        """Directory holding the .trashinfo sidecars."""
        return self.root / "info"

    @property
    def is_home(self) -> bool:
        """True for the user's home trash."""
        return self.topdir is None


@dataclass(slots=True)
class TrashedFile:
    """A trashed entry in the unified catalog.

    Size is computed lazily by the Box and is the only field that
    changes after loading.

    Attributes:
        original_path: Absolute path the entry was deleted from.
        deleted_at: Local deletion time, second precision.
        trash_path: Path of the stored data inside ``files``.
        info_path: Path of the sidecar inside ``info``.
        location: Owning trash location.
        size_state: Lazy size state.
        size_bytes: Size in bytes once known (recursive for directories).
    """

    original_path: str
    deleted_at: datetime
    trash_path: Path
    info_path: Path
    location: TrashLocation
    size_state: SizeState = SizeState.PENDING
    size_bytes: int | None = field(default=None)

    @property
    def name(self) -> str:
        """Base name of the original path."""
        return Path(self.original_path).name

    @property
    def size_known(self) -> bool:
        """True when the size has been computed successfully."""
        return self.size_state == SizeState.KNOWN


@dataclass(frozen=True, slots=True)
class OrphanMeta:
    """A sidecar without data, data without sidecar, or a corrupt sidecar.

    Attributes:
        path: Path of the offending sidecar or stored file.
        kind: Kind of inconsistency.
        location: Trash location the orphan was found in.
        reason: Human-readable detail.
    """

    path: Path
    kind: OrphanKind
    location: TrashLocation
    reason: str = ""
