"""Codec for freedesktop.org ``.trashinfo`` sidecar files.

A sidecar looks like::

    [Trash Info]
    Path=/home/user/foo%20bar.txt
    DeletionDate=2024-01-15T10:00:00

``Path`` is percent-encoded and either absolute (home trash) or relative
to the mount point (top-directory trash). ``DeletionDate`` is local time
without a zone. No I/O happens here.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from urllib.parse import quote, unquote

from trashctl.trash.errors import TrashInfoError

TRASHINFO_SUFFIX = ".trashinfo"

_GROUP_HEADER = "[Trash Info]"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


@dataclass(frozen=True, slots=True)
class TrashInfo:
    """Decoded sidecar record.

    Attributes:
        path: Original path, decoded (absolute or relative to topdir).
        deleted_at: Local deletion time.
    """

    path: str
    deleted_at: datetime


def decode_trashinfo(data: bytes) -> TrashInfo:
    """Decode the contents of a .trashinfo file.

    Args:
        data: Raw file contents.

    Returns:
        Decoded TrashInfo.

    Raises:
        TrashInfoError: If the header, Path or DeletionDate is missing or invalid.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TrashInfoError(f"Sidecar is not valid UTF-8: {e}") from e

    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line and not line.startswith("#")]

    if not lines or lines[0] != _GROUP_HEADER:
        raise TrashInfoError(f"Missing {_GROUP_HEADER} header")

    values: dict[str, str] = {}
    for line in lines[1:]:
        # Only the first group is ours
        if line.startswith("["):
            break
        key, sep, value = line.partition("=")
        if not sep:
            continue
        values.setdefault(key.strip(), value.strip())

    raw_path = values.get("Path")
    if not raw_path:
        raise TrashInfoError("Missing Path key")

    raw_date = values.get("DeletionDate")
    if not raw_date:
        raise TrashInfoError("Missing DeletionDate key")

    try:
        deleted_at = datetime.strptime(raw_date, _DATE_FORMAT)
    except ValueError as e:
        raise TrashInfoError(f"Invalid DeletionDate {raw_date!r}") from e

    # Undecodable bytes round-trip as surrogates, like os.fsdecode
    path = unquote(raw_path, encoding="utf-8", errors="surrogateescape")
    return TrashInfo(path=path, deleted_at=deleted_at)


def encode_trashinfo(info: TrashInfo) -> bytes:
    """Encode a TrashInfo record to sidecar file contents.

    Args:
        info: Record to encode. Sub-second precision is dropped.

    Returns:
        UTF-8 encoded sidecar contents.
    """
    deleted_at = info.deleted_at.replace(microsecond=0)
    lines = [
        _GROUP_HEADER,
        f"Path={quote(os.fsencode(info.path), safe='/')}",
        f"DeletionDate={deleted_at.strftime(_DATE_FORMAT)}",
    ]
    return ("\n".join(lines) + "\n").encode("utf-8")
