"""Trash index and query engine.

This module provides trash location discovery, sidecar decoding, the
Box catalog with its filter/sort/query pipeline, and restore/remove
operations for the trash domain.
"""

from trashctl.trash.box import Box
from trashctl.trash.errors import (
    ConfigError,
    DiscoveryError,
    TrashError,
    TrashInfoError,
    TrashOperationError,
)
from trashctl.trash.loader import load_location
from trashctl.trash.locator import TrashLocator
from trashctl.trash.models import (
    OrphanKind,
    OrphanMeta,
    QueryMode,
    SizeState,
    SortBy,
    TrashedFile,
    TrashLocation,
)
from trashctl.trash.operator import TrashActionResult, TrashOperator, raise_for_failures
from trashctl.trash.options import QueryOptions
from trashctl.trash.put import trash_put
from trashctl.trash.query import QueryMatcher
from trashctl.trash.trashinfo import TrashInfo, decode_trashinfo, encode_trashinfo

__all__ = [
    "Box",
    "ConfigError",
    "DiscoveryError",
    "OrphanKind",
    "OrphanMeta",
    "QueryMatcher",
    "QueryMode",
    "QueryOptions",
    "SizeState",
    "SortBy",
    "TrashActionResult",
    "TrashError",
    "TrashInfo",
    "TrashInfoError",
    "TrashLocation",
    "TrashLocator",
    "TrashOperationError",
    "TrashOperator",
    "TrashedFile",
    "decode_trashinfo",
    "encode_trashinfo",
    "load_location",
    "raise_for_failures",
    "trash_put",
]
