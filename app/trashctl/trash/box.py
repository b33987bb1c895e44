"""The Box: a unified catalog of trashed entries.

A Box is built, queried and consumed within one invocation. ``open()``
discovers trash locations, loads every location, filters, matches,
sorts and truncates. Orphans are collected separately and never
filtered.
"""

import logging
import os
from collections.abc import Iterable
from datetime import datetime

from trashctl.trash.filters import (
    Predicate,
    apply_filters,
    day_new_filter,
    day_old_filter,
    directory_filter,
    limit_last,
    parse_size,
    size_large_filter,
    size_small_filter,
    sort_files,
)
from trashctl.trash.loader import load_location
from trashctl.trash.locator import TrashLocator
from trashctl.trash.models import OrphanMeta, SizeState, TrashedFile, TrashLocation
from trashctl.trash.operator import TrashActionResult, TrashOperator
from trashctl.trash.options import QueryOptions
from trashctl.trash.query import QueryMatcher
from trashctl.trash.size import fill_sizes

logger = logging.getLogger(__name__)


class Box:
    """Catalog of trashed entries across all trash locations.

    Args:
        options: Query options. Defaults to listing everything by date.
        locator: Trash locator. Defaults to a locator reading the system
            mount table.
        now: Reference time for day filters. Defaults to the current
            local time when ``open()`` runs.

    Attributes:
        files: Final ordered entries after ``open()``.
        orphans: Inconsistent metadata found while loading.
        locations: Trash locations that were loaded.
    """

    def __init__(
        self,
        options: QueryOptions | None = None,
        *,
        locator: TrashLocator | None = None,
        now: datetime | None = None,
    ) -> None:
        self.options = options if options is not None else QueryOptions()
        self._locator = locator if locator is not None else TrashLocator()
        self._now = now
        self.files: list[TrashedFile] = []
        self.orphans: list[OrphanMeta] = []
        self.locations: list[TrashLocation] = []

    def open(self) -> None:
        """Load, filter, match, sort and truncate the catalog.

        Raises:
            ConfigError: If a query pattern or size string is invalid.
            DiscoveryError: If the mount table cannot be read.
        """
        opts = self.options

        # Configuration errors surface before any filesystem work
        matcher = QueryMatcher(opts.queries, opts.mode)
        predicates = self._build_predicates()
        size_predicates = self._build_size_predicates()

        self.locations = self._locator.discover()
        candidates: list[TrashedFile] = []
        orphans: list[OrphanMeta] = []
        for location in self.locations:
            loaded, location_orphans = load_location(location)
            candidates.extend(loaded)
            orphans.extend(location_orphans)

        files = apply_filters(candidates, predicates)
        files = [f for f in files if matcher.matches(f.original_path)]

        if opts.needs_size_before_sort:
            fill_sizes(files)
            files = apply_filters(files, size_predicates)

        files = sort_files(files, opts.sort_by, opts.ascending)
        files = limit_last(files, opts.limit_last)

        if opts.show_size:
            fill_sizes(files)

        self.files = files
        self.orphans = orphans
        logger.debug(
            "Box opened: %d of %d entries selected, %d orphans",
            len(files),
            len(candidates),
            len(orphans),
        )

    def restore(
        self,
        files: Iterable[TrashedFile],
        restore_to: str = "",
        dry_run: bool = False,
    ) -> list[TrashActionResult]:
        """Restore entries; see TrashOperator.restore."""
        return TrashOperator(dry_run=dry_run).restore(files, restore_to)

    def remove(
        self,
        files: Iterable[TrashedFile],
        dry_run: bool = False,
    ) -> list[TrashActionResult]:
        """Permanently remove entries; see TrashOperator.remove."""
        return TrashOperator(dry_run=dry_run).remove(files)

    def fix_orphans(self, dry_run: bool = False) -> list[TrashActionResult]:
        """Delete every orphan found by ``open()``."""
        return TrashOperator(dry_run=dry_run).fix_orphans(self.orphans)

    def total_size(self) -> int | None:
        """Sum of known sizes of the selected entries, None if none are known."""
        known = [f.size_bytes for f in self.files if f.size_state == SizeState.KNOWN]
        if not known:
            return None
        return sum(s for s in known if s is not None)

    def _build_predicates(self) -> list[Predicate]:
        opts = self.options
        now = self._now if self._now is not None else datetime.now()
        predicates: list[Predicate] = []

        if opts.directory:
            predicates.append(directory_filter(opts.directory))
        elif opts.cwd:
            predicates.append(directory_filter(os.getcwd()))

        if opts.day_new:
            predicates.append(day_new_filter(opts.day_new, now))
        elif opts.day_old:
            predicates.append(day_old_filter(opts.day_old, now))

        return predicates

    def _build_size_predicates(self) -> list[Predicate]:
        opts = self.options
        if opts.size_large:
            return [size_large_filter(parse_size(opts.size_large))]
        if opts.size_small:
            return [size_small_filter(parse_size(opts.size_small))]
        return []
