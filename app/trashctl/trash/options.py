"""Query options for building a trash catalog.

Options are validated once at construction. Mutually exclusive pairs
are rejected here so that the Box never has to re-check them.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from trashctl.trash.models import QueryMode, SortBy


class QueryOptions(BaseModel):
    """Filter, sort and query configuration for one catalog build.

    Attributes:
        ascending: Sort ascending (oldest, smallest, alphabetically first first).
        show_size: Compute sizes of the final entries for display.
        directory: Keep only entries whose original parent is this directory.
        cwd: Keep only entries whose original parent is the current directory.
        queries: Free-text queries; an entry must match at least one.
        sort_by: Sort key.
        mode: Query matching mode.
        day_new: Keep entries deleted within N days (0 = off).
        day_old: Keep entries deleted more than N days ago (0 = off).
        size_large: Keep entries at least this large (e.g. "10MB").
        size_small: Keep entries at most this large (e.g. "1GB").
        limit_last: Keep only the last N sorted entries (0 = unlimited).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    ascending: Annotated[bool, Field(description="Ascending sort order")] = True
    show_size: Annotated[bool, Field(description="Compute sizes for display")] = False
    directory: Annotated[str | None, Field(description="Original parent directory")] = None
    cwd: Annotated[bool, Field(description="Use current directory as parent")] = False
    queries: Annotated[tuple[str, ...], Field(description="Free-text queries")] = ()
    sort_by: Annotated[SortBy, Field(description="Sort key")] = SortBy.DATE
    mode: Annotated[QueryMode, Field(description="Query matching mode")] = QueryMode.REGEX
    day_new: Annotated[int, Field(ge=0, description="Deleted within N days")] = 0
    day_old: Annotated[int, Field(ge=0, description="Deleted more than N days ago")] = 0
    size_large: Annotated[str | None, Field(description="Minimum size")] = None
    size_small: Annotated[str | None, Field(description="Maximum size")] = None
    limit_last: Annotated[int, Field(ge=0, description="Keep last N entries")] = 0

    @model_validator(mode="after")
    def check_exclusive(self) -> "QueryOptions":
        """Reject mutually exclusive option pairs."""
        if self.day_new and self.day_old:
            msg = "day_new and day_old are mutually exclusive"
            raise ValueError(msg)
        if self.size_large and self.size_small:
            msg = "size_large and size_small are mutually exclusive"
            raise ValueError(msg)
        if self.directory and self.cwd:
            msg = "directory and cwd are mutually exclusive"
            raise ValueError(msg)
        return self

    @property
    def needs_size_before_sort(self) -> bool:
        """True when sizes must be known before filtering or sorting."""
        return bool(self.size_large or self.size_small) or self.sort_by == SortBy.SIZE

    @property
    def needs_size(self) -> bool:
        """True when any size-dependent behavior is active."""
        return self.show_size or self.needs_size_before_sort
