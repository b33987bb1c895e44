"""Tests for filter predicates, size parsing, sorting and truncation."""

from datetime import datetime, timedelta
from pathlib import Path

import pytest
from trashctl.trash.errors import ConfigError
from trashctl.trash.filters import (
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
from trashctl.trash.models import SizeState, SortBy, TrashedFile, TrashLocation

NOW = datetime(2026, 3, 1, 12, 0, 0)
LOCATION = TrashLocation(root=Path("/trash"), device=None)


def _entry(
    original_path: str,
    deleted_at: datetime = NOW,
    size: int | None = None,
    stored_name: str | None = None,
) -> TrashedFile:
    name = stored_name or Path(original_path).name
    return TrashedFile(
        original_path=original_path,
        deleted_at=deleted_at,
        trash_path=LOCATION.files_dir / name,
        info_path=LOCATION.info_dir / f"{name}.trashinfo",
        location=LOCATION,
        size_state=SizeState.UNKNOWN if size is None else SizeState.KNOWN,
        size_bytes=size,
    )


class TestParseSize:
    """Tests for parse_size."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("42", 42),
            ("42B", 42),
            ("1KB", 1000),
            ("1k", 1000),
            ("10MB", 10_000_000),
            ("2GB", 2_000_000_000),
            ("1TB", 10**12),
            ("1.5 GB", 1_500_000_000),
            ("1KiB", 1024),
            ("512Ki", 512 * 1024),
            ("1MiB", 1024**2),
            ("2gib", 2 * 1024**3),
            (" 5 mb ", 5_000_000),
        ],
    )
    def test_valid(self, text: str, expected: int) -> None:
        """Decimal and binary units are understood."""
        assert parse_size(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "MB", "-1MB", "10XB", "1i", "1.2.3GB"])
    def test_invalid(self, text: str) -> None:
        """Malformed strings raise ConfigError."""
        with pytest.raises(ConfigError, match="Invalid size"):
            parse_size(text)


class TestDirectoryFilter:
    """Tests for the original parent directory filter."""

    def test_direct_children_only(self) -> None:
        """Only direct children of the directory pass."""
        predicate = directory_filter("/home/u/docs")

        assert predicate(_entry("/home/u/docs/a.txt")) is True
        assert predicate(_entry("/home/u/docs/sub/b.txt")) is False
        assert predicate(_entry("/home/u/docs")) is False
        assert predicate(_entry("/home/u/docsx/c.txt")) is False

    def test_trailing_slash_normalized(self) -> None:
        """A trailing separator does not change the result."""
        assert directory_filter("/home/u/docs/")(_entry("/home/u/docs/a.txt")) is True

    def test_relative_directory_resolved(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Relative directories resolve against the cwd."""
        monkeypatch.chdir(tmp_path)

        assert directory_filter(".")(_entry(str(tmp_path.resolve() / "a.txt"))) is True


class TestDayFilters:
    """Tests for day_new and day_old."""

    def test_day_new(self) -> None:
        """Entries within N days pass."""
        predicate = day_new_filter(7, NOW)

        assert predicate(_entry("/a", NOW - timedelta(days=1))) is True
        assert predicate(_entry("/b", NOW - timedelta(days=30))) is False

    def test_day_old(self) -> None:
        """Entries older than N days pass."""
        predicate = day_old_filter(7, NOW)

        assert predicate(_entry("/a", NOW - timedelta(days=1))) is False
        assert predicate(_entry("/b", NOW - timedelta(days=30))) is True

    def test_boundary_belongs_to_new_side(self) -> None:
        """An entry exactly N days old is new, not old."""
        boundary = _entry("/edge", NOW - timedelta(days=7))

        assert day_new_filter(7, NOW)(boundary) is True
        assert day_old_filter(7, NOW)(boundary) is False

    def test_new_and_old_partition(self) -> None:
        """day_new N and day_old N split any set without overlap or gaps."""
        files = [_entry(f"/f{i}", NOW - timedelta(hours=12 * i)) for i in range(30)]

        new = apply_filters(files, [day_new_filter(7, NOW)])
        old = apply_filters(files, [day_old_filter(7, NOW)])

        assert len(new) + len(old) == len(files)
        assert not {f.original_path for f in new} & {f.original_path for f in old}


class TestSizeFilters:
    """Tests for size_large and size_small."""

    def test_size_large_inclusive(self) -> None:
        """The threshold itself passes size_large."""
        predicate = size_large_filter(1000)

        assert predicate(_entry("/a", size=1000)) is True
        assert predicate(_entry("/b", size=999)) is False

    def test_size_small_inclusive(self) -> None:
        """The threshold itself passes size_small."""
        predicate = size_small_filter(1000)

        assert predicate(_entry("/a", size=1000)) is True
        assert predicate(_entry("/b", size=1001)) is False

    def test_unknown_size_never_passes(self) -> None:
        """Entries with unknown size fail both size filters."""
        unknown = _entry("/u")

        assert size_large_filter(0)(unknown) is False
        assert size_small_filter(10**18)(unknown) is False


class TestApplyFilters:
    """Tests for combining predicates."""

    def test_and_semantics(self) -> None:
        """Entries must satisfy every predicate."""
        files = [
            _entry("/a", NOW - timedelta(days=1), size=10),
            _entry("/b", NOW - timedelta(days=1), size=5000),
            _entry("/c", NOW - timedelta(days=30), size=5000),
        ]

        result = apply_filters(files, [day_new_filter(7, NOW), size_large_filter(1000)])

        assert [f.original_path for f in result] == ["/b"]

    def test_no_predicates_keeps_all(self) -> None:
        """An empty predicate list keeps every entry in order."""
        files = [_entry("/b"), _entry("/a")]

        assert apply_filters(files, []) == files

    def test_idempotent(self) -> None:
        """Applying the same filters twice changes nothing."""
        files = [_entry(f"/f{i}", NOW - timedelta(days=i), size=i * 100) for i in range(20)]
        predicates = [day_old_filter(3, NOW), size_small_filter(1500)]

        once = apply_filters(files, predicates)

        assert apply_filters(once, predicates) == once


class TestSortFiles:
    """Tests for sort_files."""

    def test_sort_by_date_ascending(self) -> None:
        """Default order is oldest first."""
        files = [
            _entry("/new", NOW),
            _entry("/old", NOW - timedelta(days=10)),
            _entry("/mid", NOW - timedelta(days=5)),
        ]

        result = sort_files(files)

        assert [f.original_path for f in result] == ["/old", "/mid", "/new"]

    def test_sort_by_date_descending(self) -> None:
        """Descending order puts the newest first."""
        files = [_entry("/old", NOW - timedelta(days=10)), _entry("/new", NOW)]

        result = sort_files(files, SortBy.DATE, ascending=False)

        assert [f.original_path for f in result] == ["/new", "/old"]

    def test_sort_by_path(self) -> None:
        """Path sort is lexicographic."""
        files = [_entry("/b"), _entry("/c"), _entry("/a")]

        result = sort_files(files, SortBy.PATH)

        assert [f.original_path for f in result] == ["/a", "/b", "/c"]

    def test_sort_by_size_unknown_first(self) -> None:
        """Unknown sizes sort before every known size."""
        files = [_entry("/big", size=100), _entry("/unknown"), _entry("/zero", size=0)]

        result = sort_files(files, SortBy.SIZE)

        assert [f.original_path for f in result] == ["/unknown", "/zero", "/big"]

    def test_ties_broken_by_path(self) -> None:
        """Entries with equal keys are ordered by original path."""
        files = [_entry("/c"), _entry("/a"), _entry("/b")]

        assert [f.original_path for f in sort_files(files)] == ["/a", "/b", "/c"]

    def test_ties_ascending_in_descending_sort(self) -> None:
        """Descending order applies to the key, ties stay path-ordered."""
        older = NOW - timedelta(days=1)
        files = [_entry("/b", older), _entry("/z"), _entry("/a", older), _entry("/y")]

        result = sort_files(files, SortBy.DATE, ascending=False)

        assert [f.original_path for f in result] == ["/y", "/z", "/a", "/b"]

    def test_duplicate_original_paths_deterministic(self) -> None:
        """Same original path and date is ordered by stored path."""
        files = [
            _entry("/home/u/report.txt", stored_name="report.txt_2"),
            _entry("/home/u/report.txt", stored_name="report.txt"),
        ]

        result = sort_files(files)

        assert [f.trash_path.name for f in result] == ["report.txt", "report.txt_2"]


class TestLimitLast:
    """Tests for limit_last."""

    def test_keeps_last_n(self) -> None:
        """The last N entries are kept in order."""
        files = [_entry(f"/f{i}") for i in range(5)]

        assert limit_last(files, 2) == files[3:]

    def test_zero_keeps_all(self) -> None:
        """Zero means unlimited."""
        files = [_entry(f"/f{i}") for i in range(5)]

        assert limit_last(files, 0) == files

    def test_larger_than_list(self) -> None:
        """N larger than the list keeps everything."""
        files = [_entry("/a")]

        assert limit_last(files, 10) == files
