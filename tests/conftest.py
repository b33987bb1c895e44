"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules. Trash
directories are built under tmp_path; no test touches the real trash.
"""

from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest
from trashctl.trash.locator import TrashLocator
from trashctl.trash.trashinfo import TrashInfo, encode_trashinfo

# Fixed reference time for day filters
NOW = datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    """Fixed "current" time for deterministic day filtering."""
    return NOW


@pytest.fixture
def home_trash(tmp_path: Path) -> Path:
    """An empty home trash directory with files/ and info/."""
    root = tmp_path / "Trash"
    (root / "files").mkdir(parents=True)
    (root / "info").mkdir()
    return root


@pytest.fixture
def locator(home_trash: Path) -> TrashLocator:
    """A locator that only sees the fixture home trash."""
    return TrashLocator(home_trash=home_trash, mount_points=())


@pytest.fixture
def add_entry(home_trash: Path) -> Callable[..., Path]:
    """Factory that adds a trashed entry (data + sidecar) to a trash directory.

    Args (of the returned callable):
        original_path: Path recorded in the sidecar.
        deleted_at: Deletion time recorded in the sidecar.
        name: Stored name (defaults to the original basename).
        content: Bytes written to the stored file.
        size: If given, the stored file is a sparse file of this size.
        directory: Store a directory containing one file with ``content``.
        root: Trash directory (defaults to the home trash fixture).

    Returns (of the returned callable):
        Path of the stored data.
    """

    def _add(
        original_path: str,
        deleted_at: datetime,
        *,
        name: str | None = None,
        content: bytes = b"data",
        size: int | None = None,
        directory: bool = False,
        root: Path | None = None,
    ) -> Path:
        trash = root if root is not None else home_trash
        stored_name = name or Path(original_path).name
        stored = trash / "files" / stored_name

        if directory:
            stored.mkdir()
            (stored / "inner.bin").write_bytes(content)
        elif size is not None:
            with stored.open("wb") as f:
                f.truncate(size)
        else:
            stored.write_bytes(content)

        info = TrashInfo(path=original_path, deleted_at=deleted_at)
        (trash / "info" / f"{stored_name}.trashinfo").write_bytes(encode_trashinfo(info))
        return stored

    return _add


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point XDG dirs at tmp_path and hide the system mount table.

    Yields:
        The home trash directory used by default locators.
    """
    data_home = tmp_path / "data"
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_DATA_HOME", str(data_home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))

    trash = data_home / "Trash"
    (trash / "files").mkdir(parents=True)
    (trash / "info").mkdir()

    with patch("trashctl.trash.locator.psutil.disk_partitions", return_value=[]):
        yield trash


@pytest.fixture
def env_entry(isolated_env: Path, add_entry: Callable[..., Path]) -> Callable[..., Path]:
    """Like add_entry, but adds to the home trash of isolated_env."""

    def _add(original_path: str, deleted_at: datetime, **kwargs: object) -> Path:
        return add_entry(original_path, deleted_at, root=isolated_env, **kwargs)

    return _add
