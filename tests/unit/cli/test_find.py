"""Unit tests for the find command.

Runs the real catalog against a temporary home trash.
"""

import json
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from trashctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()

AddEntry = Callable[..., Path]


@pytest.fixture
def entries(env_entry: AddEntry, tmp_path: Path) -> Path:
    """Three entries deleted 1, 10 and 30 days ago from tmp_path/home."""
    home = tmp_path / "home"
    now = datetime.now().replace(microsecond=0)
    env_entry(str(home / "recent.txt"), now - timedelta(days=1), content=b"x" * 10)
    env_entry(str(home / "older.log"), now - timedelta(days=10), content=b"x" * 5000)
    env_entry(str(home / "ancient.iso"), now - timedelta(days=30), content=b"x" * 200)
    return home


def _listed(output: str) -> list[str]:
    """Original paths from tab-separated find output."""
    return [line.split("\t")[-1] for line in output.splitlines() if "\t" in line]


@pytest.mark.usefixtures("entries")
class TestFindListing:
    """Tests for listing and filtering."""

    def test_lists_all_oldest_first(self, entries: Path) -> None:
        """Entries are printed oldest first."""
        result = runner.invoke(app, ["find"])

        assert result.exit_code == 0
        assert _listed(result.stdout) == [
            str(entries / "ancient.iso"),
            str(entries / "older.log"),
            str(entries / "recent.txt"),
        ]

    def test_reverse(self, entries: Path) -> None:
        """--reverse lists newest first."""
        result = runner.invoke(app, ["find", "--reverse"])

        assert _listed(result.stdout)[0] == str(entries / "recent.txt")

    def test_query(self, entries: Path) -> None:
        """Positional queries filter by regex."""
        result = runner.invoke(app, ["find", r"\.log$"])

        assert _listed(result.stdout) == [str(entries / "older.log")]

    def test_glob_mode(self, entries: Path) -> None:
        """--mode glob matches full paths."""
        result = runner.invoke(app, ["find", "--mode", "glob", "*/recent.*"])

        assert _listed(result.stdout) == [str(entries / "recent.txt")]

    def test_day_old(self, entries: Path) -> None:
        """--day-old keeps older entries."""
        result = runner.invoke(app, ["find", "--day-old", "7"])

        assert len(_listed(result.stdout)) == 2

    def test_size_sort_and_last(self, entries: Path) -> None:
        """--sort size with --last shows the largest entry."""
        result = runner.invoke(app, ["find", "--sort", "size", "--last", "1"])

        assert _listed(result.stdout) == [str(entries / "older.log")]

    def test_show_size_column(self) -> None:
        """--show-size adds a size column."""
        result = runner.invoke(app, ["find", "--show-size", "recent"])

        assert "\t10 B\t" in result.stdout

    def test_directory_filter(self, entries: Path) -> None:
        """--directory keeps direct children of the directory."""
        result = runner.invoke(app, ["find", "--directory", str(entries)])

        assert len(_listed(result.stdout)) == 3

    def test_json_output(self, entries: Path) -> None:
        """--json prints machine-readable entries."""
        result = runner.invoke(app, ["find", "--json", "recent"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert len(data) == 1
        assert data[0]["original_path"] == str(entries / "recent.txt")
        assert data[0]["size_state"] == "pending"


class TestFindErrors:
    """Tests for invalid option combinations and patterns."""

    @pytest.mark.parametrize(
        "args",
        [
            ["--day-new", "1", "--day-old", "2"],
            ["--size-large", "1MB", "--size-small", "2MB"],
            ["--rm", "--restore"],
            ["--directory", "/tmp", "--cwd"],
        ],
    )
    def test_mutually_exclusive(self, isolated_env: Path, args: list[str]) -> None:
        """Exclusive pairs exit with an error."""
        result = runner.invoke(app, ["find", *args])

        assert result.exit_code == 1
        assert "mutually exclusive" in result.output

    def test_invalid_regex(self, isolated_env: Path) -> None:
        """Malformed regex exits with an error."""
        result = runner.invoke(app, ["find", "(bad"])

        assert result.exit_code == 1
        assert "Invalid regex" in result.output

    def test_invalid_size(self, isolated_env: Path) -> None:
        """Malformed size exits with an error."""
        result = runner.invoke(app, ["find", "--size-large", "lots"])

        assert result.exit_code == 1
        assert "Invalid size" in result.output

    def test_invalid_config(self, isolated_env: Path, tmp_path: Path) -> None:
        """A broken config file exits with an error."""
        config_dir = tmp_path / "config" / "trashctl"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text("sort_by = ")

        result = runner.invoke(app, ["find"])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output


class TestFindActions:
    """Tests for --restore and --rm."""

    def test_restore(self, entries: Path) -> None:
        """--restore moves matches back."""
        result = runner.invoke(app, ["find", "recent", "--restore", "--force"])

        assert result.exit_code == 0
        assert (entries / "recent.txt").read_bytes() == b"x" * 10

    def test_restore_to(self, entries: Path, tmp_path: Path) -> None:
        """--restore-to restores into another directory."""
        target = tmp_path / "elsewhere"

        result = runner.invoke(
            app, ["find", "recent", "--restore", "--restore-to", str(target), "--force"]
        )

        assert result.exit_code == 0
        assert (target / "recent.txt").exists()

    def test_rm(self, entries: Path, isolated_env: Path) -> None:
        """--rm deletes matches permanently."""
        result = runner.invoke(app, ["find", "--day-old", "7", "--rm", "--force"])

        assert result.exit_code == 0
        assert sorted(p.name for p in (isolated_env / "files").iterdir()) == ["recent.txt"]

    def test_restore_collision_exit_code(self, entries: Path) -> None:
        """A failed restore exits with code 1."""
        entries.mkdir(parents=True)
        (entries / "recent.txt").write_text("in the way")

        result = runner.invoke(app, ["find", "recent", "--restore", "--force"])

        assert result.exit_code == 1
        assert (entries / "recent.txt").read_text() == "in the way"

    def test_nothing_to_do(self, isolated_env: Path) -> None:
        """Actions on an empty result do nothing."""
        result = runner.invoke(app, ["find", "--rm", "--force"])

        assert result.exit_code == 0
        assert "Nothing to do" in result.output
