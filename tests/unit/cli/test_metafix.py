"""Unit tests for the metafix and summary commands."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from trashctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()

AddEntry = Callable[..., Path]

DELETED = datetime(2026, 2, 1, 9, 30, 0)


class TestMetafixCommand:
    """Tests for trashctl metafix."""

    def test_consistent_trash(self, isolated_env: Path) -> None:
        """Nothing to fix on a clean trash."""
        result = runner.invoke(app, ["metafix"])

        assert result.exit_code == 0
        assert "Nothing to fix" in result.output

    def test_removes_orphans(self, isolated_env: Path, env_entry: AddEntry) -> None:
        """Orphans of every kind are removed, valid entries stay."""
        keep = env_entry("/home/u/keep.txt", DELETED)
        gone = env_entry("/home/u/gone.txt", DELETED)
        gone.unlink()
        (isolated_env / "files" / "stray").write_text("x")
        (isolated_env / "info" / "bad.trashinfo").write_text("garbage")

        result = runner.invoke(app, ["metafix", "--force"])

        assert result.exit_code == 0
        assert keep.exists()
        assert sorted(p.name for p in (isolated_env / "files").iterdir()) == ["keep.txt"]
        assert sorted(p.name for p in (isolated_env / "info").iterdir()) == [
            "keep.txt.trashinfo"
        ]

    def test_dry_run(self, isolated_env: Path) -> None:
        """--dry-run keeps orphans."""
        stray = isolated_env / "files" / "stray"
        stray.write_text("x")

        result = runner.invoke(app, ["metafix", "--dry-run"])

        assert result.exit_code == 0
        assert stray.exists()


class TestSummaryCommand:
    """Tests for trashctl summary."""

    def test_summary(self, isolated_env: Path, env_entry: AddEntry) -> None:
        """The summary counts entries per trash directory."""
        env_entry("/home/u/a.txt", DELETED, content=b"x" * 100)
        env_entry("/home/u/b.txt", DELETED, content=b"x" * 24)

        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0
        assert "Trash Summary" in result.output
        assert "2 item(s), 124 B total" in result.output
