"""Unit tests for the put command."""

from pathlib import Path

from trashctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestPutCommand:
    """Tests for trashctl put."""

    def test_put_files(self, isolated_env: Path, tmp_path: Path) -> None:
        """Files are moved into the home trash."""
        first = tmp_path / "a.txt"
        second = tmp_path / "b.txt"
        first.write_text("a")
        second.write_text("b")

        result = runner.invoke(app, ["put", str(first), str(second)])

        assert result.exit_code == 0
        assert not first.exists()
        assert sorted(p.name for p in (isolated_env / "files").iterdir()) == ["a.txt", "b.txt"]
        assert (isolated_env / "info" / "a.txt.trashinfo").exists()

    def test_missing_path_fails(self, isolated_env: Path, tmp_path: Path) -> None:
        """A missing path exits with code 1 but other paths are trashed."""
        good = tmp_path / "a.txt"
        good.write_text("a")

        result = runner.invoke(app, ["put", "--quiet", str(tmp_path / "nope"), str(good)])

        assert result.exit_code == 1
        assert not good.exists()

    def test_put_then_find(self, isolated_env: Path, tmp_path: Path) -> None:
        """Trashed files are listed by find."""
        target = tmp_path / "doc.txt"
        target.write_text("x")
        runner.invoke(app, ["put", str(target)])

        result = runner.invoke(app, ["find"])

        assert str(target) in result.stdout
