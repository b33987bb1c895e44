"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from trashctl.core.theme import get_theme
from trashctl.trash.size import format_size

if TYPE_CHECKING:
    from trashctl.trash.models import TrashedFile


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )


def create_trash_table(
    files: list[TrashedFile],
    show_size: bool = False,
    show_trash_path: bool = False,
) -> Table:
    """Create a table of trashed entries.

    Args:
        files: Entries in display order.
        show_size: Add a Size column ('-' when unknown).
        show_trash_path: Add a TrashPath column.

    Returns:
        Rich Table configured for trash display.
    """
    table = Table(
        show_header=True,
        header_style="bold_header",
        border_style="border",
        box=None,
    )
    table.add_column("Date", style="date", no_wrap=True)
    if show_size:
        table.add_column("Size", style="size", justify="right")
    table.add_column("Path", style="path")
    if show_trash_path:
        table.add_column("TrashPath", style="trash_path")

    for f in files:
        row = [f.deleted_at.strftime(_DATE_FORMAT)]
        if show_size:
            row.append(format_size(f.size_bytes))
        row.append(f.original_path)
        if show_trash_path:
            row.append(str(f.trash_path))
        table.add_row(*row)

    return table


def format_plain_row(f: TrashedFile, show_size: bool = False, show_trash_path: bool = False) -> str:
    """Format an entry as a tab-separated line for non-terminal output."""
    parts = [f.deleted_at.strftime(_DATE_FORMAT)]
    if show_size:
        parts.append(format_size(f.size_bytes))
    parts.append(f.original_path)
    if show_trash_path:
        parts.append(str(f.trash_path))
    return "\t".join(parts)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
