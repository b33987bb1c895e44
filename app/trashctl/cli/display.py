"""Shared display and prompt helpers for CLI commands.

Provides reusable table builders and summary printers for trash listings,
orphans and mutation results across commands (find, restore, purge,
metafix, put).
"""

import json

import typer
from rich.table import Table

from trashctl.trash.models import OrphanMeta, TrashedFile
from trashctl.trash.operator import TrashActionResult
from trashctl.utils.formatting import (
    console,
    create_trash_table,
    format_plain_row,
    print_info,
    print_success,
    print_warning,
)


def print_files(
    files: list[TrashedFile],
    show_size: bool = False,
    show_trash_path: bool = False,
) -> None:
    """Print entries as a table on a terminal, tab-separated lines otherwise.

    Plain lines keep the output usable in pipelines (e.g. fzf).
    """
    if console.is_terminal:
        console.print(create_trash_table(files, show_size, show_trash_path))
        return
    for f in files:
        typer.echo(format_plain_row(f, show_size, show_trash_path))


def print_files_json(files: list[TrashedFile]) -> None:
    """Print entries as JSON."""
    data = [
        {
            "original_path": f.original_path,
            "deleted_at": f.deleted_at.isoformat(),
            "trash_path": str(f.trash_path),
            "info_path": str(f.info_path),
            "trash_dir": str(f.location.root),
            "size_state": f.size_state.value,
            "size_bytes": f.size_bytes,
        }
        for f in files
    ]
    console.print_json(json.dumps(data))


def create_orphans_table(orphans: list[OrphanMeta]) -> Table:
    """Create a table of orphaned metadata and stored files."""
    table = Table(
        title="Invalid Metadata",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="orphan")
    table.add_column("Kind", width=22)
    table.add_column("Reason", style="muted")

    for o in orphans:
        table.add_row(str(o.path), o.kind.value, o.reason or "-")

    return table


def create_results_table(results: list[TrashActionResult], title: str = "Results") -> Table:
    """Create a table displaying per-entry results.

    Successful results show "OK" status; failed results show "FAIL" with
    the error message. Dry-run results show "DRY".
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Path", no_wrap=True)
    table.add_column("Details")

    for r in results:
        if r.dry_run:
            status = "[info]DRY[/info]"
            detail = f"Would process -> {r.destination}" if r.destination else "Would process"
        elif r.success:
            status = "[success]OK[/success]"
            detail = f"-> {r.destination}" if r.destination else ""
            if r.orphaned_info:
                detail = f"{detail} (metadata left: {r.orphaned_info})".strip()
        else:
            status = "[error]FAIL[/error]"
            detail = r.error or "Unknown error"
        table.add_row(status, r.path, f"[muted]{detail}[/muted]")

    return table


def print_results_summary(results: list[TrashActionResult]) -> None:
    """Print a summary of results and warn about leftover metadata."""
    success_count = sum(1 for r in results if r.success and not r.dry_run)
    fail_count = sum(1 for r in results if not r.success)
    dry_count = sum(1 for r in results if r.dry_run)
    leftover = sum(1 for r in results if r.orphaned_info)

    if dry_count:
        print_info(f"Dry-run: {dry_count} item(s) would be processed.")
    elif fail_count:
        console.print(
            f"\n[success]{success_count} succeeded[/success], [error]{fail_count} failed[/error]"
        )
    else:
        print_success(f"All {success_count} item(s) processed successfully.")

    if leftover:
        print_warning(f"{leftover} metadata file(s) could not be removed; run 'trashctl metafix'.")


def confirm(message: str, force: bool) -> bool:
    """Ask for confirmation unless forced or not attached to a terminal."""
    if force or not console.is_terminal:
        return True
    return typer.confirm(message, default=False)


def exit_on_failures(results: list[TrashActionResult]) -> None:
    """Exit with code 1 if any result failed."""
    if any(not r.success for r in results):
        raise typer.Exit(code=1)
