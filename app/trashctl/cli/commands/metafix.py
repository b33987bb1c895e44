"""Maintenance commands: repair orphaned metadata and summarize the trash."""

from typing import Annotated

import typer
from rich.table import Table

from trashctl.cli.display import (
    confirm,
    create_orphans_table,
    create_results_table,
    exit_on_failures,
    print_results_summary,
)
from trashctl.trash.box import Box
from trashctl.trash.errors import TrashError
from trashctl.trash.options import QueryOptions
from trashctl.trash.size import format_size
from trashctl.utils.formatting import console, print_error, print_info, print_success


def _open(options: QueryOptions | None = None) -> Box:
    box = Box(options)
    try:
        box.open()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return box


def metafix(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
) -> None:
    """Remove invalid metadata and stored files without metadata."""
    box = _open()

    if not box.orphans:
        print_success("Trash metadata is consistent. Nothing to fix.")
        return

    console.print(create_orphans_table(box.orphans))

    if not dry_run and not confirm(f"Delete {len(box.orphans)} invalid item(s)?", force):
        print_info("Aborted.")
        raise typer.Exit(code=1)

    results = box.fix_orphans(dry_run=dry_run)
    console.print(create_results_table(results, title="Metafix Results"))
    print_results_summary(results)
    exit_on_failures(results)


def summary() -> None:
    """Show entry counts and sizes per trash directory."""
    box = _open(QueryOptions(show_size=True))

    table = Table(
        title="Trash Summary",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Trash Directory", no_wrap=True)
    table.add_column("Items", justify="right")
    table.add_column("Size", justify="right", style="size")
    table.add_column("Invalid", justify="right")

    for location in box.locations:
        files = [f for f in box.files if f.location == location]
        orphans = [o for o in box.orphans if o.location == location]
        sizes = [f.size_bytes for f in files if f.size_bytes is not None]
        table.add_row(
            str(location.root),
            str(len(files)),
            format_size(sum(sizes)) if files else "-",
            str(len(orphans)) if orphans else "-",
        )

    console.print(table)
    console.print(
        f"\n[dim]{len(box.files)} item(s), {format_size(box.total_size() or 0)} total[/dim]"
    )
