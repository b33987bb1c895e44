"""Restore and purge commands for specific trashed files."""

from typing import Annotated

import typer

from trashctl.cli.display import (
    confirm,
    create_results_table,
    exit_on_failures,
    print_files,
    print_results_summary,
)
from trashctl.trash.box import Box
from trashctl.trash.errors import TrashError
from trashctl.trash.models import QueryMode
from trashctl.trash.options import QueryOptions
from trashctl.utils.formatting import console, print_error, print_info


def _open_box(queries: list[str], mode: QueryMode) -> Box:
    """Open a Box for the given queries, exiting on errors or no matches."""
    box = Box(QueryOptions(queries=tuple(queries), mode=mode))
    try:
        box.open()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not box.files:
        print_error("No trashed files matched.")
        raise typer.Exit(code=1)

    print_files(box.files)
    return box


def restore(
    queries: Annotated[
        list[str],
        typer.Argument(help="Original paths (or patterns with --mode) to restore."),
    ],
    mode: Annotated[
        QueryMode,
        typer.Option("--mode", "-m", help="Query mode.", case_sensitive=False),
    ] = QueryMode.FULL,
    restore_to: Annotated[
        str,
        typer.Option("--restore-to", help="Restore into this directory instead."),
    ] = "",
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be restored."),
    ] = False,
) -> None:
    """Restore trashed files to their original location.

    An existing file at the destination is never overwritten.
    """
    box = _open_box(queries, mode)

    console.print(f"\nFound {len(box.files)} trashed files")
    if not dry_run and not confirm("Are you sure you want to restore?", force):
        print_info("Aborted.")
        raise typer.Exit(code=1)

    results = box.restore(box.files, restore_to, dry_run=dry_run)
    console.print(create_results_table(results, title="Restore Results"))
    print_results_summary(results)
    exit_on_failures(results)


def purge(
    queries: Annotated[
        list[str],
        typer.Argument(help="Original paths (or patterns with --mode) to purge."),
    ],
    mode: Annotated[
        QueryMode,
        typer.Option("--mode", "-m", help="Query mode.", case_sensitive=False),
    ] = QueryMode.FULL,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be removed."),
    ] = False,
) -> None:
    """Remove trashed files PERMANENTLY."""
    box = _open_box(queries, mode)

    console.print(f"\nFound {len(box.files)} trashed files")
    if not dry_run and not confirm("Are you sure you want to remove PERMANENTLY?", force):
        print_info("Aborted.")
        raise typer.Exit(code=1)

    results = box.remove(box.files, dry_run=dry_run)
    console.print(create_results_table(results, title="Purge Results"))
    print_results_summary(results)
    exit_on_failures(results)
