"""Find command: list, filter, and optionally restore or purge trashed files."""

import logging
from typing import Annotated

import typer

from trashctl.cli.display import (
    confirm,
    create_results_table,
    exit_on_failures,
    print_files,
    print_files_json,
    print_results_summary,
)
from trashctl.core.config import load_config
from trashctl.trash.box import Box
from trashctl.trash.errors import TrashError
from trashctl.trash.models import QueryMode, SortBy
from trashctl.trash.options import QueryOptions
from trashctl.utils.formatting import console, print_error, print_info

logger = logging.getLogger(__name__)


def find(
    queries: Annotated[
        list[str] | None,
        typer.Argument(help="Queries matched against original paths (any may match)."),
    ] = None,
    directory: Annotated[
        str | None,
        typer.Option("--directory", "-d", help="Filter by original parent directory."),
    ] = None,
    cwd: Annotated[
        bool,
        typer.Option("--cwd", "-c", help="Filter by current working directory."),
    ] = False,
    sort_by: Annotated[
        SortBy | None,
        typer.Option("--sort", "-s", help="Sort by.", case_sensitive=False),
    ] = None,
    mode: Annotated[
        QueryMode | None,
        typer.Option("--mode", "-m", help="Query mode.", case_sensitive=False),
    ] = None,
    day_new: Annotated[
        int,
        typer.Option("--day-new", min=0, help="Filter by deletion date (within N days)."),
    ] = 0,
    day_old: Annotated[
        int,
        typer.Option("--day-old", min=0, help="Filter by deletion date (before N days)."),
    ] = 0,
    size_large: Annotated[
        str | None,
        typer.Option("--size-large", help="Filter by size larger (e.g. 5MB, 1GB)."),
    ] = None,
    size_small: Annotated[
        str | None,
        typer.Option("--size-small", help="Filter by size smaller (e.g. 5MB, 1GB)."),
    ] = None,
    show_size: Annotated[
        bool,
        typer.Option("--show-size", "-S", help="Show size ('-' if unavailable)."),
    ] = False,
    show_trash_path: Annotated[
        bool,
        typer.Option("--show-trashpath", help="Show path inside the trash."),
    ] = False,
    reverse: Annotated[
        bool,
        typer.Option("--reverse", "-r", help="Reverse sort order (default: ascending)."),
    ] = False,
    last: Annotated[
        int,
        typer.Option("--last", "-n", min=0, help="Show N last files."),
    ] = 0,
    do_remove: Annotated[
        bool,
        typer.Option("--rm", help="Remove found files PERMANENTLY."),
    ] = False,
    do_restore: Annotated[
        bool,
        typer.Option("--restore", help="Restore found files."),
    ] = False,
    restore_to: Annotated[
        str,
        typer.Option("--restore-to", help="Restore into this directory instead."),
    ] = "",
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Find trashed files and optionally restore or remove them.

    Examples:
        trashctl find                       # Show all trashed files
        trashctl find --cwd                 # Files deleted from the current directory
        trashctl find 'regex' --restore     # Restore matches
        trashctl find -n 10 --sort size     # The 10 largest
        trashctl find --day-old 7 --rm      # Purge files older than a week
    """
    conflicts = [
        (do_remove, do_restore, "--rm", "--restore"),
        (bool(directory), cwd, "--directory", "--cwd"),
        (bool(day_new), bool(day_old), "--day-new", "--day-old"),
        (bool(size_large), bool(size_small), "--size-large", "--size-small"),
    ]
    for first, second, first_name, second_name in conflicts:
        if first and second:
            print_error(f"{first_name} and {second_name} are mutually exclusive.")
            raise typer.Exit(code=1)

    try:
        config = load_config()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    options = QueryOptions(
        ascending=not (reverse or config.reverse),
        show_size=show_size or config.show_size,
        directory=directory,
        cwd=cwd,
        queries=tuple(queries or ()),
        sort_by=sort_by or config.sort_by,
        mode=mode or config.mode,
        day_new=day_new,
        day_old=day_old,
        size_large=size_large,
        size_small=size_small,
        limit_last=last,
    )
    logger.debug("Running find with %s", options)

    box = Box(options)
    try:
        box.open()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    display_size = options.needs_size
    display_trash_path = show_trash_path or config.show_trashpath

    if json_output:
        print_files_json(box.files)
    else:
        print_files(box.files, display_size, display_trash_path)

    if not do_remove and not do_restore:
        if console.is_terminal and not json_output:
            console.print(
                f"\n[dim]Found {len(box.files)} trashed files. "
                "Restore or remove them PERMANENTLY with --restore, --rm.[/dim]"
            )
            if box.orphans:
                console.print(
                    f"\n[warning]Found invalid metadata: {len(box.orphans)}[/warning]\n"
                    "[dim]Remove it with 'trashctl metafix'.[/dim]"
                )
        return

    if not box.files:
        print_info("Nothing to do.")
        return

    console.print(f"\nFound {len(box.files)} trashed files")

    if do_remove:
        if not confirm("Are you sure you want to remove PERMANENTLY?", force):
            print_info("Aborted.")
            raise typer.Exit(code=1)
        results = box.remove(box.files)
    else:
        if restore_to:
            print_info(f"Will restore to {restore_to!r} instead of original path")
        if not confirm("Are you sure you want to restore?", force):
            print_info("Aborted.")
            raise typer.Exit(code=1)
        results = box.restore(box.files, restore_to)

    console.print(create_results_table(results))
    print_results_summary(results)
    exit_on_failures(results)
