"""Put command: move files into the trash."""

from typing import Annotated

import typer

from trashctl.cli.display import create_results_table, exit_on_failures
from trashctl.trash.put import trash_put
from trashctl.utils.formatting import console, print_error


def put(
    paths: Annotated[
        list[str],
        typer.Argument(help="Files or directories to move to the trash."),
    ],
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only report failures."),
    ] = False,
) -> None:
    """Move files and directories to the trash."""
    results = trash_put(paths)

    if quiet:
        for r in results:
            if not r.success:
                print_error(f"{r.path}: {r.error}")
    else:
        console.print(create_results_table(results, title="Trashed"))

    exit_on_failures(results)
