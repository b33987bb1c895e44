"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from trashctl import __version__
from trashctl.cli.commands import config, find, metafix, put, restore
from trashctl.utils.formatting import setup_logging

# Create main Typer app
app = typer.Typer(
    name="trashctl",
    help="Query, restore and purge the freedesktop.org trash.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"trashctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """trashctl - Query, restore and purge the freedesktop.org trash.

    Lists trashed files from the home trash and every mounted
    filesystem's trash, filters and sorts them, and restores or
    removes them.
    """
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.command(name="find")(find.find)
app.command(name="put")(put.put)
app.command(name="restore")(restore.restore)
app.command(name="purge")(restore.purge)
app.command(name="metafix")(metafix.metafix)
app.command(name="summary")(metafix.summary)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
