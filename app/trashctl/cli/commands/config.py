"""Configuration commands.

Shows the effective configuration and writes a default config file.
"""

from typing import Annotated

import typer

from trashctl.core.config import TrashConfig, load_config, save_config
from trashctl.core.paths import get_config_path
from trashctl.trash.errors import TrashError
from trashctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    path = get_config_path()
    try:
        config = load_config(path)
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = str(path) if path.exists() else "defaults (no config file)"
    print_info(f"Source: {source}")
    for key, value in config.model_dump(mode="json").items():
        console.print(f"  [header]{key}[/] = {value}")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default values."""
    path = get_config_path()
    if path.exists() and not force:
        print_error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(TrashConfig(), path)
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
