"""CLI commands for trashctl.

This package contains all subcommand implementations.
"""

from trashctl.cli.commands import config, find, metafix, put, restore

__all__ = ["config", "find", "metafix", "put", "restore"]
