"""Utility modules for trashctl.

This module exports commonly used utility functions.
"""

from trashctl.utils.formatting import (
    console,
    create_trash_table,
    err_console,
    format_plain_row,
    print_error,
    print_info,
    print_success,
    print_warning,
    setup_logging,
)

__all__ = [
    "console",
    "create_trash_table",
    "err_console",
    "format_plain_row",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "setup_logging",
]
