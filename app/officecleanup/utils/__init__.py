"""Utility modules for officecleanup.

This module exports commonly used utility functions.
"""

from officecleanup.utils.formatting import (
    console,
    create_items_table,
    err_console,
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)
from officecleanup.utils.shell import CommandResult, is_root, run_command, run_interactive

__all__ = [
    "CommandResult",
    "console",
    "create_items_table",
    "err_console",
    "is_root",
    "print_error",
    "print_header",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "run_interactive",
]
