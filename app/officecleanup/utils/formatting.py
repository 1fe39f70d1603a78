"""Shared Rich consoles and message helpers.

Report output goes to ``console`` (stdout). Warnings, errors and log
records go to ``err_console`` (stderr) so a redirected report stays clean.
"""

import sys

from rich.console import Console
from rich.table import Table

from officecleanup.core.theme import get_theme


def _color_system() -> str | None:
    # Hex theme colors need truecolor; let Rich decide when piped
    return "truecolor" if sys.stdout.isatty() else None


console = Console(theme=get_theme(), color_system=_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_color_system())


def create_items_table(title: str) -> Table:
    """Table for one catalog section: marker, item label, location."""
    table = Table(
        title=title,
        title_justify="left",
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Item", style="item.label", no_wrap=True)
    table.add_column("Location", style="item.path", overflow="fold")
    return table


def print_header(title: str) -> None:
    console.rule(f"[bold_header]{title}[/]", style="border")


def print_info(message: str) -> None:
    console.print(f"[info]ℹ[/] {message}")


def print_success(message: str) -> None:
    console.print(f"[success]✓ {message}[/]")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]⚠ {message}[/]")


def print_error(message: str) -> None:
    err_console.print(f"[error]✗ {message}[/]")
