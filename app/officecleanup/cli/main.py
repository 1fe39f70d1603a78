"""Main CLI application entry point.

Defines the single ``officecleanup`` command: a read-only audit by
default, or a confirmed removal pass with ``--remove``.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from officecleanup import __version__
from officecleanup.cli.display import (
    print_login_items_notice,
    print_removal_warning,
    print_run_banner,
    print_section,
    print_summary,
)
from officecleanup.cli.prompts import ConsolePrompt
from officecleanup.core.host import current_system, is_supported_host
from officecleanup.engine.controller import EXIT_FATAL, ModeController, RunConfig
from officecleanup.engine.errors import ElevationDenied, NotApplicableOS
from officecleanup.engine.reporter import RunSummary
from officecleanup.engine.state import RunMode
from officecleanup.services import get_macos_services
from officecleanup.utils.formatting import err_console, print_error, print_info

app = typer.Typer(
    name="officecleanup",
    help="Audit and completely remove Microsoft Office from macOS.",
    rich_markup_mode="rich",
    add_completion=False,
    context_settings={
        "help_option_names": ["-h", "--help"],
        "ignore_unknown_options": True,
        "allow_extra_args": True,
    },
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"officecleanup version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich."""
    handler = RichHandler(console=err_console, show_path=verbose, rich_tracebacks=verbose)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def ensure_supported_host() -> None:
    """Raise NotApplicableOS unless running on macOS."""
    if not is_supported_host():
        raise NotApplicableOS(f"officecleanup is designed for macOS only (detected {current_system()})")


@app.command()
def main(
    ctx: typer.Context,
    audit: Annotated[
        bool,
        typer.Option(
            "--audit",
            help="Scan and show all Microsoft items (default; takes precedence over --remove).",
        ),
    ] = False,
    remove: Annotated[
        bool,
        typer.Option("--remove", help="Remove all Microsoft Office components."),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompts (use with --remove)."),
    ] = False,
    no_restart: Annotated[
        bool,
        typer.Option("--no-restart", help="Don't prompt to restart (use with --remove)."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
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
) -> None:
    """Microsoft Office complete cleanup tool for macOS.

    Without options an audit runs: every Microsoft Office location is
    checked and nothing is modified. [bold]--remove[/bold] deletes
    everything found and needs administrator rights.
    """
    if ctx.args:
        print_error(f"Unknown option: {ctx.args[0]}")
        typer.echo(ctx.get_help())
        raise typer.Exit(code=EXIT_FATAL)

    configure_logging(verbose)

    try:
        ensure_supported_host()
    except NotApplicableOS as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_FATAL) from e

    # --audit wins when both modes are requested
    mode = RunMode.REMOVE if remove and not audit else RunMode.AUDIT
    config = RunConfig(mode=mode, force=force, skip_restart=no_restart)

    print_run_banner(mode)
    if mode == RunMode.REMOVE:
        print_removal_warning()

    def on_summary(summary: RunSummary) -> None:
        print_login_items_notice()
        print_summary(summary)

    controller = ModeController(
        config,
        get_macos_services(),
        ConsolePrompt(),
        on_section=print_section,
        on_summary=on_summary,
    )

    try:
        report = controller.run()
    except ElevationDenied as e:
        print_error(f"Failed to acquire sudo privileges. {e}")
        raise typer.Exit(code=EXIT_FATAL) from e

    if report.cancelled:
        print_info("Removal cancelled.")
    raise typer.Exit(code=report.exit_code)


if __name__ == "__main__":
    app()
