"""CLI package for officecleanup.

This package contains the Typer application, the Rich report rendering
and the terminal operator prompt.
"""

from officecleanup.cli.main import app

__all__ = ["app"]
