"""Subprocess helpers.

Every OS tool officecleanup drives (pgrep, sudo, pkgutil, security,
launchctl, xattr) is invoked through these functions, so services can be
tested by patching a single name.
"""

import os
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output and exit status of one tool invocation."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run ``args`` with stdout and stderr captured as text.

    A non-zero exit status is returned, not raised; callers check
    ``CommandResult.success``.

    Raises:
        subprocess.TimeoutExpired: The tool ran longer than ``timeout``.
        FileNotFoundError: The tool is not installed.
    """
    proc = subprocess.run(args, capture_output=True, text=True, check=False, timeout=timeout)
    return CommandResult(stdout=proc.stdout, stderr=proc.stderr, returncode=proc.returncode)


def run_interactive(args: list[str]) -> int:
    """Run ``args`` on the operator's terminal and return the exit status.

    Output is not captured, so prompts such as the ``sudo -v`` password
    request reach the operator.
    """
    return subprocess.run(args, check=False).returncode


def is_root() -> bool:
    """True when the effective UID is 0."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0
