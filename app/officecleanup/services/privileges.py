"""sudo-based privilege service.

Acquires the sudo timestamp interactively once, keeps it fresh with
``sudo -n true`` and runs elevated commands non-interactively. When the
tool already runs as root no ``sudo`` prefix is used.
"""

import logging
import subprocess

from officecleanup.engine.errors import CollaboratorUnavailable
from officecleanup.services.base import PrivilegeService
from officecleanup.utils.shell import CommandResult, is_root, run_command, run_interactive

logger = logging.getLogger(__name__)


class SudoPrivilegeService(PrivilegeService):
    """Privilege service backed by sudo."""

    # rm -rf of a large Outlook profile can take a while
    _ELEVATED_TIMEOUT: float = 600.0

    def acquire(self) -> bool:
        """Validate the sudo timestamp, prompting for a password if needed."""
        if is_root():
            return True
        try:
            return run_interactive(["sudo", "-v"]) == 0
        except (FileNotFoundError, OSError) as e:
            logger.error("Cannot run sudo: %s", e)
            return False

    def refresh(self) -> None:
        """Extend the sudo timestamp without prompting."""
        if is_root():
            return
        try:
            result = run_command(["sudo", "-n", "true"], timeout=10.0)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.debug("sudo refresh failed: %s", e)
            return
        if not result.success:
            logger.debug("sudo refresh returned %d: %s", result.returncode, result.stderr.strip())

    def run_elevated(self, args: list[str]) -> CommandResult:
        """Run ``args`` as root."""
        command = list(args) if is_root() else ["sudo", "-n", *args]
        logger.debug("Running elevated: %s", " ".join(command))
        try:
            return run_command(command, timeout=self._ELEVATED_TIMEOUT)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            msg = f"Cannot run elevated command {args[0]!r}: {e}"
            raise CollaboratorUnavailable(msg) from e
