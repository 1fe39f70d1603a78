"""pgrep/pkill process service."""

import logging
import subprocess

from officecleanup.engine.errors import CollaboratorUnavailable
from officecleanup.services.base import ProcessService
from officecleanup.utils.shell import run_command

logger = logging.getLogger(__name__)


class PgrepProcessService(ProcessService):
    """Matches processes against their full command line.

    Matching is a case-sensitive substring test (``pgrep -f``), so
    "Microsoft Word" matches the app binary as well as its helpers.
    """

    _TIMEOUT: float = 15.0

    def find(self, pattern: str) -> list[str]:
        """Return the PIDs of matching processes."""
        try:
            result = run_command(["pgrep", "-f", pattern], timeout=self._TIMEOUT)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            msg = f"Cannot list processes: {e}"
            raise CollaboratorUnavailable(msg) from e

        # pgrep exits 1 when nothing matched
        if result.returncode == 1:
            return []
        if not result.success:
            msg = f"pgrep failed ({result.returncode}): {result.stderr.strip()}"
            raise CollaboratorUnavailable(msg)

        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def terminate(self, pattern: str) -> bool:
        """Send SIGKILL to every matching process."""
        try:
            result = run_command(["pkill", "-9", "-f", pattern], timeout=self._TIMEOUT)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Cannot terminate %s: %s", pattern, e)
            return False
        return result.success
