"""Restart control via ``shutdown``."""

import logging

from officecleanup.engine.errors import CollaboratorUnavailable
from officecleanup.services.base import PowerControl, PrivilegeService

logger = logging.getLogger(__name__)


class ShutdownPowerControl(PowerControl):
    """Restarts the Mac with ``shutdown -r now``.

    Args:
        privileges: Service used to run shutdown as root.
    """

    def __init__(self, privileges: PrivilegeService) -> None:
        self._privileges = privileges

    def restart(self) -> bool:
        try:
            result = self._privileges.run_elevated(["shutdown", "-r", "now"])
        except CollaboratorUnavailable as e:
            logger.error("Cannot restart: %s", e)
            return False
        if not result.success:
            logger.error("shutdown -r failed: %s", result.stderr.strip())
        return result.success
