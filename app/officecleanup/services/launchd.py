"""launchctl service manager."""

import logging
import subprocess

from officecleanup.engine.errors import CollaboratorUnavailable
from officecleanup.services.base import PrivilegeService, ServiceManager
from officecleanup.utils.shell import run_command

logger = logging.getLogger(__name__)


class LaunchctlServiceManager(ServiceManager):
    """Unloads LaunchAgents and LaunchDaemons before their plists are deleted.

    System-scoped descriptors are unloaded through the privilege service;
    per-user agents are unloaded in the caller's own launchd domain.

    Args:
        privileges: Service used for system-scoped descriptors.
    """

    def __init__(self, privileges: PrivilegeService) -> None:
        self._privileges = privileges

    def unload(self, descriptor: str, *, elevated: bool) -> bool:
        args = ["launchctl", "unload", descriptor]
        try:
            if elevated:
                result = self._privileges.run_elevated(args)
            else:
                result = run_command(args, timeout=30.0)
        except (CollaboratorUnavailable, FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Cannot unload %s: %s", descriptor, e)
            return False

        if not result.success:
            # Not loaded is the common case for leftovers
            logger.debug("launchctl unload %s: %s", descriptor, result.stderr.strip())
        return result.success
