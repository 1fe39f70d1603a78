"""pkgutil package receipt registry."""

import logging
import subprocess

from officecleanup.engine.errors import CollaboratorUnavailable
from officecleanup.services.base import PackageRegistry, PrivilegeService
from officecleanup.utils.shell import run_command

logger = logging.getLogger(__name__)


class PkgutilRegistry(PackageRegistry):
    """Reads and edits the installer receipt database with ``pkgutil``.

    Forgetting a receipt needs root, so it goes through the privilege
    service.

    Args:
        privileges: Service used to run ``pkgutil --forget``.
    """

    def __init__(self, privileges: PrivilegeService) -> None:
        self._privileges = privileges

    def list_packages(self) -> list[str]:
        """Return every registered package id (``pkgutil --pkgs``)."""
        try:
            result = run_command(["pkgutil", "--pkgs"], timeout=30.0)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            msg = f"Cannot query package receipts: {e}"
            raise CollaboratorUnavailable(msg) from e

        if not result.success:
            msg = f"pkgutil --pkgs failed: {result.stderr.strip()}"
            raise CollaboratorUnavailable(msg)

        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def forget(self, package_id: str) -> bool:
        """Forget one receipt (``pkgutil --forget``)."""
        try:
            result = self._privileges.run_elevated(["pkgutil", "--forget", package_id])
        except CollaboratorUnavailable as e:
            logger.warning("Cannot forget %s: %s", package_id, e)
            return False

        if not result.success:
            logger.warning("pkgutil --forget %s failed: %s", package_id, result.stderr.strip())
        return result.success
