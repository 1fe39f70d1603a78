"""OS collaborator services.

This module exports the service interfaces and a factory that wires the
macOS implementations together.
"""

from officecleanup.services.base import (
    CredentialStore,
    OperatorPrompt,
    PackageRegistry,
    PowerControl,
    PrivilegeService,
    ProcessService,
    ServiceManager,
    Services,
)
from officecleanup.services.keychain import SecurityCredentialStore
from officecleanup.services.launchd import LaunchctlServiceManager
from officecleanup.services.power import ShutdownPowerControl
from officecleanup.services.privileges import SudoPrivilegeService
from officecleanup.services.processes import PgrepProcessService
from officecleanup.services.receipts import PkgutilRegistry


def get_macos_services() -> Services:
    """Create the macOS service bundle.

    Returns:
        Services sharing one sudo-backed privilege service.
    """
    privileges = SudoPrivilegeService()
    return Services(
        processes=PgrepProcessService(),
        privileges=privileges,
        receipts=PkgutilRegistry(privileges),
        credentials=SecurityCredentialStore(),
        launchd=LaunchctlServiceManager(privileges),
        power=ShutdownPowerControl(privileges),
    )


__all__ = [
    "CredentialStore",
    "LaunchctlServiceManager",
    "OperatorPrompt",
    "PackageRegistry",
    "PgrepProcessService",
    "PkgutilRegistry",
    "PowerControl",
    "PrivilegeService",
    "ProcessService",
    "SecurityCredentialStore",
    "ServiceManager",
    "Services",
    "ShutdownPowerControl",
    "SudoPrivilegeService",
    "get_macos_services",
]
