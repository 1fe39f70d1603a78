"""Abstract base classes for OS collaborator services.

The cleanup engine never shells out itself: every interaction with the
process table, sudo, the installer receipt database, the keychain,
launchd, the operator and the power manager goes through one of these
narrow interfaces. macOS implementations live next to this module; the
test-suite provides in-memory fakes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from officecleanup.utils.shell import CommandResult


class ProcessService(ABC):
    """Lists and terminates running processes by command-line substring."""

    @abstractmethod
    def find(self, pattern: str) -> list[str]:
        """Return identifiers (PIDs) of processes whose command line contains ``pattern``.

        Raises:
            CollaboratorUnavailable: If the process table cannot be queried.
        """

    @abstractmethod
    def terminate(self, pattern: str) -> bool:
        """Force-terminate every process matching ``pattern``.

        Returns:
            True if at least one process was signalled.
        """


class PrivilegeService(ABC):
    """Acquires, refreshes and uses administrator privileges."""

    @abstractmethod
    def acquire(self) -> bool:
        """Interactively obtain elevated rights.

        Returns:
            True if privileges are now available.
        """

    @abstractmethod
    def refresh(self) -> None:
        """Extend the current elevation so it does not expire mid-run."""

    @abstractmethod
    def run_elevated(self, args: list[str]) -> CommandResult:
        """Run a command with elevated rights.

        Raises:
            CollaboratorUnavailable: If the command cannot be executed.
        """


class PackageRegistry(ABC):
    """Installer receipt database."""

    @abstractmethod
    def list_packages(self) -> list[str]:
        """Return every registered package identifier.

        Raises:
            CollaboratorUnavailable: If the registry cannot be queried.
        """

    @abstractmethod
    def forget(self, package_id: str) -> bool:
        """Deregister one package receipt.

        Returns:
            True if the receipt was forgotten.
        """


class CredentialStore(ABC):
    """Secure credential storage (the macOS login keychain).

    Delete methods remove at most one matching item per call and return
    False once nothing matches any more.
    """

    @abstractmethod
    def exists_by_service(self, service: str) -> bool:
        """Check for an item with this exact service name."""

    @abstractmethod
    def exists_by_account(self, account: str) -> bool:
        """Check for an item with this exact account name."""

    @abstractmethod
    def labels_with_prefix(self, prefix: str) -> list[str]:
        """Return the labels of every item whose label starts with ``prefix``.

        Raises:
            CollaboratorUnavailable: If the store cannot be enumerated.
        """

    @abstractmethod
    def delete_by_service(self, service: str) -> bool:
        """Delete one item by service name."""

    @abstractmethod
    def delete_by_account(self, account: str) -> bool:
        """Delete one item by account name."""

    @abstractmethod
    def delete_by_label(self, label: str) -> bool:
        """Delete one item by label."""


class ServiceManager(ABC):
    """Background service supervisor (launchd)."""

    @abstractmethod
    def unload(self, descriptor: str, *, elevated: bool) -> bool:
        """Unload a service descriptor so it can be deleted safely.

        Args:
            descriptor: Path to the descriptor (plist) file.
            elevated: Whether the descriptor is system-scoped.

        Returns:
            True if the service manager accepted the request.
        """


class OperatorPrompt(ABC):
    """Interaction with the human running the tool."""

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; the default answer is no."""

    @abstractmethod
    def countdown(self, seconds: int, message: str) -> bool:
        """Wait ``seconds`` while allowing the operator to abort.

        Returns:
            False if the operator interrupted the countdown.
        """

    @abstractmethod
    def notify(self, message: str) -> None:
        """Show an informational message."""


class PowerControl(ABC):
    """Host power management."""

    @abstractmethod
    def restart(self) -> bool:
        """Request an immediate restart of the machine.

        Returns:
            True if the restart was scheduled.
        """


@dataclass(frozen=True, slots=True)
class Services:
    """Bundle of collaborator services handed to the engine.

    Attributes:
        processes: Process table access.
        privileges: Elevation handling.
        receipts: Installer receipt database.
        credentials: Keychain access.
        launchd: Background service manager.
        power: Restart control.
    """

    processes: ProcessService
    privileges: PrivilegeService
    receipts: PackageRegistry
    credentials: CredentialStore
    launchd: ServiceManager
    power: PowerControl
