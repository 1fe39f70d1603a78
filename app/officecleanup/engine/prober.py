"""Existence prober.

Determines whether a catalog entry is currently present without
modifying anything. Safe to call any number of times.
"""

import fnmatch
import logging
from pathlib import Path

from officecleanup.catalog.models import TargetEntry, TargetKind
from officecleanup.core.paths import PathResolver
from officecleanup.engine.errors import CollaboratorUnavailable
from officecleanup.engine.state import ProbeResult
from officecleanup.services.base import Services

logger = logging.getLogger(__name__)


def path_exists(path: Path) -> bool:
    """Check existence without following symlinks (dangling links count)."""
    return path.exists() or path.is_symlink()


class ExistenceProber:
    """Checks catalog entries against the live system.

    Args:
        services: Collaborators queried for processes, receipts and keychain items.
        resolver: Maps ``~/`` and ``/`` locators onto concrete paths.
    """

    def __init__(self, services: Services, resolver: PathResolver | None = None) -> None:
        self._services = services
        self._resolver = resolver if resolver is not None else PathResolver()

    @property
    def resolver(self) -> PathResolver:
        """Path resolver used for filesystem entries."""
        return self._resolver

    def probe(self, entry: TargetEntry) -> ProbeResult:
        """Report whether ``entry`` currently exists.

        Collaborator failures are logged and reported as "not found".

        Args:
            entry: Catalog entry to check.

        Returns:
            ProbeResult with the concrete matches, in deterministic order.
        """
        try:
            return self._dispatch(entry)
        except CollaboratorUnavailable as e:
            logger.warning("Could not check %s: %s", entry.label, e)
            return ProbeResult.missing()

    def _dispatch(self, entry: TargetEntry) -> ProbeResult:
        match entry.kind:
            case TargetKind.EXACT_PATH:
                return self._probe_path(entry)
            case TargetKind.GLOB_PATTERN:
                return self._probe_glob(entry)
            case TargetKind.PROCESS_NAME_PATTERN:
                return ProbeResult.of(self._services.processes.find(entry.locator))
            case TargetKind.PACKAGE_RECEIPT_PATTERN:
                return ProbeResult.of(self._matching_receipts(entry.locator))
            case TargetKind.CREDENTIAL_SERVICE:
                found = self._services.credentials.exists_by_service(entry.locator)
                return ProbeResult.of([entry.locator] if found else [])
            case TargetKind.CREDENTIAL_ACCOUNT:
                found = self._services.credentials.exists_by_account(entry.locator)
                return ProbeResult.of([entry.locator] if found else [])
            case TargetKind.CREDENTIAL_LABEL_PREFIX:
                return ProbeResult.of(self._services.credentials.labels_with_prefix(entry.locator))

    def _probe_path(self, entry: TargetEntry) -> ProbeResult:
        path = self._resolver.resolve(entry.locator)
        return ProbeResult.of([str(path)] if path_exists(path) else [])

    def _probe_glob(self, entry: TargetEntry) -> ProbeResult:
        """Match the pattern against the direct children of its base directory."""
        base = self._resolver.resolve(entry.glob_base)
        if not base.is_dir():
            return ProbeResult.missing()

        try:
            names = sorted(child.name for child in base.iterdir())
        except PermissionError:
            logger.warning("Permission denied scanning directory: %s", base)
            return ProbeResult.missing()
        except OSError as e:
            logger.warning("Cannot scan directory %s: %s", base, e)
            return ProbeResult.missing()

        pattern = entry.glob_name
        return ProbeResult.of([str(base / name) for name in names if fnmatch.fnmatchcase(name, pattern)])

    def _matching_receipts(self, pattern: str) -> list[str]:
        needle = pattern.lower()
        return [pkg for pkg in self._services.receipts.list_packages() if needle in pkg.lower()]
