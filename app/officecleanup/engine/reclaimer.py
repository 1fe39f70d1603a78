"""Resource reclaimer.

Performs the irreversible half of a removal pass: deleting files and
directories (with an elevated retry and sandbox classification),
unloading launchd descriptors, forgetting package receipts, deleting
keychain items and terminating processes. Every failure is local to the
item; nothing here aborts the run.
"""

import logging
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

from officecleanup.catalog.models import TargetEntry, TargetKind
from officecleanup.engine.errors import CollaboratorUnavailable
from officecleanup.engine.prober import ExistenceProber, path_exists
from officecleanup.engine.state import ItemReport, RemovalOutcome, RunState
from officecleanup.services.base import Services
from officecleanup.utils.shell import run_command

logger = logging.getLogger(__name__)

# Upper bound for "delete until exhausted" loops on recurring keychain items
MAX_RECURRING_DELETIONS = 500


class ResourceReclaimer:
    """Removes concrete matches of catalog entries.

    Args:
        services: Collaborators used for elevated commands, launchd,
            receipts, keychain and processes.
        state: Counters of the current run, mutated in place.
        prober: Prober used to resolve an entry into concrete matches.
    """

    def __init__(self, services: Services, state: RunState, prober: ExistenceProber) -> None:
        self._services = services
        self._state = state
        self._prober = prober

    def reclaim_entry(self, entry: TargetEntry) -> list[ItemReport]:
        """Resolve an entry into its current matches and reclaim each one.

        Args:
            entry: Catalog entry to remove.

        Returns:
            One ItemReport per match, or a single NOT_FOUND line when
            nothing matched.
        """
        if entry.kind in (TargetKind.CREDENTIAL_SERVICE, TargetKind.CREDENTIAL_ACCOUNT):
            # Deletion is tried directly; a refusal is re-checked against the store
            targets: tuple[str, ...] = (entry.locator,)
        elif entry.kind == TargetKind.PROCESS_NAME_PATTERN:
            # pkill addresses every matching PID at once
            targets = (entry.locator,) if self._prober.probe(entry).exists else ()
        else:
            targets = self._prober.probe(entry).matches

        if not targets:
            return [ItemReport(entry.label, None, RemovalOutcome.NOT_FOUND)]

        if entry.recurring:
            return [self._delete_recurring(entry)]

        reports: list[ItemReport] = []
        for target in targets:
            outcome, detail = self._reclaim_target(entry, target)
            reports.append(ItemReport(entry.label, target, outcome, detail))
        return reports

    def reclaim(self, entry: TargetEntry, target: str) -> RemovalOutcome:
        """Reclaim one concrete target of ``entry``.

        Args:
            entry: Catalog entry the target belongs to.
            target: Path, process pattern, receipt id or keychain identifier.

        Returns:
            RemovalOutcome; NOT_FOUND when the target is already gone.
        """
        return self._reclaim_target(entry, target)[0]

    def _reclaim_target(self, entry: TargetEntry, target: str) -> tuple[RemovalOutcome, str | None]:
        match entry.kind:
            case TargetKind.EXACT_PATH | TargetKind.GLOB_PATTERN:
                return self._remove_path(entry, Path(target))
            case TargetKind.PROCESS_NAME_PATTERN:
                return self._terminate(entry)
            case TargetKind.PACKAGE_RECEIPT_PATTERN:
                return self._forget_receipt(target)
            case TargetKind.CREDENTIAL_SERVICE | TargetKind.CREDENTIAL_ACCOUNT if entry.recurring:
                item = self._delete_recurring(entry)
                return item.outcome, item.detail
            case TargetKind.CREDENTIAL_SERVICE | TargetKind.CREDENTIAL_ACCOUNT:
                return self._delete_credential(entry, target)
            case TargetKind.CREDENTIAL_LABEL_PREFIX:
                return self._delete_labelled_credential(target)

    # === Filesystem ===

    def _remove_path(self, entry: TargetEntry, path: Path) -> tuple[RemovalOutcome, str | None]:
        """Delete one file or directory.

        Steps:
        1. Unload the launchd descriptor if the entry asks for it
        2. Strip extended attributes (quarantine flags block sandboxed deletes)
        3. Unprivileged delete for user-scope entries
        4. Elevated ``rm -rf``
        5. Classify a failure as sandbox protection or a plain failure
        """
        if not path_exists(path):
            return RemovalOutcome.NOT_FOUND, None

        if entry.unload_service and not self._services.launchd.unload(
            str(path), elevated=entry.requires_elevation
        ):
            logger.info("Could not unload %s, deleting anyway", path)

        self._strip_attributes(path)

        if not entry.requires_elevation:
            error = self._delete_unprivileged(path)
            if error is None:
                self._state.record_removed()
                return RemovalOutcome.REMOVED, None
            logger.debug("Unprivileged delete of %s failed (%s), retrying elevated", path, error)

        error = self._delete_elevated(path)
        if error is None:
            self._state.record_removed()
            return RemovalOutcome.REMOVED, None

        if entry.is_sandbox_candidate or self._prober.resolver.is_under_container(path):
            logger.warning("Protected container %s (%s) needs Full Disk Access", path.name, entry.label)
            self._state.record_protected()
            return RemovalOutcome.PROTECTED_SANDBOX, "needs Full Disk Access"

        logger.error("Could not remove %s: %s", path, error)
        return RemovalOutcome.FAILED, error

    @staticmethod
    def _strip_attributes(path: Path) -> None:
        """Clear extended attributes recursively, best-effort."""
        try:
            run_command(["xattr", "-cr", str(path)], timeout=120.0)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.debug("xattr -cr %s skipped: %s", path, e)

    @staticmethod
    def _delete_unprivileged(path: Path) -> str | None:
        """Delete with the current user's rights; return an error message on failure."""
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            return str(e)
        return None

    def _delete_elevated(self, path: Path) -> str | None:
        """Delete via ``rm -rf`` as root; return an error message on failure."""
        try:
            result = self._services.privileges.run_elevated(["rm", "-rf", str(path)])
        except CollaboratorUnavailable as e:
            return str(e)
        if not result.success:
            return result.stderr.strip() or f"rm exited with {result.returncode}"
        if path_exists(path):
            return "path still present after rm -rf"
        return None

    # === Processes ===

    def _terminate(self, entry: TargetEntry) -> tuple[RemovalOutcome, str | None]:
        if self._services.processes.terminate(entry.locator):
            logger.info("Stopped %s", entry.locator)
            return RemovalOutcome.REMOVED, "stopped"
        # pkill reports failure when the process exited in the meantime
        return RemovalOutcome.NOT_FOUND, None

    # === Package receipts ===

    def _forget_receipt(self, package_id: str) -> tuple[RemovalOutcome, str | None]:
        receipts = self._services.receipts
        if receipts.forget(package_id):
            self._state.record_removed()
            return RemovalOutcome.REMOVED, "forgotten"
        if not _still_present(lambda pkg: pkg in receipts.list_packages(), package_id):
            return RemovalOutcome.NOT_FOUND, None
        return RemovalOutcome.FAILED, f"could not forget {package_id}"

    # === Keychain ===

    def _selector_methods(self, entry: TargetEntry) -> tuple[Callable[[str], bool], Callable[[str], bool]]:
        """Return the (delete, exists) pair matching the entry's selector kind."""
        credentials = self._services.credentials
        if entry.kind == TargetKind.CREDENTIAL_SERVICE:
            return credentials.delete_by_service, credentials.exists_by_service
        return credentials.delete_by_account, credentials.exists_by_account

    def _delete_credential(self, entry: TargetEntry, selector: str) -> tuple[RemovalOutcome, str | None]:
        delete, exists = self._selector_methods(entry)
        if delete(selector):
            self._state.record_removed()
            return RemovalOutcome.REMOVED, None
        if not _still_present(exists, selector):
            return RemovalOutcome.NOT_FOUND, None
        logger.error("Could not delete keychain item %r", selector)
        return RemovalOutcome.FAILED, f"could not delete keychain item {selector!r}"

    def _delete_recurring(self, entry: TargetEntry) -> ItemReport:
        """Delete every item behind a recurring selector.

        The reported line carries the number of deleted items in ``copies``.
        """
        selector = entry.locator
        delete, exists = self._selector_methods(entry)

        deleted = 0
        while deleted < MAX_RECURRING_DELETIONS and delete(selector):
            deleted += 1
        if deleted >= MAX_RECURRING_DELETIONS:
            logger.warning(
                "Stopped deleting %s after %d items; the keychain kept reporting matches",
                selector,
                deleted,
            )

        if deleted:
            self._state.record_removed(deleted)
            return ItemReport(entry.label, selector, RemovalOutcome.REMOVED, f"{deleted} entries", deleted)
        if not _still_present(exists, selector):
            return ItemReport(entry.label, selector, RemovalOutcome.NOT_FOUND)
        logger.error("Could not delete keychain items %r", selector)
        return ItemReport(
            entry.label, selector, RemovalOutcome.FAILED, f"could not delete keychain item {selector!r}"
        )

    def _delete_labelled_credential(self, label: str) -> tuple[RemovalOutcome, str | None]:
        """Delete by label, falling back to the label as service and then account name.

        The keychain only deletes an item through the attribute it was
        created with, and sweep results only carry the label.
        """
        credentials = self._services.credentials
        for delete in (
            credentials.delete_by_label,
            credentials.delete_by_service,
            credentials.delete_by_account,
        ):
            if delete(label):
                self._state.record_removed()
                return RemovalOutcome.REMOVED, None
        if not _still_present(lambda value: value in credentials.labels_with_prefix(value), label):
            return RemovalOutcome.NOT_FOUND, None
        logger.error("Could not delete keychain item %r", label)
        return RemovalOutcome.FAILED, f"could not delete keychain item {label!r}"


def _still_present(check: Callable[[str], bool], value: str) -> bool:
    """Re-query a collaborator after a refused deletion.

    A query that cannot run counts as present, so the item is reported
    as FAILED rather than silently dropped.
    """
    try:
        return check(value)
    except CollaboratorUnavailable as e:
        logger.debug("Could not re-check %s: %s", value, e)
        return True
