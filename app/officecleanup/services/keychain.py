"""Keychain credential store backed by the ``security`` tool.

Only generic-password items are addressed, matching how Office, Teams
and OneDrive store their tokens.
"""

import logging
import re
import subprocess

from officecleanup.engine.errors import CollaboratorUnavailable
from officecleanup.services.base import CredentialStore
from officecleanup.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)

# Label attribute lines in `security dump-keychain` output, e.g.
#     0x00000007 <blob>="Microsoft Office Identities Cache 3"
#     "labl"<blob>=0x4D6963...  "Microsoft Office Identities Settings 3"
_LABEL_LINE = re.compile(r'^\s*(?:0x00000007|"labl")\s*<blob>=(?:0x[0-9A-Fa-f]+\s+)?"(?P<label>.*)"\s*$')

# Exit status of `security find-*` / `delete-*` when no item matched
_ITEM_NOT_FOUND = 44


class SecurityCredentialStore(CredentialStore):
    """Credential store that drives ``/usr/bin/security``."""

    _TIMEOUT: float = 30.0

    def _security(self, args: list[str]) -> CommandResult:
        try:
            return run_command(["security", *args], timeout=self._TIMEOUT)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            msg = f"Cannot run security {args[0]}: {e}"
            raise CollaboratorUnavailable(msg) from e

    def _find(self, flag: str, value: str) -> bool:
        result = self._security(["find-generic-password", flag, value])
        if result.success:
            return True
        if result.returncode != _ITEM_NOT_FOUND:
            logger.debug("security find %s %r returned %d", flag, value, result.returncode)
        return False

    def _delete(self, flag: str, value: str) -> bool:
        try:
            result = self._security(["delete-generic-password", flag, value])
        except CollaboratorUnavailable as e:
            logger.warning("%s", e)
            return False
        if not result.success and result.returncode != _ITEM_NOT_FOUND:
            logger.warning(
                "security delete %s %r failed (%d): %s",
                flag,
                value,
                result.returncode,
                result.stderr.strip(),
            )
        return result.success

    def exists_by_service(self, service: str) -> bool:
        return self._find("-s", service)

    def exists_by_account(self, account: str) -> bool:
        return self._find("-a", account)

    def labels_with_prefix(self, prefix: str) -> list[str]:
        """Scan ``security dump-keychain`` for labels starting with ``prefix``.

        Secrets are never requested (no ``-d``), so the dump does not
        trigger keychain access prompts.
        """
        result = self._security(["dump-keychain"])
        if not result.success:
            msg = f"security dump-keychain failed: {result.stderr.strip()}"
            raise CollaboratorUnavailable(msg)

        labels: list[str] = []
        for line in result.stdout.splitlines():
            match = _LABEL_LINE.match(line)
            if match is None:
                continue
            label = match.group("label")
            if label.startswith(prefix) and label not in labels:
                labels.append(label)
        return labels

    def delete_by_service(self, service: str) -> bool:
        return self._delete("-s", service)

    def delete_by_account(self, account: str) -> bool:
        return self._delete("-a", account)

    def delete_by_label(self, label: str) -> bool:
        return self._delete("-l", label)
