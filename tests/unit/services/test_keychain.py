"""Unit tests for SecurityCredentialStore.

Tests the ``security`` command lines, the "item not found" exit status
and label parsing from ``security dump-keychain`` output.
"""

from unittest.mock import patch

import pytest
from officecleanup.engine.errors import CollaboratorUnavailable
from officecleanup.services.keychain import SecurityCredentialStore
from officecleanup.utils.shell import CommandResult

MODULE = "officecleanup.services.keychain.run_command"

DUMP_OUTPUT = '''keychain: "/Users/me/Library/Keychains/login.keychain-db"
version: 512
class: "genp"
attributes:
    0x00000007 <blob>="Microsoft Office Identities Cache 3"
    "acct"<blob>="OfficeIdentities"
    "svce"<blob>="Microsoft Office Identities Cache 3"
keychain: "/Users/me/Library/Keychains/login.keychain-db"
class: "genp"
attributes:
    0x00000007 <blob>=<NULL>
    "svce"<blob>="Safari Forms AutoFill"
keychain: "/Users/me/Library/Keychains/login.keychain-db"
class: "genp"
attributes:
    "labl"<blob>=0x4D6963726F736F66744F6666696365524D534372656473  "MicrosoftOfficeRMSCreds-alice"
keychain: "/Users/me/Library/Keychains/login.keychain-db"
class: "genp"
attributes:
    0x00000007 <blob>="Microsoft Office Identities Cache 3"
'''


def _result(returncode: int = 0, stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(stdout=stdout, stderr=stderr, returncode=returncode)


class TestLookups:
    """Tests for exists_by_service / exists_by_account."""

    def test_service_found(self) -> None:
        """A zero exit means the item exists."""
        with patch(MODULE, return_value=_result()) as mock_run:
            assert SecurityCredentialStore().exists_by_service("OneAuthAccount") is True

        assert mock_run.call_args[0][0] == ["security", "find-generic-password", "-s", "OneAuthAccount"]

    def test_account_not_found(self) -> None:
        """Exit status 44 means no such item."""
        with patch(MODULE, return_value=_result(44)) as mock_run:
            assert SecurityCredentialStore().exists_by_account("com.helpshift.data_com.microsoft.Outlook") is False

        assert mock_run.call_args[0][0][2] == "-a"

    def test_tool_missing(self) -> None:
        """A missing security binary is reported as unavailable."""
        with patch(MODULE, side_effect=FileNotFoundError("security")), pytest.raises(CollaboratorUnavailable):
            SecurityCredentialStore().exists_by_service("OneAuthAccount")


class TestLabelsWithPrefix:
    """Tests for dump-keychain parsing."""

    def test_parses_both_label_formats(self) -> None:
        """Quoted and hex-prefixed labels are recognised; duplicates collapse."""
        with patch(MODULE, return_value=_result(stdout=DUMP_OUTPUT)):
            store = SecurityCredentialStore()
            identities = store.labels_with_prefix("Microsoft Office Identities")
            rms = store.labels_with_prefix("MicrosoftOfficeRMSCreds")

        assert identities == ["Microsoft Office Identities Cache 3"]
        assert rms == ["MicrosoftOfficeRMSCreds-alice"]

    def test_service_lines_are_not_labels(self) -> None:
        """Only label attributes are considered."""
        with patch(MODULE, return_value=_result(stdout=DUMP_OUTPUT)):
            assert SecurityCredentialStore().labels_with_prefix("Safari") == []

    def test_dump_failure(self) -> None:
        """A failing dump is reported as unavailable."""
        with (
            patch(MODULE, return_value=_result(51, stderr="User interaction is not allowed")),
            pytest.raises(CollaboratorUnavailable, match="dump-keychain"),
        ):
            SecurityCredentialStore().labels_with_prefix("Microsoft")


class TestDeletes:
    """Tests for the delete methods."""

    @pytest.mark.parametrize(
        ("method", "flag"),
        [("delete_by_service", "-s"), ("delete_by_account", "-a"), ("delete_by_label", "-l")],
    )
    def test_delete_flags(self, method: str, flag: str) -> None:
        """Each selector maps to its security flag."""
        with patch(MODULE, return_value=_result()) as mock_run:
            assert getattr(SecurityCredentialStore(), method)("OneAuthAccount") is True

        assert mock_run.call_args[0][0] == ["security", "delete-generic-password", flag, "OneAuthAccount"]

    def test_delete_exhausted(self) -> None:
        """Nothing left to delete returns False."""
        with patch(MODULE, return_value=_result(44)):
            assert SecurityCredentialStore().delete_by_service("OneAuthAccount") is False

    def test_delete_tool_missing(self) -> None:
        """A missing tool is a failed delete, not an exception."""
        with patch(MODULE, side_effect=OSError("security")):
            assert SecurityCredentialStore().delete_by_label("MicrosoftOfficeRMSCreds-alice") is False
