"""Unit tests for LaunchctlServiceManager."""

from unittest.mock import MagicMock, patch

from officecleanup.engine.errors import CollaboratorUnavailable
from officecleanup.services.launchd import LaunchctlServiceManager
from officecleanup.utils.shell import CommandResult

PLIST = "/Library/LaunchDaemons/com.microsoft.autoupdate.helper.plist"


class TestLaunchctlServiceManager:
    """Tests for unload()."""

    def test_system_descriptor_elevated(self) -> None:
        """System descriptors are unloaded as root."""
        privileges = MagicMock()
        privileges.run_elevated.return_value = CommandResult(stdout="", stderr="", returncode=0)

        assert LaunchctlServiceManager(privileges).unload(PLIST, elevated=True) is True
        privileges.run_elevated.assert_called_once_with(["launchctl", "unload", PLIST])

    def test_user_agent_unprivileged(self) -> None:
        """User agents are unloaded in the caller's own domain."""
        privileges = MagicMock()
        with patch("officecleanup.services.launchd.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            LaunchctlServiceManager(privileges).unload("/Users/me/Library/LaunchAgents/x.plist", elevated=False)

        privileges.run_elevated.assert_not_called()
        assert mock_run.call_args[0][0][:2] == ["launchctl", "unload"]

    def test_not_loaded(self) -> None:
        """A descriptor that was not loaded reports False."""
        privileges = MagicMock()
        privileges.run_elevated.return_value = CommandResult(
            stdout="", stderr="Could not find specified service", returncode=113
        )
        assert LaunchctlServiceManager(privileges).unload(PLIST, elevated=True) is False

    def test_sudo_unavailable(self) -> None:
        """Errors from the privilege service are not raised."""
        privileges = MagicMock()
        privileges.run_elevated.side_effect = CollaboratorUnavailable("sudo missing")
        assert LaunchctlServiceManager(privileges).unload(PLIST, elevated=True) is False
