"""Unit tests for ShutdownPowerControl."""

from unittest.mock import MagicMock

from officecleanup.engine.errors import CollaboratorUnavailable
from officecleanup.services.power import ShutdownPowerControl
from officecleanup.utils.shell import CommandResult


class TestShutdownPowerControl:
    """Tests for restart()."""

    def test_restart(self) -> None:
        """shutdown -r now is run as root."""
        privileges = MagicMock()
        privileges.run_elevated.return_value = CommandResult(stdout="", stderr="", returncode=0)

        assert ShutdownPowerControl(privileges).restart() is True
        privileges.run_elevated.assert_called_once_with(["shutdown", "-r", "now"])

    def test_restart_refused(self) -> None:
        """A failing shutdown reports False."""
        privileges = MagicMock()
        privileges.run_elevated.return_value = CommandResult(stdout="", stderr="denied", returncode=1)
        assert ShutdownPowerControl(privileges).restart() is False

    def test_restart_unavailable(self) -> None:
        """An unavailable privilege service reports False."""
        privileges = MagicMock()
        privileges.run_elevated.side_effect = CollaboratorUnavailable("sudo missing")
        assert ShutdownPowerControl(privileges).restart() is False
