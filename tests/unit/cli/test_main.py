"""Unit tests for the officecleanup command line.

Tests flag parsing, exit codes, host gating and how run outcomes map to
the process exit status. The controller and services are mocked.
"""

from unittest.mock import MagicMock, patch

import pytest
from officecleanup import __version__
from officecleanup.cli.main import app
from officecleanup.engine.controller import RunConfig, RunPhase, RunReport
from officecleanup.engine.errors import ElevationDenied
from officecleanup.engine.reporter import RunSummary
from officecleanup.engine.state import RunMode
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def macos():
    """Pretend to run on macOS with mocked services."""
    with (
        patch("officecleanup.cli.main.is_supported_host", return_value=True),
        patch("officecleanup.cli.main.get_macos_services") as mock_services,
    ):
        yield mock_services


@pytest.fixture
def controller_cls(macos: MagicMock):
    """Mock ModeController returning a completed audit."""
    with patch("officecleanup.cli.main.ModeController") as mock_cls:
        mock_cls.return_value.run.return_value = RunReport(
            phase=RunPhase.AUDIT_REPORTED,
            summary=RunSummary(RunMode.AUDIT, 0, 0, 0),
        )
        yield mock_cls


def _config(controller_cls: MagicMock) -> RunConfig:
    return controller_cls.call_args[0][0]


class TestHelpAndVersion:
    """Tests for --help and --version."""

    @pytest.mark.parametrize("flag", ["--help", "-h"])
    def test_help(self, flag: str) -> None:
        """Help exits 0 and lists the options."""
        result = runner.invoke(app, [flag])

        assert result.exit_code == 0
        assert "--remove" in result.output
        assert "--no-restart" in result.output

    @pytest.mark.parametrize("flag", ["--version", "-V"])
    def test_version(self, flag: str) -> None:
        """Version prints and exits 0."""
        result = runner.invoke(app, [flag])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestUnknownArguments:
    """Tests for unrecognized flags and arguments."""

    @pytest.mark.parametrize("args", [["--bogus"], ["--remove", "--purge"], ["audit"]])
    def test_unknown_exits_1(self, args: list[str], controller_cls: MagicMock) -> None:
        """Anything unrecognized prints usage and exits 1 without running."""
        result = runner.invoke(app, args)

        assert result.exit_code == 1
        assert "--remove" in result.output
        controller_cls.assert_not_called()


class TestHostGate:
    """Tests for the macOS-only check."""

    def test_non_macos_exits_1(self) -> None:
        """Other systems are refused before anything is probed."""
        with (
            patch("officecleanup.cli.main.is_supported_host", return_value=False),
            patch("officecleanup.cli.main.get_macos_services") as mock_services,
            patch("officecleanup.cli.main.ModeController") as mock_cls,
        ):
            result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "macOS only" in result.output
        mock_services.assert_not_called()
        mock_cls.assert_not_called()


class TestModeSelection:
    """Tests for how flags become a RunConfig."""

    def test_default_is_audit(self, controller_cls: MagicMock) -> None:
        """No flags run an audit."""
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert _config(controller_cls) == RunConfig(mode=RunMode.AUDIT)
        assert "No files will be modified" in result.output

    def test_remove_flags(self, controller_cls: MagicMock) -> None:
        """--remove, --force and --no-restart are forwarded."""
        controller_cls.return_value.run.return_value = RunReport(
            phase=RunPhase.REMOVAL_REPORTED, summary=RunSummary(RunMode.REMOVE, 3, 3, 0)
        )

        result = runner.invoke(app, ["--remove", "-f", "--no-restart"])

        assert result.exit_code == 0
        assert _config(controller_cls) == RunConfig(mode=RunMode.REMOVE, force=True, skip_restart=True)
        assert "cannot be undone" in result.output

    def test_audit_wins_over_remove(self, controller_cls: MagicMock) -> None:
        """Both mode flags resolve to an audit."""
        runner.invoke(app, ["--remove", "--audit"])
        assert _config(controller_cls).mode == RunMode.AUDIT

    def test_precedence_documented_in_help(self) -> None:
        """The help text states that --audit overrides --remove."""
        result = runner.invoke(app, ["--help"], env={"COLUMNS": "200", "TERMINAL_WIDTH": "200"})
        assert "precedence" in result.output


class TestOutcomes:
    """Tests for exit codes of finished runs."""

    def test_cancelled_exits_0(self, controller_cls: MagicMock) -> None:
        """Declining the confirmation is a normal exit."""
        controller_cls.return_value.run.return_value = RunReport(phase=RunPhase.CANCELLED)

        result = runner.invoke(app, ["--remove"])

        assert result.exit_code == 0
        assert "Removal cancelled" in result.output

    def test_elevation_denied_exits_1(self, controller_cls: MagicMock) -> None:
        """Failed elevation exits 1."""
        controller_cls.return_value.run.side_effect = ElevationDenied("no sudo")

        result = runner.invoke(app, ["--remove"])

        assert result.exit_code == 1

    def test_verbose_enables_debug_logging(self, controller_cls: MagicMock) -> None:
        """-v configures DEBUG logging."""
        with patch("officecleanup.cli.main.configure_logging") as mock_logging:
            runner.invoke(app, ["-v"])
        mock_logging.assert_called_once_with(True)
