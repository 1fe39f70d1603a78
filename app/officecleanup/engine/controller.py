"""Mode controller.

Orchestrates one invocation: an audit pass over the catalog, or a
confirmed and elevated removal pass followed by an optional restart.
The controller owns the run's ``RunState`` and hands it to the prober
and reclaimer; it is the only component that talks to the operator.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict

from officecleanup.catalog import CatalogSection, TargetKind, get_catalog
from officecleanup.core.paths import PathResolver
from officecleanup.engine.errors import ElevationDenied
from officecleanup.engine.keepalive import DEFAULT_REFRESH_INTERVAL, PrivilegeKeepAlive
from officecleanup.engine.prober import ExistenceProber
from officecleanup.engine.reclaimer import ResourceReclaimer
from officecleanup.engine.reporter import RunSummary, build_summary
from officecleanup.engine.state import ItemReport, RemovalOutcome, RunMode, RunState, SectionReport
from officecleanup.services.base import OperatorPrompt, Services

logger = logging.getLogger(__name__)

CONFIRM_COUNTDOWN_SECONDS = 3
RESTART_COUNTDOWN_SECONDS = 5
PROCESS_SETTLE_SECONDS = 2.0

EXIT_OK = 0
EXIT_FATAL = 1


class RunConfig(BaseModel):
    """Flags of one invocation.

    Attributes:
        mode: Audit (read-only) or remove.
        force: Skip the confirmation prompt, countdown and restart prompt.
        skip_restart: Skip the end-of-run restart prompt.
    """

    mode: RunMode = RunMode.AUDIT
    force: bool = False
    skip_restart: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)


class RunPhase(str, Enum):
    """States of the mode controller."""

    IDLE = "idle"
    AUDITING = "auditing"
    AUDIT_REPORTED = "audit_reported"
    CONFIRMING_REMOVAL = "confirming_removal"
    CANCELLED = "cancelled"
    ELEVATION_ACQUIRED = "elevation_acquired"
    ELEVATION_DENIED = "elevation_denied"
    PROCESSES_STOPPED = "processes_stopped"
    RECLAIMING = "reclaiming"
    REMOVAL_REPORTED = "removal_reported"


# Allowed successor phases
_TRANSITIONS: dict[RunPhase, frozenset[RunPhase]] = {
    RunPhase.IDLE: frozenset({RunPhase.AUDITING, RunPhase.CONFIRMING_REMOVAL}),
    RunPhase.AUDITING: frozenset({RunPhase.AUDIT_REPORTED}),
    RunPhase.CONFIRMING_REMOVAL: frozenset(
        {RunPhase.CANCELLED, RunPhase.ELEVATION_ACQUIRED, RunPhase.ELEVATION_DENIED}
    ),
    RunPhase.ELEVATION_ACQUIRED: frozenset({RunPhase.PROCESSES_STOPPED}),
    RunPhase.PROCESSES_STOPPED: frozenset({RunPhase.RECLAIMING}),
    RunPhase.RECLAIMING: frozenset({RunPhase.REMOVAL_REPORTED}),
}


@dataclass(slots=True)
class RunReport:
    """Result of ``ModeController.run``.

    Attributes:
        phase: Final controller phase.
        sections: Section reports in catalog order.
        summary: Final counters, None when the run was cancelled.
        restart_requested: Whether a restart was handed to the power service.
    """

    phase: RunPhase
    sections: list[SectionReport] = field(default_factory=list)
    summary: RunSummary | None = None
    restart_requested: bool = False

    @property
    def cancelled(self) -> bool:
        return self.phase == RunPhase.CANCELLED

    @property
    def exit_code(self) -> int:
        """Process exit code for this outcome."""
        return EXIT_FATAL if self.phase == RunPhase.ELEVATION_DENIED else EXIT_OK


class ModeController:
    """Runs an audit or removal pass over the catalog.

    Args:
        config: Flags of this invocation.
        services: OS collaborators.
        prompt: Operator interaction.
        catalog: Sections to process (defaults to the built-in catalog).
        resolver: Path resolver (defaults to the real home and root).
        on_section: Called with each SectionReport as soon as it completes.
        on_summary: Called with the summary before the restart prompt.
        sleep: Delay function, replaced in tests.
        refresh_interval: Seconds between privilege refreshes.

    Example:
        >>> controller = ModeController(RunConfig(), get_macos_services(), ConsolePrompt())
        >>> report = controller.run()
        >>> report.summary.found_count
        12
    """

    def __init__(
        self,
        config: RunConfig,
        services: Services,
        prompt: OperatorPrompt,
        *,
        catalog: tuple[CatalogSection, ...] | None = None,
        resolver: PathResolver | None = None,
        on_section: Callable[[SectionReport], None] | None = None,
        on_summary: Callable[[RunSummary], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
    ) -> None:
        self._config = config
        self._services = services
        self._prompt = prompt
        self._catalog = catalog if catalog is not None else get_catalog()
        self._on_section = on_section
        self._on_summary = on_summary
        self._sleep = sleep
        self._refresh_interval = refresh_interval

        self._state = RunState()
        self._prober = ExistenceProber(services, resolver)
        self._reclaimer = ResourceReclaimer(services, self._state, self._prober)
        self._phase = RunPhase.IDLE
        self._history: list[RunPhase] = [RunPhase.IDLE]

    @property
    def phase(self) -> RunPhase:
        """Current phase."""
        return self._phase

    @property
    def history(self) -> list[RunPhase]:
        """Every phase entered so far, starting with IDLE."""
        return list(self._history)

    @property
    def state(self) -> RunState:
        """Counters of this run."""
        return self._state

    def run(self) -> RunReport:
        """Execute the configured mode.

        Returns:
            RunReport describing what happened.

        Raises:
            ElevationDenied: If administrator rights could not be obtained.
            RuntimeError: If the controller has already run.
        """
        if self._phase != RunPhase.IDLE:
            raise RuntimeError("ModeController.run() may only be called once")

        if self._config.mode == RunMode.AUDIT:
            return self._run_audit()
        return self._run_removal()

    def _transition(self, phase: RunPhase) -> None:
        allowed = _TRANSITIONS.get(self._phase, frozenset())
        if phase not in allowed:
            raise RuntimeError(f"Invalid transition {self._phase.value} -> {phase.value}")
        logger.debug("Phase %s -> %s", self._phase.value, phase.value)
        self._phase = phase
        self._history.append(phase)

    def _emit_section(self, report: SectionReport) -> None:
        if self._on_section is not None:
            self._on_section(report)

    def _finish(self, mode: RunMode) -> RunSummary:
        summary = build_summary(self._state, mode)
        if self._on_summary is not None:
            self._on_summary(summary)
        return summary

    # === Audit ===

    def _run_audit(self) -> RunReport:
        self._transition(RunPhase.AUDITING)
        sections = []
        for section in self._catalog:
            report = self._audit_section(section)
            sections.append(report)
            self._emit_section(report)

        self._transition(RunPhase.AUDIT_REPORTED)
        summary = self._finish(RunMode.AUDIT)
        return RunReport(phase=self._phase, sections=sections, summary=summary)

    def _audit_section(self, section: CatalogSection) -> SectionReport:
        report = SectionReport(section.key, section.title)
        for entry in section.entries:
            result = self._prober.probe(entry)
            if not result.exists:
                continue

            if entry.kind == TargetKind.PROCESS_NAME_PATTERN:
                pids = ", ".join(result.matches)
                report.items.append(ItemReport(entry.label, entry.locator, detail=f"PID {pids}"))
            else:
                report.items.extend(ItemReport(entry.label, match) for match in result.matches)

            if section.counted:
                self._state.record_found(len(result.matches))
        return report

    # === Removal ===

    def _run_removal(self) -> RunReport:
        self._transition(RunPhase.CONFIRMING_REMOVAL)
        if not self._config.force and not self._confirm_removal():
            logger.info("Removal cancelled by operator")
            self._transition(RunPhase.CANCELLED)
            return RunReport(phase=self._phase)

        if not self._services.privileges.acquire():
            self._transition(RunPhase.ELEVATION_DENIED)
            raise ElevationDenied("Administrator privileges are required to remove Microsoft Office")
        self._transition(RunPhase.ELEVATION_ACQUIRED)

        sections: list[SectionReport] = []
        with PrivilegeKeepAlive(self._services.privileges, self._refresh_interval):
            for section in self._catalog:
                report = self._reclaim_section(section)
                sections.append(report)
                self._emit_section(report)

                if not section.counted and self._phase == RunPhase.ELEVATION_ACQUIRED:
                    self._stop_processes(report)

            if self._phase == RunPhase.ELEVATION_ACQUIRED:
                # Catalog without a process section
                self._transition(RunPhase.PROCESSES_STOPPED)
                self._transition(RunPhase.RECLAIMING)

        self._transition(RunPhase.REMOVAL_REPORTED)
        summary = self._finish(RunMode.REMOVE)
        restarted = self._offer_restart()
        return RunReport(phase=self._phase, sections=sections, summary=summary, restart_requested=restarted)

    def _confirm_removal(self) -> bool:
        if not self._prompt.confirm("Remove Microsoft Office and all related data?"):
            return False
        return self._prompt.countdown(
            CONFIRM_COUNTDOWN_SECONDS, "Starting removal, press Ctrl+C to cancel"
        )

    def _stop_processes(self, report: SectionReport) -> None:
        if report.count(RemovalOutcome.REMOVED):
            # Let terminated apps release their files
            self._sleep(PROCESS_SETTLE_SECONDS)
        self._transition(RunPhase.PROCESSES_STOPPED)
        self._transition(RunPhase.RECLAIMING)

    def _reclaim_section(self, section: CatalogSection) -> SectionReport:
        report = SectionReport(section.key, section.title)
        for entry in section.entries:
            items = self._reclaimer.reclaim_entry(entry)
            report.items.extend(item for item in items if item.outcome != RemovalOutcome.NOT_FOUND)
        if section.counted:
            self._state.record_found(sum(item.copies for item in report.found_items))
        return report

    def _offer_restart(self) -> bool:
        if self._config.skip_restart or self._config.force:
            return False
        if not self._prompt.confirm("Restart now to complete the removal?"):
            self._prompt.notify("Restart your Mac later to complete the removal.")
            return False
        if not self._prompt.countdown(RESTART_COUNTDOWN_SECONDS, "Restarting, press Ctrl+C to cancel"):
            self._prompt.notify("Restart cancelled. Restart your Mac later to complete the removal.")
            return False
        return self._services.power.restart()
