"""End-of-run summary.

The summary is derived from the final ``RunState`` counters only; it
never recounts sections, so it always reflects exactly what the prober
and reclaimer recorded.
"""

from dataclasses import dataclass

from officecleanup.engine.state import RunMode, RunState


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Final figures of one pass.

    Attributes:
        mode: Mode the pass ran in.
        found_count: Items discovered.
        removed_count: Items deleted.
        protected_count: Items blocked by sandbox protection.
    """

    mode: RunMode
    found_count: int
    removed_count: int
    protected_count: int

    @property
    def clean(self) -> bool:
        """Audit found nothing."""
        return self.mode == RunMode.AUDIT and self.found_count == 0

    @property
    def needs_full_disk_access(self) -> bool:
        """Some containers could only be removed with Full Disk Access."""
        return self.protected_count > 0


def build_summary(state: RunState, mode: RunMode) -> RunSummary:
    """Snapshot the counters of a finished pass.

    Args:
        state: Counters accumulated during the pass.
        mode: Mode the pass ran in.

    Returns:
        Immutable RunSummary.
    """
    return RunSummary(
        mode=mode,
        found_count=state.found_count,
        removed_count=state.removed_count,
        protected_count=state.protected_count,
    )
