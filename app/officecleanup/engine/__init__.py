"""Cleanup engine.

Public API:
- ModeController: Runs an audit or removal pass over the catalog
- RunConfig: Flags of one invocation
- ExistenceProber: Read-only existence checks
- ResourceReclaimer: Deletion of concrete matches
- RunState / RunSummary: Counters and the final summary
"""

from officecleanup.engine.controller import ModeController, RunConfig, RunPhase, RunReport
from officecleanup.engine.errors import (
    CleanupError,
    CollaboratorUnavailable,
    ElevationDenied,
    NotApplicableOS,
)
from officecleanup.engine.keepalive import PrivilegeKeepAlive
from officecleanup.engine.prober import ExistenceProber
from officecleanup.engine.reclaimer import ResourceReclaimer
from officecleanup.engine.reporter import RunSummary, build_summary
from officecleanup.engine.state import (
    ItemReport,
    ProbeResult,
    RemovalOutcome,
    RunMode,
    RunState,
    SectionReport,
)

__all__ = [
    "CleanupError",
    "CollaboratorUnavailable",
    "ElevationDenied",
    "ExistenceProber",
    "ItemReport",
    "ModeController",
    "NotApplicableOS",
    "PrivilegeKeepAlive",
    "ProbeResult",
    "RemovalOutcome",
    "ResourceReclaimer",
    "RunConfig",
    "RunMode",
    "RunPhase",
    "RunReport",
    "RunState",
    "RunSummary",
    "SectionReport",
    "build_summary",
]
