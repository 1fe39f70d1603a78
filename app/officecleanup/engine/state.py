"""Run state and result models for the cleanup engine.

``RunState`` holds the three counters of a single invocation. It is
created by the mode controller and handed by reference to the prober and
reclaimer, which are the only writers. The remaining types describe the
result of probing or reclaiming one catalog entry.
"""

from dataclasses import dataclass, field
from enum import Enum

from officecleanup.catalog.models import SectionKey


class RunMode(str, Enum):
    """Top-level mode of an invocation."""

    AUDIT = "audit"
    REMOVE = "remove"


class RemovalOutcome(str, Enum):
    """Result of reclaiming one concrete match.

    Attributes:
        REMOVED: The item is gone.
        PROTECTED_SANDBOX: Deletion failed beneath a sandbox container root.
        FAILED: Deletion failed for any other reason.
        NOT_FOUND: Nothing to do.
    """

    REMOVED = "removed"
    PROTECTED_SANDBOX = "protected"
    FAILED = "failed"
    NOT_FOUND = "not_found"


@dataclass(slots=True)
class RunState:
    """Counters accumulated over one pass.

    Attributes:
        found_count: Items discovered (a glob with N hits adds N).
        removed_count: Filesystem objects, receipts and keychain items deleted.
        protected_count: Filesystem removals blocked by sandbox protection.
    """

    found_count: int = 0
    removed_count: int = 0
    protected_count: int = 0

    def record_found(self, count: int = 1) -> None:
        """Add ``count`` discovered items."""
        self.found_count += count

    def record_removed(self, count: int = 1) -> None:
        """Add ``count`` deleted items."""
        self.removed_count += count

    def record_protected(self) -> None:
        """Add one sandbox-protected item."""
        self.protected_count += 1


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Outcome of checking one catalog entry.

    Attributes:
        exists: Whether at least one match was found.
        matches: Concrete paths, PIDs, receipt ids or keychain identifiers.
    """

    exists: bool
    matches: tuple[str, ...] = ()

    @classmethod
    def of(cls, matches: list[str] | tuple[str, ...]) -> "ProbeResult":
        """Build a result from a (possibly empty) list of matches."""
        return cls(exists=bool(matches), matches=tuple(matches))

    @classmethod
    def missing(cls) -> "ProbeResult":
        """Build a "not found" result."""
        return cls(exists=False)


@dataclass(frozen=True, slots=True)
class ItemReport:
    """One line of a section report.

    Attributes:
        label: Human-readable catalog label.
        match: Concrete path or identifier (None when nothing matched).
        outcome: Removal outcome, or None for audit findings.
        detail: Extra information such as an error message or a count.
        copies: Number of stored items behind this line (recurring keychain
            selectors delete several).
    """

    label: str
    match: str | None
    outcome: RemovalOutcome | None = None
    detail: str | None = None
    copies: int = 1

    @property
    def found(self) -> bool:
        """Whether this line reports an existing item."""
        return self.match is not None and self.outcome != RemovalOutcome.NOT_FOUND


@dataclass(slots=True)
class SectionReport:
    """Everything that happened in one catalog section.

    Attributes:
        key: Section identifier.
        title: Section heading.
        items: Reported lines in execution order.
    """

    key: SectionKey
    title: str
    items: list[ItemReport] = field(default_factory=list)

    def count(self, outcome: RemovalOutcome) -> int:
        """Count lines with the given outcome."""
        return sum(1 for item in self.items if item.outcome == outcome)

    @property
    def found_items(self) -> list[ItemReport]:
        """Lines that report an existing item."""
        return [item for item in self.items if item.found]
