"""Catalog domain models.

This module defines the immutable records that make up the target
catalog: the kind of location an entry describes, the entry itself, and
the named sections entries are grouped into.
"""

from dataclasses import dataclass
from enum import Enum

# Characters that turn a path component into a glob pattern
GLOB_CHARS: frozenset[str] = frozenset("*?[")


class TargetKind(str, Enum):
    """Kind of location a catalog entry points at.

    Attributes:
        EXACT_PATH: A single file or directory.
        GLOB_PATTERN: Entries of one directory matching a name pattern.
        PROCESS_NAME_PATTERN: Running processes whose command line contains a substring.
        PACKAGE_RECEIPT_PATTERN: Installer receipts whose identifier contains a substring.
        CREDENTIAL_SERVICE: Keychain items with an exact service name.
        CREDENTIAL_ACCOUNT: Keychain items with an exact account name.
        CREDENTIAL_LABEL_PREFIX: Keychain items whose label starts with a prefix.
    """

    EXACT_PATH = "exact_path"
    GLOB_PATTERN = "glob_pattern"
    PROCESS_NAME_PATTERN = "process_name_pattern"
    PACKAGE_RECEIPT_PATTERN = "package_receipt_pattern"
    CREDENTIAL_SERVICE = "credential_service"
    CREDENTIAL_ACCOUNT = "credential_account"
    CREDENTIAL_LABEL_PREFIX = "credential_label_prefix"

    @property
    def is_path(self) -> bool:
        """Check if this kind addresses the filesystem."""
        return self in (TargetKind.EXACT_PATH, TargetKind.GLOB_PATTERN)

    @property
    def is_credential(self) -> bool:
        """Check if this kind addresses the credential store."""
        return self in (
            TargetKind.CREDENTIAL_SERVICE,
            TargetKind.CREDENTIAL_ACCOUNT,
            TargetKind.CREDENTIAL_LABEL_PREFIX,
        )


class SectionKey(str, Enum):
    """Catalog sections, declared in execution order."""

    PROCESSES = "processes"
    APPLICATIONS = "applications"
    USER_CONTAINERS = "user_containers"
    GROUP_CONTAINERS = "group_containers"
    APPLICATION_SCRIPTS = "application_scripts"
    USER_PREFERENCES = "user_preferences"
    SYSTEM_PREFERENCES = "system_preferences"
    USER_CACHES = "user_caches"
    USER_APPLICATION_SUPPORT = "user_application_support"
    SYSTEM_APPLICATION_SUPPORT = "system_application_support"
    USER_BACKGROUND_AGENTS = "user_background_agents"
    SYSTEM_BACKGROUND_AGENTS = "system_background_agents"
    SYSTEM_BACKGROUND_DAEMONS = "system_background_daemons"
    PRIVILEGED_HELPERS = "privileged_helpers"
    FONTS = "fonts"
    PACKAGE_RECEIPTS = "package_receipts"
    IDENTITY_CACHE = "identity_cache"
    CREDENTIAL_ENTRIES = "credential_entries"
    BROWSER_DATA = "browser_data"


def _has_glob(text: str) -> bool:
    return any(ch in GLOB_CHARS for ch in text)


@dataclass(frozen=True, slots=True)
class TargetEntry:
    """One location the vendor's software may leave behind.

    The locator syntax is checked against the kind at construction time,
    so a malformed catalog fails on import rather than mid-run.

    Attributes:
        kind: What sort of location this is.
        locator: Path, glob pattern, substring or credential selector.
            Path kinds start with ``~/`` or ``/``; a glob pattern may only
            use wildcards in its final component.
        label: Human-readable description shown to the operator.
        requires_elevation: System-scope item that needs admin rights.
        is_sandbox_candidate: Lives under a sandbox container root, so a
            failed removal is classified as sandbox protection.
        unload_service: Background-service descriptor that must be
            unloaded before its file is deleted.
        recurring: Credential selector known to match several items;
            removal deletes repeatedly until the store is exhausted.
    """

    kind: TargetKind
    locator: str
    label: str
    requires_elevation: bool = False
    is_sandbox_candidate: bool = False
    unload_service: bool = False
    recurring: bool = False

    def __post_init__(self) -> None:
        """Validate that the locator matches the entry kind."""
        if not self.locator:
            msg = "Locator cannot be empty"
            raise ValueError(msg)
        if not self.label:
            msg = f"Label cannot be empty for {self.locator!r}"
            raise ValueError(msg)

        if self.kind.is_path:
            if not (self.locator.startswith("~/") or self.locator.startswith("/")):
                msg = f"Path locator must start with '~/' or '/': {self.locator!r}"
                raise ValueError(msg)
            base, _, name = self.locator.rpartition("/")
            if self.kind == TargetKind.EXACT_PATH and _has_glob(self.locator):
                msg = f"Exact path must not contain glob characters: {self.locator!r}"
                raise ValueError(msg)
            if self.kind == TargetKind.GLOB_PATTERN:
                if _has_glob(base):
                    msg = f"Glob wildcards are only allowed in the last component: {self.locator!r}"
                    raise ValueError(msg)
                if not name or not _has_glob(name):
                    msg = f"Glob pattern needs a wildcard in its last component: {self.locator!r}"
                    raise ValueError(msg)
        elif self.unload_service:
            msg = f"Only path entries can be unloaded as services: {self.locator!r}"
            raise ValueError(msg)

        if self.recurring and self.kind not in (
            TargetKind.CREDENTIAL_SERVICE,
            TargetKind.CREDENTIAL_ACCOUNT,
        ):
            msg = f"Only service/account credential entries can recur: {self.locator!r}"
            raise ValueError(msg)

    @property
    def key(self) -> tuple[TargetKind, str]:
        """Identity of the entry within the catalog."""
        return (self.kind, self.locator)

    @property
    def glob_base(self) -> str:
        """Directory locator a glob pattern is matched in."""
        if self.kind != TargetKind.GLOB_PATTERN:
            msg = f"{self.kind.value} entries have no glob base"
            raise ValueError(msg)
        return self.locator.rpartition("/")[0]

    @property
    def glob_name(self) -> str:
        """Name pattern matched against the entries of the glob base."""
        if self.kind != TargetKind.GLOB_PATTERN:
            msg = f"{self.kind.value} entries have no glob name"
            raise ValueError(msg)
        return self.locator.rpartition("/")[2]


@dataclass(frozen=True, slots=True)
class CatalogSection:
    """A named, ordered group of catalog entries.

    Attributes:
        key: Section identifier.
        title: Heading shown to the operator.
        entries: Entries in execution order.
        counted: Whether discovered items add to the found count. Running
            processes are listed but are not leftover artifacts.
    """

    key: SectionKey
    title: str
    entries: tuple[TargetEntry, ...]
    counted: bool = True
