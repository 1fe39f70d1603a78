"""The Microsoft Office target catalog.

Every location Microsoft Office, Teams, OneDrive and AutoUpdate are known
to leave behind on macOS, grouped into sections. Section order is the
execution order for both audit and removal: processes are stopped before
anything is deleted, and launchd descriptors carry ``unload_service`` so
they are unloaded before their plist is removed.

Adding a new artifact means appending one ``TargetEntry`` below.
"""

from officecleanup.catalog.models import CatalogSection, SectionKey, TargetEntry, TargetKind

# Team identifier prefix of Office group containers and app scripts
OFFICE_TEAM_ID = "UBF8T346G9"


def _path(locator: str, label: str, **flags: bool) -> TargetEntry:
    return TargetEntry(TargetKind.EXACT_PATH, locator, label, **flags)


def _glob(locator: str, label: str, **flags: bool) -> TargetEntry:
    return TargetEntry(TargetKind.GLOB_PATTERN, locator, label, **flags)


def _process(name: str) -> TargetEntry:
    return TargetEntry(TargetKind.PROCESS_NAME_PATTERN, name, name)


def _app(name: str) -> TargetEntry:
    return _path(f"/Applications/{name}.app", f"{name}.app", requires_elevation=True)


PROCESSES = CatalogSection(
    key=SectionKey.PROCESSES,
    title="Running Microsoft Processes",
    counted=False,
    entries=tuple(
        _process(name)
        for name in (
            "Microsoft Word",
            "Microsoft Excel",
            "Microsoft PowerPoint",
            "Microsoft Outlook",
            "Microsoft OneNote",
            "Microsoft Teams",
            "Teams",
            "OneDrive",
            "Microsoft AutoUpdate",
            "Microsoft Update Assistant",
        )
    ),
)

APPLICATIONS = CatalogSection(
    key=SectionKey.APPLICATIONS,
    title="Applications (/Applications)",
    entries=tuple(
        _app(name)
        for name in (
            "Microsoft Word",
            "Microsoft Excel",
            "Microsoft PowerPoint",
            "Microsoft Outlook",
            "Microsoft OneNote",
            "Microsoft Teams",
            "Microsoft Teams classic",
            "OneDrive",
            "Microsoft AutoUpdate",
            "Windows App",
            "Microsoft Remote Desktop",
        )
    ),
)

USER_CONTAINERS = CatalogSection(
    key=SectionKey.USER_CONTAINERS,
    title="User Containers (~/Library/Containers)",
    entries=(
        _glob("~/Library/Containers/com.microsoft.*", "Microsoft containers", is_sandbox_candidate=True),
        _glob("~/Library/Containers/Microsoft *", "Microsoft containers", is_sandbox_candidate=True),
    ),
)

GROUP_CONTAINERS = CatalogSection(
    key=SectionKey.GROUP_CONTAINERS,
    title="Group Containers (~/Library/Group Containers)",
    entries=(
        _glob(
            f"~/Library/Group Containers/{OFFICE_TEAM_ID}.*",
            "Office group containers",
            is_sandbox_candidate=True,
        ),
    ),
)

APPLICATION_SCRIPTS = CatalogSection(
    key=SectionKey.APPLICATION_SCRIPTS,
    title="Application Scripts (~/Library/Application Scripts)",
    entries=(
        _glob(
            "~/Library/Application Scripts/com.microsoft.*",
            "Microsoft application scripts",
        ),
        _glob(
            f"~/Library/Application Scripts/{OFFICE_TEAM_ID}.*",
            "Office application scripts",
        ),
    ),
)

USER_PREFERENCES = CatalogSection(
    key=SectionKey.USER_PREFERENCES,
    title="User Preferences (~/Library/Preferences)",
    entries=(_glob("~/Library/Preferences/com.microsoft.*", "Microsoft preferences"),),
)

SYSTEM_PREFERENCES = CatalogSection(
    key=SectionKey.SYSTEM_PREFERENCES,
    title="System Preferences (/Library/Preferences)",
    entries=(
        _glob(
            "/Library/Preferences/com.microsoft.*",
            "Microsoft system preferences",
            requires_elevation=True,
        ),
    ),
)

USER_CACHES = CatalogSection(
    key=SectionKey.USER_CACHES,
    title="User Caches (~/Library/Caches)",
    entries=(
        _glob("~/Library/Caches/com.microsoft.*", "Microsoft caches"),
        _glob("~/Library/Caches/Microsoft*", "Microsoft caches"),
    ),
)

USER_APPLICATION_SUPPORT = CatalogSection(
    key=SectionKey.USER_APPLICATION_SUPPORT,
    title="User Application Support (~/Library/Application Support)",
    entries=(
        _path("~/Library/Application Support/Microsoft", "Microsoft"),
        _path("~/Library/Application Support/com.microsoft.teams", "com.microsoft.teams"),
        _path("~/Library/Application Support/OneDrive", "OneDrive"),
    ),
)

SYSTEM_APPLICATION_SUPPORT = CatalogSection(
    key=SectionKey.SYSTEM_APPLICATION_SUPPORT,
    title="System Application Support (/Library/Application Support)",
    entries=(
        _path("/Library/Application Support/Microsoft", "Microsoft", requires_elevation=True),
    ),
)

USER_BACKGROUND_AGENTS = CatalogSection(
    key=SectionKey.USER_BACKGROUND_AGENTS,
    title="User LaunchAgents (~/Library/LaunchAgents)",
    entries=(
        _glob("~/Library/LaunchAgents/com.microsoft.*", "Microsoft launch agents", unload_service=True),
    ),
)

SYSTEM_BACKGROUND_AGENTS = CatalogSection(
    key=SectionKey.SYSTEM_BACKGROUND_AGENTS,
    title="System LaunchAgents (/Library/LaunchAgents)",
    entries=(
        _glob(
            "/Library/LaunchAgents/com.microsoft.*",
            "Microsoft system launch agents",
            requires_elevation=True,
            unload_service=True,
        ),
    ),
)

SYSTEM_BACKGROUND_DAEMONS = CatalogSection(
    key=SectionKey.SYSTEM_BACKGROUND_DAEMONS,
    title="System LaunchDaemons (/Library/LaunchDaemons)",
    entries=(
        _glob(
            "/Library/LaunchDaemons/com.microsoft.*",
            "Microsoft launch daemons",
            requires_elevation=True,
            unload_service=True,
        ),
    ),
)

PRIVILEGED_HELPERS = CatalogSection(
    key=SectionKey.PRIVILEGED_HELPERS,
    title="Privileged Helper Tools (/Library/PrivilegedHelperTools)",
    entries=(
        _glob(
            "/Library/PrivilegedHelperTools/com.microsoft.*",
            "Microsoft helper tools",
            requires_elevation=True,
        ),
    ),
)

FONTS = CatalogSection(
    key=SectionKey.FONTS,
    title="Microsoft Fonts (/Library/Fonts/Microsoft)",
    entries=(_path("/Library/Fonts/Microsoft", "Microsoft Fonts folder", requires_elevation=True),),
)

PACKAGE_RECEIPTS = CatalogSection(
    key=SectionKey.PACKAGE_RECEIPTS,
    title="Package Receipts (pkgutil)",
    entries=(
        TargetEntry(
            TargetKind.PACKAGE_RECEIPT_PATTERN,
            "com.microsoft",
            "Microsoft package receipts",
            requires_elevation=True,
        ),
    ),
)

IDENTITY_CACHE = CatalogSection(
    key=SectionKey.IDENTITY_CACHE,
    title="Identity Cache (Azure AD tokens)",
    entries=(
        _path("~/Library/Application Support/Microsoft/OneAuth", "OneAuth cache"),
        _path("~/Library/Application Support/Microsoft/IdentityCache", "IdentityCache"),
        _path(
            "~/Library/Saved Application State/com.microsoft.teams.savedState",
            "Teams saved state",
        ),
        _path("~/Library/HTTPStorages/com.microsoft.teams", "Teams HTTP storage"),
    ),
)

CREDENTIAL_ENTRIES = CatalogSection(
    key=SectionKey.CREDENTIAL_ENTRIES,
    title="Keychain Entries",
    entries=(
        TargetEntry(
            TargetKind.CREDENTIAL_SERVICE,
            "Microsoft Teams Safe Storage",
            "Microsoft Teams Safe Storage",
        ),
        TargetEntry(
            TargetKind.CREDENTIAL_SERVICE,
            "OneAuthAccount",
            "OneAuthAccount (Azure AD tokens)",
            recurring=True,
        ),
        TargetEntry(TargetKind.CREDENTIAL_SERVICE, "com.microsoft.adalcache", "com.microsoft.adalcache"),
        TargetEntry(
            TargetKind.CREDENTIAL_SERVICE,
            "com.microsoft.onedrive.cookies",
            "com.microsoft.onedrive.cookies",
        ),
        TargetEntry(TargetKind.CREDENTIAL_SERVICE, "MSOpenTech.ADAL.1", "ADAL token cache"),
        TargetEntry(
            TargetKind.CREDENTIAL_ACCOUNT,
            "com.helpshift.data_com.microsoft.Outlook",
            "Outlook Helpshift data",
        ),
        TargetEntry(
            TargetKind.CREDENTIAL_LABEL_PREFIX,
            "Microsoft Office Identities",
            "Office identity caches",
        ),
        TargetEntry(
            TargetKind.CREDENTIAL_LABEL_PREFIX,
            "MicrosoftOfficeRMSCreds",
            "Office rights management credentials",
        ),
    ),
)

BROWSER_DATA = CatalogSection(
    key=SectionKey.BROWSER_DATA,
    title="Embedded Browser Data (WebKit, cookies)",
    entries=(
        _glob("~/Library/WebKit/com.microsoft.*", "Microsoft WebKit data"),
        _glob("~/Library/Cookies/com.microsoft.*", "Microsoft cookies"),
    ),
)

CATALOG: tuple[CatalogSection, ...] = (
    PROCESSES,
    APPLICATIONS,
    USER_CONTAINERS,
    GROUP_CONTAINERS,
    APPLICATION_SCRIPTS,
    USER_PREFERENCES,
    SYSTEM_PREFERENCES,
    USER_CACHES,
    USER_APPLICATION_SUPPORT,
    SYSTEM_APPLICATION_SUPPORT,
    USER_BACKGROUND_AGENTS,
    SYSTEM_BACKGROUND_AGENTS,
    SYSTEM_BACKGROUND_DAEMONS,
    PRIVILEGED_HELPERS,
    FONTS,
    PACKAGE_RECEIPTS,
    IDENTITY_CACHE,
    CREDENTIAL_ENTRIES,
    BROWSER_DATA,
)


def validate_catalog(sections: tuple[CatalogSection, ...]) -> None:
    """Check catalog-wide invariants.

    Args:
        sections: Catalog to validate.

    Raises:
        ValueError: If two entries share a (kind, locator) pair or two
            sections share a key.
    """
    seen_sections: set[SectionKey] = set()
    seen_entries: set[tuple[TargetKind, str]] = set()

    for section in sections:
        if section.key in seen_sections:
            msg = f"Duplicate catalog section: {section.key.value}"
            raise ValueError(msg)
        seen_sections.add(section.key)

        for entry in section.entries:
            if entry.key in seen_entries:
                msg = f"Duplicate catalog entry: {entry.kind.value} {entry.locator!r}"
                raise ValueError(msg)
            seen_entries.add(entry.key)


def get_catalog() -> tuple[CatalogSection, ...]:
    """Return the validated Microsoft Office catalog."""
    validate_catalog(CATALOG)
    return CATALOG
