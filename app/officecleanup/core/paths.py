"""Path management for officecleanup.

Two concerns live here: the XDG-compliant location of officecleanup's own
configuration, and the resolution of catalog locators (``~/...`` and
``/...``) against a home directory and a filesystem root.

XDG defaults:
- Config: ~/.config/officecleanup/
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "officecleanup"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/officecleanup/ (or XDG_CONFIG_HOME/officecleanup/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/officecleanup/theme.toml
    """
    return get_config_dir() / "theme.toml"


# =============================================================================
# Catalog locator resolution
# =============================================================================

# Directories whose children are guarded by the macOS sandbox (containermanagerd)
CONTAINER_ROOTS: tuple[str, ...] = (
    "~/Library/Containers",
    "~/Library/Group Containers",
)

# Path segments that mark a container regardless of the owning home directory
_CONTAINER_SEGMENTS: tuple[str, ...] = (
    "/Containers/",
    "/Group Containers/",
)


@dataclass(frozen=True, slots=True)
class PathResolver:
    """Maps catalog locators onto concrete filesystem paths.

    Home-relative locators (``~/Library/Caches``) are anchored at ``home``;
    absolute locators (``/Library/Fonts``) are anchored at ``root``. Both
    default to the real system locations and can be redirected to a
    fixture tree.

    Attributes:
        home: Directory substituted for ``~``.
        root: Directory substituted for ``/``.
    """

    home: Path = field(default_factory=Path.home)
    root: Path = Path("/")

    def resolve(self, locator: str) -> Path:
        """Resolve a catalog locator to an absolute path.

        Args:
            locator: Locator starting with ``~/`` or ``/``.

        Returns:
            Concrete filesystem path.

        Raises:
            ValueError: If the locator is neither home-relative nor absolute.
        """
        if locator == "~":
            return self.home
        if locator.startswith("~/"):
            return self.home / locator[2:]
        if locator.startswith("/"):
            return self.root / locator.lstrip("/")
        msg = f"Locator must start with '~/' or '/': {locator!r}"
        raise ValueError(msg)

    def container_roots(self) -> tuple[Path, ...]:
        """Return the resolved sandbox container root directories."""
        return tuple(self.resolve(root) for root in CONTAINER_ROOTS)

    def is_under_container(self, path: Path) -> bool:
        """Check whether a path lies beneath a sandbox container root.

        Args:
            path: Concrete filesystem path.

        Returns:
            True if the path is inside a user or group container directory.
        """
        for container_root in self.container_roots():
            if path != container_root and path.is_relative_to(container_root):
                return True
        text = str(path)
        return any(segment in text for segment in _CONTAINER_SEGMENTS)
