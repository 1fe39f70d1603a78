"""Host operating system detection."""

import platform

# platform.system() value for macOS
SUPPORTED_SYSTEM = "Darwin"


def current_system() -> str:
    """Return the kernel name reported by the host (e.g. "Darwin", "Linux")."""
    return platform.system()


def is_supported_host() -> bool:
    """Check whether officecleanup can run on this machine.

    Every catalog location and every OS tool the services call into
    (``security``, ``pkgutil``, ``launchctl``) is macOS-specific.

    Returns:
        True on macOS, False otherwise.
    """
    return current_system() == SUPPORTED_SYSTEM
