"""Error taxonomy for the cleanup engine.

Only ``NotApplicableOS`` and ``ElevationDenied`` end a run. Missing items,
sandbox protection and per-item deletion failures are reported as
``RemovalOutcome`` values instead of exceptions.
"""


class CleanupError(Exception):
    """Base class for officecleanup errors."""


class NotApplicableOS(CleanupError):
    """The host is not running macOS."""


class ElevationDenied(CleanupError):
    """Administrator privileges could not be obtained."""


class CollaboratorUnavailable(CleanupError, RuntimeError):
    """An OS tool behind a service could not be queried.

    Raised by service queries when the underlying command is missing,
    times out or cannot be executed. Callers treat it as "no matches".
    """
