"""Background refresh of elevated privileges during a removal pass."""

import logging
import threading
from types import TracebackType

from officecleanup.services.base import PrivilegeService

logger = logging.getLogger(__name__)

# sudo's default timestamp timeout is five minutes
DEFAULT_REFRESH_INTERVAL: float = 50.0


class PrivilegeKeepAlive:
    """Periodically refreshes elevation until stopped.

    Used as a context manager around the removal pass so the refresher is
    stopped however the pass ends.

    Args:
        privileges: Service whose ``refresh`` is called.
        interval: Seconds between refreshes.

    Example:
        >>> with PrivilegeKeepAlive(services.privileges):
        ...     reclaim_everything()
    """

    def __init__(self, privileges: PrivilegeService, interval: float = DEFAULT_REFRESH_INTERVAL) -> None:
        self._privileges = privileges
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        """Whether the refresher thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the refresher thread (no-op if already running)."""
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="privilege-keepalive", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the refresher thread and wait for it to exit."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self._interval + 5.0)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self._privileges.refresh()
            except Exception as e:  # noqa: BLE001
                logger.debug("Privilege refresh failed: %s", e)

    def __enter__(self) -> "PrivilegeKeepAlive":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
