"""Periodic + visibility-driven refresh on a background thread."""

import threading

from .config import AUTO_REFRESH_INTERVAL
from .log import get_logger
from .session import NewsSession


class RefreshScheduler:
    """Calls session.load() every `interval` seconds while the board is visible.

    Regaining visibility triggers session.check_and_refresh(). Errors from a
    scheduled load are logged; the next tick is the retry.
    """

    def __init__(self, session: NewsSession, interval: float = AUTO_REFRESH_INTERVAL):
        self.session = session
        self.interval = interval
        self.visible = True
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="newsboard-refresh", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self):
        while not self._stop.wait(self.interval):
            self.tick()

    def tick(self):
        """One interval: load (cached when fresh) unless hidden."""
        if not self.visible:
            return None
        return self._guarded(self.session.load)

    def set_visible(self, visible: bool):
        was_visible, self.visible = self.visible, visible
        if visible and not was_visible:
            return self._guarded(self.session.check_and_refresh)
        return None

    def _guarded(self, call):
        try:
            return call()
        except Exception as e:
            get_logger().error("Scheduled refresh failed: %s", e)
            return None
