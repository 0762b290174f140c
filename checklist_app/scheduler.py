from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable

from checklist_app.clock import seconds_until_midnight

logger = logging.getLogger(__name__)

DAY_SECONDS = 24 * 60 * 60


class MidnightScheduler:
    """Runs ``callback`` at the next local midnight, then every 24 hours.

    One daemon thread per session; ``cancel()`` stops it and joins.
    """

    def __init__(self, callback: Callable[[], None], now: Callable[[], datetime], name: str = "midnight"):
        self.callback = callback
        self.now = now
        self.name = name
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def first_delay(self) -> float:
        return seconds_until_midnight(self.now())

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=f"scheduler-{self.name}", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        delay = self.first_delay()
        while not self._stop.wait(delay):
            try:
                self.callback()
            except Exception:
                logger.exception("Midnight task %s failed", self.name)
            delay = DAY_SECONDS

    def cancel(self, timeout: float = 1.0) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
