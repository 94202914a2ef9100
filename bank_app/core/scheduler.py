"""
Prosty harmonogram zadań cyklicznych na wątku w tle.

Zadanie uruchamiane jest o pełnej godzinie w skonfigurowanej strefie czasowej.
Wyjątek rzucony przez zadanie jest logowany i nie zatrzymuje harmonogramu.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)


def seconds_until_next_hour(now: datetime) -> float:
    """
    Zwraca liczbę sekund do najbliższej pełnej godziny.

    Args:
        now: Bieżący czas (świadomy strefy czasowej)

    Returns:
        Sekundy do następnego uruchomienia (zawsze > 0)
    """
    next_run = now.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
    return (next_run - now).total_seconds()


def hourly_in(timezone_name: str) -> Callable[[], float]:
    """Delay function firing on the hour in the given timezone."""
    tz = ZoneInfo(timezone_name)
    return lambda: seconds_until_next_hour(datetime.now(tz))


class RecurringTask:
    """Calls ``action`` repeatedly; ``next_delay`` returns seconds until the next call."""

    def __init__(self, action: Callable[[], object], next_delay: Callable[[], float], name: str = "recurring-task"):
        self.action = action
        self.next_delay = next_delay
        self.name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        """Starts the background thread (no-op when already running)."""
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, daemon=True, name=self.name)
        self._thread.start()
        logger.info("Recurring task started", extra={"task": self.name})

    def stop(self, timeout: float = 5.0):
        """Zatrzymanie harmonogramu (graceful shutdown)."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def run_once(self):
        """Runs the action once; errors are logged, never raised."""
        try:
            self.action()
        except Exception:
            logger.error("Recurring task failed", exc_info=True, extra={"task": self.name})

    def _loop(self):
        while not self._stop.wait(self.next_delay()):
            self.run_once()
