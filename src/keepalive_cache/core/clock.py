"""
Time sources for the cache, in milliseconds since epoch.
Why: liveness must be testable without sleeping; the cache never reads the wall clock directly.
"""

import threading
import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        ...


class SystemClock:
    def now(self) -> int:
        return int(time.time() * 1000)


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: int = 0) -> None:
        self._now = start
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            return self._now

    def advance(self, millis: int) -> None:
        with self._lock:
            self._now += millis

    def set(self, millis: int) -> None:
        with self._lock:
            self._now = millis


SYSTEM_CLOCK = SystemClock()
