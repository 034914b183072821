"""Time source for the store: UTC epoch nanoseconds, never going backwards."""

import threading
import time
from typing import Protocol

NS_PER_SECOND = 1_000_000_000
NS_PER_DAY = 86_400 * NS_PER_SECOND


class Clock(Protocol):
    """Anything that can report the current time in epoch nanoseconds."""

    def now_ns(self) -> int: ...


class SystemClock:
    """Wall clock clamped so successive readings are non-decreasing."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def now_ns(self) -> int:
        with self._lock:
            self._last = max(self._last, time.time_ns())
            return self._last


system_clock = SystemClock()
