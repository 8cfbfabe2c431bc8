"""Time sources for the timeline driver.

The driver never sleeps on its own; it asks a clock to advance to the next
phase offset. ``SystemClock`` really waits, ``VirtualClock`` jumps forward
at once so whole runs can be simulated (and tested) instantly.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float: ...

    def sleep_until(self, deadline: float) -> None: ...


class SystemClock:
    """Monotonic wall time."""

    def now(self) -> float:
        return time.monotonic()

    def sleep_until(self, deadline: float) -> None:
        remaining = deadline - time.monotonic()
        if remaining > 0:
            time.sleep(remaining)


class VirtualClock:
    """Simulated time that advances only when asked to."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self.advances: list[float] = []

    def now(self) -> float:
        return self._now

    def sleep_until(self, deadline: float) -> None:
        if deadline > self._now:
            self.advances.append(deadline - self._now)
            self._now = deadline

    def advance(self, seconds: float) -> None:
        self.sleep_until(self._now + seconds)


def local_now() -> datetime:
    """Return the current local time; the event log stamps lines with it."""
    return datetime.now()
