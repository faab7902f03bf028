"""Time sources for the retry loop"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import List, Optional


class Clock(ABC):
    """Abstract time source: wall-clock reading plus blocking sleep"""

    @abstractmethod
    def now(self) -> float:
        """Current wall-clock time in seconds"""
        pass

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block for the given number of seconds"""
        pass


class SystemClock(Clock):
    """Clock backed by the operating system.

    Uses wall-clock time rather than a monotonic counter so a clock that
    jumps backwards can be detected and reported.
    """

    def now(self) -> float:
        return time.time()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


class ManualClock(Clock):
    """Deterministic clock for tests and dry runs.

    Time only moves when ``advance``, ``set`` or ``sleep`` is called.
    Every sleep request is recorded in ``sleeps``.
    """

    def __init__(self, start: float = 0.0):
        """Initialize manual clock

        Args:
            start: Initial reading in seconds
        """
        self._now = start
        self.sleeps: List[float] = []

    def now(self) -> float:
        return self._now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.advance(seconds)

    def advance(self, seconds: float) -> None:
        """Move the clock forward"""
        if seconds < 0:
            raise ValueError("Use set() to move the clock backwards")
        self._now += seconds

    def set(self, instant: float) -> None:
        """Set the clock to an arbitrary reading, backwards included"""
        self._now = instant

    @property
    def total_slept(self) -> float:
        return sum(self.sleeps)


def default_clock(clock: Optional[Clock] = None) -> Clock:
    """Return the given clock or a SystemClock"""
    return clock if clock is not None else SystemClock()
