"""Loop manager - decides whether and when a failed command is retried"""

from __future__ import annotations

from typing import Optional

from retrycmd.domain.config.loop import LoopConfig
from retrycmd.domain.errors import ClockError, MaximumIterationsReached, TimeoutExceeded
from retrycmd.infrastructure.clock import Clock, default_clock


class LoopManager:
    """Tracks elapsed time and iterations of a retry loop.

    One manager lives for one run of the loop. ``step()`` is called after each
    failed attempt and either advances the iteration count or raises a stop
    condition; ``interval()`` then tells the caller how long to sleep.

    The wait before retry k follows a linear schedule anchored at the start
    time (``interval * k`` seconds after start), so time spent running the
    command itself is absorbed rather than added on top.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
        maximum_iterations: Optional[int] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize loop manager and capture the start time

        Args:
            timeout: Seconds after which step() raises TimeoutExceeded
            interval: Base interval in seconds for the linear wait schedule
            maximum_iterations: step() raises MaximumIterationsReached once
                iteration + 1 reaches this count
            clock: Time source (SystemClock if None)
        """
        self._clock = default_clock(clock)
        self._start_time = self._clock.now()
        self.timeout = timeout
        self._interval = interval
        self.maximum_iterations = maximum_iterations
        self._iteration = 0

    @classmethod
    def from_config(cls, config: LoopConfig, clock: Optional[Clock] = None) -> "LoopManager":
        """Create a loop manager from validated loop configuration"""
        return cls(
            timeout=config.timeout,
            interval=config.interval,
            maximum_iterations=config.maximum_iterations,
            clock=clock,
        )

    @property
    def start_time(self) -> float:
        return self._start_time

    @property
    def iteration(self) -> int:
        return self._iteration

    def elapsed(self) -> float:
        """Seconds since the loop started

        Raises:
            ClockError: If the clock now reads earlier than the start time
        """
        elapsed = self._clock.now() - self._start_time
        if elapsed < 0:
            raise ClockError(
                f"System clock moved backwards by {-elapsed:.3f}s since the loop started"
            )
        return elapsed

    def step(self) -> None:
        """Advance to the next iteration after a failed attempt

        Raises:
            TimeoutExceeded: If elapsed time has reached the timeout
            MaximumIterationsReached: If iteration + 1 has reached the maximum
            ClockError: If elapsed time cannot be computed
        """
        if self.timeout is not None:
            if not self.elapsed() < self.timeout:
                raise TimeoutExceeded(self.status())

        # Allows maximum_iterations - 1 increments, so the command runs at
        # most maximum_iterations times (once when the bound is 0 or 1).
        if self.maximum_iterations is not None:
            if not self._iteration + 1 < self.maximum_iterations:
                raise MaximumIterationsReached(self._status_or_none())

        self._iteration += 1

    def interval(self) -> float:
        """Seconds to sleep before the next attempt (never negative)"""
        if self._interval is None:
            return 0.0
        scheduled = self._interval * self._iteration
        return max(0.0, scheduled - self.elapsed())

    def status(self) -> str:
        """Human-readable snapshot of elapsed time and iteration"""
        return f"Elapsed time: {self.elapsed():.3f}s; Iteration: {self._iteration}"

    def _status_or_none(self) -> Optional[str]:
        try:
            return self.status()
        except ClockError:
            return None

    def __repr__(self) -> str:
        return (
            f"LoopManager(start_time={self._start_time!r}, timeout={self.timeout!r}, "
            f"interval={self._interval!r}, maximum_iterations={self.maximum_iterations!r}, "
            f"iteration={self._iteration!r})"
        )
