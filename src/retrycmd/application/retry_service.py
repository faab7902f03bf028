"""Retry service - runs a command until it succeeds or a bound is hit"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from retrycmd.domain.config.loop import LoopConfig
from retrycmd.domain.errors import ClockError
from retrycmd.domain.loop_manager import LoopManager
from retrycmd.domain.models.retry_result import RetryResult
from retrycmd.infrastructure.clock import Clock, default_clock
from retrycmd.infrastructure.runner.base import CommandRunner

logger = logging.getLogger(__name__)


class RetryService:
    """Service driving the retry loop"""

    def __init__(self, runner: CommandRunner, clock: Optional[Clock] = None):
        """Initialize retry service

        Args:
            runner: Runs one attempt of the command
            clock: Time source shared with the loop manager (SystemClock if None)
        """
        self.runner = runner
        self.clock = default_clock(clock)

    def run(self, command: Sequence[str], config: LoopConfig) -> RetryResult:
        """Run the command until it exits successfully

        Args:
            command: Executable followed by its arguments
            config: Loop bounds

        Returns:
            Result describing the successful run

        Raises:
            ValueError: If the command is empty
            SpawnError: If the executable could not be started (never retried)
            TimeoutExceeded: If the timeout was reached
            MaximumIterationsReached: If the iteration bound was reached
            ClockError: If the system clock moved backwards
        """
        if not command:
            raise ValueError("No command given")
        executable, args = command[0], list(command[1:])

        loop_manager = LoopManager.from_config(config, clock=self.clock)
        logger.debug(f"Loop manager initialized: {loop_manager!r}")

        attempts = 0
        while True:
            attempts += 1
            status = self.runner.run(executable, args)
            if status.success:
                result = RetryResult(
                    attempts=attempts,
                    iterations=loop_manager.iteration,
                    elapsed=self._elapsed_or_none(loop_manager),
                )
                logger.info(result.summary())
                return result

            logger.info(f"Attempt {attempts} of '{executable}' failed: {status.describe()}")
            loop_manager.step()
            # status() reads the clock, so only build it when it will be logged
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Loop manager status: {loop_manager.status()}")

            delay = loop_manager.interval()
            if delay > 0:
                logger.debug(f"Sleeping {delay:.3f}s before next attempt")
                self.clock.sleep(delay)

    @staticmethod
    def _elapsed_or_none(loop_manager: LoopManager) -> Optional[float]:
        """Elapsed time for reporting; a rewound clock must not fail a successful run"""
        try:
            return loop_manager.elapsed()
        except ClockError as e:
            logger.warning(f"Cannot report elapsed time: {e}")
            return None
