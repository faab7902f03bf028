"""RetryResult model - represents a command that eventually succeeded"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class RetryResult:
    """Result of a successful retry loop"""

    attempts: int  # Number of times the command was run
    iterations: int  # Loop manager iteration count when the command succeeded
    elapsed: Optional[float]  # Seconds since the loop started (None if the clock moved backwards)

    @property
    def retried(self) -> bool:
        """Check if the command needed more than one attempt"""
        return self.attempts > 1

    def summary(self) -> str:
        """One-line summary of the run"""
        noun = "attempt" if self.attempts == 1 else "attempts"
        if self.elapsed is None:
            return f"Command succeeded after {self.attempts} {noun}"
        return f"Command succeeded after {self.attempts} {noun} in {self.elapsed:.2f}s"
