"""Errors raised while retrying a command"""

from typing import Optional


class RetryError(Exception):
    """Base class for every failure the retry loop reports"""

    pass


class StopConditionReached(RetryError):
    """A configured bound was hit; the loop must stop for good.

    Attributes:
        status: Loop manager status line at the moment the bound was hit
    """

    message = "Retrying command stopped"

    def __init__(self, status: Optional[str] = None):
        self.status = status
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.status:
            return f"{self.message} ({self.status})"
        return self.message


class TimeoutExceeded(StopConditionReached):
    message = "Retrying command did not succeed due to timeout"


class MaximumIterationsReached(StopConditionReached):
    message = "Retrying command reached maximum iterations"


class ClockError(RetryError):
    """System clock reported a time before the loop started"""

    pass


class SpawnError(RetryError):
    """The target executable could not be launched"""

    def __init__(self, executable: str, reason: Optional[OSError] = None):
        self.executable = executable
        self.reason = reason
        detail = reason.strerror if reason is not None and reason.strerror else str(reason or "")
        message = f"Failed to run '{executable}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)
