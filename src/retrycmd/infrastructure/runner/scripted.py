"""Scripted command runner for testing and prototyping"""

from typing import Iterable, List, Optional, Sequence, Tuple, Union

from retrycmd.domain.models.exit_status import ExitStatus
from retrycmd.infrastructure.clock import ManualClock
from retrycmd.infrastructure.runner.base import CommandRunner

ScriptEntry = Union[int, ExitStatus, BaseException]


class ScriptedRunner(CommandRunner):
    """Runner that replays a script of outcomes instead of spawning processes.

    Each call consumes the next entry: an int is an exit code, an ExitStatus is
    returned as is and an exception instance is raised. Once the script runs
    out the last entry repeats forever.
    """

    def __init__(
        self,
        script: Iterable[ScriptEntry],
        clock: Optional[ManualClock] = None,
        duration: float = 0.0,
    ):
        """Initialize scripted runner

        Args:
            script: Outcomes to replay, in order
            clock: Manual clock advanced by ``duration`` on every call
            duration: Simulated run time of each attempt in seconds
        """
        self.script: List[ScriptEntry] = list(script)
        if not self.script:
            raise ValueError("script must contain at least one entry")
        if duration < 0:
            raise ValueError("duration must be non-negative")
        self.clock = clock
        self.duration = duration
        self.calls: List[Tuple[str, Tuple[str, ...]]] = []

    def run(self, executable: str, args: Sequence[str]) -> ExitStatus:
        index = min(len(self.calls), len(self.script) - 1)
        self.calls.append((executable, tuple(args)))
        if self.clock is not None and self.duration:
            self.clock.advance(self.duration)

        entry = self.script[index]
        if isinstance(entry, BaseException):
            raise entry
        if isinstance(entry, ExitStatus):
            return entry
        return ExitStatus(code=entry)

    @property
    def call_count(self) -> int:
        return len(self.calls)
