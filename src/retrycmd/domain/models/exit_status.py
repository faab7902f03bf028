"""ExitStatus model - represents how a command attempt ended"""

import signal as signal_module
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExitStatus:
    """Outcome of a single command attempt"""

    code: Optional[int] = None  # Exit code when the process terminated normally
    signal: Optional[int] = None  # Signal number when the process was killed

    def __post_init__(self):
        """Validate exit status data"""
        if (self.code is None) == (self.signal is None):
            raise ValueError("Exactly one of code or signal must be set")

    @classmethod
    def from_returncode(cls, returncode: int) -> "ExitStatus":
        """Build from a subprocess return code (negative means killed by signal)"""
        if returncode < 0:
            return cls(signal=-returncode)
        return cls(code=returncode)

    @property
    def exited_normally(self) -> bool:
        """Check if the process terminated on its own"""
        return self.code is not None

    @property
    def success(self) -> bool:
        """Check if the attempt succeeded (normal exit with code 0)"""
        return self.exited_normally and self.code == 0

    def describe(self) -> str:
        """Human-readable description of the outcome"""
        if self.exited_normally:
            return f"exit code {self.code}"
        try:
            name = signal_module.Signals(self.signal).name
        except ValueError:
            name = str(self.signal)
        return f"killed by signal {name}"
