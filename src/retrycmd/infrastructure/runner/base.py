"""Base command runner interface"""

from abc import ABC, abstractmethod
from typing import Sequence

from retrycmd.domain.models.exit_status import ExitStatus


class CommandRunner(ABC):
    """Abstract base class for command runners"""

    @abstractmethod
    def run(self, executable: str, args: Sequence[str]) -> ExitStatus:
        """Run a command to completion

        Args:
            executable: Program name or path
            args: Arguments passed to the program

        Returns:
            How the command ended

        Raises:
            SpawnError: If the program could not be started
        """
        pass
