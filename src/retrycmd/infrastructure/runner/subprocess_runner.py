"""Command runner that spawns real processes"""

import logging
import subprocess
from typing import Sequence

from retrycmd.domain.errors import SpawnError
from retrycmd.domain.models.exit_status import ExitStatus
from retrycmd.infrastructure.runner.base import CommandRunner

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunner):
    """Runs commands with subprocess, inheriting stdin, stdout and stderr"""

    def run(self, executable: str, args: Sequence[str]) -> ExitStatus:
        argv = [executable, *args]
        logger.debug(f"Spawning: {argv}")
        try:
            completed = subprocess.run(argv, check=False)
        except OSError as e:
            raise SpawnError(executable, e) from e
        return ExitStatus.from_returncode(completed.returncode)
