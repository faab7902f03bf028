"""Command runners"""

from retrycmd.infrastructure.runner.base import CommandRunner
from retrycmd.infrastructure.runner.scripted import ScriptedRunner
from retrycmd.infrastructure.runner.subprocess_runner import SubprocessRunner

__all__ = ["CommandRunner", "ScriptedRunner", "SubprocessRunner"]
