"""Configuration models with Pydantic validation."""

from retrycmd.domain.config.app import AppConfig
from retrycmd.domain.config.logs import LoggingConfig
from retrycmd.domain.config.loop import LoopConfig

__all__ = [
    "AppConfig",
    "LoopConfig",
    "LoggingConfig",
]
