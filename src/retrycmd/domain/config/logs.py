"""Logging configuration model."""

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Configuration for diagnostic logging.

    Attributes:
        verbosity: 0 = warnings only, 1 = info, 2 and above = debug
    """

    verbosity: int = Field(0, ge=0, le=3)
