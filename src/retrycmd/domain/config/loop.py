"""Loop bounds configuration model."""

from typing import Optional

from pydantic import BaseModel, Field


class LoopConfig(BaseModel):
    """Configuration for the retry loop bounds.

    Every bound is optional; with none set the command is retried forever
    without waiting between attempts.

    Attributes:
        timeout: Stop once this many seconds have elapsed (None = no timeout)
        interval: Base interval in seconds; wait before retry k is interval * k
        maximum_iterations: Stop once iteration + 1 reaches this count
    """

    timeout: Optional[float] = Field(None, ge=0.0)
    interval: Optional[float] = Field(None, ge=0.0)
    maximum_iterations: Optional[int] = Field(None, ge=0)
