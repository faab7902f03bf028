"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from retrycmd.domain.config.logs import LoggingConfig
from retrycmd.domain.config.loop import LoopConfig


class AppConfig(BaseModel):
    """Main application configuration.

    This is the root configuration model that aggregates all configuration sections.
    Validation is performed at load time to fail fast on configuration errors.

    Attributes:
        loop: Retry loop bounds
        logging: Diagnostic logging configuration
    """

    loop: LoopConfig = Field(default_factory=LoopConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(
        validate_assignment=True,  # Validate on attribute assignment
        extra="forbid",  # Reject unknown fields
        json_schema_extra={
            "example": {
                "loop": {
                    "timeout": 60.0,
                    "interval": 1.0,
                    "maximum_iterations": 10,
                },
                "logging": {
                    "verbosity": 1,
                },
            }
        },
    )
