"""Configuration manager for loading and validating .retry.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from retrycmd.domain.config import AppConfig, LoggingConfig, LoopConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".retry.yml"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "RETRY_TIMEOUT": ("loop", "timeout"),
    "RETRY_INTERVAL": ("loop", "interval"),
    "RETRY_MAXIMUM_ITERATIONS": ("loop", "maximum_iterations"),
    "RETRY_VERBOSITY": ("logging", "verbosity"),
}


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


def _format_validation_error(error: ValidationError) -> str:
    errors = []
    for item in error.errors():
        field = ".".join(str(x) for x in item["loc"])
        errors.append(f"  - {field}: {item['msg']}")
    return "Configuration validation failed:\n" + "\n".join(errors)


class ConfigManager:
    """Manages configuration from .retry.yml and environment variables

    Loads configuration with validation using Pydantic models. Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .retry.yml file (searched from current directory upwards)
    3. Environment variables (RETRY_*)
    4. CLI arguments (passed to loop_config())
    """

    DEFAULT_CONFIG = {
        "loop": {
            "timeout": None,
            "interval": None,
            "maximum_iterations": None,
        },
        "logging": {
            "verbosity": 0,
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to .retry.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If the file cannot be read or validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            raise ConfigurationError(_format_validation_error(e)) from e

    def _find_config_file(self) -> Optional[Path]:
        """Find .retry.yml starting from current directory

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.is_file():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and environment, then validate

        Raises:
            ValidationError: If configuration is invalid
            ConfigurationError: If the file is unreadable or not a mapping
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path is not None:
            file_config = self._read_file(self.config_path)
            config_dict = self._merge_config(config_dict, file_config)
            logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)
        return AppConfig(**config_dict)

    def _read_file(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return file_config

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries"""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply RETRY_* environment variable overrides

        Values stay strings here; Pydantic coerces them to numbers.
        """
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                logger.debug(f"Using {env_name}={value!r}")
                config.setdefault(section, {})[key] = value
        return config

    def get_loop_config(self) -> LoopConfig:
        """Get loop bounds configuration"""
        return self.config.loop

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration"""
        return self.config.logging

    def loop_config(self, **overrides: Any) -> LoopConfig:
        """Loop configuration with CLI overrides applied

        Args:
            **overrides: LoopConfig fields; None values are ignored

        Returns:
            Validated LoopConfig

        Raises:
            ConfigurationError: If an override is invalid
        """
        values = self.get_loop_config().model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return LoopConfig(**values)
        except ValidationError as e:
            raise ConfigurationError(_format_validation_error(e)) from e
