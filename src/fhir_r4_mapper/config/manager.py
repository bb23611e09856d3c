"""Configuration manager for loading and managing configuration.

This module provides the main configuration loading functionality, including
support for JSON configuration files, environment variable overrides, and
configuration validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from fhir_r4_mapper.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH
from fhir_r4_mapper.config.schema import Config
from fhir_r4_mapper.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable prefix for all configuration overrides
ENV_PREFIX = "FHIR_MAPPER_"

# (environment suffix, section, field, converter)
ENV_OVERRIDES = [
    ("LOG_LEVEL", "logging", "level", str),
    ("LOG_FILE", "logging", "log_file", str),
    ("REDACT_PII", "logging", "redact_pii", "bool"),
    ("FAIL_FAST", "loader", "fail_fast", "bool"),
    ("ENCODING", "loader", "encoding", str),
    ("DATE_MODE", "loader", "date_mode", str),
    ("PRETTY_PRINT", "codec", "pretty_print", "bool"),
    ("SERVICE_HOST", "service", "host", str),
    ("SERVICE_PORT", "service", "port", int),
]


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file and environment variables.

    Configuration is loaded with the following precedence (highest to lowest):
    1. CLI arguments (handled by caller)
    2. Environment variables (FHIR_MAPPER_* prefix)
    3. Configuration file (JSON)
    4. Default values

    Args:
        config_path: Path to configuration file. If None, uses ./config/config.json

    Returns:
        Validated Config instance

    Raises:
        ConfigurationError: If configuration is invalid or malformed

    Example:
        >>> config = load_config(Path("custom/config.json"))
        >>> config.loader.fail_fast
        False
    """
    # Load .env file if present in project root
    load_dotenv()

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_PATH)

    config_dict = _load_config_file(config_path)
    config_dict = _apply_env_overrides(config_dict)

    try:
        return Config(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed:\n{e}\n\n"
            f"Fix: Check your configuration file at {config_path} and "
            f"{ENV_PREFIX}* environment variables."
        ) from e


def _load_config_file(config_path: Path) -> dict[str, Any]:
    """Load configuration file or return defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If JSON is malformed or the file cannot be read
    """
    if not config_path.exists():
        logger.info(
            f"Config file not found: {config_path}. Using default configuration."
        )
        # Deep copy of defaults to avoid mutation
        return json.loads(json.dumps(DEFAULT_CONFIG))

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check JSON syntax at line {e.lineno}, column {e.colno}"
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check file permissions and path"
        ) from e

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a JSON object"
        )

    logger.info(f"Loaded configuration from {config_path}")
    return config_dict


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides with FHIR_MAPPER_ prefix.

    Environment variables follow the pattern: FHIR_MAPPER_<NAME>
    For example: FHIR_MAPPER_LOG_LEVEL, FHIR_MAPPER_FAIL_FAST

    Args:
        config_dict: Configuration dictionary to update

    Returns:
        Updated configuration dictionary with environment overrides applied

    Raises:
        ConfigurationError: If a numeric override is not a number
    """
    for suffix, section, field_name, converter in ENV_OVERRIDES:
        env_key = f"{ENV_PREFIX}{suffix}"
        raw_value = os.getenv(env_key)
        if not raw_value:
            continue

        if converter == "bool":
            value: Any = _parse_bool(raw_value)
        else:
            try:
                value = converter(raw_value)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for {env_key}: '{raw_value}'. Error: {e}"
                ) from e

        config_dict.setdefault(section, {})[field_name] = value
        logger.debug(f"Override: {section}.{field_name} from environment")

    return config_dict


def _parse_bool(value: str) -> bool:
    """Parse boolean value from string.

    Args:
        value: String value to parse (case-insensitive)

    Returns:
        Boolean value
    """
    return value.lower() in ("true", "1", "yes", "on")
