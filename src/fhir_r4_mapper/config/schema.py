"""Configuration schema models using pydantic.

This module defines the configuration structure and validation rules using pydantic.
All configuration values are validated according to the schema defined here.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from fhir_r4_mapper.mapper.dates import DateParsingMode


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        redact_pii: Whether to redact PII from logs
    """

    level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )
    log_file: Path = Field(
        default=Path("logs/fhir-r4-mapper.log"),
        description="Log file path"
    )
    redact_pii: bool = Field(
        default=False,
        description="Redact PII from logs"
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level.

        Args:
            v: Log level string

        Returns:
            Validated log level (uppercase)

        Raises:
            ValueError: If log level is not valid
        """
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        return v_upper


class LoaderConfig(BaseModel):
    """CSV loading configuration.

    Attributes:
        fail_fast: Stop loading on the first malformed row
        encoding: Text encoding of the CSV source (None = platform default)
        date_mode: Birth date parsing mode ("calendar" or "legacy-minutes")
    """

    fail_fast: bool = Field(
        default=False,
        description="Stop loading on the first malformed row"
    )
    encoding: Optional[str] = Field(
        default=None,
        description="CSV text encoding; platform default when unset"
    )
    date_mode: DateParsingMode = Field(
        default=DateParsingMode.CALENDAR,
        description="Birth date parsing mode"
    )


class CodecConfig(BaseModel):
    """FHIR JSON codec configuration."""

    pretty_print: bool = Field(
        default=False,
        description="Indent encoded JSON"
    )


class ServiceConfig(BaseModel):
    """Web service configuration.

    Attributes:
        host: Bind address
        port: Listen port
        max_content_length: Maximum request body size in bytes
    """

    host: str = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=8080, description="Server port")
    max_content_length: int = Field(
        default=16 * 1024 * 1024,
        ge=1,
        description="Maximum request body size in bytes"
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port number is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"Invalid port {v}. Must be between 1 and 65535.")
        return v


class Config(BaseModel):
    """Root configuration model.

    Attributes:
        logging: Logging configuration
        loader: CSV loading configuration
        codec: FHIR JSON codec configuration
        service: Web service configuration

    Example:
        >>> config = Config(loader=LoaderConfig(fail_fast=True))
        >>> config.loader.date_mode
        <DateParsingMode.CALENDAR: 'calendar'>
    """

    logging: LoggingConfig = LoggingConfig()
    loader: LoaderConfig = LoaderConfig()
    codec: CodecConfig = CodecConfig()
    service: ServiceConfig = ServiceConfig()
