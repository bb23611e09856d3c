"""Config module.

This module provides configuration management functionality.
"""

from fhir_r4_mapper.config.manager import load_config
from fhir_r4_mapper.config.schema import (
    CodecConfig,
    Config,
    LoaderConfig,
    LoggingConfig,
    ServiceConfig,
)

__all__ = [
    # Main configuration loading
    "load_config",
    # Configuration models
    "Config",
    "LoggingConfig",
    "LoaderConfig",
    "CodecConfig",
    "ServiceConfig",
]
