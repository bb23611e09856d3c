"""Default configuration values.

This module defines the default configuration values used when no configuration
file is provided or when configuration values are not specified.
"""

from typing import Any

# Default configuration dictionary
# This is used as a fallback when no configuration file is present
DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "log_file": "logs/fhir-r4-mapper.log",
        # Do not redact PII by default (user must opt-in for privacy)
        "redact_pii": False,
    },
    "loader": {
        # Skip malformed rows and keep loading
        "fail_fast": False,
        # None means the platform default encoding
        "encoding": None,
        "date_mode": "calendar",
    },
    "codec": {
        "pretty_print": False,
    },
    "service": {
        "host": "127.0.0.1",
        "port": 8080,
        "max_content_length": 16 * 1024 * 1024,
    },
}

# Default configuration file path
DEFAULT_CONFIG_PATH = "config/config.json"
