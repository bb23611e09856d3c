"""Logging module.

This module provides logging configuration and logger factories.
"""

from .formatters import PIIRedactingFormatter
from .logger import (
    configure_logging,
    get_logger,
    get_operation_logger,
    set_operation_log_level,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_operation_logger",
    "set_operation_log_level",
    "PIIRedactingFormatter",
]
