"""Custom log formatters for the FHIR R4 mapper.

This module provides specialized formatters for logging, including PII redaction.
"""

import logging
import re
from typing import List, Tuple


class PIIRedactingFormatter(logging.Formatter):
    """Formatter that redacts patient data from log messages.

    Two kinds of messages carry patient values. Malformed-row warnings quote
    the offending birth date, and decode failures embed pydantic's
    ``input_value=...`` for every rejected element, which can be a name,
    an address line or a whole request body. Only the message and any
    traceback are redacted; the timestamp and logger name are left intact.

    Attributes:
        redact_pii: Whether to enable PII redaction
        patterns: List of (regex_pattern, replacement_text) tuples, applied in order

    Example:
        >>> formatter = PIIRedactingFormatter(
        ...     fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        ...     redact_pii=True
        ... )
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    def __init__(
        self,
        fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt: str | None = None,
        redact_pii: bool = False,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.redact_pii = redact_pii

        self.patterns: List[Tuple[re.Pattern[str], str]] = [
            # pydantic: [type=string_type, input_value='Jane', input_type=str]
            (re.compile(r"input_value=.*?(?=, input_type=)"), "input_value=[REDACTED]"),

            # Invalid date format '1980/05/12', Date '1980-99-99' is out of range
            (re.compile(r"(Invalid date format |Date )'[^']*'"), r"\1'[DATE-REDACTED]'"),

            # SSN: 123-45-6789 (Synthea: 999-12-3456)
            (re.compile(r"\b\d{3}-\d{2}-\d{4}\b"), "[SSN-REDACTED]"),

            # Bare ISO dates such as birthDate values
            (re.compile(r"\b\d{4}-\d{2}-\d{2}\b"), "[DATE-REDACTED]"),
        ]

    def redact(self, text: str) -> str:
        """Apply every redaction pattern to text."""
        for pattern, replacement in self.patterns:
            text = pattern.sub(replacement, text)
        return text

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with optional PII redaction.

        The record itself is not modified, so other handlers still see the
        original message.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with PII redacted if enabled
        """
        if not self.redact_pii:
            return super().format(record)

        redacted = logging.makeLogRecord(record.__dict__)
        redacted.msg = self.redact(record.getMessage())
        redacted.args = None
        # Another handler may have cached the unredacted traceback
        redacted.exc_text = None
        return super().format(redacted)

    def formatException(self, ei) -> str:
        formatted = super().formatException(ei)
        if self.redact_pii:
            formatted = self.redact(formatted)
        return formatted
