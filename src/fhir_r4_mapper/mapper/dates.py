"""Birth date parsing for Synthea CSV rows.

Two parsing modes are supported:

- ``calendar`` (default): ``YYYY-MM-DD`` with month-of-year semantics.
- ``legacy-minutes``: reproduces the earlier Java mapper, whose pattern
  ``yyyy-mm-dd`` read the middle field as *minutes*. The month is always
  January, the day overflows into later months, and trailing text is ignored.
  Use it only to compare output against fixtures produced by that mapper.

Parsing is stateless; nothing here holds a shared formatter object.

See https://www.hl7.org/fhir/r4/datatypes.html#date
"""

import re
from datetime import date, datetime, timedelta
from enum import Enum

import pandas as pd


class DateParsingMode(str, Enum):
    """How the birth date column is interpreted."""

    CALENDAR = "calendar"
    LEGACY_MINUTES = "legacy-minutes"


CALENDAR_FORMAT = "%Y-%m-%d"

# year, minutes, day; lenient and unanchored at the end like SimpleDateFormat
LEGACY_PATTERN = re.compile(r"^(\d+)-(\d+)-(\d+)")


def parse_birth_date(
    value: str, mode: DateParsingMode = DateParsingMode.CALENDAR
) -> date:
    """Parse a birth date field.

    Args:
        value: Raw birth date string from the CSV
        mode: Parsing mode (see module docstring)

    Returns:
        Parsed calendar date

    Raises:
        ValueError: If the value is empty or cannot be parsed in the given mode

    Example:
        >>> parse_birth_date("1980-05-12")
        datetime.date(1980, 5, 12)
        >>> parse_birth_date("1980-05-12", DateParsingMode.LEGACY_MINUTES)
        datetime.date(1980, 1, 12)
    """
    if mode is DateParsingMode.LEGACY_MINUTES:
        return _parse_legacy_minutes(value)
    return _parse_calendar(value)


def _parse_calendar(value: str) -> date:
    try:
        parsed = pd.to_datetime(value, format=CALENDAR_FORMAT)
    except (ValueError, TypeError) as e:
        raise ValueError(
            f"Invalid date format '{value}'. Expected format: YYYY-MM-DD (e.g., 1980-01-15)"
        ) from e

    # Empty strings come back as NaT rather than raising
    if pd.isna(parsed):
        raise ValueError("Missing birth date. Expected format: YYYY-MM-DD")

    return parsed.date()


def _parse_legacy_minutes(value: str) -> date:
    match = LEGACY_PATTERN.match(value)
    if match is None:
        raise ValueError(
            f"Invalid date format '{value}'. Expected pattern: yyyy-mm-dd"
        )

    year, minutes, day = (int(group) for group in match.groups())
    try:
        parsed = datetime(year, 1, 1) + timedelta(days=day - 1, minutes=minutes)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Date '{value}' is out of range: {e}") from e

    return parsed.date()
