"""Positional column layout of the Synthea patients.csv file.

Rows are read by position, not by header name. The header line is skipped
without being checked against this layout.
"""

from enum import IntEnum


class Column(IntEnum):
    """Index of each field in a patients.csv row."""

    ID = 0
    BIRTHDATE = 1
    DEATHDATE = 2
    SSN = 3
    DRIVERS = 4
    PASSPORT = 5
    PREFIX = 6
    FIRST = 7
    LAST = 8
    SUFFIX = 9
    MAIDEN = 10
    MARITAL = 11
    RACE = 12
    ETHNICITY = 13
    GENDER = 14
    BIRTHPLACE = 15
    ADDRESS = 16
    CITY = 17
    STATE = 18
    COUNTY = 19
    ZIP = 20
    LAT = 21
    LON = 22
    HEALTHCARE_EXPENSES = 23
    HEALTHCARE_COVERAGE = 24


# Minimum number of fields a row must have
COLUMN_COUNT = len(Column)

# Field delimiter; embedded commas are not supported (no quoting)
DELIMITER = ","


def column_names() -> list[str]:
    """Return the column names in positional order, lowercased."""
    return [column.name.lower() for column in Column]
