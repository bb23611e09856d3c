"""
Shared pytest configuration and fixtures.

This module provides fixtures used across the unit and integration test suites.
"""

import logging
from pathlib import Path
from typing import Callable

import pytest

from fhir_r4_mapper.csv_parser.columns import Column


SYNTHEA_HEADER = (
    "Id,BIRTHDATE,DEATHDATE,SSN,DRIVERS,PASSPORT,PREFIX,FIRST,LAST,SUFFIX,"
    "MAIDEN,MARITAL,RACE,ETHNICITY,GENDER,BIRTHPLACE,ADDRESS,CITY,STATE,"
    "COUNTY,ZIP,LAT,LON,HEALTHCARE_EXPENSES,HEALTHCARE_COVERAGE"
)

# Jane Doe example row, keyed by column
DEFAULT_ROW = {
    Column.ID: "p1",
    Column.BIRTHDATE: "1980-05-12",
    Column.DEATHDATE: "",
    Column.SSN: "999-12-3456",
    Column.DRIVERS: "S99912345",
    Column.PASSPORT: "X12345678X",
    Column.PREFIX: "Mrs.",
    Column.FIRST: "Jane",
    Column.LAST: "Doe",
    Column.SUFFIX: "",
    Column.MAIDEN: "Roe",
    Column.MARITAL: "M",
    Column.RACE: "white",
    Column.ETHNICITY: "nonhispanic",
    Column.GENDER: "F",
    Column.BIRTHPLACE: "Boston  Massachusetts  US",
    Column.ADDRESS: "12 Elm St",
    Column.CITY: "Metropolis",
    Column.STATE: "NY",
    Column.COUNTY: "Kings",
    Column.ZIP: "10001",
    Column.LAT: "40.6782",
    Column.LON: "-73.9442",
    Column.HEALTHCARE_EXPENSES: "271227.08",
    Column.HEALTHCARE_COVERAGE: "1334.88",
}


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Remove handlers added by configure_logging once a test finishes."""
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level

    yield

    for handler in list(root_logger.handlers):
        if handler not in original_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(original_level)


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.

    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def make_row() -> Callable[..., list[str]]:
    """
    Return a factory building 25-field rows.

    Keyword arguments override columns by lowercase name, e.g.
    ``make_row(id="p2", gender="M")``.

    Returns:
        Callable returning the row as a list of strings.
    """

    def _make_row(**overrides: str) -> list[str]:
        values = dict(DEFAULT_ROW)
        for name, value in overrides.items():
            values[Column[name.upper()]] = value
        return [values[column] for column in Column]

    return _make_row


@pytest.fixture
def make_line(make_row) -> Callable[..., str]:
    """
    Return a factory building comma-joined CSV lines.

    Returns:
        Callable returning one CSV line without a trailing newline.
    """

    def _make_line(**overrides: str) -> str:
        return ",".join(make_row(**overrides))

    return _make_line


@pytest.fixture
def csv_text() -> Callable[..., str]:
    """
    Return a helper building patients.csv content from data lines.

    Returns:
        Callable taking data lines and returning the text with the Synthea
        header prepended and a trailing newline.
    """

    def _csv_text(*lines: str) -> str:
        return "\n".join([SYNTHEA_HEADER, *lines]) + "\n"

    return _csv_text


@pytest.fixture
def write_csv(tmp_path: Path, csv_text) -> Callable[..., Path]:
    """
    Return a helper that writes a patients.csv file under tmp_path.

    Args:
        tmp_path: Pytest's temporary directory fixture.

    Returns:
        Callable taking data lines (and an optional file name) and
        returning the written path. The Synthea header is prepended.
    """

    def _write_csv(lines: list[str], name: str = "patients.csv") -> Path:
        csv_file = tmp_path / name
        csv_file.write_text(csv_text(*lines), encoding="utf-8")
        return csv_file

    return _write_csv
