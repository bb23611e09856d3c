"""CSV loader for Synthea patient demographics.

This module streams a patients.csv source line by line and maps each data row
to a FHIR R4 Patient resource. Malformed rows are reported and skipped; they
do not abort the batch unless fail-fast mode is requested.
"""

import logging
import os
from contextlib import nullcontext
from pathlib import Path
from typing import ContextManager, Iterable, Iterator, Optional, TextIO, Union

from fhir_r4_mapper.csv_parser.columns import DELIMITER
from fhir_r4_mapper.mapper.dates import DateParsingMode
from fhir_r4_mapper.mapper.patient_mapper import map_row
from fhir_r4_mapper.models.batch import LoadResult, RowOutcome
from fhir_r4_mapper.utils.exceptions import MalformedRowError


logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, TextIO]


def iter_patients(
    lines: Iterable[str],
    date_mode: DateParsingMode = DateParsingMode.CALENDAR,
) -> Iterator[RowOutcome]:
    """Lazily map CSV lines to row outcomes.

    The first line is treated as a header and discarded without inspection.
    Each following line is trimmed and split on commas; quoting is not
    supported.

    Args:
        lines: Source lines, header first
        date_mode: How the birth date column is parsed

    Yields:
        RowOutcome per data line, in source order
    """
    iterator = iter(lines)
    if next(iterator, None) is None:
        return

    for line_number, line in enumerate(iterator, start=2):
        fields = line.strip().split(DELIMITER)
        try:
            patient = map_row(fields, line_number, date_mode)
        except MalformedRowError as e:
            yield RowOutcome(line_number, error=e)
        else:
            yield RowOutcome(line_number, patient=patient)


def load_patients(
    source: Source,
    *,
    fail_fast: bool = False,
    date_mode: DateParsingMode = DateParsingMode.CALENDAR,
    encoding: Optional[str] = None,
) -> LoadResult:
    """Load all patients from a patients.csv source.

    Args:
        source: Path to the CSV file, or an open text stream. Paths are opened
            and closed here; streams are left open for the caller.
        fail_fast: If True, the first malformed row raises instead of being
            skipped
        date_mode: How the birth date column is parsed
        encoding: Text encoding for paths. None uses the platform default.

    Returns:
        LoadResult with patients in source line order. If the source could not
        be opened or read, read_error is set and patients holds only the rows
        read before the failure.

    Raises:
        MalformedRowError: Only when fail_fast is True

    Example:
        >>> result = load_patients(Path("data/patients.csv"))
        >>> len(result.patients)
        1000
    """
    source_name = _describe(source)
    logger.info(f"Loading patients from {source_name}")

    result = LoadResult()
    try:
        with _open_source(source, encoding) as stream:
            for outcome in iter_patients(stream, date_mode):
                if not outcome.ok:
                    if fail_fast:
                        logger.error(f"Stopping at malformed row: {outcome.error}")
                        raise outcome.error
                    logger.warning(f"Skipping malformed row: {outcome.error}")
                result.add(outcome)
    except (OSError, UnicodeDecodeError) as e:
        result.read_error = f"Failed to read {source_name}: {e}"
        logger.warning(
            f"{result.read_error}. Returning {len(result.patients)} patient(s) "
            "read before the error."
        )

    logger.info(
        f"Loaded {len(result.patients)} patient(s) from {result.total_rows} row(s), "
        f"{len(result.malformed_rows)} malformed"
    )
    return result


def _open_source(source: Source, encoding: Optional[str]) -> ContextManager[TextIO]:
    if isinstance(source, (str, os.PathLike)):
        return open(Path(source), "r", encoding=encoding)
    return nullcontext(source)


def _describe(source: Source) -> str:
    if isinstance(source, (str, os.PathLike)):
        return str(source)
    return getattr(source, "name", "<stream>")
