"""Map a positional patients.csv row to a FHIR R4 Patient resource.

See https://www.hl7.org/fhir/r4/patient.html
"""

import logging
from typing import Optional, Sequence

from fhir_r4_mapper.csv_parser.columns import COLUMN_COUNT, Column
from fhir_r4_mapper.mapper.dates import DateParsingMode, parse_birth_date
from fhir_r4_mapper.mapper.vocabulary import marital_status_concept, translate_gender
from fhir_r4_mapper.models.patient import Address, HumanName, Patient
from fhir_r4_mapper.utils.exceptions import MalformedRowError


logger = logging.getLogger(__name__)


def map_row(
    fields: Sequence[str],
    line_number: Optional[int] = None,
    date_mode: DateParsingMode = DateParsingMode.CALENDAR,
) -> Patient:
    """Build a Patient resource from one CSV row.

    Reads id, name, address, gender, marital status and birth date by
    position. The remaining columns (SSN, race, coordinates, expenses, ...)
    are not mapped.

    Args:
        fields: Raw field values in positional order (see Column)
        line_number: 1-based source line number, reported on failure
        date_mode: How the birth date column is parsed

    Returns:
        Fully populated Patient

    Raises:
        MalformedRowError: If the row has fewer than 25 fields, the id is
            empty, or the birth date cannot be parsed
    """
    if len(fields) < COLUMN_COUNT:
        raise MalformedRowError(
            f"Expected at least {COLUMN_COUNT} fields, found {len(fields)}",
            fields,
            line_number,
        )

    if not fields[Column.ID]:
        raise MalformedRowError("Missing patient id", fields, line_number)

    try:
        birth_date = parse_birth_date(fields[Column.BIRTHDATE], date_mode)
    except ValueError as e:
        raise MalformedRowError(str(e), fields, line_number) from e

    patient = Patient(
        resource_type="Patient",
        id=fields[Column.ID],
        name=(_map_name(fields),),
        address=(_map_address(fields),),
        gender=translate_gender(fields[Column.GENDER]),
        marital_status=marital_status_concept(fields[Column.MARITAL]),
        birth_date=birth_date,
    )

    logger.debug(f"Mapped row {line_number} to Patient/{patient.id}")
    return patient


def _map_name(fields: Sequence[str]) -> HumanName:
    """See https://www.hl7.org/fhir/r4/datatypes.html#HumanName"""
    return HumanName(
        family=fields[Column.LAST],
        given=(fields[Column.FIRST],),
        suffix=(fields[Column.SUFFIX],),
    )


def _map_address(fields: Sequence[str]) -> Address:
    """See https://www.hl7.org/fhir/r4/datatypes.html#Address

    The county column is stored in Address.country.
    """
    return Address(
        line=(fields[Column.ADDRESS],),
        city=fields[Column.CITY],
        state=fields[Column.STATE],
        postal_code=fields[Column.ZIP],
        country=fields[Column.COUNTY],
    )
