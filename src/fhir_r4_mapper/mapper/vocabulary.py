"""Controlled-vocabulary translation for Synthea demographic codes.

Raw single-letter codes from the CSV are translated to FHIR coded values.
Every function here is total: unrecognized codes resolve to a fallback value
and never raise.
"""

from types import MappingProxyType

from fhir_r4_mapper.models.patient import AdministrativeGender, CodeableConcept, Coding


MARITAL_STATUS_SYSTEM = "http://terminology.hl7.org/CodeSystem/v3-MaritalStatus"
NULL_FLAVOR_SYSTEM = "http://terminology.hl7.org/CodeSystem/v3-NullFlavor"

# Recognized marital codes and their display text
MARITAL_STATUS_DISPLAY = MappingProxyType(
    {
        "S": "Never Married",
        "M": "Married",
    }
)

UNKNOWN_MARITAL_STATUS = Coding(
    system=NULL_FLAVOR_SYSTEM,
    code="UNK",
    display="unknown",
)

GENDER_CODES = MappingProxyType(
    {
        "M": AdministrativeGender.MALE,
        "F": AdministrativeGender.FEMALE,
    }
)


def translate_marital_status(code: str) -> Coding:
    """Translate a marital status code to a FHIR Coding.

    Args:
        code: Raw marital code from the CSV (case-sensitive)

    Returns:
        v3-MaritalStatus coding for "S" and "M", otherwise the
        v3-NullFlavor UNK coding

    Example:
        >>> translate_marital_status("M").display
        'Married'
        >>> translate_marital_status("W").code
        'UNK'

    See https://www.hl7.org/fhir/r4/patient-definitions.html#Patient.maritalStatus
    """
    display = MARITAL_STATUS_DISPLAY.get(code)
    if display is None:
        return UNKNOWN_MARITAL_STATUS
    return Coding(system=MARITAL_STATUS_SYSTEM, code=code, display=display)


def marital_status_concept(code: str) -> CodeableConcept:
    """Wrap the translated marital status coding in a CodeableConcept."""
    return CodeableConcept(coding=(translate_marital_status(code),))


def translate_gender(code: str) -> AdministrativeGender:
    """Translate a gender code to FHIR administrative gender.

    "M" maps to male and "F" to female; anything else is unknown.

    See https://www.hl7.org/fhir/r4/patient-definitions.html#Patient.gender
    """
    return GENDER_CODES.get(code, AdministrativeGender.UNKNOWN)
