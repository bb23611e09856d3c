"""FHIR R4 Patient data model.

This module defines the subset of the FHIR R4 Patient resource populated by the
CSV mapper, as frozen pydantic models. Python attribute names are snake_case;
JSON element names follow FHIR camelCase via an alias generator.

See https://www.hl7.org/fhir/r4/patient.html
"""

from datetime import date
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FhirElement(BaseModel):
    """Base class for FHIR elements: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class AdministrativeGender(str, Enum):
    """FHIR administrative-gender value set.

    See https://www.hl7.org/fhir/r4/valueset-administrative-gender.html
    """

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNKNOWN = "unknown"


class Coding(FhirElement):
    """A code defined by a terminology system.

    Attributes:
        system: URI of the code system
        code: Symbol in syntax defined by the system
        display: Human-readable representation
    """

    system: Optional[str] = None
    code: Optional[str] = None
    display: Optional[str] = None


class CodeableConcept(FhirElement):
    """Concept expressed by one or more codings."""

    coding: Optional[tuple[Coding, ...]] = None
    text: Optional[str] = None


class HumanName(FhirElement):
    """Name of a person.

    See https://www.hl7.org/fhir/r4/datatypes.html#HumanName
    """

    family: Optional[str] = None
    given: Optional[tuple[str, ...]] = None
    suffix: Optional[tuple[str, ...]] = None


class Address(FhirElement):
    """Postal address.

    See https://www.hl7.org/fhir/r4/datatypes.html#Address
    """

    line: Optional[tuple[str, ...]] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class Patient(FhirElement):
    """FHIR R4 Patient resource (demographics subset).

    Attributes:
        resource_type: Always "Patient"
        id: Logical id of the resource
        name: Names associated with the patient
        address: Addresses of the patient
        gender: Administrative gender
        marital_status: Marital (civil) status
        birth_date: Date of birth
    """

    resource_type: Literal["Patient"] = "Patient"
    id: Optional[str] = Field(default=None, min_length=1)
    name: Optional[tuple[HumanName, ...]] = None
    address: Optional[tuple[Address, ...]] = None
    gender: Optional[AdministrativeGender] = None
    marital_status: Optional[CodeableConcept] = None
    birth_date: Optional[date] = None
