"""FHIR JSON encoding and decoding of Patient resources.

The codec is expressed as a small protocol so callers (CLI, web service,
tests) can inject an alternative implementation. The default implementation
uses the pydantic models in ``fhir_r4_mapper.models.patient`` as the
structural schema.
"""

import logging
from typing import Optional, Protocol

from pydantic import ValidationError

from fhir_r4_mapper.models.patient import Patient
from fhir_r4_mapper.utils.exceptions import DecodeError, EncodeError


logger = logging.getLogger(__name__)

# Elements the mapper always populates; encoding refuses to drop them
REQUIRED_ELEMENTS = (
    "id",
    "name",
    "address",
    "gender",
    "marital_status",
    "birth_date",
)


class PatientCodec(Protocol):
    """Converts Patient resources to and from interchange text."""

    def encode(self, patient: Patient) -> str:
        ...

    def decode(self, text: str) -> Patient:
        ...


class JsonPatientCodec:
    """FHIR JSON codec for Patient resources.

    Attributes:
        pretty_print: Indent output JSON for readability

    Example:
        >>> codec = JsonPatientCodec(pretty_print=True)
        >>> text = codec.encode(patient)
        >>> codec.decode(text) == patient
        True
    """

    def __init__(self, pretty_print: bool = False) -> None:
        self.pretty_print = pretty_print

    def encode(self, patient: Patient) -> str:
        """Encode a Patient as FHIR JSON.

        Args:
            patient: Patient to encode

        Returns:
            FHIR JSON text with camelCase element names

        Raises:
            EncodeError: If any mapped element is missing
        """
        missing = [name for name in REQUIRED_ELEMENTS if getattr(patient, name) is None]
        if missing:
            raise EncodeError(
                f"Patient/{patient.id} is missing required element(s): "
                f"{', '.join(missing)}"
            )

        indent: Optional[int] = 2 if self.pretty_print else None
        return patient.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    def decode(self, text: str) -> Patient:
        """Decode FHIR JSON text into a Patient.

        Elements outside the modelled subset are ignored.

        Args:
            text: FHIR JSON for a single Patient resource

        Returns:
            Decoded Patient

        Raises:
            DecodeError: If the text is not valid JSON, lacks resourceType,
                or does not match the Patient structure
        """
        try:
            patient = Patient.model_validate_json(text)
        except ValidationError as e:
            raise DecodeError(f"Invalid FHIR Patient JSON: {e}") from e

        if "resource_type" not in patient.model_fields_set:
            raise DecodeError("Invalid FHIR Patient JSON: missing resourceType")

        logger.debug(f"Decoded Patient/{patient.id}")
        return patient


_default_codec = JsonPatientCodec()


def encode(patient: Patient) -> str:
    """Encode a Patient with the default compact JSON codec."""
    return _default_codec.encode(patient)


def decode(text: str) -> Patient:
    """Decode a Patient with the default JSON codec."""
    return _default_codec.decode(text)
