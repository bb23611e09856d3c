"""Custom exception classes for the FHIR R4 mapper.

All exceptions inherit from FhirMapperError to allow catching all custom exceptions.
"""

from typing import Optional, Sequence


class FhirMapperError(Exception):
    """Base exception for all FHIR R4 mapper custom exceptions."""

    pass


class MalformedRowError(FhirMapperError):
    """Raised when a CSV row cannot be mapped to a Patient resource.

    Examples:
        - Row has fewer than the 25 positional columns
        - Birth date cannot be parsed

    Attributes:
        line_number: 1-based line number in the source (header is line 1),
            or None when the row did not come from a file
        fields: Raw field values of the rejected row
        reason: Short description of why the row was rejected
    """

    def __init__(
        self,
        reason: str,
        fields: Sequence[str],
        line_number: Optional[int] = None,
    ) -> None:
        self.reason = reason
        self.fields = tuple(fields)
        self.line_number = line_number
        location = f"Line {line_number}: " if line_number is not None else ""
        super().__init__(f"{location}{reason}")


class CodecError(FhirMapperError):
    """Base exception for FHIR JSON encoding and decoding errors."""

    pass


class DecodeError(CodecError):
    """Raised when text is not a well-formed FHIR Patient resource.

    Examples:
        - Invalid JSON syntax
        - resourceType is not "Patient"
        - Element has the wrong structure (e.g. name is not an array)
    """

    pass


class EncodeError(CodecError):
    """Raised when a Patient is missing elements the encoder must write.

    Examples:
        - Patient without an id
        - Patient without a birth date
    """

    pass


class ConfigurationError(FhirMapperError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Invalid configuration file format
        - Configuration value out of range
    """

    pass
