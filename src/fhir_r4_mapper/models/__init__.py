"""Models module.

This module provides the FHIR Patient models and batch loading results.
"""

from fhir_r4_mapper.models.batch import LoadResult, RowOutcome
from fhir_r4_mapper.models.patient import (
    Address,
    AdministrativeGender,
    CodeableConcept,
    Coding,
    HumanName,
    Patient,
)

__all__ = [
    "Address",
    "AdministrativeGender",
    "CodeableConcept",
    "Coding",
    "HumanName",
    "LoadResult",
    "Patient",
    "RowOutcome",
]
