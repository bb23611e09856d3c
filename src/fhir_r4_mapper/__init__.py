"""FHIR R4 mapper - converts Synthea patient demographics CSV to FHIR R4 Patient resources."""

__version__ = "0.1.0"
