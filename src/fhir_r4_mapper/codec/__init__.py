"""Codec module.

FHIR JSON encoding and decoding of Patient resources.
"""

from fhir_r4_mapper.codec.json_codec import JsonPatientCodec, PatientCodec, decode, encode

__all__ = [
    "JsonPatientCodec",
    "PatientCodec",
    "decode",
    "encode",
]
