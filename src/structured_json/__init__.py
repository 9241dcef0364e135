"""Bidirectional mapping between Python types and JSON Schema."""

import logging

from .completion import request_structured_value
from .schema_compilation import build_schema, compile_fragment
from .type_descriptors import UnsupportedTypeError, describe_type, is_inlineable
from .value_decoding import (
    DecodeError,
    MissingFieldError,
    NoMatchingEnumMemberError,
    NoMatchingUnionMemberError,
    TypeMismatchError,
    decode,
    encode_value,
    try_decode,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DecodeError",
    "MissingFieldError",
    "NoMatchingEnumMemberError",
    "NoMatchingUnionMemberError",
    "TypeMismatchError",
    "UnsupportedTypeError",
    "build_schema",
    "compile_fragment",
    "decode",
    "describe_type",
    "encode_value",
    "is_inlineable",
    "request_structured_value",
    "try_decode",
]
