"""Value decoding exports."""

from .decode_outcomes import (
    DecodeError,
    DecodeResult,
    MissingFieldError,
    NoMatchingEnumMemberError,
    NoMatchingUnionMemberError,
    TypeMismatchError,
)
from .value_decoder import decode, try_decode
from .value_encoder import encode_value

__all__ = [
    "DecodeError",
    "DecodeResult",
    "MissingFieldError",
    "NoMatchingEnumMemberError",
    "NoMatchingUnionMemberError",
    "TypeMismatchError",
    "decode",
    "encode_value",
    "try_decode",
]
