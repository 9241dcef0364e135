"""Value decoding errors and outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class DecodeError(Exception):
    """Raised when a JSON value cannot be reconstructed as the target type."""


class TypeMismatchError(DecodeError):
    """Raised when a JSON value has the wrong shape for the target type."""


class MissingFieldError(DecodeError):
    """Raised when a required record field is absent from the input mapping."""


class NoMatchingEnumMemberError(DecodeError):
    """Raised when a string does not name any member of the target enum."""


class NoMatchingUnionMemberError(DecodeError):
    """Raised when no union member both matches the input and decodes it."""


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of one decode attempt that does not raise."""

    value: Any = None
    error: DecodeError | None = None

    @property
    def ok(self) -> bool:
        """Return True when the attempt produced a value."""
        return self.error is None

    def unwrap(self) -> Any:
        """Return the decoded value or raise the recorded error."""
        if self.error is not None:
            raise self.error
        return self.value

    @staticmethod
    def success(value: Any) -> DecodeResult:
        return DecodeResult(value=value)

    @staticmethod
    def failure(error: DecodeError) -> DecodeResult:
        return DecodeResult(error=error)
