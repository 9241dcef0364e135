"""Reconstruct typed values from parsed JSON."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from structured_json.type_descriptors import ShapeKind, TypeDescriptor, describe_type

from .decode_outcomes import (
    DecodeError,
    DecodeResult,
    MissingFieldError,
    NoMatchingEnumMemberError,
    NoMatchingUnionMemberError,
    TypeMismatchError,
)

_LOGGER = logging.getLogger(__name__)


def decode(annotation: Any, value: Any) -> Any:
    """Rebuild a value of type `annotation` from a generic JSON value.

    Records are built from mappings by looking up every declared field by name and
    calling the record constructor with the decoded fields in declaration order.

    Union members are chosen structurally. A mapping is offered, in declaration
    order, to every record member whose field names equal the mapping keys; the
    first member that decodes it wins. Members with identical field names are
    therefore ambiguous and should be avoided.

    Raises:
      DecodeError: If no reconstruction is possible.
      UnsupportedTypeError: If `annotation` has no supported shape.
    """
    return _decode(describe_type(annotation), value)


def try_decode(annotation: Any, value: Any) -> DecodeResult:
    """Decode without raising decode errors."""
    try:
        return DecodeResult.success(decode(annotation, value))
    except DecodeError as exc:
        return DecodeResult.failure(exc)


def _decode(descriptor: TypeDescriptor, value: Any) -> Any:
    if _is_instance(descriptor, value):
        return value
    if descriptor.kind == ShapeKind.SCALAR:
        return _decode_scalar(descriptor, value)
    if descriptor.kind == ShapeKind.ENUM:
        return _decode_enum(descriptor, value)
    if descriptor.kind == ShapeKind.SEQUENCE:
        return _decode_sequence(descriptor, value)
    if descriptor.kind == ShapeKind.TUPLE:
        return _decode_tuple(descriptor, value)
    if descriptor.kind == ShapeKind.RECORD:
        return _decode_record(descriptor, value)
    return _decode_union(descriptor, value)


def _is_instance(descriptor: TypeDescriptor, value: Any) -> bool:
    target = descriptor.instance_check
    if target is None or not isinstance(value, target):
        return False
    return not (isinstance(value, bool) and not issubclass(target, bool))


def _decode_scalar(descriptor: TypeDescriptor, value: Any) -> Any:
    json_type = descriptor.json_type
    if json_type == "null" and value is None:
        return None
    if json_type == "string" and isinstance(value, str):
        return _construct(descriptor, value)
    if not isinstance(value, bool):
        if json_type == "integer":
            if isinstance(value, int):
                return _construct(descriptor, value)
            if isinstance(value, float) and value.is_integer():
                return _construct(descriptor, int(value))
        if json_type == "number" and isinstance(value, (int, float)):
            return _construct(descriptor, value)
    raise _mismatch(descriptor, value)


def _decode_enum(descriptor: TypeDescriptor, value: Any) -> Any:
    if not isinstance(value, str):
        raise _mismatch(descriptor, value)
    for label in descriptor.labels:
        if label == value:
            return descriptor.annotation[label]
    raise NoMatchingEnumMemberError(
        f"String {value!r} does not match any member of the enum {descriptor.name}."
    )


def _decode_sequence(descriptor: TypeDescriptor, value: Any) -> Any:
    if not isinstance(value, (list, tuple)):
        raise _mismatch(descriptor, value)
    element = describe_type(descriptor.element)
    return _construct(descriptor, [_decode(element, item) for item in value])


def _decode_tuple(descriptor: TypeDescriptor, value: Any) -> Any:
    if not isinstance(value, (list, tuple)) or len(value) != len(descriptor.members):
        raise _mismatch(descriptor, value)
    return tuple(
        _decode(describe_type(member), item) for member, item in zip(descriptor.members, value)
    )


def _decode_record(descriptor: TypeDescriptor, value: Any) -> Any:
    if not isinstance(value, Mapping):
        raise _mismatch(descriptor, value)
    arguments: dict[str, Any] = {}
    for field in descriptor.fields:
        if field.name not in value:
            raise MissingFieldError(f"Field '{field.name}' of {descriptor.name} is missing.")
        arguments[field.name] = _decode(describe_type(field.annotation), value[field.name])
    return _construct(descriptor, **arguments)


def _decode_union(descriptor: TypeDescriptor, value: Any) -> Any:
    members = [describe_type(member) for member in descriptor.members]

    if isinstance(value, Mapping):
        keys = set(value)
        for member in members:
            if member.kind != ShapeKind.RECORD or set(member.field_names) != keys:
                continue
            outcome = try_decode(member.annotation, value)
            if outcome.ok:
                return outcome.value
            _LOGGER.debug("Union member %s rejected: %s", member.name, outcome.error)
        raise NoMatchingUnionMemberError(
            f"No member of {descriptor.name} matches the keys {sorted(keys)}."
        )

    for member in members:
        if _is_instance(member, value):
            return value
    for member in members:
        if member.kind == ShapeKind.RECORD:
            continue
        outcome = try_decode(member.annotation, value)
        if outcome.ok:
            return outcome.value
    raise NoMatchingUnionMemberError(
        f"No member of {descriptor.name} accepts {type(value).__name__} value {value!r}."
    )


def _construct(descriptor: TypeDescriptor, *args: Any, **kwargs: Any) -> Any:
    if descriptor.constructor is None:  # pragma: no cover - set for every constructed kind
        raise TypeMismatchError(f"{descriptor.name} cannot be constructed.")
    try:
        return descriptor.constructor(*args, **kwargs)
    except (TypeError, ValueError) as exc:
        raise TypeMismatchError(f"Cannot construct {descriptor.name}: {exc}") from exc


def _mismatch(descriptor: TypeDescriptor, value: Any) -> TypeMismatchError:
    return TypeMismatchError(
        f"Expected {descriptor.name}, got {type(value).__name__} value {value!r}."
    )
