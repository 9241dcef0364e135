"""Describe Python annotations as shape-tagged type descriptors."""

from __future__ import annotations

import collections.abc
import dataclasses
import enum
import numbers
import types
import typing
from functools import lru_cache
from typing import Any

from .descriptor_models import FieldDescriptor, ShapeKind, TypeDescriptor

_NONE_TYPE = type(None)
_SEQUENCE_ORIGINS = {list: "list", collections.abc.Sequence: "Sequence"}


class UnsupportedTypeError(Exception):
    """Raised when an annotation cannot be mapped to a supported shape."""


def describe_type(annotation: Any) -> TypeDescriptor:
    """Return the descriptor for an annotation.

    Raises:
      UnsupportedTypeError: If the annotation has no supported shape.
    """
    key = _cache_key(annotation)
    try:
        hash(key)
    except TypeError:
        return _describe(annotation)
    return _describe_cached(key)


def canonical_name(annotation: Any) -> str:
    """Return the name used for `$defs` keys and error messages."""
    return describe_type(annotation).name


def _cache_key(annotation: Any) -> tuple[Any, ...]:
    # Union[A, B] == Union[B, A]; the key keeps argument order.
    return (annotation, tuple(_cache_key(arg) for arg in typing.get_args(annotation)))


@lru_cache(maxsize=512)
def _describe_cached(key: tuple[Any, ...]) -> TypeDescriptor:
    return _describe(key[0])


def _describe(annotation: Any) -> TypeDescriptor:
    if annotation is None or annotation is _NONE_TYPE:
        return TypeDescriptor(
            kind=ShapeKind.SCALAR,
            annotation=_NONE_TYPE,
            name="None",
            json_type="null",
            instance_check=_NONE_TYPE,
        )
    if isinstance(annotation, str):
        raise UnsupportedTypeError(f"Unresolved forward reference: {annotation!r}")
    if annotation is typing.Any:
        raise UnsupportedTypeError("`Any` has no schema. Use a concrete type instead.")

    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return describe_type(supertype)

    origin = typing.get_origin(annotation)
    if origin is not None:
        return _describe_generic(annotation, origin, typing.get_args(annotation))
    if isinstance(annotation, type):
        return _describe_class(annotation)
    raise UnsupportedTypeError(f"Unsupported type annotation: {annotation!r}")


def _describe_generic(annotation: Any, origin: Any, args: tuple[Any, ...]) -> TypeDescriptor:
    if origin is typing.Annotated:
        return describe_type(args[0])

    if origin is typing.Union or origin is types.UnionType:
        return TypeDescriptor(
            kind=ShapeKind.UNION,
            annotation=annotation,
            name="|".join(canonical_name(member) for member in args),
            members=args,
        )

    if origin is tuple:
        if annotation is typing.Tuple:
            raise UnsupportedTypeError("`Tuple` needs an element type, e.g. `tuple[int, ...]`.")
        if len(args) == 2 and args[1] is Ellipsis:
            return TypeDescriptor(
                kind=ShapeKind.SEQUENCE,
                annotation=annotation,
                name=f"tuple[{canonical_name(args[0])},...]",
                element=args[0],
                constructor=tuple,
            )
        return TypeDescriptor(
            kind=ShapeKind.TUPLE,
            annotation=annotation,
            name=f"tuple[{','.join(canonical_name(member) for member in args)}]",
            members=args,
            constructor=tuple,
        )

    if origin in _SEQUENCE_ORIGINS:
        if len(args) != 1:
            raise UnsupportedTypeError(f"Sequence type needs one element type: {annotation!r}")
        return TypeDescriptor(
            kind=ShapeKind.SEQUENCE,
            annotation=annotation,
            name=f"{_SEQUENCE_ORIGINS[origin]}[{canonical_name(args[0])}]",
            element=args[0],
            constructor=list,
        )

    if isinstance(origin, type) and issubclass(origin, collections.abc.Mapping):
        raise UnsupportedTypeError(_ambiguous_mapping_message(annotation))
    raise UnsupportedTypeError(f"Unsupported generic type: {annotation!r}")


def _describe_class(cls: type) -> TypeDescriptor:
    # Order matters: bool is an int, IntEnum is an int, NamedTuple is a tuple.
    if issubclass(cls, _NONE_TYPE):
        return describe_type(None)
    if issubclass(cls, enum.Enum):
        return TypeDescriptor(
            kind=ShapeKind.ENUM,
            annotation=cls,
            name=cls.__name__,
            labels=tuple(member.name for member in cls),  # type: ignore[attr-defined]
            instance_check=cls,
        )
    if issubclass(cls, bool):
        return _scalar(cls, "boolean")
    if dataclasses.is_dataclass(cls):
        init_fields = [field.name for field in dataclasses.fields(cls) if field.init]
        return _record(cls, init_fields, instance_check=cls)
    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        return _record(cls, list(cls._fields), instance_check=cls)  # type: ignore[attr-defined]
    if typing.is_typeddict(cls):
        return _record(cls, list(_resolve_hints(cls)), instance_check=None)
    if issubclass(cls, str):
        return _scalar(cls, "string")
    if issubclass(cls, numbers.Integral):
        return _scalar(cls, "integer")
    if issubclass(cls, numbers.Real):
        return _scalar(cls, "number")
    if issubclass(cls, collections.abc.Mapping):
        raise UnsupportedTypeError(_ambiguous_mapping_message(cls))
    if issubclass(cls, (list, tuple, collections.abc.Sequence)):
        raise UnsupportedTypeError(
            f"`{cls.__name__}` needs an element type, e.g. `{cls.__name__}[int]`."
        )
    raise UnsupportedTypeError(f"Unsupported type: {cls.__qualname__}")


def _scalar(cls: type, json_type: str) -> TypeDescriptor:
    return TypeDescriptor(
        kind=ShapeKind.SCALAR,
        annotation=cls,
        name=cls.__name__,
        json_type=json_type,
        constructor=cls,
        instance_check=cls,
    )


def _record(cls: type, field_names: list[str], *, instance_check: type | None) -> TypeDescriptor:
    hints = _resolve_hints(cls)
    missing = [name for name in field_names if name not in hints]
    if missing:
        raise UnsupportedTypeError(
            f"Record {cls.__qualname__} has fields without annotations: {missing}"
        )
    return TypeDescriptor(
        kind=ShapeKind.RECORD,
        annotation=cls,
        name=cls.__name__,
        fields=tuple(FieldDescriptor(name=name, annotation=hints[name]) for name in field_names),
        constructor=cls,
        instance_check=instance_check,
    )


def _resolve_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError) as exc:
        raise UnsupportedTypeError(
            f"Cannot resolve field annotations of {cls.__qualname__}: {exc}"
        ) from exc


def _ambiguous_mapping_message(annotation: Any) -> str:
    return f"`{annotation!r}` is ambiguous. Use a dataclass, NamedTuple or TypedDict instead."
