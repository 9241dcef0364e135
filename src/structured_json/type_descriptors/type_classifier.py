"""Decide whether a type is embedded directly or emitted as a named definition."""

from __future__ import annotations

from typing import Any

from .descriptor_models import ShapeKind
from .type_introspection import describe_type


def is_inlineable(annotation: Any) -> bool:
    """Return True when the schema of `annotation` is never given as a `$ref`.

    Scalars and unions are always inlined. Records and enumerations are always
    referenced. Sequences and fixed tuples follow their element types.
    """
    descriptor = describe_type(annotation)
    if descriptor.kind in (ShapeKind.SCALAR, ShapeKind.UNION):
        return True
    if descriptor.kind == ShapeKind.SEQUENCE:
        return is_inlineable(descriptor.element)
    if descriptor.kind == ShapeKind.TUPLE:
        return all(is_inlineable(member) for member in descriptor.members)
    return False
