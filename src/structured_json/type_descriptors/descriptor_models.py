"""Type descriptor entities."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ShapeKind(str, Enum):
    """Closed set of type shapes understood by the compiler and the decoder."""

    SCALAR = "scalar"
    ENUM = "enum"
    RECORD = "record"
    UNION = "union"
    TUPLE = "tuple"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class FieldDescriptor:
    """One declared record field."""

    name: str
    annotation: Any


@dataclass(frozen=True)
class TypeDescriptor:  # pylint: disable=too-many-instance-attributes
    """Shallow description of one annotation.

    Member, field and element annotations are kept as annotations rather than
    nested descriptors, so a record may refer to itself.
    """

    kind: ShapeKind
    annotation: Any
    name: str
    json_type: str | None = None
    constructor: Callable[..., Any] | None = None
    fields: tuple[FieldDescriptor, ...] = ()
    labels: tuple[str, ...] = ()
    members: tuple[Any, ...] = ()
    element: Any = None
    instance_check: type | None = None

    @property
    def field_names(self) -> tuple[str, ...]:
        """Return record field names in declaration order."""
        return tuple(field.name for field in self.fields)
