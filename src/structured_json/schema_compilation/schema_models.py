"""Schema compilation entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from structured_json.type_descriptors import TypeDescriptor

DEFINITIONS_KEY = "$defs"


@dataclass(frozen=True)
class CompiledFragment:
    """Schema fragment of one type and the types it references directly."""

    fragment: dict[str, Any]
    references: tuple[TypeDescriptor, ...] = ()


@dataclass(frozen=True)
class SchemaDocument:
    """Root fragment plus the flat definitions table it refers to."""

    root: dict[str, Any]
    definitions: dict[str, dict[str, Any]] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable schema, with `$defs` only when needed."""
        if not self.definitions:
            return dict(self.root)
        return {**self.root, DEFINITIONS_KEY: dict(self.definitions)}
