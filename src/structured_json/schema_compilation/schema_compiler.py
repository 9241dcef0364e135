"""Compile Python types into JSON Schema fragments and definitions."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from typing import Any
from urllib.parse import quote

from structured_json.type_descriptors import (
    ShapeKind,
    TypeDescriptor,
    UnsupportedTypeError,
    describe_type,
    is_inlineable,
)

from .schema_models import DEFINITIONS_KEY, CompiledFragment, SchemaDocument

_LOGGER = logging.getLogger(__name__)


def build_schema(annotation: Any) -> dict[str, Any]:
    """Return the JSON Schema of `annotation`, including `$defs` for referenced types."""
    return compile_schema_document(annotation).as_dict()


def compile_schema_document(annotation: Any) -> SchemaDocument:
    """Compile the root fragment, then every referenced type exactly once."""
    root = compile_fragment(annotation)
    definitions: dict[str, dict[str, Any]] = {}
    seen: dict[str, Any] = {}
    pending: deque[TypeDescriptor] = deque()
    _enqueue(root.references, pending, seen)

    while pending:
        descriptor = pending.popleft()
        compiled = compile_fragment(descriptor.annotation)
        definitions[descriptor.name] = compiled.fragment
        _LOGGER.debug("Compiled definition %s", descriptor.name)
        _enqueue(compiled.references, pending, seen)

    return SchemaDocument(root=root.fragment, definitions=definitions)


def compile_fragment(annotation: Any) -> CompiledFragment:
    """Return the fragment of one type and the non-inlineable types it references."""
    descriptor = describe_type(annotation)

    if descriptor.kind == ShapeKind.SCALAR:
        return CompiledFragment(fragment={"type": descriptor.json_type})
    if descriptor.kind == ShapeKind.ENUM:
        return CompiledFragment(fragment={"type": "string", "enum": list(descriptor.labels)})

    references: list[TypeDescriptor] = []
    if descriptor.kind == ShapeKind.SEQUENCE:
        fragment = {
            "type": "array",
            "items": _fragment_or_reference(descriptor.element, references),
        }
    elif descriptor.kind == ShapeKind.TUPLE:
        # Structured-output APIs that reject minItems/maxItems may reject this shape.
        fragment = {
            "type": "array",
            "prefixItems": [
                _fragment_or_reference(member, references) for member in descriptor.members
            ],
            "items": False,
            "minItems": len(descriptor.members),
            "maxItems": len(descriptor.members),
        }
    elif descriptor.kind == ShapeKind.RECORD:
        properties = {
            field.name: _fragment_or_reference(field.annotation, references)
            for field in descriptor.fields
        }
        fragment = {
            "type": "object",
            "properties": properties,
            "required": list(properties),
            "additionalProperties": False,
        }
    elif descriptor.kind == ShapeKind.UNION:
        alternatives: list[dict[str, Any]] = []
        for member in descriptor.members:
            member_fragment = _fragment_or_reference(member, references)
            if member_fragment not in alternatives:
                alternatives.append(member_fragment)
        fragment = {"anyOf": alternatives}
    else:  # pragma: no cover - ShapeKind is closed
        raise UnsupportedTypeError(f"Unsupported shape: {descriptor.kind}")

    return CompiledFragment(fragment=fragment, references=tuple(references))


def schema_reference(name: str) -> dict[str, str]:
    """Return a `$ref` pointing at the definitions entry called `name`."""
    segment = name.replace("~", "~0").replace("/", "~1")
    return {"$ref": f"#/{DEFINITIONS_KEY}/{quote(segment, safe='')}"}


def _fragment_or_reference(annotation: Any, references: list[TypeDescriptor]) -> dict[str, Any]:
    if is_inlineable(annotation):
        compiled = compile_fragment(annotation)
        _add_references(references, compiled.references)
        return compiled.fragment
    descriptor = describe_type(annotation)
    _add_references(references, (descriptor,))
    return schema_reference(descriptor.name)


def _add_references(
    references: list[TypeDescriptor], candidates: Iterable[TypeDescriptor]
) -> None:
    for candidate in candidates:
        if candidate not in references:
            references.append(candidate)


def _enqueue(
    references: Iterable[TypeDescriptor],
    pending: deque[TypeDescriptor],
    seen: dict[str, Any],
) -> None:
    for descriptor in references:
        known = seen.get(descriptor.name)
        if known is None:
            seen[descriptor.name] = descriptor.annotation
            pending.append(descriptor)
        elif known != descriptor.annotation:
            raise UnsupportedTypeError(
                f"Different types share the definition name '{descriptor.name}'."
            )
