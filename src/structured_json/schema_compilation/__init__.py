"""Schema compilation exports."""

from .schema_compiler import (
    build_schema,
    compile_fragment,
    compile_schema_document,
    schema_reference,
)
from .schema_models import DEFINITIONS_KEY, CompiledFragment, SchemaDocument

__all__ = [
    "DEFINITIONS_KEY",
    "CompiledFragment",
    "SchemaDocument",
    "build_schema",
    "compile_fragment",
    "compile_schema_document",
    "schema_reference",
]
