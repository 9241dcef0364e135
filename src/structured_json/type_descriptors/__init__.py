"""Type descriptor exports."""

from .descriptor_models import FieldDescriptor, ShapeKind, TypeDescriptor
from .type_classifier import is_inlineable
from .type_introspection import UnsupportedTypeError, canonical_name, describe_type
from .type_loading import TypeReferenceError, load_type

__all__ = [
    "FieldDescriptor",
    "ShapeKind",
    "TypeDescriptor",
    "UnsupportedTypeError",
    "TypeReferenceError",
    "canonical_name",
    "describe_type",
    "is_inlineable",
    "load_type",
]
