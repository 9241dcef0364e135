"""Resolve `module:QualName` references to Python types."""

from __future__ import annotations

import importlib
from typing import Any


class TypeReferenceError(Exception):
    """Raised when a type reference cannot be imported."""


def load_type(reference: str) -> Any:
    """Import the object named by `package.module:Outer.Inner`."""
    module_name, separator, qualname = reference.strip().partition(":")
    if not separator or not module_name or not qualname:
        raise TypeReferenceError(
            f"Type reference must look like 'package.module:TypeName', got: {reference!r}"
        )
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise TypeReferenceError(f"Cannot import module '{module_name}': {exc}") from exc

    for attribute in qualname.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as exc:
            raise TypeReferenceError(
                f"Module '{module_name}' has no attribute path '{qualname}'."
            ) from exc
    return target
