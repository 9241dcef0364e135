"""Type classifier tests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from structured_json.type_descriptors import is_inlineable


class Color(Enum):
    red = "r"
    green = "g"


@dataclass
class Foo:
    x: int
    y: str


def test_scalars_and_unions_are_inlined() -> None:
    for annotation in (str, int, float, bool, type(None), int | str, Foo | None, Color | None):
        assert is_inlineable(annotation), annotation


def test_records_and_enums_are_referenced() -> None:
    assert not is_inlineable(Foo)
    assert not is_inlineable(Color)


def test_collections_follow_their_elements() -> None:
    assert is_inlineable(list[int])
    assert is_inlineable(tuple[str, ...])
    assert is_inlineable(tuple[int, str])
    assert is_inlineable(list[Foo | None])
    assert not is_inlineable(list[Foo])
    assert not is_inlineable(list[list[Color]])
    assert not is_inlineable(tuple[int, Foo])
