#!/usr/bin/env python3
"""
Type and field name derivation shared by every emitter.

Emitters get the finished Shape together with these helpers, so that a
nested record is named the same way whatever the output language.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from jtg.hints import ARRAY_ELEMENT, ROOT, child_path, escape_key
from jtg.shape import Shape, ShapeKind
from jtg.word_case import StringTransform, lower_camel_case, snake_case, to_singular, type_case

DEFAULT_TYPE_NAME = "GeneratedType"


def type_name_for_field(key: str, shape: Shape) -> str:
    """
    Derive the type name for the value of record field ``key``.

    A rename hint wins over the key. Collection fields name their element
    type, so the key is singularized first: ``"cards"`` -> ``"Card"``.
    """
    node = shape.unwrap_optional()
    if node.name:
        return type_case(node.name)
    if node.kind is ShapeKind.ARRAY:
        return type_case(to_singular(key))
    return type_case(key)


def field_name(key: str, transform: Optional[StringTransform] = None, style: str = "camel") -> str:
    """
    Derive a field identifier from a source key.

    Args:
        key: Source key as found in the samples
        transform: Explicit identifier style; overrides ``style``
        style: ``"camel"`` for lowerCamelCase or ``"snake"`` for snake_case

    Returns:
        The field identifier
    """
    if transform is not None:
        return transform.apply(key)
    if style == "snake":
        return snake_case(key)
    if style == "camel":
        return lower_camel_case(key)
    raise ValueError(f"Unknown field name style: {style}")


class NameRegistry:
    """Hands out unique type names: Card, Card2, Card3, ..."""

    def __init__(self, default: str = DEFAULT_TYPE_NAME):
        self.default = default
        self._counts: Dict[str, int] = {}

    def claim(self, name: str) -> str:
        name = name or self.default
        count = self._counts.get(name, 0) + 1
        self._counts[name] = count
        if count == 1:
            return name
        candidate = f"{name}{count}"
        while candidate in self._counts:
            count += 1
            candidate = f"{name}{count}"
        self._counts[name] = count
        self._counts[candidate] = 1
        return candidate


@dataclass(frozen=True)
class NamedRecord:
    """A record type reachable from the root shape, with its derived name."""

    type_name: str
    shape: Shape
    path: str


def collect_record_types(root_name: str, shape: Shape) -> List[NamedRecord]:
    """
    List every record reachable from ``shape``, depth first, with unique names.

    The root record is named ``root_name``; nested records are named from
    the field that holds them (see type_name_for_field).
    """
    registry = NameRegistry()
    found: List[NamedRecord] = []
    _collect(type_case(root_name), shape, ROOT, registry, found)
    return found


def _collect(name: str, shape: Shape, path: str, registry: NameRegistry, found: List[NamedRecord]) -> None:
    node = shape.unwrap_optional()
    if node.kind is ShapeKind.ARRAY:
        _collect(name, node.inner, child_path(path, ARRAY_ELEMENT), registry, found)
        return
    if node.kind is not ShapeKind.RECORD:
        return
    if node.name:
        name = type_case(node.name)

    found.append(NamedRecord(registry.claim(name), node, path))
    for key, f in node.fields.items():
        _collect(
            type_name_for_field(key, f.shape),
            f.shape,
            child_path(path, escape_key(key)),
            registry,
            found,
        )
