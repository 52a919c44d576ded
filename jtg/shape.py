#!/usr/bin/env python3
"""
Inferred type shapes and the merge (least upper bound) operation.

A Shape is a small recursive value. Shapes are immutable by convention:
every operation here returns a new Shape and never edits its inputs.

Lattice, bottom to top:

    EMPTY  <  leaves / ARRAY / RECORD / OPAQUE  <  ANY  <  OPTIONAL(ANY)

with NULL folding into OPTIONAL and INTEGER widening into FLOAT.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional


class ShapeKind(Enum):
    """Variants of the shape lattice."""

    EMPTY = "empty"
    NULL = "null"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    OPAQUE = "opaque"
    OPTIONAL = "optional"
    ARRAY = "array"
    RECORD = "record"
    ANY = "any"


@dataclass(frozen=True)
class Field:
    """A record field: its shape and whether every sample carried it."""

    shape: "Shape"
    required: bool = True


@dataclass(frozen=True)
class Shape:
    """
    Inferred structural type.

    Attributes:
        kind: Lattice variant
        inner: Wrapped shape for OPTIONAL, element shape for ARRAY
        fields: Ordered field mapping for RECORD (first-seen order)
        type_name: External type name for OPAQUE
        name: Rename metadata from a hint. Not part of equality.
    """

    kind: ShapeKind
    inner: Optional["Shape"] = None
    fields: Optional[Dict[str, Field]] = None
    type_name: Optional[str] = None
    name: Optional[str] = field(default=None, compare=False)

    @property
    def is_optional(self) -> bool:
        return self.kind is ShapeKind.OPTIONAL

    @property
    def is_record(self) -> bool:
        return self.kind is ShapeKind.RECORD

    @property
    def is_array(self) -> bool:
        return self.kind is ShapeKind.ARRAY

    def unwrap_optional(self) -> "Shape":
        """Return the wrapped shape of an OPTIONAL, or the shape itself."""
        if self.kind is ShapeKind.OPTIONAL:
            return self.inner
        return self

    def renamed(self, name: Optional[str]) -> "Shape":
        """
        Attach rename metadata.

        On an OPTIONAL the name is attached to the wrapped shape, which is
        where naming derivation looks for it.
        """
        if self.kind is ShapeKind.OPTIONAL:
            return replace(self, inner=self.inner.renamed(name))
        if self.name == name:
            return self
        return replace(self, name=name)

    def describe(self) -> str:
        """Render the shape in the compact text form accepted by hints.parse_shape."""
        kind = self.kind
        if kind is ShapeKind.OPTIONAL:
            return f"{self.inner.describe()}?"
        if kind is ShapeKind.ARRAY:
            return f"[{self.inner.describe()}]"
        if kind is ShapeKind.OPAQUE:
            return f"opaque<{self.type_name}>" if self.type_name else "opaque"
        if kind is ShapeKind.RECORD:
            parts = []
            for key, f in self.fields.items():
                label = key if _is_plain_key(key) else json.dumps(key)
                marker = "" if f.required else "?"
                parts.append(f"{label}{marker}: {f.shape.describe()}")
            return "{" + ", ".join(parts) + "}"
        return kind.value

    def __str__(self) -> str:
        return self.describe()


def _is_plain_key(key: str) -> bool:
    if not key or key[0].isdigit():
        return False
    return all((c.isascii() and c.isalnum()) or c == "_" for c in key)


EMPTY = Shape(ShapeKind.EMPTY)
NULL = Shape(ShapeKind.NULL)
BOOL = Shape(ShapeKind.BOOL)
INTEGER = Shape(ShapeKind.INTEGER)
FLOAT = Shape(ShapeKind.FLOAT)
STRING = Shape(ShapeKind.STRING)
ANY = Shape(ShapeKind.ANY)


def optional(inner: Shape) -> Shape:
    """Wrap ``inner`` in OPTIONAL. Never nests; a bare null becomes OPTIONAL(EMPTY)."""
    if inner.kind is ShapeKind.OPTIONAL:
        return inner
    if inner.kind is ShapeKind.NULL:
        return Shape(ShapeKind.OPTIONAL, inner=Shape(ShapeKind.EMPTY, name=inner.name))
    return Shape(ShapeKind.OPTIONAL, inner=inner)


def array_of(element: Shape) -> Shape:
    return Shape(ShapeKind.ARRAY, inner=element)


def record(fields: Dict[str, Field]) -> Shape:
    return Shape(ShapeKind.RECORD, fields=dict(fields))


def opaque(type_name: Optional[str] = None) -> Shape:
    return Shape(ShapeKind.OPAQUE, type_name=type_name)


def merge(a: Shape, b: Shape) -> Shape:
    """
    Compute the least upper bound of two shapes.

    Total, commutative, associative and idempotent. Conflicts never raise;
    they degrade to ANY, or to OPTIONAL(ANY) when either side can be null.
    Record fields keep the order of ``a`` followed by
    the fields only ``b`` has.

    Args:
        a: Shape from the earlier sample
        b: Shape from the later sample

    Returns:
        Merged shape, carrying the rename metadata of ``a`` or else ``b``
    """
    merged = _merge_structure(a, b)
    name = a.name or b.name
    if name is None:
        return merged
    return merged.renamed(name)


def _merge_structure(a: Shape, b: Shape) -> Shape:
    if a.kind is ShapeKind.EMPTY:
        return b
    if b.kind is ShapeKind.EMPTY:
        return a

    # Nullability survives ANY: NULL ⊔ ANY and OPTIONAL(x) ⊔ ANY are OPTIONAL(ANY).
    if a.kind is ShapeKind.NULL and b.kind is ShapeKind.NULL:
        return NULL
    if a.kind is ShapeKind.NULL:
        return optional(b)
    if b.kind is ShapeKind.NULL:
        return optional(a)
    if a.is_optional or b.is_optional:
        return optional(merge(a.unwrap_optional(), b.unwrap_optional()))

    if a.kind is ShapeKind.ANY or b.kind is ShapeKind.ANY:
        return ANY

    if a.kind is b.kind:
        if a.kind is ShapeKind.ARRAY:
            return array_of(merge(a.inner, b.inner))
        if a.kind is ShapeKind.RECORD:
            return _merge_records(a, b)
        if a.kind is ShapeKind.OPAQUE and a.type_name != b.type_name:
            return ANY
        return a

    if {a.kind, b.kind} == {ShapeKind.INTEGER, ShapeKind.FLOAT}:
        return FLOAT
    return ANY


def _merge_records(a: Shape, b: Shape) -> Shape:
    fields = {}
    for key, fa in a.fields.items():
        fb = b.fields.get(key)
        if fb is None:
            fields[key] = Field(optional(fa.shape), required=False)
        else:
            fields[key] = Field(merge(fa.shape, fb.shape), fa.required and fb.required)
    for key, fb in b.fields.items():
        if key not in a.fields:
            fields[key] = Field(optional(fb.shape), required=False)
    return record(fields)


def finalize(shape: Shape) -> Shape:
    """
    Resolve placeholders once every sample has been merged.

    A lone NULL becomes OPTIONAL(ANY) and a remaining EMPTY (for instance the
    element of an array that was always empty) becomes ANY.
    """
    kind = shape.kind
    if kind is ShapeKind.NULL:
        return Shape(ShapeKind.OPTIONAL, inner=Shape(ShapeKind.ANY, name=shape.name))
    if kind is ShapeKind.EMPTY:
        return Shape(ShapeKind.ANY, name=shape.name)
    if kind in (ShapeKind.OPTIONAL, ShapeKind.ARRAY):
        return replace(shape, inner=finalize(shape.inner))
    if kind is ShapeKind.RECORD:
        fields = {
            key: Field(finalize(f.shape), f.required) for key, f in shape.fields.items()
        }
        return replace(shape, fields=fields)
    return shape
