#!/usr/bin/env python3
"""
Path-scoped override directives ("hints") consulted during inference.

Hints are keyed by JSON-pointer-like paths. Object steps are the (escaped)
keys; every array element shares the fixed step ``-``, so a hint applies to
all elements of an array rather than one index:

    /cards/-/legalities      every card's "legalities" field
    /-                        every element of a top-level array
    ""                        the document root

A forced shape is given either as a Shape or as a short description such as
``"string"``, ``"[integer]"``, ``"float?"`` or ``"{id: integer, tags?: [string]}"``.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from loguru import logger

from jtg.errors import InvalidHintError
from jtg.shape import (
    ANY,
    BOOL,
    FLOAT,
    INTEGER,
    NULL,
    STRING,
    Field,
    Shape,
    array_of,
    opaque,
    optional,
    record,
)

ROOT = ""
ARRAY_ELEMENT = "-"


def escape_key(key: str) -> str:
    """Escape an object key for use as one pointer step."""
    return key.replace("~", "~0").replace("/", "~1")


def child_path(path: str, step: str) -> str:
    """Extend ``path`` by one already-escaped step."""
    return f"{path}/{step}"


def normalize_pointer(pointer: str) -> str:
    """
    Normalize a caller supplied pointer to the form the engine builds.

    ``""``, ``"/"``, ``"#"`` and ``"#/"`` all name the root. A leading ``#``
    (URI fragment form) is dropped and a missing leading slash is added.
    """
    pointer = pointer.strip()
    if pointer.startswith("#"):
        pointer = pointer[1:]
    if pointer in ("", "/"):
        return ROOT
    if not pointer.startswith("/"):
        pointer = "/" + pointer
    return pointer


def split_pointer(pointer: str) -> List[str]:
    """Split a pointer into unescaped steps."""
    pointer = normalize_pointer(pointer)
    if pointer == ROOT:
        return []
    return [
        step.replace("~1", "/").replace("~0", "~") for step in pointer[1:].split("/")
    ]


class HintKind(Enum):
    FORCE_SHAPE = "force_shape"
    RENAME = "rename"
    OPAQUE = "opaque"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class Hint:
    """A single override directive."""

    kind: HintKind
    shape: Optional[Shape] = None
    name: Optional[str] = None

    @classmethod
    def force(cls, shape: Union[Shape, str]) -> "Hint":
        """Use ``shape`` verbatim at the path instead of inferring it."""
        if isinstance(shape, str):
            shape = parse_shape(shape)
        return cls(HintKind.FORCE_SHAPE, shape=shape)

    @classmethod
    def rename(cls, name: str) -> "Hint":
        """Name the type produced at the path ``name`` instead of the source key."""
        if not name:
            raise InvalidHintError("rename hint needs a non-empty name")
        return cls(HintKind.RENAME, name=name)

    @classmethod
    def opaque(cls, type_name: Optional[str] = None) -> "Hint":
        """Treat the content at the path as an opaque leaf, optionally of a named type."""
        return cls(HintKind.OPAQUE, shape=opaque(type_name), name=type_name)

    @classmethod
    def optional(cls) -> "Hint":
        """Always treat the value at the path as optional."""
        return cls(HintKind.OPTIONAL)

    @property
    def replaces_inference(self) -> bool:
        return self.kind in (HintKind.FORCE_SHAPE, HintKind.OPAQUE)


class HintDirectory:
    """
    Mapping from normalized pointer to the hints declared for it.

    Built once from ordered (pointer, hint) pairs and only read afterwards.
    Several hints may share a pointer; they are kept in declaration order.
    """

    def __init__(self, pairs: Iterable[Tuple[str, Hint]] = ()):
        self._hints: Dict[str, List[Hint]] = {}
        for pointer, hint in pairs:
            self._add(pointer, hint)

    def _add(self, pointer: str, hint: Hint) -> None:
        if not isinstance(hint, Hint):
            raise InvalidHintError(f"Expected a Hint for {pointer!r}, got {type(hint).__name__}")
        key = normalize_pointer(pointer)
        self._hints.setdefault(key, []).append(hint)
        logger.debug(f"Registered {hint.kind.value} hint at {key!r}")

    def lookup(self, path: str) -> Tuple[Hint, ...]:
        """Return the hints declared for exactly ``path`` (possibly none)."""
        return tuple(self._hints.get(path, ()))

    def paths(self) -> List[str]:
        return list(self._hints)

    def __contains__(self, path: str) -> bool:
        return path in self._hints

    def __len__(self) -> int:
        return len(self._hints)

    def __repr__(self) -> str:
        return f"HintDirectory({self.paths()!r})"


def as_hint_directory(hints: Union[HintDirectory, Iterable[Tuple[str, Hint]], None]) -> HintDirectory:
    if hints is None:
        return HintDirectory()
    if isinstance(hints, HintDirectory):
        return hints
    return HintDirectory(hints)


def hints_from_config(config: Dict[str, Dict[str, Any]]) -> List[Tuple[str, Hint]]:
    """
    Build (pointer, hint) pairs from a plain mapping, e.g. loaded from JSON.

    Recognised directive keys per pointer:

    - ``use_type`` / ``force``: shape description to force
    - ``type_name`` / ``rename``: replacement type name
    - ``opaque_type``: opaque type name, ``true`` for an unnamed opaque leaf,
      or ``false`` for none
    - ``optional``: ``true`` to mark the path always optional (a boolean)

    Args:
        config: Mapping of pointer -> directive mapping

    Returns:
        Ordered list of (pointer, Hint)

    Raises:
        InvalidHintError: If a directive is unknown or malformed
    """
    pairs = []
    for pointer, directives in config.items():
        if not isinstance(directives, dict):
            raise InvalidHintError(f"Hints for {pointer!r} must be an object")
        for key, value in directives.items():
            if key in ("use_type", "force"):
                pairs.append((pointer, Hint.force(_directive_str(pointer, key, value))))
            elif key in ("type_name", "rename"):
                pairs.append((pointer, Hint.rename(_directive_str(pointer, key, value))))
            elif key == "opaque_type":
                if isinstance(value, bool):
                    if value:
                        pairs.append((pointer, Hint.opaque()))
                else:
                    pairs.append((pointer, Hint.opaque(_directive_str(pointer, key, value))))
            elif key == "optional":
                if not isinstance(value, bool):
                    raise InvalidHintError(
                        f"Hint directive 'optional' for {pointer!r} must be true or false, got {value!r}"
                    )
                if value:
                    pairs.append((pointer, Hint.optional()))
            else:
                raise InvalidHintError(f"Unknown hint directive {key!r} for {pointer!r}")
    return pairs


def _directive_str(pointer: str, key: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidHintError(
            f"Hint directive {key!r} for {pointer!r} must be a non-empty string, got {value!r}"
        )
    return value


_SHAPE_NAMES = {
    "null": NULL,
    "bool": BOOL,
    "boolean": BOOL,
    "integer": INTEGER,
    "int": INTEGER,
    "float": FLOAT,
    "number": FLOAT,
    "string": STRING,
    "str": STRING,
    "any": ANY,
}


def parse_shape(description: str) -> Shape:
    """
    Parse a shape description.

    Grammar::

        shape := atom "?"*
        atom  := NAME | "[" shape "]" | "{" [field ("," field)*] "}"
               | "opaque" ["<" NAME ">"]
        field := (IDENT | "quoted key") ["?"] ":" shape

    A field marked ``?`` may be missing, so its shape is also wrapped in
    OPTIONAL, the same as a field missing from some samples.

    Raises:
        InvalidHintError: If the description is malformed
    """
    if not isinstance(description, str):
        raise InvalidHintError(f"Shape description must be a string, got {description!r}")
    parser = _ShapeParser(description)
    try:
        shape = parser.parse_shape()
    except RecursionError as e:
        raise InvalidHintError("Shape description is nested too deeply") from e
    parser.skip_space()
    if not parser.at_end():
        parser.fail("unexpected trailing text")
    return shape


class _ShapeParser:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def fail(self, message: str):
        raise InvalidHintError(
            f"Invalid shape description {self.text!r} at offset {self.pos}: {message}"
        )

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return "" if self.at_end() else self.text[self.pos]

    def skip_space(self) -> None:
        while not self.at_end() and self.text[self.pos].isspace():
            self.pos += 1

    def expect(self, c: str) -> None:
        self.skip_space()
        if self.peek() != c:
            self.fail(f"expected {c!r}")
        self.pos += 1

    def word(self) -> str:
        self.skip_space()
        start = self.pos
        while not self.at_end() and (self.text[self.pos].isalnum() or self.text[self.pos] in "_$"):
            self.pos += 1
        if start == self.pos:
            self.fail("expected a name")
        return self.text[start:self.pos]

    def quoted(self) -> str:
        start = self.pos
        self.pos += 1
        while not self.at_end() and self.text[self.pos] != '"':
            self.pos += 2 if self.text[self.pos] == "\\" else 1
        if self.at_end():
            self.fail("unterminated quoted key")
        self.pos += 1
        try:
            return json.loads(self.text[start:self.pos])
        except ValueError:
            self.pos = start
            self.fail("invalid quoted key")

    def parse_shape(self) -> Shape:
        shape = self.parse_atom()
        self.skip_space()
        while self.peek() == "?":
            self.pos += 1
            shape = optional(shape)
            self.skip_space()
        return shape

    def parse_atom(self) -> Shape:
        self.skip_space()
        c = self.peek()
        if c == "[":
            self.pos += 1
            element = self.parse_shape()
            self.expect("]")
            return array_of(element)
        if c == "{":
            self.pos += 1
            return self.parse_record()
        name = self.word()
        if name == "opaque":
            self.skip_space()
            if self.peek() != "<":
                return opaque()
            self.pos += 1
            type_name = self.word()
            self.expect(">")
            return opaque(type_name)
        shape = _SHAPE_NAMES.get(name.lower())
        if shape is None:
            self.pos -= len(name)
            self.fail(f"unknown shape {name!r}")
        return shape

    def parse_record(self) -> Shape:
        fields = {}
        self.skip_space()
        if self.peek() == "}":
            self.pos += 1
            return record(fields)
        while True:
            self.skip_space()
            key = self.quoted() if self.peek() == '"' else self.word()
            self.skip_space()
            required = True
            if self.peek() == "?":
                self.pos += 1
                required = False
            self.expect(":")
            shape = self.parse_shape()
            fields[key] = Field(shape if required else optional(shape), required)
            self.skip_space()
            if self.peek() == ",":
                self.pos += 1
                continue
            self.expect("}")
            return record(fields)
