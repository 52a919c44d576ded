#!/usr/bin/env python3
"""
Shape inference from sample JSON documents.

Raw input is parsed as a stream of one or more JSON documents (concatenated
or whitespace/newline separated, e.g. JSON Lines). Every document is one
sample. Each sample is converted to a Shape while the hint directory is
consulted at every visited path, and the samples are folded left to right
with merge, so record fields keep their first-appearance order.
"""

import json
from typing import Any, Iterable, Iterator, List, Optional, Set, Tuple, Union

from loguru import logger

from jtg.errors import ParseError
from jtg.hints import (
    ARRAY_ELEMENT,
    ROOT,
    Hint,
    HintDirectory,
    HintKind,
    as_hint_directory,
    child_path,
    escape_key,
    split_pointer,
)
from jtg.shape import (
    BOOL,
    EMPTY,
    FLOAT,
    INTEGER,
    NULL,
    STRING,
    Field,
    Shape,
    array_of,
    finalize,
    merge,
    optional,
    record,
)

Hints = Union[HintDirectory, Iterable[Tuple[str, Hint]], None]

# Deepest array/object nesting accepted in a sample. Conversion and merge
# recurse once per level, so deeper input is rejected up front.
MAX_DEPTH = 200

# Separators allowed between documents (RFC 8259 whitespace).
JSON_WHITESPACE = " \t\n\r"


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


_decoder = json.JSONDecoder(parse_constant=_reject_constant)


def _decode(raw: Union[bytes, bytearray, str]) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return bytes(raw).decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"Input is not valid UTF-8: {e.reason}", position=e.start) from e


def parse_json_stream(raw: Union[bytes, bytearray, str]) -> List[Any]:
    """
    Parse every JSON document in ``raw``.

    Args:
        raw: Input bytes (UTF-8) or text holding one or more JSON documents

    Returns:
        The parsed documents, in input order

    Raises:
        ParseError: If the input is malformed, nested deeper than MAX_DEPTH
            or holds no document at all
    """
    text = _decode(raw)
    documents = []
    pos = 0
    end = len(text)
    while True:
        while pos < end and text[pos] in JSON_WHITESPACE:
            pos += 1
        if pos >= end:
            break
        start = pos
        try:
            value, pos = _decoder.raw_decode(text, pos)
        except RecursionError as e:
            raise ParseError(
                f"JSON document nested deeper than {MAX_DEPTH} levels", position=start
            ) from e
        except json.JSONDecodeError as e:
            raise ParseError(
                f"An error occurred while parsing JSON: {e.msg}",
                line=e.lineno,
                column=e.colno,
                position=e.pos,
            ) from e
        except ValueError as e:
            raise ParseError(f"An error occurred while parsing JSON: {e}", position=pos) from e
        check_depth(value, position=start)
        documents.append(value)

    if not documents:
        raise ParseError("No JSON document found in input", position=0)
    return documents


def check_depth(value: Any, position: Optional[int] = None) -> None:
    """
    Reject a parsed value nested deeper than MAX_DEPTH arrays/objects.

    Walks the value with an explicit stack, so it is safe on any input.

    Raises:
        ParseError: If the nesting limit is exceeded
    """
    stack = [(value, 1)]
    while stack:
        current, depth = stack.pop()
        if isinstance(current, dict):
            children = current.values()
        elif isinstance(current, list):
            children = current
        else:
            continue
        if depth > MAX_DEPTH:
            raise ParseError(f"JSON document nested deeper than {MAX_DEPTH} levels", position=position)
        stack.extend((child, depth + 1) for child in children)


def select_values(value: Any, pointer: str) -> Iterator[Any]:
    """
    Yield the values ``pointer`` selects inside ``value``.

    A ``-`` step yields every element of an array. Steps that do not resolve
    yield nothing.
    """
    steps = split_pointer(pointer)

    def walk(current: Any, remaining: List[str]) -> Iterator[Any]:
        if not remaining:
            yield current
            return
        step, rest = remaining[0], remaining[1:]
        if isinstance(current, list):
            if step == ARRAY_ELEMENT:
                for item in current:
                    yield from walk(item, rest)
            elif step.isdigit() and int(step) < len(current):
                yield from walk(current[int(step)], rest)
        elif isinstance(current, dict) and step in current:
            yield from walk(current[step], rest)

    yield from walk(value, steps)


class ShapeInferrer:
    """
    Converts parsed sample values into shapes.

    The hint directory is only read. Paths that had hints applied are
    collected in ``used_paths`` for this inferrer.
    """

    def __init__(self, hints: Hints = None):
        self.hints = as_hint_directory(hints)
        self.used_paths: Set[str] = set()

    def shape_of(self, value: Any, path: str = ROOT) -> Shape:
        """Infer the shape of one value found at ``path``."""
        hints = self.hints.lookup(path)
        if not hints:
            return self._convert(value, path)

        self.used_paths.add(path)
        forced = next((hint for hint in hints if hint.replaces_inference), None)
        if forced is not None:
            logger.debug(f"Using {forced.kind.value} hint at {path!r}: {forced.shape}")
            shape = forced.shape
        else:
            shape = self._convert(value, path)

        for hint in hints:
            if hint.kind is HintKind.OPTIONAL:
                shape = optional(shape)
            elif hint.kind is HintKind.RENAME:
                shape = shape.renamed(hint.name)
        return shape

    def is_forced_optional(self, path: str) -> bool:
        return any(hint.kind is HintKind.OPTIONAL for hint in self.hints.lookup(path))

    def _convert(self, value: Any, path: str) -> Shape:
        if value is None:
            return NULL
        if isinstance(value, bool):
            return BOOL
        if isinstance(value, int):
            return INTEGER
        if isinstance(value, float):
            return FLOAT
        if isinstance(value, str):
            return STRING
        if isinstance(value, list):
            element_path = child_path(path, ARRAY_ELEMENT)
            element = EMPTY
            for item in value:
                element = merge(element, self.shape_of(item, element_path))
            return array_of(element)
        if isinstance(value, dict):
            fields = {}
            for key, item in value.items():
                field_path = child_path(path, escape_key(key))
                fields[key] = Field(
                    self.shape_of(item, field_path),
                    required=not self.is_forced_optional(field_path),
                )
            return record(fields)
        raise TypeError(f"Unsupported value of type {type(value).__name__} at {path!r}")

    def fold(self, values: Iterable[Any]) -> Shape:
        """Merge the shapes of ``values`` left to right, without finalizing."""
        shape = EMPTY
        for value in values:
            shape = merge(shape, self.shape_of(value))
        return shape

    def log_unused_hints(self) -> None:
        unused = [path for path in self.hints.paths() if path not in self.used_paths]
        if unused:
            logger.debug(f"Hints never matched any sample: {unused}")


def infer_values(values: Iterable[Any], hints: Hints = None) -> Shape:
    """
    Infer one shape from already parsed sample values.

    Args:
        values: Parsed JSON values, one per sample
        hints: HintDirectory or (pointer, Hint) pairs

    Returns:
        The finalized, merged shape

    Raises:
        ParseError: If a value is nested deeper than MAX_DEPTH
    """
    samples = list(values)
    for sample in samples:
        check_depth(sample)
    return _fold_samples(samples, hints)


def _fold_samples(samples: List[Any], hints: Hints) -> Shape:
    inferrer = ShapeInferrer(hints)
    shape = finalize(inferrer.fold(samples))
    inferrer.log_unused_hints()
    logger.debug(f"Inferred {shape} from {len(samples)} samples")
    return shape


def _unwrapped(documents: Iterable[Any], unwrap: str) -> Iterator[Any]:
    for document in documents:
        yield from select_values(document, unwrap)


def infer(raw: Union[bytes, bytearray, str], hints: Hints = None, unwrap: str = "") -> Shape:
    """
    Infer the shape of every JSON document in ``raw``.

    Args:
        raw: One or more JSON documents as UTF-8 bytes or text
        hints: HintDirectory or ordered (pointer, Hint) pairs
        unwrap: Pointer selecting the part of each document to infer from

    Returns:
        The merged shape of all samples

    Raises:
        ParseError: If the input is malformed or nested deeper than
            MAX_DEPTH. No shape is produced.
    """
    documents = parse_json_stream(raw)
    return _fold_samples(list(_unwrapped(documents, unwrap)), hints)


def infer_samples(
    raws: Iterable[Union[bytes, bytearray, str]],
    hints: Hints = None,
    unwrap: str = "",
) -> Shape:
    """
    Infer one shape from several separately supplied inputs.

    Every input is parsed before any inference starts, so a malformed input
    fails the whole call.
    """
    documents: List[Any] = []
    for raw in raws:
        documents.extend(parse_json_stream(raw))
    return _fold_samples(list(_unwrapped(documents, unwrap)), hints)
