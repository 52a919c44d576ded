"""
jtg: infer one structural type (Shape) from sample JSON documents.

Emitters turn the Shape into source code; the naming helpers here make
every emitter name types and fields the same way.
"""

from .errors import InvalidHintError, JTError, ParseError
from .hints import Hint, HintDirectory, HintKind, hints_from_config, parse_shape
from .inference import infer, infer_samples, infer_values
from .naming import collect_record_types, field_name, type_name_for_field
from .options import Options
from .shape import Field, Shape, ShapeKind, merge
from .word_case import (
    StringTransform,
    kebab_case,
    lower_camel_case,
    snake_case,
    to_singular,
    type_case,
)

__version__ = "0.1.0"
__all__ = [
    "Field",
    "Hint",
    "HintDirectory",
    "HintKind",
    "InvalidHintError",
    "JTError",
    "Options",
    "ParseError",
    "Shape",
    "ShapeKind",
    "StringTransform",
    "collect_record_types",
    "field_name",
    "hints_from_config",
    "infer",
    "infer_samples",
    "infer_values",
    "kebab_case",
    "lower_camel_case",
    "merge",
    "parse_shape",
    "snake_case",
    "to_singular",
    "type_case",
    "type_name_for_field",
]
