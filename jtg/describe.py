#!/usr/bin/env python3
"""
Tabular report of the fields of an inferred shape.
"""

from typing import Optional

import pandas as pd

from jtg.hints import child_path, escape_key
from jtg.internal_schemas.shape_field_schema import ShapeFieldDF, validate_shape_fields
from jtg.naming import collect_record_types, field_name
from jtg.shape import Shape
from jtg.word_case import StringTransform

COLUMNS = ["type_name", "path", "key", "field_name", "kind", "required", "nullable", "signature"]


def describe_shape(
    shape: Shape, root_name: str = "Root", transform: Optional[StringTransform] = None
) -> ShapeFieldDF:
    """
    List every record field reachable from ``shape``.

    Args:
        shape: Inferred shape
        root_name: Type name of the root record
        transform: Identifier style for the field_name column (lowerCamelCase by default)

    Returns:
        DataFrame validated against ShapeFieldSchema, one row per field
    """
    rows = []
    for named in collect_record_types(root_name, shape):
        for key, f in named.shape.fields.items():
            value = f.shape.unwrap_optional()
            rows.append(
                {
                    "type_name": named.type_name,
                    "path": child_path(named.path, escape_key(key)),
                    "key": key,
                    "field_name": field_name(key, transform),
                    "kind": value.kind.value,
                    "required": f.required,
                    "nullable": f.shape.is_optional,
                    "signature": f.shape.describe(),
                }
            )

    df = pd.DataFrame(rows, columns=COLUMNS)
    return validate_shape_fields(df)
