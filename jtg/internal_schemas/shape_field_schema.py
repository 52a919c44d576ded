#!/usr/bin/env python3
"""
Pandera schema definitions for shape field reports.
"""

import pandas as pd
import pandera.pandas as pa
from pandera.typing import DataFrame, Series


class ShapeFieldSchema(pa.DataFrameModel):
    """
    Schema for the field listing produced by jtg.describe.describe_shape.

    One row per record field reachable from the root shape.
    """

    # Owning record
    type_name: Series[str] = pa.Field(description="Derived name of the owning record type")
    path: Series[str] = pa.Field(description="Pointer of the field, array elements as '-'")

    # Field naming
    key: Series[str] = pa.Field(description="Source key as found in the samples")
    field_name: Series[str] = pa.Field(description="Derived field identifier")

    # Field shape
    kind: Series[str] = pa.Field(
        isin=[
            "empty",
            "null",
            "bool",
            "integer",
            "float",
            "string",
            "opaque",
            "array",
            "record",
            "any",
        ],
        description="Shape kind of the field value, with any optional wrapper removed",
    )
    required: Series[bool] = pa.Field(description="Whether every sample carried the field")
    nullable: Series[bool] = pa.Field(description="Whether the field value may be null")
    signature: Series[str] = pa.Field(description="Compact description of the field shape")

    class Config:
        strict = True
        coerce = True


def validate_shape_fields(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate a shape field report against the schema.

    Args:
        df: DataFrame to validate

    Returns:
        Validated DataFrame

    Raises:
        pandera.errors.SchemaError: If validation fails
    """
    return ShapeFieldSchema.validate(df)


ShapeFieldDF = DataFrame[ShapeFieldSchema]
