"""
Internal schemas for jtg tabular reports using Pandera
"""

from .shape_field_schema import ShapeFieldSchema, validate_shape_fields

__all__ = ["ShapeFieldSchema", "validate_shape_fields"]
