"""
Test cases for the tabular shape field report.
"""

import pandas as pd

from jtg.describe import describe_shape
from jtg.inference import infer
from jtg.shape import STRING, array_of
from jtg.word_case import StringTransform

REPORT_COLUMNS = ["type_name", "path", "key", "field_name", "kind", "required", "nullable", "signature"]


class TestDescribeShape:
    """Test cases for describe_shape"""

    def test_rows_per_field(self):
        """Test one validated row per record field"""
        shape = infer(b'{"user_id": 1, "tags": ["a"], "profile": {"display_name": null}}\n{"user_id": 2}')

        df = describe_shape(shape, root_name="user")

        assert list(df.columns) == REPORT_COLUMNS
        assert list(df["key"]) == ["user_id", "tags", "profile", "display_name"]
        assert list(df["type_name"]) == ["User", "User", "User", "Profile"]
        assert list(df["path"]) == ["/user_id", "/tags", "/profile", "/profile/display_name"]
        assert list(df["field_name"]) == ["userId", "tags", "profile", "displayName"]
        assert list(df["kind"]) == ["integer", "array", "record", "any"]
        assert list(df["required"]) == [True, False, False, True]
        assert list(df["nullable"]) == [False, True, True, True]
        assert df.loc[1, "signature"] == "[string]?"

    def test_transform(self):
        """Test the field_name column with an explicit transform"""
        shape = infer(b'{"userId": 1}')

        df = describe_shape(shape, transform=StringTransform.SNAKE_CASE)

        assert list(df["field_name"]) == ["user_id"]

    def test_no_records(self):
        """Test an empty report for shapes without records"""
        df = describe_shape(array_of(STRING))

        assert isinstance(df, pd.DataFrame)
        assert df.empty
        assert list(df.columns) == REPORT_COLUMNS
