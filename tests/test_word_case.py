"""
Test cases for identifier casing and singularization.
"""

import pytest

from jtg.word_case import (
    StringTransform,
    camel_case,
    kebab_case,
    lower_camel_case,
    screaming_kebab_case,
    screaming_snake_case,
    snake_case,
    to_singular,
    type_case,
)


class TestCamelCase:
    """Test cases for PascalCase / camelCase conversion"""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("FooBar", "FooBar"),
            ("fooBar", "FooBar"),
            ("foo bar", "FooBar"),
            ("foo_bar", "FooBar"),
            ("_foo_bar", "FooBar"),
            ("FOO_BAR", "FooBar"),
            ("Foo1bar", "Foo1bar"),
            ("foo_2bar", "Foo2bar"),
            ("Foo3Bar", "Foo3Bar"),
            ("foo4_bar", "Foo4Bar"),
            ("1920x1080", "1920x1080"),
            ("1920*1080", "19201080"),
        ],
    )
    def test_type_case(self, name, expected):
        """Test type names from assorted source keys"""
        assert type_case(name) == expected, f"type_case({name!r}) should be {expected!r}"
        assert camel_case(name) == expected

    def test_lower_camel_case(self):
        """Test that only the first word is lowercased"""
        assert lower_camel_case("foo_bar") == "fooBar"
        assert lower_camel_case("FooBar") == "fooBar"
        assert lower_camel_case("FOO_BAR") == "fooBar"
        assert lower_camel_case("foreign names") == "foreignNames"

    def test_non_ascii_is_kept_inside_words(self):
        """Test that non-ASCII characters pass through and never split words"""
        assert type_case("foåo_bar") == "FoåoBar"
        assert snake_case("foåo_bar") == "foåo_bar"
        assert type_case("straße") == "Straße"

    def test_empty_and_symbol_only_input(self):
        """Test that casing never fails and may return an empty string"""
        for convert in (type_case, lower_camel_case, snake_case, kebab_case):
            assert convert("") == ""
            assert convert("__--**") == ""


class TestSeparatedCase:
    """Test cases for snake_case / kebab-case conversion"""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("FooBar", "foo_bar"),
            ("fooBar", "foo_bar"),
            ("foo bar", "foo_bar"),
            ("foo_bar", "foo_bar"),
            ("_foo_bar", "foo_bar"),
            ("FOO_BAR", "foo_bar"),
            ("foo_5bar", "foo_5bar"),
            ("foo6_bar", "foo6_bar"),
            ("1920x1080", "1920x1080"),
            ("1920*1080", "1920_1080"),
        ],
    )
    def test_snake_case(self, name, expected):
        """Test snake_case from assorted source keys"""
        assert snake_case(name) == expected, f"snake_case({name!r}) should be {expected!r}"

    def test_kebab_and_screaming_variants(self):
        """Test the other separator styles"""
        assert kebab_case("fooBar") == "foo-bar"
        assert screaming_snake_case("fooBar") == "FOO_BAR"
        assert screaming_kebab_case("foo bar") == "FOO-BAR"


class TestToSingular:
    """Test cases for the conservative singularization heuristic"""

    @pytest.mark.parametrize(
        "plural, singular",
        [
            ("cards", "card"),
            ("types", "type"),
            ("colors", "color"),
            ("rulings", "ruling"),
            ("foreignNames", "foreignName"),
            ("categoryKeys", "categoryKey"),
            ("values", "value"),
            ("legalities", "legality"),
            ("abilities", "ability"),
            ("queries", "query"),
            ("cookies", "cookie"),
            ("movies", "movie"),
            ("series", "series"),
            ("news", "news"),
            ("axis", "axis"),
            ("guesses", "guesses"),
            ("status", "status"),
        ],
    )
    def test_to_singular(self, plural, singular):
        """Test fixed singularizations, including documented no-ops"""
        assert to_singular(plural) == singular, f"to_singular({plural!r}) should be {singular!r}"

    def test_unmatched_words_are_unchanged(self):
        """Test that a word no rule matches is returned as is"""
        assert to_singular("children") == "children"
        assert to_singular("data") == "data"
        assert to_singular("") == ""

    def test_case_is_preserved(self):
        """Test case-insensitive matching with the original case kept"""
        assert to_singular("CARDS") == "CARD"
        assert to_singular("Legalities") == "Legality"
        assert to_singular("SERIES") == "SERIES"


class TestStringTransform:
    """Test cases for named identifier styles"""

    def test_parse_accepts_aliases(self):
        """Test the accepted spellings of each transform"""
        assert StringTransform.parse("snake_case") is StringTransform.SNAKE_CASE
        assert StringTransform.parse("snakecase") is StringTransform.SNAKE_CASE
        assert StringTransform.parse("uppercamelcase") is StringTransform.PASCAL_CASE
        assert StringTransform.parse("SCREAMING-KEBAB-CASE") is StringTransform.SCREAMING_KEBAB_CASE
        assert StringTransform.parse("Snake_Case") is None

    def test_apply(self):
        """Test that each transform converts a mixed key"""
        expected = {
            StringTransform.LOWER_CASE: "foobar_baz",
            StringTransform.UPPER_CASE: "FOOBAR_BAZ",
            StringTransform.PASCAL_CASE: "FooBarBaz",
            StringTransform.CAMEL_CASE: "fooBarBaz",
            StringTransform.SNAKE_CASE: "foo_bar_baz",
            StringTransform.SCREAMING_SNAKE_CASE: "FOO_BAR_BAZ",
            StringTransform.KEBAB_CASE: "foo-bar-baz",
            StringTransform.SCREAMING_KEBAB_CASE: "FOO-BAR-BAZ",
        }
        for transform, output in expected.items():
            assert transform.apply("fooBar_baz") == output, f"{transform} gave {transform.apply('fooBar_baz')!r}"
