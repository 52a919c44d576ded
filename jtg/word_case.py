#!/usr/bin/env python3
"""
Identifier casing and singularization.

Every function here is a total, pure str -> str transform built on plain
character scanning. Word boundaries follow ASCII rules only:

- an ASCII letter or digit that follows an ASCII non-alphanumeric character
  starts a new word
- an uppercase ASCII letter that follows a lowercase ASCII letter starts a
  new word (camel humps)

Leading separators are dropped. Non-ASCII characters are kept as ordinary
word characters and never start a word on their own.
"""

from enum import Enum
from typing import Optional


# (suffix, chars to strip, replacement), tried in order, first match wins.
# New rules must go before any broader rule that would shadow them.
ENDS_WITH_RULES = [
    ("series", 0, ""),
    ("cookies", 1, ""),
    ("movies", 1, ""),
    ("ies", 3, "y"),
    ("les", 1, ""),
    ("pes", 1, ""),
    ("ss", 0, ""),
    ("es", 0, ""),
    ("is", 0, ""),
    ("as", 0, ""),
    ("us", 0, ""),
    ("os", 0, ""),
    ("news", 0, ""),
    ("s", 1, ""),
]


def _is_alnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def _is_lower(c: str) -> bool:
    return "a" <= c <= "z"


def _is_upper(c: str) -> bool:
    return "A" <= c <= "Z"


def _is_alpha(c: str) -> bool:
    return _is_lower(c) or _is_upper(c)


def _is_word_char(c: str) -> bool:
    return _is_alnum(c) or not c.isascii()


def _ascii_lower(c: str) -> str:
    return c.lower() if _is_upper(c) else c


def _ascii_upper(c: str) -> str:
    return c.upper() if _is_lower(c) else c


def _starts_word(last: str, c: str) -> bool:
    if last.isascii() and not _is_alnum(last) and _is_alnum(c):
        return True
    return _is_lower(last) and _is_upper(c)


def _word_chars(name: str) -> str:
    start = 0
    while start < len(name) and not _is_word_char(name[start]):
        start += 1
    return name[start:]


def to_singular(s: str) -> str:
    """
    Singularize a word for use as a type name.

    Conservative on purpose: an input that matches no rule is returned
    unchanged, so "children" stays "children".

    Args:
        s: Word to singularize, in any case

    Returns:
        The singular form, keeping the case of the input
    """
    lowercase = "".join(_ascii_lower(c) for c in s)
    for suffix, to_strip, replacement in ENDS_WITH_RULES:
        if lowercase.endswith(suffix):
            return s[: len(s) - to_strip] + replacement
    return s


def camel_case(name: str) -> str:
    """Join the words of ``name`` with every word capitalized."""
    out = []
    last = " "
    for c in _word_chars(name):
        if not _is_word_char(c):
            last = c
            continue
        if _starts_word(last, c):
            out.append(_ascii_upper(c))
        elif _is_alpha(last):
            out.append(_ascii_lower(c))
        else:
            out.append(c)
        last = c
    return "".join(out)


def _sep_case(name: str, separator: str) -> str:
    out = []
    last = "A"
    for c in _word_chars(name):
        if not _is_word_char(c):
            last = c
            continue
        if _starts_word(last, c):
            out.append(separator)
        out.append(_ascii_lower(c))
        last = c
    return "".join(out)


def snake_case(name: str) -> str:
    return _sep_case(name, "_")


def kebab_case(name: str) -> str:
    return _sep_case(name, "-")


def screaming_snake_case(name: str) -> str:
    return "".join(_ascii_upper(c) for c in snake_case(name))


def screaming_kebab_case(name: str) -> str:
    return "".join(_ascii_upper(c) for c in kebab_case(name))


def type_case(name: str) -> str:
    """PascalCase, used for type names: ``"foo_bar"`` -> ``"FooBar"``."""
    s = camel_case(name)
    return _ascii_upper(s[:1]) + s[1:]


def lower_camel_case(name: str) -> str:
    """camelCase, used for field names: ``"foo_bar"`` -> ``"fooBar"``."""
    s = camel_case(name)
    return _ascii_lower(s[:1]) + s[1:]


class StringTransform(Enum):
    """Named identifier styles that a caller can select for property names."""

    LOWER_CASE = "lowercase"
    UPPER_CASE = "UPPERCASE"
    PASCAL_CASE = "PascalCase"
    CAMEL_CASE = "camelCase"
    SNAKE_CASE = "snake_case"
    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    KEBAB_CASE = "kebab-case"
    SCREAMING_KEBAB_CASE = "SCREAMING-KEBAB-CASE"

    @classmethod
    def parse(cls, s: str) -> Optional["StringTransform"]:
        """
        Look up a transform by any of its accepted spellings.

        Returns:
            The matching transform, or None for an unknown name
        """
        return _TRANSFORM_ALIASES.get(s)

    def apply(self, name: str) -> str:
        if self is StringTransform.LOWER_CASE:
            return "".join(_ascii_lower(c) for c in name)
        if self is StringTransform.UPPER_CASE:
            return "".join(_ascii_upper(c) for c in name)
        if self is StringTransform.PASCAL_CASE:
            return type_case(name)
        if self is StringTransform.CAMEL_CASE:
            return lower_camel_case(name)
        if self is StringTransform.SNAKE_CASE:
            return snake_case(name)
        if self is StringTransform.SCREAMING_SNAKE_CASE:
            return screaming_snake_case(name)
        if self is StringTransform.KEBAB_CASE:
            return kebab_case(name)
        return screaming_kebab_case(name)


_TRANSFORM_ALIASES = {
    "lowercase": StringTransform.LOWER_CASE,
    "uppercase": StringTransform.UPPER_CASE,
    "UPPERCASE": StringTransform.UPPER_CASE,
    "pascalcase": StringTransform.PASCAL_CASE,
    "uppercamelcase": StringTransform.PASCAL_CASE,
    "PascalCase": StringTransform.PASCAL_CASE,
    "camelcase": StringTransform.CAMEL_CASE,
    "camelCase": StringTransform.CAMEL_CASE,
    "snakecase": StringTransform.SNAKE_CASE,
    "snake_case": StringTransform.SNAKE_CASE,
    "screamingsnakecase": StringTransform.SCREAMING_SNAKE_CASE,
    "SCREAMING_SNAKE_CASE": StringTransform.SCREAMING_SNAKE_CASE,
    "kebabcase": StringTransform.KEBAB_CASE,
    "kebab-case": StringTransform.KEBAB_CASE,
    "screamingkebabcase": StringTransform.SCREAMING_KEBAB_CASE,
    "SCREAMING-KEBAB-CASE": StringTransform.SCREAMING_KEBAB_CASE,
}
