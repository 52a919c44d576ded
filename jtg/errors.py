"""
Error types raised by the jtg inference core.

The taxonomy is closed but forward compatible: new subclasses of JTError may
be added in later releases, so callers should catch JTError rather than
matching every subclass.
"""

from typing import Optional


class JTError(Exception):
    """Base class for every error raised by jtg."""


class ParseError(JTError):
    """
    Raised when sample input is not a valid stream of JSON documents.

    This is the only failure of inference. No partial Shape is produced.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        position: Optional[int] = None,
    ):
        self.line = line
        self.column = column
        self.position = position
        if line is not None and column is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class InvalidHintError(JTError, ValueError):
    """Raised when a hint directive cannot be built from its description."""
