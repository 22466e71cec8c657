"""Cardsmith exception hierarchy.

This module defines traceable import errors with clear boundaries.
Each import stage raises a specific error type so callers can tell
read failures apart from syntax, schema, field and format failures.
"""

from __future__ import annotations


class CardsmithError(Exception):
    """Base exception for all Cardsmith failures."""

    kind = "error"


class CardsmithConfigError(CardsmithError):
    """Raised for invalid runtime configuration."""

    kind = "config"


class ReadError(CardsmithError):
    """Raised when payload acquisition fails."""

    kind = "read"


class ParseError(CardsmithError):
    """Raised when raw text does not match the declared format syntax."""

    kind = "parse"


class SchemaError(CardsmithError):
    """Raised when the top-level payload structure has the wrong shape."""

    kind = "schema"


class FieldError(CardsmithError):
    """Raised when one record fails field presence or type checks.

    Attributes:
        index: Zero-based position of the offending record, if known.
    """

    kind = "field"

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class FormatError(CardsmithError):
    """Raised for format-level structural failures such as missing CSV columns."""

    kind = "format"
