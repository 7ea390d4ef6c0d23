# file: teluri/core/errors.py
"""Errors raised while parsing `tel:` URIs or assembling them with a builder."""

from __future__ import annotations


class NullInputError(ValueError):
    """Raised when a raw value is required but `None` was given."""


class ParseError(ValueError):
    """
    Raised when a value does not match the `tel:` URI grammar.

    Attributes:
        reason: Human-readable description of the violation.
        position: Zero-based offset into the raw string where it was detected.
    """

    def __init__(self, reason: str, position: int) -> None:
        super().__init__(f"{reason} (at position {position})")
        self.reason = reason
        self.position = position


class LexError(ParseError):
    """Raised when the raw string contains a character outside the tel: URI alphabet."""


class ValidationError(ValueError):
    """Raised by builders when a required field is missing or malformed."""
