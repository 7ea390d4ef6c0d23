# file: teluri/__init__.py
"""
teluri - RFC 3966 `tel:` URI parsing and comparison.

This package parses telephone-number identifiers written as `tel:` URIs into
structured records and compares them using RFC 3966 URI-equality rules, so
that differently formatted spellings of the same number compare (and hash)
equal.
"""

from __future__ import annotations

from teluri.core.errors import LexError, NullInputError, ParseError, ValidationError
from teluri.core.parser import ParseOptions, parse_tel_uri
from teluri.core.record import PhoneNumberRecord

__all__ = [
    "__version__",
    "LexError",
    "NullInputError",
    "ParseError",
    "ParseOptions",
    "PhoneNumberRecord",
    "ValidationError",
    "parse_tel_uri",
]

__version__ = "0.1.0"
