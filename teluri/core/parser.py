# file: teluri/core/parser.py
"""
Parse `tel:` URIs into `PhoneNumberRecord` values.

The pipeline is lexer -> grammar parser -> field extractor. In lenient mode
the pipeline is skipped entirely and the raw value is stored as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from teluri.core.errors import NullInputError
from teluri.core.extract import extract_record
from teluri.core.grammar import parse_tokens
from teluri.core.lexer import tokenize
from teluri.core.record import PhoneNumberRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """
    Per-call parsing configuration.

    Attributes:
        strict: When False, values are stored verbatim without grammar
            validation and no structured field is populated.
    """

    strict: bool = True


DEFAULT_OPTIONS = ParseOptions()


def parse_tel_uri(raw: str | None, *, options: ParseOptions | None = None) -> PhoneNumberRecord:
    """
    Parse a `tel:` URI.

    Args:
        raw: The URI text, e.g. `tel:+1-201-555-0123;ext=123`.
        options: Parsing configuration; strict parsing when omitted.

    Returns:
        A fully populated record (strict) or a record carrying only `value`
        (lenient).

    Raises:
        NullInputError: if `raw` is None.
        ParseError: if strict and `raw` is not a valid tel: URI.
    """

    if raw is None:
        raise NullInputError("None is not a valid phone number value.")

    opts = options or DEFAULT_OPTIONS
    if not opts.strict:
        logger.debug(
            "Storing phone number value without validation: %s",
            raw,
            extra={"tel_uri": raw, "validated": False},
        )
        return PhoneNumberRecord(value=raw)

    tree = parse_tokens(tokenize(raw), raw)
    return extract_record(tree)
