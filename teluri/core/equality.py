# file: teluri/core/equality.py
"""
RFC 3966 §3 URI equality for phone number records.

https://tools.ietf.org/html/rfc3966#section-3

Rules:
- number and extension: visual separators are removed, then compared exactly.
- ISDN subaddress: case-insensitive.
- phone-context: case-insensitive when either side is a domain name;
  separator-stripped exact comparison when both are numeric.
- parameters: names and values case-insensitive, order irrelevant.
- type is case-insensitive, primary exact, display ignored.

`record_hash` hashes the same normalized forms, so equal records always hash
equal. Neither function raises for missing fields.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from teluri.core.record import PhoneNumberRecord

_VISUAL_SEPARATORS = re.compile(r"[().\-]")

CanonicalParams = tuple[tuple[str, "str | None"], ...]


def strip_visual_separators(value: str | None) -> str | None:
    if value is None:
        return None
    return _VISUAL_SEPARATORS.sub("", value)


def _lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def _equals_ignore_case(a: str | None, b: str | None) -> bool:
    return _lower(a) == _lower(b)


def canonical_params(params: Mapping[str, str | None] | None) -> CanonicalParams | None:
    """
    Return params as a sorted list of lower-cased (name, value) pairs.

    Names that collide after lower-casing keep the last value seen.
    """

    if params is None:
        return None
    lowered: dict[str, str | None] = {}
    for name, value in params.items():
        lowered[name.lower()] = _lower(value)
    return tuple(
        sorted(lowered.items(), key=lambda kv: (kv[0], kv[1] is not None, kv[1] or ""))
    )


def params_equal(
    a: Mapping[str, str | None] | None, b: Mapping[str, str | None] | None
) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None or len(a) != len(b):
        return False
    return canonical_params(a) == canonical_params(b)


def phone_context_equal(
    a: str | None, a_is_domain: bool, b: str | None, b_is_domain: bool
) -> bool:
    if a_is_domain or b_is_domain:
        return _equals_ignore_case(a, b)
    return strip_visual_separators(a) == strip_visual_separators(b)


def _phone_context_key(value: str | None) -> str | None:
    # Stripped and lower-cased regardless of kind: every branch of
    # phone_context_equal implies equality of this key.
    return _lower(strip_visual_separators(value))


def records_equal(a: PhoneNumberRecord, b: PhoneNumberRecord) -> bool:
    if a.is_global_number != b.is_global_number:
        return False
    if strip_visual_separators(a.number) != strip_visual_separators(b.number):
        return False
    if strip_visual_separators(a.extension) != strip_visual_separators(b.extension):
        return False
    if not _equals_ignore_case(a.sub_address, b.sub_address):
        return False
    if not phone_context_equal(
        a.phone_context, a.is_domain_phone_context, b.phone_context, b.is_domain_phone_context
    ):
        return False
    if not params_equal(a.params, b.params):
        return False
    if a.primary != b.primary:
        return False
    return _equals_ignore_case(a.type, b.type)


def record_hash(record: PhoneNumberRecord) -> int:
    return hash(
        (
            record.is_global_number,
            strip_visual_separators(record.number),
            strip_visual_separators(record.extension),
            _lower(record.sub_address),
            _phone_context_key(record.phone_context),
            canonical_params(record.params),
            record.primary,
            _lower(record.type),
        )
    )
