# file: teluri/core/record.py
"""Structured representation of a parsed `tel:` URI."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from teluri.core.equality import record_hash, records_equal

_UNSET: Any = object()


@dataclass(frozen=True, slots=True, eq=False)
class PhoneNumberRecord:
    """
    A telephone number as described by one `tel:` URI.

    Grammar fields are fixed once the record exists. The metadata fields
    `display`, `type` and `primary` are not part of the URI; use
    `with_metadata` to derive a copy with different values.

    Equality and hashing follow RFC 3966 §3 (see `teluri.core.equality`), so
    `tel:+1-201-555-0123` and `tel:+1.201.555.0123` compare equal. `display`
    never takes part in comparison.

    Notes:
        - A record produced in lenient mode only carries `value`; every
          structured field keeps its default.
        - `is_domain_phone_context` is recorded when the context is parsed or
          built and is never re-derived from `phone_context`.
        - For local numbers `number` follows the RFC 3966 `phonedigit-hex`
          alphabet, so besides digits and visual separators it may hold the
          hex letters `a-f`/`A-F`, `*` and `#`. Global numbers are digits and
          separators only.
    """

    value: str
    is_global_number: bool = False
    number: str | None = None
    extension: str | None = None
    sub_address: str | None = None
    phone_context: str | None = None
    is_domain_phone_context: bool = False
    params: dict[str, str | None] | None = None
    display: str | None = None
    type: str | None = None
    primary: bool | None = False

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, PhoneNumberRecord):
            return NotImplemented
        return records_equal(self, other)

    def __hash__(self) -> int:
        return record_hash(self)

    def __str__(self) -> str:
        return self.value

    def with_metadata(
        self,
        *,
        display: str | None = _UNSET,
        type: str | None = _UNSET,
        primary: bool | None = _UNSET,
    ) -> PhoneNumberRecord:
        """Return a copy with the given metadata fields replaced."""

        changes: dict[str, Any] = {}
        if display is not _UNSET:
            changes["display"] = display
        if type is not _UNSET:
            changes["type"] = type
        if primary is not _UNSET:
            changes["primary"] = primary
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "is_global_number": self.is_global_number,
            "number": self.number,
            "extension": self.extension,
            "sub_address": self.sub_address,
            "phone_context": self.phone_context,
            "is_domain_phone_context": self.is_domain_phone_context,
            "params": dict(self.params) if self.params is not None else None,
            "display": self.display,
            "type": self.type,
            "primary": self.primary,
        }
