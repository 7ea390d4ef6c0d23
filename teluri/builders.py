# file: teluri/builders.py
"""
Builders that assemble `tel:` URIs from structured pieces.

Both builders share the same contract: `build(validate=True)` formats a
candidate URI and parses it back through `teluri.core.parser`. With
`validate=False` the record is populated straight from the builder's fields;
keeping those consistent with the grammar is then up to the caller.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Protocol

from teluri.core.errors import ValidationError
from teluri.core.parser import ParseOptions, parse_tel_uri
from teluri.core.record import PhoneNumberRecord

logger = logging.getLogger(__name__)

INTERNATIONAL_PREFIX = "+"

LOCAL_SUBSCRIBER_NUMBER_RE = re.compile(r"^[\d.\-()]+$")
DOMAIN_NAME_RE = re.compile(r"^[a-zA-Z0-9.\-]+$")
GLOBAL_NUMBER_RE = re.compile(r"^(\+)?[\d.\-()]+$")
COUNTRY_CODE_RE = re.compile(r"^(\+)?[1-9][0-9]{0,2}$")
AREA_CODE_RE = re.compile(r"^[0-9]+$")
PARAM_NAME_RE = re.compile(r"[A-Za-z0-9\-]+")
# unreserved / param-unreserved characters or a %HH escape; never ';' or '='
PARAM_VALUE_RE = re.compile(r"(?:[A-Za-z0-9\-.()+_!~*'\[\]/:&$]|%[0-9A-Fa-f]{2})+")

RESERVED_PARAM_NAMES = frozenset({"ext", "isub", "phone-context"})


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


@dataclass(slots=True)
class TelUriParts:
    """Plain field set a builder hands to the shared formatting helpers."""

    number: str
    extension: str | None = None
    sub_address: str | None = None
    phone_context: str | None = None
    params: Mapping[str, str] | None = None
    display: str | None = None
    is_global_number: bool = False
    is_domain_phone_context: bool = False


def check_descriptors(
    extension: str | None, sub_address: str | None, params: Mapping[str, str] | None
) -> None:
    """Validate the fields both builders accept."""

    if not _blank(extension) and not _blank(sub_address):
        raise ValidationError("A phone number cannot have both an extension and a subAddress.")

    if extension is not None and not LOCAL_SUBSCRIBER_NUMBER_RE.fullmatch(extension):
        raise ValidationError(
            "extension must contain only numeric characters and optional "
            "., -, (, ) visual separator characters."
        )

    if params:
        for name, value in params.items():
            if not name or not value:
                raise ValidationError("params names and values cannot be None or empty.")
            if name.lower() in RESERVED_PARAM_NAMES:
                raise ValidationError(
                    f"'{name}' is reserved; use the extension, sub_address or "
                    "phone-context fields instead."
                )
            if not PARAM_NAME_RE.fullmatch(name):
                raise ValidationError(
                    f"param name {name!r} must contain only alphanumeric and - characters."
                )
            if not PARAM_VALUE_RE.fullmatch(value):
                raise ValidationError(
                    f"param value {value!r} for '{name}' contains characters not allowed "
                    "in a tel: URI parameter."
                )


def format_tel_uri(parts: TelUriParts) -> str:
    """Format `parts` as `tel:<number>[;ext=][;isub=][;phone-context=][;name=value...]`."""

    segments = [f"tel:{parts.number}"]
    if parts.extension:
        segments.append(f";ext={parts.extension}")
    if parts.sub_address:
        segments.append(f";isub={parts.sub_address}")
    if parts.phone_context:
        segments.append(f";phone-context={parts.phone_context}")
    if parts.params:
        for name, value in parts.params.items():
            segments.append(f";{name}={value if value is not None else ''}")
    return "".join(segments)


def build_record(parts: TelUriParts, *, validate: bool) -> PhoneNumberRecord:
    formatted = format_tel_uri(parts)
    logger.debug(
        "Built phone number candidate: %s",
        formatted,
        extra={"tel_uri": formatted, "validated": validate},
    )

    if validate:
        record = parse_tel_uri(formatted, options=ParseOptions(strict=True))
    else:
        record = PhoneNumberRecord(
            value=formatted,
            is_global_number=parts.is_global_number,
            number=parts.number,
            extension=parts.extension,
            sub_address=parts.sub_address,
            phone_context=parts.phone_context,
            is_domain_phone_context=parts.is_domain_phone_context,
            params=dict(parts.params) if parts.params is not None else None,
        )

    if parts.display is not None:
        record = record.with_metadata(display=parts.display)
    return record


class PhoneNumberBuilder(Protocol):
    def build(self, *, validate: bool = True) -> PhoneNumberRecord:
        ...


@dataclass(slots=True)
class LocalPhoneNumberBuilder:
    """
    Build a local number qualified by a country code or a domain name.

    Exactly one of `country_code` (optionally with a numeric `area_code`) or
    `domain_name` must be given. The phone-context becomes
    `+<country_code>[-<area_code>]` or the domain name.
    """

    subscriber_number: str | None = None
    country_code: str | None = None
    area_code: str | None = None
    domain_name: str | None = None
    extension: str | None = None
    sub_address: str | None = None
    params: Mapping[str, str] | None = None
    display: str | None = None

    def _normalized_country_code(self) -> str | None:
        code = self.country_code
        if code is None:
            return None
        code = code.strip()
        if code and not code.startswith(INTERNATIONAL_PREFIX):
            code = INTERNATIONAL_PREFIX + code
        return code

    def parts(self) -> TelUriParts:
        """Validate the builder fields and return the formatted pieces."""

        if _blank(self.subscriber_number) or not LOCAL_SUBSCRIBER_NUMBER_RE.fullmatch(
            self.subscriber_number or ""
        ):
            raise ValidationError(
                "subscriber_number must contain only numeric characters and optional "
                "., -, (, ) visual separator characters."
            )

        country_code = self._normalized_country_code()
        if _blank(country_code) and _blank(self.domain_name):
            raise ValidationError("A local number must have a domain_name or a country_code.")
        if not _blank(country_code) and not _blank(self.domain_name):
            raise ValidationError("A local number cannot have both a domain_name and a country_code.")

        check_descriptors(self.extension, self.sub_address, self.params)

        if country_code is not None and not _blank(country_code):
            if not COUNTRY_CODE_RE.fullmatch(country_code):
                raise ValidationError(
                    "country_code must contain only numeric characters and an optional "
                    "plus (+) prefix."
                )
            if self.area_code is not None and not AREA_CODE_RE.fullmatch(self.area_code):
                raise ValidationError("area_code must contain only numeric characters.")

            phone_context = country_code
            if self.area_code:
                phone_context += f"-{self.area_code}"
            is_domain = False
        else:
            domain = self.domain_name or ""
            if not DOMAIN_NAME_RE.fullmatch(domain):
                raise ValidationError(
                    "domain_name must contain only alphanumeric, . and - characters."
                )
            phone_context = domain
            is_domain = True

        return TelUriParts(
            number=self.subscriber_number or "",
            extension=self.extension,
            sub_address=self.sub_address,
            phone_context=phone_context,
            params=self.params,
            display=self.display,
            is_global_number=False,
            is_domain_phone_context=is_domain,
        )

    def build(self, *, validate: bool = True) -> PhoneNumberRecord:
        return build_record(self.parts(), validate=validate)


@dataclass(slots=True)
class GlobalPhoneNumberBuilder:
    """Build a global number; a missing leading `+` is added."""

    global_number: str | None = None
    extension: str | None = None
    sub_address: str | None = None
    params: Mapping[str, str] | None = None
    display: str | None = None

    def parts(self) -> TelUriParts:
        """Validate the builder fields and return the formatted pieces."""

        if _blank(self.global_number) or not GLOBAL_NUMBER_RE.fullmatch(self.global_number or ""):
            raise ValidationError(
                "global_number must contain only numeric characters, optional ., -, (, ) "
                "visual separators, and an optional plus (+) prefix."
            )
        check_descriptors(self.extension, self.sub_address, self.params)

        number = self.global_number or ""
        if not number.startswith(INTERNATIONAL_PREFIX):
            number = INTERNATIONAL_PREFIX + number

        return TelUriParts(
            number=number,
            extension=self.extension,
            sub_address=self.sub_address,
            params=self.params,
            display=self.display,
            is_global_number=True,
        )

    def build(self, *, validate: bool = True) -> PhoneNumberRecord:
        return build_record(self.parts(), validate=validate)
