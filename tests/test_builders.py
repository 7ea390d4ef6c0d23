# file: tests/test_builders.py
from __future__ import annotations

import pytest

from teluri import parse_tel_uri
from teluri.builders import (
    GlobalPhoneNumberBuilder,
    LocalPhoneNumberBuilder,
    PhoneNumberBuilder,
    TelUriParts,
    format_tel_uri,
)
from teluri.core.errors import ParseError, ValidationError


@pytest.mark.parametrize(
    "country_code, area_code, subscriber, context",
    [
        ("1", "201", "555-0123", "+1-201"),
        ("+44", None, "20.7946.0000", "+44"),
        (" 49 ", "30", "(123)4567", "+49-30"),
    ],
)
def test_local_builder_round_trips_through_parser(
    country_code: str, area_code: str | None, subscriber: str, context: str
) -> None:
    record = LocalPhoneNumberBuilder(
        subscriber_number=subscriber, country_code=country_code, area_code=area_code
    ).build()
    assert record.number == subscriber
    assert record.phone_context == context
    assert record.is_global_number is False
    assert record.is_domain_phone_context is False
    assert record == parse_tel_uri(record.value)


def test_local_builder_with_domain_name() -> None:
    record = LocalPhoneNumberBuilder(
        subscriber_number="7042", domain_name="example.com", extension="12"
    ).build()
    assert record.value == "tel:7042;ext=12;phone-context=example.com"
    assert record.is_domain_phone_context is True
    assert record.extension == "12"


def test_local_builder_requires_country_code_or_domain() -> None:
    with pytest.raises(ValidationError):
        LocalPhoneNumberBuilder(subscriber_number="7042").build()


def test_local_builder_rejects_both_country_code_and_domain() -> None:
    with pytest.raises(ValidationError):
        LocalPhoneNumberBuilder(
            subscriber_number="7042", country_code="1", domain_name="example.com"
        ).build()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"subscriber_number": "70a2", "country_code": "1"},
        {"subscriber_number": "", "country_code": "1"},
        {"subscriber_number": "7042", "country_code": "0"},
        {"subscriber_number": "7042", "country_code": "1234"},
        {"subscriber_number": "7042", "country_code": "1", "area_code": "2O1"},
        {"subscriber_number": "7042", "country_code": "1", "area_code": ""},
        {"subscriber_number": "7042", "domain_name": "exa mple.com"},
    ],
)
def test_local_builder_rejects_malformed_fields(kwargs: dict[str, str]) -> None:
    with pytest.raises(ValidationError):
        LocalPhoneNumberBuilder(**kwargs).build()


def test_global_builder_adds_international_prefix() -> None:
    record = GlobalPhoneNumberBuilder(global_number="1-201-555-0123").build()
    assert record.value == "tel:+1-201-555-0123"
    assert record.number == "+1-201-555-0123"
    assert record.is_global_number is True


def test_global_builder_formats_descriptors_and_params() -> None:
    record = GlobalPhoneNumberBuilder(
        global_number="+12015550123",
        sub_address="abc",
        params={"tgrp": "x", "trunk-context": "example.com"},
        display="Front desk",
    ).build()
    assert record.value == "tel:+12015550123;isub=abc;tgrp=x;trunk-context=example.com"
    assert record.params == {"tgrp": "x", "trunk-context": "example.com"}
    assert record.display == "Front desk"


@pytest.mark.parametrize("number", [None, "", "   ", "+1a", "++1"])
def test_global_builder_rejects_malformed_number(number: str | None) -> None:
    with pytest.raises(ValidationError):
        GlobalPhoneNumberBuilder(global_number=number).build()


def test_builders_reject_extension_with_subaddress() -> None:
    with pytest.raises(ValidationError):
        GlobalPhoneNumberBuilder(global_number="1", extension="1", sub_address="2").build()
    with pytest.raises(ValidationError):
        LocalPhoneNumberBuilder(
            subscriber_number="1", country_code="1", extension="1", sub_address="2"
        ).build()


def test_builders_reject_non_numeric_extension() -> None:
    with pytest.raises(ValidationError):
        GlobalPhoneNumberBuilder(global_number="1", extension="x1").build()


@pytest.mark.parametrize("params", [{"": "x"}, {"a": ""}, {"a": None}])
def test_builders_reject_empty_param_names_or_values(params: dict[str, str | None]) -> None:
    with pytest.raises(ValidationError):
        GlobalPhoneNumberBuilder(global_number="1", params=params).build()  # type: ignore[arg-type]


@pytest.mark.parametrize("value", ["1;ext=9", "a=b", "x y", "50%", "%zz"])
def test_builders_reject_param_values_outside_the_grammar(value: str) -> None:
    builder = GlobalPhoneNumberBuilder(global_number="1", params={"a": value})
    with pytest.raises(ValidationError):
        builder.build()
    with pytest.raises(ValidationError):
        builder.build(validate=False)


@pytest.mark.parametrize("name", ["a;b", "a b", "a=b", "na_me"])
def test_builders_reject_param_names_outside_the_grammar(name: str) -> None:
    with pytest.raises(ValidationError):
        GlobalPhoneNumberBuilder(global_number="1", params={name: "x"}).build()


@pytest.mark.parametrize("name", ["ext", "EXT", "isub", "Phone-Context"])
def test_builders_reject_reserved_param_names(name: str) -> None:
    with pytest.raises(ValidationError):
        GlobalPhoneNumberBuilder(global_number="1", params={name: "9"}).build()


def test_reserved_param_name_cannot_bypass_descriptor_exclusivity() -> None:
    builder = LocalPhoneNumberBuilder(
        subscriber_number="1", country_code="1", extension="1", params={"isub": "x"}
    )
    with pytest.raises(ValidationError):
        builder.build()


def test_validated_and_unvalidated_builds_agree_on_params() -> None:
    builder = GlobalPhoneNumberBuilder(
        global_number="1", params={"tgrp": "%41b", "trunk-context": "+1-201"}
    )
    assert builder.build() == builder.build(validate=False)
    assert builder.build().params == {"tgrp": "%41b", "trunk-context": "+1-201"}


def test_build_without_validation_copies_builder_fields() -> None:
    record = LocalPhoneNumberBuilder(
        subscriber_number="7042", domain_name="example.com"
    ).build(validate=False)
    assert record.value == "tel:7042;phone-context=example.com"
    assert record.number == "7042"
    assert record.phone_context == "example.com"
    assert record.is_domain_phone_context is True
    assert record.is_global_number is False
    assert record == parse_tel_uri(record.value)


def test_build_without_validation_skips_the_parser() -> None:
    # `isub` content the grammar rejects still builds when validation is skipped.
    builder = GlobalPhoneNumberBuilder(global_number="1", sub_address="a b")
    with pytest.raises(ParseError):
        builder.build()
    record = builder.build(validate=False)
    assert record.value == "tel:+1;isub=a b"
    assert record.sub_address == "a b"


def test_builders_share_build_contract() -> None:
    builders: list[PhoneNumberBuilder] = [
        LocalPhoneNumberBuilder(subscriber_number="1", country_code="1"),
        GlobalPhoneNumberBuilder(global_number="1"),
    ]
    assert [b.build().is_global_number for b in builders] == [False, True]


def test_format_tel_uri_orders_segments() -> None:
    parts = TelUriParts(
        number="1", extension="2", phone_context="+3", params={"a": "b"}
    )
    assert format_tel_uri(parts) == "tel:1;ext=2;phone-context=+3;a=b"
