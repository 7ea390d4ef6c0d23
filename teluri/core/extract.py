# file: teluri/core/extract.py
"""Flatten a parse tree into a `PhoneNumberRecord`."""

from __future__ import annotations

from teluri.core.grammar import ContextKind, ParamKind, TelUriTree, classify_phone_context
from teluri.core.record import PhoneNumberRecord


def put_param(params: dict[str, str | None], name: str, value: str | None) -> None:
    """
    Store `name=value`, replacing any earlier entry whose name differs only by case.

    The replacing entry keeps its own spelling and moves to the end.
    """

    for existing in [k for k in params if k.lower() == name.lower()]:
        del params[existing]
    params[name] = value


def extract_record(tree: TelUriTree) -> PhoneNumberRecord:
    """
    Build a record from a parse tree produced by `teluri.core.grammar`.

    The grammar has already been enforced; this only copies values out.
    """

    extension: str | None = None
    sub_address: str | None = None
    phone_context: str | None = None
    is_domain_phone_context = False
    params: dict[str, str | None] = {}

    for node in tree.params:
        if node.kind is ParamKind.EXTENSION:
            extension = node.value
        elif node.kind is ParamKind.ISDN_SUBADDRESS:
            sub_address = node.value
        elif node.kind is ParamKind.PHONE_CONTEXT:
            phone_context = node.value
            kind = node.context_kind
            if kind is None and node.value is not None:
                kind = classify_phone_context(node.value)
            is_domain_phone_context = kind is ContextKind.DOMAIN
        else:
            put_param(params, node.name, node.value)

    return PhoneNumberRecord(
        value=tree.source,
        is_global_number=tree.number.is_global,
        number=tree.number.text,
        extension=extension,
        sub_address=sub_address,
        phone_context=phone_context,
        is_domain_phone_context=is_domain_phone_context,
        params=params or None,
    )
