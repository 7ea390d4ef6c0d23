# file: teluri/core/grammar.py
"""
Recursive-descent parser for the RFC 3966 `telephone-subscriber` production.

    telephone-uri        = "tel:" telephone-subscriber
    telephone-subscriber = global-number / local-number
    global-number        = "+" 1*phonedigit *par
    local-number         = 1*phonedigit-hex *par context *par
    par                  = parameter / extension / isdn-subaddress

The parser decides between the two top-level alternatives on the first token
after the scheme and never backtracks. The first violation aborts the parse
with a `ParseError`; nothing partial is returned.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from teluri.core.errors import ParseError
from teluri.core.lexer import VISUAL_SEPARATORS, Token, TokenKind


class ParamKind(str, Enum):
    EXTENSION = "ext"
    ISDN_SUBADDRESS = "isub"
    PHONE_CONTEXT = "phone-context"
    PARAMETER = "parameter"


class ContextKind(str, Enum):
    NUMERIC = "numeric"
    DOMAIN = "domain"


@dataclass(frozen=True, slots=True)
class NumberNode:
    text: str
    is_global: bool
    position: int


@dataclass(frozen=True, slots=True)
class ParamNode:
    kind: ParamKind
    name: str
    value: str | None
    position: int
    context_kind: ContextKind | None = None


@dataclass(frozen=True, slots=True)
class TelUriTree:
    source: str
    number: NumberNode
    params: tuple[ParamNode, ...]


_RESERVED_PARAMS: dict[str, ParamKind] = {
    "ext": ParamKind.EXTENSION,
    "isub": ParamKind.ISDN_SUBADDRESS,
    "phone-context": ParamKind.PHONE_CONTEXT,
}

_HEX_LETTERS = frozenset("abcdefABCDEF")
_DIAL_SYMBOLS = frozenset("*#")
_PARAM_SYMBOLS = frozenset("_!~*'[]/:&$%")

# RFC 1035 host name as used by RFC 3966 `domainname`; the top label starts
# with a letter so that dotted digit strings are never read as domains.
_DOMAIN_NAME = re.compile(
    r"(?:[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?\.)*"
    r"[A-Za-z](?:[A-Za-z0-9-]*[A-Za-z0-9])?\.?"
)
_BAD_PCT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def classify_phone_context(value: str) -> ContextKind | None:
    """
    Return which `descriptor` branch a phone-context value belongs to.

    Numeric contexts are global-number digits with an optional leading `+`;
    everything else must be a domain name. Returns None when neither matches.
    """

    body = value[1:] if value.startswith("+") else value
    if (
        body
        and all(c in string.digits or c in VISUAL_SEPARATORS for c in body)
        and any(c in string.digits for c in body)
    ):
        return ContextKind.NUMERIC
    if not value.startswith("+") and _DOMAIN_NAME.fullmatch(value):
        return ContextKind.DOMAIN
    return None


def _is_phonedigit(tok: Token) -> bool:
    return tok.kind in (TokenKind.DIGIT, TokenKind.VISUAL_SEPARATOR)


def _is_phonedigit_hex(tok: Token) -> bool:
    if _is_phonedigit(tok):
        return True
    if tok.kind is TokenKind.LETTER:
        return tok.text in _HEX_LETTERS
    return tok.kind is TokenKind.SYMBOL and tok.text in _DIAL_SYMBOLS


def _is_pname_char(tok: Token) -> bool:
    if tok.kind in (TokenKind.LETTER, TokenKind.DIGIT):
        return True
    return tok.kind is TokenKind.VISUAL_SEPARATOR and tok.text == "-"


def _is_paramchar(tok: Token) -> bool:
    if tok.kind in (
        TokenKind.LETTER,
        TokenKind.DIGIT,
        TokenKind.VISUAL_SEPARATOR,
        TokenKind.PLUS,
    ):
        return True
    return tok.kind is TokenKind.SYMBOL and tok.text in _PARAM_SYMBOLS


def _is_uric(tok: Token) -> bool:
    if tok.kind in (TokenKind.SEMI, TokenKind.EOF, TokenKind.SCHEME):
        return False
    return tok.text != "#"


def _is_domain_char(tok: Token) -> bool:
    return tok.kind in (TokenKind.LETTER, TokenKind.DIGIT, TokenKind.VISUAL_SEPARATOR)


def _describe(tok: Token) -> str:
    return "end of input" if tok.kind is TokenKind.EOF else repr(tok.text)


class GrammarParser:
    """Single-use parser over one token stream."""

    def __init__(self, tokens: Sequence[Token], source: str) -> None:
        self._tokens = tokens
        self._source = source
        self._index = 0

    def parse(self) -> TelUriTree:
        if self._peek().kind is not TokenKind.SCHEME:
            raise self._error("expected 'tel:' scheme")
        self._advance()

        if self._peek().kind is TokenKind.PLUS:
            number = self._global_number()
        else:
            number = self._local_number()

        params: list[ParamNode] = []
        while self._peek().kind is TokenKind.SEMI:
            params.append(self._parameter())

        self._check_params(number, params)
        return TelUriTree(source=self._source, number=number, params=tuple(params))

    # Token stream helpers

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        tok = self._tokens[self._index]
        if tok.kind is not TokenKind.EOF:
            self._index += 1
        return tok

    def _take_while(self, accept: Callable[[Token], bool]) -> list[Token]:
        taken: list[Token] = []
        while accept(self._peek()):
            taken.append(self._advance())
        return taken

    def _error(self, reason: str, tok: Token | None = None) -> ParseError:
        return ParseError(reason, (tok or self._peek()).position)

    def _end_segment(self, what: str) -> None:
        tok = self._peek()
        if tok.kind not in (TokenKind.SEMI, TokenKind.EOF):
            raise self._error(f"unexpected {_describe(tok)} in {what}")

    # Productions

    def _global_number(self) -> NumberNode:
        plus = self._advance()
        taken = self._take_while(_is_phonedigit)
        if not any(t.kind is TokenKind.DIGIT for t in taken):
            raise self._error("global number requires at least one digit after '+'")
        self._end_segment("global number")
        return NumberNode(
            text=plus.text + "".join(t.text for t in taken),
            is_global=True,
            position=plus.position,
        )

    def _local_number(self) -> NumberNode:
        start = self._peek()
        taken = self._take_while(_is_phonedigit_hex)
        if not any(t.kind is not TokenKind.VISUAL_SEPARATOR for t in taken):
            raise self._error(
                f"expected a global number ('+' followed by digits) or a local number, "
                f"found {_describe(start)}",
                start,
            )
        self._end_segment("local number")
        return NumberNode(
            text="".join(t.text for t in taken), is_global=False, position=start.position
        )

    def _parameter(self) -> ParamNode:
        semi = self._advance()
        name = "".join(t.text for t in self._take_while(_is_pname_char))
        if not name:
            raise self._error("expected a parameter name after ';'")

        kind = _RESERVED_PARAMS.get(name.lower(), ParamKind.PARAMETER)
        value: str | None = None
        context_kind: ContextKind | None = None

        if kind is ParamKind.PARAMETER:
            if self._peek().kind is TokenKind.EQUALS:
                self._advance()
                value = self._value(_is_paramchar, f"parameter {name!r}")
        else:
            if self._peek().kind is not TokenKind.EQUALS:
                raise self._error(f"parameter {name!r} requires a value")
            self._advance()
            if kind is ParamKind.EXTENSION:
                value = self._value(_is_phonedigit, "extension")
            elif kind is ParamKind.ISDN_SUBADDRESS:
                value = self._value(_is_uric, "isdn-subaddress")
            else:
                value, context_kind = self._descriptor()

        self._end_segment(f"parameter {name!r}")
        return ParamNode(
            kind=kind,
            name=name,
            value=value,
            position=semi.position,
            context_kind=context_kind,
        )

    def _value(self, accept: Callable[[Token], bool], what: str) -> str:
        start = self._peek()
        text = "".join(t.text for t in self._take_while(accept))
        if not text:
            raise self._error(f"expected a value for {what}", start)
        bad = _BAD_PCT_ESCAPE.search(text)
        if bad is not None:
            raise ParseError(f"malformed percent escape in {what}", start.position + bad.start())
        return text

    def _descriptor(self) -> tuple[str, ContextKind]:
        start = self._peek()
        if start.kind is TokenKind.PLUS:
            self._advance()
            taken = self._take_while(_is_phonedigit)
            if not any(t.kind is TokenKind.DIGIT for t in taken):
                raise self._error("phone-context number requires at least one digit after '+'")
            return start.text + "".join(t.text for t in taken), ContextKind.NUMERIC

        text = "".join(t.text for t in self._take_while(_is_domain_char))
        if not text:
            raise self._error("expected a value for phone-context", start)
        kind = classify_phone_context(text)
        if kind is None:
            raise ParseError(
                f"phone-context {text!r} is neither a global number nor a domain name",
                start.position,
            )
        return text, kind

    def _check_params(self, number: NumberNode, params: Sequence[ParamNode]) -> None:
        seen: dict[ParamKind, ParamNode] = {}
        for node in params:
            if node.kind is ParamKind.PARAMETER:
                continue
            if node.kind in seen:
                raise ParseError(f"duplicate {node.kind.value!r} parameter", node.position)
            seen[node.kind] = node

        ext = seen.get(ParamKind.EXTENSION)
        isub = seen.get(ParamKind.ISDN_SUBADDRESS)
        if ext is not None and isub is not None:
            later = max(ext, isub, key=lambda n: n.position)
            raise ParseError("'ext' and 'isub' cannot both be present", later.position)

        context = seen.get(ParamKind.PHONE_CONTEXT)
        if number.is_global and context is not None:
            raise ParseError("phone-context is not allowed on a global number", context.position)
        if not number.is_global and context is None:
            raise ParseError("local number requires a phone-context parameter", len(self._source))


def parse_tokens(tokens: Sequence[Token], source: str) -> TelUriTree:
    """Parse a token stream produced by `teluri.core.lexer.tokenize`."""

    return GrammarParser(tokens, source).parse()
