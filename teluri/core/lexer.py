# file: teluri/core/lexer.py
"""
Lexer for `tel:` URIs.

Tokens only carry a character class and the original text; deciding what a
run of tokens means is left to the grammar parser.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum

from teluri.core.errors import LexError

SCHEME = "tel:"
VISUAL_SEPARATORS = frozenset("-.()")
# Remaining characters RFC 3966 admits in a tel: URI (unreserved marks,
# param-unreserved, `*`/`#` dial characters and percent escapes).
SYMBOLS = frozenset("*#_!~'[]/:&$%?@,")

_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)


class TokenKind(str, Enum):
    SCHEME = "scheme"
    PLUS = "plus"
    DIGIT = "digit"
    VISUAL_SEPARATOR = "visual_separator"
    LETTER = "letter"
    SEMI = "semi"
    EQUALS = "equals"
    SYMBOL = "symbol"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    position: int


def _classify(ch: str) -> TokenKind | None:
    if ch in _DIGITS:
        return TokenKind.DIGIT
    if ch in _LETTERS:
        return TokenKind.LETTER
    if ch in VISUAL_SEPARATORS:
        return TokenKind.VISUAL_SEPARATOR
    if ch == "+":
        return TokenKind.PLUS
    if ch == ";":
        return TokenKind.SEMI
    if ch == "=":
        return TokenKind.EQUALS
    if ch in SYMBOLS:
        return TokenKind.SYMBOL
    return None


def tokenize(raw: str) -> list[Token]:
    """
    Scan `raw` into tokens, always terminated by an EOF token.

    The scheme marker is recognized case-insensitively, and only at the start
    of the input; anywhere else its characters lex as ordinary letters and
    symbols.

    Raises:
        LexError: on the first character that cannot appear in a tel: URI.
    """

    tokens: list[Token] = []
    start = 0
    if raw[: len(SCHEME)].lower() == SCHEME:
        tokens.append(Token(TokenKind.SCHEME, raw[: len(SCHEME)], 0))
        start = len(SCHEME)

    for pos in range(start, len(raw)):
        ch = raw[pos]
        kind = _classify(ch)
        if kind is None:
            raise LexError(f"character {ch!r} is not allowed in a tel: URI", pos)
        tokens.append(Token(kind, ch, pos))

    tokens.append(Token(TokenKind.EOF, "", len(raw)))
    return tokens
