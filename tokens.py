"""Token definitions and the tokenizer wire form.

This module defines the `TokenKind` enum for the token categories the checker
consumes and a small immutable `Token` dataclass holding a kind and its text.
Tokens are produced by an external tokenizer and handed over as strings:

    "identifier:x"        payload-bearing kinds are "<kind>:<payload>"
    "int_literal:42"
    "real_literal:3.14"
    "str_literal:hello"
    "int", "+", "{", "$"  everything else is the bare literal text

`decode_token` turns one wire string into a `Token` and `encode_token` is its
inverse. The payload is everything after the first ':' following a known kind
tag, so string literals may themselves contain ':'.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass
from typing import Iterable, List, Union


class TokenKind(Enum):
    # Payload-bearing kinds
    IDENTIFIER = auto()
    INT_LITERAL = auto()
    REAL_LITERAL = auto()
    STR_LITERAL = auto()

    # Bare kinds
    KEYWORD = auto()
    OPERATOR = auto()
    PUNCTUATION = auto()
    EOF = auto()

    @property
    def has_payload(self) -> bool:
        return self in PAYLOAD_KINDS

    def __str__(self) -> str:
        return self.name.lower()


PAYLOAD_KINDS = (
    TokenKind.IDENTIFIER,
    TokenKind.INT_LITERAL,
    TokenKind.REAL_LITERAL,
    TokenKind.STR_LITERAL,
)

# wire tag -> kind, e.g. "int_literal" -> TokenKind.INT_LITERAL
WIRE_TAGS = {str(kind): kind for kind in PAYLOAD_KINDS}

KEYWORDS = frozenset(
    ["void", "main", "int", "real", "cin", "cout", "endl", "if", "else", "true", "false"]
)

OPERATORS = frozenset(
    ["+", "-", "*", "/", "^", "<", "<=", ">", ">=", "==", "!=", "=", ">>", "<<"]
)

END_MARKER = "$"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r})"

    def __str__(self) -> str:
        return encode_token(self)

    def is_(self, text: str) -> bool:
        """True if this is the bare token spelled `text`."""
        return not self.kind.has_payload and self.text == text


def classify_bare(text: str) -> TokenKind:
    if text == END_MARKER:
        return TokenKind.EOF
    if text in OPERATORS:
        return TokenKind.OPERATOR
    if text in KEYWORDS or text.isidentifier():
        return TokenKind.KEYWORD
    return TokenKind.PUNCTUATION


def decode_token(wire: str) -> Token:
    """Decode a single wire-form string into a `Token`."""
    if not isinstance(wire, str):
        raise TypeError(f"token must be a string, got {type(wire).__name__}")

    tag, sep, payload = wire.partition(":")
    if sep and tag in WIRE_TAGS:
        return Token(WIRE_TAGS[tag], payload)
    return Token(classify_bare(wire), wire)


def encode_token(token: Token) -> str:
    if token.kind.has_payload:
        return f"{token.kind}:{token.text}"
    return token.text


def decode_tokens(items: Iterable[Union[str, Token]]) -> List[Token]:
    """Decode a sequence of wire strings; `Token` objects pass through unchanged."""
    return [t if isinstance(t, Token) else decode_token(t) for t in items]
