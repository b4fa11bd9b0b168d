"""Forward-only cursor over a decoded token sequence.

The grammar is LL(1): `peek()` exposes the single lookahead token and
`expect()` consumes it after checking it against either an exact spelling
("int", "{", "$") or a token kind (`TokenKind.IDENTIFIER`, ...). The position
only ever moves forward.
"""

from __future__ import annotations
from typing import List, Union

from diagnostics import ParseError
from tokens import Token, TokenKind

Expectation = Union[str, TokenKind]


class TokenCursor:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        """Return next token without consuming it."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        raise ParseError("unexpected end of input")

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def matches(self, expected: Expectation) -> bool:
        if self.at_end():
            return False
        token = self.tokens[self.pos]
        if isinstance(expected, TokenKind):
            return token.kind == expected
        return token.is_(expected)

    def expect(self, expected: Expectation) -> Token:
        """Consume the next token if it matches `expected`, else raise ParseError."""
        token = self.peek()
        if not self.matches(expected):
            raise ParseError(f"expecting {expected}, but found {token}")
        self.pos += 1
        return token
