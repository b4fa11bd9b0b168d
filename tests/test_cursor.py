import pytest
from cursor import TokenCursor
from diagnostics import ParseError, Phase
from tokens import TokenKind, decode_tokens
from tests.utils import wire


def _cursor(text):
    return TokenCursor(decode_tokens(wire(text)))


def test_peek_does_not_advance():
    cur = _cursor("int identifier:x")
    assert cur.peek().text == "int"
    assert cur.peek().text == "int"
    assert cur.pos == 0


def test_expect_exact_and_kind():
    cur = _cursor("int identifier:x ;")
    assert cur.expect("int").text == "int"
    assert cur.expect(TokenKind.IDENTIFIER).text == "x"
    cur.expect(";")
    assert cur.at_end()


def test_kind_expectation_ignores_payload():
    cur = _cursor("int_literal:7")
    assert cur.matches(TokenKind.INT_LITERAL)
    assert not cur.matches(TokenKind.REAL_LITERAL)
    assert not cur.matches("int_literal")


def test_mismatch_message_uses_wire_form():
    cur = _cursor("identifier:y")
    with pytest.raises(ParseError) as exc:
        cur.expect(";")
    assert exc.value.message == "expecting ;, but found identifier:y"
    assert exc.value.phase == Phase.SYNTAX
    assert cur.pos == 0


def test_kind_mismatch_message():
    cur = _cursor("int")
    with pytest.raises(ParseError, match="expecting identifier, but found int"):
        cur.expect(TokenKind.IDENTIFIER)


def test_peek_past_end():
    cur = _cursor("$")
    cur.expect("$")
    with pytest.raises(ParseError, match="unexpected end of input"):
        cur.peek()
