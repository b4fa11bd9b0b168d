import logging

import pytest
from diagnostics import ParseError, Phase, TypeCheckError, UndefinedError
from symbols import SymbolTable, SymbolType
from tokens import decode_token
from type_checker import REAL_EQUALITY_WARNING, TypeChecker

INT, REAL, STR, BOOL = SymbolType.INT, SymbolType.REAL, SymbolType.STR, SymbolType.BOOL


def test_value_types():
    table = SymbolTable([("r", REAL)])
    assert TypeChecker.check_value(decode_token("int_literal:1"), table) == INT
    assert TypeChecker.check_value(decode_token("real_literal:1.5"), table) == REAL
    assert TypeChecker.check_value(decode_token("str_literal:s"), table) == STR
    assert TypeChecker.check_value(decode_token("true"), table) == BOOL
    assert TypeChecker.check_value(decode_token("false"), table) == BOOL
    assert TypeChecker.check_value(decode_token("identifier:r"), table) == REAL


def test_value_undefined_identifier():
    with pytest.raises(UndefinedError, match="variable 'q' undefined"):
        TypeChecker.check_value(decode_token("identifier:q"), SymbolTable())


@pytest.mark.parametrize("op", ["+", "-", "*", "/", "^"])
def test_arithmetic_keeps_operand_type(op):
    assert TypeChecker.check_binary(INT, op, INT) == INT
    assert TypeChecker.check_binary(REAL, op, REAL) == REAL


@pytest.mark.parametrize(
    "left,right", [(INT, REAL), (STR, STR), (BOOL, BOOL), (REAL, INT)]
)
def test_arithmetic_rejects(left, right):
    with pytest.raises(TypeCheckError, match=r"operator \+ must involve 'int' or 'real'"):
        TypeChecker.check_binary(left, "+", right)


def test_comparison_produces_bool():
    assert TypeChecker.check_binary(INT, "<", INT) == BOOL
    assert TypeChecker.check_binary(STR, "!=", STR) == BOOL
    assert TypeChecker.check_binary(BOOL, "==", BOOL) == BOOL


def test_comparison_mismatch():
    with pytest.raises(TypeCheckError) as exc:
        TypeChecker.check_binary(INT, "<=", STR)
    assert exc.value.message == "type mismatch 'int' <= 'str'"


def test_real_equality_warns_but_succeeds(caplog):
    seen = []
    with caplog.at_level(logging.WARNING, logger="type_checker"):
        result = TypeChecker.check_binary(REAL, "==", REAL, warn=seen.append)
    assert result == BOOL
    assert seen == [REAL_EQUALITY_WARNING]
    assert REAL_EQUALITY_WARNING in caplog.text


def test_real_equality_with_mixed_operand_warns(caplog):
    seen = []
    with caplog.at_level(logging.WARNING, logger="type_checker"):
        assert TypeChecker.check_binary(INT, "==", REAL, warn=seen.append) == BOOL
        assert TypeChecker.check_binary(REAL, "==", INT, warn=seen.append) == BOOL
    assert seen == [REAL_EQUALITY_WARNING, REAL_EQUALITY_WARNING]
    assert caplog.text.count(REAL_EQUALITY_WARNING) == 2


def test_non_value_token_is_a_syntax_error():
    with pytest.raises(ParseError) as exc:
        TypeChecker.check_value(decode_token("endl"), SymbolTable())
    assert exc.value.phase == Phase.SYNTAX
    assert exc.value.message == "expecting identifier or literal, but found endl"


def test_real_inequality_does_not_warn(caplog):
    with caplog.at_level(logging.WARNING, logger="type_checker"):
        assert TypeChecker.check_binary(REAL, "!=", REAL) == BOOL
    assert caplog.records == []


def test_assignment_rules():
    TypeChecker.check_assignment(INT, INT)
    TypeChecker.check_assignment(REAL, REAL)
    TypeChecker.check_assignment(REAL, INT)
    for var_type, expr_type in [(INT, REAL), (INT, STR), (REAL, BOOL), (INT, BOOL)]:
        with pytest.raises(TypeCheckError) as exc:
            TypeChecker.check_assignment(var_type, expr_type)
        assert exc.value.message == (
            f"cannot assign '{expr_type}' to variable of type '{var_type}'"
        )


def test_condition_must_be_bool():
    TypeChecker.check_condition(BOOL)
    with pytest.raises(TypeCheckError, match="if condition must be 'bool', but found 'real'"):
        TypeChecker.check_condition(REAL)
