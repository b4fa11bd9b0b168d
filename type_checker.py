"""Type rules for expressions and statements.

This module provides a `TypeChecker` class with static methods that compute
and validate static types as the checker recognizes each construct.

Responsibilities:
- Determine the type of an expression value (literal, `true`/`false`, or a
  declared identifier).
- Validate binary operators: arithmetic needs two `int` or two `real`
  operands, comparisons need operands of the same type and produce `bool`.
- Validate assignments (exact match, or `int` widened into a `real`
  variable) and `if` conditions (must be `bool`).

Comparing reals with `==` is allowed but logged as a warning.
The type checker raises `TypeCheckError` on type mismatches and
`UndefinedError` (via the symbol table) for unknown identifiers.
"""

from __future__ import annotations
import logging
from typing import Callable, Optional

from diagnostics import ParseError, TypeCheckError
from symbols import SymbolTable, SymbolType
from tokens import Token, TokenKind

logger = logging.getLogger(__name__)

ARITHMETIC_OPERATORS = ("+", "-", "*", "/", "^")
RELATIONAL_OPERATORS = ("<", "<=", ">", ">=", "==", "!=")
EXPRESSION_OPERATORS = ARITHMETIC_OPERATORS + RELATIONAL_OPERATORS

REAL_EQUALITY_WARNING = "comparing real numbers with == may never be true"

LITERAL_TYPES = {
    TokenKind.INT_LITERAL: SymbolType.INT,
    TokenKind.REAL_LITERAL: SymbolType.REAL,
    TokenKind.STR_LITERAL: SymbolType.STR,
}

BOOL_LITERALS = ("true", "false")


class TypeChecker:
    @staticmethod
    def check_value(token: Token, symbols: SymbolTable) -> SymbolType:
        """Return the type of a single expression value."""
        if token.kind == TokenKind.IDENTIFIER:
            return symbols.lookup(token.text).type
        if token.kind in LITERAL_TYPES:
            return LITERAL_TYPES[token.kind]
        if token.text in BOOL_LITERALS and not token.kind.has_payload:
            return SymbolType.BOOL
        raise ParseError(f"expecting identifier or literal, but found {token}")

    @staticmethod
    def check_binary(
        left_type: SymbolType,
        op: str,
        right_type: SymbolType,
        warn: Optional[Callable[[str], None]] = None,
    ) -> SymbolType:
        """Check `left op right` and return the result type.

        warn: called with the warning text for real equality, in addition to
        logging it.
        """
        # Arithmetic operators
        if op in ARITHMETIC_OPERATORS:
            if left_type.is_numeric and left_type == right_type:
                return left_type
            raise TypeCheckError(f"operator {op} must involve 'int' or 'real'")

        # Comparison operators
        if op in RELATIONAL_OPERATORS:
            if op == "==" and SymbolType.REAL in (left_type, right_type):
                logger.warning(REAL_EQUALITY_WARNING)
                if warn is not None:
                    warn(REAL_EQUALITY_WARNING)
                return SymbolType.BOOL
            if left_type == right_type:
                return SymbolType.BOOL
            raise TypeCheckError(f"type mismatch '{left_type}' {op} '{right_type}'")

        raise TypeCheckError(f"unknown operator: {op}")

    @staticmethod
    def check_assignment(var_type: SymbolType, expr_type: SymbolType) -> None:
        if expr_type == var_type:
            return
        if var_type == SymbolType.REAL and expr_type == SymbolType.INT:
            return
        raise TypeCheckError(
            f"cannot assign '{expr_type}' to variable of type '{var_type}'"
        )

    @staticmethod
    def check_condition(cond_type: SymbolType) -> None:
        if cond_type != SymbolType.BOOL:
            raise TypeCheckError(
                f"if condition must be 'bool', but found '{cond_type}'"
            )
