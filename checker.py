"""
Checker for simple C programs.

Overview and approach:
- This is a hand-written recursive-descent recognizer that parses, collects
    declarations and type checks in a single left-to-right pass with one token
    of lookahead. There is no AST: each production method consumes its tokens
    from a `TokenCursor` and returns the synthesized attribute it needs to
    (the type of an expression), while declarations go straight into one flat
    `SymbolTable`.

Grammar:

    <simpleC>      -> void main ( ) { <stmts> } $
    <stmts>        -> <stmt> <stmt>*
    <stmt>         -> ; | <vardecl> | <input> | <output> | <assignment> | <ifstmt>
    <vardecl>      -> int identifier ; | real identifier ;
    <input>        -> cin >> identifier ;
    <output>       -> cout << <output-value> ;
    <output-value> -> <expr-value> | endl
    <assignment>   -> identifier = <expr> ;
    <ifstmt>       -> if ( <condition> ) <then-part> <else-part>
    <condition>    -> <expr>
    <then-part>    -> <stmt>
    <else-part>    -> else <stmt> | EMPTY
    <expr>         -> <expr-value> <expr-op> <expr-value> | <expr-value>
    <expr-value>   -> identifier | int_literal | real_literal | str_literal
                    | true | false
    <expr-op>      -> + | - | * | / | ^ | < | <= | > | >= | == | !=

Key points:
- Fail fast: the first violation raises a `CheckError` which unwinds the
    whole descent. The public functions at the bottom of this module turn it
    into a `Failure` result.
- Scoping: there is a single scope. Declarations inside an `if` branch are
    added to the same table and remain visible afterwards.
- Staging: the same recognizer can skip declarations and/or type rules, which
    gives the syntax-only `parse`, the declaration-only `build_symbol_table`
    and the `typecheck` pass over a prebuilt table.

Examples:
    check(["void", "main", "(", ")", "{", "int", "identifier:x", ";", "}", "$"])
    -> Success(symbols=SymbolTable({x: int}), ...)
"""

from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from cursor import Expectation, TokenCursor
from diagnostics import CheckError, Failure, ParseError, Result, Success
from parse_tree import ParseNode
from symbols import DECLARABLE_TYPES, SymbolTable, SymbolType
from tokens import PAYLOAD_KINDS, Token, TokenKind, decode_tokens
from type_checker import BOOL_LITERALS, EXPRESSION_OPERATORS, TypeChecker

logger = logging.getLogger(__name__)

STATEMENT_KEYWORDS = (";", "int", "real", "cin", "cout", "if")

TokenInput = Iterable[Union[str, Token]]


class Checker:
    def __init__(
        self,
        tokens: TokenInput,
        symbol_table: Optional[SymbolTable] = None,
        *,
        declare: bool = True,
        check_types: bool = True,
        record_tree: bool = False,
    ):
        self.cursor = TokenCursor(decode_tokens(tokens))
        self.symbol_table = symbol_table if symbol_table is not None else SymbolTable()
        self.declare = declare
        self.check_types = check_types
        self.record_tree = record_tree
        self.warnings: List[str] = []
        self.tree: Optional[ParseNode] = None
        self._open: List[ParseNode] = []

    @contextmanager
    def production(self, name: str) -> Iterator[Optional[ParseNode]]:
        """Enter a grammar rule; records a tree node when requested."""
        logger.debug("%s at token %d", name, self.cursor.pos)
        if not self.record_tree:
            yield None
            return

        node = ParseNode.production(name)
        if self._open:
            self._open[-1].children.append(node)
        else:
            self.tree = node
        self._open.append(node)
        try:
            yield node
        finally:
            self._open.pop()

    def expect(self, expected: Expectation) -> Token:
        """Expect and consume a token, recording it as a leaf."""
        token = self.cursor.expect(expected)
        if self._open:
            self._open[-1].children.append(ParseNode.leaf(token))
        return token

    def lookahead(self) -> Optional[str]:
        """Spelling of the next bare token, or None for identifiers/literals."""
        token = self.cursor.peek()
        return None if token.kind.has_payload else token.text

    def at_statement_start(self) -> bool:
        token = self.cursor.peek()
        return token.kind == TokenKind.IDENTIFIER or self.lookahead() in STATEMENT_KEYWORDS

    @staticmethod
    def _annotate(node: Optional[ParseNode], type_: Optional[SymbolType]) -> None:
        if node is not None:
            node.symbol_type = type_

    # <expr-value> -> identifier | int_literal | real_literal | str_literal | true | false
    def parse_expr_value(self) -> Optional[SymbolType]:
        with self.production("expr_value") as node:
            token = self.cursor.peek()
            if token.kind in PAYLOAD_KINDS:
                self.expect(token.kind)
            elif self.lookahead() in BOOL_LITERALS:
                self.expect(token.text)
            else:
                raise ParseError(f"expecting identifier or literal, but found {token}")

            if not self.check_types:
                return None
            value_type = TypeChecker.check_value(token, self.symbol_table)
            self._annotate(node, value_type)
            return value_type

    def parse_expr_op(self) -> str:
        with self.production("expr_op"):
            return self.expect(self.lookahead()).text

    # <expr> -> <expr-value> <expr-op> <expr-value> | <expr-value>
    def parse_expr(self) -> Optional[SymbolType]:
        with self.production("expr") as node:
            left_type = self.parse_expr_value()
            if self.lookahead() not in EXPRESSION_OPERATORS:
                self._annotate(node, left_type)
                return left_type

            op = self.parse_expr_op()
            right_type = self.parse_expr_value()
            if not self.check_types:
                return None

            result = TypeChecker.check_binary(
                left_type, op, right_type, warn=self.warnings.append
            )
            self._annotate(node, result)
            return result

    def parse_empty(self) -> None:
        with self.production("empty"):
            self.expect(";")

    # <vardecl> -> int identifier ; | real identifier ;
    def parse_vardecl(self) -> None:
        with self.production("vardecl"):
            type_name = self.lookahead()
            self.expect(type_name)
            name = self.expect(TokenKind.IDENTIFIER).text
            self.expect(";")
            if self.declare:
                self.symbol_table.declare(name, DECLARABLE_TYPES[type_name])

    # <input> -> cin >> identifier ;
    def parse_input(self) -> None:
        with self.production("input"):
            self.expect("cin")
            self.expect(">>")
            name = self.expect(TokenKind.IDENTIFIER).text
            if self.check_types:
                self.symbol_table.lookup(name)
            self.expect(";")

    # <output-value> -> <expr-value> | endl
    def parse_output_value(self) -> None:
        with self.production("output_value"):
            if self.lookahead() == "endl":
                self.expect("endl")
            else:
                # anything printable; the type is only needed for resolution
                self.parse_expr_value()

    # <output> -> cout << <output-value> ;
    def parse_output(self) -> None:
        with self.production("output"):
            self.expect("cout")
            self.expect("<<")
            self.parse_output_value()
            self.expect(";")

    # <assignment> -> identifier = <expr> ;
    def parse_assignment(self) -> None:
        with self.production("assignment"):
            name = self.expect(TokenKind.IDENTIFIER).text
            var_type = self.symbol_table.lookup(name).type if self.check_types else None
            self.expect("=")
            expr_type = self.parse_expr()
            if self.check_types:
                TypeChecker.check_assignment(var_type, expr_type)
            self.expect(";")

    # <condition> -> <expr>
    def parse_condition(self) -> None:
        with self.production("condition") as node:
            cond_type = self.parse_expr()
            if self.check_types:
                TypeChecker.check_condition(cond_type)
            self._annotate(node, cond_type)

    # <ifstmt> -> if ( <condition> ) <then-part> <else-part>
    def parse_ifstmt(self) -> None:
        with self.production("ifstmt"):
            self.expect("if")
            self.expect("(")
            self.parse_condition()
            self.expect(")")

            with self.production("then_part"):
                self.parse_stmt()

            # Both branches share the one table, so their declarations leak
            # into the rest of the program.
            with self.production("else_part"):
                if self.lookahead() == "else":
                    self.expect("else")
                    self.parse_stmt()

    def parse_stmt(self) -> None:
        """Parse a statement, dispatching on the lookahead token."""
        with self.production("stmt"):
            token = self.cursor.peek()
            if token.kind == TokenKind.IDENTIFIER:
                self.parse_assignment()
                return

            match self.lookahead():
                case ";":
                    self.parse_empty()
                case "int" | "real":
                    self.parse_vardecl()
                case "cin":
                    self.parse_input()
                case "cout":
                    self.parse_output()
                case "if":
                    self.parse_ifstmt()
                case _:
                    raise ParseError(f"expecting statement, but found {token}")

    # <stmts> -> <stmt> <stmt>*
    def parse_stmts(self) -> None:
        with self.production("stmts"):
            self.parse_stmt()
            while self.at_statement_start():
                self.parse_stmt()

    # <simpleC> -> void main ( ) { <stmts> } $
    def parse_program(self) -> SymbolTable:
        with self.production("program"):
            self.expect("void")
            self.expect("main")
            self.expect("(")
            self.expect(")")
            self.expect("{")
            self.parse_stmts()
            self.expect("}")
            self.expect("$")

        if not self.cursor.at_end():
            raise ParseError(f"expecting end of input, but found {self.cursor.peek()}")
        return self.symbol_table

    def run(self) -> Result:
        """Recognize the whole program and report the first failure, if any."""
        try:
            self.parse_program()
        except CheckError as e:
            logger.debug("stopped at token %d: %s", self.cursor.pos, e.message)
            return Failure(
                e.phase, e.message, self.symbol_table, tuple(self.warnings), self.tree
            )
        return Success(self.symbol_table, tuple(self.warnings), self.tree)


def check(tokens: TokenInput, *, record_tree: bool = False) -> Result:
    """Grammar, declarations and types in one pass."""
    return Checker(tokens, record_tree=record_tree).run()


def parse(tokens: TokenInput, *, record_tree: bool = False) -> Result:
    """Grammar only; the only possible failure is a syntax error."""
    return Checker(
        tokens, declare=False, check_types=False, record_tree=record_tree
    ).run()


def build_symbol_table(
    tokens: TokenInput, *, record_tree: bool = False
) -> Tuple[Result, SymbolTable]:
    """Grammar plus declarations. Returns the result and the collected table."""
    result = Checker(tokens, check_types=False, record_tree=record_tree).run()
    return result, result.symbols


def typecheck(
    tokens: TokenInput, symbol_table: SymbolTable, *, record_tree: bool = False
) -> Result:
    """Grammar plus type rules against a table built by `build_symbol_table`.

    Declarations are not re-added, so every variable in the table is visible
    from the start of the program.
    """
    return Checker(
        tokens, symbol_table.copy(), declare=False, record_tree=record_tree
    ).run()
