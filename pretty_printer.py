"""Pretty-printer for derivation trees and symbol tables.

Provides `PrettyPrinter.print_tree(node)` which renders a `ParseNode` tree
into a readable indented string, and `PrettyPrinter.print_symbols(table)`
which lists declared variables. Intended for debugging, tests and the
command-line driver.

Examples:
    PrettyPrinter.print_tree(result.tree)
    PrettyPrinter.print_symbols(result.symbols)
"""

from __future__ import annotations
from typing import List, Optional, Sequence

from parse_tree import NodeKind, ParseNode
from symbols import SymbolTable
from tokens import Token


class PrettyPrinter:
    @staticmethod
    def print_tree(node: Optional[ParseNode], indent: int = 0) -> str:
        if node is None:
            return "<no tree>"

        lines: List[str] = []
        PrettyPrinter._print_node(node, indent, lines)
        return "\n".join(lines)

    @staticmethod
    def _print_node(node: ParseNode, indent: int, lines: List[str]) -> None:
        pad = "  " * indent
        if node.kind == NodeKind.TOKEN:
            lines.append(f"{pad}'{node.name}'")
            return

        lines.append(f"{pad}{node.label}")
        for child in node.children:
            PrettyPrinter._print_node(child, indent + 1, lines)

    @staticmethod
    def print_symbols(table: SymbolTable) -> str:
        if not len(table):
            return "(no variables)"
        width = max(len(name) for name, _ in table.items())
        return "\n".join(f"{name.ljust(width)} : {type_}" for name, type_ in table.items())

    @staticmethod
    def print_tokens(tokens: Sequence[Token], limit: int = 50) -> str:
        lines = [f"Tokens ({len(tokens)}):"]
        for i, token in enumerate(tokens[:limit]):
            lines.append(f"  {i:3}: {token}")
        if len(tokens) > limit:
            lines.append(f"  ... and {len(tokens) - limit} more")
        return "\n".join(lines)
