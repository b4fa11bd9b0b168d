"""Derivation tree recorded by the checker.

The checker does not need a tree to do its job, but when asked to
(`record_tree=True`) it records one `ParseNode` per grammar production it
enters and one leaf per token it consumes. The tree is used by the
pretty-printer, the JSON dump and the Graphviz rendering for debugging.

Conventions:
- Production nodes have `kind == NodeKind.PRODUCTION` and `name` set to the
    grammar rule (`stmt`, `expr`, ...).
- Leaves have `kind == NodeKind.TOKEN` and carry the consumed `Token`.
- Expression-level nodes (`expr`, `expr_value`, `condition`) record the
    computed `symbol_type` when the run checks types.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional

from symbols import SymbolType
from tokens import Token


class NodeKind(Enum):
    PRODUCTION = auto()
    TOKEN = auto()

    def __str__(self) -> str:
        return self.name


@dataclass
class ParseNode:
    kind: NodeKind
    name: str
    token: Optional[Token] = None
    symbol_type: Optional[SymbolType] = None
    children: List[ParseNode] = field(default_factory=list)

    @classmethod
    def production(cls, name: str) -> ParseNode:
        return cls(NodeKind.PRODUCTION, name)

    @classmethod
    def leaf(cls, token: Token) -> ParseNode:
        return cls(NodeKind.TOKEN, str(token), token=token)

    @property
    def label(self) -> str:
        if self.symbol_type is not None:
            return f"{self.name} : {self.symbol_type}"
        return self.name

    def walk(self) -> Iterator[ParseNode]:
        """Pre-order traversal."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, name: str) -> List[ParseNode]:
        return [n for n in self.walk() if n.kind == NodeKind.PRODUCTION and n.name == name]

    def leaves(self) -> List[Token]:
        return [n.token for n in self.walk() if n.token is not None]
