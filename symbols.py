"""Symbol table and symbol representations.

This module defines the `SymbolType` enum, a `Symbol` dataclass for declared
variables, and `SymbolTable`, a single flat scope mapping names to symbols.
The language has no nested scopes: a declaration inside an `if` branch lands
in the same table as everything else and stays visible for the rest of the
program.

The `SymbolTable` API provides `declare`, `lookup` and existence checks used
by the checker and the type rules.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from diagnostics import RedefinitionError, UndefinedError


class SymbolType(Enum):
    INT = auto()
    REAL = auto()
    STR = auto()
    BOOL = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_numeric(self) -> bool:
        return self in (SymbolType.INT, SymbolType.REAL)


# Only these may appear in a declaration.
DECLARABLE_TYPES = {
    "int": SymbolType.INT,
    "real": SymbolType.REAL,
}


@dataclass(frozen=True)
class Symbol:
    name: str
    type: SymbolType

    def __repr__(self) -> str:
        return f"Symbol({self.name}, {self.type})"


class SymbolTable:
    def __init__(self, symbols: Optional[Iterable[Tuple[str, SymbolType]]] = None):
        self.symbols: Dict[str, Symbol] = {}
        for name, type_ in symbols or ():
            self.declare(name, type_)

    def declare(self, name: str, type_: SymbolType) -> Symbol:
        """Declare a new variable; names are unique for the whole program."""
        if name in self.symbols:
            raise RedefinitionError(f"redefinition of variable '{name}'")

        symbol = Symbol(name, type_)
        self.symbols[name] = symbol
        return symbol

    def lookup(self, name: str) -> Symbol:
        if name in self.symbols:
            return self.symbols[name]
        raise UndefinedError(f"variable '{name}' undefined")

    def exists(self, name: str) -> bool:
        return name in self.symbols

    def copy(self) -> SymbolTable:
        table = SymbolTable()
        table.symbols = dict(self.symbols)
        return table

    def items(self) -> list[Tuple[str, SymbolType]]:
        """(name, type) pairs in declaration order."""
        return [(s.name, s.type) for s in self.symbols.values()]

    def __contains__(self, name: object) -> bool:
        return name in self.symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols.values())

    def __len__(self) -> int:
        return len(self.symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymbolTable):
            return NotImplemented
        return self.items() == other.items()

    def __repr__(self) -> str:
        inner = ", ".join(f"{n}: {t}" for n, t in self.items())
        return f"SymbolTable({{{inner}}})"
