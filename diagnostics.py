"""Failure taxonomy and analysis results.

Rule violations are raised as `CheckError` subclasses at the point where they
are detected and propagate out of the recursive descent unhandled, so the
first one aborts the whole pass. The public entry points in `checker` convert
a caught `CheckError` into a `Failure`; a clean run yields a `Success`.

    Phase.SYNTAX        token stream does not match the grammar
    Phase.REDEFINITION  a variable is declared twice
    Phase.UNDEFINED     a variable is used but never declared
    Phase.TYPE          operator, assignment or condition types are incompatible
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Union

if TYPE_CHECKING:
    from parse_tree import ParseNode
    from symbols import SymbolTable


class Phase(Enum):
    SYNTAX = auto()
    REDEFINITION = auto()
    UNDEFINED = auto()
    TYPE = auto()

    @property
    def prefix(self) -> str:
        return _PREFIXES[self]

    def __str__(self) -> str:
        return self.name.lower()


_PREFIXES = {
    Phase.SYNTAX: "syntax_error",
    Phase.REDEFINITION: "semantic_error",
    Phase.UNDEFINED: "semantic_error",
    Phase.TYPE: "type_error",
}


class CheckError(Exception):
    phase: Phase

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParseError(CheckError):
    phase = Phase.SYNTAX


class RedefinitionError(CheckError):
    phase = Phase.REDEFINITION


class UndefinedError(CheckError):
    phase = Phase.UNDEFINED


class TypeCheckError(CheckError):
    phase = Phase.TYPE


@dataclass(frozen=True)
class Success:
    symbols: SymbolTable
    warnings: Tuple[str, ...] = ()
    tree: Optional[ParseNode] = None

    ok = True

    def render(self) -> str:
        return "success"


@dataclass(frozen=True)
class Failure:
    phase: Phase
    message: str
    symbols: SymbolTable
    warnings: Tuple[str, ...] = ()
    tree: Optional[ParseNode] = None

    ok = False

    def render(self) -> str:
        return f"{self.phase.prefix}: {self.message}"


Result = Union[Success, Failure]
