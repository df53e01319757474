"""Abstract Syntax Tree (AST) definitions for treelox.

Expressions and statements are frozen dataclasses forming a strict tree:
every node owns its children, nothing is shared and nothing is mutated
after the parser builds it. The interpreter, the expression printer and
the JSON dumper only ever read them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .token import Token
from .types import values_equal


@dataclass(frozen=True)
class Expr:
    """Base class for all expression nodes."""
    pass


@dataclass(frozen=True, eq=False)
class Literal(Expr):
    value: Any

    def __eq__(self, other: object) -> bool:
        # a `true` literal must not compare equal to a `1` literal
        if not isinstance(other, Literal):
            return NotImplemented
        return type(self.value) is type(other.value) and values_equal(self.value, other.value)

    def __hash__(self) -> int:
        return hash((Literal, type(self.value)))


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Stmt:
    """Base class for all statement nodes."""
    pass


@dataclass(frozen=True)
class ExprStmt(Stmt):
    expr: Expr


@dataclass(frozen=True)
class PrintStmt(Stmt):
    expr: Expr


@dataclass(frozen=True)
class VarStmt(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class Block(Stmt):
    statements: List[Stmt]
