"""Diagnostic printer rendering expressions in parenthesized prefix form.

``1 + 2 * 3`` becomes ``(+ 1 (* 2 3))``. The output is meant for tests and
debugging, not for users.
"""

from __future__ import annotations

from typing import List

from .ast import Expr, Literal, Grouping, Unary, Binary, Variable, Assign
from .types import to_string


class AstPrinter:
    def print(self, expr: Expr) -> str:
        parts: List[str] = []
        self.build(expr, parts)
        return ''.join(parts)

    def build(self, expr: Expr, out: List[str]):
        if isinstance(expr, Literal):
            out.append(to_string(expr.value))
        elif isinstance(expr, Variable):
            out.append(str(expr.name))
        elif isinstance(expr, Grouping):
            self.parenthesize('grouping', [expr.expression], out)
        elif isinstance(expr, Unary):
            self.parenthesize(str(expr.operator), [expr.right], out)
        elif isinstance(expr, Binary):
            self.parenthesize(str(expr.operator), [expr.left, expr.right], out)
        elif isinstance(expr, Assign):
            raise NotImplementedError('assignment expressions cannot be printed')
        else:
            raise NotImplementedError(f"unexpected node type {type(expr)}")

    def parenthesize(self, name: str, exprs: List[Expr], out: List[str]):
        out.append(f"({name} ")
        for i, expr in enumerate(exprs):
            if i:
                out.append(' ')
            self.build(expr, out)
        out.append(')')


def print_expr(expr: Expr) -> str:
    return AstPrinter().print(expr)
