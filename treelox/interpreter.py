"""Tree-walking interpreter for treelox.

The interpreter evaluates statements and expressions directly from the
AST against a chain of environments. Statements may print; expressions
produce values. Runtime errors (type errors, undefined variables) are
raised as exceptions and propagate immediately; any block scopes entered
on the way are unwound before the error leaves the interpreter.
"""

from __future__ import annotations

import math
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, TextIO

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Variable, Assign,
    ExprStmt, PrintStmt, VarStmt, Block,
)
from .environment import Environment
from .errors import UndefinedVariableError
from .token import Token, TokenType
from .types import (
    NIL, as_bool, as_number, as_string, is_number, to_f32, to_string, type_name, values_equal,
)

T = TokenType


def divide(a: float, b: float) -> float:
    """IEEE-754 division: dividing by zero yields an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return to_f32(a / b)


# Numeric binary operators: both operands are coerced to numbers first.
ARITHMETIC: Dict[TokenType, Callable[[float, float], Any]] = {
    T.MINUS: lambda a, b: to_f32(a - b),
    T.STAR: lambda a, b: to_f32(a * b),
    T.SLASH: divide,
    T.GREATER: lambda a, b: a > b,
    T.GREATER_EQUAL: lambda a, b: a >= b,
    T.LESS: lambda a, b: a < b,
    T.LESS_EQUAL: lambda a, b: a <= b,
}


class Interpreter:
    """Executes treelox statements against a persistent global scope."""
    def __init__(self, output: Optional[TextIO] = None, debug_level: int = 0,
                 debug_file: Optional[str] = None):
        self.globals = Environment()
        self.env = self.globals
        self.output = output
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Statements

    def execute_all(self, statements: Iterable[Stmt]) -> Any:
        result: Any = NIL
        for stmt in statements:
            if self.debug_level >= 1:
                self.debug(f"execute {type(stmt).__name__}")
            result = self.interpret(stmt)
        return result

    def interpret(self, stmt: Stmt) -> Any:
        if isinstance(stmt, ExprStmt):
            return self.evaluate(stmt.expr)
        if isinstance(stmt, PrintStmt):
            value = self.evaluate(stmt.expr)
            print(to_string(value), file=self.output)
            return NIL
        if isinstance(stmt, VarStmt):
            value = self.evaluate(stmt.initializer) if stmt.initializer is not None else NIL
            self.env.define(stmt.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"define {stmt.name.lexeme}: {type_name(value)} = {to_string(value)} (depth {self.env.depth})")
            return NIL
        if isinstance(stmt, Block):
            with self.scope():
                for inner in stmt.statements:
                    self.interpret(inner)
            return NIL
        raise NotImplementedError(f"interpret: unexpected node type {type(stmt)}")

    @contextmanager
    def scope(self) -> Iterator[Environment]:
        """Run the body in a fresh child scope, restoring the parent on any exit."""
        previous = self.env
        self.env = previous.child()
        if self.debug_level >= 2:
            self.debug(f"enter block (depth {self.env.depth})")
        try:
            yield self.env
        finally:
            self.env = previous
            if self.debug_level >= 2:
                self.debug(f"leave block (depth {previous.depth})")

    # Expressions

    def evaluate(self, expr: Expr) -> Any:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression)
        if isinstance(expr, Variable):
            return self.lookup(expr.name)
        if isinstance(expr, Assign):
            return self.assign(expr.name, self.evaluate(expr.value))
        if isinstance(expr, Unary):
            return self.unary(expr.operator, self.evaluate(expr.right))
        if isinstance(expr, Binary):
            left = self.evaluate(expr.left)
            right = self.evaluate(expr.right)
            return self.binary(expr.operator, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(expr)}")

    def lookup(self, name: Token) -> Any:
        try:
            return self.env.get(name.lexeme)
        except UndefinedVariableError as e:
            raise e.with_line(name.line) from None

    def assign(self, name: Token, value: Any) -> Any:
        try:
            self.env.assign(name.lexeme, value)
        except UndefinedVariableError as e:
            raise e.with_line(name.line) from None
        if self.debug_level >= 2:
            self.debug(f"assign {name.lexeme} = {to_string(value)}")
        return value

    def unary(self, operator: Token, operand: Any) -> Any:
        if operator.type == T.MINUS:
            result: Any = -as_number(operand, operator.line)
        elif operator.type == T.BANG:
            result = not as_bool(operand, operator.line)
        else:
            raise NotImplementedError(f"unsupported unary operator {operator.lexeme}")
        if self.debug_level >= 3:
            self.debug(f"{operator.lexeme}{to_string(operand)} -> {to_string(result)}")
        return result

    def binary(self, operator: Token, left: Any, right: Any) -> Any:
        line = operator.line
        kind = operator.type
        if kind in ARITHMETIC:
            result = ARITHMETIC[kind](as_number(left, line), as_number(right, line))
        elif kind == T.PLUS:
            result = self.plus(left, right, line)
        elif kind == T.EQUAL_EQUAL:
            result = values_equal(left, right)
        elif kind == T.BANG_EQUAL:
            result = not values_equal(left, right)
        else:
            raise NotImplementedError(f"unsupported binary operator {operator.lexeme}")
        if self.debug_level >= 3:
            self.debug(f"{to_string(left)} {operator.lexeme} {to_string(right)} -> {to_string(result)}")
        return result

    @staticmethod
    def plus(left: Any, right: Any, line: Optional[int]) -> Any:
        # numeric addition if the left operand is a number, else concatenation
        if is_number(left):
            return to_f32(left + as_number(right, line))
        return as_string(left, line) + as_string(right, line)
