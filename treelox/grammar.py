"""Declarative reference grammar for treelox.

The hand-written recursive-descent parser in `treelox.parser` is the one
the interpreter uses: it tracks lines exactly and recovers from errors.
This module states the same grammar declaratively as a Lark LALR grammar
and transforms Lark's parse tree into the very same `treelox.ast` nodes.
Having both lets the test suite check the hand-written parser against an
independent rendition of the grammar.

The reference parser does no error recovery; malformed input raises one
of Lark's `UnexpectedInput` exceptions.
"""

from __future__ import annotations

from typing import Any, List

from lark import Lark, Token as LarkToken, Transformer

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Variable, Assign,
    ExprStmt, PrintStmt, VarStmt, Block,
)
from .token import Token, TokenType
from .types import NIL, to_f32


LOX_GRAMMAR = r"""
    start: declaration*

    // Statements
    ?declaration: var_decl
                | statement

    var_decl: "var" IDENTIFIER ("=" expression)? ";"

    ?statement: print_stmt
              | block
              | expr_stmt

    print_stmt: "print" expression ";"
    block: "{" declaration* "}" ";"
    expr_stmt: expression ";"

    // Expressions with precedence
    ?expression: assignment
    ?assignment: IDENTIFIER "=" assignment -> assign
               | equality
    ?equality: comparison ((BANG_EQUAL | EQUAL_EQUAL) comparison)*
    ?comparison: term ((GREATER | GREATER_EQUAL | LESS | LESS_EQUAL) term)*
    ?term: factor ((MINUS | PLUS) factor)*
    ?factor: unary ((SLASH | STAR) unary)*
    ?unary: (BANG | MINUS) unary -> prefix
          | primary
    ?primary: NUMBER -> number
            | STRING -> string
            | "true" -> true
            | "false" -> false
            | "nil" -> nil
            | "(" expression ")" -> grouping
            | IDENTIFIER -> variable

    // Tokens
    BANG_EQUAL: "!="
    EQUAL_EQUAL: "=="
    GREATER_EQUAL: ">="
    GREATER: ">"
    LESS_EQUAL: "<="
    LESS: "<"
    MINUS: "-"
    PLUS: "+"
    SLASH: "/"
    STAR: "*"
    BANG: "!"

    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"]*"/
    IDENTIFIER: /[A-Za-z_][A-Za-z0-9]*/

    COMMENT: /\/\/[^\n]*/
    %ignore COMMENT
    %import common.WS
    %ignore WS
"""


LOX_PARSER = Lark(
    LOX_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=False,
)


def _token(tok: LarkToken) -> Token:
    """Convert a Lark operator or identifier token into a treelox Token."""
    if tok.type == 'IDENTIFIER':
        return Token(TokenType.IDENTIFIER, str(tok), str(tok), tok.line)
    return Token.simple(TokenType[tok.type], tok.line)


def _nodes(items: List[Any]) -> List[Any]:
    # anonymous keyword/punctuation tokens are normally filtered already
    return [item for item in items if not isinstance(item, LarkToken)]


def _identifier(items: List[Any]) -> LarkToken:
    for item in items:
        if isinstance(item, LarkToken) and item.type == 'IDENTIFIER':
            return item
    raise ValueError('rule has no identifier')


class ASTTransformer(Transformer):
    """Transforms the Lark parse tree into treelox AST nodes."""

    def start(self, items) -> List[Stmt]:
        return list(items)

    # Statements
    def var_decl(self, items):
        name = _token(_identifier(items))
        rest = _nodes(items)
        initializer = rest[0] if rest else None
        return VarStmt(name, initializer)

    def print_stmt(self, items):
        return PrintStmt(_nodes(items)[0])

    def block(self, items):
        return Block(_nodes(items))

    def expr_stmt(self, items):
        return ExprStmt(_nodes(items)[0])

    # Expressions
    def assign(self, items):
        name = _token(_identifier(items))
        return Assign(name, _nodes(items)[0])

    def _fold(self, items) -> Expr:
        # operand (operator operand)* folded to the left
        expr = items[0]
        i = 1
        while i < len(items):
            expr = Binary(expr, _token(items[i]), items[i + 1])
            i += 2
        return expr

    equality = _fold
    comparison = _fold
    term = _fold
    factor = _fold

    def prefix(self, items):
        operator, operand = items
        return Unary(_token(operator), operand)

    def number(self, items):
        return Literal(to_f32(float(items[0])))

    def string(self, items):
        return Literal(str(items[0])[1:-1])

    def true(self, items):
        return Literal(True)

    def false(self, items):
        return Literal(False)

    def nil(self, items):
        return Literal(NIL)

    def grouping(self, items):
        return Grouping(_nodes(items)[0])

    def variable(self, items):
        return Variable(_token(items[0]))


def parse_reference(source: str) -> List[Stmt]:
    """Parse a whole program with the reference grammar."""
    tree = LOX_PARSER.parse(source)
    return ASTTransformer().transform(tree)
