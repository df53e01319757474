"""Recursive-descent parser for treelox.

Grammar, lowest to highest precedence::

    declaration := "var" IDENTIFIER ("=" expression)? ";" | statement
    statement   := "print" expression ";"
                 | "{" declaration* "}" ";"
                 | expression ";"
    expression  := assignment
    assignment  := IDENTIFIER "=" assignment | equality
    equality    := comparison (("!=" | "==") comparison)*
    comparison  := term ((">" | ">=" | "<" | "<=") term)*
    term        := factor (("-" | "+") factor)*
    factor      := unary (("/" | "*") unary)*
    unary       := ("!" | "-") unary | primary
    primary     := NUMBER | STRING | "true" | "false" | "nil"
                 | "(" expression ")" | IDENTIFIER

Every binary level is left associative. Syntax errors do not abort the
parse: the error is recorded, the parser skips ahead to a likely statement
boundary and carries on, so one pass reports every independent problem.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Variable, Assign,
    ExprStmt, PrintStmt, VarStmt, Block,
)
from .errors import ParseError
from .token import Token, TokenType
from .types import NIL

T = TokenType

EQUALITY_OPS = (T.BANG_EQUAL, T.EQUAL_EQUAL)
COMPARISON_OPS = (T.GREATER, T.GREATER_EQUAL, T.LESS, T.LESS_EQUAL)
TERM_OPS = (T.MINUS, T.PLUS)
FACTOR_OPS = (T.SLASH, T.STAR)
UNARY_OPS = (T.BANG, T.MINUS)

# Tokens that start a statement; recovery resumes in front of them.
STATEMENT_STARTS = (T.CLASS, T.FUN, T.VAR, T.FOR, T.IF, T.WHILE, T.PRINT, T.RETURN)


class Parser:
    def __init__(self, tokens: Iterable[Token]):
        # comments and whitespace carry no meaning and would break lookahead
        self.tokens: List[Token] = [t for t in tokens if t.is_semantic]
        if not self.tokens or self.tokens[-1].type != T.EOF:
            last = self.tokens[-1].line if self.tokens else 0
            self.tokens.append(Token(T.EOF, '', None, last))
        self.pos = 0
        self.errors: List[ParseError] = []

    # Cursor helpers

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def at_end(self) -> bool:
        return self.peek().type == T.EOF

    def advance(self) -> Token:
        token = self.peek()
        if not self.at_end():
            self.pos += 1
        return token

    def check(self, *types: TokenType) -> bool:
        return self.peek().type in types

    def match(self, *types: TokenType) -> bool:
        if self.check(*types):
            self.advance()
            return True
        return False

    def consume(self, expected: TokenType, message: str) -> Token:
        if self.check(expected):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Optional[Token], message: str) -> ParseError:
        line = token.line if token is not None and token.line is not None else 0
        return ParseError(line, message)

    # Entry points

    def parse(self) -> Tuple[Optional[Stmt], List[ParseError]]:
        """Parse a single declaration, recovering from errors on the way.

        Each failed attempt is recorded and followed by synchronization and
        a fresh attempt; the first successful declaration ends the parse.
        """
        result: Optional[Stmt] = None
        while True:
            try:
                result = self.declaration()
                break
            except ParseError as e:
                self.errors.append(e)
                if not self.synchronize():
                    break
        return result, self.errors

    def parse_program(self) -> Tuple[List[Stmt], List[ParseError]]:
        """Parse declarations until the end of input."""
        statements: List[Stmt] = []
        while not self.at_end():
            try:
                statements.append(self.declaration())
            except ParseError as e:
                self.errors.append(e)
                if not self.synchronize():
                    break
        return statements, self.errors

    def synchronize(self) -> bool:
        """Skip to just past a ';' or onto a statement keyword.

        Returns False when the end of input is reached first, meaning there
        is nothing left to retry.
        """
        self.advance()
        while not self.at_end():
            if self.previous().type == T.SEMICOLON:
                return True
            if self.check(*STATEMENT_STARTS):
                return True
            self.advance()
        return False

    # Statements

    def declaration(self) -> Stmt:
        if self.match(T.VAR):
            return self.var_declaration()
        return self.statement()

    def var_declaration(self) -> Stmt:
        name = self.consume(T.IDENTIFIER, 'Expect variable name.')
        initializer: Optional[Expr] = None
        if self.match(T.EQUAL):
            initializer = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after variable declaration.")
        return VarStmt(name, initializer)

    def statement(self) -> Stmt:
        if self.match(T.PRINT):
            value = self.expression()
            self.consume(T.SEMICOLON, "Expect ';' after value.")
            return PrintStmt(value)
        if self.match(T.LEFT_BRACE):
            return self.block()
        expr = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after expression.")
        return ExprStmt(expr)

    def block(self) -> Stmt:
        statements: List[Stmt] = []
        while not self.check(T.RIGHT_BRACE) and not self.at_end():
            statements.append(self.declaration())
        self.consume(T.RIGHT_BRACE, "Expect '}' after block.")
        self.consume(T.SEMICOLON, "Expect ';' after block.")
        return Block(statements)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.equality()
        if self.check(T.EQUAL):
            equals = self.advance()
            if isinstance(expr, Variable):
                value = self.assignment()
                return Assign(expr.name, value)
            raise self.error(equals, 'Invalid assignment target.')
        return expr

    def binary(self, operand, operators) -> Expr:
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def equality(self) -> Expr:
        return self.binary(self.comparison, EQUALITY_OPS)

    def comparison(self) -> Expr:
        return self.binary(self.term, COMPARISON_OPS)

    def term(self) -> Expr:
        return self.binary(self.factor, TERM_OPS)

    def factor(self) -> Expr:
        return self.binary(self.unary, FACTOR_OPS)

    def unary(self) -> Expr:
        if self.match(*UNARY_OPS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.primary()

    def primary(self) -> Expr:
        token = self.peek()
        if self.match(T.TRUE):
            return Literal(True)
        if self.match(T.FALSE):
            return Literal(False)
        if self.match(T.NIL):
            return Literal(NIL)
        if self.match(T.NUMBER, T.STRING):
            return Literal(token.literal)
        if self.match(T.IDENTIFIER):
            return Variable(token)
        if self.match(T.LEFT_PAREN):
            expr = self.expression()
            if not self.check(T.RIGHT_PAREN):
                # reported against the opening parenthesis
                raise self.error(token, "Expect ')' after expression.")
            self.advance()
            return Grouping(expr)
        raise self.error(token, 'Expect expression.')


def parse(tokens: Iterable[Token]) -> Tuple[Optional[Stmt], List[ParseError]]:
    return Parser(tokens).parse()


def parse_program(tokens: Iterable[Token]) -> Tuple[List[Stmt], List[ParseError]]:
    return Parser(tokens).parse_program()
