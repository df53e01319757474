"""Token definitions shared by the scanner, the parser and the AST.

A token is an immutable record of one lexical unit. Every token that
matters to the grammar carries the 1-based line it started on; the two
non-semantic kinds (comments and whitespace runs) carry no line at all and
are filtered out before parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional

from .types import to_string


class TokenType(Enum):
    # single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()
    # one or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    # literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    # keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()
    # bookkeeping
    EOF = auto()
    COMMENT = auto()
    WHITESPACE = auto()


KEYWORDS: Dict[str, TokenType] = {
    'and': TokenType.AND,
    'class': TokenType.CLASS,
    'else': TokenType.ELSE,
    'false': TokenType.FALSE,
    'for': TokenType.FOR,
    'fun': TokenType.FUN,
    'if': TokenType.IF,
    'nil': TokenType.NIL,
    'or': TokenType.OR,
    'print': TokenType.PRINT,
    'return': TokenType.RETURN,
    'super': TokenType.SUPER,
    'this': TokenType.THIS,
    'true': TokenType.TRUE,
    'var': TokenType.VAR,
    'while': TokenType.WHILE,
}

# Fixed source text of every token kind whose text never varies.
SYMBOLS: Dict[TokenType, str] = {
    TokenType.LEFT_PAREN: '(',
    TokenType.RIGHT_PAREN: ')',
    TokenType.LEFT_BRACE: '{',
    TokenType.RIGHT_BRACE: '}',
    TokenType.COMMA: ',',
    TokenType.DOT: '.',
    TokenType.MINUS: '-',
    TokenType.PLUS: '+',
    TokenType.SEMICOLON: ';',
    TokenType.SLASH: '/',
    TokenType.STAR: '*',
    TokenType.BANG: '!',
    TokenType.BANG_EQUAL: '!=',
    TokenType.EQUAL: '=',
    TokenType.EQUAL_EQUAL: '==',
    TokenType.GREATER: '>',
    TokenType.GREATER_EQUAL: '>=',
    TokenType.LESS: '<',
    TokenType.LESS_EQUAL: '<=',
}
SYMBOLS.update({kind: word for word, kind in KEYWORDS.items()})

NON_SEMANTIC = frozenset({TokenType.COMMENT, TokenType.WHITESPACE})


@dataclass(frozen=True)
class Token:
    """One lexical unit.

    `lexeme` is the exact source text, `literal` the Python value for
    identifiers (the name), strings (the enclosed text) and numbers (a
    32-bit float). The line is left out of equality so that trees parsed
    from differently laid out sources still compare equal.
    """
    type: TokenType
    lexeme: str = ''
    literal: Any = None
    line: Optional[int] = field(default=None, compare=False)

    @classmethod
    def simple(cls, type: TokenType, line: Optional[int]) -> 'Token':
        return cls(type, SYMBOLS.get(type, ''), None, line)

    @property
    def is_semantic(self) -> bool:
        return self.type not in NON_SEMANTIC

    def __str__(self) -> str:
        if self.type in (TokenType.IDENTIFIER, TokenType.STRING):
            return self.literal
        if self.type == TokenType.NUMBER:
            return to_string(self.literal)
        return SYMBOLS.get(self.type, '')
