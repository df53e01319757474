"""Lexical analysis for treelox.

The scanner walks the source one character at a time with a single
character of lookahead (two for the fractional part of a number). It
never stops at the first problem: each bad character is recorded as a
`LexError` and scanning resumes with the next one, so a single pass reports
everything that is wrong with the input.

`Scanner.scan` hands back both the tokens and the errors. `scan_tokens` is
the strict entry point used by the pipeline: any lexical error fails the
whole scan.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from .errors import LexError, ScanError
from .token import KEYWORDS, Token, TokenType
from .types import to_f32

# Characters that form a token on their own.
SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
}

# Characters that may be followed by '=' to form a two character operator.
EQUAL_SUFFIXED = {
    '!': (TokenType.BANG, TokenType.BANG_EQUAL),
    '=': (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    '<': (TokenType.LESS, TokenType.LESS_EQUAL),
    '>': (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

WHITESPACE = ' \t\r\n'


def _is_digit(c: Optional[str]) -> bool:
    return c is not None and '0' <= c <= '9'


def _is_alpha(c: Optional[str]) -> bool:
    return c is not None and c.isascii() and c.isalpha()


def _is_alnum(c: Optional[str]) -> bool:
    return c is not None and c.isascii() and c.isalnum()


class Scanner:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.tokens: List[Token] = []
        self.errors: List[LexError] = []

    # Cursor helpers

    def peek(self, offset: int = 0) -> Optional[str]:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return None

    def advance(self) -> str:
        c = self.source[self.pos]
        self.pos += 1
        return c

    def match(self, expected: str) -> bool:
        if self.peek() == expected:
            self.pos += 1
            return True
        return False

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    # Scanning

    def scan(self) -> Tuple[List[Token], List[LexError]]:
        while not self.at_end():
            try:
                token = self.scan_token()
            except LexError as e:
                self.errors.append(e)
                continue
            self.tokens.append(token)
        self.tokens.append(Token(TokenType.EOF, '', None, self.line))
        return self.tokens, self.errors

    def scan_token(self) -> Token:
        c = self.advance()
        if c in SINGLE_CHAR_TOKENS:
            return Token.simple(SINGLE_CHAR_TOKENS[c], self.line)
        if c in EQUAL_SUFFIXED:
            plain, with_equal = EQUAL_SUFFIXED[c]
            return Token.simple(with_equal if self.match('=') else plain, self.line)
        if c == '/':
            return self.slash()
        if c == '"':
            return self.string()
        if c in WHITESPACE:
            return self.whitespace(c)
        if _is_digit(c):
            return self.number(c)
        if _is_alpha(c) or c == '_':
            return self.identifier(c)
        raise LexError(self.line, f"Unknown token {c}")

    def slash(self) -> Token:
        if not self.match('/'):
            return Token.simple(TokenType.SLASH, self.line)
        start = self.pos - 2
        # the newline itself is left for the whitespace scanner
        while not self.at_end() and self.peek() != '\n':
            self.advance()
        return Token(TokenType.COMMENT, self.source[start:self.pos])

    def whitespace(self, first: str) -> Token:
        start = self.pos - 1
        if first == '\n':
            self.line += 1
        while not self.at_end() and self.peek() in WHITESPACE:
            if self.advance() == '\n':
                self.line += 1
        return Token(TokenType.WHITESPACE, self.source[start:self.pos])

    def string(self) -> Token:
        start_line = self.line
        start = self.pos
        while not self.at_end():
            c = self.advance()
            if c == '"':
                text = self.source[start:self.pos - 1]
                return Token(TokenType.STRING, text, text, start_line)
            if c == '\n':
                self.line += 1
        raise LexError(self.line, 'Unterminated string')

    def number(self, first: str) -> Token:
        start = self.pos - 1
        while _is_digit(self.peek()):
            self.advance()
        # a trailing '.' without a digit after it is not part of the number
        if self.peek() == '.' and _is_digit(self.peek(1)):
            self.advance()
            while _is_digit(self.peek()):
                self.advance()
        text = self.source[start:self.pos]
        try:
            literal = to_f32(float(text))
        except ValueError:
            raise LexError(self.line, f"Invalid number: {text}")
        return Token(TokenType.NUMBER, text, literal, self.line)

    def identifier(self, first: str) -> Token:
        start = self.pos - 1
        while _is_alnum(self.peek()):
            self.advance()
        text = self.source[start:self.pos]
        kind = KEYWORDS.get(text)
        if kind is not None:
            return Token.simple(kind, self.line)
        return Token(TokenType.IDENTIFIER, text, text, self.line)


def _print_error(error: LexError) -> None:
    print(error)


def scan_tokens(source: str, report: Optional[Callable[[LexError], None]] = None) -> List[Token]:
    """Scan `source`, failing the whole scan if any lexical error occurred.

    Every error is reported (printed by default) before `ScanError` is
    raised, so the user sees all of them at once. The partially scanned
    token list is discarded in that case; use `Scanner.scan` to keep it.
    """
    if report is None:
        report = _print_error
    scanner = Scanner(source)
    tokens, errors = scanner.scan()
    if errors:
        for error in errors:
            report(error)
        raise ScanError(scanner.line, errors)
    return tokens
