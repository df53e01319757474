# treelox language package
# This package provides a scanner, parser and tree-walking interpreter for a
# small subset of the Lox language.
# treelox.grammar restates the grammar for Lark and is used by the tests to
# cross-check the hand-written parser.
from .errors import (
    LoxError, LoxRuntimeError, LoxTypeError, UndefinedVariableError,
    LexError, ScanError, ParseError, UsageError, exit_code_for,
)
from .interpreter import Interpreter
from .parser import parse, parse_program
from .runner import Lox
from .scanner import Scanner, scan_tokens

__all__ = [
    'Interpreter',
    'Lox',
    'Scanner',
    'scan_tokens',
    'parse',
    'parse_program',
    'LoxError',
    'LoxRuntimeError',
    'LoxTypeError',
    'UndefinedVariableError',
    'LexError',
    'ScanError',
    'ParseError',
    'UsageError',
    'exit_code_for',
]
