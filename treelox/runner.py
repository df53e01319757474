"""Source-to-output pipeline shared by the script runner and the prompt."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, TextIO, Union

from .ast import ExprStmt, Stmt
from .errors import LoxError
from .interpreter import Interpreter
from .parser import parse_program
from .scanner import scan_tokens
from .types import to_string


class Lox:
    """One interpreter session: scanning, parsing and running source text.

    Bindings made by one `run` call stay visible to the next, which is what
    the interactive prompt relies on. Diagnostics go through `report` (one
    line each, printed by default) and program output through `output`.
    """
    def __init__(self, output: Optional[TextIO] = None,
                 report: Optional[Callable[[LoxError], None]] = None,
                 debug_level: int = 0, debug_file: Optional[str] = None):
        self.output = output
        self.report = report or self._print_error
        self.interpreter = Interpreter(output=output, debug_level=debug_level, debug_file=debug_file)

    def _print_error(self, error: LoxError):
        print(error, file=self.output)

    def parse(self, source: str) -> List[Stmt]:
        tokens = scan_tokens(source, report=self.report)
        statements, errors = parse_program(tokens)
        if errors:
            for error in errors:
                self.report(error)
            raise errors[-1]
        return statements

    def execute(self, statements: List[Stmt]):
        for stmt in statements:
            value = self.interpreter.execute_all([stmt])
            # top level expression statements echo their value
            if isinstance(stmt, ExprStmt):
                print(to_string(value), file=self.output)

    def run(self, source: str):
        self.execute(self.parse(source))

    def run_file(self, path: Union[str, Path]):
        with open(path, 'r', encoding='utf-8') as f:
            source = f.read()
        self.run(source)

    def close(self):
        self.interpreter.close()
