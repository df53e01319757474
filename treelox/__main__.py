"""CLI entry point for the treelox interpreter.

Usage:
    python -m treelox [-v|-vv|-vvv] [script]
    python -m treelox [-v...] --emit-ast SCRIPT
    python -m treelox [-v...] --ast AST_JSON_FILE

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given script and write an AST JSON file next to it
  --ast         Execute a previously emitted AST JSON file

Without a script an interactive prompt is started. Debug information is
written to `debug.txt` in the current directory when verbosity is greater
than zero. The exit status is 64 for a bad invocation, 65 for a runtime
error and 70 for anything else that went wrong.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import ast_to_obj, ast_from_obj
from .errors import LoxError, ParseError, UsageError, exit_code_for
from .repl import run_prompt
from .runner import Lox

DEBUG_FILE = 'debug.txt'


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError()


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog='treelox', description="treelox interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='SCRIPT', help='emit AST JSON for the given script')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('script', nargs='?', help='script to execute; starts a prompt when omitted')
    return parser


def _read(path: Path) -> str:
    if not path.exists():
        raise FileNotFoundError(f"file {path} not found")
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def run(args: argparse.Namespace) -> None:
    lox = Lox(debug_level=args.v, debug_file=DEBUG_FILE if args.v else None)
    try:
        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            statements = lox.parse(_read(program_file))
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(ast_to_obj(statements), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        # Execute from AST JSON
        if args.ast:
            with open(args.ast, 'r', encoding='utf-8') as f:
                data = json.load(f)
            lox.execute(ast_from_obj(data))
            return

        if args.script:
            lox.run_file(args.script)
        else:
            run_prompt(lox)
    finally:
        lox.close()


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args = build_parser().parse_args(argv)
        run(args)
    except ParseError as e:
        # every syntax error has already been reported line by line
        return exit_code_for(e)
    except LoxError as e:
        print(e)
        return exit_code_for(e)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return exit_code_for(e)
    return 0


if __name__ == '__main__':
    sys.exit(main())
