"""Interactive prompt for treelox, powered by prompt_toolkit."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Union

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from .errors import LoxRuntimeError
from .runner import Lox

PROMPT = '>> '


class _Interrupted:
    """Placeholder yielded when the user presses Ctrl-C at the prompt."""


INTERRUPTED = _Interrupted()

Line = Union[str, _Interrupted]


def prompt_lines(prompt: str = PROMPT) -> Iterator[Line]:
    """Yield lines typed at the terminal until end of input."""
    session: PromptSession = PromptSession(history=InMemoryHistory())
    while True:
        try:
            yield session.prompt(prompt)
        except KeyboardInterrupt:
            yield INTERRUPTED
        except EOFError:
            return


def run_prompt(lox: Lox, lines: Optional[Iterable[Line]] = None):
    """Run each line through `lox` until the input is exhausted.

    Runtime errors are reported and the session goes on with the next line;
    any other treelox error (a lexical or syntax error) ends the session by
    propagating to the caller.
    """
    if lines is None:
        lines = prompt_lines()
    for line in lines:
        if isinstance(line, _Interrupted):
            print('Ctrl-C')
            continue
        try:
            lox.run(line)
        except LoxRuntimeError as e:
            lox.report(e)
    print('Goodbye')
