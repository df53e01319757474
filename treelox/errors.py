from typing import List, Optional


class LoxError(Exception):
    """Base class for every error the treelox pipeline raises."""
    line: Optional[int] = None


class UsageError(LoxError):
    """Raised when the command line is invoked incorrectly."""
    def __init__(self, message: str = 'Usage: treelox [script]'):
        super().__init__(message)
        self.message = message


class LoxRuntimeError(LoxError):
    """Errors raised while evaluating an already parsed program."""
    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line


class LoxTypeError(LoxRuntimeError):
    """A value could not be coerced to the type an operator requires."""
    def __init__(self, expected: str, actual: str, line: Optional[int] = None):
        where = f" on line {line}" if line is not None else ''
        super().__init__(f"Type error{where}: expected {expected}, got {actual}", line)
        self.expected = expected
        self.actual = actual


class UndefinedVariableError(LoxRuntimeError):
    """Reference or assignment to a name no enclosing scope defines."""
    def __init__(self, name: str, line: Optional[int] = None):
        where = f" on line {line}" if line is not None else ''
        super().__init__(f"Undefined variable '{name}'{where}", line)
        self.name = name

    def with_line(self, line: int) -> 'UndefinedVariableError':
        return UndefinedVariableError(self.name, line)


class LexError(LoxError):
    """A single lexical problem found by the scanner."""
    def __init__(self, line: int, message: str):
        super().__init__(f"[line {line}] Error: {message}")
        self.line = line
        self.message = message


class ScanError(LoxError):
    """The scan as a whole failed because at least one LexError occurred."""
    def __init__(self, line: int, errors: List[LexError]):
        super().__init__(f"Error parsing code on line {line}")
        self.line = line
        self.errors = errors


class ParseError(LoxError):
    """Malformed grammar, tagged with the line it was detected on."""
    def __init__(self, line: int, message: str):
        super().__init__(f"Syntax error on line {line}: {message}")
        self.line = line
        self.message = message


EXIT_USAGE = 64
EXIT_RUNTIME = 65
EXIT_SOFTWARE = 70


def exit_code_for(error: BaseException) -> int:
    """Map an error to the process exit code the command line returns."""
    if isinstance(error, UsageError):
        return EXIT_USAGE
    if isinstance(error, LoxRuntimeError):
        return EXIT_RUNTIME
    return EXIT_SOFTWARE
