from typing import Any, Dict, Optional

from treelox.errors import UndefinedVariableError


class Environment:
    """One lexical scope mapping names to values, chained to its enclosing scope."""
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1

    def child(self) -> 'Environment':
        return Environment(self)

    def define(self, name: str, value: Any):
        # always the innermost scope; shadows any outer binding
        self.values[name] = value

    def get(self, name: str) -> Any:
        if name in self.values:
            return self.values[name]
        if self.parent:
            return self.parent.get(name)
        raise UndefinedVariableError(name)

    def assign(self, name: str, value: Any) -> Any:
        # only ever rebinds; an unknown name is an error, never a new binding
        if name in self.values:
            self.values[name] = value
            return value
        if self.parent:
            return self.parent.assign(name, value)
        raise UndefinedVariableError(name)
