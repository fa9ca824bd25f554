from typing import Any, Dict, Optional

from lox.errors import LoxRuntimeError
from lox.tokens import Token


class Environment:
    """Represents a scope mapping identifiers to values, chained to its enclosing scope."""
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any):
        # always lands in this scope, shadowing any outer binding
        self.values[name] = value

    def get(self, name: Token) -> Any:
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.parent
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: Token, value: Any):
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.parent
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def depth(self) -> int:
        """Number of scopes enclosing this one; the global scope has depth 0."""
        count = 0
        env = self.parent
        while env is not None:
            count += 1
            env = env.parent
        return count
