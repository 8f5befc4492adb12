from typing import Any, Dict, Optional

from vyx.errors import VyxRuntimeError
from vyx.tokens import Token


class Environment:
    """Represents a scope environment mapping identifiers to values.

    ``enclosing`` is a lookup link only: an environment never outlives the
    block or call that created it, and it does not own its parent.
    """
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Any] = {}

    def define(self, name: Token, value: Any) -> None:
        key = name.lexeme()
        if key in self.values:
            raise VyxRuntimeError(name, f"Variable '{key}' already defined.")
        self.values[key] = value

    def get(self, name: Token) -> Any:
        key = name.lexeme()
        env: Optional[Environment] = self
        while env is not None:
            if key in env.values:
                return env.values[key]
            env = env.enclosing
        raise VyxRuntimeError(name, f"Undefined variable '{key}'.")

    def assign(self, name: Token, value: Any) -> None:
        # Set the value in the nearest environment that already defines it
        key = name.lexeme()
        env: Optional[Environment] = self
        while env is not None:
            if key in env.values:
                env.values[key] = value
                return
            env = env.enclosing
        raise VyxRuntimeError(name, f"Undefined variable '{key}'.")

    def depth(self) -> int:
        """Number of enclosing links between this environment and the globals."""
        count = 0
        env = self.enclosing
        while env is not None:
            count += 1
            env = env.enclosing
        return count
