from typing import Any, Dict, Optional

from .errors import LoxRuntimeError
from .scanner import Token


class Environment:
    """One scope frame: name bindings plus a link to the enclosing frame.

    Frames form a finite chain ending at the global frame (the one with
    no parent). Lookups and assignments walk outward along that chain.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1

    def define(self, name: str, value: Any):
        # Always binds in this frame, shadowing outer bindings of the same name.
        self.values[name] = value

    def find(self, name: str) -> Optional['Environment']:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        return None

    def get(self, name: Token) -> Any:
        env = self.find(name.lexeme)
        if env is None:
            raise LoxRuntimeError(name, f"Variable '{name.lexeme}' doesn't exist.")
        return env.values[name.lexeme]

    def assign(self, name: Token, value: Any) -> Any:
        env = self.find(name.lexeme)
        if env is None:
            raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")
        env.values[name.lexeme] = value
        return value
