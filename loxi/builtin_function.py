from dataclasses import dataclass
from typing import Any, Optional


@dataclass(eq=False)
class BuiltinFunction:
    """A callable implemented in Python. Compared by identity."""
    name: str
    arity: Optional[int]
    fn: Any

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
