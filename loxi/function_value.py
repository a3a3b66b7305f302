from .ast import Function


class FunctionValue:
    """Represents a user-defined Lox function."""
    def __init__(self, declaration: Function):
        self.declaration = declaration

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    @property
    def arity(self) -> int:
        return len(self.declaration.params)

    def __repr__(self) -> str:
        return f"<function {self.name}>"
