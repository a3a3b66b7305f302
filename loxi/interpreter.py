"""Tree-walking interpreter for the Lox language.

`Interpreter.interpret` executes a list of parsed statements against a
chain of `Environment` frames. Blocks and function calls push a fresh
frame and always restore the previous one on exit, even when a runtime
error is propagating. Runtime errors are reported once, at the token
that triggered them, and abort the rest of the current `interpret` call.

Function calls chain the new frame onto the frame that is current at
the call site, not the one in which the function was declared, and a
call always evaluates to nil: the language has no `return` yet.
"""

from __future__ import annotations

import math
from typing import IO, Any, List, Optional

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Variable,
    Assign, Call, Expression, Print, Var, Block, If, While, Function,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .function_value import FunctionValue
from .errors import ErrorReporter, LoxRuntimeError
from .parser import parse_program, raise_recursion_limit
from .scanner import Token, TokenType, token_location
from .std import populate_global_environment
from .types import NIL, is_truthy, values_equal, to_string, to_repr, type_name


class Interpreter:
    """Core interpreter that executes a Lox AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 reporter: Optional[ErrorReporter] = None, out: Optional[IO[str]] = None):
        self.global_env = populate_global_environment(Environment())
        self.environment = self.global_env
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.out = out
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        raise_recursion_limit()

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self, statements: List[Stmt]) -> Any:
        """Run statements in order and return the value of the last one.

        A runtime error is reported and then re-raised; statements after
        the failing one are not executed.
        """
        last: Any = NIL
        try:
            for stmt in statements:
                last = self.execute(stmt)
        except LoxRuntimeError as e:
            self.reporter.report(e.token.line, token_location(e.token), e.message)
            raise
        return last

    def execute_block(self, statements: List[Stmt], env: Environment) -> None:
        previous = self.environment
        self.environment = env
        try:
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    def execute(self, node: Stmt) -> Any:
        if isinstance(node, Expression):
            return self.evaluate(node.expression)
        if isinstance(node, Print):
            value = self.evaluate(node.expression)
            print(to_string(value), file=self.out)
            return NIL
        if isinstance(node, Var):
            value = self.evaluate(node.initializer)
            self.environment.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme}: {type_name(value)} = {to_repr(value)}")
            return NIL
        if isinstance(node, Block):
            self.execute_block(node.statements, Environment(parent=self.environment))
            return NIL
        if isinstance(node, If):
            cond = self.evaluate(node.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_repr(cond)} -> {truthy}")
            # the else branch is always present, possibly an empty block
            self.execute(node.then_branch if truthy else node.else_branch)
            return NIL
        if isinstance(node, While):
            while True:
                cond = self.evaluate(node.condition)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_repr(cond)}")
                if not is_truthy(cond):
                    break
                self.execute(node.body)
            return NIL
        if isinstance(node, Function):
            self.environment.define(node.name.lexeme, FunctionValue(node))
            if self.debug_level >= 1:
                self.debug(f"define function {node.name.lexeme}/{len(node.params)}")
            return NIL
        raise TypeError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr) -> Any:
        if isinstance(node, Literal):
            return self.literal_value(node.value)
        if isinstance(node, Grouping):
            return self.evaluate(node.expression)
        if isinstance(node, Variable):
            return self.environment.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.environment.assign(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name.lexeme} = {to_repr(value)}")
            return value
        if isinstance(node, Unary):
            operand = self.evaluate(node.right)
            if node.operator.type == TokenType.MINUS:
                return -self.check_number_operand(node.operator, operand)
            if node.operator.type == TokenType.BANG:
                return not is_truthy(operand)
            raise TypeError(f"unsupported unary operator {node.operator.lexeme}")
        if isinstance(node, Logical):
            left = self.evaluate(node.left)
            if node.operator.type == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right)
        if isinstance(node, Binary):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, Call):
            callee = self.evaluate(node.callee)
            return self.call_function(callee, node.paren, node.arguments)
        raise TypeError(f"evaluate: unexpected node type {type(node)}")

    def literal_value(self, token: Token) -> Any:
        if token.type == TokenType.TRUE:
            return True
        if token.type == TokenType.FALSE:
            return False
        if token.type == TokenType.NIL:
            return NIL
        if token.type in (TokenType.NUMBER, TokenType.STRING):
            return token.literal
        raise TypeError(f"literal holds illegal token type {token.type.name}")

    def call_function(self, callee: Any, paren: Token, arguments: List[Expr]) -> Any:
        if isinstance(callee, FunctionValue):
            if len(arguments) != callee.arity:
                raise LoxRuntimeError(paren, f"Expected {callee.arity} arguments but got {len(arguments)}.")
            args = [self.evaluate(arg) for arg in arguments]
            if self.debug_level >= 1:
                self.debug(f"call {callee.name}({', '.join(to_repr(a) for a in args)}) at depth {self.environment.depth}")
            # the new frame encloses the caller's frame, not the declaring one
            call_env = Environment(parent=self.environment)
            for param, arg in zip(callee.declaration.params, args):
                call_env.define(param.lexeme, arg)
            try:
                self.execute_block(callee.declaration.body, call_env)
            except RecursionError:
                raise LoxRuntimeError(paren, "Stack overflow.") from None
            return NIL
        if isinstance(callee, BuiltinFunction):
            # Arguments are evaluated even though clock ignores them, so their
            # side effects happen. Natives check their own arity, if at all.
            args = [self.evaluate(arg) for arg in arguments]
            if self.debug_level >= 1:
                self.debug(f"call native {callee.name}")
            return callee.fn(args)
        raise LoxRuntimeError(paren, "Can only call functions and classes.")

    def check_number_operand(self, operator: Token, operand: Any) -> float:
        if isinstance(operand, float):
            return operand
        raise LoxRuntimeError(operator, "Operand must be a number")

    def check_number_operands(self, operator: Token, a: Any, b: Any):
        if isinstance(a, float) and isinstance(b, float):
            return a, b
        raise LoxRuntimeError(operator, "Operands must be numbers")

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        if op == TokenType.PLUS:
            if isinstance(a, float) and isinstance(b, float):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise LoxRuntimeError(operator, "Operands must be two numbers or two strings")
        if op == TokenType.EQUAL_EQUAL:
            return values_equal(a, b)
        if op == TokenType.BANG_EQUAL:
            return not values_equal(a, b)
        x, y = self.check_number_operands(operator, a, b)
        if op == TokenType.MINUS:
            return x - y
        if op == TokenType.STAR:
            return x * y
        if op == TokenType.SLASH:
            # IEEE semantics: x/0 is inf or nan rather than an error
            if y == 0.0:
                if x == 0.0 or math.isnan(x):
                    return float('nan')
                return math.copysign(math.inf, x) * math.copysign(1.0, y)
            return x / y
        if op == TokenType.GREATER:
            return x > y
        if op == TokenType.GREATER_EQUAL:
            return x >= y
        if op == TokenType.LESS:
            return x < y
        if op == TokenType.LESS_EQUAL:
            return x <= y
        raise TypeError(f"unknown binary operator {operator.lexeme}")


def run_program(source: str, debug_level: int = 0) -> Any:
    """Convenience function to parse and run a Lox program from a source string."""
    statements = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.interpret(statements)
    finally:
        interpreter.close()
