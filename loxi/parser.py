"""Recursive-descent parser for the Lox language.

The parser walks the token list with a single cursor. When an expected
token is missing it reports a diagnostic and keeps going from where it
is; there is no synchronisation to a statement boundary, so the tree
returned alongside a raised error flag must not be interpreted.

`for` loops are desugared here into a block holding the initializer and
a `While` whose body runs the loop body followed by the increment.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Tuple

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Variable,
    Assign, Call, Expression, Print, Var, Block, If, While, Function,
)
from .errors import ErrorReporter, LoxSyntaxError
from .scanner import Token, TokenType, scan, token_location

MAX_ARGUMENTS = 255

# Every level of Lox nesting costs several Python frames.
RECURSION_LIMIT = 10000

EQUALITY_OPERATORS = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
COMPARISON_OPERATORS = (
    TokenType.GREATER, TokenType.GREATER_EQUAL,
    TokenType.LESS, TokenType.LESS_EQUAL,
)
ADDITION_OPERATORS = (TokenType.MINUS, TokenType.PLUS)
MULTIPLICATION_OPERATORS = (TokenType.SLASH, TokenType.STAR)
UNARY_OPERATORS = (TokenType.BANG, TokenType.MINUS)
LITERAL_TOKENS = (
    TokenType.FALSE, TokenType.TRUE, TokenType.NIL,
    TokenType.NUMBER, TokenType.STRING,
)


def raise_recursion_limit(limit: int = RECURSION_LIMIT):
    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)


class Parser:
    def __init__(self, tokens: List[Token], reporter: Optional[ErrorReporter] = None):
        self.tokens = tokens
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.current = 0
        self.had_error = False
        raise_recursion_limit()

    def parse(self) -> Tuple[List[Stmt], bool]:
        statements: List[Stmt] = []
        while not self.is_at_end():
            try:
                statements.append(self.declaration())
            except RecursionError:
                self.error(self.peek(), "Expression nested too deeply.")
                break
        return statements, self.had_error

    # Token cursor

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def check(self, token_type: TokenType) -> bool:
        return self.peek().type == token_type

    def match(self, *token_types: TokenType) -> bool:
        """Consume the next token if it has one of the given types."""
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        # report and carry on without consuming anything
        self.error(self.peek(), message)
        return self.peek()

    def error(self, token: Token, message: str):
        self.reporter.report(token.line, token_location(token), message)
        self.had_error = True

    # Statements

    def declaration(self) -> Stmt:
        if self.match(TokenType.FUN):
            return self.function_declaration()
        if self.match(TokenType.VAR):
            return self.var_declaration()
        return self.statement()

    def function_declaration(self) -> Function:
        name = self.consume(TokenType.IDENTIFIER, "Expect function name.")
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after function name.")
        params: List[Token] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self.error(self.peek(), "Can't have more than 255 parameters.")
                params.append(self.consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self.match(TokenType.COMMA):
                    break
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        self.consume(TokenType.LEFT_BRACE, "Expect '{' before function body.")
        body = self.block()
        return Function(name, params, body)

    def var_declaration(self) -> Var:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        else:
            initializer = Literal(Token(TokenType.NIL, 'nil', name.line))
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def if_statement(self) -> If:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.statement()
        else_branch: Stmt = Block([])
        if self.match(TokenType.ELSE):
            else_branch = self.statement()
        return If(condition, then_branch, else_branch)

    def print_statement(self) -> Print:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def while_statement(self) -> While:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after while condition.")
        body = self.statement()
        return While(condition, body)

    def for_statement(self) -> Block:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        if self.match(TokenType.SEMICOLON):
            initializer: Stmt = Block([])
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        if self.check(TokenType.SEMICOLON):
            condition: Expr = Literal(Token(TokenType.TRUE, 'true', self.peek().line))
        else:
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        if self.check(TokenType.RIGHT_PAREN):
            increment: Expr = Literal(Token(TokenType.NIL, 'nil', self.peek().line))
        else:
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()
        loop = While(condition, Block([body, Expression(increment)]))
        return Block([initializer, loop])

    def block(self) -> List[Stmt]:
        """Parse declarations up to the closing brace; the '{' is already consumed."""
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.declaration())
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self) -> Expression:
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.logic_or()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            self.error(equals, "Invalid assignment target.")
        return expr

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            right = self.logic_and()
            expr = Logical(expr, operator, right)
        return expr

    def logic_and(self) -> Expr:
        expr = self.equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            right = self.equality()
            expr = Logical(expr, operator, right)
        return expr

    def binary(self, operand, operators: Tuple[TokenType, ...]) -> Expr:
        """Left-associative chain of `operand (op operand)*`."""
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def equality(self) -> Expr:
        return self.binary(self.comparison, EQUALITY_OPERATORS)

    def comparison(self) -> Expr:
        return self.binary(self.addition, COMPARISON_OPERATORS)

    def addition(self) -> Expr:
        return self.binary(self.multiplication, ADDITION_OPERATORS)

    def multiplication(self) -> Expr:
        return self.binary(self.unary, MULTIPLICATION_OPERATORS)

    def unary(self) -> Expr:
        if self.match(*UNARY_OPERATORS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.call()

    def call(self) -> Expr:
        expr = self.primary()
        while self.match(TokenType.LEFT_PAREN):
            expr = self.finish_call(expr)
        return expr

    def finish_call(self, callee: Expr) -> Call:
        arguments: List[Expr] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self.error(self.peek(), "Can't have more than 255 arguments.")
                arguments.append(self.expression())
                if not self.match(TokenType.COMMA):
                    break
        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, arguments)

    def primary(self) -> Expr:
        if self.match(*LITERAL_TOKENS):
            return Literal(self.previous())
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        token = self.peek()
        self.error(token, "Expect expression.")
        # skip the offending token so the caller always makes progress
        self.advance()
        return Literal(Token(TokenType.NIL, 'nil', token.line))


def parse(tokens: List[Token], reporter: Optional[ErrorReporter] = None) -> Tuple[List[Stmt], bool]:
    """Parse tokens into statements plus an error flag."""
    return Parser(tokens, reporter).parse()


def parse_program(source: str, reporter: Optional[ErrorReporter] = None) -> List[Stmt]:
    """Scan and parse source code, raising `LoxSyntaxError` on any diagnostic."""
    if reporter is None:
        reporter = ErrorReporter()
    tokens, had_error = scan(source, reporter)
    if had_error:
        raise LoxSyntaxError('lexing', list(reporter.diagnostics))
    statements, had_error = parse(tokens, reporter)
    if had_error:
        raise LoxSyntaxError('parsing', list(reporter.diagnostics))
    return statements
