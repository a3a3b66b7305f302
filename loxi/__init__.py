# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .errors import ErrorReporter, LoxError, LoxSyntaxError, LoxRuntimeError
from .interpreter import run_program, Interpreter
from .parser import parse, parse_program
from .scanner import scan

__all__ = [
    'run_program',
    'Interpreter',
    'ErrorReporter',
    'LoxError',
    'LoxSyntaxError',
    'LoxRuntimeError',
    'parse',
    'parse_program',
    'scan',
]
