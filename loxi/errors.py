"""Diagnostics and exception types for the Lox interpreter.

Lexical and syntax errors are collected by an `ErrorReporter`; scanning
and parsing keep going after an error and hand back a flag instead of
raising. Runtime errors are raised as `LoxRuntimeError` and reported once
by the interpreter before they propagate to the caller.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .scanner import Token


@dataclass(frozen=True)
class Diagnostic:
    line: int
    location: str
    message: str

    def __str__(self) -> str:
        return f"[line {self.line}] Error{self.location}: {self.message}"


class ErrorReporter:
    """Formats diagnostics and keeps the ones reported since the last `clear`."""
    def __init__(self, stream: Optional[IO[str]] = None):
        self.stream = stream
        self.diagnostics: List[Diagnostic] = []

    def report(self, line: int, location: str, message: str) -> Diagnostic:
        diagnostic = Diagnostic(line, location, message)
        self.diagnostics.append(diagnostic)
        # resolve stderr lazily so redirected streams are honoured
        print(str(diagnostic), file=self.stream if self.stream is not None else sys.stderr)
        return diagnostic

    def error(self, line: int, message: str) -> Diagnostic:
        return self.report(line, "", message)

    def clear(self):
        self.diagnostics.clear()


class LoxError(Exception):
    """Base class for errors surfaced to callers of the interpreter."""


class LoxSyntaxError(LoxError):
    """Raised by `parse_program` when scanning or parsing reported errors."""
    def __init__(self, stage: str, diagnostics: List[Diagnostic]):
        super().__init__(f"Aborting due to error while {stage}.")
        self.stage = stage
        self.diagnostics = diagnostics


class LoxRuntimeError(LoxError):
    """Exception type used to propagate Lox runtime errors."""
    def __init__(self, token: 'Token', message: str):
        super().__init__(message)
        self.token = token
        self.message = message
