from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO

from vyx.tokens import Token, TokenKind


@dataclass(frozen=True)
class Diagnostic:
    """A lexical or syntax error found before execution."""
    line: int
    where: str
    message: str

    @classmethod
    def at_token(cls, token: Token, message: str) -> 'Diagnostic':
        if token.kind is TokenKind.EOF:
            return cls(token.line, 'at end', message)
        return cls(token.line, f"at '{token.lexeme()}'", message)

    def __str__(self) -> str:
        where = f" {self.where}" if self.where else ''
        return f"[Line {self.line}] Error{where}: {self.message}"


class ParseError(Exception):
    """Internal exception used to unwind the parser to a statement boundary."""


class VyxRuntimeError(Exception):
    """Exception type used to propagate Vyx runtime errors."""
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message

    def __str__(self) -> str:
        return f"{self.message}\n[line {self.token.line}]"


class ErrorReporter:
    """Error sink shared by the pipeline stages and the command line.

    Errors are written to ``stream`` (standard error when not given) and
    kept on the reporter so callers can inspect them afterwards.
    """
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.diagnostics: List[Diagnostic] = []
        self.runtime_errors: List[VyxRuntimeError] = []

    def _write(self, text: str) -> None:
        print(text, file=self.stream if self.stream is not None else sys.stderr)

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        self._write(str(diagnostic))

    def report_runtime(self, error: VyxRuntimeError) -> None:
        self.runtime_errors.append(error)
        self._write(str(error))

    def reset(self) -> None:
        self.diagnostics.clear()
        self.runtime_errors.clear()
