"""Diagnostic reporting for UtopiaScript.

The scanner, parser and interpreter never print diagnostics themselves;
they hand them to an :class:`ErrorReporter`. The reporter formats each
message, forwards it to a sink (stderr by default) and remembers whether
a compile-time or runtime error has been seen so the host can decide
whether to run the program and which exit code to use.
"""

from __future__ import annotations

import sys
from typing import Callable, List, Optional

from .errors import UtopiaRuntimeError
from .tokens import Token, TokenType


def _stderr_sink(message: str) -> None:
    print(message, file=sys.stderr)


class ErrorReporter:
    def __init__(self, sink: Optional[Callable[[str], None]] = None):
        self.sink = sink if sink is not None else _stderr_sink
        self.messages: List[str] = []
        self.had_error = False
        self.had_runtime_error = False

    def reset(self) -> None:
        """Forget earlier errors, e.g. between two lines typed at the prompt."""
        self.had_error = False
        self.had_runtime_error = False

    def report(self, line: int, where: str, message: str) -> None:
        text = f"[line {line}] Error{where}: {message}"
        self.messages.append(text)
        self.sink(text)
        self.had_error = True

    def error(self, line: int, message: str) -> None:
        self.report(line, '', message)

    def token_error(self, token: Token, message: str) -> None:
        if token.type == TokenType.EOF:
            self.report(token.line, ' at end', message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def runtime_error(self, error: UtopiaRuntimeError) -> None:
        text = f"{error.message}\n[line {error.token.line}]"
        self.messages.append(text)
        self.sink(text)
        self.had_runtime_error = True
