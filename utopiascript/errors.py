from typing import Any, Optional

from utopiascript.tokens import Token


class UtopiaError(Exception):
    """Base class for errors raised while processing a UtopiaScript program."""


class UtopiaSyntaxError(UtopiaError):
    """Raised inside the parser to unwind to the nearest statement boundary.

    The error has already been reported by the time it is raised; the
    parser catches it and synchronizes.
    """
    def __init__(self, token: Optional[Token], message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class UtopiaRuntimeError(UtopiaError):
    """Exception type used to propagate UtopiaScript runtime errors."""
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class ReturnSignal:
    """Result of executing a return statement.

    Statement execution returns this object instead of raising it, so
    every block and loop has to hand it back to its caller until the
    enclosing function call picks up the value.
    """
    __slots__ = ('value',)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"ReturnSignal({self.value!r})"
