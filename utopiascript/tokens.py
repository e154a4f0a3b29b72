"""Token definitions for UtopiaScript.

Tokens are produced by the scanner and consumed by the parser. Every
token records its kind, the exact source text it was built from, an
optional literal payload (a float for numbers, a str for strings) and
its position in the source for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict


class TokenType(Enum):
    # Single-character tokens.
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character tokens.
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals.
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Keywords.
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS: Dict[str, TokenType] = {
    'kaj': TokenType.AND,
    'klaso': TokenType.CLASS,
    'alie': TokenType.ELSE,
    'malvera': TokenType.FALSE,
    'funkcio': TokenType.FUN,
    'por': TokenType.FOR,
    'se': TokenType.IF,
    'nenio': TokenType.NIL,
    'aŭ': TokenType.OR,
    'au': TokenType.OR,  # ASCII spelling of aŭ
    'presi': TokenType.PRINT,
    'revenigi': TokenType.RETURN,
    'super': TokenType.SUPER,
    'mem': TokenType.THIS,
    'vera': TokenType.TRUE,
    'var': TokenType.VAR,
    'dum': TokenType.WHILE,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: Any = None
    line: int = 1
    column: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, line={self.line})"
