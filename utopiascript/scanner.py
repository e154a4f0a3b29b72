"""Scanner for the UtopiaScript language.

Source text is split into tokens by a Lark lexer configured with one
terminal per punctuation/operator token plus numbers, strings and
identifiers. Keywords are lexed as identifiers and then looked up in
the keyword table, so ``variable`` stays an identifier while ``var``
becomes a keyword.

Lark stops at the first character it cannot match. To report every
lexical error in one pass, :func:`scan` reports the problem and starts
lexing again right after the offending character.
"""

from __future__ import annotations

from typing import List, Optional

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .reporting import ErrorReporter
from .tokens import KEYWORDS, Token, TokenType


UTOPIA_TOKENS = r"""
    start: _token*

    _token: LEFT_PAREN | RIGHT_PAREN | LEFT_BRACE | RIGHT_BRACE
          | COMMA | DOT | MINUS | PLUS | SEMICOLON | SLASH | STAR
          | BANG_EQUAL | BANG | EQUAL_EQUAL | EQUAL
          | GREATER_EQUAL | GREATER | LESS_EQUAL | LESS
          | NUMBER | STRING | IDENTIFIER

    LEFT_PAREN: "("
    RIGHT_PAREN: ")"
    LEFT_BRACE: "{"
    RIGHT_BRACE: "}"
    COMMA: ","
    DOT: "."
    MINUS: "-"
    PLUS: "+"
    SEMICOLON: ";"
    SLASH: "/"
    STAR: "*"
    BANG_EQUAL: "!="
    BANG: "!"
    EQUAL_EQUAL: "=="
    EQUAL: "="
    GREATER_EQUAL: ">="
    GREATER: ">"
    LESS_EQUAL: "<="
    LESS: "<"

    NUMBER: /\d+(\.\d+)?/
    STRING: /"[^"]*"/
    IDENTIFIER: /[^\W\d]\w*/

    // Comments
    COMMENT: /\/\/[^\n]*/
    %ignore COMMENT

    %import common.WS
    %ignore WS
"""


UTOPIA_LEXER = Lark(
    UTOPIA_TOKENS,
    parser='lalr',
    lexer='basic',
)


def _column(source: str, pos: int) -> int:
    return pos - source.rfind('\n', 0, pos)


def _make_token(raw, line: int, column: int) -> Token:
    lexeme = str(raw)
    if raw.type == 'IDENTIFIER':
        return Token(KEYWORDS.get(lexeme, TokenType.IDENTIFIER), lexeme, None, line, column)
    if raw.type == 'NUMBER':
        return Token(TokenType.NUMBER, lexeme, float(lexeme), line, column)
    if raw.type == 'STRING':
        return Token(TokenType.STRING, lexeme, lexeme[1:-1], line, column)
    return Token(TokenType[raw.type], lexeme, None, line, column)


def scan(source: str, reporter: Optional[ErrorReporter] = None) -> List[Token]:
    """Convert source code into a list of tokens terminated by EOF.

    Lexical errors are reported to ``reporter`` (if given); the returned
    list then holds every token that could be recognised.
    """
    tokens: List[Token] = []
    offset = 0
    # position of ``offset`` in the whole source; lark counts from the restart point
    base_line, base_column = 1, 1
    while True:
        try:
            for raw in UTOPIA_LEXER.lex(source[offset:]):
                line = base_line + raw.line - 1
                column = raw.column + base_column - 1 if raw.line == 1 else raw.column
                tokens.append(_make_token(raw, line, column))
            break
        except UnexpectedCharacters as e:
            pos = offset + e.pos_in_stream
            line = base_line + e.line - 1
            if source[pos] == '"':
                # an unmatched quote swallows the rest of the source
                if reporter is not None:
                    reporter.error(line, 'Unterminated string.')
                break
            if reporter is not None:
                reporter.error(line, 'Unexpected character.')
            offset = pos + 1
            base_line = line
            base_column = _column(source, offset)
    end_line = source.count('\n') + 1
    tokens.append(Token(TokenType.EOF, '', None, end_line, _column(source, len(source))))
    return tokens
