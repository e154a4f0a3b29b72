from utopiascript.reporting import ErrorReporter
from utopiascript.scanner import scan
from utopiascript.tokens import TokenType


def types_of(tokens):
    return [t.type for t in tokens]


def test_scan_var_declaration():
    tokens = scan('var x = 1.5;')
    assert types_of(tokens) == [
        TokenType.VAR, TokenType.IDENTIFIER, TokenType.EQUAL,
        TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF,
    ]
    assert tokens[1].lexeme == 'x'
    assert tokens[3].literal == 1.5
    assert tokens[-1].lexeme == ''


def test_keywords_and_identifiers():
    """Keywords are only recognised as whole words."""
    tokens = scan('presi variable se seo aŭ au kaj')
    assert types_of(tokens) == [
        TokenType.PRINT, TokenType.IDENTIFIER, TokenType.IF, TokenType.IDENTIFIER,
        TokenType.OR, TokenType.OR, TokenType.AND, TokenType.EOF,
    ]


def test_two_character_operators():
    tokens = scan('a == b != c <= d >= e = !f < g > h')
    ops = [t.type for t in tokens if t.type != TokenType.IDENTIFIER]
    assert ops == [
        TokenType.EQUAL_EQUAL, TokenType.BANG_EQUAL, TokenType.LESS_EQUAL,
        TokenType.GREATER_EQUAL, TokenType.EQUAL, TokenType.BANG,
        TokenType.LESS, TokenType.GREATER, TokenType.EOF,
    ]


def test_string_literal_payload_and_lines():
    tokens = scan('presi "saluton";\n// a comment\npresi "du\nlinioj";\npresi 3;')
    strings = [t for t in tokens if t.type == TokenType.STRING]
    assert [s.literal for s in strings] == ['saluton', 'du\nlinioj']
    assert strings[0].line == 1
    assert strings[1].line == 3
    number = [t for t in tokens if t.type == TokenType.NUMBER][0]
    assert number.literal == 3.0
    assert number.line == 5


def test_number_followed_by_dot():
    tokens = scan('12.')
    assert types_of(tokens) == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]
    assert tokens[0].literal == 12.0


def test_unexpected_character_is_reported_and_scanning_continues():
    messages = []
    reporter = ErrorReporter(sink=messages.append)
    tokens = scan('var a = 1 @ 2;\nvar b = # 3;', reporter)
    assert messages == [
        '[line 1] Error: Unexpected character.',
        '[line 2] Error: Unexpected character.',
    ]
    assert reporter.had_error
    numbers = [t.literal for t in tokens if t.type == TokenType.NUMBER]
    assert numbers == [1.0, 2.0, 3.0]
    assert tokens[-1].type == TokenType.EOF


def test_unterminated_string():
    messages = []
    reporter = ErrorReporter(sink=messages.append)
    tokens = scan('presi "open', reporter)
    assert messages == ['[line 1] Error: Unterminated string.']
    assert types_of(tokens) == [TokenType.PRINT, TokenType.EOF]


def test_positions_in_a_long_source():
    tokens = scan('var a = 1;\n' * 5000 + 'presi a;')
    assert tokens[-2].type == TokenType.SEMICOLON
    assert tokens[-2].line == 5001
    assert tokens[-2].column == 8
    assert tokens[-1].type == TokenType.EOF
    assert tokens[-1].line == 5001


def test_positions_after_an_unexpected_character():
    reporter = ErrorReporter(sink=lambda message: None)
    tokens = scan('var a;\nb @ c\n  d;', reporter)
    positions = [(t.lexeme, t.line, t.column) for t in tokens if t.type == TokenType.IDENTIFIER]
    assert positions == [('a', 1, 5), ('b', 2, 1), ('c', 2, 5), ('d', 3, 3)]
