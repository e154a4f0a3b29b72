import pytest

from utopiascript.environment import Environment
from utopiascript.errors import UtopiaRuntimeError
from utopiascript.tokens import Token, TokenType


def name(lexeme):
    return Token(TokenType.IDENTIFIER, lexeme, None, 7)


def test_define_and_get():
    env = Environment()
    env.define('a', 1.0)
    assert env.get(name('a')) == 1.0


def test_redefinition_overwrites():
    env = Environment()
    env.define('a', 1.0)
    env.define('a', 'two')
    assert env.get(name('a')) == 'two'


def test_get_searches_enclosing_frames():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(parent=Environment(parent=outer))
    assert inner.get(name('a')) == 1.0


def test_shadowing_does_not_touch_outer():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(parent=outer)
    inner.define('a', 2.0)
    assert inner.get(name('a')) == 2.0
    assert outer.get(name('a')) == 1.0


def test_assign_updates_nearest_binding():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(parent=outer)
    inner.assign(name('a'), 5.0)
    assert outer.get(name('a')) == 5.0
    assert 'a' not in inner.values


def test_get_undefined_raises():
    with pytest.raises(UtopiaRuntimeError) as exc:
        Environment().get(name('missing'))
    assert exc.value.message == "Undefined variable 'missing'."
    assert exc.value.token.line == 7


def test_assign_never_creates_a_binding():
    env = Environment()
    with pytest.raises(UtopiaRuntimeError):
        env.assign(name('a'), 1.0)
    assert env.values == {}
