"""Callable values of UtopiaScript.

Everything that can appear before ``(...)`` at runtime implements
:class:`Callable`: an ``arity`` and an ``invoke`` method. The caller
checks the argument count before invoking, so implementations can
assume they receive exactly ``arity()`` arguments.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List

from .ast import FuncDecl
from .environment import Environment
from .errors import ReturnSignal

if TYPE_CHECKING:
    from .interpreter import Interpreter


class Callable(ABC):
    @abstractmethod
    def arity(self) -> int:
        ...

    @abstractmethod
    def invoke(self, interpreter: 'Interpreter', args: List[Any]) -> Any:
        ...


class UserFunction(Callable):
    """A function declared in UtopiaScript code, with its closure.

    ``closure`` is the frame that was current when the declaration ran.
    It is held by reference, not copied, so the function keeps seeing
    (and updating) the variables of that scope after it has exited.
    """
    def __init__(self, declaration: FuncDecl, closure: Environment):
        self.declaration = declaration
        self.closure = closure

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def arity(self) -> int:
        return len(self.declaration.params)

    def invoke(self, interpreter: 'Interpreter', args: List[Any]) -> Any:
        call_env = Environment(parent=self.closure)
        for param, arg in zip(self.declaration.params, args):
            call_env.define(param.lexeme, arg)
        result = interpreter.execute_block(self.declaration.body, call_env)
        if isinstance(result, ReturnSignal):
            return result.value
        return None

    def __repr__(self) -> str:
        return f"<fn {self.name}>"
