import time
from dataclasses import dataclass
from typing import Any, List

from utopiascript.callables import Callable
from utopiascript.environment import Environment


@dataclass(eq=False)
class NativeFunction(Callable):
    """A function implemented in Python and exposed to UtopiaScript code.

    ``fn`` receives the already evaluated argument list.
    """
    name: str
    n_args: int
    fn: Any

    def arity(self) -> int:
        return self.n_args

    def invoke(self, interpreter, args: List[Any]) -> Any:
        return self.fn(args)

    def __repr__(self) -> str:
        return '<native fn>'


def std_clock(args: List[Any]) -> float:
    return time.time()


def populate_globals(env: Environment) -> None:
    """Register the native functions every program starts with."""
    env.define('clock', NativeFunction('clock', 0, std_clock))
