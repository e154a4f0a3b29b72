from typing import Any, Dict, Optional

from utopiascript.errors import UtopiaRuntimeError
from utopiascript.tokens import Token


class Environment:
    """A scope frame mapping names to values, linked to its enclosing frame.

    Frames are shared by reference: a closure keeps the frame it was
    defined in alive, and every closure holding the same frame sees the
    same bindings.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any) -> None:
        # Redefinition in the same frame overwrites.
        self.values[name] = value

    def get(self, name: Token) -> Any:
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.parent
        raise UtopiaRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: Token, value: Any) -> None:
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.parent
        raise UtopiaRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def __repr__(self) -> str:
        depth = 0
        env = self.parent
        while env is not None:
            depth += 1
            env = env.parent
        return f"<Environment depth={depth} names={sorted(self.values)}>"
