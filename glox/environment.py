from typing import Any, Dict, Optional

from glox.errors import GloxRuntimeError
from glox.tokens import Token


class Environment:
    """A scope mapping names to values, linked to the scope it was opened in.

    Lookups and assignments walk outward through `parent`; declarations
    only ever touch the innermost scope.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def get(self, name: Token) -> Any:
        env = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.parent
        raise GloxRuntimeError('NameError', f'unknown identifier {name.lexeme}', name.line, name.column)

    def set(self, name: Token, value: Any):
        env = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.parent
        raise GloxRuntimeError('NameError', f'unknown variable {name.lexeme}', name.line, name.column)

    def declare(self, name: str, value: Any, token: Optional[Token] = None):
        if name in self.values:
            line = token.line if token is not None else None
            column = token.column if token is not None else None
            raise GloxRuntimeError('RedeclarationError', f'redeclaration of var {name}', line, column)
        self.values[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.values
