"""Callable values: user-defined functions and host built-ins.

Both variants share one contract: an `arity` and a `call` taking the
interpreter, the environment active at the call site and the already
evaluated argument values.

A user function's call scope is opened as a child of the *call-site*
environment, not of the environment the function was declared in, so
functions see the caller's variables (dynamic scoping) and do not close
over their definition site.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable as PyCallable, List

from .ast import FuncDecl
from .environment import Environment
from .errors import ReturnSignal

if TYPE_CHECKING:
    from .interpreter import Interpreter


class Callable(ABC):
    @property
    @abstractmethod
    def arity(self) -> int:
        ...

    @abstractmethod
    def call(self, interpreter: 'Interpreter', env: Environment, args: List[Any]) -> Any:
        ...


class UserFunction(Callable):
    """A function declared with `fun`."""
    def __init__(self, declaration: FuncDecl):
        self.declaration = declaration

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    @property
    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: 'Interpreter', env: Environment, args: List[Any]) -> Any:
        call_env = Environment(parent=env)
        for param, arg in zip(self.declaration.params, args):
            call_env.declare(param.lexeme, arg, param)
        try:
            for stmt in self.declaration.body:
                interpreter.execute(stmt, call_env)
        except ReturnSignal as r:
            return r.value
        return None

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    __repr__ = __str__


@dataclass
class BuiltinFunction(Callable):
    name: str
    nargs: int
    fn: PyCallable[[List[Any]], Any]

    @property
    def arity(self) -> int:
        return self.nargs

    def call(self, interpreter: 'Interpreter', env: Environment, args: List[Any]) -> Any:
        return self.fn(args)

    def __str__(self) -> str:
        return f"<builtin fn {self.name}>"

    __repr__ = __str__
