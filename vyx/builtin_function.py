from dataclasses import dataclass
from typing import Any, Callable, List

from vyx.types import VyxCallable


@dataclass
class BuiltinFunction(VyxCallable):
    name: str
    fixed_arity: int
    fn: Callable[[List[Any]], Any]

    def arity(self) -> int:
        return self.fixed_arity

    def call(self, interpreter: Any, arguments: List[Any]) -> Any:
        return self.fn(arguments)

    def __str__(self) -> str:
        return '<native fn>'

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
