"""Function values: native primitives and closures."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING, Callable, Union

if TYPE_CHECKING:
    from simplex.types.ast_node import ASTNode
    from simplex.types.backtrace import Backtrace
    from simplex.types.environment import Environment
    from simplex.types.value import Value

NativeOperation = Callable[["ASTNode", "Backtrace", "list[Value]"], "Value"]
ClosureOperation = Callable[
    ["ASTNode", "Environment", "Backtrace", "tuple[ASTNode, ...]", "list[Value]"], "Value"
]


@dataclass(frozen=True)
class Native:
    """A primitive implemented in Python. It checks its own arity and argument kinds."""

    operation: NativeOperation


@dataclass(frozen=True, eq=False)
class Closure:
    """A body evaluated in the captured environment extended with the arguments."""

    operation: ClosureOperation
    env: Environment


@dataclass(eq=False)
class Function:
    """A callable value.

    `parameter_list` holds the formal Identifier nodes followed by the body
    expression; it is empty for natives. Equality is identity.
    """

    name: str
    parameter_list: tuple[ASTNode, ...]
    body: Union[Native, Closure]

    @property
    def formals(self) -> tuple[ASTNode, ...]:
        return self.parameter_list[:-1]

    def call(self, node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
        match self.body:
            case Native(operation):
                return operation(node, backtrace, args)
            case Closure(operation, env):
                return operation(node, env, backtrace, self.parameter_list, args)

    def __str__(self) -> str:
        if isinstance(self.body, Native):
            return f"<native {self.name}>"
        with StringIO() as buffer:
            buffer.write("<lambda")
            for formal in self.formals:
                buffer.write(" ")
                buffer.write(formal.string())
            buffer.write(">")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)
