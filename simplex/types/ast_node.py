"""Syntax tree produced by the parser.

Every node carries its source position and exactly one payload: a tuple of
child nodes, an integer, a float, or text. Which payload a node holds is fixed
by its kind. Trees are immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from simplex.errors import SimplexContractViolation


class NodeKind(Enum):
    PROGRAM = "Program"
    EXPRESSION = "Expression"
    OPTIONAL_PARAMETER_LIST = "OptionalParameterList"
    PARAMETER_LIST = "ParameterList"
    LITERAL = "Literal"
    IDENTIFIER = "Identifier"
    INTEGER = "Integer"
    FLOATING_POINT = "FloatingPoint"
    STRING = "String"
    # Only ever named in syntax errors, never attached to a built node
    NUMBER = "Number"
    WHITESPACE = "Whitespace"
    INVALID = "Invalid"


_BRANCH_KINDS = frozenset({
    NodeKind.PROGRAM,
    NodeKind.EXPRESSION,
    NodeKind.OPTIONAL_PARAMETER_LIST,
    NodeKind.PARAMETER_LIST,
    NodeKind.LITERAL,
})
_TEXT_KINDS = frozenset({NodeKind.IDENTIFIER, NodeKind.STRING})

Payload = Union[tuple, int, float, str]


def _payload_matches(kind: NodeKind, payload: Payload) -> bool:
    if kind in _BRANCH_KINDS:
        return isinstance(payload, tuple) and all(isinstance(c, ASTNode) for c in payload)
    if kind is NodeKind.INTEGER:
        return isinstance(payload, int) and not isinstance(payload, bool)
    if kind is NodeKind.FLOATING_POINT:
        return isinstance(payload, float)
    if kind in _TEXT_KINDS:
        return isinstance(payload, str)
    return False


@dataclass(frozen=True)
class ASTNode:
    """A syntax tree node. Equality ignores source position."""

    kind: NodeKind
    payload: Payload
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

    def __post_init__(self):
        if not _payload_matches(self.kind, self.payload):
            raise SimplexContractViolation(
                f"{self.kind.value} node cannot hold payload {self.payload!r}"
            )

    @classmethod
    def branch(cls, kind: NodeKind, children, line: int = 0, col: int = 0) -> ASTNode:
        return cls(kind, tuple(children), line, col)

    def _require(self, *kinds: NodeKind) -> None:
        if self.kind not in kinds:
            expected = " or ".join(k.value for k in kinds)
            raise SimplexContractViolation(f"expected a {expected} node, got {self.kind.value}")

    def children(self) -> tuple[ASTNode, ...]:
        self._require(*_BRANCH_KINDS)
        return self.payload

    def integer(self) -> int:
        self._require(NodeKind.INTEGER)
        return self.payload

    def floating_point(self) -> float:
        self._require(NodeKind.FLOATING_POINT)
        return self.payload

    def string(self) -> str:
        self._require(*_TEXT_KINDS)
        return self.payload

    def is_call(self) -> bool:
        return self.kind is NodeKind.EXPRESSION and len(self.payload) == 2

    def unwrapped(self) -> ASTNode:
        """The Literal or Identifier inside a non-call Expression, else the node itself."""
        if self.kind is NodeKind.EXPRESSION and len(self.payload) == 1:
            return self.payload[0]
        return self

    def is_identifier(self, name: str | None = None) -> bool:
        node = self.unwrapped()
        if node.kind is not NodeKind.IDENTIFIER:
            return False
        return name is None or node.payload == name

    def __repr__(self) -> str:
        if self.kind in _BRANCH_KINDS:
            inner = ", ".join(repr(c) for c in self.payload)
            return f"{self.kind.value}({inner})"
        return f"{self.kind.value}({self.payload!r})"
