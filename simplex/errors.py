from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from simplex.types.ast_node import ASTNode, NodeKind
    from simplex.types.backtrace import Frame
    from simplex.types.value import ValueKind


DEFAULT_SOURCE_ID = "<input>"


class SimplexError(Exception):
    """ Base class for all Simplex errors"""
    pass


class SimplexEvaluationError(SimplexError):
    """ Raised by evaluation: either the program did not parse or it failed at runtime"""
    pass


class SimplexSyntaxError(SimplexEvaluationError):
    """ Raised when the parser cannot match the input against the grammar"""

    def __init__(self, kind: NodeKind, expected: str, actual: str, line: int, col: int):
        self.kind = kind
        self.expected = expected
        self.actual = actual
        self.line = line
        self.col = col
        super().__init__(str(self))

    def __str__(self) -> str:
        return (
            f"{self.line}|{self.col}: parse error while attempting to parse "
            f"{self.kind.value}: expected {self.expected}, found {self.actual}"
        )


class SimplexRuntimeError(SimplexEvaluationError):
    """ Raised when evaluation of a well-formed program fails"""

    def __init__(self, message: str, backtrace: Iterable[Frame] = ()):
        self.message = message
        # Frames are copied: the live backtrace unwinds while this error propagates
        self.backtrace: tuple[Frame, ...] = tuple(backtrace)
        self.source_id = DEFAULT_SOURCE_ID
        super().__init__(message)

    def __str__(self) -> str:
        lines = [
            f"frame #{n}: {frame.callee} at {self.source_id}:{frame.line}"
            for n, frame in enumerate(reversed(self.backtrace))
        ]
        lines.append(self.message)
        return "\n".join(lines)


class SimplexTypeMismatch(SimplexRuntimeError):
    """ Raised when a value of one kind is found where another kind is required"""

    def __init__(
        self,
        expected: ValueKind,
        found: ValueKind,
        node: ASTNode | None = None,
        backtrace: Iterable[Frame] = (),
    ):
        self.expected = expected
        self.found = found
        self.node = node
        where = f"{node.line}|{node.col}: " if node is not None else ""
        super().__init__(
            f"{where}type mismatch error: expected {expected.value}, found {found.value}",
            backtrace,
        )


class SimplexContractViolation(SimplexError):
    """ Raised when the parser and evaluator disagree about tree shape; always a defect"""


class SimplexBootstrapError(SimplexError):
    """ Raised when the bootstrap library cannot be loaded into a new interpreter"""
