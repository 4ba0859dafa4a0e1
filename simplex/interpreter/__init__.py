from __future__ import annotations
import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Literal, TextIO

from simplex.builtin.env_builtin import register
from simplex.config import get_default_source_id, get_recursion_limit
from simplex.errors import (
    SimplexBootstrapError,
    SimplexEvaluationError,
    SimplexRuntimeError,
)
from simplex.evaluation.evaluator import Evaluator
from simplex.reader.parser import parse
from simplex.types.ast_node import ASTNode
from simplex.types.backtrace import Backtrace
from simplex.types.environment import Environment
from simplex.types.value import Value

log = logging.getLogger(__name__)


@contextmanager
def recursion_limit(limit: int) -> Iterator[None]:
    """Raise the Python frame limit for the duration of one evaluation, never lower it."""
    previous = sys.getrecursionlimit()
    if limit > previous:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class Interpreter:
    """
    Orchestrates parsing and evaluating Simplex code.
    Maintains one root Environment and one Backtrace across calls, so top-level
    `let` bindings from earlier calls stay visible to later ones.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        input: TextIO | None = None,
        output: TextIO | None = None,
        max_recursion: int | None = None,
    ):
        self.env: Environment = Environment()
        register(self.env, input, output)

        self.backtrace: Backtrace = Backtrace()
        self.evaluator: Evaluator = Evaluator(self.env, self.backtrace)
        self.max_recursion: int = max_recursion if max_recursion is not None else get_recursion_limit()

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import to avoid circular imports
            from simplex.modules.prelude_loader import load_prelude
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)
        log.debug("interpreter ready with %d root bindings", len(self.env.vars))

    def eval_prelude(self, code: str, source_id: str = "<prelude>") -> None:
        try:
            with recursion_limit(self.max_recursion):
                self.evaluator.eval(code)
        except SimplexEvaluationError as e:
            if isinstance(e, SimplexRuntimeError):
                e.source_id = source_id
            raise SimplexBootstrapError(f"failed to load bootstrap library {source_id}:\n{e}") from e
        finally:
            self.backtrace.frames.clear()

    def parse(self, code: str) -> ASTNode:
        return parse(code)

    def eval(self, code: str, source_id: str | None = None) -> Value:
        source_id = source_id if source_id is not None else get_default_source_id()
        log.debug("evaluating %s (%d chars)", source_id, len(code))
        try:
            with recursion_limit(self.max_recursion):
                return self.evaluator.eval(code)
        except SimplexRuntimeError as e:
            e.source_id = source_id
            raise
        except RecursionError as e:
            # Frames were popped while the Python stack unwound
            error = SimplexRuntimeError("maximum recursion depth exceeded")
            error.source_id = source_id
            raise error from e
        finally:
            self.backtrace.frames.clear()
