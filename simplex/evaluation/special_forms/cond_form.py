from __future__ import annotations

from typing import TYPE_CHECKING

from simplex.errors import SimplexRuntimeError
from simplex.types.ast_node import ASTNode
from simplex.types.value import Value

if TYPE_CHECKING:
    from simplex.evaluation.evaluator import Evaluator


def cond_form(evaluator: Evaluator, node: ASTNode, parameters: tuple[ASTNode, ...]) -> Value:
    """
    (cond c1 r1 c2 r2 ...)
    Conditions are tried in order; the result paired with the first true one
    is evaluated and returned. Nothing after that pair is evaluated.
    """
    if not parameters:
        raise SimplexRuntimeError(
            "cond expression expects pairs of conditions and expressions as parameters; got none",
            evaluator.backtrace,
        )
    if len(parameters) % 2 != 0:
        raise SimplexRuntimeError(
            "cond must take an even number of parameters (pairs of condition and expression)",
            evaluator.backtrace,
        )

    for condition, result in zip(parameters[::2], parameters[1::2]):
        if evaluator.eval_node(condition).truthy():
            return evaluator.eval_node(result)
    raise SimplexRuntimeError(
        "`cond` expression did not return a value (no condition evaluated to true)",
        evaluator.backtrace,
    )
