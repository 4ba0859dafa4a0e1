from __future__ import annotations

from typing import TYPE_CHECKING

from simplex.errors import SimplexRuntimeError
from simplex.types.ast_node import ASTNode
from simplex.types.value import Value

if TYPE_CHECKING:
    from simplex.evaluation.evaluator import Evaluator


def if_form(evaluator: Evaluator, node: ASTNode, parameters: tuple[ASTNode, ...]) -> Value:
    if len(parameters) != 3:
        raise SimplexRuntimeError(
            f"if expression expects 3 parameters, got {len(parameters)}", evaluator.backtrace
        )

    condition, then_branch, else_branch = parameters
    # Only the selected branch is evaluated
    if evaluator.eval_node(condition).truthy():
        return evaluator.eval_node(then_branch)
    return evaluator.eval_node(else_branch)
