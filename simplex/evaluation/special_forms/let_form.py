from __future__ import annotations

from typing import TYPE_CHECKING

from simplex.errors import SimplexRuntimeError
from simplex.types.ast_node import ASTNode, NodeKind
from simplex.types.value import TRUE, Value

if TYPE_CHECKING:
    from simplex.evaluation.evaluator import Evaluator


def let_form(evaluator: Evaluator, node: ASTNode, parameters: tuple[ASTNode, ...]) -> Value:
    """
    (let name value)
    Binds in the current environment, which persists at the top level and is
    private to the call inside a closure body. Returns true.
    """
    if len(parameters) != 2:
        raise SimplexRuntimeError(
            f"let expression expects 2 parameters, got {len(parameters)}", evaluator.backtrace
        )

    target, value_expr = parameters
    identifier = target.unwrapped()
    if identifier.kind is not NodeKind.IDENTIFIER:
        raise SimplexRuntimeError(
            "first parameter to let expression should be an identifier, "
            f"found {identifier.kind.value}",
            evaluator.backtrace,
        )
    value = evaluator.eval_node(value_expr)
    evaluator.env.define(identifier.string(), value)
    return TRUE
