from __future__ import annotations

from typing import TYPE_CHECKING

from simplex.errors import SimplexRuntimeError
from simplex.evaluation.apply import call_closure
from simplex.types.ast_node import ASTNode, NodeKind
from simplex.types.function import Closure, Function
from simplex.types.value import Value

if TYPE_CHECKING:
    from simplex.evaluation.evaluator import Evaluator


def lambda_form(evaluator: Evaluator, node: ASTNode, parameters: tuple[ASTNode, ...]) -> Value:
    """
    (lambda p1 p2 ... body)
    Every parameter but the last names a formal; the last is the body. The
    closure captures the environment the lambda is evaluated in.
    """
    if not parameters:
        raise SimplexRuntimeError(
            "lambda expects 1 or more parameters, got 0", evaluator.backtrace
        )

    *formals, body = parameters
    formal_nodes = []
    for formal in formals:
        identifier = formal.unwrapped()
        if identifier.kind is not NodeKind.IDENTIFIER:
            raise SimplexRuntimeError(
                f"lambda parameters must be identifiers, found {identifier.kind.value}",
                evaluator.backtrace,
            )
        formal_nodes.append(identifier)

    closure = Closure(call_closure, evaluator.env)
    return Value.function(Function("lambda", (*formal_nodes, body), closure))
