"""Application engine for Simplex.

- Every application pushes a backtrace frame for the call site and pops it on
  the way out, whether the call returns or raises.
- Natives receive the call-site node, the backtrace and the evaluated
  arguments, and do their own checking.
- Closures bind formals to arguments positionally (arity must match exactly)
  in a fresh frame over the captured environment.
"""

from __future__ import annotations

from simplex.errors import SimplexRuntimeError
from simplex.types.ast_node import ASTNode
from simplex.types.backtrace import Backtrace
from simplex.types.environment import Environment
from simplex.types.function import Function
from simplex.types.value import Value


def apply(fn: Function, node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    """Apply `fn` to already-evaluated `args` at call site `node`."""
    with backtrace.frame(str(fn), node.line, node.col):
        return fn.call(node, backtrace, args)


def call_closure(
    node: ASTNode,
    env: Environment,
    backtrace: Backtrace,
    parameter_list: tuple[ASTNode, ...],
    args: list[Value],
) -> Value:
    """Evaluate a closure body with its formals bound to `args`.

    The new frame extends the captured `env` and is dropped when the call
    returns, so nothing bound during the call is visible to the caller.
    """
    formals, body = parameter_list[:-1], parameter_list[-1]
    if len(formals) != len(args):
        raise SimplexRuntimeError(
            f"lambda expression expected {len(formals)} parameters, got {len(args)}",
            backtrace,
        )
    call_env = env.extend({formal.string(): arg for formal, arg in zip(formals, args)})

    # Lazy import to avoid circular imports
    from simplex.evaluation.evaluator import Evaluator
    return Evaluator(call_env, backtrace).eval_node(body)
