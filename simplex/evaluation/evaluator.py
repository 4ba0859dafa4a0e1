"""Tree-walking evaluator for Simplex.

Dispatches purely on node kind. Call expressions whose head is one of the
special-form identifiers go to the SPECIAL_FORMS table; every other call is an
ordinary application of a Function value.
"""

from __future__ import annotations

from simplex.errors import SimplexContractViolation, SimplexRuntimeError, SimplexTypeMismatch
from simplex.evaluation.apply import apply
from simplex.evaluation.special_forms import SPECIAL_FORMS
from simplex.reader.parser import parse
from simplex.types.ast_node import ASTNode, NodeKind
from simplex.types.backtrace import Backtrace
from simplex.types.environment import Environment
from simplex.types.value import FALSE, INVALID, TRUE, Value, ValueKind, from_text


def parameters_of(node: ASTNode) -> tuple[ASTNode, ...]:
    """The parameter expressions of a call, read through its OptionalParameterList."""
    wrapper = node.children()[1]
    if wrapper.kind is not NodeKind.OPTIONAL_PARAMETER_LIST:
        raise SimplexContractViolation(
            f"call expression holds {wrapper.kind.value} where an OptionalParameterList belongs"
        )
    children = wrapper.children()
    if not children:
        return ()
    if len(children) != 1 or children[0].kind is not NodeKind.PARAMETER_LIST:
        raise SimplexContractViolation("OptionalParameterList must wrap a single ParameterList")
    return children[0].children()


class Evaluator:
    """Evaluates syntax trees against one environment and a shared backtrace."""

    __slots__ = ("env", "backtrace")

    def __init__(self, env: Environment | None = None, backtrace: Backtrace | None = None):
        self.env: Environment = env if env is not None else Environment()
        self.backtrace: Backtrace = backtrace if backtrace is not None else Backtrace()

    def eval(self, text: str) -> Value:
        """Parse `text` and evaluate it; syntax errors propagate as evaluation errors."""
        return self.eval_node(parse(text))

    def eval_node(self, node: ASTNode) -> Value:
        match node.kind:
            case NodeKind.PROGRAM:
                return self.eval_program(node)
            case NodeKind.EXPRESSION:
                return self.eval_expression(node)
            case NodeKind.IDENTIFIER:
                return self.eval_identifier(node)
            case NodeKind.LITERAL:
                return self.eval_literal(node)
            case _:
                raise SimplexContractViolation(f"cannot evaluate a {node.kind.value} node")

    def eval_program(self, node: ASTNode) -> Value:
        result = INVALID
        for expression in node.children():
            result = self.eval_node(expression)
        return result

    def eval_expression(self, node: ASTNode) -> Value:
        children = node.children()
        if len(children) == 1:
            return self.eval_node(children[0])
        if len(children) != 2:
            raise SimplexContractViolation(
                f"expression must have 1 or 2 children, found {len(children)}"
            )

        head = children[0]
        parameters = parameters_of(node)
        if head.is_identifier():
            special_form = SPECIAL_FORMS.get(head.unwrapped().string())
            if special_form is not None:
                return special_form(self, node, parameters)

        callee = self.eval_node(head)
        if callee.kind is not ValueKind.FUNCTION:
            raise SimplexTypeMismatch(ValueKind.FUNCTION, callee.kind, node, self.backtrace)
        args = self.eval_parameters(parameters)
        return apply(callee.payload, node, self.backtrace, args)

    def eval_parameters(self, parameters: tuple[ASTNode, ...]) -> list[Value]:
        return [self.eval_node(parameter) for parameter in parameters]

    def eval_identifier(self, node: ASTNode) -> Value:
        name = node.string()
        # Boolean literals cannot be shadowed
        if name == "true":
            return TRUE
        if name == "false":
            return FALSE
        value = self.env.get(name)
        if value is None:
            raise SimplexRuntimeError(f"undeclared identifier: {name}", self.backtrace)
        return value

    def eval_literal(self, node: ASTNode) -> Value:
        children = node.children()
        if len(children) != 1:
            raise SimplexContractViolation(f"literal must wrap one node, found {len(children)}")
        child = children[0]
        match child.kind:
            case NodeKind.INTEGER:
                return Value.integer(child.integer())
            case NodeKind.FLOATING_POINT:
                return Value.floating_point(child.floating_point())
            case NodeKind.STRING:
                return from_text(child.string())
            case _:
                raise SimplexContractViolation(f"literal cannot wrap a {child.kind.value} node")
