# Simplex: a small expression language with a tree-walking interpreter.
#
# Source text is parsed into an immutable syntax tree (simplex.reader.parser),
# which the Evaluator walks against an Environment of Values. Interpreter is
# the usual entry point: it seeds the native primitives and the bootstrap
# library written in the language itself.

from simplex.errors import (
    SimplexBootstrapError,
    SimplexContractViolation,
    SimplexError,
    SimplexEvaluationError,
    SimplexRuntimeError,
    SimplexSyntaxError,
    SimplexTypeMismatch,
)
from simplex.interpreter import Interpreter
from simplex.reader.parser import parse

__all__ = [
    "Interpreter",
    "parse",
    "SimplexError",
    "SimplexEvaluationError",
    "SimplexSyntaxError",
    "SimplexRuntimeError",
    "SimplexTypeMismatch",
    "SimplexContractViolation",
    "SimplexBootstrapError",
]
