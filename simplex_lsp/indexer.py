from __future__ import annotations

"""
Static indexer for Simplex files; buffers are parsed, never evaluated.

The index records:
- top-level definitions: (let name value), as 'function' when the value is a
  lambda expression and 'var' otherwise
- the syntax error of the buffer, if any, with a 0-based position

Parsing stops at the first error, so an index built from a broken buffer holds
the error and no symbols.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from simplex.errors import SimplexSyntaxError
from simplex.reader.parser import parse
from simplex.types.ast_node import ASTNode


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int  # 0-based
    col: int   # 0-based


@dataclass
class SyntaxProblem:
    message: str
    line: int  # 0-based
    col: int   # 0-based


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    error: Optional[SyntaxProblem] = None


def _zero_based(line: int, col: int) -> tuple[int, int]:
    return max(line - 1, 0), max(col - 1, 0)


def _definition(expression: ASTNode) -> Optional[SymbolDef]:
    """The binding made by a top-level (let name value), if `expression` is one."""
    if not expression.is_call():
        return None
    head, params = expression.children()
    if not head.is_identifier("let") or not params.children():
        return None
    parameters = params.children()[0].children()
    if len(parameters) != 2 or not parameters[0].is_identifier():
        return None
    target = parameters[0].unwrapped()
    value = parameters[1]
    kind = "function" if value.is_call() and value.children()[0].is_identifier("lambda") else "var"
    line, col = _zero_based(target.line, target.col)
    return SymbolDef(name=target.string(), kind=kind, line=line, col=col)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    if not text.strip():
        return idx
    try:
        program = parse(text)
    except SimplexSyntaxError as e:
        line, col = _zero_based(e.line, e.col)
        idx.error = SyntaxProblem(message=str(e), line=line, col=col)
        return idx

    for expression in program.children():
        sdef = _definition(expression)
        if sdef is not None:
            idx.symbols[sdef.name] = sdef
    return idx


# Signatures for hover and completion without evaluation
BUILTIN_SIGNATURES: Dict[str, str] = {
    # special forms
    "lambda": "(lambda param ... body)",
    "let": "(let name value)",
    "if": "(if condition then else)",
    "cond": "(cond condition result ...)",
    # natives
    "+": "(+ num ...)",
    "-": "(- x &optional y)",
    "*": "(* num ...)",
    "/": "(/ x y)",
    "=": "(= a b ...)",
    "<": "(< a b)",
    ">": "(> a b)",
    "sequence": "(sequence expr ...)",
    "cons": "(cons car cdr)",
    "car": "(car pair)",
    "cdr": "(cdr pair)",
    "list": "(list value ...)",
    "dict": "(dict key value ...)",
    "dict.get": "(dict.get key dict)",
    "dict.set": "(dict.set key value dict)",
    "string": "(string value)",
    "byte": "(byte value)",
    "print": "(print value ...)",
    "read": "(read)",
    "endl": "endl",
    "nil": "nil",
    # bootstrap library
    "not": "(not x)",
    "and": "(and a b)",
    "or": "(or a b)",
    "!=": "(!= a b)",
    "<=": "(<= a b)",
    ">=": "(>= a b)",
    "null?": "(null? list)",
    "length": "(length list)",
    "append": "(append a b)",
    "reverse": "(reverse list)",
    "map": "(map f list)",
    "filter": "(filter pred list)",
    "nth": "(nth n list)",
}
