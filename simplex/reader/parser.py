"""
  Recursive-descent parser for Simplex source text.

Grammar:

    Program               := Expression+
    Expression            := WS? ( '(' Expression OptionalParameterList WS? ')'
                                 | Literal | Identifier ) WS?
    OptionalParameterList := <empty> | ParameterList
    ParameterList         := Expression WS? ParameterList   (until the next char is ')')
    Literal               := String | Number
    Number                := digit+ ('.' digit*)?
    String                := "'" ( '\\' any-char | any-char-but-quote )* "'"
    Identifier            := run of chars other than whitespace, '(' and ')'

- A call Expression always holds two children: the callee and an
  OptionalParameterList (possibly empty). The evaluator depends on that shape.
- Top-level expressions are siblings under a single Program node.
- Parsing stops at the first error; there is no recovery.
"""

from __future__ import annotations

from simplex.errors import SimplexSyntaxError
from simplex.reader.cursor import Cursor
from simplex.types.ast_node import ASTNode, NodeKind

WHITESPACE = " \t\n\r"
DIGITS = "0123456789"

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Parser:
    """Parses one source text. Create a new Parser per input."""

    def __init__(self, text: str):
        self.input = Cursor(text)

    # ------------------------
    # Helpers
    # ------------------------
    def error(self, kind: NodeKind, expected: str, actual: str) -> SimplexSyntaxError:
        return SimplexSyntaxError(kind, expected, actual, self.input.line, self.input.col)

    def _found(self) -> str:
        return "EOF" if self.input.size() == 0 else self.input.peek()

    def expect(self, kind: NodeKind, token: str) -> None:
        size = len(token)
        if size > self.input.size():
            raise self.error(kind, token, self.input.remaining() or "EOF")
        found = self.input.remaining()[:size]
        if found != token:
            raise self.error(kind, token, found)
        self.input.advance(size)

    # ------------------------
    # Grammar rules
    # ------------------------
    def parse_program(self) -> ASTNode:
        line, col = self.input.line, self.input.col
        expressions = [self.parse_expression()]
        while self.input.size() > 0:
            expressions.append(self.parse_expression())
        return ASTNode.branch(NodeKind.PROGRAM, expressions, line, col)

    def parse_expression(self) -> ASTNode:
        kind = NodeKind.EXPRESSION
        self.parse_optional_whitespace()
        if self.input.size() == 0:
            raise self.error(kind, "(", "EOF")

        line, col = self.input.line, self.input.col
        next_char = self.input.peek()
        if next_char == "(":
            self.expect(kind, "(")
            children = [self.parse_expression(), self.parse_optional_parameter_list()]
            self.parse_optional_whitespace()
            self.expect(kind, ")")
        elif next_char == "'" or next_char in DIGITS:
            children = [self.parse_literal()]
        else:
            children = [self.parse_identifier()]
        self.parse_optional_whitespace()
        return ASTNode.branch(kind, children, line, col)

    def parse_optional_parameter_list(self) -> ASTNode:
        line, col = self.input.line, self.input.col
        children = []
        if self.input.peek() != ")":
            children.append(self.parse_parameter_list())
        return ASTNode.branch(NodeKind.OPTIONAL_PARAMETER_LIST, children, line, col)

    def parse_parameter_list(self) -> ASTNode:
        line, col = self.input.line, self.input.col
        parameters = []
        while True:
            parameters.append(self.parse_expression())
            self.parse_optional_whitespace()
            if self.input.peek() == ")":
                break
        return ASTNode.branch(NodeKind.PARAMETER_LIST, parameters, line, col)

    def parse_literal(self) -> ASTNode:
        kind = NodeKind.LITERAL
        if self.input.size() == 0:
            raise self.error(kind, "any valid literal", "EOF")
        line, col = self.input.line, self.input.col
        if self.input.peek() == "'":
            child = self.parse_string()
        else:
            child = self.parse_number()
        return ASTNode.branch(kind, [child], line, col)

    def parse_number(self) -> ASTNode:
        line, col = self.input.line, self.input.col
        digits: list[str] = []
        is_float = False
        while self.input.size() > 0:
            next_char = self.input.peek()
            if digits and next_char == "." and not is_float:
                is_float = True
            elif next_char in WHITESPACE or next_char == ")":
                break
            elif next_char not in DIGITS:
                raise self.error(NodeKind.NUMBER, "digits 0 through 9", next_char)
            digits.append(next_char)
            self.input.advance()

        text = "".join(digits)
        if is_float:
            return ASTNode(NodeKind.FLOATING_POINT, float(text), line, col)
        value = int(text)
        if not INT64_MIN <= value <= INT64_MAX:
            raise SimplexSyntaxError(
                NodeKind.NUMBER, "an integer between -2^63 and 2^63-1", text, line, col
            )
        return ASTNode(NodeKind.INTEGER, value, line, col)

    def parse_string(self) -> ASTNode:
        kind = NodeKind.STRING
        line, col = self.input.line, self.input.col
        self.expect(kind, "'")
        chars: list[str] = []
        while True:
            if self.input.size() == 0:
                raise self.error(kind, "'", "EOF")
            next_char = self.input.peek()
            self.input.advance()
            if next_char == "'":
                break
            if next_char == "\\":
                # The escaped character is taken literally
                if self.input.size() == 0:
                    raise self.error(kind, "any character after \\", "EOF")
                next_char = self.input.peek()
                self.input.advance()
            chars.append(next_char)
        return ASTNode(kind, "".join(chars), line, col)

    def parse_identifier(self) -> ASTNode:
        kind = NodeKind.IDENTIFIER
        if self.input.size() == 0:
            raise self.error(kind, "any valid identifier", "EOF")
        line, col = self.input.line, self.input.col
        chars: list[str] = []
        while self.input.size() > 0:
            next_char = self.input.peek()
            if next_char in WHITESPACE or next_char in "()":
                break
            chars.append(next_char)
            self.input.advance()
        if not chars:
            raise self.error(
                kind, "non-whitespace characters other than (, ), and '", self._found()
            )
        return ASTNode(kind, "".join(chars), line, col)

    def parse_optional_whitespace(self) -> None:
        if self.input.size() == 0 or self.input.peek() not in WHITESPACE:
            return
        self.parse_whitespace()

    def parse_whitespace(self) -> None:
        found_whitespace = False
        while self.input.size() > 0:
            next_char = self.input.peek()
            if next_char in WHITESPACE:
                found_whitespace = True
            elif not found_whitespace:
                raise self.error(NodeKind.WHITESPACE, "Any of: ' ', \\r, \\n, \\t", next_char)
            else:
                break
            self.input.advance()
        if not found_whitespace:
            raise self.error(NodeKind.WHITESPACE, "Any of: ' ', \\r, \\n, \\t", "EOF")


def parse(text: str) -> ASTNode:
    """Parse `text` into a Program node, or raise SimplexSyntaxError."""
    return Parser(text).parse_program()
