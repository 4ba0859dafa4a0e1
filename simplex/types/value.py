"""Runtime values for Simplex.

A Value is a tagged union: a ValueKind plus the payload that kind carries.

    Boolean        -> bool
    Byte           -> int in 0..255
    Char           -> str of length 1
    Cons           -> (car, cdr) tuple of Values
    Dict           -> dict[str, Value], never mutated after construction
    FloatingPoint  -> float
    Function       -> simplex.types.function.Function
    Integer        -> int
    Nil / Invalid  -> None

Text is a right-nested chain of Cons cells whose cars are Chars, ending in Nil.
The empty text is the canonical empty pair Cons(Nil, Nil).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from io import StringIO
from typing import TYPE_CHECKING, Any, Iterable, Iterator

from simplex.errors import SimplexContractViolation, SimplexTypeMismatch

if TYPE_CHECKING:
    from simplex.types.ast_node import ASTNode
    from simplex.types.backtrace import Frame
    from simplex.types.function import Function


class ValueKind(Enum):
    BOOLEAN = "Boolean"
    BYTE = "Byte"
    CHAR = "Char"
    CONS = "Cons"
    DICT = "Dict"
    FLOATING_POINT = "FloatingPoint"
    FUNCTION = "Function"
    INTEGER = "Integer"
    NIL = "Nil"
    INVALID = "Invalid"


@dataclass(frozen=True, eq=False)
class Value:
    kind: ValueKind
    payload: Any = None

    # Cons chains can be far longer than the Python stack is deep, so equality
    # and hashing walk them with an explicit work list.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left is right:
                continue
            if left.kind is not right.kind:
                return False
            if left.kind is ValueKind.CONS:
                pending.append((left.payload[1], right.payload[1]))
                pending.append((left.payload[0], right.payload[0]))
            elif left.payload != right.payload:
                return False
        return True

    def __hash__(self) -> int:
        if self.kind is ValueKind.DICT:
            raise TypeError("unhashable Simplex value: Dict")
        if self.kind is not ValueKind.CONS:
            return hash((self.kind, self.payload))
        cars = []
        cell = self
        while cell.kind is ValueKind.CONS:
            car, cell = cell.payload
            cars.append(hash(car))
        return hash((ValueKind.CONS, tuple(cars), hash(cell)))

    # --- Constructors ---
    @staticmethod
    def boolean(b: bool) -> Value:
        return TRUE if b else FALSE

    @staticmethod
    def byte(b: int) -> Value:
        if not 0 <= b <= 255:
            raise SimplexContractViolation(f"byte out of range: {b}")
        return Value(ValueKind.BYTE, b)

    @staticmethod
    def char(c: str) -> Value:
        return Value(ValueKind.CHAR, c)

    @staticmethod
    def cons(car: Value, cdr: Value) -> Value:
        return Value(ValueKind.CONS, (car, cdr))

    @staticmethod
    def dict(entries: dict[str, Value]) -> Value:
        return Value(ValueKind.DICT, dict(entries))

    @staticmethod
    def floating_point(f: float) -> Value:
        return Value(ValueKind.FLOATING_POINT, float(f))

    @staticmethod
    def function(fn: Function) -> Value:
        return Value(ValueKind.FUNCTION, fn)

    @staticmethod
    def integer(i: int) -> Value:
        return Value(ValueKind.INTEGER, i)

    # --- Accessors ---
    @property
    def car(self) -> Value:
        self._require(ValueKind.CONS)
        return self.payload[0]

    @property
    def cdr(self) -> Value:
        self._require(ValueKind.CONS)
        return self.payload[1]

    def _require(self, kind: ValueKind) -> None:
        if self.kind is not kind:
            raise SimplexContractViolation(f"expected a {kind.value} value, got {self.kind.value}")

    def is_empty_pair(self) -> bool:
        return (
            self.kind is ValueKind.CONS
            and self.payload[0].kind is ValueKind.NIL
            and self.payload[1].kind is ValueKind.NIL
        )

    def truthy(self) -> bool:
        """Coerce to a boolean, as `if` and `cond` do."""
        match self.kind:
            case ValueKind.BOOLEAN:
                return self.payload
            case ValueKind.BYTE | ValueKind.INTEGER | ValueKind.FLOATING_POINT:
                return self.payload != 0
            case ValueKind.CHAR:
                return self.payload != "\0"
            case ValueKind.CONS:
                return not self.is_empty_pair()
            case ValueKind.DICT:
                return bool(self.payload)
            case ValueKind.FUNCTION:
                return True
            case ValueKind.NIL:
                return False
            case ValueKind.INVALID:
                raise SimplexContractViolation("cannot coerce an invalid value")

    def text(self, node: ASTNode | None = None, backtrace: Iterable[Frame] = ()) -> str:
        """Extract the text held by a character chain.

        Raises SimplexTypeMismatch naming Char (bad element) or Cons (bad tail)
        if the chain is malformed.
        """
        with StringIO() as buffer:
            cell = self
            while True:
                if cell.kind is ValueKind.NIL or cell.is_empty_pair():
                    return buffer.getvalue()
                if cell.kind is not ValueKind.CONS:
                    raise SimplexTypeMismatch(ValueKind.CONS, cell.kind, node, backtrace)
                head, cell = cell.payload
                if head.kind is not ValueKind.CHAR:
                    raise SimplexTypeMismatch(ValueKind.CHAR, head.kind, node, backtrace)
                buffer.write(head.payload)

    def is_text(self) -> bool:
        if self.kind is not ValueKind.CONS:
            return False
        cell = self
        while cell.kind is ValueKind.CONS and not cell.is_empty_pair():
            if cell.payload[0].kind is not ValueKind.CHAR:
                return False
            cell = cell.payload[1]
        return cell.kind in (ValueKind.NIL, ValueKind.CONS)

    def __iter__(self) -> Iterator[Value]:
        """Iterate the cars of a Nil-terminated cons chain."""
        cell = self
        while cell.kind is ValueKind.CONS and not cell.is_empty_pair():
            yield cell.payload[0]
            cell = cell.payload[1]

    # --- Display ---
    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write(buffer)
            return buffer.getvalue()

    def _write(self, buffer: StringIO) -> None:
        match self.kind:
            case ValueKind.BOOLEAN:
                buffer.write("true" if self.payload else "false")
            case ValueKind.BYTE | ValueKind.INTEGER:
                buffer.write(str(self.payload))
            case ValueKind.CHAR:
                buffer.write(self.payload)
            case ValueKind.FLOATING_POINT:
                buffer.write(format_float(self.payload))
            case ValueKind.NIL:
                buffer.write("()")
            case ValueKind.DICT:
                buffer.write("(dict")
                for key, value in self.payload.items():
                    buffer.write(f" '{key}' ")
                    value._write(buffer)
                buffer.write(")")
            case ValueKind.CONS:
                # (cons a (cons b tail)) is written left to right; the closing
                # parens are counted and written once the tail is reached
                depth = 0
                cell = self
                while cell.kind is ValueKind.CONS and not cell.is_text():
                    car, cell = cell.payload
                    buffer.write("(cons ")
                    car._write(buffer)
                    buffer.write(" ")
                    depth += 1
                if cell.kind is ValueKind.CONS:
                    buffer.write(cell.text())
                else:
                    cell._write(buffer)
                buffer.write(")" * depth)
            case ValueKind.FUNCTION:
                buffer.write(str(self.payload))
            case ValueKind.INVALID:
                raise SimplexContractViolation("cannot display an invalid value")

    def __repr__(self) -> str:
        if self.kind in (ValueKind.NIL, ValueKind.INVALID):
            return f"Value({self.kind.value})"
        if self.kind is ValueKind.CONS:
            return f"Value(Cons, {self.payload[0]!r}, ...)"
        return f"Value({self.kind.value}, {self.payload!r})"


def format_float(f: float) -> str:
    """Shortest round-trip digits, always positional: 1e+20 prints as 100000000000000000000."""
    text = repr(f)
    if "e" in text:
        text = format(Decimal(text), "f")
    if text.endswith(".0"):
        return text[:-2]
    return text


TRUE = Value(ValueKind.BOOLEAN, True)
FALSE = Value(ValueKind.BOOLEAN, False)
NIL = Value(ValueKind.NIL)
INVALID = Value(ValueKind.INVALID)
EMPTY_TEXT = Value.cons(NIL, NIL)


def from_text(s: str) -> Value:
    """Build the character chain for `s`; the empty string gives EMPTY_TEXT."""
    if not s:
        return EMPTY_TEXT
    chain = NIL
    for ch in reversed(s):
        chain = Value.cons(Value.char(ch), chain)
    return chain


def from_list(values: Iterable[Value]) -> Value:
    """Build a Nil-terminated cons chain; no values give Nil."""
    chain = NIL
    for value in reversed(list(values)):
        chain = Value.cons(value, chain)
    return chain
