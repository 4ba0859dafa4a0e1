"""Position-tracked character stream over parser input."""

from __future__ import annotations

from simplex.errors import SimplexContractViolation

# Returned by peek() once the input is exhausted
EOF_CHAR = "\0"


class Cursor:
    """Remaining input text plus the 1-based line/column of its first character."""

    __slots__ = ("text", "pos", "line", "col")

    def __init__(self, text: str):
        self.text: str = text
        self.pos: int = 0
        self.line: int = 1
        self.col: int = 1

    def size(self) -> int:
        return len(self.text) - self.pos

    def peek(self) -> str:
        if self.pos >= len(self.text):
            return EOF_CHAR
        return self.text[self.pos]

    def remaining(self) -> str:
        return self.text[self.pos:]

    def advance(self, n: int = 1) -> None:
        if n > self.size():
            raise SimplexContractViolation(
                f"cannot advance {n} characters with {self.size()} remaining"
            )
        for ch in self.text[self.pos:self.pos + n]:
            if ch == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1
        self.pos += n

    def __repr__(self) -> str:
        return f"<Cursor {self.line}|{self.col} remaining={self.size()}>"
