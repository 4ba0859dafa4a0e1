from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, NamedTuple


class Frame(NamedTuple):
    callee: str
    line: int
    col: int


class Backtrace:
    """Active call frames, outermost first."""

    __slots__ = ("frames",)

    def __init__(self):
        self.frames: list[Frame] = []

    @contextmanager
    def frame(self, callee: str, line: int, col: int) -> Iterator[Frame]:
        """Push a frame for the duration of a call; it is popped on every exit path."""
        entry = Frame(callee, line, col)
        depth = len(self.frames)
        self.frames.append(entry)
        try:
            yield entry
        finally:
            del self.frames[depth:]

    def snapshot(self) -> tuple[Frame, ...]:
        return tuple(self.frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    def __len__(self) -> int:
        return len(self.frames)

    def __repr__(self) -> str:
        return f"<Backtrace depth={len(self.frames)}>"
