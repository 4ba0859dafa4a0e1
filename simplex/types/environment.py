"""Runtime environment for Simplex.

The Environment maps identifier text to Values. Frames chain through `outer`:
a closure call gets a fresh frame whose outer link is the closure's captured
environment, so bindings made during the call never reach the caller.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from simplex.types.value import Value


class Environment:
    """Mapping from identifier text to Values with an optional enclosing frame."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer

    def define(self, name: str, value: Value) -> None:
        """Bind `name` in this frame, replacing any existing binding here."""
        self.vars[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: str) -> Optional[Value]:
        env = self.find(name)
        if env is None:
            return None
        return env.vars[name]

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-define a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.vars[k] = v

    def extend(self, mapping: dict[str, Value]) -> Environment:
        """Return a new child frame of this environment holding `mapping`."""
        child = Environment(outer=self)
        child.update(mapping)
        return child

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Single-frame view with an indicator for the parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            frames = []
            env = self
            while env is not None:
                frames.append("{" + ", ".join(env.vars) + "}")
                env = env.outer
            buffer.write(" -> ".join(frames))
            buffer.write(">")
            return buffer.getvalue()
