"""Runtime environment for glisp.

The Environment stores bindings of identifier names to evaluated values and
supports nested scopes via an `outer` link. A closure keeps a reference to the
frame it was defined in, so frames form a tree rooted at the built-in frame
and stay alive for as long as any closure or running call still refers to
them.
"""

from __future__ import annotations

from io import StringIO
from typing import Mapping, Optional

from glisp import Value
from glisp.errors import EvalError
from glisp.types.nil import Nil


class Environment:
    """Hierarchical mapping from names to glisp values."""

    __slots__ = ("vals", "outer", "read_only")

    def __init__(
        self,
        vals: Optional[Mapping[str, Value]] = None,
        outer: Optional[Environment] = None,
        read_only: bool = False,
    ):
        self.vals: dict[str, Value] = dict(vals) if vals else {}
        self.outer: Environment | None = outer
        self.read_only = read_only

    def sub_environment(self, vals: Optional[Mapping[str, Value]] = None) -> Environment:
        """Create a child frame whose parent is this frame."""
        return Environment(vals, outer=self)

    def define(self, name: str, value: Value) -> None:
        """Bind `name` to `value` in this frame, shadowing any outer binding.

        Raises EvalError if the frame is read-only (the built-in root frame).
        """
        if self.read_only:
            raise EvalError(f"cannot bind '{name}' in a read-only environment")
        self.vals[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vals:
                return env
            env = env.outer
        return None

    def lookup(self, name: str) -> Value:
        """Look up the value bound to `name`.

        An unresolved name yields Nil rather than raising; callers that need to
        tell the two apart use find().
        """
        env = self.find(name)
        if env is None:
            return Nil
        return env.vals[name]

    def _write_vals(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v.inspect_str()}" for k, v in self.vals.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vals(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return f"<Environment {len(self.vals)} bindings, depth {depth}>"
