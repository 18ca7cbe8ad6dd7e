"""Runtime environment for Lispy.

The Environment stores bindings of symbol names to values and supports nested
scopes via an ``outer`` link. The outer environment is referenced, not owned.
Values are copied on the way in and on the way out, so a binding can never be
mutated through a value handed to a caller.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lispy.types.errors import ErrorKind
from lispy.types.value import LispError, Value


class Environment:
    """Hierarchical mapping from symbol names to Lisp values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer

    def root(self) -> Environment:
        """Return the outermost environment of this chain."""
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def define_local(self, name: str, value: Value) -> None:
        """Bind ``name`` to a copy of ``value`` in this frame, overwriting any binding."""
        self.vars[name] = value.copy()

    def define_global(self, name: str, value: Value) -> None:
        """Bind ``name`` to a copy of ``value`` in the outermost frame."""
        self.root().define_local(name, value)

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds ``name``."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: str) -> Value:
        """Return a copy of the value bound to ``name``.

        An unbound name produces an Error value rather than raising.
        """
        env = self.find(name)
        if env is None:
            return LispError(f"Unbound Symbol '{name}'", ErrorKind.UNKNOWN_SYMBOL)
        return env.vars[name].copy()

    def copy(self) -> Environment:
        """Deep-copy this frame's bindings; the outer reference is shared."""
        new = Environment(self.outer)
        for k, v in self.vars.items():
            new.vars[k] = v.copy()
        return new

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-define a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.define_local(k, v)

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env: Optional[Environment] = self
            while env is not None:
                with StringIO() as env_buf:
                    env._write_vars(env_buf)
                    chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
