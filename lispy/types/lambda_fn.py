"""Function values: native builtins and user-defined closures."""

from __future__ import annotations

from io import StringIO
from typing import Callable

from lispy.types.environment import Environment
from lispy.types.value import Function, QExpr, Value

BuiltinProc = Callable[[Environment, list[Value]], Value]


class Builtin(Function):
    """A function backed by a native Python callable.

    Builtins are stateless, so copying one only duplicates the reference to
    its callable, and two builtin values are equal when they share it.
    """

    __slots__ = ("name", "proc")

    def __init__(self, name: str, proc: BuiltinProc):
        self.name: str = name
        self.proc: BuiltinProc = proc

    def copy(self) -> Builtin:
        return Builtin(self.name, self.proc)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Builtin) and self.proc is other.proc

    def __str__(self) -> str:
        return "<builtin-function>"

    def __repr__(self) -> str:
        return f"Builtin({self.name!r})"


class Lambda(Function):
    """A first-class closure with formal parameters, body, and its own env."""

    __slots__ = ("formals", "body", "env")

    def __init__(self, formals: QExpr, body: QExpr, env: Environment | None = None):
        self.formals: QExpr = formals
        self.body: QExpr = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def copy(self) -> Lambda:
        return Lambda(self.formals.copy(), self.body.copy(), self.env.copy())

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Lambda)
            and self.formals == other.formals
            and self.body == other.body
            and self.env.vars == other.env.vars
        )

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(fun ")
            buffer.write(str(self.formals))
            buffer.write(" ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()
