"""Runtime values for Lispy.

A Value is a closed tagged variant. Each subclass carries a class-level
``type`` tag and only the payload for its variant. Values form a tree: an
SExpr or QExpr exclusively owns its cells, and ``copy()`` always returns a
fully independent tree so that no two live locations alias a mutable node.
"""

from __future__ import annotations

from enum import Enum
from io import StringIO
from typing import ClassVar, Iterable, Iterator

from lispy.types.errors import ErrorKind

INT_BITS = 64
_INT_MOD = 1 << INT_BITS
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1


def wrap_int(n: int) -> int:
    """Reduce ``n`` to a signed 64-bit integer, wrapping silently on overflow."""
    return ((n - INT_MIN) % _INT_MOD) + INT_MIN


class ValueType(Enum):
    """Variant tag. The value of each member is its printable kind name."""

    ERROR = "Error"
    NUMBER = "Number"
    SYMBOL = "Symbol"
    FUNCTION = "Function"
    SEXPR = "S-Expression"
    QEXPR = "Q-Expression"


class Value:
    """Base class of all runtime values."""

    __slots__ = ()

    type: ClassVar[ValueType]

    def copy(self) -> Value:
        raise NotImplementedError

    @property
    def kind_name(self) -> str:
        return self.type.value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class LispError(Value):
    """An error produced by evaluation. Errors are values, never raised."""

    __slots__ = ("message", "kind")
    type = ValueType.ERROR

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.GENERIC):
        self.message: str = message
        self.kind: ErrorKind = kind

    def copy(self) -> LispError:
        return LispError(self.message, self.kind)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LispError) and self.message == other.message and self.kind is other.kind

    def __str__(self) -> str:
        return f"Error: {self.message}"


class Number(Value):
    __slots__ = ("num",)
    type = ValueType.NUMBER

    def __init__(self, num: int):
        self.num: int = wrap_int(num)

    def copy(self) -> Number:
        return Number(self.num)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.num == other.num

    def __str__(self) -> str:
        return str(self.num)


class Symbol(Value):
    __slots__ = ("name",)
    type = ValueType.SYMBOL

    def __init__(self, name: str):
        self.name: str = name

    def copy(self) -> Symbol:
        return Symbol(self.name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __str__(self) -> str:
        return self.name


class Function(Value):
    """Common base of builtin-backed and user-defined functions."""

    __slots__ = ()
    type = ValueType.FUNCTION


class Expr(Value):
    """An ordered, owning sequence of values. Base of SExpr and QExpr."""

    __slots__ = ("cells",)
    open_char: ClassVar[str]
    close_char: ClassVar[str]

    def __init__(self, cells: Iterable[Value] | None = None):
        self.cells: list[Value] = list(cells) if cells is not None else []

    @classmethod
    def adopt(cls, other: Expr) -> Expr:
        """Move ``other``'s cells into a new expression of this class.

        No cell is copied; ``other`` is left empty.
        """
        new = cls()
        new.cells, other.cells = other.cells, []
        return new

    def add(self, value: Value) -> Expr:
        self.cells.append(value)
        return self

    def pop(self, i: int = 0) -> Value:
        """Remove and return cell ``i``."""
        return self.cells.pop(i)

    def take(self, i: int) -> Value:
        """Return cell ``i`` and drop every other cell."""
        value = self.cells.pop(i)
        self.cells.clear()
        return value

    def join(self, other: Expr) -> Expr:
        """Move all of ``other``'s cells onto the end of this expression."""
        self.cells.extend(other.cells)
        other.cells = []
        return self

    def copy(self) -> Expr:
        return type(self)(cell.copy() for cell in self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.cells)

    def __getitem__(self, i: int) -> Value:
        return self.cells[i]

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self.cells == other.cells

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(self.open_char)
            buffer.write(" ".join(str(cell) for cell in self.cells))
            buffer.write(self.close_char)
            return buffer.getvalue()


class SExpr(Expr):
    """Evaluated group: children are reduced, then the first is applied."""

    __slots__ = ()
    type = ValueType.SEXPR
    open_char = "("
    close_char = ")"


class QExpr(Expr):
    """Quoted group: inert data until explicitly evaluated."""

    __slots__ = ()
    type = ValueType.QEXPR
    open_char = "{"
    close_char = "}"
