"""Reader adapter: turns a parsed syntax tree into a tree of runtime values."""

from __future__ import annotations

from lispy.reader.parser import NodeKind, SyntaxNode, parse
from lispy.types.errors import ErrorKind
from lispy.types.value import INT_MAX, INT_MIN, LispError, Number, QExpr, SExpr, Symbol, Value


def read_number(node: SyntaxNode) -> Value:
    n = int(node.contents)
    if not INT_MIN <= n <= INT_MAX:
        return LispError("invalid number", ErrorKind.INVALID_NUMBER)
    return Number(n)


def read(node: SyntaxNode) -> Value:
    """Convert a syntax node and its descendants into a Value.

    The root of an input is read as an S-expression, so a bare top-level
    ``+ 1 2`` means the same as ``(+ 1 2)``.
    """
    match node.kind:
        case NodeKind.NUMBER:
            return read_number(node)
        case NodeKind.SYMBOL:
            return Symbol(node.contents)
        case NodeKind.QEXPR:
            return QExpr(read(child) for child in node.children)
        case NodeKind.SEXPR | NodeKind.ROOT:
            return SExpr(read(child) for child in node.children)
    raise ValueError(f"Unknown syntax node kind: {node.kind}")


def read_str(source: str, filename: str = "<stdin>") -> Value:
    """Parse ``source`` and read it as one S-expression."""
    return read(parse(source, filename))
