"""
  Lispy Lexer and Parser

- Streaming, lazy lexing over a single regular expression
- Emits a syntax tree of SyntaxNode objects; turning the tree into runtime
  values is the job of lispy.reader.reader

Grammar:

    number : /-?[0-9]+/
    symbol : /[a-zA-Z0-9_+\\-*\\/\\\\=<>!&]+/
    sexpr  : '(' <expr>* ')'
    qexpr  : '{' <expr>* '}'
    expr   : <number> | <symbol> | <sexpr> | <qexpr>
    lispy  : /^/ <expr>* /$/

A token made of symbol characters that is entirely an optionally signed run
of digits is a number; anything else is a symbol. ';' starts a comment that
runs to the end of the line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from lispy.types.errors import LispySyntaxError


TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<symbol>[a-zA-Z0-9_+\-*/\\=<>!&]+)"  # symbols and numbers
)

NUMBER_RE = re.compile(r"-?[0-9]+")

CLOSERS: dict[str, str] = {
    "lparen": ")",
    "lbrace": "}",
}

Token = tuple[str, str, int]


class NodeKind(Enum):
    ROOT = "root"
    NUMBER = "number"
    SYMBOL = "symbol"
    SEXPR = "sexpr"
    QEXPR = "qexpr"


@dataclass
class SyntaxNode:
    kind: NodeKind
    contents: str = ""
    children: list[SyntaxNode] = field(default_factory=list)
    line: int = 1
    column: int = 1


def position(source: str, pos: int) -> tuple[int, int]:
    """Return the 1-based (line, column) of offset ``pos`` in ``source``."""
    line = source.count("\n", 0, pos) + 1
    column = pos - (source.rfind("\n", 0, pos) + 1) + 1
    return line, column


def lex(source: str, filename: str = "<stdin>") -> Iterator[Token]:
    """Token generator: yields (token_type, token_text, offset) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            line, column = position(source, pos)
            raise LispySyntaxError(f"unexpected character {source[pos]!r}", line, column, filename)
        kind = m.lastgroup
        if kind not in ("whitespace", "comment"):
            text = m.group()
            if kind == "symbol" and NUMBER_RE.fullmatch(text):
                kind = "number"
            yield kind, text, pos
        pos = m.end()


class TokenStream:
    def __init__(self, source: str, filename: str = "<stdin>"):
        self.source = source
        self.filename = filename
        self.tokens = lex(source, filename)

    def advance(self) -> Optional[Token]:
        return next(self.tokens, None)

    def error(self, message: str, pos: int) -> LispySyntaxError:
        line, column = position(self.source, pos)
        return LispySyntaxError(message, line, column, self.filename)

    def parse_expr(self) -> Optional[SyntaxNode]:
        """Parse one expression, or return None at end of input.

        Open groups are kept on an explicit stack, so nesting depth is bounded
        by memory rather than by the interpreter's recursion limit.
        """
        tok = self.advance()
        if tok is None:
            return None

        # (open group node, closing character)
        stack: list[tuple[SyntaxNode, str]] = []
        while True:
            tok_type, tok_val, pos = tok
            node: Optional[SyntaxNode] = None

            if tok_type in CLOSERS:
                kind = NodeKind.SEXPR if tok_type == "lparen" else NodeKind.QEXPR
                line, column = position(self.source, pos)
                stack.append((SyntaxNode(kind, tok_val, line=line, column=column), CLOSERS[tok_type]))
            elif tok_type in ("rparen", "rbrace"):
                if not stack:
                    raise self.error(f"unexpected {tok_val!r}", pos)
                node, closer = stack.pop()
                if tok_val != closer:
                    raise self.error(f"expected {closer!r} but found {tok_val!r}", pos)
            else:
                kind = NodeKind.NUMBER if tok_type == "number" else NodeKind.SYMBOL
                line, column = position(self.source, pos)
                node = SyntaxNode(kind, tok_val, line=line, column=column)

            if node is not None:
                if not stack:
                    return node
                stack[-1][0].children.append(node)

            tok = self.advance()
            if tok is None:
                raise self.error(f"expected {stack[-1][1]!r} at end of input", len(self.source))

    def parse_all(self) -> Iterator[SyntaxNode]:
        while (expr := self.parse_expr()) is not None:
            yield expr


def parse(source: str, filename: str = "<stdin>") -> SyntaxNode:
    """Parse a whole input into a ROOT node holding one child per expression."""
    root = SyntaxNode(NodeKind.ROOT, source)
    root.children.extend(TokenStream(source, filename).parse_all())
    return root
