"""Error kinds carried by Error values and the few real Python exceptions.

Evaluation never raises: every failure is a first-class Error value tagged
with an ErrorKind. Exceptions are reserved for reading source text and for
configuration. Exhausting the Python stack still raises RecursionError; the
REPL and CLI report it as a RECURSION_DEPTH Error.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    GENERIC = "generic"
    UNKNOWN_SYMBOL = "unknown-symbol"
    NOT_CALLABLE = "not-callable"
    TOO_MANY_ARGUMENTS = "too-many-arguments"
    ARITY = "arity"
    TYPE = "type"
    EMPTY_LIST = "empty-list"
    DIVISION_BY_ZERO = "division-by-zero"
    INVALID_NUMBER = "invalid-number"
    RECURSION_DEPTH = "recursion-depth"


class LispyError(Exception):
    """ Base class for all Lispy errors"""
    pass


class LispySyntaxError(LispyError):
    """ Raised when source text does not match the grammar"""

    def __init__(self, message: str, line: int = 1, column: int = 1, filename: str = "<stdin>"):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}: error: {self.message}"


class LispyConfigError(LispyError):
    """ Raised when a configuration value is not recognised"""
