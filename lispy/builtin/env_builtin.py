"""Built-in functions for the Lispy runtime environment.

This module defines the list primitives, integer arithmetic, variable binding
and the lambda constructor, plus the registration utility that exposes them
to Lisp code. Every builtin takes the current environment and an owned list
of already-evaluated arguments, and reports failures as Error values.
"""
from __future__ import annotations

import operator
from typing import Callable, Optional

from loguru import logger

from lispy.types.environment import Environment
from lispy.types.errors import ErrorKind
from lispy.types.lambda_fn import Builtin, BuiltinProc, Lambda
from lispy.types.value import (
    LispError,
    Number,
    QExpr,
    SExpr,
    Symbol,
    Value,
    ValueType,
    wrap_int,
)
from lispy.evaluation.evaluator import evaluate


# -------------------------------
# Precondition checks
# -------------------------------
def arity_error(name: str, got: int, expected: int) -> LispError:
    return LispError(
        f"Function '{name}' passed incorrect number of arguments. Got {got}, Expected {expected}.",
        ErrorKind.ARITY,
    )


def check_count(name: str, args: list[Value], expected: int) -> Optional[LispError]:
    if len(args) != expected:
        return arity_error(name, len(args), expected)
    return None


def check_type(name: str, args: list[Value], i: int, expected: ValueType) -> Optional[LispError]:
    if args[i].type is not expected:
        return LispError(
            f"Function '{name}' passed incorrect type for argument {i}. "
            f"Got {args[i].kind_name}, Expected {expected.value}.",
            ErrorKind.TYPE,
        )
    return None


def check_not_empty(name: str, args: list[Value], i: int) -> Optional[LispError]:
    if not len(args[i]):
        return LispError(f"Function '{name}' passed {{}} for argument {i}.", ErrorKind.EMPTY_LIST)
    return None


def check_symbols(name: str, syms: QExpr) -> Optional[LispError]:
    for s in syms:
        if not isinstance(s, Symbol):
            return LispError(
                f"Function '{name}' cannot define non-symbol. "
                f"Got {s.kind_name}, Expected {ValueType.SYMBOL.value}.",
                ErrorKind.TYPE,
            )
    return None


# -------------------------------
# List operations
# -------------------------------
def list_builtin(env: Environment, args: list[Value]) -> Value:
    """(list a b ...) => {a b ...}"""
    return QExpr(args)


def head(env: Environment, args: list[Value]) -> Value:
    """(head {a b ...}) => {a}"""
    err = (
        check_count("head", args, 1)
        or check_type("head", args, 0, ValueType.QEXPR)
        or check_not_empty("head", args, 0)
    )
    if err:
        return err
    q = args[0]
    del q.cells[1:]
    return q


def tail(env: Environment, args: list[Value]) -> Value:
    """(tail {a b ...}) => {b ...}"""
    err = (
        check_count("tail", args, 1)
        or check_type("tail", args, 0, ValueType.QEXPR)
        or check_not_empty("tail", args, 0)
    )
    if err:
        return err
    q = args[0]
    q.pop(0)
    return q


def eval_builtin(env: Environment, args: list[Value]) -> Value:
    """(eval {f a b}) => result of (f a b) in the current environment."""
    err = check_count("eval", args, 1) or check_type("eval", args, 0, ValueType.QEXPR)
    if err:
        return err
    return evaluate(SExpr.adopt(args[0]), env)


def join(env: Environment, args: list[Value]) -> Value:
    """(join {a} {b c} ...) => {a b c ...}"""
    for i in range(len(args)):
        err = check_type("join", args, i, ValueType.QEXPR)
        if err:
            return err
    result = QExpr()
    for q in args:
        result.join(q)
    return result


# -------------------------------
# Arithmetic
# -------------------------------
def truncdiv(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _arith(name: str, op: Callable[[int, int], int], args: list[Value]) -> Value:
    if not args:
        return arity_error(name, 0, 1)
    for i in range(len(args)):
        err = check_type(name, args, i, ValueType.NUMBER)
        if err:
            return err

    x = args[0].num
    if name == "-" and len(args) == 1:
        return Number(-x)

    for y in args[1:]:
        if name == "/" and y.num == 0:
            return LispError("Division By Zero.", ErrorKind.DIVISION_BY_ZERO)
        x = wrap_int(op(x, y.num))
    return Number(x)


def add(env: Environment, args: list[Value]) -> Value:
    """Sum of all arguments."""
    return _arith("+", operator.add, args)


def sub(env: Environment, args: list[Value]) -> Value:
    """Subtract subsequent numbers from the first; unary negation for one arg."""
    return _arith("-", operator.sub, args)


def mul(env: Environment, args: list[Value]) -> Value:
    return _arith("*", operator.mul, args)


def div(env: Environment, args: list[Value]) -> Value:
    """Divide left-to-right, truncating toward zero; division by zero is an Error."""
    return _arith("/", truncdiv, args)


# -------------------------------
# Variables and functions
# -------------------------------
def _bind(name: str, env: Environment, args: list[Value], define: Callable[[Environment, str, Value], None]) -> Value:
    if not args:
        return arity_error(name, 0, 1)
    err = check_type(name, args, 0, ValueType.QEXPR)
    if err:
        return err

    syms = args[0]
    err = check_symbols(name, syms)
    if err:
        return err

    values = args[1:]
    if len(syms) != len(values):
        return LispError(
            f"Function '{name}' passed incorrect number of values for symbols. "
            f"Got {len(values)}, Expected {len(syms)}.",
            ErrorKind.ARITY,
        )

    for sym, value in zip(syms, values):
        define(env, sym.name, value)
    return SExpr()


def define_global(env: Environment, args: list[Value]) -> Value:
    """(def {a b} 1 2) binds a and b in the global environment."""
    return _bind("def", env, args, Environment.define_global)


def define_local(env: Environment, args: list[Value]) -> Value:
    """(= {a b} 1 2) binds a and b in the current environment."""
    return _bind("=", env, args, Environment.define_local)


def lambda_builtin(env: Environment, args: list[Value]) -> Value:
    """(fun {formals} {body}) => a closure with an empty environment."""
    err = (
        check_count("fun", args, 2)
        or check_type("fun", args, 0, ValueType.QEXPR)
        or check_type("fun", args, 1, ValueType.QEXPR)
    )
    if err:
        return err

    formals, body = args
    err = check_symbols("fun", formals)
    if err:
        return err
    return Lambda(formals, body, Environment())


# -------------------------------
# Registration
# -------------------------------
BUILTINS: dict[str, BuiltinProc] = {
    "list": list_builtin,
    "head": head,
    "tail": tail,
    "eval": eval_builtin,
    "join": join,
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "def": define_global,
    "=": define_local,
    "fun": lambda_builtin,
}


def register(env: Environment) -> None:
    env.update({name: Builtin(name, proc) for name, proc in BUILTINS.items()})
    logger.debug("registered {} builtins", len(BUILTINS))
