"""Core evaluator for the Lispy interpreter.

A pure recursive reduction over Value trees. The environment is passed
explicitly on every call; there is no other evaluator state.
"""

from __future__ import annotations

from lispy.types.environment import Environment
from lispy.types.errors import ErrorKind
from lispy.types.value import Function, LispError, SExpr, Symbol, Value
from lispy.evaluation.apply import apply


def evaluate(value: Value, env: Environment) -> Value:
    """Reduce ``value`` in ``env`` and return the result.

    The evaluator takes ownership of ``value``: an S-expression is consumed
    while it is reduced. Pass ``value.copy()`` to keep the original.
    """
    match value:
        case Symbol():
            return env.lookup(value.name)
        case SExpr():
            return evaluate_sexpr(value, env)

    # --- Numbers, errors, functions and Q-expressions evaluate to themselves ---
    return value


def evaluate_sexpr(sexpr: SExpr, env: Environment) -> Value:
    if not sexpr.cells:
        return sexpr

    # Every child is reduced, even after one of them has failed.
    sexpr.cells = [evaluate(cell, env) for cell in sexpr.cells]

    for i, cell in enumerate(sexpr.cells):
        if isinstance(cell, LispError):
            return sexpr.take(i)

    if len(sexpr) == 1:
        return sexpr.take(0)

    head = sexpr.pop(0)
    if not isinstance(head, Function):
        return LispError(
            f"S-Expression starts with incorrect type. "
            f"Got {head.kind_name}, Expected {Function.type.value}.",
            ErrorKind.NOT_CALLABLE,
        )

    return apply(head, sexpr.cells, env, evaluate)
