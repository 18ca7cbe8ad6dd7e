"""Application engine for Lispy.

Centralizes the call protocol:
- Builtins are invoked directly with the caller's environment and the owned
  argument list; each builtin does its own arity and type checking.
- Closures bind arguments to formals one at a time. Supplying fewer arguments
  than formals yields a partially applied closure; supplying more is an error.
  Once every formal is bound the body runs with the caller's environment as
  the fallback scope.
"""

from __future__ import annotations

from lispy import EvaluatorFn
from lispy.config import ClosureScope
from lispy.runtime_context import get_closure_scope
from lispy.types.environment import Environment
from lispy.types.errors import ErrorKind
from lispy.types.lambda_fn import Builtin, Lambda
from lispy.types.value import LispError, SExpr, Value


def apply_lambda(
    fn: Lambda,
    args: list[Value],
    caller_env: Environment,
    evaluate_fn: EvaluatorFn,
    scope: ClosureScope = ClosureScope.FRESH,
) -> Value:
    """Apply a closure to already-evaluated arguments.

    Parameters:
    - fn: The Lambda being applied.
    - args: The owned argument values; consumed by binding.
    - caller_env: The environment of the call site. It becomes the outer
      scope of the closure's environment for the duration of the body.
    - evaluate_fn: Evaluator used to reduce the body.
    - scope: FRESH binds into a private copy of ``fn``; SHARED binds into
      ``fn`` itself, consuming its formals.
    """
    if scope is ClosureScope.FRESH:
        fn = fn.copy()

    given = len(args)
    total = len(fn.formals)

    while args:
        if not fn.formals.cells:
            return LispError(
                f"Function passed too many arguments. Got {given}, Expected {total}.",
                ErrorKind.TOO_MANY_ARGUMENTS,
            )
        formal = fn.formals.pop(0)
        fn.env.define_local(str(formal), args.pop(0))

    if fn.formals.cells:
        # Partial application: the bound arguments travel with the copy.
        return fn if scope is ClosureScope.FRESH else fn.copy()

    fn.env.outer = caller_env
    body = SExpr.adopt(fn.body.copy())
    return evaluate_fn(body, fn.env)


def apply(
    fn: Builtin | Lambda,
    args: list[Value],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply either a Builtin or a Lambda to an owned argument list."""
    if isinstance(fn, Builtin):
        return fn.proc(env, args)
    return apply_lambda(fn, args, env, evaluate_fn, get_closure_scope())
