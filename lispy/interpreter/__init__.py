from __future__ import annotations
from pathlib import Path

from loguru import logger

from lispy.config import ClosureScope, parse_closure_scope
from lispy.runtime_context import closure_scope_override
from lispy.reader.parser import parse
from lispy.reader.reader import read, read_str
from lispy.types.environment import Environment
from lispy.types.errors import ErrorKind
from lispy.types.value import LispError, Value
from lispy.evaluation.evaluator import evaluate
from lispy.builtin.env_builtin import register


def recursion_error() -> LispError:
    """The Error value shown when Python's recursion limit cuts a computation short."""
    return LispError("Maximum recursion depth exceeded.", ErrorKind.RECURSION_DEPTH)


class Interpreter:
    """
    Orchestrates reading and evaluating Lispy code.
    Maintains the global Environment across calls.

    ``closure_scope`` applies only while this interpreter evaluates; None
    means the process-wide setting.
    """

    def __init__(
        self,
        prelude: str | None = None,
        *,
        closure_scope: ClosureScope | str | None = None,
    ):
        self.closure_scope: ClosureScope | None = (
            parse_closure_scope(closure_scope) if closure_scope is not None else None
        )
        if self.closure_scope is not None:
            logger.debug("closure scope set to {}", self.closure_scope.value)

        self.env: Environment = Environment()
        register(self.env)

        if prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str, filename: str = "<prelude>") -> list[Value]:
        """Evaluate each top-level expression of ``code`` in turn."""
        with closure_scope_override(self.closure_scope):
            results = [evaluate(read(node), self.env) for node in parse(code, filename).children]
        logger.debug("evaluated {} prelude expressions from {}", len(results), filename)
        return results

    def load(self, path: str | Path) -> list[Value]:
        """Evaluate a source file as a prelude."""
        path = Path(path)
        logger.debug("loading {}", path)
        return self.eval_prelude(path.read_text(encoding="utf-8"), str(path))

    def eval(self, code: str, filename: str = "<stdin>") -> Value:
        """Read the whole of ``code`` as one S-expression and evaluate it.

        Raises LispySyntaxError when ``code`` does not parse, and
        RecursionError when reading, evaluating or printing nests deeper
        than the interpreter allows.
        """
        expr = read_str(code, filename)
        logger.debug("eval {:.200}", code)
        with closure_scope_override(self.closure_scope):
            return evaluate(expr, self.env)
