# Core aliases and package metadata for Lispy.
#
# Runtime values are instances of lispy.types.value.Value; the aliases below are
# used in signatures where a module cannot import the Value classes without
# creating an import cycle.

from typing import Any, Callable

from loguru import logger

__version__ = "0.0.1"

# Runtime value alias
LispValue = Any

# Evaluator function type: (value, env) -> value
EvaluatorFn = Callable[..., LispValue]

# Library code stays quiet until an application opts in (see logging_utils).
logger.disable("lispy")
