import pytest

from lispy.builtin.env_builtin import register
from lispy.config import ClosureScope
from lispy.interpreter import Interpreter
from lispy.runtime_context import set_closure_scope
from lispy.types.environment import Environment

# Every test runs twice, once per closure scoping mode:
# 1) "fresh": each application binds into a private copy of the closure
# 2) "shared": arguments are bound into the applied closure's own environment
# Programs must give the same results either way; the tests that pin down the
# difference (what happens to the applied Lambda instance) live in
# test_lambda.py and pass the mode explicitly.


@pytest.fixture(params=[ClosureScope.FRESH, ClosureScope.SHARED], ids=["fresh", "shared"])
def closure_scope(request):
    return request.param


@pytest.fixture(autouse=True)
def _force_closure_scope(closure_scope):
    set_closure_scope(closure_scope)
    yield
    set_closure_scope(None)


@pytest.fixture
def env():
    """Fresh global environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def interp():
    return Interpreter()
