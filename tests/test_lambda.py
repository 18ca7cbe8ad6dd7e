import pytest

from lispy.config import ClosureScope
from lispy.evaluation.apply import apply, apply_lambda
from lispy.evaluation.evaluator import evaluate
from lispy.types.environment import Environment
from lispy.types.errors import ErrorKind
from lispy.types.lambda_fn import Builtin, Lambda
from lispy.types.value import LispError, Number, QExpr, SExpr, Symbol


@pytest.fixture
def add_lambda():
    return Lambda(
        QExpr([Symbol("a"), Symbol("b")]),
        QExpr([Symbol("+"), Symbol("a"), Symbol("b")]),
    )


def test_fun_builds_closure(interp):
    result = interp.eval("fun {a b} {+ a b}")
    assert isinstance(result, Lambda)
    assert str(result) == "(fun {a b} {+ a b})"
    assert result.env.vars == {}
    assert result.env.outer is None


def test_lambda_simple(interp):
    assert interp.eval("(fun {a b} {+ a b}) 2 3") == Number(5)
    assert interp.eval("((fun {x} {* x x}) 7)") == Number(49)


def test_partial_application(interp):
    interp.eval("def {add} (fun {a b} {+ a b})")
    assert interp.eval("(add 1 2)") == Number(3)
    assert interp.eval("((add 1) 2)") == Number(3)
    assert str(interp.eval("add 1")) == "(fun {b} {+ a b})"


def test_partially_applied_function_can_be_stored(interp):
    interp.eval("def {add} (fun {a b} {+ a b})")
    interp.eval("def {add10} (add 10)")
    assert interp.eval("add10 1") == Number(11)
    assert interp.eval("add10 2") == Number(12)
    assert interp.eval("add 3 4") == Number(7)


def test_too_many_arguments(interp):
    interp.eval("def {add} (fun {a b} {+ a b})")
    result = interp.eval("(add 1 2 3)")
    assert isinstance(result, LispError)
    assert result.kind is ErrorKind.TOO_MANY_ARGUMENTS
    assert result.message == "Function passed too many arguments. Got 3, Expected 2."
    result = interp.eval("((add 1) 2 3)")
    assert result.message == "Function passed too many arguments. Got 2, Expected 1."


def test_higher_order_functions(interp):
    interp.eval("def {twice} (fun {f x} {f (f x)})")
    interp.eval("def {inc} (fun {n} {+ n 1})")
    assert interp.eval("twice inc 5") == Number(7)
    assert interp.eval("twice (fun {n} {* n 3}) 2") == Number(18)


def test_free_variables_resolve_through_call_site(interp):
    interp.eval("def {f} (fun {x} {+ x y})")
    assert interp.eval("f 1").kind is ErrorKind.UNKNOWN_SYMBOL
    interp.eval("def {y} 10")
    assert interp.eval("f 1") == Number(11)
    interp.eval("def {g} (fun {y} {f 1})")
    assert interp.eval("g 100") == Number(101)


def test_def_inside_closure_is_global(interp):
    interp.eval("def {setter} (fun {v} {def {x} v})")
    assert interp.eval("setter 5") == SExpr()
    assert interp.eval("x") == Number(5)
    interp.eval("def {reader} (fun {_} {x})")
    assert interp.eval("reader 0") == Number(5)


def test_local_assignment_does_not_leak(interp):
    interp.eval("def {local} (fun {v} {= {z} v})")
    assert interp.eval("local 5") == SExpr()
    assert interp.eval("z").kind is ErrorKind.UNKNOWN_SYMBOL


def test_local_assignment_is_visible_in_body(interp):
    interp.eval("def {f} (fun {v} {tail (list (= {w} (* v 2)) w)})")
    assert str(interp.eval("f 4")) == "{8}"
    assert interp.eval("w").kind is ErrorKind.UNKNOWN_SYMBOL


def test_closure_value_is_unchanged_by_calls(interp):
    interp.eval("def {add} (fun {a b} {+ a b})")
    interp.eval("add 1 2")
    interp.eval("add 1")
    assert str(interp.eval("add")) == "(fun {a b} {+ a b})"


def test_fun_errors(interp):
    cases = {
        "fun {a}": "Function 'fun' passed incorrect number of arguments. Got 1, Expected 2.",
        "fun {a} 1": "Function 'fun' passed incorrect type for argument 1. Got Number, Expected Q-Expression.",
        "fun a {a}": "Unbound Symbol 'a'",
        "fun 1 {a}": "Function 'fun' passed incorrect type for argument 0. Got Number, Expected Q-Expression.",
        "fun {a 1} {a}": "Function 'fun' cannot define non-symbol. Got Number, Expected Symbol.",
    }
    for source, message in cases.items():
        result = interp.eval(source)
        assert isinstance(result, LispError), source
        assert result.message == message


def test_apply_builtin_receives_environment(env):
    seen = []

    def record(e, args):
        seen.append((e, list(args)))
        return Number(len(args))

    result = apply(Builtin("record", record), [Number(1), Number(2)], env, evaluate)
    assert result == Number(2)
    assert seen[0][0] is env


# --- Closure scoping modes ---------------------------------------------------
# Both modes produce identical results for Lisp programs; they differ in what
# happens to the Lambda instance being applied.

def test_fresh_scope_leaves_applied_lambda_untouched(env, add_lambda):
    result = apply_lambda(add_lambda, [Number(1), Number(2)], env, evaluate, ClosureScope.FRESH)
    assert result == Number(3)
    assert add_lambda.formals == QExpr([Symbol("a"), Symbol("b")])
    assert add_lambda.env.vars == {}
    assert add_lambda.env.outer is None


def test_fresh_scope_partial_application(env, add_lambda):
    partial = apply_lambda(add_lambda, [Number(1)], env, evaluate, ClosureScope.FRESH)
    assert isinstance(partial, Lambda)
    assert partial.formals == QExpr([Symbol("b")])
    assert partial.env.vars == {"a": Number(1)}
    assert add_lambda.env.vars == {}

    # the same partial can be completed twice with independent results
    assert apply_lambda(partial, [Number(2)], env, evaluate, ClosureScope.FRESH) == Number(3)
    assert apply_lambda(partial, [Number(5)], env, evaluate, ClosureScope.FRESH) == Number(6)


def test_shared_scope_consumes_applied_lambda(env, add_lambda):
    result = apply_lambda(add_lambda, [Number(1), Number(2)], env, evaluate, ClosureScope.SHARED)
    assert result == Number(3)
    assert add_lambda.formals == QExpr()
    assert add_lambda.env.vars == {"a": Number(1), "b": Number(2)}
    assert add_lambda.env.outer is env


def test_shared_scope_partial_application_returns_copy(env, add_lambda):
    partial = apply_lambda(add_lambda, [Number(1)], env, evaluate, ClosureScope.SHARED)
    assert partial == add_lambda
    assert partial is not add_lambda
    assert add_lambda.env.vars == {"a": Number(1)}
    assert add_lambda.formals == QExpr([Symbol("b")])


def test_shared_scope_instance_cannot_be_called_twice(env, add_lambda):
    apply_lambda(add_lambda, [Number(1), Number(2)], env, evaluate, ClosureScope.SHARED)
    result = apply_lambda(add_lambda, [Number(1), Number(2)], env, evaluate, ClosureScope.SHARED)
    assert result.kind is ErrorKind.TOO_MANY_ARGUMENTS
    assert result.message == "Function passed too many arguments. Got 2, Expected 0."


def test_body_sees_caller_environment():
    caller = Environment()
    fn = Lambda(QExpr([Symbol("a")]), QExpr([Symbol("k")]))
    caller.define_local("k", Number(99))
    assert apply_lambda(fn, [Number(1)], caller, evaluate, ClosureScope.FRESH) == Number(99)
