from timeit import timeit

from lispy.config import ClosureScope
from lispy.interpreter import Interpreter
from lispy.runtime_context import set_closure_scope
from lispy.types.environment import Environment
from lispy.types.value import Number

from lispy.reader.reader import read_str
from lispy.evaluation.evaluator import evaluate


def time_interpreter(code: str, rounds: int, scope: ClosureScope, prelude: str | None = None) -> float:
    """Time evaluation only. Parses once; each round evaluates a fresh copy
    of the tree because evaluation consumes it.
    """
    set_closure_scope(scope)
    itp = Interpreter(prelude=prelude)
    expr = read_str(code)
    # Warmup
    evaluate(expr.copy(), itp.env)
    # Timed
    return timeit(lambda: evaluate(expr.copy(), itp.env), number=rounds)


# Environment lookup chain: lookup copies the bound value on the way out

def bench_lookup_chain(n_envs: int = 1000, n_lookups: int = 10000) -> float:
    root = Environment()
    root.define_local("answer", Number(42))
    env = root
    for _ in range(n_envs):
        env = Environment(outer=env)
    # Warmup
    for _ in range(1000):
        env.lookup("answer")
    # Timed
    return timeit(lambda: env.lookup("answer"), number=n_lookups)


LAMBDA_APPLY_CODE = "((fun {x y} {+ x y}) 1 2)"

CURRIED_APPLY_CODE = "(((fun {a b c} {+ a b c}) 1) 2 3)"

PRELUDE = """
(def {compose} (fun {f g x} {f (g x)}))
(def {inc} (fun {n} {+ n 1}))
(def {double} (fun {n} {* n 2}))
"""

HIGHER_ORDER_CODE = "(compose inc double 20)"

LIST_CODE = "(eval (join {+} (tail {0 1 2 3 4 5 6 7 8 9})))"


def _print_pair(name: str, code: str, rounds: int, prelude: str | None = None) -> None:
    tfresh = time_interpreter(code, rounds, ClosureScope.FRESH, prelude)
    tshared = time_interpreter(code, rounds, ClosureScope.SHARED, prelude)
    print(f"Benchmark: {name}")
    print(f"  fresh: {tfresh:.6f}s  |  shared: {tshared:.6f}s  [rounds={rounds}]")


if __name__ == "__main__":
    print("Benchmark: environment lookup chain (pure Python env lookup)")
    print(f"  time: {bench_lookup_chain():.6f}s")

    _print_pair("lambda application", LAMBDA_APPLY_CODE, rounds=20000)
    _print_pair("curried application", CURRIED_APPLY_CODE, rounds=20000)
    _print_pair("higher-order composition", HIGHER_ORDER_CODE, rounds=5000, prelude=PRELUDE)
    _print_pair("list building", LIST_CODE, rounds=5000)
