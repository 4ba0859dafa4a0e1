from timeit import timeit

from simplex.interpreter import Interpreter
from simplex.reader.parser import parse
from simplex.types.environment import Environment
from simplex.types.value import Value


def time_interpreter(code: str, rounds: int, prelude=None) -> float:
    """Time the evaluator alone: parse once and repeatedly evaluate the same tree."""
    itp = Interpreter(prelude=prelude)
    program = parse(code)
    # Warmup
    itp.evaluator.eval_node(program)
    # Timed
    return timeit(lambda: itp.evaluator.eval_node(program), number=rounds)


def time_parser(code: str, rounds: int) -> float:
    return timeit(lambda: parse(code), number=rounds)


# Environment lookup chain (does not involve the evaluator)

def bench_lookup_chain(n_envs: int = 1000, n_lookups: int = 10000) -> float:
    # Build an environment chain with a binding at the root
    root = Environment()
    root.define("answer", Value.integer(42))
    env = root
    for _ in range(n_envs):
        env = Environment(outer=env)
    # Warmup
    for _ in range(1000):
        env.get("answer")
    # Timed
    return timeit(lambda: env.get("answer"), number=n_lookups)


LAMBDA_APPLY_CODE = "((lambda x y (+ x y)) 1 2)"

# Each level of recursion costs several Python frames, so keep the depth modest
FACTORIAL_CODE = r"""
(let fact (lambda n acc
  (if (< n 2)
    acc
    (fact (- n 1) (* n acc)))))
(fact 20 1)
"""

ARITH_SUM_CODE = r"""
(let sum-n (lambda n acc
  (if (< n 1)
    acc
    (sum-n (- n 1) (+ acc n)))))
(sum-n 50 0)
"""

LIST_CODE = r"""
(length (map (lambda x (* x x)) (filter (lambda x (> x 2)) (list 1 2 3 4 5 6 7 8 9 10))))
"""


def _print_timing(name: str, code: str, rounds: int, prelude=None) -> None:
    tparse = time_parser(code, rounds)
    tint = time_interpreter(code, rounds, prelude)
    print(f"Benchmark: {name}")
    print(f"  parse: {tparse:.6f}s  |  evaluate: {tint:.6f}s  [rounds={rounds}]")


if __name__ == "__main__":
    # Pure environment benchmark
    print("Benchmark: environment lookup chain (pure Python env lookup)")
    print(f"  time: {bench_lookup_chain():.6f}s")

    _print_timing("lambda application", LAMBDA_APPLY_CODE, rounds=20000)
    _print_timing("recursion (factorial)", FACTORIAL_CODE, rounds=500)
    _print_timing("arithmetic sum 1..50", ARITH_SUM_CODE, rounds=1000)
    _print_timing("bootstrap list functions", LIST_CODE, rounds=200, prelude='auto')
