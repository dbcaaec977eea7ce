"""
dp.py — Fibonacci table steps
===============================
One row of memo cells F(0)…F(min(n, 10)).  Each step fills the next
slice of the table with the real values; cells not yet computed show
"?".  When F(i) is filled, edges from F(i-1) and F(i-2) point at it.
n above MAX_N is rejected with ValueError.
"""

from typing import List

from algorithms import Operation
from algorithms.step import Step, StepBuilder, line_of


SUPPORTED = {"fibonacci"}

STEP_COUNT   = 8
MAX_CELLS    = 10
MAX_N        = 1000
CELL_SPACING = 60


FIBONACCI_CODE = """// Recursive implementation of Fibonacci
int fibonacci(int n) {
  if (n <= 0) return 0;
  if (n == 1) return 1;
  return fibonacci(n-1) + fibonacci(n-2);
}

// Dynamic Programming implementation
int fibonacciDP(int n) {
  std::vector<int> memo(n+1, 0);
  memo[0] = 0;
  memo[1] = 1;
  for (int i = 2; i <= n; i++) {
    memo[i] = memo[i-1] + memo[i-2];
  }
  return memo[n];
}"""

LINE_BASE_0  = line_of(FIBONACCI_CODE, "memo[0] = 0;")
LINE_BASE_1  = line_of(FIBONACCI_CODE, "memo[1] = 1;")
LINE_FILL    = line_of(FIBONACCI_CODE, "memo[i] = memo[i-1] + memo[i-2];")
LINE_RESULT  = line_of(FIBONACCI_CODE, "return memo[n];")


def fibonacci_table(n: int) -> List[int]:
    memo = [0, 1]
    for i in range(2, n + 1):
        memo.append(memo[i - 1] + memo[i - 2])
    return memo[: n + 1]


def generate(operation: Operation, value: float, total: int = STEP_COUNT) -> List[Step]:
    n = max(0, int(value))
    if n > MAX_N:
        raise ValueError(f"n={n} is above the largest supported Fibonacci index {MAX_N}")
    shown = min(n, MAX_CELLS)
    memo = fibonacci_table(shown)
    headers = [f"F({i})" for i in range(shown + 1)]

    steps = []
    for s in range(total):
        # last filled cell at this step; the final step fills the whole row
        filled = (s + 1) * shown // total

        sb = StepBuilder(code=FIBONACCI_CODE)
        for i in range(shown + 1):
            sb.add_node(
                f"fib-{i}",
                memo[i] if i <= filled else "?",
                100 + i * CELL_SPACING,
                150,
                highlighted=i == filled,
            )
        if filled >= 2:
            sb.add_edge(f"fib-{filled - 1}", f"fib-{filled}", highlighted=True)
            sb.add_edge(f"fib-{filled - 2}", f"fib-{filled}", highlighted=True)

        sb.aux_data["headers"] = headers
        sb.aux_data["n"] = n
        if s == total - 1:
            sb.aux_data["result"] = fibonacci_table(n)[n]
            sb.message = f"Step {s + 1}: Fibonacci({n}) = {sb.aux_data['result']}"
            sb.highlight_lines = [LINE_RESULT]
        else:
            sb.message = f"Step {s + 1}: Calculating Fibonacci({filled})"
            if filled == 0:
                sb.highlight_lines = [LINE_BASE_0]
            elif filled == 1:
                sb.highlight_lines = [LINE_BASE_1]
            else:
                sb.highlight_lines = [LINE_FILL]

        verb = "Optimizing" if operation == Operation.OPTIMIZE else "Computing"
        sb.description = f"{verb} Fibonacci({filled})"
        steps.append(sb.build(step=s + 1, total_steps=total))
    return steps
