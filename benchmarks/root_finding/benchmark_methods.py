"""Benchmark the bracketed root finders.

Compares the number of function evaluations and the wall time of every
method on a small set of classic test problems, plus the throughput of
batched solves across batch sizes.
"""

import math
import time

import torch

from bracketroot import available_methods, root_scalar, root_scalar_batched

PROBLEMS = {
    "x^3 - x - 2": (lambda x: x**3 - x - 2, 1.0, 2.0),
    "cos(x) - x": (lambda x: math.cos(x) - x, 0.0, 1.0),
    "exp(x) - 10": (lambda x: math.exp(x) - 10.0, 0.0, 5.0),
    "(x - 1)^5": (lambda x: (x - 1.0) ** 5, 0.0, 3.0),
    "x^20 - 1": (lambda x: x**20 - 1.0, 0.0, 1.5),
}


def benchmark_method(
    method: str,
    problem: str,
    n_iterations: int = 200,
    rtol: float = 1e-10,
) -> tuple:
    """Benchmark one method on one problem.

    Parameters
    ----------
    method : str
        Method identifier.
    problem : str
        Key into ``PROBLEMS``.
    n_iterations : int
        Number of solves for timing.
    rtol : float
        Relative tolerance passed to the solver.

    Returns
    -------
    tuple
        ``(num_function_calls, status, microseconds per solve)``.
    """
    f, a, b = PROBLEMS[problem]

    # Warmup
    result = root_scalar(method, f, a, b, rtol=rtol)

    start = time.perf_counter()
    for _ in range(n_iterations):
        root_scalar(method, f, a, b, rtol=rtol)
    elapsed = time.perf_counter() - start

    us = elapsed / n_iterations * 1e6
    return result.num_function_calls, result.status, us


def benchmark_batched(
    batch_size: int,
    method: str = "chandrupatla",
    n_iterations: int = 5,
) -> float:
    """Benchmark a batched solve of ``x^2 - c`` for ``batch_size`` values.

    Returns
    -------
    float
        Average time per batched solve in milliseconds.
    """
    c = torch.linspace(1.0, 100.0, batch_size, dtype=torch.float64)
    a = torch.zeros(batch_size, dtype=torch.float64)
    b = torch.full((batch_size,), 10.0, dtype=torch.float64)
    f = lambda x: x**2 - c

    # Warmup
    _ = root_scalar_batched(method, f, a, b)

    start = time.perf_counter()
    for _ in range(n_iterations):
        _ = root_scalar_batched(method, f, a, b)
    elapsed = time.perf_counter() - start
    return elapsed / n_iterations * 1000  # ms


def main():
    """Run the benchmarks."""
    print("Bracketed Root Finding Benchmark")
    print("=" * 70)

    for problem in PROBLEMS:
        print(f"\n{problem}")
        print(f"{'Method':>16} {'Calls':>8} {'Status':>24} {'Time (us)':>12}")
        print("-" * 70)
        for method in available_methods():
            calls, status, us = benchmark_method(method, problem)
            print(f"{method:>16} {calls:>8} {status.name:>24} {us:>12.2f}")

    print()
    print("Batched chandrupatla on x^2 - c")
    print("-" * 70)
    print(f"{'Batch':>8} {'Time (ms)':>14} {'Per element (us)':>18}")
    for batch_size in [1, 10, 100, 1000]:
        ms = benchmark_batched(batch_size)
        print(f"{batch_size:>8} {ms:>14.3f} {ms * 1000 / batch_size:>18.3f}")

    print()
    print("Notes:")
    print("- Calls include the two endpoint evaluations")
    print("- Batched solves evaluate f once per round for the whole batch")


if __name__ == "__main__":
    main()
