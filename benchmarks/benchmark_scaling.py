"""Scaling benchmarks for BigInteger kernels.

This module times the word-wise kernels against Python's built-in ``int`` for
growing operand widths and plots both curves with plotly.  Schoolbook
multiplication and long division should show quadratic growth, addition and
the bitwise kernels linear growth.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from random import Random
from typing import Callable, List

import numpy as np
import plotly.graph_objects as go

from bigint import BigInteger

@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    name: str
    widths: List[int]  # operand width in 32-bit words
    bigint_times: List[float]  # BigInteger, seconds per call
    int_times: List[float]  # built-in int, seconds per call

def time_fn(fn: Callable[[], object], n_runs: int) -> float:
    """Median wall-clock time of *n_runs* calls."""
    samples = []
    for _ in range(n_runs):
        start = time.perf_counter()
        fn()
        samples.append(time.perf_counter() - start)
    return float(np.median(samples))

def benchmark_operation(
    name: str,
    op: Callable[[object, object], object],
    widths: List[int],
    n_runs: int = 5,
    seed: int = 0,
) -> BenchmarkResult:
    """Benchmark a binary operation on BigInteger and on int.

    Parameters
    ----------
    name : str
        Label used in the plots.
    op : callable
        Binary operation, applied to two BigIntegers and to two ints.
    widths : list of int
        Width of the left operand in words; the right operand has half as many.
    n_runs : int, optional
        Number of runs the median is taken over.
    seed : int, optional
        Seed of the operand generator.

    Returns
    -------
    BenchmarkResult
        Median timings per width.
    """
    rng = Random(seed)
    bigint_times = []
    int_times = []

    for width in widths:
        x = rng.getrandbits(32 * width) | 1
        y = rng.getrandbits(16 * width) | 1
        xb, yb = BigInteger(x), BigInteger(y)
        bigint_times.append(time_fn(lambda: op(xb, yb), n_runs))
        int_times.append(time_fn(lambda: op(x, y), n_runs))

    return BenchmarkResult(name=name, widths=widths, bigint_times=bigint_times, int_times=int_times)

def plot_results(results: List[BenchmarkResult], output_dir: Path):
    """Plot benchmark results using plotly."""
    output_dir.mkdir(parents=True, exist_ok=True)

    fig = go.Figure()
    for result in results:
        fig.add_trace(go.Scatter(
            x=result.widths,
            y=result.bigint_times,
            name=f"{result.name} (BigInteger)",
            mode='lines+markers'
        ))
        fig.add_trace(go.Scatter(
            x=result.widths,
            y=result.int_times,
            name=f"{result.name} (int)",
            mode='lines+markers'
        ))

    fig.update_layout(
        title="Time Comparison: BigInteger vs built-in int",
        xaxis_title="Operand width (words)",
        yaxis_title="Time (seconds)",
        xaxis_type="log",
        yaxis_type="log"
    )
    fig.write_html(output_dir / "time_comparison.html")

OPERATIONS = {
    "add": lambda a, b: a + b,
    "mul": lambda a, b: a * b,
    "divmod": divmod,
    "xor": lambda a, b: a ^ b,
    "shl": lambda a, b: a << 1000,
}

if __name__ == "__main__":
    widths = [2**i for i in range(1, 8)]  # From 2 to 128 words
    output_dir = Path("benchmark_results")

    results = []
    for name, op in OPERATIONS.items():
        print(f"Benchmarking {name}...")
        results.append(benchmark_operation(name, op, widths))

    plot_results(results, output_dir)
