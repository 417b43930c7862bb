from __future__ import annotations

"""Micro-benchmarks for the word-wise kernels.

These tests rely on the ``pytest-benchmark`` plugin and keep inputs small
(≤ 32 words) so they do not slow down the regular test run.  Run with

```
pytest tests/test_benchmark_micro.py --benchmark-only
```

to print the summary table.  Timings are **not** asserted.
"""

import pytest
pytest.importorskip("pytest_benchmark")

from bigint import BigInteger

WORDS = 32  # operand width for the multi-word kernels


def _sample(words: int = WORDS, seed: int = 0x9E3779B9) -> BigInteger:
    """Deterministic *words*-word operand with no zero words."""
    value = 0
    for i in range(words):
        value = (value << 32) | ((seed * (i + 1)) & 0xFFFFFFFF) | 1
    return BigInteger(value)


def test_addition(benchmark):
    a, b = _sample(), _sample(seed=12345)
    result = benchmark(lambda: a + b)
    assert int(result) == int(a) + int(b)


def test_multiplication(benchmark):
    a, b = _sample(), _sample(seed=12345)
    result = benchmark(lambda: a * b)
    assert int(result) == int(a) * int(b)


def test_division(benchmark):
    a, b = _sample(2 * WORDS), _sample(WORDS // 2, seed=12345)
    q, r = benchmark(lambda: divmod(a, b))
    assert (int(q), int(r)) == divmod(int(a), int(b))


def test_to_string(benchmark):
    a = _sample(8)
    text = benchmark(a.to_string)
    assert text == str(int(a))


def test_copy_is_cheap(benchmark):
    a = _sample(4 * WORDS)
    clone = benchmark(lambda: BigInteger(a))
    assert clone.digits.shares_storage(a.digits)
