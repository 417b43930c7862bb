from __future__ import annotations

"""Micro benchmarks for individual `BigInteger` operations.

This harness relies on *torch.utils.benchmark.Timer* which gives
 statistically sound timings (median, inter-quartile range) for arbitrary
 Python statements – the kernels themselves do not touch torch.

Run standalone:

    $ python benchmarks/micro_bench.py --words 64

Run inside pytest (records to history & compares):

    $ pytest -q tests/test_benchmark_micro.py
"""

from dataclasses import dataclass
from random import Random
from typing import List

import torch
import tyro  # type: ignore – project guideline
from torch.utils.benchmark import Timer

from bigint import BigInteger


# -----------------------------------------------------------------------------
# Benchmark entries ------------------------------------------------------------
# -----------------------------------------------------------------------------

@dataclass
class Entry:
    name: str
    stmt: str


def _setup(words: int, seed: int) -> dict[str, object]:
    """Return a dict to be injected into Timer globals."""
    rng = Random(seed)
    x = rng.getrandbits(32 * words) | 1
    y = rng.getrandbits(16 * words) | 1

    xb = BigInteger(x)
    yb = BigInteger(y)
    text = str(x)

    return dict(BigInteger=BigInteger, xb=xb, yb=yb, text=text)


BENCHES: List[Entry] = [
    Entry("copy", "BigInteger(xb)"),
    Entry("add", "xb + yb"),
    Entry("sub", "xb - yb"),
    Entry("mul", "xb * yb"),
    Entry("divmod", "divmod(xb, yb)"),
    Entry("and", "xb & yb"),
    Entry("shl", "xb << 77"),
    Entry("shr", "xb >> 77"),
    Entry("compare", "xb < yb"),
    Entry("to_string", "xb.to_string()"),
    Entry("from_string", "BigInteger.from_string(text)"),
]


@dataclass
class Config:
    words: int = 32  # width of the larger operand in 32-bit words
    seed: int = 0
    repeats: int = 50


def main(cfg: Config) -> None:  # noqa: D401 – CLI entry
    print(f"[micro] words={cfg.words}  seed={cfg.seed}  repeats={cfg.repeats}\n")

    setup_globals = _setup(cfg.words, cfg.seed)

    rows: List[tuple[str, float]] = []

    for entry in BENCHES:
        t = Timer(stmt=entry.stmt, globals=setup_globals, num_threads=torch.get_num_threads())
        median = t.timeit(cfg.repeats).median
        rows.append((entry.name, median))

    # Pretty print ------------------------------------------------------------
    name_w = max(len(r[0]) for r in rows)
    print("Operation".ljust(name_w), "|  median time (s)")
    print("-" * (name_w + 20))
    for name, med in rows:
        print(name.ljust(name_w), f"|  {med:9.6f}")


if __name__ == "__main__":
    main(tyro.cli(Config, config=(tyro.conf.FlagConversionOff,)))
