from __future__ import annotations

"""Deep profiling for core `BigInteger` operations.

This script constructs a synthetic workload that stresses the most
performance-critical kernels (multiplication, long division, decimal
conversion) and emits a *cProfile* statistics file.

Usage (from project root)
-------------------------

    $ python benchmarks/profile_bigint.py --depth 20

The command streams a human-readable table to *stdout* **and** dumps the
profiling database to ``profile_bigint.prof`` which can be inspected
with GUI tools such as *snakeviz* or *tuna*:

    $ snakeviz profile_bigint.prof

The CLI is powered by *tyro* – run with ``--help`` for all options.
"""

import cProfile
import io
import pstats
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter

import tyro  # type: ignore – Third-party CLI library (preferred over argparse)

from bigint import BigInteger


# -----------------------------------------------------------------------------
# Synthetic workload -----------------------------------------------------------
# -----------------------------------------------------------------------------

def _workload(words: int, depth: int) -> None:
    """Compute-bound loop exercising the word kernels."""

    x = (BigInteger(1) << (32 * words)) - 12345
    y = (BigInteger(1) << (16 * words)) + 678

    z = x
    for _ in range(depth):
        # Mix of *, divmod, ^ that keeps operand widths stable ----------------
        q, r = divmod(z * y, x)
        z = (q ^ r) + x

    # Force decimal conversion of the result ----------------------------------
    _ = z.to_string()


# -----------------------------------------------------------------------------
# Command-line interface -------------------------------------------------------
# -----------------------------------------------------------------------------

@dataclass
class Config:
    """Parameters for the profiler."""

    words: int = 16   # width of the modulus-like operand
    depth: int = 10   # Repetition count of the arithmetic block

    # Output ``.prof`` file (cProfile binary format) --------------------------
    output: Path = Path("profile_bigint.prof")


def main(cfg: Config) -> None:  # noqa: D401 – CLI entry-point
    print(f"[profile] words={cfg.words}, depth={cfg.depth}")

    pr = cProfile.Profile()
    pr.enable()

    t0 = perf_counter()
    _workload(cfg.words, cfg.depth)
    t1 = perf_counter()

    pr.disable()

    # 1. Human-readable summary (top-20 by cumulative time) -------------------
    sio = io.StringIO()
    stats = pstats.Stats(pr, stream=sio).sort_stats("cumulative")
    stats.print_stats(20)
    print(sio.getvalue())

    # 2. Dump raw stats for post-mortem inspection ----------------------------
    pr.dump_stats(cfg.output)
    print(f"[profile] written {cfg.output}")
    print(f"[profile] wall-clock: {t1 - t0:.3f} s")


if __name__ == "__main__":
    main(tyro.cli(Config, config=(tyro.conf.FlagConversionOff,)))
