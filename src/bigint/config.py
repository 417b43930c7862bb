"""Global configuration for *bigint*.

This module centralises the word geometry shared by the storage layer
(:mod:`bigint.digits`) and the arithmetic layer (:mod:`bigint.big_integer`),
plus the one runtime knob of the division kernel.

Word geometry
-------------
A :class:`~bigint.BigInteger` is a little-endian sequence of fixed-width
unsigned *words* stored in a numpy array of dtype :data:`WORD_DTYPE`.  Every
intermediate result of the word-wise algorithms fits into two words, so the
kernels can use plain Python integers for the double-width products and mask
back down with :data:`WORD_MASK`.

The geometry is **not** meant to be changed at runtime – existing values
would silently change meaning.

Quotient correction
-------------------
Long division estimates each quotient word from the top two words of the
running remainder.  After normalisation the estimate overshoots by at most
two (Knuth, TAOCP vol. 2, 4.3.1, Theorem B), so the correction loop should
never run more than :data:`MAX_QUOTIENT_CORRECTIONS` times.  Exceeding the
bound is reported with a :class:`RuntimeWarning`.
"""

from __future__ import annotations

import numpy as np

__all__ = [
    "WORD_DTYPE",
    "WORD_BITS",
    "WORD_BASE",
    "WORD_MASK",
    "INITIAL_CAPACITY",
    "MAX_QUOTIENT_CORRECTIONS",
    "set_max_quotient_corrections",
]

# -----------------------------------------------------------------------------
# Word geometry
# -----------------------------------------------------------------------------

WORD_DTYPE = np.uint32
WORD_BITS: int = np.iinfo(WORD_DTYPE).bits
WORD_BASE: int = 1 << WORD_BITS
WORD_MASK: int = WORD_BASE - 1

# first capacity of a shared buffer – enough for most two-word results
INITIAL_CAPACITY: int = 4

# -----------------------------------------------------------------------------
# Division kernel
# -----------------------------------------------------------------------------

MAX_QUOTIENT_CORRECTIONS: int = 2


def set_max_quotient_corrections(limit: int):
    """Change the warning threshold of the quotient correction loop *in-place*.

    The loop itself is unaffected – it always runs until the remainder is
    non-negative.  Only the point at which a :class:`RuntimeWarning` is
    emitted moves.
    """
    global MAX_QUOTIENT_CORRECTIONS
    if limit < 0:
        raise ValueError("Correction limit must be non-negative.")
    MAX_QUOTIENT_CORRECTIONS = limit
