# SPDX-License-Identifier: MIT
"""bigint – arbitrary-precision signed integers on copy-on-write word storage.

The package provides :class:`BigInteger`, an infinite-precision
two's-complement integer built from fixed-width numpy words, and the storage
it relies on, :class:`DigitSequence` – a growable word sequence that keeps a
single element inline and shares larger buffers between copies until one of
them is written.

>>> from bigint import BigInteger
>>> BigInteger(1000000000) * BigInteger(1000000000)
BigInteger('1000000000000000000')
>>> BigInteger("-7") / 2, BigInteger("-7") % 2
(BigInteger('-3'), BigInteger('-1'))
"""

from __future__ import annotations

from .big_integer import BigInteger
from .digits import DigitSequence
from .errors import DivisionByZeroError, MalformedNumeralError

__all__ = [
    "BigInteger",
    "DigitSequence",
    # errors
    "DivisionByZeroError",
    "MalformedNumeralError",
]
