"""Shared pytest configuration and Hypothesis strategies."""

from __future__ import annotations

from hypothesis import settings, strategies as st

from bigint import BigInteger
from bigint.config import WORD_BITS, WORD_MASK

# Pure-Python word loops are slow on CI machines – disable per-example deadlines.
settings.register_profile("bigint_no_deadline", deadline=None, max_examples=100)
settings.load_profile("bigint_no_deadline")


def _word_boundaries() -> list[int]:
    """Values whose two's-complement form sits right at a word edge."""
    values = []
    for k in range(1, 5):
        power = 1 << (WORD_BITS * k)
        values += [power, power - 1, power + 1, power // 2, power // 2 - 1]
    values += [-v for v in values]
    return values + [0, 1, -1]


# Mixes random magnitudes up to eight words with the boundary cases above.
ints = st.one_of(
    st.integers(min_value=-(1 << 256), max_value=1 << 256),
    st.sampled_from(_word_boundaries()),
)
nonzero_ints = ints.filter(lambda v: v != 0)


def assert_normalized(x: BigInteger):
    """Check the structural invariants every public result must satisfy."""
    assert x.sign in (0, WORD_MASK)
    assert len(x.digits) >= 1
    if len(x.digits) > 1:
        assert x.digits.back() != x.sign
    assert x.is_zero == (int(x) == 0)
