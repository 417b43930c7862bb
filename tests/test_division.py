import unittest
import warnings

from hypothesis import given, strategies as st

from bigint import BigInteger, DivisionByZeroError
from bigint import config

WORD = 2**32


class TestLongDivision(unittest.TestCase):
    def setUp(self):
        self._limit = config.MAX_QUOTIENT_CORRECTIONS

    def tearDown(self):
        config.set_max_quotient_corrections(self._limit)

    def test_single_word_divisor(self):
        q, r = divmod(BigInteger(10**30), BigInteger(7))
        self.assertEqual((int(q), int(r)), divmod(10**30, 7))

    def test_divisor_larger_than_dividend(self):
        q, r = divmod(BigInteger(-12345), BigInteger(2**100))
        self.assertEqual(q, 0)
        self.assertEqual(r, -12345)

    def test_signs_follow_truncation(self):
        for a, b, q, r in [(7, 2, 3, 1), (-7, 2, -3, -1), (7, -2, -3, 1), (-7, -2, 3, -1)]:
            self.assertEqual(BigInteger(a) / b, q)
            self.assertEqual(BigInteger(a) % b, r)

    def test_divisor_top_word_all_ones(self):
        # norm == 1 and every estimate hits the WORD_MASK clamp
        a = WORD**6 - 1
        b = WORD**3 - 1
        q, r = divmod(BigInteger(a), BigInteger(b))
        self.assertEqual((int(q), int(r)), divmod(a, b))

    def test_zero_divisor_is_rejected_before_dividing(self):
        with self.assertRaises(DivisionByZeroError):
            BigInteger(2**90).divmod(0)

    def test_correction_beyond_limit_warns(self):
        # estimate 2**31 // 2**31 == 1 overshoots by one for this pair
        a = 2**95
        b = 2**63 + 2**32 - 1
        config.set_max_quotient_corrections(0)
        with self.assertWarns(RuntimeWarning):
            q, r = divmod(BigInteger(a), BigInteger(b))
        self.assertEqual((int(q), int(r)), divmod(a, b))

    def test_negative_limit_is_rejected(self):
        with self.assertRaises(ValueError):
            config.set_max_quotient_corrections(-1)


# Divisor shapes that stress the quotient estimate: top word just above or
# below WORD/2, long runs of all-ones words, powers of the word base.
adversarial_divisors = st.builds(
    lambda k, top, low: top * WORD**k + low,
    st.integers(min_value=0, max_value=4),
    st.sampled_from([1, 2, WORD // 2 - 1, WORD // 2, WORD // 2 + 1, WORD - 1]),
    st.sampled_from([0, 1, WORD - 1, WORD**2 - 1, WORD**3 - 1]),
).filter(lambda v: v != 0)
dividends = st.integers(min_value=0, max_value=WORD**10)


@given(dividends, adversarial_divisors, st.booleans(), st.booleans())
def test_correction_loop_stays_within_two_steps(a, b, negate_a, negate_b):
    a = -a if negate_a else a
    b = -b if negate_b else b
    with warnings.catch_warnings():
        warnings.simplefilter("error", RuntimeWarning)
        q, r = divmod(BigInteger(a), BigInteger(b))
    assert a == int(q) * b + int(r)
    assert abs(int(r)) < abs(b)


if __name__ == "__main__":
    unittest.main()
