"""Arbitrary-precision signed integers on top of :class:`DigitSequence`.

Representation
--------------
A :class:`BigInteger` is a *finite prefix + infinite suffix* of words:

* ``digits`` – little-endian words of the two's-complement value;
* ``sign``   – ``0`` for non-negative and ``WORD_MASK`` for negative numbers.
  Conceptually every word past the end of ``digits`` equals ``sign``.

The number is kept in *normalized form*: the most significant stored word
differs from ``sign`` unless it is the only one left.  Normalization keeps
the storage proportional to the magnitude and turns equality into a plain
structural comparison.

Every word-wise algorithm reads through :meth:`BigInteger.get_digit` (or its
vectorised sibling :meth:`BigInteger._padded`) and therefore never has to
care where the stored prefix ends – bitwise operations and shifts behave
exactly like operations on an unbounded two's-complement machine word.

The public operators are purely functional: they return new objects and
never mutate their operands.  Internally results are built with in-place
kernels on fresh copies, which is cheap because copies share their digit
buffer until the first write.
"""

from __future__ import annotations

import operator
import warnings
from typing import Callable, Tuple, Union

import numpy as np

from . import config
from .config import WORD_BASE, WORD_BITS, WORD_DTYPE, WORD_MASK
from .digits import DigitSequence
from .errors import DivisionByZeroError, MalformedNumeralError

__all__ = ["BigInteger"]

IntLike = Union[int, np.integer, "BigInteger"]

_DECIMAL_DIGITS = frozenset("0123456789")


class BigInteger:
    """Signed integer of unbounded magnitude.

    Parameters
    ----------
    value:
        A Python integer (any magnitude, numpy integers included), a decimal
        numeral with an optional leading ``-``, or another
        :class:`BigInteger`.  Defaults to zero.
    """

    __slots__ = ("sign", "digits")

    def __init__(self, value: Union[IntLike, str] = 0):
        if isinstance(value, BigInteger):
            self.sign = value.sign
            self.digits = value.digits.copy()
        elif isinstance(value, str):
            parsed = BigInteger.from_string(value)
            self.sign = parsed.sign
            self.digits = parsed.digits
        else:
            try:
                number = operator.index(value)
            except TypeError:
                raise TypeError(f"Cannot build BigInteger from {type(value).__name__}") from None
            self._assign_int(number)

    def _assign_int(self, number: int):
        self.sign = WORD_MASK if number < 0 else 0
        self.digits = DigitSequence(number & WORD_MASK)
        extension = -1 if self.sign else 0
        number >>= WORD_BITS
        while number != extension:
            self.digits.push_back(number & WORD_MASK)
            number >>= WORD_BITS
        self._cut()

    @classmethod
    def _from_parts(cls, sign: int, digits: DigitSequence) -> "BigInteger":
        """Wrap *digits* (taking ownership) and normalize."""
        result = cls.__new__(cls)
        result.sign = sign
        result.digits = digits
        result._cut()
        return result

    def copy(self) -> "BigInteger":
        result = BigInteger.__new__(BigInteger)
        result.sign = self.sign
        result.digits = self.digits.copy()
        return result

    __copy__ = copy

    def __deepcopy__(self, memo) -> "BigInteger":
        result = self.copy()
        result.digits = self.digits.__deepcopy__(memo)
        return result

    # ------------------------------------------------------------------
    # Decimal conversion
    # ------------------------------------------------------------------

    @classmethod
    def from_string(cls, text: str) -> "BigInteger":
        """Parse a decimal numeral with an optional leading ``-``.

        Raises
        ------
        MalformedNumeralError
            If *text* is empty, is a lone ``-`` or contains any character
            other than ASCII ``0-9`` after the optional sign.
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")
        negative = text.startswith("-")
        start = 1 if negative else 0
        if start == len(text):
            raise MalformedNumeralError(text)
        result = cls()
        for position in range(start, len(text)):
            char = text[position]
            if char not in _DECIMAL_DIGITS:
                raise MalformedNumeralError(text, position)
            result = result._mul_word(10)
            result._iadd_word(ord(char) - ord("0"))
        if negative:
            result._negate()
        return result

    def to_string(self) -> str:
        """Canonical decimal form: no leading zeros, ``-`` iff negative."""
        magnitude = abs(self)
        chars = []
        while True:
            magnitude, digit = magnitude._divmod_word(10)
            chars.append(chr(ord("0") + digit))
            if magnitude.is_zero:
                break
        if self.sign:
            chars.append("-")
        return "".join(reversed(chars))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigInteger('{self.to_string()}')"

    # ------------------------------------------------------------------
    # Normalization & sign-extended reads
    # ------------------------------------------------------------------

    def get_digit(self, index: int) -> int:
        """Word *index* of the infinite two's-complement expansion."""
        return self.digits[index] if index < len(self.digits) else self.sign

    def _padded(self, width: int) -> np.ndarray:
        """The first *width* words of the expansion as a fresh numpy array."""
        words = np.full(width, self.sign, dtype=WORD_DTYPE)
        stored = self.digits.to_numpy()[:width]
        words[: len(stored)] = stored
        return words

    def _cut(self):
        digits = self.digits
        while len(digits) > 1 and digits.back() == self.sign:
            digits.pop_back()

    @property
    def is_zero(self) -> bool:
        return self.sign == 0 and len(self.digits) == 1 and self.digits[0] == 0

    @property
    def is_negative(self) -> bool:
        return self.sign != 0

    # ------------------------------------------------------------------
    # In-place kernels (only ever applied to freshly owned values)
    # ------------------------------------------------------------------

    def _iadd(self, other: "BigInteger") -> "BigInteger":
        digits = self.digits
        # two words of headroom so the carry never escapes before _cut()
        width = max(len(digits), len(other.digits)) + 2
        digits.resize(width, self.sign)
        carry = 0
        for i in range(width):
            total = digits[i] + other.get_digit(i) + carry
            digits[i] = total & WORD_MASK
            carry = total >> WORD_BITS
        self.sign = digits.back()
        self._cut()
        return self

    def _iadd_word(self, word: int) -> "BigInteger":
        digits = self.digits
        width = len(digits) + 2
        digits.resize(width, self.sign)
        carry = word
        for i in range(width):
            if not carry:
                break
            total = digits[i] + carry
            digits[i] = total & WORD_MASK
            carry = total >> WORD_BITS
        self.sign = digits.back()
        self._cut()
        return self

    def _invert(self) -> "BigInteger":
        self.digits = DigitSequence.from_numpy(np.invert(self.digits.to_numpy()))
        self.sign ^= WORD_MASK
        return self

    def _negate(self) -> "BigInteger":
        return self._invert()._iadd_word(1)

    def _mul_word(self, word: int) -> "BigInteger":
        """Non-negative ``self`` times a single word, as a new value."""
        digits = self.digits.copy()
        carry = 0
        for i in range(len(digits)):
            product = digits[i] * word + carry
            digits[i] = product & WORD_MASK
            carry = product >> WORD_BITS
        if carry:
            digits.push_back(carry)
        return BigInteger._from_parts(0, digits)

    def _divmod_word(self, word: int) -> Tuple["BigInteger", int]:
        """Non-negative ``self`` divided by a single non-zero word."""
        digits = self.digits.copy()
        carry = 0
        for i in reversed(range(len(digits))):
            digits[i], carry = divmod(carry << WORD_BITS | digits[i], word)
        return BigInteger._from_parts(0, digits), carry

    def _ishl(self, amount: int) -> "BigInteger":
        if amount == 0:
            return self
        whole, bits = divmod(amount, WORD_BITS)
        digits = self.digits
        digits.push_front(0, whole)
        digits.push_back(self.sign)
        if bits:
            carry = 0
            for i in range(len(digits)):
                word = digits[i]
                digits[i] = (word << bits) & WORD_MASK | carry
                carry = word >> (WORD_BITS - bits)
        self._cut()
        return self

    def _ishr(self, amount: int) -> "BigInteger":
        whole, bits = divmod(amount, WORD_BITS)
        digits = self.digits
        if whole >= len(digits):
            # every stored word shifted out; only the extension remains
            self.digits = DigitSequence(self.sign)
            return self
        digits.pop_front(whole)
        if bits:
            carry = self.sign
            low_mask = (1 << bits) - 1
            for i in reversed(range(len(digits))):
                word = digits[i]
                digits[i] = (carry << (WORD_BITS - bits)) & WORD_MASK | word >> bits
                carry = word & low_mask
        self._cut()
        return self

    # ------------------------------------------------------------------
    # Binary operation plumbing
    # ------------------------------------------------------------------

    @staticmethod
    def _coerce(value: object):
        if isinstance(value, BigInteger):
            return value
        if isinstance(value, (int, np.integer)):
            return BigInteger(value)
        return NotImplemented

    def _binary_op(self, other: object, op: Callable[["BigInteger", "BigInteger"], object]):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return op(self, other)

    def _reflected_op(self, other: object, op: Callable[["BigInteger", "BigInteger"], object]):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return op(other, self)

    # ------------------------------------------------------------------
    # Additive operations
    # ------------------------------------------------------------------

    @staticmethod
    def _add(a: "BigInteger", b: "BigInteger") -> "BigInteger":
        return a.copy()._iadd(b)

    @staticmethod
    def _sub(a: "BigInteger", b: "BigInteger") -> "BigInteger":
        return a.copy()._iadd(-b)

    def __add__(self, other: IntLike) -> "BigInteger":
        return self._binary_op(other, self._add)

    def __radd__(self, other: IntLike) -> "BigInteger":
        return self._reflected_op(other, self._add)

    def __sub__(self, other: IntLike) -> "BigInteger":
        return self._binary_op(other, self._sub)

    def __rsub__(self, other: IntLike) -> "BigInteger":
        return self._reflected_op(other, self._sub)

    def __neg__(self) -> "BigInteger":
        return self.copy()._negate()

    def __pos__(self) -> "BigInteger":
        return self.copy()

    def __abs__(self) -> "BigInteger":
        return -self if self.sign else self.copy()

    # ------------------------------------------------------------------
    # Multiplication
    # ------------------------------------------------------------------

    @staticmethod
    def _mul(a: "BigInteger", b: "BigInteger") -> "BigInteger":
        negative = a.sign ^ b.sign
        short, long = abs(a), abs(b)
        if len(short.digits) > len(long.digits):
            short, long = long, short
        result = BigInteger()
        # shifting by one word per step == prepending a zero word
        for word in short.digits:
            if word:
                result._iadd(long._mul_word(word))
            long.digits.push_front(0)
        if negative:
            result._negate()
        return result

    def __mul__(self, other: IntLike) -> "BigInteger":
        return self._binary_op(other, self._mul)

    def __rmul__(self, other: IntLike) -> "BigInteger":
        return self._reflected_op(other, self._mul)

    def __pow__(self, exponent: int, modulo=None) -> "BigInteger":
        if modulo is not None:
            return NotImplemented
        try:
            k = operator.index(exponent)
        except TypeError:
            return NotImplemented
        if k < 0:
            raise ValueError("BigInteger exponent must be non-negative")
        # exponentiation by squaring
        result = BigInteger(1)
        base = self
        while k > 0:
            if k & 1:
                result = result * base
            k >>= 1
            if k:
                base = base * base
        return result

    def __rpow__(self, base: IntLike) -> "BigInteger":
        base = self._coerce(base)
        if base is NotImplemented:
            return NotImplemented
        return base ** self

    # ------------------------------------------------------------------
    # Truncating division
    # ------------------------------------------------------------------

    def divmod(self, other: IntLike) -> Tuple["BigInteger", "BigInteger"]:
        """Truncating division: ``(q, r)`` with ``q * other + r == self``.

        The quotient is rounded toward zero and a non-zero remainder takes the
        sign of the dividend (``-7 / 2 == -3``, ``-7 % 2 == -1``).

        Raises
        ------
        DivisionByZeroError
            If *other* is zero.
        """
        divisor = self._coerce(other)
        if divisor is NotImplemented:
            raise TypeError(f"Cannot divide BigInteger by {type(other).__name__}")
        return self._divmod(self, divisor)

    @staticmethod
    def _divmod(a: "BigInteger", b: "BigInteger") -> Tuple["BigInteger", "BigInteger"]:
        if b.is_zero:
            raise DivisionByZeroError("BigInteger division by zero")
        quotient_negative = a.sign != b.sign
        remainder_negative = a.sign != 0

        # Scale both operands so the divisor's top word is at least
        # WORD_BASE / 2; the quotient is unchanged, the remainder scales.
        b_abs = abs(b)
        norm = WORD_BASE // (b_abs.digits.back() + 1)
        dividend = abs(a)._mul_word(norm)
        divisor = b_abs._mul_word(norm)
        width = len(divisor.digits)
        top = divisor.digits.back()

        quotient = DigitSequence(0)
        quotient.resize(len(dividend.digits), 0)
        remainder = BigInteger()
        for i in reversed(range(len(dividend.digits))):
            remainder.digits.push_front(0)
            remainder._iadd_word(dividend.digits[i])
            head = remainder.get_digit(width) << WORD_BITS | remainder.get_digit(width - 1)
            estimate = min(head // top, WORD_MASK)
            remainder._iadd(-divisor._mul_word(estimate))
            corrections = 0
            while remainder.sign:
                remainder._iadd(divisor)
                estimate -= 1
                corrections += 1
            if corrections > config.MAX_QUOTIENT_CORRECTIONS:
                warnings.warn(
                    f"Quotient digit needed {corrections} corrections "
                    f"(limit {config.MAX_QUOTIENT_CORRECTIONS})",
                    RuntimeWarning,
                    stacklevel=2,
                )
            quotient[i] = estimate

        q = BigInteger._from_parts(0, quotient)
        if quotient_negative:
            q._negate()
        r, _ = remainder._divmod_word(norm)
        if remainder_negative:
            r._negate()
        return q, r

    def __truediv__(self, other: IntLike) -> "BigInteger":
        return self._binary_op(other, lambda a, b: self._divmod(a, b)[0])

    def __rtruediv__(self, other: IntLike) -> "BigInteger":
        return self._reflected_op(other, lambda a, b: self._divmod(a, b)[0])

    def __mod__(self, other: IntLike) -> "BigInteger":
        return self._binary_op(other, lambda a, b: self._divmod(a, b)[1])

    def __rmod__(self, other: IntLike) -> "BigInteger":
        return self._reflected_op(other, lambda a, b: self._divmod(a, b)[1])

    def __divmod__(self, other: IntLike):
        return self._binary_op(other, self._divmod)

    def __rdivmod__(self, other: IntLike):
        return self._reflected_op(other, self._divmod)

    # ------------------------------------------------------------------
    # Bitwise operations
    # ------------------------------------------------------------------

    @staticmethod
    def _bitwise(a: "BigInteger", b: "BigInteger", ufunc: np.ufunc, sign_op: Callable[[int, int], int]) -> "BigInteger":
        width = max(len(a.digits), len(b.digits))
        words = ufunc(a._padded(width), b._padded(width))
        return BigInteger._from_parts(sign_op(a.sign, b.sign), DigitSequence.from_numpy(words))

    @staticmethod
    def _and(a: "BigInteger", b: "BigInteger") -> "BigInteger":
        return BigInteger._bitwise(a, b, np.bitwise_and, operator.and_)

    @staticmethod
    def _or(a: "BigInteger", b: "BigInteger") -> "BigInteger":
        return BigInteger._bitwise(a, b, np.bitwise_or, operator.or_)

    @staticmethod
    def _xor(a: "BigInteger", b: "BigInteger") -> "BigInteger":
        return BigInteger._bitwise(a, b, np.bitwise_xor, operator.xor)

    def __and__(self, other: IntLike) -> "BigInteger":
        return self._binary_op(other, self._and)

    def __rand__(self, other: IntLike) -> "BigInteger":
        return self._reflected_op(other, self._and)

    def __or__(self, other: IntLike) -> "BigInteger":
        return self._binary_op(other, self._or)

    def __ror__(self, other: IntLike) -> "BigInteger":
        return self._reflected_op(other, self._or)

    def __xor__(self, other: IntLike) -> "BigInteger":
        return self._binary_op(other, self._xor)

    def __rxor__(self, other: IntLike) -> "BigInteger":
        return self._reflected_op(other, self._xor)

    def __invert__(self) -> "BigInteger":
        return self.copy()._invert()

    # ------------------------------------------------------------------
    # Shifts – negative amounts flip direction
    # ------------------------------------------------------------------

    def __lshift__(self, amount: int) -> "BigInteger":
        try:
            k = operator.index(amount)
        except TypeError:
            return NotImplemented
        result = self.copy()
        return result._ishl(k) if k >= 0 else result._ishr(-k)

    def __rshift__(self, amount: int) -> "BigInteger":
        try:
            k = operator.index(amount)
        except TypeError:
            return NotImplemented
        result = self.copy()
        return result._ishr(k) if k >= 0 else result._ishl(-k)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    @staticmethod
    def _compare(a: "BigInteger", b: "BigInteger") -> int:
        if a.sign != b.sign:
            return -1 if a.sign else 1
        len_a, len_b = len(a.digits), len(b.digits)
        if len_a != len_b:
            # a negative number with more words is further from zero
            longer = 1 if len_a > len_b else -1
            return -longer if a.sign else longer
        for i in reversed(range(len_a)):
            word_a, word_b = a.digits[i], b.digits[i]
            if word_a != word_b:
                return -1 if word_a < word_b else 1
        return 0

    def __eq__(self, other: object):  # type: ignore[override]
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.sign == other.sign and self.digits == other.digits

    def __ne__(self, other: object):  # type: ignore[override]
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __lt__(self, other: IntLike):
        return self._binary_op(other, lambda a, b: self._compare(a, b) < 0)

    def __le__(self, other: IntLike):
        return self._binary_op(other, lambda a, b: self._compare(a, b) <= 0)

    def __gt__(self, other: IntLike):
        return self._binary_op(other, lambda a, b: self._compare(a, b) > 0)

    def __ge__(self, other: IntLike):
        return self._binary_op(other, lambda a, b: self._compare(a, b) >= 0)

    # ------------------------------------------------------------------
    # Host integer interop
    # ------------------------------------------------------------------

    def __int__(self) -> int:
        value = 0
        for word in reversed(list(self.digits)):
            value = value << WORD_BITS | word
        if self.sign:
            value -= 1 << (WORD_BITS * len(self.digits))
        return value

    __index__ = __int__

    def __bool__(self) -> bool:
        return not self.is_zero

    def __hash__(self) -> int:
        # consistent with == against plain ints
        return hash(int(self))
