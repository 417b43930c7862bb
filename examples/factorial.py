"""Example computing large factorials and Fibonacci numbers with BigInteger.

The script prints n! and F(n) in decimal, together with the number of 32-bit
words each value occupies, and cross-checks the digit sums against Python's
built-in integers.
"""

from __future__ import annotations

import math

from bigint import BigInteger


def factorial(n: int) -> BigInteger:
    result = BigInteger(1)
    for k in range(2, n + 1):
        result = result * k
    return result


def fibonacci(n: int) -> BigInteger:
    a, b = BigInteger(0), BigInteger(1)
    for _ in range(n):
        a, b = b, a + b
    return a


def digit_sum(x: BigInteger) -> int:
    """Sum of decimal digits, computed with truncating division only."""
    total = 0
    x = abs(x)
    while x:
        x, digit = divmod(x, 10)
        total += int(digit)
    return total


if __name__ == "__main__":
    for n in (10, 50, 100):
        f = factorial(n)
        print(f"{n}! = {f}  ({len(f.digits)} words)")
        assert int(f) == math.factorial(n)
        assert digit_sum(f) == sum(map(int, str(math.factorial(n))))

    fib = fibonacci(300)
    print(f"F(300) = {fib}  ({len(fib.digits)} words)")
