"""Typed failures raised by :class:`bigint.BigInteger`.

Both exceptions derive from the built-in class a caller would catch for the
same mistake on plain ``int`` (``ZeroDivisionError`` and ``ValueError``), so
existing error handling keeps working.
"""

from __future__ import annotations

__all__ = ["DivisionByZeroError", "MalformedNumeralError"]


class DivisionByZeroError(ZeroDivisionError):
    """Divisor of ``/``, ``%`` or ``divmod`` has no non-zero word."""


class MalformedNumeralError(ValueError):
    """Decimal numeral is empty or contains a character other than ``0-9``."""

    def __init__(self, text: str, position: int | None = None):
        self.text = text
        self.position = position
        if position is None:
            message = f"Malformed decimal numeral {text!r}"
        else:
            message = f"Malformed decimal numeral {text!r} at position {position}"
        super().__init__(message)
