"""Copy-on-write word storage used by :class:`bigint.BigInteger`.

A :class:`DigitSequence` is a growable, ordered sequence of fixed-width
unsigned words with *value* semantics:

* up to one element lives **inline** in the object itself – most integers
  that appear in practice (loop counters, single-word remainders, the
  decimal base) never allocate a numpy buffer;
* as soon as the length would exceed one, the words move into a
  **shared** numpy buffer.  :meth:`DigitSequence.copy` is O(1) – the copy
  merely bumps the buffer's owner count – and the first write on either side
  detaches it with a private copy of the buffer (copy-on-write).

The sequence knows nothing about arithmetic; :mod:`bigint.big_integer`
drives it.

Thread safety
-------------
The exclusivity test reads a plain owner counter.  Sequences sharing one
buffer must not be copied or written from different threads without an
external lock.
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

from . import config

__all__ = ["DigitSequence"]


class _SharedWords:
    """Heap buffer plus the number of sequences currently referencing it."""

    __slots__ = ("array", "owners")

    def __init__(self, array: np.ndarray):
        self.array = array
        self.owners = 1


class DigitSequence:
    """Ordered word sequence with inline small storage and COW sharing.

    Exactly one storage form is active at a time: ``_small`` while the
    sequence is inline, ``_shared`` afterwards.  The transition happens once,
    the first time the length would exceed one, and is never undone –
    shrinking a shared sequence keeps the buffer.
    """

    __slots__ = ("_size", "_dtype", "_small", "_shared")

    def __init__(self, value: int = 0, *, dtype=config.WORD_DTYPE):
        self._dtype = np.dtype(dtype)
        self._size = 1
        self._small = self._coerce(value)
        self._shared: _SharedWords | None = None

    @classmethod
    def from_numpy(cls, words: np.ndarray) -> "DigitSequence":
        """Build a sequence owning a copy of the one-dimensional array *words*."""
        words = np.asarray(words)
        if words.ndim != 1 or words.size == 0:
            raise ValueError("DigitSequence needs a non-empty one-dimensional array")
        seq = cls(words[0].item(), dtype=words.dtype)
        if words.size > 1:
            seq._promote(words.size)
            seq._shared.array[: words.size] = words
            seq._size = words.size
        return seq

    def __del__(self):
        # __init__ may have failed before the slot was bound
        shared = getattr(self, "_shared", None)
        if shared is not None:
            shared.owners -= 1

    # ------------------------------------------------------------------
    # Storage management
    # ------------------------------------------------------------------

    def _coerce(self, value):
        return self._dtype.type(value).item()

    def _ensure_unique(self):
        """Detach from a buffer that other sequences still reference."""
        shared = self._shared
        if shared is None or shared.owners == 1:
            return
        shared.owners -= 1
        self._shared = _SharedWords(shared.array.copy())

    def _promote(self, capacity: int):
        """Move the inline element into a freshly allocated shared buffer."""
        array = np.empty(max(capacity, config.INITIAL_CAPACITY), dtype=self._dtype)
        if self._size:
            array[0] = self._small
        self._small = None
        self._shared = _SharedWords(array)

    def _reserve(self, capacity: int):
        shared = self._shared
        if capacity <= len(shared.array):
            return
        grown = np.empty(max(capacity, 2 * len(shared.array)), dtype=self._dtype)
        grown[: self._size] = shared.array[: self._size]
        shared.array = grown

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def _check_index(self, index: int) -> int:
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError(f"DigitSequence index {index} out of range for length {self._size}")
        return index

    def __getitem__(self, index: int):
        index = self._check_index(index)
        if self._shared is None:
            return self._small
        return self._shared.array[index].item()

    def __setitem__(self, index: int, value):
        index = self._check_index(index)
        self._ensure_unique()
        if self._shared is None:
            self._small = self._coerce(value)
        else:
            self._shared.array[index] = value

    def back(self):
        return self[self._size - 1]

    def __len__(self) -> int:
        return self._size

    def empty(self) -> bool:
        return self._size == 0

    def __iter__(self) -> Iterator:
        return iter(self.to_numpy().tolist())

    def to_numpy(self) -> np.ndarray:
        """Read-only view of the stored words.

        The view aliases the buffer and is only meaningful until the next
        mutation of this sequence.
        """
        if self._shared is None:
            return np.array([self._small][: self._size], dtype=self._dtype)
        view = self._shared.array[: self._size]
        view.flags.writeable = False
        return view

    # ------------------------------------------------------------------
    # Growth & shrinkage
    # ------------------------------------------------------------------

    def push_back(self, value):
        self._ensure_unique()
        if self._shared is None:
            if self._size == 0:
                self._small = self._coerce(value)
                self._size = 1
                return
            self._promote(self._size + 1)
        self._reserve(self._size + 1)
        self._shared.array[self._size] = value
        self._size += 1

    def push_front(self, value, count: int = 1):
        """Insert *count* copies of *value* before the first element."""
        if count == 0:
            return
        if count < 0:
            raise ValueError("count must be non-negative")
        self._ensure_unique()
        new_size = self._size + count
        if self._shared is None:
            if new_size == 1:
                self._small = self._coerce(value)
                self._size = 1
                return
            self._promote(new_size)
        self._reserve(new_size)
        array = self._shared.array
        array[count:new_size] = array[: self._size]
        array[:count] = value
        self._size = new_size

    def pop_back(self):
        """Remove and return the last element."""
        if self._size == 0:
            raise IndexError("pop from empty DigitSequence")
        value = self.back()
        self._ensure_unique()
        if self._shared is None:
            self._small = self._coerce(0)
        self._size -= 1
        return value

    def pop_front(self, count: int = 1):
        """Remove the first *count* elements."""
        if count == 0:
            return
        if not 0 < count <= self._size:
            raise IndexError(f"cannot pop {count} elements from DigitSequence of length {self._size}")
        self._ensure_unique()
        if self._shared is None:
            self._small = self._coerce(0)
        else:
            array = self._shared.array
            array[: self._size - count] = array[count : self._size]
        self._size -= count

    def resize(self, n: int, fill=0):
        """Grow to *n* elements padding with *fill*, or truncate to *n*.

        ``resize(0)`` empties the sequence.
        """
        if n == self._size:
            return
        if n < 0:
            raise ValueError("size must be non-negative")
        self._ensure_unique()
        if n == 0:
            if self._shared is None:
                self._small = self._coerce(0)
            self._size = 0
            return
        if self._shared is None:
            if n == 1:
                # only reachable from an empty inline sequence
                self._small = self._coerce(fill)
                self._size = 1
                return
            self._promote(n)
        if n > self._size:
            self._reserve(n)
            self._shared.array[self._size : n] = fill
        self._size = n

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def copy(self) -> "DigitSequence":
        """O(1) logical copy sharing the buffer until either side writes."""
        clone = DigitSequence.__new__(DigitSequence)
        clone._size = self._size
        clone._dtype = self._dtype
        clone._small = self._small
        clone._shared = self._shared
        if self._shared is not None:
            self._shared.owners += 1
        return clone

    __copy__ = copy

    def __deepcopy__(self, memo) -> "DigitSequence":
        clone = self.copy()
        clone._ensure_unique()
        return clone

    def swap(self, other: "DigitSequence"):
        self._ensure_unique()
        other._ensure_unique()
        self._size, other._size = other._size, self._size
        self._dtype, other._dtype = other._dtype, self._dtype
        self._small, other._small = other._small, self._small
        self._shared, other._shared = other._shared, self._shared

    def __eq__(self, other: object):  # type: ignore[override]
        if not isinstance(other, DigitSequence):
            return NotImplemented
        if self._size != other._size:
            return False
        return bool(np.array_equal(self.to_numpy(), other.to_numpy()))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def is_inline(self) -> bool:
        return self._shared is None

    @property
    def owners(self) -> int:
        """Number of sequences referencing this sequence's storage."""
        return 1 if self._shared is None else self._shared.owners

    def shares_storage(self, other: "DigitSequence") -> bool:
        return self._shared is not None and self._shared is other._shared

    def __repr__(self) -> str:
        return f"DigitSequence({list(self)!r})"
