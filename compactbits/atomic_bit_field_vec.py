"""Thread-safe vectors of unsigned values of fixed bit width."""

from __future__ import annotations

import threading

from compactbits.bit_field_vec import BitFieldVec
from compactbits.field_ops import clear_fields, get_field, set_field, words_for
from compactbits.words import low_mask

__all__ = ["AtomicBitFieldVec"]


class AtomicBitFieldVec:
    """A fixed-length vector of bit fields that many threads may share.

    Every read and write of a single value is atomic, including values
    that straddle a word boundary. Bits of the backing words past the end
    of the vector are never modified.
    """

    __slots__ = ("_words", "_bit_width", "_mask", "_len", "_lock")

    def __init__(self, bit_width: int, length: int = 0) -> None:
        """Create a zero-filled vector of ``length`` values of given width."""
        if length < 0:
            raise ValueError(f"negative length {length}")
        self._words = [0] * words_for(length, bit_width)
        self._bit_width = bit_width
        self._mask = low_mask(bit_width)
        self._len = length
        self._lock = threading.Lock()

    @classmethod
    def from_bit_field_vec(cls, vec: BitFieldVec) -> AtomicBitFieldVec:
        """Create a thread-safe vector with the same words, width and length."""
        words, bit_width, length = vec.into_raw_parts()
        result = cls(bit_width, 0)
        result._words = words
        result._len = length
        return result

    def to_bit_field_vec(self) -> BitFieldVec:
        """Return an ordinary vector with the same words, width and length."""
        with self._lock:
            words = list(self._words)
        return BitFieldVec.from_raw_parts(words, self._bit_width, self._len)

    @property
    def bit_width(self) -> int:
        """The number of bits used by each value."""
        return self._bit_width

    @property
    def mask(self) -> int:
        """A word with the lowest ``bit_width`` bits set."""
        return self._mask

    def __len__(self) -> int:
        return self._len

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._len:
            raise IndexError(f"Index out of bounds: {index} >= {self._len}")

    def get(self, index: int) -> int:
        """Return the value at ``index``; raises ``IndexError`` if out of bounds."""
        self._check_index(index)
        with self._lock:
            return get_field(self._words, index, self._bit_width)

    def set(self, index: int, value: int) -> None:
        """Store ``value`` at ``index``.

        Raises ``IndexError`` if out of bounds and ``ValueError`` if the
        value does not fit in the bit width.
        """
        self._check_index(index)
        with self._lock:
            set_field(self._words, index, self._bit_width, value)

    def reset(self) -> None:
        """Set every value to zero without changing the length."""
        with self._lock:
            clear_fields(self._words, self._len * self._bit_width)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        with self._lock:
            values = [
                get_field(self._words, i, self._bit_width) for i in range(self._len)
            ]
        return f"AtomicBitFieldVec(bit_width={self._bit_width}, values={values})"