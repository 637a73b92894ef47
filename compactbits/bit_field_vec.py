"""Growable vectors of unsigned values of fixed bit width."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from compactbits.field_ops import (
    check_value,
    clear_fields,
    get_field,
    iter_fields,
    iter_fields_reverse,
    set_field,
    words_for,
)
from compactbits.words import BITS, WORD_MASK, low_mask

__all__ = ["BitFieldVec", "bit_field_vec"]


class BitFieldVec:
    """A vector of unsigned values, each stored in ``bit_width`` bits.

    Values are packed into 64-bit words with no padding, so unless the
    width is a power of two some values straddle a word boundary. Bits of
    the backing words past the end of the vector are never relied upon
    and never modified, except by operations that grow the vector.
    """

    __slots__ = ("_words", "_bit_width", "_mask", "_len")

    def __init__(self, bit_width: int, length: int = 0) -> None:
        """Create a zero-filled vector of ``length`` values of given width."""
        if length < 0:
            raise ValueError(f"negative length {length}")
        self._words = [0] * words_for(length, bit_width)
        self._bit_width = bit_width
        self._mask = low_mask(bit_width)
        self._len = length

    @classmethod
    def with_capacity(cls, bit_width: int, capacity: int) -> BitFieldVec:
        """Create an empty vector of given width meant to hold ``capacity`` values."""
        words_for(capacity, bit_width)
        result = cls(bit_width, 0)
        result._words = []
        return result

    @classmethod
    def from_raw_parts(
        cls, words: Iterable[int], bit_width: int, length: int
    ) -> BitFieldVec:
        """Build a vector from backing words, a bit width and a length.

        Raises ``ValueError`` if the words cannot hold ``length`` values.
        """
        mask = low_mask(bit_width)
        word_list = [w & WORD_MASK for w in words]
        if length < 0 or length * bit_width > len(word_list) * BITS:
            raise ValueError(
                f"{length} values of width {bit_width} do not fit in "
                f"{len(word_list)} words"
            )
        result = cls(bit_width, 0)
        result._words = word_list
        result._mask = mask
        result._len = length
        return result

    @classmethod
    def from_values(cls, values: Iterable[int]) -> BitFieldVec:
        """Build a vector with the smallest bit width that holds every value.

        Raises ``ValueError`` for negative values or values wider than a word.
        """
        items = list(values)
        if any(v < 0 for v in items):
            raise ValueError("cannot store negative values")
        width = max((v.bit_length() for v in items), default=0)
        if width > BITS:
            raise ValueError(
                f"Cannot convert values of bit width {width} into words of {BITS} bits"
            )
        result = cls(width, len(items))
        for index, value in enumerate(items):
            set_field(result._words, index, width, value)
        return result

    def into_raw_parts(self) -> tuple[list[int], int, int]:
        """Return a copy of the backing words, the bit width and the length."""
        return list(self._words), self._bit_width, self._len

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

    def _normalize(self, index: int) -> int:
        if not isinstance(index, int):
            raise TypeError(f"indices must be integers, not {type(index).__name__}")
        if index < 0:
            index += self._len
        self._check_index(index)
        return index

    def __getitem__(self, index: int) -> int:
        return get_field(self._words, self._normalize(index), self._bit_width)

    def __setitem__(self, index: int, value: int) -> None:
        set_field(self._words, self._normalize(index), self._bit_width, value)

    def get(self, index: int) -> int:
        """Return the value at ``index``; raises ``IndexError`` if out of bounds."""
        self._check_index(index)
        return get_field(self._words, index, self._bit_width)

    def set(self, index: int, value: int) -> None:
        """Store ``value`` at ``index``.

        Raises ``IndexError`` if out of bounds and ``ValueError`` if the
        value does not fit in the bit width.
        """
        self._check_index(index)
        set_field(self._words, index, self._bit_width, value)

    def get_unaligned(self, index: int) -> int:
        """Return the value at ``index`` as an unaligned word read would.

        Only widths up to ``BITS - 6``, or exactly ``BITS - 4`` or ``BITS``,
        allow such reads; other widths raise ``ValueError``.
        """
        width = self._bit_width
        if not (width <= BITS - 8 + 2 or width == BITS - 8 + 4 or width == BITS):
            raise ValueError(f"bit width {width} does not allow unaligned reads")
        self._check_index(index)
        return get_field(self._words, index, width)

    def push(self, value: int) -> None:
        """Append a value; raises ``ValueError`` if it does not fit."""
        check_value(value, self._bit_width)
        if (self._len + 1) * self._bit_width > len(self._words) * BITS:
            self._words.append(0)
        set_field(self._words, self._len, self._bit_width, value)
        self._len += 1

    def pop(self) -> int:
        """Remove and return the last value; raises ``IndexError`` if empty."""
        if self._len == 0:
            raise IndexError("pop from empty BitFieldVec")
        value = get_field(self._words, self._len - 1, self._bit_width)
        self._len -= 1
        return value

    def resize(self, new_len: int, value: int = 0) -> None:
        """Truncate, or extend with copies of ``value``, to ``new_len`` values."""
        check_value(value, self._bit_width)
        if new_len < 0:
            raise ValueError(f"negative length {new_len}")
        if new_len > self._len:
            needed = -(-(new_len * self._bit_width) // BITS)
            if needed > len(self._words):
                self._words.extend([0] * (needed - len(self._words)))
            for index in range(self._len, new_len):
                set_field(self._words, index, self._bit_width, value)
        self._len = new_len

    def clear(self) -> None:
        """Set the length to zero."""
        self._len = 0

    def extend(self, values: Iterable[int]) -> None:
        """Append every value of an iterable."""
        for value in values:
            self.push(value)

    def reset(self) -> None:
        """Set every value to zero without changing the length."""
        clear_fields(self._words, self._len * self._bit_width)

    def apply_in_place(self, func: Callable[[int], int]) -> None:
        """Replace every value ``v`` with ``func(v)``.

        Raises ``ValueError`` if a result does not fit in the bit width;
        the values before it have then already been replaced.
        """
        if self._bit_width == 0:
            return
        current = list(iter_fields(self._words, self._bit_width, 0, self._len))
        for index, value in enumerate(current):
            set_field(self._words, index, self._bit_width, func(value))

    def iter_from(self, start: int) -> Iterator[int]:
        """Yield the values from index ``start`` to the end."""
        if not 0 <= start <= self._len:
            raise IndexError(f"Start index out of bounds: {start} > {self._len}")
        return iter_fields(self._words, self._bit_width, start, self._len)

    def iter_reverse_from(self, start: int) -> Iterator[int]:
        """Yield the values before index ``start``, from the last one back."""
        if not 0 <= start <= self._len:
            raise IndexError(f"Start index out of bounds: {start} > {self._len}")
        return iter_fields_reverse(self._words, self._bit_width, start)

    def __iter__(self) -> Iterator[int]:
        return self.iter_from(0)

    def __reversed__(self) -> Iterator[int]:
        return self.iter_reverse_from(self._len)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitFieldVec):
            return NotImplemented
        if self._bit_width != other._bit_width or self._len != other._len:
            return False
        full_words, residual = divmod(self._len * self._bit_width, BITS)
        if self._words[:full_words] != other._words[:full_words]:
            return False
        if not residual:
            return True
        diff = self._words[full_words] ^ other._words[full_words]
        return diff & low_mask(residual) == 0

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = "".join(f", {v}" for v in self)
        return f"bit_field_vec({self._bit_width}{values})"


def bit_field_vec(bit_width: int, *args: int) -> BitFieldVec:
    """Build a vector of given bit width holding the given values.

    For ``n`` copies of a value use ``BitFieldVec(width)`` and ``resize``.
    """
    result = BitFieldVec.with_capacity(bit_width, len(args))
    result.extend(args)
    return result