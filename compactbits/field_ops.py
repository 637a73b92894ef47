"""Reading and writing fixed-width bit fields packed into 64-bit words.

Fields are stored contiguously with no padding, so unless the width is a
power of two some fields straddle two words. Bits of the words that lie
outside the fields being written are never modified.
"""

from __future__ import annotations

from collections.abc import Iterator, MutableSequence, Sequence

from compactbits.words import BITS, WORD_MASK, low_mask

__all__ = [
    "check_value",
    "words_for",
    "get_field",
    "set_field",
    "clear_fields",
    "iter_fields",
    "iter_fields_reverse",
]


def check_value(value: int, bit_width: int) -> None:
    """Raise ``ValueError`` unless ``value`` fits in ``bit_width`` bits."""
    mask = low_mask(bit_width)
    if value < 0 or value & mask != value:
        raise ValueError(f"Value {value} does not fit in {bit_width} bits")


def words_for(length: int, bit_width: int) -> int:
    """Return the number of words needed for ``length`` fields.

    At least one word is always returned, so that a vector of width zero
    still has storage to point at.
    """
    if length < 0:
        raise ValueError(f"negative length {length}")
    low_mask(bit_width)
    return max(1, -(-(length * bit_width) // BITS))


def _check_span(words: Sequence[int], bit_width: int, count: int) -> None:
    if count * bit_width > len(words) * BITS:
        raise IndexError(
            f"{count} fields of width {bit_width} do not fit in {len(words)} words"
        )


def get_field(words: Sequence[int], index: int, bit_width: int) -> int:
    """Return the field of given index and width."""
    mask = low_mask(bit_width)
    if index < 0:
        raise IndexError(f"negative field index {index}")
    _check_span(words, bit_width, index + 1)
    if bit_width == 0:
        return 0
    word_index, bit_index = divmod(index * bit_width, BITS)
    value = words[word_index] >> bit_index
    if bit_index + bit_width > BITS:
        value |= words[word_index + 1] << (BITS - bit_index)
    return value & mask


def set_field(
    words: MutableSequence[int], index: int, bit_width: int, value: int
) -> None:
    """Store ``value`` in the field of given index and width."""
    check_value(value, bit_width)
    if index < 0:
        raise IndexError(f"negative field index {index}")
    _check_span(words, bit_width, index + 1)
    if bit_width == 0:
        return
    mask = low_mask(bit_width)
    word_index, bit_index = divmod(index * bit_width, BITS)
    if bit_index + bit_width <= BITS:
        word = words[word_index] & ~(mask << bit_index) & WORD_MASK
        words[word_index] = word | (value << bit_index)
        return
    low_bits = BITS - bit_index
    words[word_index] = (words[word_index] & low_mask(bit_index)) | (
        (value << bit_index) & WORD_MASK
    )
    high = words[word_index + 1] & ~(mask >> low_bits) & WORD_MASK
    words[word_index + 1] = high | (value >> low_bits)


def clear_fields(words: MutableSequence[int], bit_len: int) -> None:
    """Zero the first ``bit_len`` bits, leaving the following bits alone."""
    if not 0 <= bit_len <= len(words) * BITS:
        raise IndexError(f"bit length {bit_len} out of range for {len(words)} words")
    full_words, residual = divmod(bit_len, BITS)
    for word_index in range(full_words):
        words[word_index] = 0
    if residual:
        words[full_words] &= (WORD_MASK << residual) & WORD_MASK


def iter_fields(
    words: Sequence[int], bit_width: int, start: int, stop: int
) -> Iterator[int]:
    """Yield the fields with index in ``[start, stop)`` in increasing order."""
    mask = low_mask(bit_width)
    if not 0 <= start <= stop:
        raise IndexError(f"invalid field range [{start}, {stop})")
    _check_span(words, bit_width, stop)
    return _forward(words, bit_width, mask, start, stop)


def _forward(
    words: Sequence[int], bit_width: int, mask: int, start: int, stop: int
) -> Iterator[int]:
    if bit_width == 0:
        for _ in range(start, stop):
            yield 0
        return
    word_index, bit_index = divmod(start * bit_width, BITS)
    window = words[word_index] >> bit_index if start < stop else 0
    fill = BITS - bit_index
    for _ in range(start, stop):
        if fill >= bit_width:
            yield window & mask
            window >>= bit_width
            fill -= bit_width
            continue
        word_index += 1
        next_word = words[word_index]
        yield (window | (next_word << fill)) & mask
        used = bit_width - fill
        window = next_word >> used
        fill = BITS - used


def iter_fields_reverse(
    words: Sequence[int], bit_width: int, start: int
) -> Iterator[int]:
    """Yield the fields with index below ``start`` in decreasing order."""
    low_mask(bit_width)
    if start < 0:
        raise IndexError(f"negative start index {start}")
    _check_span(words, bit_width, start)
    return (get_field(words, index, bit_width) for index in range(start - 1, -1, -1))