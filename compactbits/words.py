"""Primitive operations on 64-bit machine words stored as Python ints."""

BITS = 64
"""Number of bits in a storage word."""

WORD_MASK = (1 << BITS) - 1
"""A word with all of its bits set."""


def _as_word(word: int) -> int:
    """Reduce an int to its 64-bit two's-complement word value."""
    return word & WORD_MASK


def low_mask(bit_width: int) -> int:
    """Return a word with its lowest ``bit_width`` bits set.

    A width of zero gives zero. Raises ``ValueError`` if the width is
    negative or larger than a word.
    """
    if not 0 <= bit_width <= BITS:
        raise ValueError(f"bit width {bit_width} not in [0, {BITS}]")
    return (1 << bit_width) - 1


def popcount(word: int) -> int:
    """Return the number of ones in a word.

    Negative ints are read as their 64-bit two's-complement value, so
    ``popcount(~x)`` counts the zeros of ``x``.
    """
    return _as_word(word).bit_count()


def select_in_word(word: int, rank: int) -> int:
    """Return the position of the one of given rank (counting from zero).

    Raises ``ValueError`` if the word has ``rank`` or fewer ones, or if
    the rank is negative.
    """
    word = _as_word(word)
    if rank < 0:
        raise ValueError(f"negative rank {rank}")
    ones = word.bit_count()
    if rank >= ones:
        raise ValueError(f"rank {rank} out of range for a word with {ones} ones")
    # Drop the lowest `rank` ones, then locate the lowest remaining one.
    for _ in range(rank):
        word &= word - 1
    return (word & -word).bit_length() - 1