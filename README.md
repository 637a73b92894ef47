# compactbits

Vectors of unsigned values of a fixed bit width, stored in 64-bit words with
no padding between elements. Unless the width is a power of two, some values
straddle a word boundary.

## Installation

```
pip install compactbits
```

To run the test suite:

```
pip install "compactbits[test]"
pytest
```

## Bit-field vectors

`BitFieldVec` (in `compactbits.bit_field_vec`) is a growable vector of
values that each occupy `bit_width` bits.

```python
from compactbits.bit_field_vec import BitFieldVec, bit_field_vec

v = BitFieldVec(5, 10)       # width 5, ten zeros
v[0] = 3
assert v[0] == 3
assert v.bit_width == 5
assert v.mask == 0b11111

v = bit_field_vec(10, 4, 500, 2, 0, 1)
assert list(v) == [4, 500, 2, 0, 1]
assert list(reversed(v)) == [1, 0, 2, 500, 4]
assert list(v.iter_from(3)) == [0, 1]

v.apply_in_place(lambda x: x + 1)
assert list(v) == [5, 501, 3, 1, 2]

assert v.pop() == 2
v.resize(6, 7)
assert list(v) == [5, 501, 3, 1, 7, 7]
```

Other members:

- `BitFieldVec.with_capacity(bit_width, capacity)` creates an empty vector.
- `BitFieldVec.from_values(values)` picks the smallest width that holds every
  value; negative values or values wider than 64 bits raise `ValueError`.
- `BitFieldVec.from_raw_parts(words, bit_width, length)` and
  `into_raw_parts()` move between a vector and its backing words.
- `get`, `set`, `push`, `pop`, `resize`, `clear`, `extend` and `reset`
  (zero every value, keeping the length).
- `get_unaligned(index)` reads a value for widths up to 58, or exactly 60 or
  64; other widths raise `ValueError`.
- `iter_reverse_from(start)` yields the values before `start`, last first.

Indexing past the end raises `IndexError`; storing a value that does not fit
in the bit width raises `ValueError`; `pop` on an empty vector raises
`IndexError`. Two vectors are equal when their widths, lengths and values
match, whatever the unused bits of their words hold.

## Thread-safe vectors

`AtomicBitFieldVec` (in `compactbits.atomic_bit_field_vec`) is a
fixed-length vector whose `get`, `set` and `reset` hold a lock, so threads
may share it and every single-value read or write is atomic. Convert with
`AtomicBitFieldVec.from_bit_field_vec(v)` and `a.to_bit_field_vec()`.

## Lower-level helpers

`compactbits.words` provides `popcount`, `select_in_word` and `low_mask` on
64-bit words. `compactbits.field_ops` provides the functions the vector
classes are built on: `check_value`, `words_for`, `get_field`, `set_field`,
`clear_fields`, `iter_fields` and `iter_fields_reverse`, all working on a
plain list of words.

## What this package does not do

There is no dedicated vector of booleans (a `BitFieldVec` of width 1 stores
bits), no rank or select index over a vector, no saving to or loading from
files, and no command-line tool.