import threading

import pytest
from hypothesis import given
from hypothesis import strategies as st

from compactbits.atomic_bit_field_vec import AtomicBitFieldVec
from compactbits.bit_field_vec import BitFieldVec, bit_field_vec
from compactbits.words import BITS, WORD_MASK


def test_new_is_zero_filled():
    vec = AtomicBitFieldVec(5, 10)
    assert len(vec) == 10
    assert vec.bit_width == 5
    assert [vec.get(i) for i in range(10)] == [0] * 10


def test_mask_matches_width():
    vec = AtomicBitFieldVec(5, 3)
    assert vec.mask == 0b11111
    assert AtomicBitFieldVec(BITS, 1).mask == WORD_MASK
    assert AtomicBitFieldVec(0, 1).mask == 0


def test_set_and_get():
    vec = AtomicBitFieldVec(10, 5)
    for index, value in enumerate([4, 500, 2, 0, 1]):
        vec.set(index, value)
    assert [vec.get(i) for i in range(5)] == [4, 500, 2, 0, 1]


def test_values_across_word_boundaries():
    width = 7
    length = 40
    vec = AtomicBitFieldVec(width, length)
    values = [(i * 37) % (1 << width) for i in range(length)]
    for index, value in enumerate(values):
        vec.set(index, value)
    assert [vec.get(i) for i in range(length)] == values


def test_get_out_of_bounds():
    vec = AtomicBitFieldVec(4, 3)
    with pytest.raises(IndexError):
        vec.get(3)
    with pytest.raises(IndexError):
        vec.get(-1)


def test_set_out_of_bounds():
    vec = AtomicBitFieldVec(4, 3)
    with pytest.raises(IndexError):
        vec.set(3, 1)


def test_set_value_too_large():
    vec = AtomicBitFieldVec(4, 3)
    with pytest.raises(ValueError):
        vec.set(0, 16)
    assert vec.get(0) == 0


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        AtomicBitFieldVec(4, -1)


def test_width_too_large_rejected():
    with pytest.raises(ValueError):
        AtomicBitFieldVec(BITS + 1, 1)


def test_zero_width_reads_zero():
    vec = AtomicBitFieldVec(0, 4)
    vec.set(2, 0)
    assert [vec.get(i) for i in range(4)] == [0, 0, 0, 0]


def test_reset_zeroes_values():
    vec = AtomicBitFieldVec(6, 20)
    for index in range(20):
        vec.set(index, index)
    vec.reset()
    assert len(vec) == 20
    assert all(vec.get(i) == 0 for i in range(20))


def test_reset_leaves_bits_past_end():
    source = BitFieldVec.from_raw_parts([WORD_MASK, WORD_MASK], 10, 3)
    vec = AtomicBitFieldVec.from_bit_field_vec(source)
    vec.reset()
    words, width, length = vec.to_bit_field_vec().into_raw_parts()
    assert (width, length) == (10, 3)
    assert words[1] == WORD_MASK
    assert words[0] >> 30 == WORD_MASK >> 30
    assert [vec.get(i) for i in range(3)] == [0, 0, 0]


def test_conversion_round_trip():
    original = bit_field_vec(10, 4, 500, 2, 0, 1)
    vec = AtomicBitFieldVec.from_bit_field_vec(original)
    assert len(vec) == 5
    assert vec.bit_width == 10
    assert [vec.get(i) for i in range(5)] == [4, 500, 2, 0, 1]
    assert vec.to_bit_field_vec() == original


def test_conversion_copies_storage():
    original = bit_field_vec(8, 1, 2, 3)
    vec = AtomicBitFieldVec.from_bit_field_vec(original)
    vec.set(0, 200)
    assert original.get(0) == 1
    back = vec.to_bit_field_vec()
    vec.set(1, 100)
    assert back.get(1) == 2
    assert back.get(0) == 200


def test_concurrent_writes_to_distinct_indices():
    width = 13
    length = 400
    vec = AtomicBitFieldVec(width, length)
    threads = [
        threading.Thread(
            target=lambda start=start: [
                vec.set(i, i % (1 << width)) for i in range(start, length, 4)
            ]
        )
        for start in range(4)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert [vec.get(i) for i in range(length)] == list(range(length))


@given(
    st.integers(min_value=1, max_value=BITS).flatmap(
        lambda w: st.tuples(
            st.just(w),
            st.lists(st.integers(min_value=0, max_value=(1 << w) - 1), max_size=50),
        )
    )
)
def test_round_trip_property(case):
    width, values = case
    vec = AtomicBitFieldVec(width, len(values))
    for index, value in enumerate(values):
        vec.set(index, value)
    assert [vec.get(i) for i in range(len(values))] == values
    assert list(vec.to_bit_field_vec()) == values