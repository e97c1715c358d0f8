import copy

import pytest

from artree.tagged_pointer import TaggedPointer

ADDR = 0x7F00_0000_1000


def test_create_pointer_set_and_retrieve_data():
    p = TaggedPointer.new(ADDR, 4, 2)
    assert p.to_data() == 0

    p.set_data(1)
    assert p.to_data() == 1
    assert p.to_ptr() == ADDR

    p.set_data(3)
    assert p.to_data() == 3
    assert p.to_ptr() == ADDR


def test_create_pointer_with_data_and_retrieve_data():
    p = TaggedPointer.new_with_data(ADDR, 4, 2, 3)
    assert p.to_data() == 3
    assert p.to_ptr() == ADDR

    p.set_data(0)
    assert p.to_ptr() == ADDR
    assert p.to_data() == 0


def test_example_str_pointer():
    p = TaggedPointer.new_with_data(ADDR, 8, 3, 0b101)
    assert p.to_ptr() == ADDR
    assert p.to_data() == 0b101
    p.set_data(0b010)
    assert p.to_ptr() == ADDR
    assert p.to_data() == 0b010


def test_example_cast_keeps_data():
    p = TaggedPointer.new_with_data(ADDR, 8, 3, 0b010)
    p.set_data(0b101)
    q = p.cast(8)
    assert q.to_ptr() == ADDR
    assert q.to_data() == 0b101


def test_cast_to_insufficient_alignment_fails():
    p = TaggedPointer.new_with_data(ADDR, 8, 3, 0b010)
    with pytest.raises(ValueError):
        p.cast(4)


@pytest.mark.parametrize(
    "alignment, min_bits, data",
    [(1, 0, 0b1), (2, 1, 0b11), (4, 2, 0b111), (8, 3, 0b1111)],
)
def test_set_data_beyond_capacity(alignment, min_bits, data):
    p = TaggedPointer.new(ADDR, alignment, min_bits)
    with pytest.raises(ValueError):
        p.set_data(data)


@pytest.mark.parametrize(
    "alignment, min_bits, data",
    [(1, 0, 0), (1, 0, 0), (2, 1, 1), (4, 2, 3), (8, 3, 7)],
)
def test_set_data_different_alignments(alignment, min_bits, data):
    p = TaggedPointer.new(ADDR, alignment, min_bits)
    assert p.to_data() == 0
    assert p.to_ptr() == ADDR
    p.set_data(data)
    assert p.to_data() == data
    assert p.to_ptr() == ADDR


@pytest.mark.parametrize(
    "alignment, min_bits, num_bits, pointer_mask",
    [
        (1, 0, 0, 0xFFFF_FFFF_FFFF_FFFF),
        (2, 1, 1, 0xFFFF_FFFF_FFFF_FFFE),
        (4, 2, 2, 0xFFFF_FFFF_FFFF_FFFC),
        (8, 3, 3, 0xFFFF_FFFF_FFFF_FFF8),
        (16, 3, 4, 0xFFFF_FFFF_FFFF_FFF0),
    ],
)
def test_alignment_bits_and_mask_values(alignment, min_bits, num_bits, pointer_mask):
    p = TaggedPointer.new(ADDR, alignment, min_bits)
    assert p.alignment == alignment
    assert p.num_bits == num_bits
    assert p.pointer_mask == pointer_mask
    assert p.data_mask == alignment - 1


def test_cast_checks_alignment():
    p1 = TaggedPointer.new(ADDR, 8, 3)
    p2 = TaggedPointer.new(ADDR + 4, 4, 2)
    p1.set_data(1)
    p2.set_data(2)

    assert p1.cast(8).to_data() == 1
    assert p2.cast(4).to_data() == 2


def test_cast_to_larger_alignment_requires_aligned_address():
    p = TaggedPointer.new(ADDR + 4, 4, 2)
    with pytest.raises(ValueError):
        p.cast(8)


def test_null_gives_none():
    assert TaggedPointer.new(0, 8, 3) is None
    assert TaggedPointer.new_with_data(0, 8, 3, 1) is None


def test_unaligned_address_rejected():
    with pytest.raises(ValueError):
        TaggedPointer.new(ADDR + 1, 8, 3)


def test_insufficient_alignment_for_min_bits_rejected():
    with pytest.raises(ValueError):
        TaggedPointer.new(ADDR, 4, 3)


def test_non_power_of_two_alignment_rejected():
    with pytest.raises(ValueError):
        TaggedPointer.new(ADDR, 6, 1)


def test_new_with_data_too_large_rejected():
    with pytest.raises(ValueError):
        TaggedPointer.new_with_data(ADDR, 4, 2, 4)


def test_equality_and_hash():
    a = TaggedPointer.new_with_data(ADDR, 8, 3, 2)
    b = TaggedPointer.new_with_data(ADDR, 8, 3, 2)
    c = TaggedPointer.new_with_data(ADDR, 8, 3, 3)
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert a < c
    assert len({a, b, c}) == 2


def test_copy_is_independent():
    a = TaggedPointer.new_with_data(ADDR, 8, 3, 2)
    b = copy.copy(a)
    b.set_data(5)
    assert a.to_data() == 2
    assert b.to_data() == 5
    assert b.to_ptr() == ADDR


def test_repr_and_pointer_format():
    p = TaggedPointer.new_with_data(0x1000, 8, 3, 5)
    assert repr(p) == "TaggedPointer(pointer=0x1000, data=5)"
    assert format(p, "p") == "0x1000"