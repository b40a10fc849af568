import pytest

from qrsymbol.bitbuffer import MAX_BIT_LENGTH, BitBuffer
from qrsymbol.exceptions import CapacityOverflowError, DataTooLongError, ValueOutOfRangeError


def test_append_bits_msb_first() -> None:
    bb = BitBuffer()
    bb.append_bits(0b1011, 4)
    bb.append_bits(0, 3)
    assert list(bb) == [1, 0, 1, 1, 0, 0, 0]
    assert bb.bit_length() == 7


def test_append_zero_length_is_noop() -> None:
    bb = BitBuffer([1])
    bb.append_bits(0, 0)
    assert list(bb) == [1]


@pytest.mark.parametrize(
    "value, length",
    [
        (0, 32),
        (0, -1),
        (-1, 4),
        (16, 4),
        (1, 0),
    ],
)
def test_append_bits_out_of_range(value: int, length: int) -> None:
    bb = BitBuffer()
    with pytest.raises(ValueOutOfRangeError):
        bb.append_bits(value, length)
    assert len(bb) == 0


def test_get_bit_bounds() -> None:
    bb = BitBuffer([1, 0])
    assert bb.get_bit(0) == 1
    assert bb.get_bit(1) == 0
    with pytest.raises(IndexError):
        bb.get_bit(2)
    with pytest.raises(IndexError):
        bb.get_bit(-1)


def test_append_data_and_copy_are_independent() -> None:
    a = BitBuffer([1, 1])
    b = a.copy()
    b.append_data([0, 1])
    assert list(a) == [1, 1]
    assert list(b) == [1, 1, 0, 1]


def test_to_bytes() -> None:
    bb = BitBuffer()
    bb.append_bits(0x20, 8)
    bb.append_bits(0x5B, 8)
    assert bb.to_bytes() == [0x20, 0x5B]


def test_to_bytes_requires_whole_bytes() -> None:
    with pytest.raises(ValueError):
        BitBuffer([1, 0, 1]).to_bytes()


def test_overflow_is_a_data_too_long_error() -> None:
    bb = BitBuffer()
    with pytest.raises(CapacityOverflowError):
        bb._check_room(MAX_BIT_LENGTH + 1)
    assert issubclass(CapacityOverflowError, DataTooLongError)


@pytest.mark.parametrize("name", ["pop", "clear", "remove", "insert", "__setitem__", "__delitem__", "sort", "reverse"])
def test_no_shrinking_or_overwriting_mutators(name: str) -> None:
    assert not hasattr(BitBuffer(), name)


def test_length_never_decreases() -> None:
    bb = BitBuffer()
    bb.append_bits(0b101, 3)
    with pytest.raises(AttributeError):
        bb.pop()
    with pytest.raises(TypeError):
        bb[0] = 7
    with pytest.raises(TypeError):
        del bb[0]
    assert list(bb) == [1, 0, 1]
    assert len(bb) == 3


def test_constructor_stores_bits_only() -> None:
    assert list(BitBuffer([True, 0, 5])) == [1, 0, 1]
