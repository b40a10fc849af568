import pytest

from qrsymbol.exceptions import InvalidCharacterError, ValueOutOfRangeError
from qrsymbol.segments import (
    ALPHANUMERIC_CHARSET,
    Mode,
    Segment,
    is_alphanumeric,
    is_kanji,
    is_numeric,
    kanji_value,
    make_alphanumeric,
    make_bytes,
    make_eci,
    make_kanji,
    make_numeric,
    make_segments,
)


def _bits_to_int(bits) -> int:
    value = 0
    for b in bits:
        value = (value << 1) | b
    return value


@pytest.mark.parametrize("n", list(range(0, 13)) + [50, 100, 101])
def test_numeric_bit_length(n: int) -> None:
    digits = ("0123456789" * 11)[:n]
    seg = make_numeric(digits)
    expected = 10 * (n // 3) + {0: 0, 1: 4, 2: 7}[n % 3]
    assert seg.bit_length == expected
    assert seg.num_chars == n
    assert seg.mode is Mode.NUMERIC


def test_numeric_rejects_non_digits() -> None:
    with pytest.raises(InvalidCharacterError):
        make_numeric("12a4")


@pytest.mark.parametrize(
    "text",
    [
        "ALPHANUMERIC 1234567890 $+%*-./:",
        "HELLO WORLD",
        ALPHANUMERIC_CHARSET,
        "AB",
    ],
)
def test_alphanumeric_pairs_recover_characters(text: str) -> None:
    seg = make_alphanumeric(text)
    bits = seg.bits
    for i in range(len(text) // 2):
        value = _bits_to_int(bits[i * 11:(i + 1) * 11])
        first, second = divmod(value, 45)
        assert ALPHANUMERIC_CHARSET[first] + ALPHANUMERIC_CHARSET[second] == text[2 * i:2 * i + 2]
    if len(text) % 2:
        assert ALPHANUMERIC_CHARSET[_bits_to_int(bits[-6:])] == text[-1]
    assert seg.bit_length == 11 * (len(text) // 2) + 6 * (len(text) % 2)


def test_alphanumeric_rejects_lowercase() -> None:
    with pytest.raises(InvalidCharacterError):
        make_alphanumeric("lowercase")


def test_predicates() -> None:
    assert is_numeric("")
    assert is_numeric("0123")
    assert not is_numeric("12 3")
    assert is_alphanumeric("A1 $%*+-./:")
    assert not is_alphanumeric("a")
    assert not is_alphanumeric("#")
    assert is_kanji("点茗")
    assert not is_kanji("A")


def test_kanji_values_match_iso_examples() -> None:
    # 0x935F -> 0xD9F and 0xE4AA -> 0x1AAA
    assert kanji_value("点") == 0xD9F
    assert kanji_value("茗") == 0x1AAA
    assert kanji_value("a") is None
    seg = make_kanji("点茗")
    assert seg.num_chars == 2
    assert seg.bit_length == 26
    assert _bits_to_int(seg.bits[:13]) == 0xD9F


def test_kanji_rejects_other_characters() -> None:
    with pytest.raises(InvalidCharacterError):
        make_kanji("点A")


def test_make_bytes() -> None:
    seg = make_bytes(b"\x00\xff")
    assert seg.mode is Mode.BYTE
    assert seg.num_chars == 2
    assert list(seg.bits) == [0] * 8 + [1] * 8


@pytest.mark.parametrize(
    "value, length, prefix",
    [
        (0, 8, [0]),
        (127, 8, [0]),
        (128, 16, [1, 0]),
        ((1 << 14) - 1, 16, [1, 0]),
        (1 << 14, 24, [1, 1, 0]),
        (999_999, 24, [1, 1, 0]),
    ],
)
def test_eci_lengths(value: int, length: int, prefix) -> None:
    seg = make_eci(value)
    assert seg.mode is Mode.ECI
    assert seg.num_chars == 0
    assert seg.bit_length == length
    assert list(seg.bits[:len(prefix)]) == prefix
    assert _bits_to_int(seg.bits[len(prefix):]) == value


@pytest.mark.parametrize("value", [-1, 1_000_000, 2_000_000])
def test_eci_out_of_range(value: int) -> None:
    with pytest.raises(ValueOutOfRangeError):
        make_eci(value)


def test_segment_rejects_negative_count() -> None:
    with pytest.raises(ValueOutOfRangeError):
        Segment(Mode.BYTE, -1, ())


def test_segment_data_is_a_copy() -> None:
    seg = make_numeric("123")
    data = seg.data
    data.append_bits(1, 1)
    assert seg.bit_length == 10
    assert len(seg.data) == 10


@pytest.mark.parametrize(
    "version, bits",
    [(1, 10), (9, 10), (10, 12), (26, 12), (27, 14), (40, 14)],
)
def test_char_count_bits_bands(version: int, bits: int) -> None:
    assert Mode.NUMERIC.char_count_bits(version) == bits


def test_char_count_bits_rejects_bad_version() -> None:
    with pytest.raises(ValueError):
        Mode.BYTE.char_count_bits(41)


@pytest.mark.parametrize(
    "text, mode",
    [
        ("0123", Mode.NUMERIC),
        ("HELLO 123", Mode.ALPHANUMERIC),
        ("Hello", Mode.BYTE),
        ("点茗", Mode.BYTE),
    ],
)
def test_make_segments_single_mode(text: str, mode: Mode) -> None:
    segs = make_segments(text)
    assert len(segs) == 1
    assert segs[0].mode is mode


def test_make_segments_empty() -> None:
    assert make_segments("") == []


def test_byte_count_is_utf8_length() -> None:
    (seg,) = make_segments("é€")
    assert seg.num_chars == 5
