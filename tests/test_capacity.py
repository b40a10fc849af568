import pytest

from qrsymbol.capacity import boost_ecc, data_capacity_bits, get_total_bits, select_version
from qrsymbol.exceptions import DataTooLongError
from qrsymbol.segments import Mode, Segment, make_alphanumeric, make_bytes, make_numeric
from qrsymbol.tables import (
    ECC_LEVELS,
    Ecc,
    ecc_codewords_per_block,
    num_data_codewords,
    num_error_correction_blocks,
    num_raw_codewords,
    symbol_size,
)


@pytest.mark.parametrize(
    "version, ecc, expected",
    [
        (1, Ecc.LOW, 19),
        (1, Ecc.MEDIUM, 16),
        (1, Ecc.QUARTILE, 13),
        (1, Ecc.HIGH, 9),
        (5, Ecc.QUARTILE, 62),
        (10, Ecc.MEDIUM, 216),
        (40, Ecc.LOW, 2956),
        (40, Ecc.HIGH, 1276),
    ],
)
def test_num_data_codewords(version: int, ecc: Ecc, expected: int) -> None:
    assert num_data_codewords(version, ecc) == expected


@pytest.mark.parametrize("version", range(1, 41))
def test_block_structure_adds_up(version: int) -> None:
    for ecc in ECC_LEVELS:
        blocks = num_error_correction_blocks(version, ecc)
        ec_total = blocks * ecc_codewords_per_block(version, ecc)
        assert num_data_codewords(version, ecc) + ec_total == num_raw_codewords(version)
    assert symbol_size(version) == 4 * version + 17


def test_ecc_parse() -> None:
    assert Ecc.parse("L") is Ecc.LOW
    assert Ecc.parse("quartile") is Ecc.QUARTILE
    assert Ecc.parse(Ecc.HIGH) is Ecc.HIGH
    with pytest.raises(ValueError):
        Ecc.parse("X")


def test_get_total_bits() -> None:
    segs = [make_alphanumeric("HELLO WORLD")]
    assert get_total_bits(segs, 1) == 4 + 9 + 61
    assert get_total_bits([], 1) == 0


def test_get_total_bits_count_overflow() -> None:
    # 256 bytes do not fit the 8-bit count field of versions 1-9
    segs = [make_bytes(b"x" * 256)]
    assert get_total_bits(segs, 9) is None
    assert get_total_bits(segs, 10) == 4 + 16 + 256 * 8


def test_get_total_bits_huge_count_is_none() -> None:
    segs = [Segment(Mode.NUMERIC, 1 << 20, ())]
    assert get_total_bits(segs, 40) is None


def test_select_version_smallest_fit() -> None:
    segs = [make_bytes(b"https://example.com")]
    assert select_version(segs, Ecc.MEDIUM, 1, 40) == (2, 4 + 8 + 19 * 8)
    assert select_version(segs, Ecc.MEDIUM, 5, 40)[0] == 5


def test_select_version_too_long() -> None:
    segs = [make_bytes(b"x" * 100)]
    with pytest.raises(DataTooLongError):
        select_version(segs, Ecc.HIGH, 1, 3)


def test_data_too_long_for_version_40() -> None:
    segs = [make_numeric("1" * 7090)]
    with pytest.raises(DataTooLongError):
        select_version(segs, Ecc.LOW, 1, 40)
    assert select_version([make_numeric("1" * 7089)], Ecc.LOW, 1, 40)[0] == 40


def test_boost_ecc_keeps_version() -> None:
    segs = [make_numeric("01234567")]
    version, _ = select_version(segs, Ecc.LOW, 1, 40)
    assert version == 1
    # 4 + 10 + 27 = 41 bits fit even the 72 bits of 1-H
    assert boost_ecc(segs, version, Ecc.LOW) is Ecc.HIGH


def test_boost_ecc_stops_at_capacity() -> None:
    # 4 + 9 + 61 = 74 bits: fits 1-Q (104) but not 1-H (72)
    segs = [make_alphanumeric("HELLO WORLD")]
    assert boost_ecc(segs, 1, Ecc.LOW) is Ecc.QUARTILE
    assert boost_ecc(segs, 1, Ecc.HIGH) is Ecc.HIGH


def test_data_capacity_bits() -> None:
    assert data_capacity_bits(1, Ecc.MEDIUM) == 128
