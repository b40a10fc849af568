import pytest

from qrsymbol.codewords import add_ecc_and_interleave, build_data_codewords, split_blocks
from qrsymbol.exceptions import DataTooLongError
from qrsymbol.reed_solomon import GF256, ReedSolomonEncoder, rs_encoder
from qrsymbol.segments import make_alphanumeric, make_bytes
from qrsymbol.tables import Ecc, num_data_codewords, num_raw_codewords

HELLO_DATA_1M = [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]
HELLO_EC_1M = [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


def test_gf256_tables() -> None:
    gf = GF256()
    assert gf.power(0) == 1
    assert gf.power(8) == 0x1D
    assert gf.power(255) == 1
    for a in range(1, 256):
        assert gf.multiply(a, gf.inverse(a)) == 1
    assert gf.multiply(0, 7) == 0
    with pytest.raises(ZeroDivisionError):
        gf.inverse(0)


def test_generator_polynomials() -> None:
    encoder = ReedSolomonEncoder()
    assert encoder.build_generator(1) == [1]
    assert encoder.build_generator(2) == [3, 2]
    # Degree 7 generator from ISO/IEC 18004 Annex A, as integers
    assert encoder.build_generator(7) == [127, 122, 154, 164, 11, 68, 117]
    with pytest.raises(ValueError):
        encoder.build_generator(0)


def test_generator_cache_returns_copies() -> None:
    encoder = ReedSolomonEncoder()
    first = encoder.build_generator(10)
    first[0] = 0
    assert encoder.build_generator(10)[0] != 0


def test_hello_world_data_codewords() -> None:
    data = build_data_codewords([make_alphanumeric("HELLO WORLD")], 1, Ecc.MEDIUM)
    assert data == HELLO_DATA_1M


def test_hello_world_ec_codewords() -> None:
    assert rs_encoder.encode(HELLO_DATA_1M, 10) == HELLO_EC_1M


def test_single_block_interleave_is_concatenation() -> None:
    result = add_ecc_and_interleave(HELLO_DATA_1M, 1, Ecc.MEDIUM)
    assert result == HELLO_DATA_1M + HELLO_EC_1M


def test_empty_segments_pad_only() -> None:
    data = build_data_codewords([], 1, Ecc.LOW)
    assert len(data) == 19
    # 4-bit terminator and 4 zero bits, then alternating pad bytes
    assert data[0] == 0
    assert data[1:5] == [0xEC, 0x11, 0xEC, 0x11]


def test_terminator_shortened_at_capacity() -> None:
    # 4 + 8 + 17 * 8 = 148 bits; 1-L holds 152, leaving exactly the terminator
    data = build_data_codewords([make_bytes(b"x" * 17)], 1, Ecc.LOW)
    assert len(data) == 19
    assert data[0] == 0x41
    # Low nibble of the last 'x' followed by the 4-bit terminator, no pad bytes
    assert data[-1] == 0x80


def test_data_too_long() -> None:
    with pytest.raises(DataTooLongError):
        build_data_codewords([make_bytes(b"x" * 20)], 1, Ecc.LOW)


def test_split_blocks_short_blocks_first() -> None:
    # Version 5-Q: two blocks of 15 data codewords, then two of 16
    data = list(range(62))
    blocks = split_blocks(data, 5, Ecc.QUARTILE)
    assert [len(b) for b in blocks] == [15, 15, 16, 16]
    assert sum(blocks, []) == data


def test_split_blocks_rejects_wrong_length() -> None:
    with pytest.raises(ValueError):
        split_blocks([0] * 10, 5, Ecc.QUARTILE)


def test_interleave_order_version_5q() -> None:
    data = list(range(62))
    result = add_ecc_and_interleave(data, 5, Ecc.QUARTILE)
    assert len(result) == num_raw_codewords(5)
    # Column-wise: first codeword of each block, then the second ones
    assert result[:8] == [0, 15, 30, 46, 1, 16, 31, 47]
    # Only the long blocks have a 16th data codeword
    assert result[60:62] == [45, 61]
    blocks = split_blocks(data, 5, Ecc.QUARTILE)
    first_ec = [rs_encoder.encode(b, 18)[0] for b in blocks]
    assert result[62:66] == first_ec


@pytest.mark.parametrize("version", [1, 7, 14, 27, 40])
@pytest.mark.parametrize("ecc", [Ecc.LOW, Ecc.HIGH])
def test_codeword_counts(version: int, ecc: Ecc) -> None:
    data = build_data_codewords([make_bytes(b"abc")], version, ecc)
    assert len(data) == num_data_codewords(version, ecc)
    assert len(add_ecc_and_interleave(data, version, ecc)) == num_raw_codewords(version)
