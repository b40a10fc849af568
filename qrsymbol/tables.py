# -*- coding: utf-8 -*-
"""
QR Code Lookup Tables Module

Read-only constants from ISO/IEC 18004:2015 used by the encoder: error
correction levels, codeword counts, block structure and alignment pattern
coordinates. The tables are reproduced from the standard, not derived.

Classes:
    Ecc: Error correction level

Functions:
    num_raw_codewords: Total codewords (data + EC) of a version
    ecc_codewords_per_block: EC codewords in each block
    num_error_correction_blocks: Number of RS blocks
    num_data_codewords: Data codewords available for version/level
"""

from enum import Enum
from typing import Tuple, Union

MIN_VERSION = 1
MAX_VERSION = 40


class Ecc(Enum):
    """
    Error correction level.

    Each member carries (ordinal, format_bits): the ordinal indexes the
    tables below, format_bits is the 2-bit code written in format info.
    """

    LOW = (0, 1)       # ~7% of codewords recoverable
    MEDIUM = (1, 0)    # ~15%
    QUARTILE = (2, 3)  # ~25%
    HIGH = (3, 2)      # ~30%

    def __init__(self, ordinal: int, format_bits: int):
        self.ordinal = ordinal
        self.format_bits = format_bits

    @property
    def letter(self) -> str:
        return self.name[0]

    @classmethod
    def parse(cls, value: Union["Ecc", str]) -> "Ecc":
        """
        Accept an Ecc member, a level letter ('L', 'M', 'Q', 'H') or a name.

        Example:
            >>> Ecc.parse('m') is Ecc.MEDIUM
            True
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        for level in cls:
            if text in (level.name, level.letter):
                return level
        raise ValueError(f"Invalid error correction level: {value!r}")


# Levels in ascending strength order
ECC_LEVELS: Tuple[Ecc, ...] = (Ecc.LOW, Ecc.MEDIUM, Ecc.QUARTILE, Ecc.HIGH)

# Total number of codewords (data + EC) per version, index 0 unused
_TOTAL_CODEWORDS = (
    -1,
    26, 44, 70, 100, 134, 172, 196, 242, 292, 346,
    404, 466, 532, 581, 655, 733, 815, 901, 991, 1085,
    1156, 1258, 1364, 1474, 1588, 1706, 1828, 1921, 2051, 2185,
    2323, 2465, 2611, 2761, 2876, 3034, 3196, 3362, 3532, 3706,
)

# EC codewords per block, indexed [ecc.ordinal][version]
_ECC_CODEWORDS_PER_BLOCK = (
    # Version: (index 0 unused)
    # 1   2   3   4   5   6   7   8   9  10  11  12  13  14  15  16  17  18  19  20  21  22  23  24  25  26  27  28  29  30  31  32  33  34  35  36  37  38  39  40
    (-1, 7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28, 28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # L
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26, 26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),  # M
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30, 28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # Q
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28, 30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # H
)

# Number of RS blocks, indexed [ecc.ordinal][version]
_NUM_ERROR_CORRECTION_BLOCKS = (
    # 1  2  3  4  5  6  7  8  9 10 11 12 13 14 15 16 17 18 19 20 21 22 23 24 25 26 27 28 29 30 31 32 33 34 35 36 37 38 39 40
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4, 4, 4, 4, 4, 6, 6, 6, 6, 7, 8, 8, 9, 9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),  # L
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5, 5, 8, 9, 9, 10, 10, 11, 13, 14, 16, 17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),  # M
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8, 8, 10, 12, 16, 12, 17, 16, 18, 21, 20, 23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),  # Q
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25, 25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),  # H
)

# Alignment pattern centre coordinates per version (ISO/IEC 18004 Annex E)
ALIGNMENT_PATTERN_POSITIONS = (
    (),
    (),
    (6, 18),
    (6, 22),
    (6, 26),
    (6, 30),
    (6, 34),
    (6, 22, 38),
    (6, 24, 42),
    (6, 26, 46),
    (6, 28, 50),
    (6, 30, 54),
    (6, 32, 58),
    (6, 34, 62),
    (6, 26, 46, 66),
    (6, 26, 48, 70),
    (6, 26, 50, 74),
    (6, 30, 54, 78),
    (6, 30, 56, 82),
    (6, 30, 58, 86),
    (6, 34, 62, 90),
    (6, 28, 50, 72, 94),
    (6, 26, 50, 74, 98),
    (6, 30, 54, 78, 102),
    (6, 28, 54, 80, 106),
    (6, 32, 58, 84, 110),
    (6, 30, 58, 86, 114),
    (6, 34, 62, 90, 118),
    (6, 26, 50, 74, 98, 122),
    (6, 30, 54, 78, 102, 126),
    (6, 26, 52, 78, 104, 130),
    (6, 30, 56, 82, 108, 134),
    (6, 34, 60, 86, 112, 138),
    (6, 30, 58, 86, 114, 142),
    (6, 34, 62, 90, 118, 146),
    (6, 30, 54, 78, 102, 126, 150),
    (6, 24, 50, 76, 102, 128, 154),
    (6, 28, 54, 80, 106, 132, 158),
    (6, 32, 58, 84, 110, 136, 162),
    (6, 26, 54, 82, 110, 138, 166),
    (6, 30, 58, 86, 114, 142, 170),
)

# Pad codewords appended after the terminator (11101100, 00010001)
PAD_CODEWORDS = (0xEC, 0x11)


def symbol_size(version: int) -> int:
    """Side length in modules: 21 for version 1, 177 for version 40."""
    return version * 4 + 17


def check_version(version: int) -> None:
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(f"Version number out of range: {version}")


def num_raw_codewords(version: int) -> int:
    check_version(version)
    return _TOTAL_CODEWORDS[version]


def ecc_codewords_per_block(version: int, ecc: Ecc) -> int:
    check_version(version)
    return _ECC_CODEWORDS_PER_BLOCK[ecc.ordinal][version]


def num_error_correction_blocks(version: int, ecc: Ecc) -> int:
    check_version(version)
    return _NUM_ERROR_CORRECTION_BLOCKS[ecc.ordinal][version]


def num_data_codewords(version: int, ecc: Ecc) -> int:
    """
    Number of 8-bit data codewords for a version and ECC level.

    Example:
        >>> num_data_codewords(1, Ecc.MEDIUM)
        16
    """
    return (num_raw_codewords(version)
            - ecc_codewords_per_block(version, ecc) * num_error_correction_blocks(version, ecc))
