# -*- coding: utf-8 -*-
"""
Capacity & Version Selection Module

Computes how many bits a list of segments needs at a given version and picks
the smallest version (and optionally the strongest ECC level) that holds it.

Functions:
    get_total_bits: Encoded length of segments at a version, or None
    data_capacity_bits: Data bit capacity of a version/ECC level
    select_version: Smallest fitting version within a range
    boost_ecc: Strongest ECC level still fitting a version
"""

import logging
from typing import Optional, Sequence, Tuple

from .bitbuffer import MAX_BIT_LENGTH
from .exceptions import DataTooLongError
from .segments import Segment
from .tables import ECC_LEVELS, Ecc, num_data_codewords

logger = logging.getLogger(__name__)


def get_total_bits(segments: Sequence[Segment], version: int) -> Optional[int]:
    """
    Number of bits needed to encode the segments at a version.

    Each segment costs a 4-bit mode indicator, its character count field and
    its data bits. The terminator and padding are not included.

    Returns:
        Optional[int]: Bit count, or None if a segment's character count does
            not fit its count field or the total exceeds MAX_BIT_LENGTH
    """
    result = 0
    for seg in segments:
        ccbits = seg.mode.char_count_bits(version)
        if seg.num_chars >= (1 << ccbits):
            return None
        result += 4 + ccbits + seg.bit_length
        if result > MAX_BIT_LENGTH:
            return None
    return result


def data_capacity_bits(version: int, ecc: Ecc) -> int:
    """
    Number of data bits a symbol holds, after error correction is reserved.

    Args:
        version (int): QR code version (1-40)
        ecc (Ecc): Error correction level

    Returns:
        int: 8 times the data codeword count of the version/ECC level

    Example:
        >>> from qrsymbol.capacity import data_capacity_bits
        >>> from qrsymbol.tables import Ecc
        >>> data_capacity_bits(1, Ecc.MEDIUM)
        128

    Note:
        Remainder bits of the module grid are not part of the capacity.
    """
    return num_data_codewords(version, ecc) * 8


def select_version(
    segments: Sequence[Segment],
    ecc: Ecc,
    min_version: int,
    max_version: int
) -> Tuple[int, int]:
    """
    Find the smallest version in [min_version, max_version] holding the segments.

    Returns:
        Tuple[int, int]: (version, data_used_bits)

    Raises:
        DataTooLongError: If no version in the range fits at this ECC level
    """
    used = None
    for version in range(min_version, max_version + 1):
        capacity = data_capacity_bits(version, ecc)
        used = get_total_bits(segments, version)
        if used is not None and used <= capacity:
            logger.debug("Selected version %d (%d of %d data bits, ECC %s)",
                         version, used, capacity, ecc.letter)
            return version, used

    if used is None:
        raise DataTooLongError("Segment too long")
    raise DataTooLongError(
        f"Data length = {used} bits, Max capacity = {data_capacity_bits(max_version, ecc)} bits")


def boost_ecc(segments: Sequence[Segment], version: int, ecc: Ecc) -> Ecc:
    """
    Raise the ECC level as far as possible without changing the version.

    Levels are tried in ascending strength order; the strongest one whose
    data capacity still holds the segments wins.
    """
    used = get_total_bits(segments, version)
    if used is None:
        return ecc
    best = ecc
    for level in ECC_LEVELS[ecc.ordinal + 1:]:
        if used <= data_capacity_bits(version, level):
            best = level
    if best is not ecc:
        logger.debug("Boosted ECC from %s to %s at version %d", ecc.letter, best.letter, version)
    return best
