# -*- coding: utf-8 -*-
"""
Codeword Construction Module

Turns segments into the final codeword sequence of a symbol:

1. Concatenate mode indicator, character count and data bits of each segment
2. Add the terminator, pad to a byte boundary, then add 0xEC/0x11 pad bytes
3. Split the data codewords into RS blocks and compute EC codewords per block
4. Interleave data codewords, then EC codewords, one per block at a time

Functions:
    build_data_codewords: Data codewords (with padding) for a version/level
    split_blocks: Data codewords grouped into RS blocks
    add_ecc_and_interleave: Final interleaved codeword sequence
"""

from typing import List, Sequence

from .bitbuffer import BitBuffer
from .capacity import data_capacity_bits
from .exceptions import DataTooLongError
from .reed_solomon import rs_encoder
from .segments import Segment
from .tables import (
    PAD_CODEWORDS,
    Ecc,
    ecc_codewords_per_block,
    num_data_codewords,
    num_error_correction_blocks,
    num_raw_codewords,
)


def build_data_codewords(segments: Sequence[Segment], version: int, ecc: Ecc) -> List[int]:
    """
    Build the padded data codewords for the segments.

    Args:
        segments (Sequence[Segment]): Segments to encode, in order
        version (int): Symbol version (1-40)
        ecc (Ecc): Error correction level

    Returns:
        List[int]: Exactly num_data_codewords(version, ecc) byte values

    Example:
        >>> from qrsymbol.segments import make_alphanumeric
        >>> build_data_codewords([make_alphanumeric("HELLO WORLD")], 1, Ecc.MEDIUM)[:4]
        [32, 91, 11, 120]
    """
    bb = BitBuffer()
    for seg in segments:
        ccbits = seg.mode.char_count_bits(version)
        if seg.num_chars >= (1 << ccbits):
            raise DataTooLongError("Segment too long")
        bb.append_bits(seg.mode.indicator, 4)
        bb.append_bits(seg.num_chars, ccbits)
        bb.append_data(seg.bits)

    capacity = data_capacity_bits(version, ecc)
    if len(bb) > capacity:
        raise DataTooLongError(f"Data length = {len(bb)} bits, Max capacity = {capacity} bits")

    # Terminator (up to 4 bits), then zero bits to the next byte boundary
    bb.append_bits(0, min(4, capacity - len(bb)))
    bb.append_bits(0, -len(bb) % 8)

    codewords = bb.to_bytes()
    for i in range(num_data_codewords(version, ecc) - len(codewords)):
        codewords.append(PAD_CODEWORDS[i % 2])
    return codewords


def split_blocks(data: Sequence[int], version: int, ecc: Ecc) -> List[List[int]]:
    """
    Split data codewords into RS blocks.

    When the raw codeword count is not divisible by the block count, the
    first blocks (group 1) hold one data codeword fewer than the rest.
    """
    if len(data) != num_data_codewords(version, ecc):
        raise ValueError("Invalid number of data codewords")

    num_blocks = num_error_correction_blocks(version, ecc)
    block_ecc_len = ecc_codewords_per_block(version, ecc)
    raw_codewords = num_raw_codewords(version)
    num_short_blocks = num_blocks - raw_codewords % num_blocks
    short_block_len = raw_codewords // num_blocks

    blocks = []
    k = 0
    for i in range(num_blocks):
        data_len = short_block_len - block_ecc_len + (0 if i < num_short_blocks else 1)
        blocks.append(list(data[k:k + data_len]))
        k += data_len
    return blocks


def add_ecc_and_interleave(data: Sequence[int], version: int, ecc: Ecc) -> List[int]:
    """
    Append RS error correction to each block and interleave all blocks.

    Args:
        data (Sequence[int]): Data codewords from build_data_codewords
        version (int): Symbol version (1-40)
        ecc (Ecc): Error correction level

    Returns:
        List[int]: num_raw_codewords(version) codewords in placement order
    """
    block_ecc_len = ecc_codewords_per_block(version, ecc)
    blocks = split_blocks(data, version, ecc)
    ec_blocks = [rs_encoder.encode(block, block_ecc_len) for block in blocks]

    result = []
    longest = max(len(block) for block in blocks)
    for i in range(longest):
        for block in blocks:
            # Short blocks have no codeword at the last index
            if i < len(block):
                result.append(block[i])
    for i in range(block_ecc_len):
        for ec in ec_blocks:
            result.append(ec[i])

    assert len(result) == num_raw_codewords(version)
    return result
