# -*- coding: utf-8 -*-
"""
Data Placement Module

Places the interleaved codeword bits into every non-functional module using
the zigzag order of ISO/IEC 18004 section 7.7.3: column pairs from right to
left, alternating upward and downward sweeps, skipping the vertical timing
column 6.

Functions:
    data_module_coords: Non-functional module coordinates in placement order
    place_codewords: Write codeword bits into the module grid
"""

from typing import List, Sequence, Tuple


def data_module_coords(size: int, is_function: List[List[bool]]) -> List[Tuple[int, int]]:
    """
    Get coordinates of non-functional modules in standard QR placement order.

    Args:
        size (int): QR code size in modules
        is_function (List[List[bool]]): Functional area mask

    Returns:
        List[Tuple[int, int]]: List of (row, col) coordinates in placement order
    """
    coords = []
    upward = True
    col = size - 1

    while col > 0:
        if col == 6:  # Skip timing pattern column
            col -= 1

        for i in range(size):
            r = (size - 1 - i) if upward else i
            # Process pair of columns [col, col-1], right column first
            for c in (col, col - 1):
                if not is_function[r][c]:
                    coords.append((r, c))

        upward = not upward
        col -= 2

    return coords


def place_codewords(
    modules: List[List[bool]],
    is_function: List[List[bool]],
    codewords: Sequence[int]
) -> int:
    """
    Draw codeword bits (MSB first) into the data area.

    Modules left over after the last bit (remainder bits) are set light.

    Args:
        modules (List[List[bool]]): Grid to write into, modified in place
        is_function (List[List[bool]]): Functional area mask
        codewords (Sequence[int]): Interleaved data + EC codewords

    Returns:
        int: Number of bits placed

    Raises:
        ValueError: If there are more bits than data modules
    """
    coords = data_module_coords(len(modules), is_function)
    total_bits = len(codewords) * 8
    if total_bits > len(coords):
        raise ValueError(f"{total_bits} bits do not fit in {len(coords)} data modules")

    for i, (r, c) in enumerate(coords):
        if i < total_bits:
            modules[r][c] = (codewords[i >> 3] >> (7 - (i & 7))) & 1 != 0
        else:
            modules[r][c] = False
    return total_bits
