# -*- coding: utf-8 -*-
"""
QR Code Functional Areas Module

This module builds the fixed structure of a QR code symbol according to
ISO/IEC 18004: finder patterns with their separators, timing patterns,
alignment patterns, the dark module, and the reserved format and version
information areas. It also computes and draws the BCH protected format and
version information once the mask is known.

Matrices are lists of rows indexed [row][col]; True means dark.

Functions:
    compute_alignment_centers: Alignment pattern centre coordinates
    build_function_template: Module grid with function patterns drawn
    build_function_mask: Masks for functional and separator areas
    format_bits: 15-bit format information word
    version_bits: 18-bit version information word
    draw_format_bits: Write both copies of the format information
    draw_version_bits: Write both copies of the version information
"""

from typing import List, Tuple

from .tables import ALIGNMENT_PATTERN_POSITIONS, Ecc, check_version, symbol_size

Matrix = List[List[bool]]

# BCH(15,5) generator x^10 + x^8 + x^5 + x^4 + x^2 + x + 1
FORMAT_GENERATOR = 0x537
# XOR mask applied to format information so it is never all zero
FORMAT_MASK = 0x5412
# BCH(18,6) generator x^12 + x^11 + x^10 + x^9 + x^8 + x^5 + x^2 + 1
VERSION_GENERATOR = 0x1F25


def compute_alignment_centers(version: int) -> List[int]:
    """
    Centre coordinates of alignment patterns for a QR version.

    Alignment patterns are placed at every combination of these row and
    column coordinates, except the three that overlap finder patterns.
    Version 1 has none.

    Args:
        version (int): QR code version (1-40)

    Returns:
        List[int]: Centre coordinates in ascending order

    Example:
        >>> compute_alignment_centers(7)
        [6, 22, 38]
    """
    check_version(version)
    return list(ALIGNMENT_PATTERN_POSITIONS[version])


def _set_function(modules: Matrix, is_function: Matrix, row: int, col: int, dark: bool) -> None:
    modules[row][col] = dark
    is_function[row][col] = True


def build_function_template(version: int) -> Tuple[Matrix, Matrix]:
    """
    Allocate the module grid and draw every function pattern.

    Format and version information areas are reserved (marked functional)
    and left light; they are written by draw_format_bits / draw_version_bits
    after the mask is chosen.

    Args:
        version (int): QR code version (1-40)

    Returns:
        Tuple[Matrix, Matrix]: (modules, is_function)
    """
    check_version(version)
    size = symbol_size(version)
    modules = [[False] * size for _ in range(size)]
    is_function = [[False] * size for _ in range(size)]

    # 1. TIMING PATTERNS (row 6 and column 6, dark on even indices)
    for i in range(size):
        _set_function(modules, is_function, 6, i, i % 2 == 0)
        _set_function(modules, is_function, i, 6, i % 2 == 0)

    # 2. FINDER PATTERNS (7x7) with 1-module light separators
    # Pattern: 1111111
    #          1000001
    #          1011101
    #          1011101
    #          1011101
    #          1000001
    #          1111111
    for (cr, cc) in [(3, 3), (3, size - 4), (size - 4, 3)]:
        for dr in range(-4, 5):
            for dc in range(-4, 5):
                r, c = cr + dr, cc + dc
                if 0 <= r < size and 0 <= c < size:
                    dist = max(abs(dr), abs(dc))
                    _set_function(modules, is_function, r, c, dist not in (2, 4))

    # 3. ALIGNMENT PATTERNS (5x5, v2+)
    # Pattern: 11111
    #          10001
    #          10101
    #          10001
    #          11111
    centers = compute_alignment_centers(version)
    last = len(centers) - 1
    for i, cy in enumerate(centers):
        for j, cx in enumerate(centers):
            # Skip the three corners occupied by finder patterns
            if (i == 0 and j == 0) or (i == 0 and j == last) or (i == last and j == 0):
                continue
            for dr in range(-2, 3):
                for dc in range(-2, 3):
                    _set_function(modules, is_function, cy + dr, cx + dc,
                                  max(abs(dr), abs(dc)) != 1)

    # 4. DARK MODULE (always dark, beside the bottom-left separator)
    _set_function(modules, is_function, size - 8, 8, True)

    # 5. FORMAT INFORMATION areas (2 x 15 bits)
    for i in range(9):
        if i != 6:
            is_function[8][i] = True
            is_function[i][8] = True
    for i in range(8):
        is_function[8][size - 1 - i] = True
    for i in range(7):
        is_function[size - 1 - i][8] = True

    # 6. VERSION INFORMATION areas (2 x 18 bits, v7+)
    if version >= 7:
        for i in range(18):
            a, b = size - 11 + i % 3, i // 3
            is_function[b][a] = True
            is_function[a][b] = True

    return modules, is_function


def build_function_mask(size: int, version: int) -> Tuple[Matrix, Matrix]:
    """
    Build masks identifying functional and separator areas in QR codes.

    Args:
        size (int): QR code size in modules (21 for v1, 25 for v2, etc.)
        version (int): QR code version (1-40)

    Returns:
        Tuple[Matrix, Matrix]: (func_mask, sep_mask)
            - func_mask[r][c] = True if module (r,c) is functional
            - sep_mask[r][c] = True if module (r,c) is in a finder separator

    Example:
        >>> func_mask, sep_mask = build_function_mask(21, 1)
        >>> sum(sum(row) for row in func_mask)
        233
    """
    if size != symbol_size(version):
        raise ValueError(f"Size {size} does not match version {version}")
    _, func_mask = build_function_template(version)
    sep_mask = [[False] * size for _ in range(size)]

    for (r0, c0) in [(0, 0), (0, size - 7), (size - 7, 0)]:
        for r in range(r0 - 1, r0 + 8):
            for c in range(c0 - 1, c0 + 8):
                if 0 <= r < size and 0 <= c < size:
                    if r < r0 or r > r0 + 6 or c < c0 or c > c0 + 6:
                        sep_mask[r][c] = True

    return func_mask, sep_mask


def format_bits(ecc: Ecc, mask: int) -> int:
    """
    15-bit format information: 5 data bits, 10 BCH bits, XOR FORMAT_MASK.

    Example:
        >>> format(format_bits(Ecc.LOW, 4), '015b')
        '110011000101111'
    """
    data = ecc.format_bits << 3 | mask
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ ((rem >> 9) * FORMAT_GENERATOR)
    bits = (data << 10 | rem) ^ FORMAT_MASK
    assert bits >> 15 == 0
    return bits


def version_bits(version: int) -> int:
    """
    18-bit version information: 6 version bits followed by 12 BCH bits.

    Example:
        >>> format(version_bits(7), '018b')
        '000111110010010100'
    """
    rem = version
    for _ in range(12):
        rem = (rem << 1) ^ ((rem >> 11) * VERSION_GENERATOR)
    bits = version << 12 | rem
    assert bits >> 18 == 0
    return bits


def draw_format_bits(modules: Matrix, ecc: Ecc, mask: int) -> None:
    """Write both copies of the format information; bit 0 is the LSB."""
    size = len(modules)
    bits = format_bits(ecc, mask)

    def bit(i: int) -> bool:
        return (bits >> i) & 1 != 0

    # First copy, around the top-left finder
    for i in range(6):
        modules[i][8] = bit(i)
    modules[7][8] = bit(6)
    modules[8][8] = bit(7)
    modules[8][7] = bit(8)
    for i in range(9, 15):
        modules[8][14 - i] = bit(i)

    # Second copy, split between top-right and bottom-left
    for i in range(8):
        modules[8][size - 1 - i] = bit(i)
    for i in range(8, 15):
        modules[size - 15 + i][8] = bit(i)
    modules[size - 8][8] = True


def draw_version_bits(modules: Matrix, version: int) -> None:
    """Write both 6x3 copies of the version information (v7+ only)."""
    if version < 7:
        return
    size = len(modules)
    bits = version_bits(version)
    for i in range(18):
        dark = (bits >> i) & 1 != 0
        a, b = size - 11 + i % 3, i // 3
        modules[b][a] = dark
        modules[a][b] = dark


def read_format_copies(modules: Matrix) -> Tuple[int, int]:
    """Read back both 15-bit format information copies (first, second)."""
    size = len(modules)
    first_coords = ([(i, 8) for i in range(6)] + [(7, 8), (8, 8), (8, 7)]
                    + [(8, 14 - i) for i in range(9, 15)])
    second_coords = ([(8, size - 1 - i) for i in range(8)]
                     + [(size - 15 + i, 8) for i in range(8, 15)])
    first = sum(int(modules[r][c]) << i for i, (r, c) in enumerate(first_coords))
    second = sum(int(modules[r][c]) << i for i, (r, c) in enumerate(second_coords))
    return first, second


def read_version_copies(modules: Matrix) -> Tuple[int, int]:
    """Read back both 18-bit version information copies (top-right, bottom-left)."""
    size = len(modules)
    top_right = 0
    bottom_left = 0
    for i in range(18):
        a, b = size - 11 + i % 3, i // 3
        top_right |= int(modules[b][a]) << i
        bottom_left |= int(modules[a][b]) << i
    return top_right, bottom_left
