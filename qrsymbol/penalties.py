# -*- coding: utf-8 -*-
"""
QR Code Mask Penalty Evaluation Module

This module implements the mask evaluation rules of ISO/IEC 18004:2015
section 7.8.3. Each candidate masked grid receives a penalty score from four
rules (N1-N4); the mask with the lowest total is selected.

Functions:
    penalty_N1: Runs of 5+ same-colour modules in rows and columns
    penalty_N2: 2x2 blocks of a single colour
    penalty_N3: Finder-like 1:1:3:1:1 patterns next to a light area
    penalty_N4: Deviation of the dark module ratio from 50%
    penalty_breakdown: The four scores as a tuple
    compute_mask_penalty: Calculate total penalty score
"""

from typing import List, Sequence, Tuple

# Width of the light quiet zone assumed around the symbol
QUIET_ZONE = 4

_FINDER_LIKE = [1, 0, 1, 1, 1, 0, 1]


def _lines(rows: List[List[bool]]):
    """All rows, then all columns, as lists of bools."""
    n = len(rows)
    for r in range(n):
        yield rows[r]
    for c in range(n):
        yield [rows[r][c] for r in range(n)]


def _run_penalty(line: Sequence[bool]) -> int:
    score = 0
    run = 1
    for i in range(1, len(line)):
        if line[i] == line[i - 1]:
            run += 1
        else:
            if run >= 5:
                score += 3 + (run - 5)
            run = 1
    if run >= 5:
        score += 3 + (run - 5)
    return score


def penalty_N1(rows: List[List[bool]]) -> int:
    """
    Rule N1: each run of >= 5 same-colour modules costs 3 + (run_length - 5).

    Example:
        >>> penalty_N1([[True] * 6 + [False]] * 1)
        4
    """
    return sum(_run_penalty(line) for line in _lines(rows))


def penalty_N2(rows: List[List[bool]]) -> int:
    """Rule N2: each 2x2 block of a single colour costs 3 (blocks may overlap)."""
    score = 0
    n = len(rows)
    for r in range(n - 1):
        for c in range(n - 1):
            value = rows[r][c]
            if rows[r][c + 1] == value and rows[r + 1][c] == value and rows[r + 1][c + 1] == value:
                score += 3
    return score


def _pattern_1_1_3_1_1(seq: List[int]) -> List[int]:
    """
    Start indices of dark:light:dark:dark:dark:light:dark runs in seq that
    have 4 light modules on at least one side.

    Positions outside seq belong to the quiet zone and count as light.
    """
    padded = [0] * QUIET_ZONE + seq + [0] * QUIET_ZONE
    indices = []
    for i in range(QUIET_ZONE, len(padded) - QUIET_ZONE - 6):
        if padded[i:i + 7] != _FINDER_LIKE:
            continue
        left_ok = not any(padded[i - 4:i])
        right_ok = not any(padded[i + 7:i + 11])
        if left_ok or right_ok:
            indices.append(i - QUIET_ZONE)
    return indices


def penalty_N3(rows: List[List[bool]]) -> int:
    """
    Rule N3: each finder-like pattern in a row or column costs 40.

    A 1:1:3:1:1 dark/light run counts once when at least one side has four
    light modules. Cells beyond the edge belong to the quiet zone (light).
    """
    score = 0
    for line in _lines(rows):
        seq = [1 if v else 0 for v in line]
        score += 40 * len(_pattern_1_1_3_1_1(seq))
    return score


def penalty_N4(rows: List[List[bool]]) -> int:
    """
    Rule N4: 10 * floor(|percent_dark - 50| / 5).

    Computed in integers: floor(|20 * dark - 10 * total| / total).
    """
    n = len(rows)
    total = n * n
    dark = sum(1 for row in rows for v in row if v)
    return 10 * (abs(20 * dark - 10 * total) // total)


def penalty_breakdown(matrix_bool: List[List[bool]]) -> Tuple[int, int, int, int]:
    """
    Score a matrix with each penalty rule separately.

    Args:
        matrix_bool (List[List[bool]]): Square QR matrix (True=dark); any
            truthy values are accepted

    Returns:
        Tuple[int, int, int, int]: (N1, N2, N3, N4) scores

    Example:
        >>> from qrsymbol.penalties import penalty_breakdown
        >>> penalty_breakdown([[True, True], [True, True]])
        (0, 3, 0, 100)
    """
    rows = [[bool(v) for v in row] for row in matrix_bool]
    return penalty_N1(rows), penalty_N2(rows), penalty_N3(rows), penalty_N4(rows)


def compute_mask_penalty(matrix_bool: List[List[bool]]) -> int:
    """
    Calculate total mask penalty score for a QR code matrix.

    Args:
        matrix_bool (List[List[bool]]): QR matrix (True=dark, False=light)

    Returns:
        int: Total penalty score (lower is better)
    """
    return sum(penalty_breakdown(matrix_bool))
