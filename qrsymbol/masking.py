# -*- coding: utf-8 -*-
"""
Data Masking Module

The eight mask patterns of ISO/IEC 18004 section 7.8.2 and the selection of
the best one. A mask inverts every non-functional module for which its
formula on (row, col) is true. Candidates are scored on the grid before
format information is written.

Functions:
    apply_mask: XOR a mask pattern onto the data modules (self-inverse)
    mask_penalties: Penalty score of every mask pattern
    choose_mask: Automatic (lowest penalty) or forced mask selection
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .exceptions import ValueOutOfRangeError
from .penalties import compute_mask_penalty

logger = logging.getLogger(__name__)

Matrix = List[List[bool]]

AUTO_MASK = -1

MASK_PATTERNS: Tuple[Callable[[int, int], bool], ...] = (
    lambda r, c: (r + c) % 2 == 0,
    lambda r, c: r % 2 == 0,
    lambda r, c: c % 3 == 0,
    lambda r, c: (r + c) % 3 == 0,
    lambda r, c: (r // 2 + c // 3) % 2 == 0,
    lambda r, c: (r * c) % 2 + (r * c) % 3 == 0,
    lambda r, c: ((r * c) % 2 + (r * c) % 3) % 2 == 0,
    lambda r, c: ((r + c) % 2 + (r * c) % 3) % 2 == 0,
)


def check_mask(mask: int) -> None:
    """
    Validate a mask argument.

    Args:
        mask (int): 0-7 for a fixed pattern, or AUTO_MASK (-1)

    Raises:
        ValueOutOfRangeError: If mask is outside -1..7
    """
    if not AUTO_MASK <= mask <= 7:
        raise ValueOutOfRangeError(f"Mask value out of range: {mask}")


def apply_mask(modules: Matrix, is_function: Matrix, mask: int) -> None:
    """
    XOR a mask pattern onto all non-functional modules, in place.

    Applying the same mask twice restores the original grid.
    """
    if not 0 <= mask <= 7:
        raise ValueOutOfRangeError(f"Mask value out of range: {mask}")
    pattern = MASK_PATTERNS[mask]
    size = len(modules)
    for r in range(size):
        row = modules[r]
        func_row = is_function[r]
        for c in range(size):
            if not func_row[c] and pattern(r, c):
                row[c] = not row[c]


def mask_penalties(modules: Matrix, is_function: Matrix) -> Dict[int, int]:
    """
    Penalty of each mask pattern (0-7) for an unmasked grid.

    Format information is not drawn yet when this runs, so those modules
    are scored as light. The grid is restored before returning.
    """
    scores = {}
    for mask in range(8):
        apply_mask(modules, is_function, mask)
        scores[mask] = compute_mask_penalty(modules)
        apply_mask(modules, is_function, mask)
    return scores


def choose_mask(modules: Matrix, is_function: Matrix, mask: int = AUTO_MASK) -> Tuple[int, Optional[int]]:
    """
    Select the mask to apply.

    Args:
        modules (Matrix): Unmasked grid with codewords placed
        is_function (Matrix): Functional area mask
        mask (int): 0-7 to force a mask, -1 for automatic selection

    Returns:
        Tuple[int, Optional[int]]: (mask, penalty); penalty is None when the
            mask was forced and no evaluation took place

    Raises:
        ValueOutOfRangeError: If mask is outside -1..7
    """
    check_mask(mask)
    if mask != AUTO_MASK:
        logger.debug("Using forced mask %d", mask)
        return mask, None

    # Scored with the format (and version) areas still light. ISO/IEC 18004
    # scores the finished symbol, so other encoders can pick another mask.
    scores = mask_penalties(modules, is_function)
    # Ties go to the smallest mask id
    best_mask = min(scores, key=lambda m: (scores[m], m))
    logger.debug("Selected mask %d (penalty %d) from %s", best_mask, scores[best_mask], scores)
    return best_mask, scores[best_mask]
