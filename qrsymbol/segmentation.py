# -*- coding: utf-8 -*-
"""
Segmentation Planner Module

Splits a text into the sequence of numeric / alphanumeric / byte / kanji
segments with the smallest total encoded length.

The count field width depends on the version band (1-9, 10-26, 27-40), and
the version depends on the encoded length. make_segments_optimally resolves
this by walking versions upwards from the lowest allowed one, re-planning
each time the band changes, and returning the first plan that fits.

Functions:
    optimal_segments: Minimum-length segmentation assuming a version band
    make_segments_optimally: Optimal segmentation that fits a version range
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from .capacity import data_capacity_bits, get_total_bits
from .exceptions import DataTooLongError, ValueOutOfRangeError
from .segments import (
    ALPHANUMERIC_CHARSET,
    Mode,
    Segment,
    kanji_value,
    make_alphanumeric,
    make_bytes,
    make_kanji,
    make_numeric,
    make_segments,
)
from .tables import MAX_VERSION, MIN_VERSION, Ecc

logger = logging.getLogger(__name__)

# Candidate modes in tie-break order
_MODES = (Mode.NUMERIC, Mode.ALPHANUMERIC, Mode.BYTE, Mode.KANJI)

# Characters per packing group: 3 digits -> 10 bits, 2 chars -> 11 bits
_GROUP_SIZE = {Mode.NUMERIC: 3, Mode.ALPHANUMERIC: 2, Mode.BYTE: 1, Mode.KANJI: 1}

# DP states: (mode, characters in the current run modulo the group size)
_STATES = tuple((mode, phase) for mode in _MODES for phase in range(_GROUP_SIZE[mode]))

_DIGITS = frozenset("0123456789")
_ALPHANUMERIC = frozenset(ALPHANUMERIC_CHARSET)


def _version_band(version: int) -> int:
    return (version + 7) // 17


def _char_cost(mode: Mode, phase: int, ch: str) -> Optional[int]:
    """Exact bits added by appending ch to a run currently at phase, or None."""
    if mode is Mode.NUMERIC:
        if ch not in _DIGITS:
            return None
        return 4 if phase == 0 else 3
    if mode is Mode.ALPHANUMERIC:
        if ch not in _ALPHANUMERIC:
            return None
        return 6 if phase == 0 else 5
    if mode is Mode.BYTE:
        return 8 * len(ch.encode("utf-8"))
    if kanji_value(ch) is None:
        return None
    return 13


def _plan_modes(text: str, version: int) -> List[Tuple[Mode, bool]]:
    """
    Fill the DP table and return, per character, (mode, starts_new_segment).

    table[i][s] holds (bits, segments, previous state, starts) for the best
    encoding of text[:i + 1] whose last character is in state s.

    Note:
        Candidates compare on fewer bits, then fewer segments. Within a cell
        continuing a run beats starting one; among final states the earlier
        mode in _MODES wins.
    """
    headers = {mode: 4 + mode.char_count_bits(version) for mode in _MODES}
    order = {state: idx for idx, state in enumerate(_STATES)}
    table: List[List[Optional[Tuple[int, int, Optional[int], bool]]]] = []

    for i, ch in enumerate(text):
        row: List[Optional[Tuple[int, int, Optional[int], bool]]] = [None] * len(_STATES)
        prev_row = table[i - 1] if i > 0 else None

        # Cheapest predecessor for starting a new segment at i
        start_from: Optional[int] = None
        start_key = (0, 0)
        if prev_row is not None:
            for s, cell in enumerate(prev_row):
                if cell is None:
                    continue
                key = (cell[0], cell[1])
                if start_from is None or key < start_key:
                    start_from, start_key = s, key

        for s, (mode, phase) in enumerate(_STATES):
            group = _GROUP_SIZE[mode]
            candidates = []

            # Continue the current run of this mode
            if prev_row is not None:
                prev_phase = (phase - 1) % group
                prev_state = order[(mode, prev_phase)]
                prev_cell = prev_row[prev_state]
                cost = _char_cost(mode, prev_phase, ch)
                if prev_cell is not None and cost is not None:
                    candidates.append((prev_cell[0] + cost, prev_cell[1], prev_state, False))

            # Start a new run: only valid for the phase after one character
            if phase == 1 % group:
                cost = _char_cost(mode, 0, ch)
                if cost is not None and (prev_row is None or start_from is not None):
                    candidates.append((start_key[0] + headers[mode] + cost,
                                       start_key[1] + 1, start_from, True))

            if candidates:
                row[s] = min(candidates, key=lambda c: (c[0], c[1], c[3]))
        table.append(row)

    # Best final state: fewer bits, then fewer segments, then earlier mode
    last = table[-1]
    end = min((s for s in range(len(_STATES)) if last[s] is not None),
              key=lambda s: (last[s][0], last[s][1], s))

    plan: List[Tuple[Mode, bool]] = []
    state: Optional[int] = end
    for i in range(len(text) - 1, -1, -1):
        cell = table[i][state]
        plan.append((_STATES[state][0], cell[3]))
        state = cell[2]
    plan.reverse()
    return plan


def _make_segment(mode: Mode, chunk: str) -> Segment:
    if mode is Mode.NUMERIC:
        return make_numeric(chunk)
    if mode is Mode.ALPHANUMERIC:
        return make_alphanumeric(chunk)
    if mode is Mode.KANJI:
        return make_kanji(chunk)
    return make_bytes(chunk.encode("utf-8"))


def optimal_segments(text: str, version: int) -> List[Segment]:
    """
    Minimum total bit length segmentation assuming count fields of a version.

    Args:
        text (str): Text to segment
        version (int): Any version of the band whose count widths apply

    Returns:
        List[Segment]: Segments in text order; empty for empty text

    Example:
        >>> segs = optimal_segments("THE SQUARE ROOT OF 2 IS 1.41421356237309504880168872420969807", 1)
        >>> [s.mode.name for s in segs]
        ['ALPHANUMERIC', 'NUMERIC']
    """
    if text == "":
        return []
    plan = _plan_modes(text, version)
    segments = []
    start = 0
    for i in range(1, len(text) + 1):
        if i == len(text) or plan[i][1]:
            segments.append(_make_segment(plan[start][0], text[start:i]))
            start = i
    return segments


def make_segments_optimally(
    text: str,
    ecc: Union[Ecc, str] = Ecc.MEDIUM,
    min_version: int = MIN_VERSION,
    max_version: int = MAX_VERSION
) -> List[Segment]:
    """
    Segment a text optimally for the smallest version it fits in.

    The plan is recomputed each time the version band changes. At every
    version the auto-mode segmentation (make_segments) is also considered,
    so the result is never longer than the single-mode encoding.

    Args:
        text (str): Text to segment
        ecc (Union[Ecc, str]): Error correction level used for capacity
        min_version (int): Lowest version to try
        max_version (int): Highest version to try

    Returns:
        List[Segment]: Segments for the first version that holds them

    Raises:
        ValueOutOfRangeError: If the version range is invalid
        DataTooLongError: If the text fits no version in the range
    """
    ecc = Ecc.parse(ecc)
    if not MIN_VERSION <= min_version <= max_version <= MAX_VERSION:
        raise ValueOutOfRangeError("Invalid version range")
    if text == "":
        return []

    naive = make_segments(text)
    planned: Sequence[Segment] = ()
    for version in range(min_version, max_version + 1):
        if version == min_version or _version_band(version) != _version_band(version - 1):
            planned = optimal_segments(text, version)
            logger.debug("Planned %d segment(s) for version band of %d", len(planned), version)

        capacity = data_capacity_bits(version, ecc)
        best = None
        best_bits = None
        for candidate in (planned, naive):
            used = get_total_bits(candidate, version)
            if used is None or used > capacity:
                continue
            if best_bits is None or used < best_bits:
                best, best_bits = candidate, used
        if best is not None:
            return list(best)

    raise DataTooLongError("Text does not fit in any version of the range")
