# -*- coding: utf-8 -*-
"""
QR Code Generator Module

This module runs the complete encoding pipeline and defines the immutable
QRSymbol it produces:

    segments -> version selection -> data codewords -> RS blocks and
    interleaving -> function patterns -> data placement -> masking ->
    format / version information

Functions:
    encode_text: Encode a Unicode string with automatic segmentation
    encode_binary: Encode raw bytes in byte mode
    encode_segments: Encode a caller supplied list of segments
    make_qr: Generate QR code with specified parameters
    evaluate_all_masks: Evaluate all mask patterns to find optimal one
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .capacity import boost_ecc as _boost_ecc
from .capacity import select_version
from .codewords import add_ecc_and_interleave, build_data_codewords
from .config import DEFAULT_ECC, normalize_mask, normalize_mode, normalize_version, parse_bool
from .exceptions import ValueOutOfRangeError
from .functional_areas import build_function_template, draw_format_bits, draw_version_bits
from .masking import AUTO_MASK, apply_mask, check_mask, choose_mask, mask_penalties
from .placement import place_codewords
from .segmentation import make_segments_optimally
from .segments import (
    Segment,
    make_alphanumeric,
    make_bytes,
    make_eci,
    make_kanji,
    make_numeric,
    make_segments,
)
from .tables import MAX_VERSION, MIN_VERSION, Ecc, symbol_size

logger = logging.getLogger(__name__)

Matrix = List[List[bool]]


class QRSymbol:
    """
    A finished QR code symbol: an immutable square grid of dark/light modules.

    Attributes:
        version (int): 1..40
        size (int): Side length in modules, 4 * version + 17
        ecc (Ecc): Error correction level actually used
        mask (int): Applied mask pattern 0..7
        segments (Tuple[Segment, ...]): Encoded segments
    """

    __slots__ = ("_version", "_ecc", "_mask", "_modules", "_segments")

    def __init__(self, version: int, ecc: Ecc, mask: int, modules: Sequence[Sequence[bool]],
                 segments: Sequence[Segment] = ()):
        size = symbol_size(version)
        if len(modules) != size or any(len(row) != size for row in modules):
            raise ValueError("Module grid does not match the version size")
        self._version = version
        self._ecc = ecc
        self._mask = mask
        self._modules = tuple(tuple(bool(v) for v in row) for row in modules)
        self._segments = tuple(segments)

    @property
    def version(self) -> int:
        return self._version

    @property
    def size(self) -> int:
        return len(self._modules)

    @property
    def ecc(self) -> Ecc:
        return self._ecc

    @property
    def mask(self) -> int:
        return self._mask

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    @property
    def modules(self) -> Tuple[Tuple[bool, ...], ...]:
        """Rows of modules, indexed [y][x]; True is dark."""
        return self._modules

    @property
    def matrix(self) -> Matrix:
        """A mutable copy of the module grid as a list of lists."""
        return [list(row) for row in self._modules]

    def get_module(self, x: int, y: int) -> bool:
        """Colour of the module at column x, row y; outside the grid is light."""
        return 0 <= x < self.size and 0 <= y < self.size and self._modules[y][x]

    def __eq__(self, other):
        if not isinstance(other, QRSymbol):
            return NotImplemented
        return (self._version, self._ecc, self._mask, self._modules) == \
               (other._version, other._ecc, other._mask, other._modules)

    def __hash__(self):
        return hash((self._version, self._ecc, self._mask, self._modules))

    def __repr__(self) -> str:
        return f"QRSymbol(version={self._version}, ecc={self._ecc.letter}, mask={self._mask}, size={self.size})"


def _check_version_range(min_version: int, max_version: int) -> None:
    if not MIN_VERSION <= min_version <= max_version <= MAX_VERSION:
        raise ValueOutOfRangeError(
            f"Invalid version range: {min_version}..{max_version}")


def _build_unmasked(
    segments: Sequence[Segment],
    ecc: Ecc,
    min_version: int,
    max_version: int,
    boost_ecc: bool
) -> Tuple[int, Ecc, Matrix, Matrix]:
    """Run the pipeline up to (not including) masking."""
    version, _ = select_version(segments, ecc, min_version, max_version)
    if boost_ecc:
        ecc = _boost_ecc(segments, version, ecc)

    data_codewords = build_data_codewords(segments, version, ecc)
    codewords = add_ecc_and_interleave(data_codewords, version, ecc)

    modules, is_function = build_function_template(version)
    place_codewords(modules, is_function, codewords)
    return version, ecc, modules, is_function


def encode_segments(
    segments: Sequence[Segment],
    ecc: Union[Ecc, str],
    min_version: int = MIN_VERSION,
    max_version: int = MAX_VERSION,
    mask: int = AUTO_MASK,
    boost_ecc: bool = False
) -> QRSymbol:
    """
    Encode a list of segments into a QR code symbol.

    The smallest version in [min_version, max_version] that holds the data
    at the requested ECC level is used.

    Args:
        segments (Sequence[Segment]): Segments to encode, in order
        ecc (Union[Ecc, str]): Error correction level
        min_version (int): Smallest allowed version (1-40)
        max_version (int): Largest allowed version (1-40)
        mask (int): Mask pattern 0-7, or -1 to pick the lowest penalty mask
        boost_ecc (bool): Raise the ECC level if it fits the same version

    Returns:
        QRSymbol: The finished symbol

    Raises:
        ValueOutOfRangeError: If the version range or mask is invalid
        DataTooLongError: If the data does not fit any version in the range

    Example:
        >>> from qrsymbol.segments import make_numeric
        >>> qr = encode_segments([make_numeric("0123456789")], 'M', mask=2)
        >>> qr.version, qr.mask
        (1, 2)
    """
    ecc = Ecc.parse(ecc)
    _check_version_range(min_version, max_version)
    check_mask(mask)
    segments = tuple(segments)

    version, ecc, modules, is_function = _build_unmasked(
        segments, ecc, min_version, max_version, boost_ecc)

    chosen, _penalty = choose_mask(modules, is_function, mask)
    apply_mask(modules, is_function, chosen)
    draw_format_bits(modules, ecc, chosen)
    draw_version_bits(modules, version)

    logger.debug("Encoded %d segment(s) as version %d-%s with mask %d",
                 len(segments), version, ecc.letter, chosen)
    return QRSymbol(version, ecc, chosen, modules, segments)


def encode_text(text: str, ecc: Union[Ecc, str]) -> QRSymbol:
    """
    Encode Unicode text using the single most compact mode for the whole text.

    Example:
        >>> encode_text("HELLO WORLD", 'Q').size
        21
    """
    return encode_segments(make_segments(text), ecc)


def encode_binary(data: bytes, ecc: Union[Ecc, str]) -> QRSymbol:
    """Encode raw bytes as a single byte mode segment."""
    return encode_segments([make_bytes(data)], ecc)


def _segments_for(
    content: Union[str, bytes],
    mode: str,
    ecc: Ecc,
    min_version: int,
    max_version: int,
    eci: Optional[int]
) -> List[Segment]:
    if isinstance(content, (bytes, bytearray)):
        if mode not in ("auto", "byte"):
            raise ValueError(f"Binary content can only be encoded in byte mode, not {mode}")
        segments = [make_bytes(bytes(content))]
    elif mode == "auto":
        segments = make_segments(content)
    elif mode == "optimal":
        segments = make_segments_optimally(content, ecc, min_version, max_version)
    elif mode == "numeric":
        segments = [make_numeric(content)]
    elif mode == "alphanumeric":
        segments = [make_alphanumeric(content)]
    elif mode == "kanji":
        segments = [make_kanji(content)]
    else:
        segments = [make_bytes(content.encode("utf-8"))]

    if eci is not None:
        segments.insert(0, make_eci(eci))
    return segments


def make_qr(
    content: Union[str, bytes],
    ecc: Union[Ecc, str] = DEFAULT_ECC,
    version: Union[int, str, None] = None,
    mode: Optional[str] = None,
    mask: Union[int, str, None] = 'auto',
    boost_error: Union[bool, str] = False,
    eci: Optional[int] = None
) -> QRSymbol:
    """
    Generate a QR code symbol with specified parameters.

    Args:
        content (Union[str, bytes]): The data to encode
        ecc (Union[Ecc, str]): Error correction level ('L', 'M', 'Q', 'H')
            - L: ~7% recovery capability
            - M: ~15% recovery capability
            - Q: ~25% recovery capability
            - H: ~30% recovery capability
        version (Union[int, str, None]): QR code version (1-40) or 'auto'
            - 'auto' / None: Select minimum version that fits the data
            - int: Force specific version (1=21x21, 40=177x177)
        mode (Optional[str]): Segmentation
            - 'auto' / None: One segment in the most compact single mode
            - 'optimal': Mixed segments with the smallest total length
            - 'numeric', 'alphanumeric', 'byte', 'kanji': Force a mode
        mask (Union[int, str, None]): 'auto' or a mask pattern 0-7
        boost_error (Union[bool, str]): Increase the ECC level if the version
            allows; strings such as 'true' or 'off' are parsed
        eci (Optional[int]): Prepend an ECI designator (e.g. 26 for UTF-8)

    Returns:
        QRSymbol: Generated QR code symbol

    Raises:
        InvalidCharacterError: If content does not fit a forced mode
        ValueOutOfRangeError: If version, mask or ECI is invalid
        DataTooLongError: If data doesn't fit in the allowed versions

    Example:
        >>> qr = make_qr("https://example.com", ecc='M', version='auto', mask='auto')
        >>> qr.version
        2
    """
    ecc = Ecc.parse(ecc)
    mode = normalize_mode(mode)
    ver = normalize_version(version)
    min_version, max_version = (MIN_VERSION, MAX_VERSION) if ver is None else (ver, ver)

    segments = _segments_for(content, mode, ecc, min_version, max_version, eci)
    return encode_segments(segments, ecc, min_version, max_version,
                           mask=normalize_mask(mask), boost_ecc=parse_bool(boost_error))


def evaluate_all_masks(
    content: Union[str, bytes],
    ecc: Union[Ecc, str] = DEFAULT_ECC,
    version: Union[int, str, None] = None,
    mode: Optional[str] = None,
    boost_error: Union[bool, str] = False,
    eci: Optional[int] = None
) -> Tuple[int, int, Dict[int, int]]:
    """
    Evaluate all mask patterns (0-7) to find the optimal one.

    The same grid make_qr would mask is scored once per mask pattern with
    the N1-N4 penalty rules, before format information is written.

    Returns:
        Tuple[int, int, Dict[int, int]]: (best_mask, best_score, all_scores)
            - best_mask: Mask pattern with lowest penalty (0-7)
            - best_score: Penalty score of the best mask
            - all_scores: Dictionary mapping mask -> penalty score

    Example:
        >>> best_mask, best_score, scores = evaluate_all_masks("Hello World", ecc='M')
        >>> make_qr("Hello World", ecc='M').mask == best_mask
        True
    """
    ecc = Ecc.parse(ecc)
    mode = normalize_mode(mode)
    ver = normalize_version(version)
    min_version, max_version = (MIN_VERSION, MAX_VERSION) if ver is None else (ver, ver)

    segments = _segments_for(content, mode, ecc, min_version, max_version, eci)
    _, _, modules, is_function = _build_unmasked(
        segments, ecc, min_version, max_version, parse_bool(boost_error))

    scores = mask_penalties(modules, is_function)
    best_mask = min(scores, key=lambda m: (scores[m], m))
    return best_mask, scores[best_mask], scores
