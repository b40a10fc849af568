# -*- coding: utf-8 -*-
"""
QR Code Segment Module

A segment is a typed chunk of the encoded payload: a mode, the number of
characters (or bytes) it represents and its encoded data bits. Segments are
immutable; their bits are stored as a tuple and only ever handed out as a
fresh BitBuffer copy.

Functions:
    make_numeric: Digits packed 3 per 10 bits
    make_alphanumeric: 45-character alphabet packed 2 per 11 bits
    make_bytes: Arbitrary bytes, 8 bits each
    make_kanji: Shift-JIS double-byte characters, 13 bits each
    make_eci: Extended Channel Interpretation designator
    make_segments: Single best-guess segment for a text (auto mode)
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .bitbuffer import BitBuffer
from .exceptions import InvalidCharacterError, ValueOutOfRangeError
from .tables import check_version


class Mode(Enum):
    """
    Segment mode: (mode indicator, count bits for versions 1-9, 10-26, 27-40).
    """

    NUMERIC = (0x1, 10, 12, 14)
    ALPHANUMERIC = (0x2, 9, 11, 13)
    BYTE = (0x4, 8, 16, 16)
    KANJI = (0x8, 8, 10, 12)
    ECI = (0x7, 0, 0, 0)

    def __init__(self, indicator: int, *count_bits: int):
        self.indicator = indicator
        self._count_bits = count_bits

    def char_count_bits(self, version: int) -> int:
        """Width of the character count field at the given version."""
        check_version(version)
        return self._count_bits[(version + 7) // 17]


# Alphanumeric character set, index == character value
ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
_ALPHANUMERIC_VALUES = {ch: i for i, ch in enumerate(ALPHANUMERIC_CHARSET)}

_NUMERIC_REGEX = re.compile(r"[0-9]*\Z")
_ALPHANUMERIC_REGEX = re.compile(r"[A-Z0-9 $%*+./:-]*\Z")

KANJI_ENCODING = "shift_jis"


@dataclass(frozen=True)
class Segment:
    """
    Immutable QR Code segment.

    Attributes:
        mode (Mode): Segment mode
        num_chars (int): Characters for numeric/alphanumeric/kanji, bytes for
            byte mode, 0 for ECI
        bits (Tuple[int, ...]): Encoded data bits
    """

    mode: Mode
    num_chars: int
    bits: Tuple[int, ...]

    def __post_init__(self):
        if self.num_chars < 0:
            raise ValueOutOfRangeError("Invalid character count")
        object.__setattr__(self, "bits", tuple(1 if b else 0 for b in self.bits))

    @property
    def data(self) -> BitBuffer:
        """A fresh copy of the segment bits; mutating it never affects the segment."""
        return BitBuffer(self.bits)

    @property
    def bit_length(self) -> int:
        return len(self.bits)

    def __repr__(self) -> str:
        return f"Segment(mode={self.mode.name}, num_chars={self.num_chars}, bits={len(self.bits)})"


def is_numeric(text: str) -> bool:
    """
    Check if a text can be encoded in numeric mode.

    Args:
        text (str): Text to test; the empty string qualifies

    Returns:
        bool: True if every character is an ASCII digit 0-9

    Example:
        >>> from qrsymbol.segments import is_numeric
        >>> is_numeric("0123456789"), is_numeric("12.5")
        (True, False)
    """
    return _NUMERIC_REGEX.match(text) is not None


def is_alphanumeric(text: str) -> bool:
    """
    True if every character is 0-9, A-Z (uppercase), space or one of $%*+-./:
    """
    return _ALPHANUMERIC_REGEX.match(text) is not None


def kanji_value(ch: str) -> Optional[int]:
    """
    13-bit kanji mode value of a character, or None if not encodable.

    The character must map to a Shift-JIS double-byte code in 0x8140-0x9FFC
    or 0xE040-0xEBBF.
    """
    try:
        raw = ch.encode(KANJI_ENCODING)
    except UnicodeEncodeError:
        return None
    if len(raw) != 2:
        return None
    code = (raw[0] << 8) | raw[1]
    if 0x8140 <= code <= 0x9FFC:
        diff = code - 0x8140
    elif 0xE040 <= code <= 0xEBBF:
        diff = code - 0xC140
    else:
        return None
    return (diff >> 8) * 0xC0 + (diff & 0xFF)


def is_kanji(text: str) -> bool:
    """True if every character has a kanji mode value (see kanji_value)."""
    return all(kanji_value(ch) is not None for ch in text)


def make_bytes(data: bytes) -> Segment:
    """Segment for arbitrary binary data in byte mode."""
    bb = BitBuffer()
    for b in bytes(data):
        bb.append_bits(b, 8)
    return Segment(Mode.BYTE, len(data), tuple(bb))


def make_numeric(digits: str) -> Segment:
    """
    Segment for a string of decimal digits in numeric mode.

    Example:
        >>> make_numeric("01234567").bit_length
        27
    """
    if not is_numeric(digits):
        raise InvalidCharacterError("String contains non-numeric characters")
    bb = BitBuffer()
    for i in range(0, len(digits), 3):
        chunk = digits[i:i + 3]
        bb.append_bits(int(chunk), len(chunk) * 3 + 1)
    return Segment(Mode.NUMERIC, len(digits), tuple(bb))


def make_alphanumeric(text: str) -> Segment:
    """Segment for text in the 45-character alphanumeric alphabet."""
    if not is_alphanumeric(text):
        raise InvalidCharacterError("String contains unencodable characters in alphanumeric mode")
    bb = BitBuffer()
    for i in range(0, len(text) - 1, 2):
        value = _ALPHANUMERIC_VALUES[text[i]] * 45 + _ALPHANUMERIC_VALUES[text[i + 1]]
        bb.append_bits(value, 11)
    if len(text) % 2 == 1:
        bb.append_bits(_ALPHANUMERIC_VALUES[text[-1]], 6)
    return Segment(Mode.ALPHANUMERIC, len(text), tuple(bb))


def make_kanji(text: str) -> Segment:
    """Segment for text made only of Shift-JIS kanji-mode characters."""
    bb = BitBuffer()
    for ch in text:
        value = kanji_value(ch)
        if value is None:
            raise InvalidCharacterError(f"String contains non-kanji-mode character: {ch!r}")
        bb.append_bits(value, 13)
    return Segment(Mode.KANJI, len(text), tuple(bb))


def make_eci(assign_value: int) -> Segment:
    """
    ECI designator segment for an assignment value 0..999999.

    Values below 2**7 take 8 bits, below 2**14 take 16 bits, others 24 bits.
    """
    bb = BitBuffer()
    if assign_value < 0:
        raise ValueOutOfRangeError("ECI assignment value out of range")
    elif assign_value < (1 << 7):
        bb.append_bits(assign_value, 8)
    elif assign_value < (1 << 14):
        bb.append_bits(0b10, 2)
        bb.append_bits(assign_value, 14)
    elif assign_value < 1000000:
        bb.append_bits(0b110, 3)
        bb.append_bits(assign_value, 21)
    else:
        raise ValueOutOfRangeError("ECI assignment value out of range")
    return Segment(Mode.ECI, 0, tuple(bb))


def make_segments(text: str) -> List[Segment]:
    """
    Zero or one segment for a text, using the single most compact mode.

    Numeric if all digits, else alphanumeric if possible, else UTF-8 bytes.
    The empty string gives an empty list.
    """
    if text == "":
        return []
    if is_numeric(text):
        return [make_numeric(text)]
    if is_alphanumeric(text):
        return [make_alphanumeric(text)]
    return [make_bytes(text.encode("utf-8"))]
