# -*- coding: utf-8 -*-
"""
Bit Buffer Module

An append-only sequence of bits used to assemble segment payloads and the
final data bit stream. Bits are kept as ints (0 or 1) in a private list,
most significant bit of each appended value first.
"""

from typing import Iterable, Iterator, List

from .exceptions import CapacityOverflowError, ValueOutOfRangeError

# Largest bit length the encoder will ever build (fits a signed 32-bit int)
MAX_BIT_LENGTH = (1 << 31) - 1


class BitBuffer:
    """
    Appendable sequence of bits (0s and 1s).

    The length only grows: append_bits() and append_data() are the sole
    mutators. Reading is done with len(), iteration and get_bit().

    Example:
        >>> bb = BitBuffer()
        >>> bb.append_bits(0b101, 3)
        >>> bb.append_bits(1, 2)
        >>> list(bb)
        [1, 0, 1, 0, 1]
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: Iterable[int] = ()):
        self._bits: List[int] = [1 if b else 0 for b in bits]

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self) -> Iterator[int]:
        return iter(self._bits)

    def __repr__(self) -> str:
        return f"BitBuffer({''.join(map(str, self._bits))!r})"

    def bit_length(self) -> int:
        return len(self._bits)

    def get_bit(self, index: int) -> int:
        """Return the bit at index; raises IndexError outside [0, len)."""
        if index < 0 or index >= len(self._bits):
            raise IndexError("Bit index out of range")
        return self._bits[index]

    def append_bits(self, value: int, length: int) -> None:
        """
        Append the low-order ``length`` bits of ``value``, MSB first.

        Args:
            value (int): Non-negative value smaller than 2**length
            length (int): Number of bits, 0..31

        Raises:
            ValueOutOfRangeError: If length or value is out of range
            CapacityOverflowError: If the buffer would exceed MAX_BIT_LENGTH
        """
        if length < 0 or length > 31 or value < 0 or value >> length != 0:
            raise ValueOutOfRangeError("Value out of range")
        self._check_room(length)
        self._bits.extend((value >> i) & 1 for i in reversed(range(length)))

    def append_data(self, other: Iterable[int]) -> None:
        """Append every bit of another bit sequence."""
        bits = [1 if b else 0 for b in other]
        self._check_room(len(bits))
        self._bits.extend(bits)

    def to_bytes(self) -> List[int]:
        """Pack the bits into byte values, MSB first. Length must be a multiple of 8."""
        if len(self._bits) % 8 != 0:
            raise ValueError("Bit length is not a multiple of 8")
        result = [0] * (len(self._bits) // 8)
        for i, bit in enumerate(self._bits):
            result[i >> 3] |= bit << (7 - (i & 7))
        return result

    def copy(self) -> "BitBuffer":
        return BitBuffer(self._bits)

    def _check_room(self, length: int) -> None:
        if MAX_BIT_LENGTH - len(self._bits) < length:
            raise CapacityOverflowError("Maximum bit length reached")
