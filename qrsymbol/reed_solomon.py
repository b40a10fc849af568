# -*- coding: utf-8 -*-
"""
Reed-Solomon Error Correction Module

Galois field GF(2^8) arithmetic and the Reed-Solomon encoder used to compute
error correction codewords for each data block.

The field uses the primitive polynomial x^8 + x^4 + x^3 + x^2 + 1 (0x11D)
with generator alpha = 2. Log/antilog tables are built once at import and
never modified.

Classes:
    GF256: Field arithmetic with precomputed exp/log tables
    ReedSolomonEncoder: Generator polynomials and remainder computation
"""

from typing import Dict, List, Sequence


class GF256:
    """
    Galois Field GF(2^8) arithmetic for QR codes.

    Example:
        >>> gf = GF256()
        >>> gf.multiply(gf.inverse(83), 83)
        1
    """

    PRIMITIVE_POLY = 0x11D

    def __init__(self):
        # exp_table is doubled so exp_table[log a + log b] needs no modulo
        self.exp_table = [0] * 512
        self.log_table = [0] * 256
        x = 1
        for i in range(255):
            self.exp_table[i] = x
            self.exp_table[i + 255] = x
            self.log_table[x] = i
            x <<= 1
            if x & 0x100:
                x ^= self.PRIMITIVE_POLY
        self.log_table[0] = -1  # undefined

    def multiply(self, a: int, b: int) -> int:
        if a == 0 or b == 0:
            return 0
        return self.exp_table[self.log_table[a] + self.log_table[b]]

    def inverse(self, a: int) -> int:
        if a == 0:
            raise ZeroDivisionError("No inverse for 0")
        return self.exp_table[255 - self.log_table[a]]

    def power(self, n: int) -> int:
        """alpha ** n"""
        return self.exp_table[n % 255]


# Shared read-only field instance
gf = GF256()


class ReedSolomonEncoder:
    """
    Reed-Solomon encoder for QR code error correction.

    The generator polynomial of degree k is (x - a^0)(x - a^1)...(x - a^(k-1)).
    Coefficients are stored highest degree first, without the leading 1.
    """

    def __init__(self, field: GF256 = gf):
        self.gf = field
        self._generator_cache: Dict[int, List[int]] = {}

    def build_generator(self, degree: int) -> List[int]:
        """
        Coefficients of the monic generator polynomial, leading term dropped.

        Example:
            >>> ReedSolomonEncoder().build_generator(2)
            [3, 2]
        """
        if not 1 <= degree <= 255:
            raise ValueError("Degree out of range")
        if degree in self._generator_cache:
            return list(self._generator_cache[degree])

        # Start with the monomial x^0 and multiply by (x - a^i) for each root
        result = [0] * (degree - 1) + [1]
        root = 1
        for _ in range(degree):
            for j in range(degree):
                result[j] = self.gf.multiply(result[j], root)
                if j + 1 < degree:
                    result[j] ^= result[j + 1]
            root = self.gf.multiply(root, 0x02)

        self._generator_cache[degree] = result
        return list(result)

    def encode(self, data: Sequence[int], num_ec_codewords: int) -> List[int]:
        """
        Error correction codewords for a block of data codewords.

        The result is the remainder of data(x) * x^k divided by the generator
        polynomial of degree k, computed as a shift register.

        Args:
            data (Sequence[int]): Data codewords (0-255)
            num_ec_codewords (int): Number of EC codewords k

        Returns:
            List[int]: k error correction codewords
        """
        generator = self.build_generator(num_ec_codewords)
        result = [0] * num_ec_codewords
        for byte in data:
            factor = byte ^ result.pop(0)
            result.append(0)
            for i, coef in enumerate(generator):
                result[i] ^= self.gf.multiply(coef, factor)
        return result


rs_encoder = ReedSolomonEncoder()
