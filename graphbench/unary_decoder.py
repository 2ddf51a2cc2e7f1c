"""Bit-level decoder for gamma and zeta codes packed into 32-bit words."""

from __future__ import annotations

from typing import Sequence

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def decode_first_num(node: int, x: int) -> int:
    """Undo the signed gap coding of a neighbour list's first element."""
    return node - (x >> 1) - 1 if x & 1 else node + (x >> 1)


def _clz32(value: int) -> int:
    return 32 - (value & _MASK32).bit_length()


class UnaryDecoder:
    """Reads codes from a big-endian bit stream stored in 32-bit words."""

    def __init__(self, words: Sequence[int], offset: int = 0, zeta_k: int = 2):
        if zeta_k < 1:
            raise ValueError("zeta_k must be at least 1")
        self._words = words
        self.offset = offset
        self.zeta_k = zeta_k

    def _word(self, index: int) -> int:
        return self._words[index] & _MASK32 if index < len(self._words) else 0

    def cur(self) -> int:
        """The 32 bits starting at the current bit offset."""
        chunk, shift = divmod(self.offset, 32)
        value = (self._word(chunk) << 32) | self._word(chunk + 1)
        return ((value << shift) & _MASK64) >> 32

    def _decode_unary(self) -> int:
        bits = self.cur()
        if bits == 0:
            raise ValueError(f"no unary terminator within 32 bits at offset {self.offset}")
        zeros = _clz32(bits)
        self.offset += zeros
        return zeros + 1

    def _decode_int(self, length: int) -> int:
        if length > 32:
            raise ValueError(f"cannot read {length} bits at once")
        value = self.cur() >> (32 - length)
        self.offset += length
        return value

    def decode_gamma(self) -> int:
        h = self._decode_unary()
        return self._decode_int(h) - 1

    def decode_zeta(self) -> int:
        h = self._decode_unary()
        self.offset += 1
        return self._decode_int(h * self.zeta_k) - 1

    def decode_residual_code(self) -> int:
        return self.decode_gamma() if self.zeta_k == 1 else self.decode_zeta()