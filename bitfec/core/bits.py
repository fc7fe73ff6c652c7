"""bitfec Packed Bits

A packed, append-only sequence of booleans stored in ~n/8 bytes.

Data is kept big-endian within each byte: nine set bits are stored as
``11111111 10000000``. ``last_len`` counts the meaningful bits in the last
byte and is always in 1..8; an empty sequence has no bytes and
``last_len == 8``. Unused trailing bits are always zero.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from bitfec.core.constants import BITS_PER_BYTE, MSB_MASK

__all__ = ["Bits"]


class Bits:
    """
    Packed boolean sequence, built up incrementally and written out as bytes.

    Examples:
        >>> Bits.from_bools([False, False, True, False, True, True, True, True]).finalize()
        b'/'
    """

    __slots__ = ("_data", "_last_len")

    def __init__(self) -> None:
        self._data = bytearray()
        self._last_len = BITS_PER_BYTE

    @classmethod
    def from_bools(cls, values: Iterable[bool]) -> Bits:
        """Pack an iterable of booleans."""
        bits = cls()
        for value in values:
            bits.push(value)
        return bits

    @property
    def last_len(self) -> int:
        """Number of meaningful bits in the last byte."""
        return self._last_len

    def push(self, value: bool) -> None:
        """Append a single bit."""
        if self._last_len == BITS_PER_BYTE:
            self._data.append(MSB_MASK if value else 0)
            self._last_len = 1
        else:
            if value:
                self._data[-1] |= 1 << (7 - self._last_len)
            self._last_len += 1

    def push_block(self, value: int) -> None:
        """Append the 8 bits of ``value``, MSB first."""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Block must be a byte value, got {value}")

        if self._last_len == BITS_PER_BYTE:
            self._data.append(value)
        else:
            self._data[-1] |= value >> self._last_len
            self._data.append((value << (BITS_PER_BYTE - self._last_len)) & 0xFF)

    def split(self) -> Tuple[bytes, Bits]:
        """
        Split into the byte-aligned prefix and the partial tail.

        Returns:
            Tuple of (complete bytes, new Bits holding the partial last byte).
        """
        rest = Bits()
        if self._last_len == BITS_PER_BYTE:
            return bytes(self._data), rest

        rest._data.append(self._data[-1])
        rest._last_len = self._last_len
        return bytes(self._data[:-1]), rest

    def finalize(self) -> bytes:
        """Return the data, zero-padded to the next byte boundary."""
        return bytes(self._data)

    def to_bools(self) -> List[bool]:
        """Unpack to a list of booleans."""
        out = []
        last = len(self._data) - 1
        for block_index, block in enumerate(self._data):
            count = self._last_len if block_index == last else BITS_PER_BYTE
            for index in range(count):
                out.append(bool(block & (1 << (7 - index))))
        return out

    def __len__(self) -> int:
        if not self._data:
            return 0
        return (len(self._data) - 1) * BITS_PER_BYTE + self._last_len

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bits):
            return NotImplemented
        return self._data == other._data and self._last_len == other._last_len

    def __repr__(self) -> str:
        return f"Bits({''.join('1' if b else '0' for b in self.to_bools())})"
