"""bitfec Bit-Stream View

Projects a byte buffer onto a sequence of fixed-width bit-groups.

Bits are read MSB-first within each byte. Bits past the end of the buffer
read as zero, so the final one or two groups may be partly or wholly
padding. The stream stops once its cursor has moved past the last byte.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple, Union

from bitfec.core.constants import BITS_PER_BYTE, as_count

__all__ = [
    "BitStream",
    "n_bits",
]


class BitStream:
    """
    Forward-only iterator of ``stride``-bit groups over a byte buffer.

    The cursor is a ``(byte_index, bit_offset)`` pair with
    ``0 <= bit_offset < 8``. It advances by exactly ``stride`` bits per
    group and is never rewound.

    Args:
        data: Input buffer. It is copied, so later changes to a bytearray
            do not affect the stream.
        stride: Width of each group in bits.
        partial: If False, stop before any group that would need padding
            bits, producing whole groups of real bits only.

    Examples:
        >>> list(BitStream(b"\\xa0", 3))
        [[True, False, True], [False, False, False], [False, False, False]]
        >>> list(BitStream(b"\\xa0", 3, partial=False))
        [[True, False, True], [False, False, False]]
    """

    def __init__(self, data: Union[bytes, bytearray], stride: int, partial: bool = True) -> None:
        self._stride = as_count(stride, 1, "Stride")
        self._data = bytes(data)
        self._partial = partial
        self._index = 0
        self._offset = 0

    @property
    def stride(self) -> int:
        """Width of each emitted group in bits."""
        return self._stride

    @property
    def cursor(self) -> Tuple[int, int]:
        """Current ``(byte_index, bit_offset)`` position."""
        return self._index, self._offset

    @property
    def remaining_bits(self) -> int:
        """Number of real bits not yet read."""
        return max(0, len(self._data) * BITS_PER_BYTE - self._position())

    def _position(self) -> int:
        return self._index * BITS_PER_BYTE + self._offset

    def __iter__(self) -> Iterator[List[bool]]:
        return self

    def __next__(self) -> List[bool]:
        if self._index >= len(self._data):
            raise StopIteration
        if not self._partial and self.remaining_bits < self._stride:
            raise StopIteration

        data = self._data
        size = len(data)
        group = []
        for i in range(self._stride):
            index = self._index + (self._offset + i) // BITS_PER_BYTE
            offset = (self._offset + i) % BITS_PER_BYTE
            if index >= size:
                group.append(False)
            else:
                group.append(bool(data[index] & (1 << (7 - offset))))

        self._index += (self._offset + self._stride) // BITS_PER_BYTE
        self._offset = (self._offset + self._stride) % BITS_PER_BYTE
        return group

    def __repr__(self) -> str:
        return (
            f"BitStream(len={len(self._data)}, stride={self._stride}, "
            f"cursor={self.cursor})"
        )


def n_bits(data: Union[bytes, bytearray], stride: int) -> BitStream:
    """Create a zero-padding BitStream over ``data`` with the given stride."""
    return BitStream(data, stride)
