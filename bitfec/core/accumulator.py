"""bitfec Byte Accumulator

Folds bit-groups back into bytes, tracking a sub-byte write offset.

Groups are written MSB-first. On finalize, a trailing partial byte is
either dropped (the default, for streams whose meaningful bits always end
on a byte boundary) or kept zero-padded.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from bitfec.core.constants import BITS_PER_BYTE

__all__ = [
    "TailPolicy",
    "PartialBytes",
    "empty_part",
    "to_part_bytes",
    "to_bytes",
]


class TailPolicy(Enum):
    """What to do with a trailing partial byte on finalize."""

    DISCARD = "discard"  # drop it, it only holds padding
    PAD = "pad"  # keep it, zero-filled to the byte boundary


class PartialBytes:
    """
    Growable byte buffer that may hold a fractional number of bytes.

    Invariant: when ``write_offset`` is 0 every byte is fully populated.

    Examples:
        >>> acc = PartialBytes()
        >>> acc.push([False, False, True, False, True, True, True, True])
        >>> acc.finalize()
        b'/'
    """

    def __init__(self) -> None:
        self._data = bytearray()
        self._offset = 0
        self._finalized = False

    @property
    def write_offset(self) -> int:
        """Number of bits already written into the last byte, modulo 8."""
        return self._offset

    @property
    def bit_length(self) -> int:
        """Total number of bits pushed so far."""
        if self._offset == 0:
            return len(self._data) * BITS_PER_BYTE
        return (len(self._data) - 1) * BITS_PER_BYTE + self._offset

    def push(self, group: Iterable[bool]) -> None:
        """Append the bits of ``group`` MSB-first."""
        if self._finalized:
            raise RuntimeError("PartialBytes has already been finalized")

        data = self._data
        offset = self._offset
        for bit in group:
            if offset == 0:
                data.append(0)
            if bit:
                data[-1] |= 1 << (7 - offset)
            offset = (offset + 1) % BITS_PER_BYTE
        self._offset = offset

    def finalize(self, tail: TailPolicy = TailPolicy.DISCARD) -> bytes:
        """
        Return the accumulated bytes. May only be called once.

        Args:
            tail: How to treat a trailing partial byte.

        Returns:
            The accumulated bytes, with the partial last byte dropped
            (DISCARD) or kept zero-padded (PAD).
        """
        if self._finalized:
            raise RuntimeError("PartialBytes has already been finalized")
        self._finalized = True

        if self._offset != 0 and tail is TailPolicy.DISCARD:
            del self._data[-1]
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"PartialBytes(bytes={len(self._data)}, write_offset={self._offset})"


def empty_part() -> PartialBytes:
    """Create an empty accumulator."""
    return PartialBytes()


def to_part_bytes(acc: PartialBytes, group: Iterable[bool]) -> PartialBytes:
    """Fold step for ``functools.reduce``: push ``group`` and return ``acc``."""
    acc.push(group)
    return acc


def to_bytes(acc: PartialBytes, tail: TailPolicy = TailPolicy.DISCARD) -> bytes:
    """Finalize ``acc``."""
    return acc.finalize(tail)
