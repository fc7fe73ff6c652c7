"""
bitfec Repetition Codec

Every source bit is sent ``number`` times and recovered by majority vote.

Odd ``number`` always has a majority. With an even ``number`` a block with
exactly half its bits set is a tie, handled by one of three decoders:

- decode: raises UnrecoverableCorruption, the caller decides what to do
- panic_decode: raises CorruptionAbort, the whole decode is abandoned
- wrong_decode: resolves the tie to False, possibly wrongly

https://en.wikipedia.org/wiki/Repetition_code
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from bitfec.core.constants import MIN_REPETITION, as_count
from bitfec.core.pipeline import run, run_fallible
from bitfec.errors import BlockLengthError, CorruptionAbort, UnrecoverableCorruption

__all__ = [
    "RepetitionCode",
    "encode_block",
    "majority",
    "decode_block",
    "panic_decode_block",
    "wrong_decode_block",
    "encode",
    "decode",
    "panic_decode",
    "wrong_decode",
]

logger = logging.getLogger(__name__)


def _check_number(number: int) -> int:
    return as_count(number, MIN_REPETITION, "Repetition count")


def encode_block(bits: Sequence[bool], number: int) -> List[bool]:
    """
    Repeat a single bit ``number`` times.

    Args:
        bits: Exactly one bit.
        number: Repetition count.

    Returns:
        ``number`` copies of the bit.

    Examples:
        >>> encode_block([True], 3)
        [True, True, True]
    """
    if len(bits) != 1:
        raise BlockLengthError(1, len(bits), "Repetition source block")

    return [bool(bits[0])] * number


def majority(bits: Sequence[bool]) -> Optional[bool]:
    """
    Majority vote over a block.

    Returns:
        True if more than half the bits are set, False if fewer than half
        are, None on a tie.

    Examples:
        >>> majority([True, False, True])
        True
        >>> majority([True, False]) is None
        True
    """
    weight = sum(1 for b in bits if b)
    if weight * 2 > len(bits):
        return True
    if weight * 2 < len(bits):
        return False
    return None


def _checked_block(bits: Sequence[bool], number: int) -> Sequence[bool]:
    if len(bits) != number:
        raise BlockLengthError(number, len(bits), "Repetition block")
    return bits


def decode_block(bits: Sequence[bool], number: int) -> List[bool]:
    """Majority-decode one block; a tie raises UnrecoverableCorruption."""
    vote = majority(_checked_block(bits, number))
    if vote is None:
        weight = sum(1 for b in bits if b)
        logger.debug("Repetition(%d) tie at weight %d", number, weight)
        raise UnrecoverableCorruption(weight=weight, number=number)
    return [vote]


def panic_decode_block(bits: Sequence[bool], number: int) -> List[bool]:
    """Majority-decode one block; a tie raises CorruptionAbort."""
    vote = majority(_checked_block(bits, number))
    if vote is None:
        raise CorruptionAbort("Unrecoverable corruption has occurred in this data.")
    return [vote]


def wrong_decode_block(bits: Sequence[bool], number: int) -> List[bool]:
    """Majority-decode one block; a tie becomes False."""
    vote = majority(_checked_block(bits, number))
    return [bool(vote)]


def encode(buffer: Union[bytes, bytearray], number: int) -> bytes:
    """
    Repeat each bit of ``buffer`` ``number`` times.

    Examples:
        >>> encode(b"\\x80", 3)
        b'\\xe0\\x00\\x00'
    """
    number = _check_number(number)
    return run(buffer, 1, lambda group: encode_block(group, number))


def decode(buffer: Union[bytes, bytearray], number: int) -> bytes:
    """
    Reverse ``encode`` by majority vote over each ``number``-bit block.

    Raises:
        UnrecoverableCorruption: On the first tied block, with
            ``block_index`` set. Only possible for even ``number``.
    """
    number = _check_number(number)
    return run_fallible(buffer, number, lambda group: decode_block(group, number))


def panic_decode(buffer: Union[bytes, bytearray], number: int) -> bytes:
    """
    Reverse ``encode`` by majority vote, aborting on any tie.

    Raises:
        CorruptionAbort: On the first tied block.
    """
    number = _check_number(number)
    return run(buffer, number, lambda group: panic_decode_block(group, number))


def wrong_decode(buffer: Union[bytes, bytearray], number: int) -> bytes:
    """Reverse ``encode`` by majority vote; tied blocks decode to 0 bits."""
    number = _check_number(number)
    return run(buffer, number, lambda group: wrong_decode_block(group, number))


@dataclass(frozen=True)
class RepetitionCode:
    """
    Repetition code parameters.

    Attributes:
        number: Copies sent per source bit.
    """

    number: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "number", _check_number(self.number))

    @property
    def can_tie(self) -> bool:
        """True if a block can have no majority."""
        return self.number % 2 == 0

    def encode(self, buffer: Union[bytes, bytearray]) -> bytes:
        return encode(buffer, self.number)

    def decode(self, buffer: Union[bytes, bytearray]) -> bytes:
        return decode(buffer, self.number)

    def panic_decode(self, buffer: Union[bytes, bytearray]) -> bytes:
        return panic_decode(buffer, self.number)

    def wrong_decode(self, buffer: Union[bytes, bytearray]) -> bytes:
        return wrong_decode(buffer, self.number)
