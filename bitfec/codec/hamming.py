"""bitfec Hamming Codec

Single-error-correcting Hamming code with ``p`` parity bits.

A block is ``L = 2**p - 1`` bits long and carries ``D = L - p`` data bits.
Positions are 1-indexed; powers of two hold parity bits, all other
positions hold data bits in order. The parity bit at position ``2**k``
covers every later position whose index has bit ``k`` set.

Decoding locates a flipped bit from the set of parity bits that disagree
with their recomputed values. A single disagreeing parity bit is not
corrected. Two or more flipped bits in one block are not detected and yield
a wrong block.

https://en.wikipedia.org/wiki/Hamming_code
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from bitfec.core.accumulator import TailPolicy
from bitfec.core.constants import MIN_PARITY, as_count
from bitfec.core.pipeline import run
from bitfec.errors import BlockLengthError

__all__ = [
    "HammingCode",
    "parity_to_data",
    "parity_to_length",
    "is_power_of_2",
    "encode_block",
    "decode_block",
    "check_parity",
    "encode",
    "decode",
]

logger = logging.getLogger(__name__)


def parity_to_data(parity: int) -> int:
    """Number of data bits in a block with ``parity`` parity bits.

    Examples:
    --------
        >>> parity_to_data(3)
        4
    """
    return 2**parity - parity - 1


def parity_to_length(parity: int) -> int:
    """Total block length for ``parity`` parity bits.

    Examples:
    --------
        >>> parity_to_length(3)
        7
    """
    return 2**parity - 1


def is_power_of_2(number: int) -> bool:
    """Return True if ``number`` is a power of two. Undefined for 0."""
    return number & (number - 1) == 0


def _check_parity_count(parity: int) -> int:
    return as_count(parity, MIN_PARITY, "Parity bit count")


def _bits_str(bits: Sequence[bool]) -> str:
    return "".join("1" if b else "0" for b in bits)


def _parity_value(block: Sequence[bool], position: int) -> bool:
    """XOR of every position after ``position`` that shares its set bit."""
    value = False
    for j in range(position + 1, len(block) + 1):
        if position & j:
            value ^= block[j - 1]
    return value


def encode_block(data: Sequence[bool], parity: int) -> List[bool]:
    """Encode one block of data bits.

    Args:
    ----
        data: Exactly ``parity_to_data(parity)`` bits.
        parity: Number of parity bits.

    Returns:
    -------
        ``parity_to_length(parity)`` bits with parity at power-of-two positions.

    Raises:
    ------
        BlockLengthError: If ``data`` has the wrong length.

    Examples:
    --------
        >>> [int(b) for b in encode_block([False, False, False, True], 3)]
        [1, 1, 0, 1, 0, 0, 1]
    """
    parity = _check_parity_count(parity)
    data_length = parity_to_data(parity)
    if len(data) != data_length:
        raise BlockLengthError(data_length, len(data), "Hamming data block")

    encoded = []
    source = iter(data)
    for position in range(1, parity_to_length(parity) + 1):
        if is_power_of_2(position):
            encoded.append(False)
        else:
            encoded.append(bool(next(source)))

    for k in range(parity):
        position = 1 << k
        encoded[position - 1] = _parity_value(encoded, position)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Hamming(%d) encode %s -> %s", parity, _bits_str(data), _bits_str(encoded))
    return encoded


def check_parity(block: Sequence[bool], parity: int) -> List[int]:
    """Return the 1-indexed parity positions whose stored bit is wrong.

    Args:
    ----
        block: A received block of ``parity_to_length(parity)`` bits.
        parity: Number of parity bits.

    Returns:
    -------
        Mismatching parity positions in increasing order.
    """
    mismatches = []
    for k in range(parity):
        position = 1 << k
        if bool(block[position - 1]) != _parity_value(block, position):
            mismatches.append(position)
    return mismatches


def decode_block(block: Sequence[bool], parity: int) -> List[bool]:
    """Correct up to one flipped bit and strip the parity bits.

    Args:
    ----
        block: Exactly ``parity_to_length(parity)`` bits.
        parity: Number of parity bits.

    Returns:
    -------
        ``parity_to_data(parity)`` data bits.

    Raises:
    ------
        BlockLengthError: If ``block`` has the wrong length.

    Examples:
    --------
        >>> [int(b) for b in decode_block([True, True, False, True, False, True, True], 3)]
        [0, 0, 0, 1]
    """
    parity = _check_parity_count(parity)
    block_length = parity_to_length(parity)
    if len(block) != block_length:
        raise BlockLengthError(block_length, len(block), "Hamming block")

    received = [bool(b) for b in block]
    mismatches = check_parity(received, parity)

    # Distinct powers of two, so the sum is the syndrome
    if len(mismatches) > 1:
        error_position = sum(mismatches)
        received[error_position - 1] = not received[error_position - 1]
        logger.debug("Hamming(%d) corrected bit at position %d", parity, error_position)

    decoded = [bit for position, bit in enumerate(received, 1) if not is_power_of_2(position)]
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Hamming(%d) decode %s -> %s", parity, _bits_str(block), _bits_str(decoded))
    return decoded


def encode(buffer: Union[bytes, bytearray], parity: int) -> bytes:
    """Add Hamming parity to ``buffer``.

    The buffer is cut into ``parity_to_data(parity)``-bit groups, the last
    one zero-padded. The output keeps its final partial byte so that the
    last codeword is complete.

    Args:
    ----
        buffer: Data to protect.
        parity: Number of parity bits per block.

    Returns:
    -------
        Encoded bytes.
    """
    parity = _check_parity_count(parity)
    return run(
        buffer,
        parity_to_data(parity),
        lambda group: encode_block(group, parity),
        tail=TailPolicy.PAD,
    )


def decode(buffer: Union[bytes, bytearray], parity: int) -> bytes:
    """Correct and strip Hamming parity from ``buffer``.

    Only complete codewords are decoded; trailing padding bits shorter than
    a codeword are ignored, and a trailing partial output byte is dropped.

    Args:
    ----
        buffer: Output of ``encode`` with the same ``parity``, possibly
            corrupted.
        parity: Number of parity bits per block.

    Returns:
    -------
        Decoded bytes. Never fails on corrupted input.

    Examples:
    --------
        >>> decode(encode(b"\\x01", 3), 3)
        b'\\x01'
    """
    parity = _check_parity_count(parity)
    return run(
        buffer,
        parity_to_length(parity),
        lambda group: decode_block(group, parity),
        partial=False,
    )


@dataclass(frozen=True)
class HammingCode:
    """
    Hamming code parameters.

    Attributes:
        parity: Number of parity bits per block.

    Example:
        >>> code = HammingCode(3)
        >>> code.data_length, code.block_length
        (4, 7)
        >>> code.decode(code.encode(b"hi"))
        b'hi'
    """

    parity: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "parity", _check_parity_count(self.parity))

    @property
    def data_length(self) -> int:
        return parity_to_data(self.parity)

    @property
    def block_length(self) -> int:
        return parity_to_length(self.parity)

    @property
    def parity_positions(self) -> Tuple[int, ...]:
        """1-indexed parity positions."""
        return tuple(1 << k for k in range(self.parity))

    def encode(self, buffer: Union[bytes, bytearray]) -> bytes:
        return encode(buffer, self.parity)

    def decode(self, buffer: Union[bytes, bytearray]) -> bytes:
        return decode(buffer, self.parity)
