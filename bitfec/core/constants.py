"""
bitfec Constants

Bit ordering and parameter limits shared by the pipeline and the codecs.
"""

from __future__ import annotations

import operator

__all__ = [
    "BITS_PER_BYTE",
    "MSB_MASK",
    "MIN_PARITY",
    "MIN_REPETITION",
    "as_count",
]

BITS_PER_BYTE: int = 8

# Bits are read and written most-significant first
MSB_MASK: int = 0x80

# Hamming parity bit count; 2 gives the (3,1) code
MIN_PARITY: int = 2

MIN_REPETITION: int = 1


def as_count(value: object, minimum: int, name: str) -> int:
    """
    Coerce ``value`` to an int of at least ``minimum``.

    Any integer type is accepted, numpy integers included. Booleans,
    floats and other non-integers raise ValueError.

    Examples:
        >>> as_count(3, 1, "Stride")
        3
    """
    message = f"{name} must be an integer of at least {minimum}, got {value!r}"
    if isinstance(value, bool):
        raise ValueError(message)
    try:
        count = operator.index(value)
    except TypeError:
        raise ValueError(message) from None
    if count < minimum:
        raise ValueError(message)
    return count
