"""
bitfec Testing Utilities

Channel simulation helpers for exercising the codecs: a single-bit fault
injector and bit error counters.

Randomness always comes from an explicit numpy Generator (or a seed used to
build one), never from global state, so runs are reproducible.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

__all__ = [
    "add_errors",
    "count_bit_errors",
    "bit_error_rate",
]

RngLike = Union[np.random.Generator, int, None]


def _as_generator(rng: RngLike) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def add_errors(
    data: Union[bytes, bytearray],
    rng: RngLike = None,
    *,
    probability: float = 2 / 3,
    every_other: bool = False,
) -> bytes:
    """
    Flip at most one random bit per byte.

    Each byte independently has ``probability`` chance of one of its 8 bits
    being flipped. With ``every_other`` only bytes at even indices are
    candidates, so any run of 9 consecutive bits holds at most one flip.

    Args:
        data: Input bytes.
        rng: numpy Generator, or a seed for a new one.
        probability: Chance that a candidate byte is corrupted.
        every_other: Only corrupt bytes 0, 2, 4, ...

    Returns:
        Corrupted bytes of the same length.

    Example:
        >>> corrupted = add_errors(bytes(100), rng=42)
        >>> len(corrupted)
        100
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be in [0, 1], got {probability}")

    generator = _as_generator(rng)
    buf = np.frombuffer(bytes(data), dtype=np.uint8).copy()
    if buf.size == 0:
        return b""

    flip = generator.random(buf.size) < probability
    if every_other:
        flip[1::2] = False
    masks = np.left_shift(1, generator.integers(0, 8, size=buf.size)).astype(np.uint8)
    buf[flip] ^= masks[flip]
    return buf.tobytes()


def count_bit_errors(original: Union[bytes, bytearray], received: Union[bytes, bytearray]) -> int:
    """
    Number of differing bits between two equal-length buffers.

    Examples:
        >>> count_bit_errors(b"\\x00\\xff", b"\\x01\\x7f")
        2
    """
    if len(original) != len(received):
        raise ValueError(
            f"Buffers must have equal length, got {len(original)} and {len(received)}"
        )

    a = np.frombuffer(bytes(original), dtype=np.uint8)
    b = np.frombuffer(bytes(received), dtype=np.uint8)
    return int(np.unpackbits(a ^ b).sum())


def bit_error_rate(
    original: Union[bytes, bytearray], received: Union[bytes, bytearray]
) -> Optional[float]:
    """Fraction of differing bits, or None for empty buffers."""
    errors = count_bit_errors(original, received)
    if not original:
        return None
    return errors / (len(original) * 8)
