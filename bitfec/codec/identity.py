"""bitfec Identity Codec

Passes data through unchanged. Useful as a baseline when comparing codecs
over a noisy channel.
"""

from __future__ import annotations

from typing import Union

__all__ = ["encode", "decode"]


def encode(buffer: Union[bytes, bytearray]) -> bytes:
    """Return ``buffer`` unchanged."""
    return bytes(buffer)


def decode(buffer: Union[bytes, bytearray]) -> bytes:
    """Return ``buffer`` unchanged."""
    return bytes(buffer)
