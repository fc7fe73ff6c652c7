"""Pytest configuration and fixtures for bitfec tests.

This module provides shared fixtures and configuration for the test suite.
"""

import numpy as np
import pytest

# Fixed seed for reproducible tests
RANDOM_SEED = 42


@pytest.fixture
def rng():
    """A seeded numpy Generator for fault injection."""
    return np.random.default_rng(RANDOM_SEED)


def flip_bit(data: bytes, index: int) -> bytes:
    """Flip bit ``index`` (MSB-first) of ``data``."""
    buf = bytearray(data)
    buf[index // 8] ^= 1 << (7 - index % 8)
    return bytes(buf)


def to_bools(data: bytes) -> list:
    """Unpack bytes MSB-first."""
    return [bool(byte & (1 << (7 - i))) for byte in data for i in range(8)]
