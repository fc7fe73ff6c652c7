"""bitfec exception hierarchy

All library exceptions derive from FECError.

Two kinds of failure exist:

- Contract violations (a block transform given the wrong number of bits)
  raise BlockLengthError. These are programming errors and are never caught
  inside the library.
- Data-dependent corruption is limited to repetition ties. The recoverable
  decode raises UnrecoverableCorruption, the fatal decode raises
  CorruptionAbort.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "FECError",
    "BlockLengthError",
    "UnrecoverableCorruption",
    "CorruptionAbort",
]


class FECError(Exception):
    """Base exception for all bitfec errors."""


class BlockLengthError(FECError, ValueError):
    """Raised when a block transform receives a block of the wrong length."""

    def __init__(self, expected: int, actual: int, what: str = "block") -> None:
        super().__init__(f"{what} must be {expected} bits, got {actual}")
        self.expected = expected
        self.actual = actual


class UnrecoverableCorruption(FECError):
    """Raised when a block has no majority and the caller may recover.

    Attributes:
    ----------
        weight: Number of set bits in the tied block.
        number: Length of the tied block.
        block_index: Index of the failing block in the stream, filled in by
            the pipeline driver.
    """

    def __init__(
        self,
        message: str = "Unrecoverable corruption has occurred in this data.",
        weight: Optional[int] = None,
        number: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.weight = weight
        self.number = number
        self.block_index: Optional[int] = None


class CorruptionAbort(FECError):
    """Raised when a block has no majority and decoding must abort."""
