"""bitfec Core Components

The bit-level plumbing every codec is built on:
- BitStream: fixed-width bit-groups over a byte buffer
- PartialBytes: folds bit-groups back into bytes
- run / run_fallible: the stream -> transform -> bytes pipeline
- Bits: packed boolean sequence
"""

from bitfec.core.accumulator import (
    PartialBytes,
    TailPolicy,
    empty_part,
    to_bytes,
    to_part_bytes,
)
from bitfec.core.bits import Bits
from bitfec.core.bitstream import BitStream, n_bits
from bitfec.core.constants import (
    BITS_PER_BYTE,
    MIN_PARITY,
    MIN_REPETITION,
)
from bitfec.core.pipeline import BlockTransform, run, run_fallible

__all__ = [
    # Stream
    "BitStream",
    "n_bits",
    # Accumulator
    "PartialBytes",
    "TailPolicy",
    "empty_part",
    "to_part_bytes",
    "to_bytes",
    # Pipeline
    "BlockTransform",
    "run",
    "run_fallible",
    # Packed bits
    "Bits",
    # Constants
    "BITS_PER_BYTE",
    "MIN_PARITY",
    "MIN_REPETITION",
]
