"""bitfec Codecs

Byte-level error correcting codes built on the bitfec pipeline:
- Hamming single-error-correcting code (hamming)
- Repetition code with majority-vote decoding (repetition)
- Identity codec (identity)

Each module exposes ``encode(buffer, parameter)`` and ``decode(buffer,
parameter)``; the repetition module adds ``panic_decode`` and
``wrong_decode`` for different tie handling.
"""

from bitfec.codec import hamming, identity, repetition
from bitfec.codec.hamming import HammingCode
from bitfec.codec.repetition import RepetitionCode

__all__ = [
    "hamming",
    "repetition",
    "identity",
    "HammingCode",
    "RepetitionCode",
]
