from bitfec.codec import HammingCode, RepetitionCode, hamming, identity, repetition
from bitfec.core import BitStream, Bits, PartialBytes, TailPolicy, run, run_fallible
from bitfec.errors import (
    BlockLengthError,
    CorruptionAbort,
    FECError,
    UnrecoverableCorruption,
)

__all__ = [
    'hamming',
    'repetition',
    'identity',
    'HammingCode',
    'RepetitionCode',
    'BitStream',
    'Bits',
    'PartialBytes',
    'TailPolicy',
    'run',
    'run_fallible',
    'FECError',
    'BlockLengthError',
    'UnrecoverableCorruption',
    'CorruptionAbort',
]
