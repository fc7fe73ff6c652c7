"""bitfec Pipeline Driver

Composes BitStream -> per-group transform -> PartialBytes in one call.

``run`` lets any exception raised by the transform escape unchanged.
``run_fallible`` is for transforms that signal a recoverable per-group
failure with UnrecoverableCorruption: it stops at the first failing group,
throws away everything accumulated so far and re-raises with the group's
index attached.
"""

from __future__ import annotations

import logging
from typing import List, Protocol, Union

from bitfec.core.accumulator import PartialBytes, TailPolicy
from bitfec.core.bitstream import BitStream
from bitfec.errors import UnrecoverableCorruption

__all__ = [
    "BlockTransform",
    "run",
    "run_fallible",
]

logger = logging.getLogger(__name__)


class BlockTransform(Protocol):
    """Callable mapping one bit-group to another.

    The output length need not match the input length. Fallible transforms
    raise UnrecoverableCorruption instead of returning.
    """

    def __call__(self, group: List[bool]) -> List[bool]:
        ...


def run(
    buffer: Union[bytes, bytearray],
    stride: int,
    transform: BlockTransform,
    *,
    tail: TailPolicy = TailPolicy.DISCARD,
    partial: bool = True,
) -> bytes:
    """
    Stream ``buffer`` in ``stride``-bit groups through ``transform``.

    Args:
        buffer: Input bytes. Not modified.
        stride: Group width in bits.
        transform: Per-group transform.
        tail: Treatment of a trailing partial output byte.
        partial: Whether the stream may emit zero-padded trailing groups.

    Returns:
        The repacked output bytes.

    Examples:
        >>> run(b"\\x01\\x02", 8, lambda g: [b for b in g for _ in range(2)])
        b'\\x00\\x03\\x00\\x0c'
    """
    acc = PartialBytes()
    groups = 0
    for group in BitStream(buffer, stride, partial=partial):
        acc.push(transform(group))
        groups += 1

    output = acc.finalize(tail)
    logger.debug(
        "Pipeline stride=%d: %d bytes -> %d groups -> %d bytes", stride, len(buffer), groups, len(output)
    )
    return output


def run_fallible(
    buffer: Union[bytes, bytearray],
    stride: int,
    transform: BlockTransform,
    *,
    tail: TailPolicy = TailPolicy.DISCARD,
    partial: bool = True,
) -> bytes:
    """
    Like ``run``, but for transforms that may fail on a single group.

    Raises:
        UnrecoverableCorruption: From the first failing group, with
            ``block_index`` set. No partial output is returned.
    """
    acc = PartialBytes()
    for index, group in enumerate(BitStream(buffer, stride, partial=partial)):
        try:
            out = transform(group)
        except UnrecoverableCorruption as e:
            e.block_index = index
            logger.debug(
                "Pipeline stride=%d: group %d failed, discarding %d bytes", stride, index, len(acc)
            )
            raise
        acc.push(out)

    return acc.finalize(tail)
