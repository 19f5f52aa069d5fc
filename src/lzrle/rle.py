"""
Run-Length Encoding
===================

Wire format: a flat sequence of ``[count: u8][value: u8]`` pairs, so a
well-formed stream always has even length. Runs longer than 255 bytes are
split across consecutive pairs; a single non-repeated byte costs two bytes.
"""

import logging

from .error_handling import MalformedStreamError

logger = logging.getLogger(__name__)

MAX_RUN = 255
TOKEN_SIZE = 2


def rle_compress(data) -> bytes:
    """Encode ``data`` as (count, value) pairs.

    Args:
        data: Any bytes-like object

    Returns:
        New ``bytes`` object holding the encoded stream
    """
    data = memoryview(data).cast("B")
    size = len(data)
    out = bytearray()
    i = 0

    while i < size:
        current = data[i]
        count = 1
        while i + count < size and data[i + count] == current and count < MAX_RUN:
            count += 1

        out.append(count)
        out.append(current)
        i += count

    logger.debug(f"RLE compressed {size} -> {len(out)} bytes")
    return bytes(out)


def rle_decompress(data, strict: bool = False) -> bytes:
    """Expand a stream of (count, value) pairs.

    A zero count emits nothing. A trailing byte without its value is dropped,
    or reported as :class:`MalformedStreamError` when ``strict`` is set.
    """
    data = memoryview(data).cast("B")
    size = len(data)
    complete = size - size % TOKEN_SIZE

    if complete != size:
        if strict:
            raise MalformedStreamError(
                "RLE stream ends with an incomplete token",
                {"stream_length": size, "dangling_bytes": size - complete},
            )
        logger.debug(f"Dropping {size - complete} dangling byte(s) from RLE stream")

    out = bytearray()
    for i in range(0, complete, TOKEN_SIZE):
        out += bytes((data[i + 1],)) * data[i]

    logger.debug(f"RLE decompressed {size} -> {len(out)} bytes")
    return bytes(out)
