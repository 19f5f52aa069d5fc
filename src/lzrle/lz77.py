"""
LZ77 Sliding-Window Compression
===============================

Wire format: a sequence of fixed 4-byte records::

    [offset_hi: u8][offset_lo: u8][length: u8][literal: u8]

``offset`` is big-endian. A record with ``offset == 0 and length == 0`` is a
literal carrying one raw byte in the last field. Any other record is a
back-reference telling the decoder to copy ``length`` bytes starting
``offset`` bytes behind the current end of output; its last byte is written
as zero and ignored when decoding.

Compression is a brute-force scan of the whole window at every position,
``O(n * window_size)``. Matches must lie entirely before the current
position, while the decoder still supports overlapping copies so that
streams from other encoders expand correctly.
"""

import logging
from typing import Iterator, Tuple

from .config import (
    DEFAULT_LOOKAHEAD,
    DEFAULT_WINDOW_SIZE,
    MAX_OFFSET,
    MAX_TOKEN_LENGTH,
    MIN_MATCH,
)
from .error_handling import (
    CodecConfigurationError,
    CorruptStreamError,
    MalformedStreamError,
)

logger = logging.getLogger(__name__)

TOKEN_SIZE = 4


def _find_longest_match(
    data: memoryview, pos: int, window_size: int, lookahead: int
) -> Tuple[int, int]:
    """Return ``(offset, length)`` of the longest earlier match for ``data[pos:]``.

    Candidates are scanned from the far end of the window towards ``pos`` and
    only a strictly longer match replaces the current best.
    """
    size = len(data)
    best_offset = 0
    best_length = 0

    for i in range(max(0, pos - window_size), pos):
        length = 0
        while (
            length < lookahead
            and pos + length < size
            and i + length < pos
            and data[i + length] == data[pos + length]
        ):
            length += 1

        if length > best_length:
            best_offset = pos - i
            best_length = length
            if length == lookahead:
                break

    return best_offset, best_length


def lz77_compress(
    data,
    window_size: int = DEFAULT_WINDOW_SIZE,
    lookahead: int = DEFAULT_LOOKAHEAD,
) -> bytes:
    """Encode ``data`` as LZ77 literal and back-reference records.

    Args:
        data: Any bytes-like object
        window_size: How far back a match may start (at most 65535)
        lookahead: Longest match a single record may describe (at most 255)

    Returns:
        New ``bytes`` object whose length is a multiple of 4
    """
    if not (1 <= window_size <= MAX_OFFSET):
        raise CodecConfigurationError(
            f"window_size must be between 1 and {MAX_OFFSET}",
            {"window_size": window_size},
        )
    if not (MIN_MATCH <= lookahead <= MAX_TOKEN_LENGTH):
        raise CodecConfigurationError(
            f"lookahead must be between {MIN_MATCH} and {MAX_TOKEN_LENGTH}",
            {"lookahead": lookahead},
        )

    data = memoryview(data).cast("B")
    size = len(data)
    out = bytearray()
    pos = 0
    references = 0

    while pos < size:
        offset, length = _find_longest_match(data, pos, window_size, lookahead)

        if length >= MIN_MATCH:
            out += bytes((offset >> 8, offset & 0xFF, length, 0))
            pos += length
            references += 1
        else:
            out += bytes((0, 0, 0, data[pos]))
            pos += 1

    logger.debug(
        f"LZ77 compressed {size} -> {len(out)} bytes "
        f"({references} back-reference(s), {len(out) // TOKEN_SIZE - references} literal(s))"
    )
    return bytes(out)


def iter_tokens(data, strict: bool = False) -> Iterator[Tuple[int, int, int]]:
    """Yield ``(offset, length, literal)`` for every complete record in ``data``.

    A partial trailing record is dropped, or reported as
    :class:`MalformedStreamError` when ``strict`` is set.
    """
    data = memoryview(data).cast("B")
    size = len(data)
    complete = size - size % TOKEN_SIZE

    if complete != size:
        if strict:
            raise MalformedStreamError(
                "LZ77 stream ends with an incomplete token",
                {"stream_length": size, "dangling_bytes": size - complete},
            )
        logger.debug(f"Dropping {size - complete} dangling byte(s) from LZ77 stream")

    for i in range(0, complete, TOKEN_SIZE):
        yield (data[i] << 8) | data[i + 1], data[i + 2], data[i + 3]


def lz77_decompress(data, strict: bool = False) -> bytes:
    """Rebuild the original bytes from LZ77 records.

    Raises:
        CorruptStreamError: A back-reference points before the start of the output
        MalformedStreamError: ``strict`` is set and the stream ends mid-record
    """
    out = bytearray()

    for index, (offset, length, literal) in enumerate(iter_tokens(data, strict)):
        if offset == 0 and length == 0:
            out.append(literal)
            continue

        start = len(out) - offset
        if offset == 0 or start < 0:
            raise CorruptStreamError(
                "LZ77 back-reference is out of range",
                {
                    "token_index": index,
                    "offset": offset,
                    "length": length,
                    "output_length": len(out),
                },
            )

        # One byte at a time: source and destination overlap when offset < length
        for j in range(length):
            out.append(out[start + j])

    logger.debug(f"LZ77 decompressed {len(data)} -> {len(out)} bytes")
    return bytes(out)
