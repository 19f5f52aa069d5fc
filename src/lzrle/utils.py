"""
Utility functions for lzrle
===========================

Content hashing used for round-trip verification and batch logging.
"""

import xxhash


def content_digest(data) -> str:
    """Hex xxh3_64 digest of a bytes-like object."""
    return xxhash.xxh3_64(memoryview(data).cast("B")).hexdigest()


def compression_ratio(original_size: int, compressed_size: int) -> float:
    """Compressed size as a fraction of the original (0.0 for empty input)."""
    if original_size == 0:
        return 0.0
    return compressed_size / original_size
