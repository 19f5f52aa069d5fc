"""
Codec Dispatch
==============

Single entry point routing a whole buffer to the selected codec.

Usage:
    from lzrle import Algorithm, compress, decompress

    packed = compress(b"aaaabbbccd", Algorithm.RLE)
    assert decompress(packed, Algorithm.RLE) == b"aaaabbbccd"
"""

import logging
from typing import Optional

from .algorithms import Algorithm
from .config import CodecConfig, get_default_config
from .detection import resolve_algorithm
from .error_handling import (
    AlgorithmResolutionError,
    CodecError,
    CodecIntegrityError,
    codec_operation_context,
    with_error_handling,
)
from .handlers import get_registry
from .utils import compression_ratio, content_digest

logger = logging.getLogger(__name__)


@with_error_handling(error_type=CodecError)
def compress(data, algorithm=Algorithm.AUTO, config: Optional[CodecConfig] = None) -> bytes:
    """
    Compress a whole buffer.

    Args:
        data: Bytes-like input; it is never modified
        algorithm: Algorithm.RLE, Algorithm.LZ, or Algorithm.AUTO to pick a
            codec from the input itself
        config: Codec configuration (defaults to the global config)

    Returns:
        The compressed stream as a new bytes object

    Raises:
        CodecIntegrityError: Round-trip verification is enabled and fails
    """
    config = config or get_default_config()
    resolved = resolve_algorithm(algorithm, sample=data, config=config)
    codec = get_registry().get_codec(resolved)

    with codec_operation_context("compress", algorithm=resolved.value):
        result = codec.compress(data, config)

    logger.debug(
        f"Compressed {len(data)} bytes with {resolved.value} "
        f"(ratio {compression_ratio(len(data), len(result)):.3f})"
    )

    if config.verification.verify_roundtrip:
        verify_roundtrip(data, result, resolved, config)

    return result


@with_error_handling(error_type=CodecError)
def decompress(data, algorithm, config: Optional[CodecConfig] = None) -> bytes:
    """
    Decompress a whole buffer.

    Neither format carries a header, so ``algorithm`` must name the codec the
    stream was produced with.

    Raises:
        AlgorithmResolutionError: ``algorithm`` is Algorithm.AUTO
        MalformedStreamError: Truncated stream in strict mode
        CorruptStreamError: LZ77 back-reference out of range
    """
    config = config or get_default_config()
    algorithm = Algorithm(algorithm)
    if not algorithm.is_terminal:
        raise AlgorithmResolutionError(
            "Cannot auto-detect the codec of a compressed stream; "
            "pass the algorithm used for compression",
            {"stream_length": len(data)},
        )

    codec = get_registry().get_codec(algorithm)
    with codec_operation_context("decompress", algorithm=algorithm.value):
        return codec.decompress(data, config)


def verify_roundtrip(original, compressed, algorithm: Algorithm, config: CodecConfig) -> None:
    """Decompress ``compressed`` and compare digests with ``original``."""
    expected = content_digest(original)
    actual = content_digest(get_registry().get_codec(algorithm).decompress(compressed, config))

    if expected != actual:
        raise CodecIntegrityError(
            "Round-trip verification failed",
            {"algorithm": algorithm.value, "expected": expected, "actual": actual},
        )
    logger.debug(f"Round-trip verified ({algorithm.value}, digest {expected})")
