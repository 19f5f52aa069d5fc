"""
Codec Handlers
==============

Concrete codec handlers wrapping the RLE and LZ77 functions, and the default
registry used by :mod:`lzrle.core` to route a selector to its codec.
"""

import logging
from typing import Any, Dict

from . import interfaces
from .algorithms import Algorithm
from .error_handling import AlgorithmResolutionError
from .lz77 import lz77_compress, lz77_decompress
from .rle import rle_compress, rle_decompress

logger = logging.getLogger(__name__)


class RleCodec(interfaces.Codec):
    """Run-length encoding of (count, value) pairs."""

    @property
    def algorithm(self) -> Algorithm:
        return Algorithm.RLE

    def compress(self, data: Any, config: Any) -> bytes:
        return rle_compress(data)

    def decompress(self, data: Any, config: Any) -> bytes:
        return rle_decompress(data, strict=config.decompression.strict)


class Lz77Codec(interfaces.Codec):
    """Sliding-window LZ77 with fixed 4-byte records."""

    @property
    def algorithm(self) -> Algorithm:
        return Algorithm.LZ

    def compress(self, data: Any, config: Any) -> bytes:
        return lz77_compress(
            data,
            window_size=config.lz77.window_size,
            lookahead=config.lz77.lookahead,
        )

    def decompress(self, data: Any, config: Any) -> bytes:
        return lz77_decompress(data, strict=config.decompression.strict)


class CodecRegistry(interfaces.CodecRegistry):
    """Registry mapping concrete algorithms to codec handlers."""

    def __init__(self):
        self.codecs: Dict[Algorithm, interfaces.Codec] = {}
        self.register_codec(RleCodec())
        self.register_codec(Lz77Codec())

    def register_codec(self, codec: interfaces.Codec) -> None:
        if not codec.algorithm.is_terminal:
            raise ValueError("Codecs cannot be registered under AUTO")
        self.codecs[codec.algorithm] = codec
        logger.debug(f"Registered codec {type(codec).__name__} for {codec.algorithm.value}")

    def get_codec(self, algorithm: Algorithm) -> interfaces.Codec:
        algorithm = Algorithm(algorithm)
        try:
            return self.codecs[algorithm]
        except KeyError:
            if algorithm is Algorithm.AUTO:
                raise AlgorithmResolutionError(
                    "AUTO must be resolved to a concrete algorithm before dispatch"
                ) from None
            raise AlgorithmResolutionError(
                f"No codec registered for {algorithm.value}"
            ) from None


_default_registry = None


def get_registry() -> CodecRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = CodecRegistry()
    return _default_registry
