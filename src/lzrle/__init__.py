"""
lzrle - Lossless byte-stream compression with run-length encoding and LZ77.

This library provides two whole-buffer codecs with bit-exact wire formats and
a small heuristic that recommends one of them from a sample of the input.

Key Features:
- RLE: (count, value) byte pairs, runs capped at 255
- LZ77: 4-byte literal/back-reference records over a 4096-byte window
- File-type detection (text / binary / mixed) with codec suggestion
  (optional, needs the ``detection`` extra)
- Optional round-trip verification with xxHash digests

Quick Start:
    >>> from lzrle import Algorithm, compress, decompress
    >>>
    >>> packed = compress(b"aaaabbbccd", Algorithm.RLE)
    >>> packed
    b'\\x04a\\x03b\\x02c\\x01d'
    >>> decompress(packed, Algorithm.RLE)
    b'aaaabbbccd'
"""

__version__ = "0.1.0"

from .algorithms import Algorithm, FileType
from .config import CodecConfig, create_codec_config
from .core import compress, decompress
from .detection import (
    DETECTION_AVAILABLE,
    detect_file_type,
    detect_file_type_from_path,
    resolve_algorithm,
    suggest_algorithm,
)
from .error_handling import (
    AlgorithmResolutionError,
    CodecConfigurationError,
    CodecError,
    CodecIntegrityError,
    CorruptStreamError,
    DetectionUnavailableError,
    MalformedStreamError,
)
from .lz77 import lz77_compress, lz77_decompress
from .rle import rle_compress, rle_decompress

__all__ = [
    # Dispatch
    "compress",
    "decompress",
    "Algorithm",
    "FileType",
    # Codecs
    "rle_compress",
    "rle_decompress",
    "lz77_compress",
    "lz77_decompress",
    # Heuristic
    "detect_file_type",
    "detect_file_type_from_path",
    "suggest_algorithm",
    "resolve_algorithm",
    "DETECTION_AVAILABLE",
    # Configuration
    "CodecConfig",
    "create_codec_config",
    # Errors
    "CodecError",
    "MalformedStreamError",
    "CorruptStreamError",
    "CodecConfigurationError",
    "AlgorithmResolutionError",
    "DetectionUnavailableError",
    "CodecIntegrityError",
    # Version info
    "__version__",
]
