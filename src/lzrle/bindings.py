"""
Foreign Runtime Bindings
========================

Byte-array calling convention for embedding lzrle in another runtime
(FFI layers, WebAssembly hosts, ctypes/cffi callers). Callers pass buffers
and a small integer algorithm code; results come back as ``bytearray``.

``ForeignAlgorithm`` mirrors :class:`lzrle.algorithms.Algorithm`. The two
conversion functions below are the only place the mirror is interpreted.
"""

from enum import IntEnum

from .algorithms import Algorithm, FileType
from .core import compress, decompress
from .detection import detect_file_type, suggest_algorithm


class ForeignAlgorithm(IntEnum):
    RLE = 0
    LZ = 1
    AUTO = 2


_TO_ALGORITHM = {
    ForeignAlgorithm.RLE: Algorithm.RLE,
    ForeignAlgorithm.LZ: Algorithm.LZ,
    ForeignAlgorithm.AUTO: Algorithm.AUTO,
}
_FROM_ALGORITHM = {value: key for key, value in _TO_ALGORITHM.items()}


def to_algorithm(code) -> Algorithm:
    """Convert a foreign algorithm code (or ForeignAlgorithm) to Algorithm."""
    return _TO_ALGORITHM[ForeignAlgorithm(code)]


def from_algorithm(algorithm) -> ForeignAlgorithm:
    return _FROM_ALGORITHM[Algorithm(algorithm)]


def compress_data(data, algorithm=ForeignAlgorithm.AUTO) -> bytearray:
    return bytearray(compress(data, to_algorithm(algorithm)))


def decompress_data(data, algorithm) -> bytearray:
    return bytearray(decompress(data, to_algorithm(algorithm)))


def detect_file_type_name(data) -> str:
    """Classify ``data`` and return ``"text"``, ``"binary"`` or ``"mixed"``."""
    return detect_file_type(data).value


def suggest_algorithm_name(file_type: str) -> ForeignAlgorithm:
    """Map a file-type name to a foreign algorithm code; unknown names give AUTO."""
    try:
        file_type = FileType(file_type)
    except ValueError:
        return ForeignAlgorithm.AUTO
    return from_algorithm(suggest_algorithm(file_type))
