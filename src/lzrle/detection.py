"""
File-Type Detection and Algorithm Selection
===========================================

Classifies a byte sample as text, binary or mixed content and maps the
classification to a recommended codec. Only the first ``sample_size`` bytes
(1024 by default) are ever examined.

The classifier is optional: it needs NumPy, installed with the ``detection``
extra (``pip install lzrle[detection]``). ``DETECTION_AVAILABLE`` reports
whether it can be used, and ``DetectionConfig.enabled`` switches it off per
configuration. Without it, ``AUTO`` resolves to the configured default codec.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .algorithms import Algorithm, FileType
from .config import DetectionConfig, get_default_config
from .error_handling import (
    DetectionUnavailableError,
    safe_file_operation,
    validate_file_path,
)

logger = logging.getLogger(__name__)

# Optional dependency - numpy for vectorised byte classification
try:
    import numpy as np

    DETECTION_AVAILABLE = True
except ImportError:
    np = None  # type: ignore
    DETECTION_AVAILABLE = False


# Printable ASCII (0x21-0x7E) plus space, tab, LF, FF and CR
_TEXT_BYTE_VALUES = list(range(0x21, 0x7F)) + [0x20, 0x09, 0x0A, 0x0C, 0x0D]

if DETECTION_AVAILABLE:
    _TEXT_BYTES = np.zeros(256, dtype=bool)
    _TEXT_BYTES[_TEXT_BYTE_VALUES] = True


_SUGGESTIONS = {
    FileType.TEXT: Algorithm.RLE,
    FileType.BINARY: Algorithm.LZ,
    FileType.MIXED: Algorithm.LZ,
}


def _detection_config(config) -> DetectionConfig:
    if config is None:
        return get_default_config().detection
    # Accept either a CodecConfig or a bare DetectionConfig
    return getattr(config, "detection", config)


def is_detection_enabled(config=None) -> bool:
    """True when NumPy is importable and detection is enabled in ``config``."""
    return DETECTION_AVAILABLE and _detection_config(config).enabled


def text_ratio(sample, sample_size: Optional[int] = None) -> Optional[float]:
    """Fraction of text bytes among the first ``sample_size`` bytes of ``sample``.

    Returns None for an empty sample.
    """
    if not DETECTION_AVAILABLE:
        raise DetectionUnavailableError(
            "File-type detection requires numpy (install lzrle[detection])"
        )

    if sample_size is None:
        sample_size = get_default_config().detection.sample_size

    view = memoryview(sample).cast("B")[:sample_size]
    if len(view) == 0:
        return None

    buffer = np.frombuffer(view, dtype=np.uint8)
    return float(np.count_nonzero(_TEXT_BYTES[buffer])) / buffer.size


def detect_file_type(sample, config=None) -> FileType:
    """
    Classify a pre-read byte sample.

    Args:
        sample: Bytes-like sample; only the first ``sample_size`` bytes count
        config: CodecConfig or DetectionConfig (defaults to the global config)

    Returns:
        FileType.TEXT if more than 95% of the bytes are text, FileType.BINARY
        if fewer than 5% are, FileType.MIXED otherwise. An empty sample
        yields ``empty_sample_type`` (BINARY by default).

    Raises:
        DetectionUnavailableError: numpy is missing or detection is disabled
    """
    detection = _detection_config(config)
    if not detection.enabled:
        raise DetectionUnavailableError("File-type detection is disabled")

    ratio = text_ratio(sample, detection.sample_size)
    if ratio is None:
        file_type = FileType(detection.empty_sample_type)
        logger.debug(f"Empty sample classified as {file_type.value}")
        return file_type

    if ratio > detection.text_threshold:
        file_type = FileType.TEXT
    elif ratio < detection.binary_threshold:
        file_type = FileType.BINARY
    else:
        file_type = FileType.MIXED

    logger.debug(f"Sample classified as {file_type.value} (text ratio {ratio:.3f})")
    return file_type


def detect_file_type_from_path(path: Union[str, Path], config=None) -> FileType:
    """Classify a file from its first ``sample_size`` bytes."""
    detection = _detection_config(config)
    path = validate_file_path(path, must_exist=True)

    def _read_sample() -> bytes:
        with open(path, "rb") as f:
            return f.read(detection.sample_size)

    sample = safe_file_operation("read detection sample", path, _read_sample)
    return detect_file_type(sample, detection)


def suggest_algorithm(file_type: FileType) -> Algorithm:
    """Recommended codec: RLE for text, LZ for binary and mixed content."""
    return _SUGGESTIONS[FileType(file_type)]


def resolve_algorithm(algorithm, sample=None, config=None) -> Algorithm:
    """
    Turn a selector into a concrete codec.

    Concrete selectors pass through unchanged. ``AUTO`` is resolved from
    ``sample`` when one is given and detection is usable; otherwise the
    configured default codec (LZ) is returned.
    """
    algorithm = Algorithm(algorithm)
    if algorithm.is_terminal:
        return algorithm

    detection = _detection_config(config)
    default = Algorithm(detection.default_algorithm)

    if sample is None:
        logger.debug(f"No sample available for AUTO, using {default.value}")
        return default

    if not is_detection_enabled(detection):
        logger.warning(
            f"File-type detection unavailable, AUTO falls back to {default.value}"
        )
        return default

    resolved = suggest_algorithm(detect_file_type(sample, detection))
    logger.debug(f"AUTO resolved to {resolved.value}")
    return resolved
