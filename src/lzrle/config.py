"""
Configuration Management for lzrle
==================================

Configuration is split into focused sub-configurations, each validated in
``__post_init__``, and combined by :class:`CodecConfig`. Configurations can
be built from keyword overrides, plain dictionaries or JSON files.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .error_handling import CodecConfigurationError

logger = logging.getLogger(__name__)

# Token field widths bound the LZ77 parameters
MAX_OFFSET = 0xFFFF
MAX_TOKEN_LENGTH = 0xFF

# Matches of this length or shorter are never worth a 4-byte token
MIN_MATCH = 3

DEFAULT_WINDOW_SIZE = 4096
DEFAULT_LOOKAHEAD = 15
DEFAULT_SAMPLE_SIZE = 1024


@dataclass
class LZ77Config:
    """Search parameters for LZ77 compression."""

    window_size: int = DEFAULT_WINDOW_SIZE
    lookahead: int = DEFAULT_LOOKAHEAD

    def __post_init__(self):
        if not (1 <= self.window_size <= MAX_OFFSET):
            raise CodecConfigurationError(
                f"window_size must be between 1 and {MAX_OFFSET}",
                {"window_size": self.window_size},
            )
        if not (MIN_MATCH <= self.lookahead <= MAX_TOKEN_LENGTH):
            raise CodecConfigurationError(
                f"lookahead must be between {MIN_MATCH} and {MAX_TOKEN_LENGTH}",
                {"lookahead": self.lookahead},
            )

        logger.debug(
            f"LZ77 configured: window={self.window_size}, lookahead={self.lookahead}"
        )


@dataclass
class DecompressionConfig:
    """Policy for truncated compressed streams."""

    strict: bool = False  # raise MalformedStreamError instead of dropping


@dataclass
class DetectionConfig:
    """Configuration for the file-type heuristic and AUTO resolution."""

    enabled: bool = True
    sample_size: int = DEFAULT_SAMPLE_SIZE
    text_threshold: float = 0.95
    binary_threshold: float = 0.05
    empty_sample_type: str = "binary"  # text, binary, mixed
    default_algorithm: str = "lz"  # used when no sample is available

    def __post_init__(self):
        """Validate detection configuration."""
        if self.sample_size < 1:
            raise CodecConfigurationError(
                "sample_size must be positive", {"sample_size": self.sample_size}
            )

        if not (0.0 <= self.binary_threshold < self.text_threshold <= 1.0):
            raise CodecConfigurationError(
                "thresholds must satisfy 0 <= binary_threshold < text_threshold <= 1",
                {
                    "binary_threshold": self.binary_threshold,
                    "text_threshold": self.text_threshold,
                },
            )

        if self.empty_sample_type not in {"text", "binary", "mixed"}:
            raise CodecConfigurationError(
                f"Invalid empty_sample_type: {self.empty_sample_type}"
            )

        if self.default_algorithm not in {"rle", "lz"}:
            raise CodecConfigurationError(
                f"default_algorithm must be 'rle' or 'lz', got {self.default_algorithm}"
            )

        logger.debug(
            f"Detection configured: enabled={self.enabled}, sample={self.sample_size}, "
            f"thresholds={self.binary_threshold}/{self.text_threshold}"
        )


@dataclass
class VerificationConfig:
    """Round-trip verification after compression."""

    verify_roundtrip: bool = False


@dataclass
class CodecConfig:
    """Main configuration class that combines all sub-configurations."""

    lz77: LZ77Config = field(default_factory=LZ77Config)
    decompression: DecompressionConfig = field(default_factory=DecompressionConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    verification: VerificationConfig = field(default_factory=VerificationConfig)

    def __post_init__(self):
        logger.debug("Codec configuration initialized")

    @classmethod
    def create_fast(cls) -> "CodecConfig":
        """Smaller search window, no verification."""
        return cls(lz77=LZ77Config(window_size=1024))

    @classmethod
    def create_verified(cls) -> "CodecConfig":
        """Strict decoding and round-trip verification of every compression."""
        return cls(
            decompression=DecompressionConfig(strict=True),
            verification=VerificationConfig(verify_roundtrip=True),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_SECTIONS = {
    "lz77": LZ77Config,
    "decompression": DecompressionConfig,
    "detection": DetectionConfig,
    "verification": VerificationConfig,
}


def create_codec_config(
    fast_mode: bool = False, verified_mode: bool = False, **overrides
) -> CodecConfig:
    """
    Factory function for creating configurations with convenience parameters.

    Args:
        fast_mode: Start from :meth:`CodecConfig.create_fast`
        verified_mode: Start from :meth:`CodecConfig.create_verified`
        **overrides: Values for any sub-configuration field, by field name

    Returns:
        Configured CodecConfig instance
    """
    if fast_mode and verified_mode:
        raise CodecConfigurationError("Cannot enable both fast_mode and verified_mode")

    if fast_mode:
        config = CodecConfig.create_fast()
    elif verified_mode:
        config = CodecConfig.create_verified()
    else:
        config = CodecConfig()

    for key, value in overrides.items():
        for section_name in _SECTIONS:
            section = getattr(config, section_name)
            if hasattr(section, key):
                setattr(section, key, value)
                break
        else:
            logger.warning(f"Unknown configuration parameter ignored: {key}")

    # Re-run validation on sections that may have been touched
    for section_name in _SECTIONS:
        section = getattr(config, section_name)
        post_init = getattr(section, "__post_init__", None)
        if post_init is not None:
            post_init()

    return config


def load_config_from_dict(data: Dict[str, Any]) -> CodecConfig:
    """Build a CodecConfig from a nested dictionary (as produced by ``to_dict``)."""
    if not isinstance(data, dict):
        raise CodecConfigurationError(
            "Configuration must be a JSON object", {"type": type(data).__name__}
        )

    sections = {}
    for name, value in data.items():
        section_cls = _SECTIONS.get(name)
        if section_cls is None:
            logger.warning(f"Unknown configuration section ignored: {name}")
            continue
        if not isinstance(value, dict):
            raise CodecConfigurationError(
                f"Configuration section {name!r} must be a mapping"
            )
        try:
            sections[name] = section_cls(**value)
        except TypeError as e:
            raise CodecConfigurationError(
                f"Invalid fields in section {name!r}: {e}", {"section": name}
            ) from e
    return CodecConfig(**sections)


def load_config_from_json(path: Union[str, Path]) -> CodecConfig:
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise CodecConfigurationError(
            f"Cannot load configuration from {path}: {e}", {"path": str(path)}
        ) from e
    return load_config_from_dict(data)


def save_config_to_json(config: CodecConfig, path: Union[str, Path]) -> None:
    Path(path).write_text(json.dumps(config.to_dict(), indent=2))


_default_config: Optional[CodecConfig] = None


def get_default_config() -> CodecConfig:
    """Return the process-wide default configuration, creating it on first use."""
    global _default_config
    if _default_config is None:
        _default_config = CodecConfig()
    return _default_config
