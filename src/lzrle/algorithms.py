"""
Algorithm and File-Type Selectors
=================================

Canonical enumerations shared by the codecs, the heuristic and every outer
layer. Foreign-runtime mirrors live in ``lzrle.bindings`` and convert to
these values at the boundary.
"""

from enum import Enum


class Algorithm(str, Enum):
    """Codec selector. ``AUTO`` must be resolved before a codec runs."""

    RLE = "rle"
    LZ = "lz"
    AUTO = "auto"

    @classmethod
    def from_name(cls, name: str) -> "Algorithm":
        """Look up a selector by its lowercase name (``"rle"``, ``"lz"``, ``"auto"``)."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown algorithm: {name!r} (expected one of {valid})"
            ) from None

    @property
    def is_terminal(self) -> bool:
        return self is not Algorithm.AUTO


class FileType(str, Enum):
    """Coarse classification of a byte sample."""

    TEXT = "text"
    BINARY = "binary"
    MIXED = "mixed"
