"""
Codec Interfaces
================

Abstract interfaces implemented by every codec handler and by the registry
that the dispatch layer uses to find them.
"""

from abc import ABC, abstractmethod
from typing import Any

from .algorithms import Algorithm


class Codec(ABC):
    """Whole-buffer, stateless compressor/decompressor pair."""

    @property
    @abstractmethod
    def algorithm(self) -> Algorithm:
        """
        Return the selector this codec answers to.

        Returns:
            A concrete Algorithm (never ``Algorithm.AUTO``)
        """
        pass

    @abstractmethod
    def compress(self, data: Any, config: Any) -> bytes:
        """
        Compress a whole buffer.

        Args:
            data: Bytes-like input, never modified
            config: CodecConfig supplying codec parameters

        Returns:
            A new bytes object
        """
        pass

    @abstractmethod
    def decompress(self, data: Any, config: Any) -> bytes:
        """
        Decompress a whole buffer.

        Args:
            data: Bytes-like compressed stream, never modified
            config: CodecConfig supplying the truncation policy

        Returns:
            A new bytes object

        Raises:
            MalformedStreamError: Stream is truncated and strict mode is on
            CorruptStreamError: Stream references data that does not exist
        """
        pass


class CodecRegistry(ABC):
    """Interface for registering and retrieving codecs."""

    @abstractmethod
    def register_codec(self, codec: Codec) -> None:
        """Register a codec, replacing any codec for the same algorithm."""
        pass

    @abstractmethod
    def get_codec(self, algorithm: Algorithm) -> Codec:
        """
        Get the codec for a concrete algorithm.

        Raises:
            AlgorithmResolutionError: ``algorithm`` is AUTO or unregistered
        """
        pass
