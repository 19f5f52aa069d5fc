"""
Shared fixtures for lzrle tests.
"""

import io
import sys
from types import SimpleNamespace

import pytest


@pytest.fixture
def text_file(tmp_path):
    """A small text file with long runs of repeated characters."""
    path = tmp_path / "notes.txt"
    path.write_bytes(b"aaaaaaaabbbbbbbb\n" * 40)
    return path


@pytest.fixture
def binary_file(tmp_path):
    """A binary file of mostly zero bytes with a repeated header."""
    path = tmp_path / "blob.bin"
    path.write_bytes((b"\x89HDR\x00\x01" + bytes(58)) * 8)
    return path


@pytest.fixture
def binary_stdio(monkeypatch):
    """Replace stdin/stdout with in-memory binary buffers.

    Returns a callable that loads stdin with the given bytes and gives back
    the buffer that receives stdout.
    """

    def feed(data: bytes) -> io.BytesIO:
        stdout = io.BytesIO()
        monkeypatch.setattr(sys, "stdin", SimpleNamespace(buffer=io.BytesIO(data)))
        monkeypatch.setattr(sys, "stdout", SimpleNamespace(buffer=stdout))
        return stdout

    return feed
