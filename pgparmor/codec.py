from __future__ import annotations

import base64
from typing import BinaryIO

from .constants import GROUP_BYTES
from .errors import InvalidChunkLengthError


def encode_chunk(data: bytes) -> bytes:
    """Base64 for a single armor group of 0-3 raw bytes.

    One byte gives two chars plus "==", two bytes give three plus "=", three
    bytes give four chars. An empty group encodes to nothing.
    """
    n = len(data)
    if n == 0:
        return b""
    if n > GROUP_BYTES:
        raise InvalidChunkLengthError(f"unknown length in encode: {n}")
    return base64.b64encode(bytes(data))


def write_chunk(sink: BinaryIO, data: bytes) -> int:
    enc = encode_chunk(data)
    if enc:
        sink.write(enc)
    return len(enc)
