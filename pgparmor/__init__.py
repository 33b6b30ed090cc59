"""
pgparmor: streaming OpenPGP ASCII armor (RFC 4880 section 6).

- ArmoredWriter turns a binary packet stream into a BEGIN/END framed, base64
  body wrapped at 64 columns, followed by a CRC24 checksum line.
- The block label (PUBLIC KEY BLOCK, PRIVATE KEY BLOCK, SIGNATURE, MESSAGE) is
  picked from the packet tag of the first byte written.
- Clear-signed text mode emits the SIGNED MESSAGE preamble and dash-escapes
  the body; the detached signature is armored afterwards on the same sink.

Nothing here decodes armor, parses packets or computes signatures.
"""

__version__ = "0.1"

from .constants import HashAlgorithm, PacketTag
from .crc24 import Crc24, crc24
from .codec import encode_chunk
from .errors import (
    ArmorError,
    ArmorStateError,
    InvalidChunkLengthError,
    UnsupportedHashAlgorithmError,
)
from .headers import ArmorConfig, HeaderRegistry
from .writer import ArmoredWriter, BlockState, armor_bytes

__all__ = [
    "ArmoredWriter",
    "ArmorConfig",
    "HeaderRegistry",
    "BlockState",
    "armor_bytes",
    "Crc24",
    "crc24",
    "encode_chunk",
    "HashAlgorithm",
    "PacketTag",
    # errors
    "ArmorError",
    "ArmorStateError",
    "InvalidChunkLengthError",
    "UnsupportedHashAlgorithmError",
]
