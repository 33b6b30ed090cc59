from __future__ import annotations

from typing import Dict, Union

from .constants import HashAlgorithm
from .errors import UnsupportedHashAlgorithmError


_CR = 0x0D
_LF = 0x0A
_DASH = 0x2D

_HASH_NAMES: Dict[int, str] = {
    HashAlgorithm.SHA1: "SHA1",
    HashAlgorithm.SHA256: "SHA256",
    HashAlgorithm.SHA384: "SHA384",
    HashAlgorithm.SHA512: "SHA512",
    HashAlgorithm.MD2: "MD2",
    HashAlgorithm.MD5: "MD5",
    HashAlgorithm.RIPEMD160: "RIPEMD160",
}


def hash_name(algorithm: Union[HashAlgorithm, int]) -> str:
    """Canonical name for the "Hash:" armor header."""
    if isinstance(algorithm, bool) or not isinstance(algorithm, int):
        raise UnsupportedHashAlgorithmError(algorithm)
    try:
        return _HASH_NAMES[int(algorithm)]
    except KeyError:
        raise UnsupportedHashAlgorithmError(algorithm) from None


def hash_algorithm_from_name(name: str) -> HashAlgorithm:
    key = name.strip().upper().replace("-", "")
    for alg, canonical in _HASH_NAMES.items():
        if canonical == key:
            return HashAlgorithm(alg)
    raise UnsupportedHashAlgorithmError(name)


class ClearTextEscaper:
    """Dash-escaping for the body of a clear-signed message.

    Bytes pass through unchanged. A '-' at the start of a line becomes "- -".
    A line starts after '\\r', or after a '\\n' that does not finish a CRLF pair.
    """

    def __init__(self) -> None:
        self.at_line_start = True
        self.last_byte = 0

    def escape(self, b: int) -> bytes:
        b &= 0xFF
        out = bytes([b])
        if self.at_line_start:
            # The LF of a CRLF pair keeps us at the line start opened by the CR
            if not (b == _LF and self.last_byte == _CR):
                self.at_line_start = False
            if b == _DASH:
                out += b" -"
        if b == _CR or (b == _LF and self.last_byte != _CR):
            self.at_line_start = True
        self.last_byte = b
        return out
