"""
CRC24 as used by the OpenPGP armor checksum line, with a precomputed table.
Seed 0xB704CE, generator 0x1864CFB, bits consumed most significant first.
"""

from .constants import CRC24_INIT, CRC24_MASK, CRC24_POLY


def _make_table():
    tbl = []
    for n in range(256):
        c = n << 16
        for _ in range(8):
            c <<= 1
            if c & 0x1000000:
                c ^= CRC24_POLY
        tbl.append(c & CRC24_MASK)
    return tuple(tbl)


_TABLE = _make_table()


def crc24(data: bytes, crc: int = CRC24_INIT) -> int:
    c = crc & CRC24_MASK
    for b in data:
        c = ((c << 8) & CRC24_MASK) ^ _TABLE[((c >> 16) ^ b) & 0xFF]
    return c


class Crc24:
    """Running CRC24 over the raw bytes of one armor block."""

    def __init__(self) -> None:
        self._value = CRC24_INIT

    @property
    def value(self) -> int:
        return self._value

    def update(self, b: int) -> None:
        c = self._value
        self._value = ((c << 8) & CRC24_MASK) ^ _TABLE[((c >> 16) ^ b) & 0xFF]

    def update_bytes(self, data: bytes) -> None:
        self._value = crc24(data, self._value)

    def digest(self) -> bytes:
        v = self._value
        return bytes([(v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF])

    def reset(self) -> None:
        self._value = CRC24_INIT
