from __future__ import annotations

import enum
import io
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, Mapping, Optional, Union

from .cleartext import ClearTextEscaper, hash_name
from .codec import encode_chunk
from .constants import (
    FOOTER_START,
    FOOTER_TAIL,
    GROUP_BYTES,
    GROUPS_PER_LINE,
    HASH_HEADER,
    HEADER_START,
    HEADER_TAIL,
    LABEL_MESSAGE,
    LABEL_PRIVATE_KEY,
    LABEL_PUBLIC_KEY,
    LABEL_SIGNATURE,
    PTAG_MASK,
    PTAG_NEW_FORMAT,
    SIGNED_MESSAGE_HEADER,
    HashAlgorithm,
    PacketTag,
)
from .crc24 import Crc24
from .errors import ArmorStateError
from .headers import ArmorConfig, HeaderRegistry


_LABELS: Dict[int, str] = {
    PacketTag.PUBLIC_KEY: LABEL_PUBLIC_KEY,
    PacketTag.SECRET_KEY: LABEL_PRIVATE_KEY,
    PacketTag.SIGNATURE: LABEL_SIGNATURE,
}


def packet_tag(first_byte: int) -> int:
    """Packet tag from the first octet of a packet header.

    New-format headers (bit 0x40 set) carry the tag in the low six bits,
    old-format headers in bits 2-5.
    """
    b = first_byte & 0xFF
    if b & PTAG_NEW_FORMAT:
        return b & PTAG_MASK
    return (b & PTAG_MASK) >> 2


def label_for_tag(tag: int) -> str:
    # Unknown and future tags armor as a generic MESSAGE
    return _LABELS.get(tag, LABEL_MESSAGE)


def classify_first_byte(first_byte: int) -> str:
    return label_for_tag(packet_tag(first_byte))


class BlockState(enum.Enum):
    IDLE = "idle"
    OPEN = "open"


@dataclass
class _BinaryMode:
    pending: bytearray = field(default_factory=bytearray)
    chunk_count: int = 0
    crc: Crc24 = field(default_factory=Crc24)
    label: Optional[str] = None


@dataclass
class _ClearTextMode:
    escaper: ClearTextEscaper = field(default_factory=ClearTextEscaper)


class ArmoredWriter:
    """Write OpenPGP ASCII armor to a borrowed binary sink.

    The block opens on the first byte written; its label comes from the packet
    tag of that byte. close() finishes the block (checksum + END line) and
    flushes the sink but never closes it, so several blocks can share a sink.

    Clear-signed text is an explicit mode: begin_clear_text() writes the
    SIGNED MESSAGE preamble and subsequent bytes are dash-escaped instead of
    base64 encoded, until end_clear_text().
    """

    def __init__(
        self,
        sink: BinaryIO,
        headers: Optional[Mapping[str, str]] = None,
        *,
        config: Optional[ArmorConfig] = None,
    ) -> None:
        self.sink = sink
        self.config = config if config is not None else ArmorConfig()
        self._nl = self.config.newline.encode("ascii")
        self._headers = HeaderRegistry(self.config.version, headers)
        self._state = BlockState.IDLE
        self._mode: Union[_BinaryMode, _ClearTextMode] = _BinaryMode()

    # Context manager
    def __enter__(self) -> "ArmoredWriter":
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()

    # Headers
    def set_header(self, name: str, value: str) -> None:
        self._headers.set(name, value)

    def reset_headers(self) -> None:
        self._headers.reset_to_default()

    @property
    def headers(self) -> Dict[str, str]:
        return self._headers.snapshot()

    # State
    @property
    def state(self) -> BlockState:
        return self._state

    @property
    def block_label(self) -> Optional[str]:
        if isinstance(self._mode, _BinaryMode):
            return self._mode.label
        return None

    @property
    def in_clear_text(self) -> bool:
        return isinstance(self._mode, _ClearTextMode)

    # Clear-signed text
    def begin_clear_text(self, algorithm: Union[HashAlgorithm, int]) -> None:
        name = hash_name(algorithm)
        if self._state is BlockState.OPEN:
            raise ArmorStateError("cannot begin clear text while an armor block is open")
        self._emit_line(SIGNED_MESSAGE_HEADER)
        self._emit_line(f"{HASH_HEADER}: {name}")
        self._emit_line("")
        self._mode = _ClearTextMode()

    def end_clear_text(self) -> None:
        if isinstance(self._mode, _ClearTextMode):
            self._mode = _BinaryMode()

    # Writing
    def open_block(self, label: str = LABEL_MESSAGE) -> None:
        """Open a block with an explicit label instead of classifying a first byte.

        Needed for empty payloads, which otherwise never open a block.
        """
        mode = self._mode
        if isinstance(mode, _ClearTextMode):
            raise ArmorStateError("cannot open an armor block while in clear text mode")
        if self._state is BlockState.OPEN:
            raise ArmorStateError(f"armor block already open: {mode.label}")
        self._start_block(mode, label)

    def write_byte(self, value: int) -> None:
        mode = self._mode
        if isinstance(mode, _ClearTextMode):
            self.sink.write(mode.escaper.escape(value))
            return

        b = value & 0xFF
        if self._state is BlockState.IDLE:
            self._open_block(mode, b)

        mode.pending.append(b)
        mode.crc.update(b)
        if len(mode.pending) == GROUP_BYTES:
            self._emit_group(mode)

    def write(self, data) -> int:
        view = memoryview(data).cast("B")
        for b in view:
            self.write_byte(b)
        return len(view)

    def close(self) -> None:
        mode = self._mode
        if not isinstance(mode, _BinaryMode) or mode.label is None:
            return

        self._emit_group(mode)
        self.sink.write(self._nl + b"=")
        self.sink.write(encode_chunk(mode.crc.digest()))
        self.sink.write(self._nl)
        self._emit_line(FOOTER_START + mode.label + FOOTER_TAIL)
        self.sink.flush()

        mode.label = None
        self._state = BlockState.IDLE

    # Internals
    def _open_block(self, mode: _BinaryMode, first_byte: int) -> None:
        self._start_block(mode, classify_first_byte(first_byte))

    def _start_block(self, mode: _BinaryMode, label: str) -> None:
        self._emit_line(HEADER_START + label + HEADER_TAIL)
        for name, value in self._headers.items():
            self._emit_line(f"{name}: {value}")
        self._emit_line("")

        mode.pending.clear()
        mode.chunk_count = 0
        mode.crc.reset()
        mode.label = label
        self._state = BlockState.OPEN

    def _emit_group(self, mode: _BinaryMode) -> None:
        if not mode.pending:
            return
        # Terminate the previous full line only once another group follows,
        # so the body never ends in an empty line before the checksum.
        if mode.chunk_count and mode.chunk_count % GROUPS_PER_LINE == 0:
            self.sink.write(self._nl)
        self.sink.write(encode_chunk(mode.pending))
        mode.pending.clear()
        mode.chunk_count += 1

    def _emit_line(self, text: str) -> None:
        self.sink.write(text.encode("utf-8") + self._nl)


def armor_bytes(
    data: bytes,
    headers: Optional[Mapping[str, str]] = None,
    *,
    config: Optional[ArmorConfig] = None,
) -> str:
    """Armor a complete packet stream held in memory."""
    buf = io.BytesIO()
    with ArmoredWriter(buf, headers, config=config) as w:
        w.write(data)
    return buf.getvalue().decode("utf-8")
