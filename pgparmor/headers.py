from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional, Tuple

from .constants import DEFAULT_VERSION, VERSION_HEADER


@dataclass(frozen=True)
class ArmorConfig:
    version: str = DEFAULT_VERSION
    newline: str = os.linesep


class HeaderRegistry:
    """Armor header lines emitted after the BEGIN marker.

    Entries keep first-insertion order, except Version which is always listed
    first. The registry is read once per block, when the block opens.
    """

    def __init__(self, version: str = DEFAULT_VERSION, initial: Optional[Mapping[str, str]] = None):
        self._version = version
        self._entries: Dict[str, str] = dict(initial or {})
        # The configured version wins over any Version passed in initial
        self._entries[VERSION_HEADER] = version

    def set(self, name: str, value: str) -> None:
        self._entries[name] = value

    def get(self, name: str) -> Optional[str]:
        return self._entries.get(name)

    def reset_to_default(self) -> None:
        self._entries.clear()
        self._entries[VERSION_HEADER] = self._version

    def items(self) -> Iterator[Tuple[str, str]]:
        if VERSION_HEADER in self._entries:
            yield VERSION_HEADER, self._entries[VERSION_HEADER]
        for name, value in self._entries.items():
            if name != VERSION_HEADER:
                yield name, value

    def snapshot(self) -> Dict[str, str]:
        return dict(self.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries
