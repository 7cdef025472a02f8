"""Core data model for brut bundles.

- Format constants shared by the writer and the reader.
- `BundleHeader` / `EntryRecord`: transient encode/decode artifacts.
- `ModuleTable`: the in-memory (name, bytes) table built once per load.

This module must not import codecs/bundle/runtime/cli.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

MAGIC = b"brut"
VERSION_MAJOR = 1
VERSION_MINOR = 0

BUNDLE_FILE = "brut.dat"
SOURCE_SUFFIX = ".py"
ENTRY_POINT = "main"
FALLBACK_FILE = "main.py"

# Compression policy (see brutus.codecs.compress).
MIN_COMPRESS_SIZE = 16
COMPRESS_FLOOR = 66
COMPRESSION_LEVEL = 9

MAX_ENTRIES = 0xFFFF
MAX_PAYLOAD_LENGTH = 0xFFFFFFFF

# Little-endian: magic, major, minor, entry count.
HEADER_STRUCT = struct.Struct("<4sBBH")
# Per-record fields following the NUL-terminated name: flag, encoded length.
RECORD_STRUCT = struct.Struct("<BI")


@dataclass(frozen=True)
class BundleHeader:
    magic: bytes
    major: int
    minor: int
    count: int

    @classmethod
    def current(cls, count: int) -> "BundleHeader":
        return cls(magic=MAGIC, major=VERSION_MAJOR, minor=VERSION_MINOR, count=count)

    @property
    def version(self) -> tuple[int, int]:
        return (self.major, self.minor)

    def pack(self) -> bytes:
        return HEADER_STRUCT.pack(self.magic, self.major, self.minor, self.count)


@dataclass(frozen=True)
class EntryRecord:
    """One record as it sits in the container (payload still encoded)."""

    name: str
    compressed: bool
    payload: bytes

    @property
    def encoded_length(self) -> int:
        return len(self.payload)


class ModuleTable:
    """Ordered, immutable sequence of (name, bytes) pairs.

    Lookup is a linear scan and the first match wins. The entry named
    `main` is the program entry point. Instances are independent; nothing
    here is process-global.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[tuple[str, bytes]] = ()) -> None:
        self._entries: tuple[tuple[str, bytes], ...] = tuple((str(n), bytes(b)) for n, b in entries)

    def lookup(self, name: str) -> Optional[bytes]:
        for entry_name, data in self._entries:
            if entry_name == name:
                return data
        return None

    @property
    def entry_point(self) -> Optional[bytes]:
        return self.lookup(ENTRY_POINT)

    def names(self) -> list[str]:
        return [n for n, _ in self._entries]

    def items(self) -> list[tuple[str, bytes]]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return any(n == name for n, _ in self._entries)

    def __iter__(self) -> Iterator[tuple[str, bytes]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ModuleTable({self.names()!r})"
