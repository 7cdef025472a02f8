"""Error types + validators for the brut container format.

Validation is split from encoding:

- `brutus.bundle.writer` / `brutus.bundle.reader` move bytes around.
- This module enforces header, version, naming and size invariants.

Messages are explicit and deterministic so that failures are easy to debug and
tests can assert on them.
"""

from __future__ import annotations

from typing import Iterable

from brutus.core.model import (
    HEADER_STRUCT,
    MAGIC,
    MAX_ENTRIES,
    MAX_PAYLOAD_LENGTH,
    VERSION_MAJOR,
    VERSION_MINOR,
    BundleHeader,
)


class BundleError(ValueError):
    """Base class for every container format failure."""


class MalformedHeaderError(BundleError):
    """Raised when the data does not start with a complete `brut` header."""


class UnsupportedVersionError(BundleError):
    """Raised when the container version differs from the runtime version."""

    def __init__(self, major: int, minor: int) -> None:
        super().__init__(
            f"unsupported version {major}.{minor} (runtime supports {VERSION_MAJOR}.{VERSION_MINOR})"
        )
        self.major = major
        self.minor = minor


class EntryError(BundleError):
    """A single entry failed to load; the whole load is aborted."""

    def __init__(self, index: int, message: str) -> None:
        super().__init__(f"entry {index}: {message}")
        self.index = index


class DecodeError(EntryError):
    pass


class DecompressError(EntryError):
    pass


class TruncatedEntryError(EntryError):
    pass


class InvalidFlagError(EntryError):
    """The compression marker byte is neither 0 nor 1."""


class EntryNameError(BundleError):
    """Raised at write time for names the reader could not round-trip."""


class BundleOverflowError(BundleError):
    """Raised at write time when a count or length exceeds its field width."""


def validate_header(data: bytes) -> BundleHeader:
    """Parse and validate the fixed-size header at the start of `data`.

    Raises:
        MalformedHeaderError: magic missing/mismatched or header truncated.
        UnsupportedVersionError: version differs from the runtime version.
    """
    if len(data) < len(MAGIC) or bytes(data[: len(MAGIC)]) != MAGIC:
        raise MalformedHeaderError("malformed header: missing 'brut' magic")
    if len(data) < HEADER_STRUCT.size:
        raise MalformedHeaderError(
            f"malformed header: expected {HEADER_STRUCT.size} bytes, got {len(data)}"
        )
    magic, major, minor, count = HEADER_STRUCT.unpack_from(data, 0)
    if (major, minor) != (VERSION_MAJOR, VERSION_MINOR):
        raise UnsupportedVersionError(major, minor)
    return BundleHeader(magic=magic, major=major, minor=minor, count=count)


def validate_entry_name(name: object) -> bytes:
    """Return the UTF-8 encoded name, rejecting values the reader cannot recover."""
    if not isinstance(name, str):
        raise EntryNameError(f"entry name: expected str, got {type(name).__name__}")
    if not name:
        raise EntryNameError("entry name: must be a non-empty string")
    if "\0" in name:
        raise EntryNameError(f"entry name {name!r}: must not contain NUL bytes")
    try:
        return name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EntryNameError(f"entry name {name!r}: not encodable as UTF-8") from e


def validate_entry_names(names: Iterable[str]) -> None:
    seen: set[str] = set()
    for name in names:
        validate_entry_name(name)
        if name in seen:
            raise EntryNameError(f"entry name {name!r}: duplicate")
        seen.add(name)


def check_entry_count(count: int) -> None:
    if count > MAX_ENTRIES:
        raise BundleOverflowError(f"too many entries: {count} (maximum {MAX_ENTRIES})")


def check_payload_length(name: str, length: int) -> None:
    if length > MAX_PAYLOAD_LENGTH:
        raise BundleOverflowError(
            f"entry {name!r}: encoded payload of {length} bytes exceeds {MAX_PAYLOAD_LENGTH}"
        )
