"""Parse a brut container into a `ModuleTable`.

The reader walks a forward-only cursor:

1. header: magic + exact version match (`validate_header`)
2. entry count
3. `count` records: name up to NUL, flag byte, uint32 length, payload
4. each payload is base64-decoded, then inflated when flagged

There is no index; record boundaries come only from the declared field widths.
Any failing entry aborts the whole read and no table is returned.
"""

from __future__ import annotations

import logging
from typing import Iterator, Union

from brutus.codecs.compress import CompressionError, decompress
from brutus.codecs.encoding import EncodingError, decode
from brutus.core.model import HEADER_STRUCT, RECORD_STRUCT, BundleHeader, EntryRecord, ModuleTable
from brutus.core.validate import (
    DecodeError,
    DecompressError,
    InvalidFlagError,
    TruncatedEntryError,
    validate_header,
)

logger = logging.getLogger(__name__)

Buffer = Union[bytes, bytearray, memoryview]


def iter_records(data: Buffer) -> Iterator[tuple[int, EntryRecord]]:
    """Yield `(index, record)` for every record, payloads still encoded."""
    raw = bytes(data)
    view = memoryview(raw)
    header = validate_header(view)
    off = HEADER_STRUCT.size
    for i in range(header.count):
        nul = raw.find(b"\0", off)
        if nul < 0:
            raise TruncatedEntryError(i, "name is not NUL-terminated")
        try:
            name = raw[off:nul].decode("utf-8")
        except UnicodeDecodeError as e:
            raise TruncatedEntryError(i, "name is not valid UTF-8") from e
        off = nul + 1

        if off + RECORD_STRUCT.size > len(view):
            raise TruncatedEntryError(i, f"record header for {name!r} is truncated")
        flag, length = RECORD_STRUCT.unpack_from(view, off)
        if flag not in (0, 1):
            raise InvalidFlagError(i, f"compression marker for {name!r} must be 0 or 1, got {flag}")
        off += RECORD_STRUCT.size

        if off + length > len(view):
            raise TruncatedEntryError(
                i, f"payload for {name!r} needs {length} bytes, {len(view) - off} available"
            )
        payload = bytes(view[off : off + length])
        off += length

        yield i, EntryRecord(name=name, compressed=bool(flag), payload=payload)


def read_header(data: Buffer) -> BundleHeader:
    return validate_header(memoryview(data))


def decode_record(index: int, record: EntryRecord) -> bytes:
    try:
        decoded = decode(record.payload)
    except EncodingError as e:
        raise DecodeError(index, f"failed to decode {record.name!r}: {e}") from e
    if not record.compressed:
        return decoded
    try:
        return decompress(decoded, len(decoded))
    except CompressionError as e:
        raise DecompressError(
            index,
            f"failed to decompress {record.name!r} ({record.encoded_length}, {len(decoded)}): {e}",
        ) from e


def read_bundle(data: Buffer) -> ModuleTable:
    """Decode every entry of `data` and return the resulting table.

    Raises:
        MalformedHeaderError, UnsupportedVersionError: invalid header.
        DecodeError, DecompressError, TruncatedEntryError, InvalidFlagError:
            a bad entry (with index).
    """
    entries: list[tuple[str, bytes]] = []
    for i, record in iter_records(data):
        entries.append((record.name, decode_record(i, record)))
        logger.debug("loaded entry %d %r (%d bytes)", i, record.name, len(entries[-1][1]))
    return ModuleTable(entries)
