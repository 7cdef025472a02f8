"""Serialize (name, bytes) entries into a brut container.

A container (little-endian) starts with:
- magic number (4 bytes, `brut`)
- major version (1 byte), minor version (1 byte)
- total entries (uint16)

Entries follow back to back, in input order:
- name (UTF-8, NUL-terminated)
- compression marker (1 byte, 0 or 1)
- encoded payload length (uint32)
- encoded payload (base64; zlib-compressed first when the marker is 1)

Everything is assembled in memory; callers persist the buffer only after this
returns, so a failing entry never leaves a partial container behind.
"""

from __future__ import annotations

import logging
from typing import Iterable

from brutus.codecs.compress import compress
from brutus.codecs.encoding import encode
from brutus.core.model import RECORD_STRUCT, BundleHeader, EntryRecord
from brutus.core.validate import (
    check_entry_count,
    check_payload_length,
    validate_entry_name,
    validate_entry_names,
)

logger = logging.getLogger(__name__)


def encode_entry(name: str, data: bytes) -> EntryRecord:
    payload, used = compress(data)
    encoded = encode(payload).encode("ascii")
    check_payload_length(name, len(encoded))
    logger.debug(
        "entry %r: %d bytes -> %d (%s) -> %d encoded",
        name,
        len(data),
        len(payload),
        "compressed" if used else "stored",
        len(encoded),
    )
    return EntryRecord(name=name, compressed=used, payload=encoded)


def pack_record(record: EntryRecord) -> bytes:
    name = validate_entry_name(record.name)
    return b"".join(
        [
            name,
            b"\0",
            RECORD_STRUCT.pack(1 if record.compressed else 0, record.encoded_length),
            record.payload,
        ]
    )


def write_bundle(entries: Iterable[tuple[str, bytes]]) -> bytes:
    """Return the complete container bytes for `entries`.

    Raises:
        EntryNameError: empty, NUL-containing or duplicate names.
        BundleOverflowError: more than 65535 entries or an oversized payload.
    """
    items = [(name, bytes(data)) for name, data in entries]
    check_entry_count(len(items))
    validate_entry_names(name for name, _ in items)

    buf = bytearray(BundleHeader.current(len(items)).pack())
    for name, data in items:
        logger.info("processing '%s'", name)
        buf += pack_record(encode_entry(name, data))
    return bytes(buf)
