"""Threshold-governed zlib compression for entry payloads.

Policy:
- payloads of at most `MIN_COMPRESS_SIZE` bytes are stored as-is
- payloads whose worst-case estimate (1.5x input) falls below `COMPRESS_FLOOR`
  are stored as-is
- everything else goes through zlib at a fixed level, even when the result is
  not smaller than the input

Decompression is bounded by a multiple of the input length; zlib cannot expand
data by more than roughly 1032:1.
"""

from __future__ import annotations

import zlib

from brutus.core.model import COMPRESS_FLOOR, COMPRESSION_LEVEL, MIN_COMPRESS_SIZE

MAX_EXPANSION = 1032


class CompressionError(ValueError):
    pass


def should_compress(length: int) -> bool:
    if length <= MIN_COMPRESS_SIZE:
        return False
    if int(length * 1.5) < COMPRESS_FLOOR:
        return False
    return True


def compress(data: bytes) -> tuple[bytes, bool]:
    """Return `(payload, used_compression)` for `data`."""
    data = bytes(data)
    if not should_compress(len(data)):
        return data, False
    return zlib.compress(data, COMPRESSION_LEVEL), True


def decompress(data: bytes, encoded_len: int) -> bytes:
    """Inflate `data`; `encoded_len` sizes the upper bound on the output.

    Raises:
        CompressionError: zlib failure, truncated stream, output over the bound,
            or an empty result.
    """
    limit = max(int(encoded_len), 1) * MAX_EXPANSION
    d = zlib.decompressobj()
    try:
        out = d.decompress(data, limit)
    except zlib.error as e:
        raise CompressionError(f"zlib: {e}") from e
    if d.unconsumed_tail:
        raise CompressionError(f"decompressed size exceeds bound of {limit} bytes")
    if not d.eof:
        raise CompressionError("truncated compressed stream")
    if not out:
        raise CompressionError("decompression produced no data")
    return out
