"""Payload transforms: zlib compression and base64 encoding.

Build order is compress -> encode; load order is decode -> decompress.
"""

from __future__ import annotations

from .compress import CompressionError, compress, decompress, should_compress
from .encoding import EncodingError, decode, encode

__all__ = [
    "CompressionError",
    "EncodingError",
    "compress",
    "decompress",
    "decode",
    "encode",
    "should_compress",
]
