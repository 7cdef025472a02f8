"""Base64 text-safe encoding for entry payloads.

Applied to every payload after (optional) compression. Lengths travel
explicitly in the container, so payloads may contain NUL bytes.
"""

from __future__ import annotations

import base64
import binascii
from typing import Union


class EncodingError(ValueError):
    pass


def encode(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def decode(text: Union[str, bytes, memoryview]) -> bytes:
    """Strict inverse of `encode`; rejects characters outside the alphabet."""
    if isinstance(text, str):
        try:
            raw = text.encode("ascii")
        except UnicodeEncodeError as e:
            raise EncodingError("payload is not ASCII") from e
    else:
        raw = bytes(text)
    try:
        return base64.b64decode(raw, validate=True)
    except binascii.Error as e:
        raise EncodingError(f"invalid base64 payload: {e}") from e
