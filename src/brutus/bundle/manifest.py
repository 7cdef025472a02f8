"""Bundle description utilities.

This module is intentionally small. It provides:
- sha256 hashing helpers
- `describe_bundle`: a JSON-friendly summary of a container's records
- `check_bundles`: load every `*.dat` in a directory and report failures
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Any, Optional

from brutus.core.model import ENTRY_POINT, HEADER_STRUCT
from brutus.core.validate import BundleError

from .io import load_bundle
from .reader import decode_record, iter_records, read_header

logger = logging.getLogger(__name__)


def sha256_bytes(b: bytes) -> str:
    """Return hex-encoded sha256 for bytes."""
    if not isinstance(b, (bytes, bytearray)):
        raise TypeError(f"sha256_bytes: expected bytes, got {type(b).__name__}")
    return hashlib.sha256(bytes(b)).hexdigest()


def describe_bundle(data: bytes) -> dict[str, Any]:
    """Summarize a container without building a ModuleTable.

    Entry `size` and `sha256` describe the decoded (original) bytes.
    """
    header = read_header(data)
    entries: list[dict[str, Any]] = []
    for i, record in iter_records(data):
        content = decode_record(i, record)
        entries.append(
            {
                "name": record.name,
                "compressed": record.compressed,
                "encoded_length": record.encoded_length,
                "size": len(content),
                "sha256": sha256_bytes(content),
            }
        )
    return {
        "magic": header.magic.decode("ascii"),
        "version": f"{header.major}.{header.minor}",
        "header_size": HEADER_STRUCT.size,
        "count": header.count,
        "entry_point": any(e["name"] == ENTRY_POINT for e in entries),
        "entries": entries,
    }


def check_bundles(directory: Path, *, pattern: str = "*.dat") -> dict[Path, Optional[str]]:
    """Load every container matching `pattern`; map path -> None (ok) or error.

    A container passes only when it loads and carries a non-empty `main` entry.
    """
    results: dict[Path, Optional[str]] = {}
    for path in sorted(Path(directory).glob(pattern)):
        try:
            table = load_bundle(path)
        except (BundleError, OSError) as e:
            results[path] = str(e)
            logger.info("%s fail", path.name)
            continue
        if not table.entry_point:
            results[path] = f"no '{ENTRY_POINT}' entry"
            logger.info("%s fail", path.name)
            continue
        results[path] = None
        logger.info("%s ok", path.name)
    return results
