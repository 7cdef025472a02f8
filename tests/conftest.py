"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import brutus` to fail.

To keep the suite robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import logging
import struct
import sys
from pathlib import Path
from typing import Iterator

import pytest


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def _reset_brutus_logger() -> Iterator[None]:
    # The CLI binds a handler to the (test runner's) stderr; drop it afterwards.
    yield
    logger = logging.getLogger("brutus")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Shared helpers
# =============================================================================


def write_sources(directory: Path, sources: dict[str, str]) -> Path:
    """Write `{filename: text}` into `directory` and return it."""
    directory.mkdir(parents=True, exist_ok=True)
    for filename, text in sources.items():
        (directory / filename).write_text(text, encoding="utf-8")
    return directory


def raw_header(count: int, *, magic: bytes = b"brut", major: int = 1, minor: int = 0) -> bytes:
    return struct.pack("<4sBBH", magic, major, minor, count)


def raw_record(name: bytes, flag: int, payload: bytes) -> bytes:
    """Hand-built record; `payload` is the already-encoded field."""
    return name + b"\0" + struct.pack("<BI", flag, len(payload)) + payload
