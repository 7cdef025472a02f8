"""Bundle save/load on disk.

- `save_bundle` writes a container atomically (temp file + replace), so a failed
  build never leaves a partial `brut.dat`.
- `load_bundle` reads a container file into a `ModuleTable`.
- `find_bundle` detects a container in a directory; only "no file" falls back to
  loose sources, a present-but-invalid container is a hard failure.
- `ship` is the build-time contract: collect -> syntax check -> write.

This module intentionally avoids any dependency on runtime/CLI to prevent cycles.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from brutus.core.model import BUNDLE_FILE, SOURCE_SUFFIX, ModuleTable

from .collect import SourceFile, collect_sources
from .reader import read_bundle
from .writer import write_bundle

logger = logging.getLogger(__name__)


class SourceSyntaxError(ValueError):
    """A collected source failed to compile; the build is aborted."""

    def __init__(self, path: Path, error: SyntaxError) -> None:
        super().__init__(f"{path}:{error.lineno}: {error.msg}")
        self.path = path
        self.error = error


def _write_bytes_atomic(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def save_bundle(path: Path, entries: Iterable[tuple[str, bytes]]) -> int:
    """Write a container for `entries` to `path` and return its size in bytes."""
    path = Path(path)
    data = write_bundle(entries)
    _write_bytes_atomic(path, data)
    logger.debug("wrote %s (%d bytes)", path, len(data))
    return len(data)


def load_bundle(path: Path) -> ModuleTable:
    path = Path(path)
    table = read_bundle(path.read_bytes())
    logger.debug("loaded %s: %d entries", path, len(table))
    return table


def find_bundle(directory: Path, *, name: str = BUNDLE_FILE) -> Optional[Path]:
    candidate = Path(directory) / name
    return candidate if candidate.is_file() else None


def check_sources_syntax(sources: Iterable[SourceFile]) -> None:
    for src in sources:
        try:
            compile(src.data, str(src.path), "exec", dont_inherit=True)
        except SyntaxError as e:
            raise SourceSyntaxError(src.path, e) from e


def ship(
    directory: Path,
    *,
    out: Optional[Path] = None,
    suffix: str = SOURCE_SUFFIX,
    check_syntax: bool = True,
) -> Path:
    """Bundle every `*<suffix>` file of `directory` into one container.

    The container defaults to `<directory>/brut.dat`. It is never part of its
    own input since it does not carry the source suffix.
    """
    directory = Path(directory)
    out_path = Path(out) if out is not None else directory / BUNDLE_FILE

    sources = collect_sources(directory, suffix=suffix)
    if check_syntax:
        check_sources_syntax(sources)
    size = save_bundle(out_path, ((s.name, s.data) for s in sources))
    logger.info("wrote %s (%d entries, %d bytes)", out_path, len(sources), size)
    return out_path
