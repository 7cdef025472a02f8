"""Collect script sources from a directory.

Only regular files directly inside the directory whose name ends with the
source suffix are considered. The entry name is the file name with exactly
that trailing suffix removed (`util.py` -> `util`, `a.b.py` -> `a.b`).

Order follows the directory listing and is not guaranteed to be stable.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from brutus.core.model import SOURCE_SUFFIX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    name: str
    data: bytes
    path: Path


def entry_name_for(filename: str, suffix: str = SOURCE_SUFFIX) -> str:
    if not filename.endswith(suffix):
        raise ValueError(f"{filename!r} does not end with {suffix!r}")
    return filename[: len(filename) - len(suffix)]


def collect_sources(directory: Path, *, suffix: str = SOURCE_SUFFIX) -> list[SourceFile]:
    """Read every `*<suffix>` file in `directory`.

    Raises:
        OSError: the directory cannot be listed or a matched file cannot be
            read. Nothing is returned in that case.
    """
    root = Path(directory)
    out: list[SourceFile] = []
    with os.scandir(root) as it:
        for ent in it:
            if not ent.name.endswith(suffix) or not ent.is_file():
                continue
            path = root / ent.name
            data = path.read_bytes()
            out.append(SourceFile(name=entry_name_for(ent.name, suffix), data=data, path=path))
            logger.debug("collected %s (%d bytes)", ent.name, len(data))
    return out
