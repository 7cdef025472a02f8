"""brut bundle I/O (single-file container format).

- Collect `*.py` sources from a directory
- Write them as compressed+encoded records into `brut.dat`
- Read a container back into a `ModuleTable`
"""

from __future__ import annotations

from .collect import SourceFile, collect_sources
from .io import SourceSyntaxError, find_bundle, load_bundle, save_bundle, ship
from .reader import read_bundle
from .writer import write_bundle

__all__ = [
    "SourceFile",
    "SourceSyntaxError",
    "collect_sources",
    "find_bundle",
    "load_bundle",
    "read_bundle",
    "save_bundle",
    "ship",
    "write_bundle",
]
