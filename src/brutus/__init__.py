"""brutus — single-file script bundles.

Bundles a directory of Python scripts into one `brut.dat` container and serves
them back to the import system at run time.
"""

from __future__ import annotations

from brutus.bundle import load_bundle, read_bundle, save_bundle, ship, write_bundle
from brutus.core import ModuleTable
from brutus.runtime import installed, run_program

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "ModuleTable",
    "installed",
    "load_bundle",
    "read_bundle",
    "run_program",
    "save_bundle",
    "ship",
    "write_bundle",
]
