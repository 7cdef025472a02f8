"""Run-time side: the import hook and the program runner."""

from __future__ import annotations

from .finder import BundleFinder, BundleLoader, active_finder, install, installed, uninstall
from .runner import EntryPointNotFoundError, Program, execute, run_program

__all__ = [
    "BundleFinder",
    "BundleLoader",
    "EntryPointNotFoundError",
    "Program",
    "active_finder",
    "execute",
    "install",
    "installed",
    "run_program",
    "uninstall",
]
