"""Host information for bundled programs.

    from brutus import platform
    if platform.is_bundled():
        config = platform.readall("settings.txt")
"""

from __future__ import annotations

import platform as _platform
import sys
from pathlib import Path
from typing import Optional

from brutus.runtime.finder import active_finder


def _os_name() -> str:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    return "unix"


_ARCH_ALIASES = {
    "x86_64": "x86-64",
    "amd64": "x86-64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
    "arm": "arm32",
    "armv7l": "arm32",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def arch_name(machine: Optional[str] = None) -> str:
    m = (machine if machine is not None else _platform.machine()).lower()
    return _ARCH_ALIASES.get(m, m)


OS_NAME = _os_name()
ARCH_NAME = arch_name()


def is_bundled() -> bool:
    """True while a bundle import hook is registered."""
    return active_finder() is not None


def readall(path: str) -> Optional[str]:
    """Return the text of `path`, or None when it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
