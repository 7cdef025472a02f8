"""Import hook serving bundled modules from a `ModuleTable`.

`BundleFinder` sits at the front of `sys.meta_path`. Resolution order for
`import m`:

1. `sys.modules` (already imported or pre-registered modules)
2. the bundle table (exact name match, first entry wins)
3. Python's default finders (filesystem, builtins, ...)

Names that are not in the table yield `None` from `find_spec`, which lets the
import system continue with the next finder unchanged.
"""

from __future__ import annotations

import contextlib
import importlib.abc
import importlib.util
import logging
import sys
from typing import Iterator, Optional, Sequence

from brutus.core.model import BUNDLE_FILE, SOURCE_SUFFIX, ModuleTable

logger = logging.getLogger(__name__)


def origin_for(name: str) -> str:
    return f"{BUNDLE_FILE}/{name}{SOURCE_SUFFIX}"


class BundleLoader(importlib.abc.InspectLoader):
    def __init__(self, table: ModuleTable) -> None:
        self.table = table

    def is_package(self, fullname: str) -> bool:
        return False

    def get_source(self, fullname: str) -> Optional[str]:
        data = self.table.lookup(fullname)
        if data is None:
            raise ImportError(f"{fullname!r} is not in the bundle", name=fullname)
        return importlib.util.decode_source(data)

    def get_code(self, fullname: str):
        data = self.table.lookup(fullname)
        if data is None:
            raise ImportError(f"{fullname!r} is not in the bundle", name=fullname)
        return compile(data, origin_for(fullname), "exec", dont_inherit=True)

    def exec_module(self, module) -> None:
        code = self.get_code(module.__name__)
        exec(code, module.__dict__)


class BundleFinder(importlib.abc.MetaPathFinder):
    def __init__(self, table: ModuleTable) -> None:
        self.table = table
        self.loader = BundleLoader(table)

    def find_spec(self, fullname: str, path: Optional[Sequence[str]] = None, target=None):
        if fullname not in self.table:
            return None
        logger.debug("import %r served from bundle", fullname)
        spec = importlib.util.spec_from_loader(fullname, self.loader, origin=origin_for(fullname))
        if spec is not None:
            spec.has_location = False
        return spec

    def invalidate_caches(self) -> None:
        pass


def install(table: ModuleTable) -> BundleFinder:
    finder = BundleFinder(table)
    sys.meta_path.insert(0, finder)
    return finder


def uninstall(finder: BundleFinder) -> None:
    """Remove `finder` and forget the modules it loaded."""
    try:
        sys.meta_path.remove(finder)
    except ValueError:
        pass
    for name in finder.table.names():
        mod = sys.modules.get(name)
        if mod is not None and getattr(mod, "__loader__", None) is finder.loader:
            del sys.modules[name]


@contextlib.contextmanager
def installed(table: ModuleTable) -> Iterator[BundleFinder]:
    finder = install(table)
    try:
        yield finder
    finally:
        uninstall(finder)


def active_finder() -> Optional[BundleFinder]:
    for finder in sys.meta_path:
        if isinstance(finder, BundleFinder):
            return finder
    return None
