"""Run a bundled (or loose) program.

Run-time contract:
- `<directory>/brut.dat` present: load it, install a `BundleFinder` for its
  table and execute the `main` entry as `__main__`. A container without `main`
  is not an error (exit code 0).
- no container: execute `<directory>/main.py` from disk; if that is missing too
  the run fails with `EntryPointNotFoundError`.

A container that exists but cannot be loaded is a hard failure; the bundle
errors propagate to the caller and never trigger the loose-file fallback.

While the program runs, the working directory is `directory`, `sys.argv` is
`[program, *args]` and `directory` is on `sys.path`. All three, and the import
hook, are restored afterwards.
"""

from __future__ import annotations

import builtins
import linecache
import logging
import os
import sys
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from brutus.bundle.io import find_bundle, load_bundle
from brutus.core.model import BUNDLE_FILE, ENTRY_POINT, FALLBACK_FILE

from .finder import install, origin_for, uninstall

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_ENTRY_POINT = 1
EXIT_PROGRAM_ERROR = 2


class EntryPointNotFoundError(LookupError):
    pass


@dataclass(frozen=True)
class Program:
    """Entry point source plus where it came from."""

    source: bytes
    filename: str
    bundled: bool


def _register_source(filename: str, source: bytes) -> None:
    # Lets tracebacks show lines for code that has no file on disk.
    text = source.decode("utf-8", errors="replace")
    linecache.cache[filename] = (len(text), None, text.splitlines(True), filename)


def _exit_code(e: SystemExit) -> int:
    code = e.code
    if code is None:
        return EXIT_OK
    if isinstance(code, int):
        return code
    print(code, file=sys.stderr)
    return 1


def execute(program: Program, *, args: Sequence[str] = (), argv0: Optional[str] = None) -> int:
    """Compile and execute `program` as `__main__`; return an exit code."""
    try:
        code = compile(program.source, program.filename, "exec", dont_inherit=True)
    except SyntaxError:
        logger.error("failed to load entrypoint chunk\n%s", traceback.format_exc().rstrip())
        return EXIT_PROGRAM_ERROR

    if program.bundled:
        _register_source(program.filename, program.source)

    run_globals: dict[str, Any] = {
        "__name__": "__main__",
        "__file__": program.filename,
        "__builtins__": builtins,
        "__loader__": None,
        "__package__": None,
        "__spec__": None,
    }
    old_argv = sys.argv
    sys.argv = [argv0 or program.filename, *args]
    try:
        exec(code, run_globals)
    except SystemExit as e:
        return _exit_code(e)
    except Exception:
        logger.error("error: %s", traceback.format_exc().rstrip())
        return EXIT_PROGRAM_ERROR
    finally:
        sys.argv = old_argv
    return EXIT_OK


def run_program(
    directory: Path,
    *,
    args: Sequence[str] = (),
    bundle_name: str = BUNDLE_FILE,
    fallback: str = FALLBACK_FILE,
) -> int:
    """Run the program rooted at `directory` and return its exit code.

    Raises:
        BundleError: the container exists but is invalid.
        EntryPointNotFoundError: no container and no fallback source.
        OSError: the container or fallback cannot be read.
    """
    directory = Path(directory).resolve()
    bundle_path = find_bundle(directory, name=bundle_name)

    finder = None
    if bundle_path is not None:
        table = load_bundle(bundle_path)
        entry = table.entry_point
        if not entry:
            logger.info("%s has no '%s' entry; nothing to run", bundle_path.name, ENTRY_POINT)
            return EXIT_OK
        program = Program(source=entry, filename=origin_for(ENTRY_POINT), bundled=True)
        finder = install(table)
    else:
        loose = directory / fallback
        if not loose.is_file():
            raise EntryPointNotFoundError(f"no {bundle_name} or {fallback} found in {directory}")
        source = loose.read_bytes()
        if not source:
            raise EntryPointNotFoundError(f"{loose} is empty")
        program = Program(source=source, filename=str(loose), bundled=False)

    old_cwd = os.getcwd()
    sys.path.insert(0, str(directory))
    try:
        os.chdir(directory)
        argv0 = str(bundle_path) if program.bundled else str(directory / fallback)
        return execute(program, args=args, argv0=argv0)
    finally:
        os.chdir(old_cwd)
        try:
            sys.path.remove(str(directory))
        except ValueError:
            pass
        if finder is not None:
            uninstall(finder)
