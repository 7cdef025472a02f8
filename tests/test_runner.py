from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from brutus.bundle.io import save_bundle, ship
from brutus.core.validate import MalformedHeaderError, UnsupportedVersionError
from brutus.runtime.finder import active_finder
from brutus.runtime.runner import EntryPointNotFoundError, Program, execute, run_program
from conftest import raw_header, write_sources

MAIN_WRITES_REPORT = """\
import sys
import brut_r_helper
from brutus import platform

with open("report.txt", "w", encoding="utf-8") as f:
    f.write(f"{brut_r_helper.GREETING}|{' '.join(sys.argv[1:])}|{platform.is_bundled()}|{__name__}")
"""


def _report(directory: Path) -> str:
    return (directory / "report.txt").read_text(encoding="utf-8")


def test_run_bundled_program_without_loose_sources(tmp_path: Path) -> None:
    app = write_sources(
        tmp_path / "app",
        {"main.py": MAIN_WRITES_REPORT, "brut_r_helper.py": "GREETING = 'hi from bundle'\n"},
    )
    ship(app)
    (app / "main.py").unlink()
    (app / "brut_r_helper.py").unlink()

    argv_before = list(sys.argv)
    cwd_before = os.getcwd()
    code = run_program(app, args=["one", "two"])

    assert code == 0
    assert _report(app) == "hi from bundle|one two|True|__main__"
    assert sys.argv == argv_before
    assert os.getcwd() == cwd_before
    assert active_finder() is None
    assert "brut_r_helper" not in sys.modules


def test_run_falls_back_to_loose_main(tmp_path: Path) -> None:
    app = write_sources(
        tmp_path / "app",
        {"main.py": MAIN_WRITES_REPORT, "brut_r_helper.py": "GREETING = 'hi from disk'\n"},
    )
    try:
        code = run_program(app, args=["x"])
    finally:
        sys.modules.pop("brut_r_helper", None)

    assert code == 0
    assert _report(app) == "hi from disk|x|False|__main__"


def test_invalid_container_never_falls_back(tmp_path: Path) -> None:
    app = write_sources(tmp_path, {"main.py": "raise SystemExit(99)\n"})
    (app / "brut.dat").write_bytes(b"garbage")
    with pytest.raises(MalformedHeaderError):
        run_program(app)


def test_unsupported_version_is_a_hard_failure(tmp_path: Path) -> None:
    (tmp_path / "brut.dat").write_bytes(raw_header(0, major=2))
    with pytest.raises(UnsupportedVersionError):
        run_program(tmp_path)


def test_missing_entry_point_everywhere(tmp_path: Path) -> None:
    with pytest.raises(EntryPointNotFoundError, match=r"no brut.dat or main.py"):
        run_program(tmp_path)


def test_bundle_without_main_exits_zero(tmp_path: Path) -> None:
    save_bundle(tmp_path / "brut.dat", [("util", b"X = 1\n")])
    assert run_program(tmp_path) == 0
    assert active_finder() is None


def test_program_exceptions_map_to_exit_code_2(tmp_path: Path) -> None:
    save_bundle(tmp_path / "brut.dat", [("main", b"raise ValueError('nope')\n")])
    assert run_program(tmp_path) == 2
    assert active_finder() is None


def test_system_exit_code_is_propagated(tmp_path: Path) -> None:
    save_bundle(tmp_path / "brut.dat", [("main", b"import sys\nsys.exit(3)\n")])
    assert run_program(tmp_path) == 3


def test_execute_reports_syntax_errors() -> None:
    program = Program(source=b"def f(:\n", filename="brut.dat/main.py", bundled=True)
    assert execute(program) == 2


def test_execute_passes_arguments() -> None:
    program = Program(
        source=b"import sys\nraise SystemExit(len(sys.argv))\n",
        filename="main.py",
        bundled=False,
    )
    assert execute(program, args=["a", "b", "c"]) == 4


def test_bundled_argv0_points_at_container(tmp_path: Path) -> None:
    save_bundle(
        tmp_path / "brut.dat",
        [("main", b"import sys\nwith open('argv0.txt', 'w') as f:\n    f.write(sys.argv[0])\n")],
    )
    assert run_program(tmp_path) == 0
    assert (tmp_path / "argv0.txt").read_text() == str((tmp_path / "brut.dat").resolve())
