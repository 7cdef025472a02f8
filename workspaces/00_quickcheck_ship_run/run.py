"""Quickcheck workspace: write sources -> ship -> remove sources -> run (brutus).

This workspace is self-contained (no repo-level assets required). It writes a
small synthetic app under `workspaces/00_quickcheck_ship_run/outputs/app/`,
bundles it into `brut.dat`, deletes the loose sources, runs the bundle and
writes a JSON report.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from brutus.bundle.io import load_bundle, ship
from brutus.bundle.manifest import describe_bundle
from brutus.runtime.runner import run_program


def _fixture_sources() -> dict[str, str]:
    return {
        "main.py": "\n".join(
            [
                "import sys",
                "import greet",
                "",
                "with open('program_output.txt', 'w', encoding='utf-8') as f:",
                "    f.write(greet.hello(*sys.argv[1:]))",
                "",
            ]
        ),
        # Long enough to cross the compression threshold.
        "greet.py": "\n".join(
            [
                '"""Greeting helpers shipped inside the bundle."""',
                "",
                "def hello(*names):",
                "    names = names or ('world',)",
                "    return ', '.join(f'hello {n}' for n in names)",
                "",
            ]
        ),
        "tiny.py": "X = 1\n",
    }


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def main() -> None:
    here = Path(__file__).resolve().parent
    outputs = here / "outputs"
    app_dir = outputs / "app"
    app_dir.mkdir(parents=True, exist_ok=True)

    sources = _fixture_sources()
    for filename, text in sources.items():
        (app_dir / filename).write_text(text, encoding="utf-8")

    dat = ship(app_dir)
    table = load_bundle(dat)
    ok_table = all(table.lookup(fn[:-3]) == text.encode("utf-8") for fn, text in sources.items())

    for filename in sources:
        (app_dir / filename).unlink()

    exit_code = run_program(app_dir, args=["alice", "bob"])
    output = (app_dir / "program_output.txt").read_text(encoding="utf-8")
    ok_run = exit_code == 0 and output == "hello alice, hello bob"

    report = {
        "bundle_path": str(dat),
        "bundle": describe_bundle(dat.read_bytes()),
        "table_equal": ok_table,
        "exit_code": exit_code,
        "program_output": output,
    }
    _write_json(outputs / "ship_run_report.json", report)

    if not (ok_table and ok_run):
        raise SystemExit("ship/run quickcheck failed; see outputs/ship_run_report.json")


if __name__ == "__main__":
    main()
