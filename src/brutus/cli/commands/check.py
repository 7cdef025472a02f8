"""`brutus check` command.

Loads every `*.dat` container in a directory and reports `ok`/`fail` per file.
Exits 1 unless all of them load and carry a `main` entry.
"""

from __future__ import annotations

from pathlib import Path

import typer

from brutus.bundle.manifest import check_bundles


def register(app: typer.Typer) -> None:
    @app.command("check")
    def check_cmd(
        directory: str = typer.Argument(..., help="Directory of .dat containers."),
    ) -> None:
        """Verify that containers load and have an entry point."""
        root = Path(directory)
        if not root.is_dir():
            raise typer.BadParameter(f"not a directory: {directory}")

        results = check_bundles(root)
        for path, err in results.items():
            typer.echo(f"{path.name} ok" if err is None else f"{path.name} fail: {err}")

        passed = sum(1 for err in results.values() if err is None)
        typer.echo(f"{passed}/{len(results)} ok")
        if passed != len(results):
            raise typer.Exit(code=1)
