"""`brutus ship` command.

Bundles every `*.py` file of a directory into a single `brut.dat`:
- optional syntax check of every source before anything is written
- compress (when large enough) + base64-encode each source
- write the container atomically; on any failure no file is produced
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from brutus.bundle.io import SourceSyntaxError, ship
from brutus.core.model import BUNDLE_FILE
from brutus.core.validate import BundleError

EXIT_BUILD_FAILED = 2


def register(app: typer.Typer) -> None:
    @app.command("ship")
    def ship_cmd(
        directory: str = typer.Argument(".", help="Directory containing the .py sources."),
        out: Optional[str] = typer.Option(
            None,
            "--out",
            "-o",
            help=f"Output container path (default: <directory>/{BUNDLE_FILE}).",
        ),
        syntax_check: bool = typer.Option(
            True,
            "--syntax-check/--no-syntax-check",
            help="Compile every source before bundling and abort on syntax errors.",
        ),
    ) -> None:
        """Create a brut.dat container from a directory of scripts."""
        try:
            out_path = ship(
                Path(directory),
                out=Path(out) if out else None,
                check_syntax=syntax_check,
            )
        except (BundleError, SourceSyntaxError, OSError) as e:
            typer.echo(f"unable to create {BUNDLE_FILE}: {e}", err=True)
            raise typer.Exit(code=EXIT_BUILD_FAILED) from e

        typer.echo(str(out_path))
