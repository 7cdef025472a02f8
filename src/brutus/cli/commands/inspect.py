"""`brutus inspect` command.

Prints the header and per-entry records of a container:
name, compression flag, encoded length, decoded size and sha256.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from brutus.bundle.manifest import describe_bundle
from brutus.core.validate import BundleError


def register(app: typer.Typer) -> None:
    @app.command("inspect")
    def inspect_cmd(
        path: str = typer.Argument(..., help="Path to a brut.dat container."),
        as_json: bool = typer.Option(False, "--json", help="Emit the description as JSON."),
    ) -> None:
        """Describe the entries of a container."""
        try:
            info = describe_bundle(Path(path).read_bytes())
        except (BundleError, OSError) as e:
            typer.echo(f"{path}: {e}", err=True)
            raise typer.Exit(code=2) from e

        if as_json:
            typer.echo(json.dumps(info, indent=2, sort_keys=True))
            return

        typer.echo(f"{info['magic']} v{info['version']}, {info['count']} entries")
        for e in info["entries"]:
            flag = "z" if e["compressed"] else "-"
            typer.echo(f"  {flag} {e['name']:<24} {e['encoded_length']:>8} {e['size']:>8}  {e['sha256'][:16]}")
