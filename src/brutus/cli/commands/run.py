"""`brutus run` command.

Runs `brut.dat` from a directory when present, else the loose `main.py`.
Arguments after `--` are passed through to the program as `sys.argv[1:]`:

    brutus run path/to/app -- --flag value

Exit codes:
- the program's own exit code on a normal run (0 when the bundle has no `main`)
- 1 when neither a container nor `main.py` exists
- 2 when the container is invalid or unreadable, or the program raised
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from brutus.core.validate import BundleError
from brutus.runtime.runner import EXIT_NO_ENTRY_POINT, EXIT_PROGRAM_ERROR, EntryPointNotFoundError, run_program


def register(app: typer.Typer) -> None:
    @app.command("run")
    def run_cmd(
        directory: str = typer.Argument(".", help="Directory holding brut.dat or main.py."),
        args: Optional[List[str]] = typer.Argument(None, help="Arguments passed to the program (after --)."),
    ) -> None:
        """Run a bundled program (or main.py when no bundle exists)."""
        try:
            code = run_program(Path(directory), args=list(args or []))
        except BundleError as e:
            typer.echo(f"unable to load bundle: {e}", err=True)
            raise typer.Exit(code=EXIT_PROGRAM_ERROR) from e
        except EntryPointNotFoundError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=EXIT_NO_ENTRY_POINT) from e
        except OSError as e:
            typer.echo(f"unable to read program: {e}", err=True)
            raise typer.Exit(code=EXIT_PROGRAM_ERROR) from e

        if code != 0:
            raise typer.Exit(code=code)
