"""brutus CLI entrypoint.

Typer application; subcommands live in `brutus.cli.commands` and register
themselves on `app`.
"""

from __future__ import annotations

import logging
import sys

import typer

app = typer.Typer(
    name="brutus",
    add_completion=False,
    no_args_is_help=True,
    help="Bundle a directory of Python scripts into brut.dat and run it.",
)


def _configure_logging(*, verbose: int, quiet: int) -> logging.Logger:
    level: int = logging.INFO
    if quiet >= 2:
        level = logging.ERROR
    elif quiet >= 1:
        level = logging.WARNING
    elif verbose >= 1:
        level = logging.DEBUG

    logger = logging.getLogger("brutus")
    logger.setLevel(level)
    logger.propagate = False

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[brut] %(message)s"))

    logger.handlers.clear()
    logger.addHandler(handler)
    return logger


@app.callback()
def _callback(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="More log output (repeatable)."),
    quiet: int = typer.Option(0, "--quiet", "-q", count=True, help="Less log output (repeatable)."),
) -> None:
    """brutus CLI."""
    _configure_logging(verbose=verbose, quiet=quiet)


@app.command("version")
def version() -> None:
    """Print the installed brutus version and container format version."""
    from brutus import __version__
    from brutus.core.model import VERSION_MAJOR, VERSION_MINOR

    typer.echo(f"brutus {__version__} (format {VERSION_MAJOR}.{VERSION_MINOR})")


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `brutus --help` is fast.
    """
    from brutus.cli.commands import check as check_cmd
    from brutus.cli.commands import inspect as inspect_cmd
    from brutus.cli.commands import run as run_cmd
    from brutus.cli.commands import ship as ship_cmd

    ship_cmd.register(app)
    run_cmd.register(app)
    inspect_cmd.register(app)
    check_cmd.register(app)


_register_commands()


def main() -> None:
    app()
