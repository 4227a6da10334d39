"""Command line entry point for ``rod``."""

from __future__ import annotations

import typer

from rod_cli import __version__
from rod_cli.cli.commands import register_commands
from rod_cli.cli.ui import console

app = typer.Typer(
    name="rod",
    help="Scaffold ROD (Rule-Oriented Development) projects for AI coding assistants",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"rod {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """ROD project scaffolding."""


register_commands(app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
