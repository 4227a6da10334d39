"""``rod templates``: list bundled and installed external templates."""

from __future__ import annotations

import typer
from rich.table import Table

from rod_cli.cli.ui import configure_logging, console
from rod_cli.core.settings import SettingsError, load_settings
from rod_cli.template.generator import TemplateGenerator


def templates(
    debug: bool = typer.Option(False, "--debug", help="Show verbose diagnostic output"),
) -> None:
    """List templates available to ``rod init --template``."""
    configure_logging(debug)
    try:
        settings = load_settings()
        generator = TemplateGenerator(settings=settings)
    except (SettingsError, FileNotFoundError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    available = generator.list_all_templates()

    table = Table(title="Available Templates")
    table.add_column("Source", style="cyan")
    table.add_column("Name", style="bold")
    table.add_row("bundled", "default")
    for name in available["local"]:
        table.add_row("bundled", name)
    for name in available["npm"]:
        table.add_row(settings.package_name, name)
    console.print(table)

    if not available["npm"]:
        console.print(
            f"[dim]No external templates installed. `rod init --template <name>` installs {settings.package_name} on demand.[/dim]"
        )
