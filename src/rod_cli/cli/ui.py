"""Console output helpers shared by the CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from rod_cli.template.models import GenerationResult

console = Console()


def configure_logging(debug: bool = False) -> None:
    """Route library log records to stderr; DEBUG when ``debug`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def render_result(result: GenerationResult, project_path: Path, verbose: bool = False) -> None:
    """Print a generation summary panel, plus the file list when ``verbose``."""
    if result.success:
        lines = [
            f"{'Project':<12} [green]{project_path}[/green]",
            f"{'Files':<12} {result.total_files}",
            f"{'Size':<12} {format_size(result.total_size)}",
        ]
        console.print(Panel("\n".join(lines), title="[green]Project ready[/green]", border_style="green", padding=(1, 2)))
    else:
        console.print(
            Panel(
                "\n".join(result.errors) or "Unknown error",
                title="[red]Generation failed[/red]",
                border_style="red",
                padding=(1, 2),
            )
        )

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    if verbose and result.files_created:
        table = Table(title="Created", show_header=False, box=None)
        table.add_column("Path", style="dim")
        for path in result.files_created:
            try:
                table.add_row(str(path.relative_to(project_path)))
            except ValueError:
                table.add_row(str(path))
        console.print(table)
