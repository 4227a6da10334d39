"""CLI command modules for rod."""

from __future__ import annotations

import typer

from . import init as init_module
from . import templates as templates_module


def register_commands(app: typer.Typer) -> None:
    """Attach every top-level command to ``app``."""
    app.command()(init_module.init)
    app.command()(templates_module.templates)


__all__ = ["register_commands"]
