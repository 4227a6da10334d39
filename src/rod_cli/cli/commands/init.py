"""``rod init``: scaffold a project for one AI assistant."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path

import typer
from rich.panel import Panel

from rod_cli.cli.ui import configure_logging, console, render_result
from rod_cli.core.config import AI_CHOICES, DEFAULT_WORKFLOW, SCRIPT_TYPE_CHOICES, WORKFLOW_CHOICES
from rod_cli.core.settings import SettingsError, load_settings
from rod_cli.template.generator import TemplateGenerator
from rod_cli.template.models import GenerationConfig


def _check_choice(value: str, choices: dict[str, str], flag: str) -> str:
    key = value.strip().lower()
    if key not in choices:
        console.print(f"[red]Error:[/red] Invalid {flag} '{value}'. Choose from: {', '.join(choices)}")
        raise typer.Exit(1)
    return key


def _prompt_assistant() -> str:
    console.print("[cyan]Available AI assistants:[/cyan]")
    for key, label in AI_CHOICES.items():
        console.print(f"  [green]{key}[/green]  {label}")
    return typer.prompt("Choose your AI assistant", default="claude")


def _default_script_type() -> str:
    return "ps" if os.name == "nt" else "sh"


def init(
    project_name: str = typer.Argument(None, help="Name for your new project directory (or '.' for the current directory)"),
    ai_assistant: str = typer.Option(None, "--ai", help="AI assistant to use: claude, copilot, gemini, cursor or codebuddy"),
    script_type: str = typer.Option(None, "--script", help="Script type to use: sh or ps"),
    workflow: str = typer.Option(DEFAULT_WORKFLOW, "--workflow", help="Workflow mode: roadmap or legacy"),
    template: str = typer.Option(None, "--template", help="Named template from the external template package"),
    registry: str = typer.Option(None, "--registry", help="npm registry for the external template package"),
    here: bool = typer.Option(False, "--here", help="Initialize the project in the current directory"),
    debug: bool = typer.Option(False, "--debug", help="Show verbose diagnostic output"),
) -> None:
    """
    Initialize a new ROD project.

    Examples:
        rod init my-project --ai claude
        rod init my-project --ai gemini --script ps --workflow legacy
        rod init --here --ai copilot --template pui
    """
    configure_logging(debug)

    if project_name == ".":
        here = True
        project_name = None

    if here and project_name:
        console.print("[red]Error:[/red] Cannot specify both project name and --here flag")
        raise typer.Exit(1)
    if not here and not project_name:
        console.print("[red]Error:[/red] Must specify either a project name, use '.' for current directory, or use --here flag")
        raise typer.Exit(1)

    if here:
        project_path = Path.cwd()
        project_name = project_path.name
    else:
        project_path = Path(project_name).resolve()
        if project_path.exists():
            console.print(
                Panel(
                    f"Directory '[cyan]{project_name}[/cyan]' already exists\n"
                    "Please choose a different project name or use --here inside it.",
                    title="[red]Directory Conflict[/red]",
                    border_style="red",
                    padding=(1, 2),
                )
            )
            raise typer.Exit(1)

    selected_ai = _check_choice(ai_assistant or _prompt_assistant(), AI_CHOICES, "--ai")
    selected_script = _check_choice(script_type or _default_script_type(), SCRIPT_TYPE_CHOICES, "--script")
    selected_workflow = _check_choice(workflow, WORKFLOW_CHOICES, "--workflow")

    try:
        settings = load_settings()
    except SettingsError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)
    if registry:
        settings = dataclasses.replace(settings, registry=registry)

    setup_lines = [
        "[cyan]ROD Project Setup[/cyan]",
        "",
        f"{'Project':<15} [green]{project_name}[/green]",
        f"{'Target Path':<15} [dim]{project_path}[/dim]",
        f"{'AI Assistant':<15} {AI_CHOICES[selected_ai]}",
        f"{'Script Type':<15} {selected_script}",
        f"{'Workflow':<15} {selected_workflow}",
    ]
    if template:
        setup_lines.append(f"{'Template':<15} {template} ({settings.package_name})")
    console.print(Panel("\n".join(setup_lines), border_style="cyan", padding=(1, 2)))

    config = GenerationConfig(
        ai_assistant=selected_ai,
        script_type=selected_script,
        project_path=project_path,
        project_name=project_name,
        workflow_mode=selected_workflow,
        template_name=template,
    )

    try:
        generator = TemplateGenerator(settings=settings)
    except FileNotFoundError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    with console.status("[cyan]Generating project files...[/cyan]"):
        result = generator.generate(config)

    render_result(result, project_path, verbose=debug)
    if not result.success:
        raise typer.Exit(1)

    steps = [] if here else [f"cd {project_name}"]
    steps.append("Open the project in your AI assistant and run /module <name>")
    console.print("\n[bold]Next steps:[/bold]")
    for number, step in enumerate(steps, start=1):
        console.print(f"  {number}. {step}")
