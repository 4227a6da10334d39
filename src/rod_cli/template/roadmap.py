"""Roadmap workflow scaffolding: ``specs/roadmap.md`` and ``specs/modules/``."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from rod_cli.core.constants import MODULES_DIR, README_NAME, SPECS_DIR

logger = logging.getLogger(__name__)

ROADMAP_TEMPLATE_NAME = "roadmap-template.md"

MODULES_README = """# Modules

This directory holds one specification folder per project module. Each
module contains:

- `spec.md` - specification
- `plan.md` - design document
- `tasks.md` - task list

## Structure

Modules may nest: a module can hold its own `modules/` subdirectory.

## Usage

1. `/module <name>` creates a new module
2. `/specify` analyses the specification
3. `/plan` produces the design document
4. `/tasks` creates the task list
5. `/progress` syncs progress back into the roadmap
"""


def render_roadmap(template_text: str, project_name: str, today: date | None = None) -> str:
    created = (today or date.today()).isoformat()
    return (
        template_text.replace("[项目名称]", project_name)
        .replace("[Project Name]", project_name)
        .replace("[创建时间]", created)
        .replace("[Creation Date]", created)
    )


def generate_roadmap_workflow(
    project_path: Path,
    project_name: str,
    template_base: Path,
    files_created: list[Path],
    today: date | None = None,
) -> None:
    """Write the initial roadmap and an empty modules registry.

    The ``specs/modules`` directory itself is recorded in ``files_created``.

    Raises:
        RuntimeError: If the bundled roadmap template cannot be read.
    """
    specs_dir = project_path / SPECS_DIR
    specs_dir.mkdir(parents=True, exist_ok=True)

    source = template_base / ROADMAP_TEMPLATE_NAME
    try:
        template_text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to generate roadmap: {exc}") from exc

    roadmap = specs_dir / "roadmap.md"
    roadmap.write_text(render_roadmap(template_text, project_name, today), encoding="utf-8")
    files_created.append(roadmap)

    modules_dir = specs_dir / MODULES_DIR
    modules_dir.mkdir(parents=True, exist_ok=True)
    files_created.append(modules_dir)

    modules_readme = modules_dir / README_NAME
    modules_readme.write_text(MODULES_README, encoding="utf-8")
    files_created.append(modules_readme)
    logger.debug("Roadmap workflow scaffolded under %s", specs_dir)


__all__ = ["MODULES_README", "ROADMAP_TEMPLATE_NAME", "generate_roadmap_workflow", "render_roadmap"]
