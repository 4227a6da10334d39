"""Base class for assistant format adapters.

An adapter owns everything that differs between AI assistants:
    - where command files go and what they are called
    - how a rendered command is serialised (Markdown or TOML)
    - the optional sidecar configuration file
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, ClassVar

from rod_cli.core.config import AGENT_COMMAND_CONFIG
from rod_cli.template.models import AIAssistant, CommandFile, GenerationConfig
from rod_cli.template.renderer import compose_markdown, render_template

logger = logging.getLogger(__name__)


class BaseAssistantAdapter:
    """Shared command generation for every assistant variant.

    Subclasses set ``assistant`` and override :meth:`format_command` or
    :meth:`config_payload` where their output differs.
    """

    assistant: ClassVar[AIAssistant]
    config_filename: ClassVar[str | None] = None
    instructions: ClassVar[str] = ""

    def __init__(self, template_base_path: Path) -> None:
        self.template_base_path = template_base_path

    @property
    def layout(self) -> dict[str, str]:
        return AGENT_COMMAND_CONFIG[self.assistant.value]

    def directory_name(self) -> str:
        """Top-level directory owned by this assistant (e.g. ``.claude``)."""
        return Path(self.layout["dir"]).parts[0]

    def commands_dir(self, project_path: Path) -> Path:
        return project_path / self.layout["dir"]

    def output_filename(self, stem: str) -> str:
        return f"{stem}.{self.layout['ext']}"

    def commands_source(self, template_path: Path | None = None) -> Path:
        return (template_path or self.template_base_path) / "commands"

    def command_files(self, template_path: Path | None = None) -> list[Path]:
        source = self.commands_source(template_path)
        if not source.is_dir():
            logger.warning("No command templates found at %s", source)
            return []
        return sorted(path for path in source.glob("*.md") if path.is_file())

    def format_command(self, command: CommandFile, config: GenerationConfig) -> str:
        """Serialise a rendered command; Markdown with an instruction comment by default."""
        return compose_markdown(command, preamble=self.instructions)

    def generate_commands(
        self,
        config: GenerationConfig,
        files_created: list[Path],
        template_path: Path | None = None,
    ) -> list[Path]:
        """Write one output file per source command template."""
        output_dir = self.commands_dir(config.project_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        written: list[Path] = []
        for source in self.command_files(template_path):
            try:
                rendered = render_template(source, config)
            except (OSError, UnicodeDecodeError) as exc:
                raise RuntimeError(f"Failed to generate {source.stem} command: {exc}") from exc
            dest = output_dir / self.output_filename(source.stem)
            dest.write_text(self.format_command(rendered, config), encoding="utf-8")
            files_created.append(dest)
            written.append(dest)

        logger.debug("Generated %d %s command(s) in %s", len(written), self.assistant.value, output_dir)
        return written

    def config_payload(self, config: GenerationConfig) -> dict[str, Any] | None:
        return None

    def generate_config(self, config: GenerationConfig, files_created: list[Path]) -> Path | None:
        """Write the sidecar configuration file, if this assistant has one."""
        payload = self.config_payload(config)
        if self.config_filename is None or payload is None:
            return None
        config_path = config.project_path / self.config_filename
        config_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        files_created.append(config_path)
        return config_path


PROJECT_RULES = [
    "严格按照ROD(Rule-Oriented Development)方法论工作",
    "始终基于项目规格文件进行开发",
    "确保代码实现与规格文档的一致性",
    "使用.specify目录中的模板和工具",
    "遵循项目的代码规范和架构设计",
]


def base_config_payload(config: GenerationConfig, adapter: BaseAssistantAdapter) -> dict[str, Any]:
    """Common fields of the JSON sidecar files."""
    return {
        "version": "1.0",
        "projectName": config.project_name,
        "description": f"ROD project initialized with {adapter.assistant.value.title()} assistant",
        "workingDirectory": ".",
        "scriptType": str(getattr(config.script_type, "value", config.script_type)),
        "commands": {"directory": adapter.layout["dir"]},
        "rules": list(PROJECT_RULES),
        "templates": {"directory": ".specify/templates"},
        "scripts": {"directory": ".specify/scripts"},
        "memory": {"directory": ".specify/memory"},
    }


__all__ = ["BaseAssistantAdapter", "PROJECT_RULES", "base_config_payload"]
