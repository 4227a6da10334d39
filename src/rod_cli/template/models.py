"""Data model for the template generation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any

from rod_cli.core.config import DEFAULT_TEMPLATE_VERSION
from rod_cli.template.exceptions import ConfigurationInvalid


class AIAssistant(str, Enum):
    CLAUDE = "claude"
    COPILOT = "copilot"
    GEMINI = "gemini"
    CURSOR = "cursor"
    CODEBUDDY = "codebuddy"


class ScriptType(str, Enum):
    POSIX = "sh"
    POWERSHELL = "ps"


class WorkflowMode(str, Enum):
    LEGACY = "legacy"
    ROADMAP = "roadmap"


@dataclass
class GenerationConfig:
    """Everything the generator needs to scaffold one project."""

    ai_assistant: AIAssistant
    script_type: ScriptType
    project_path: Path
    project_name: str
    workflow_mode: WorkflowMode = WorkflowMode.ROADMAP
    template_name: str | None = None

    def normalized(self) -> "GenerationConfig":
        """Return a copy with enum fields coerced from raw strings.

        Call only after :func:`validate_config` succeeded.
        """
        return replace(
            self,
            ai_assistant=AIAssistant(self.ai_assistant),
            script_type=ScriptType(self.script_type),
            workflow_mode=WorkflowMode(self.workflow_mode),
            project_path=Path(self.project_path),
            template_name=self.template_name or None,
        )


def _enum_member(enum_cls: type[Enum], value: Any) -> bool:
    if isinstance(value, enum_cls):
        return True
    return value in {member.value for member in enum_cls}


def validate_config(config: GenerationConfig) -> None:
    """Validate a generation config before any filesystem access.

    Raises:
        ConfigurationInvalid: listing every problem found.
    """
    problems: list[str] = []

    if not config.ai_assistant:
        problems.append("AI assistant is required")
    elif not _enum_member(AIAssistant, config.ai_assistant):
        problems.append(f"Invalid AI assistant: {config.ai_assistant}")

    if not config.script_type:
        problems.append("Script type is required")
    elif not _enum_member(ScriptType, config.script_type):
        problems.append(f"Invalid script type: {config.script_type}")

    if config.workflow_mode and not _enum_member(WorkflowMode, config.workflow_mode):
        problems.append(f"Invalid workflow mode: {config.workflow_mode}")

    if not config.project_path or not str(config.project_path).strip():
        problems.append("Project path is required")
    elif not Path(config.project_path).is_absolute():
        problems.append("Project path must be absolute")

    if not config.project_name or not config.project_name.strip():
        problems.append("Project name is required")

    if problems:
        raise ConfigurationInvalid(problems)


@dataclass
class GenerationResult:
    success: bool
    files_created: list[Path] = field(default_factory=list)
    total_files: int = 0
    total_size: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExternalPackageDescriptor:
    """One request for a template out of the external template package."""

    template_name: str
    registry: str | None = None
    version: str = DEFAULT_TEMPLATE_VERSION


@dataclass
class TemplateInstallResult:
    success: bool
    template_path: Path | None = None
    package_path: Path | None = None
    version: str = ""
    errors: list[str] = field(default_factory=list)


@dataclass
class CommandFile:
    """A single command template while it moves through the renderer.

    Attributes:
        name: File stem, used for the output file name.
        header: Parsed header mapping (``scripts`` is a nested dialect map).
        raw_header: Header text between the delimiters, or None when the
            source has no well-formed header.
        body: Everything after the closing delimiter.
    """

    name: str
    header: dict[str, Any] = field(default_factory=dict)
    raw_header: str | None = None
    body: str = ""

    @property
    def has_header(self) -> bool:
        return self.raw_header is not None

    @property
    def description(self) -> str:
        value = self.header.get("description", "")
        return "" if value is None else str(value).strip()

    def script_for(self, script_type: ScriptType | str) -> str | None:
        scripts = self.header.get("scripts")
        if not isinstance(scripts, dict):
            return None
        key = script_type.value if isinstance(script_type, ScriptType) else script_type
        value = scripts.get(key)
        return None if value is None else str(value).strip()


__all__ = [
    "AIAssistant",
    "CommandFile",
    "ExternalPackageDescriptor",
    "GenerationConfig",
    "GenerationResult",
    "ScriptType",
    "TemplateInstallResult",
    "WorkflowMode",
    "validate_config",
]
