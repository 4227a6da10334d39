"""Core utilities and configuration exports."""

from .config import (
    AGENT_COMMAND_CONFIG,
    AI_CHOICES,
    DEFAULT_NPM_REGISTRY,
    DEFAULT_TEMPLATE_PACKAGE,
    RESERVED_TEMPLATE_DIRS,
    SCRIPT_TYPE_CHOICES,
    WORKFLOW_CHOICES,
)
from .executor import CommandExecutor, CommandOutcome, SubprocessExecutor
from .settings import TemplateSettings, load_settings

__all__ = [
    "AGENT_COMMAND_CONFIG",
    "AI_CHOICES",
    "DEFAULT_NPM_REGISTRY",
    "DEFAULT_TEMPLATE_PACKAGE",
    "RESERVED_TEMPLATE_DIRS",
    "SCRIPT_TYPE_CHOICES",
    "WORKFLOW_CHOICES",
    "CommandExecutor",
    "CommandOutcome",
    "SubprocessExecutor",
    "TemplateSettings",
    "load_settings",
]
