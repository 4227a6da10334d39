"""Static configuration catalogues for rod-cli."""

from __future__ import annotations

AI_CHOICES = {
    "claude": "Claude Code",
    "copilot": "GitHub Copilot",
    "gemini": "Gemini CLI",
    "cursor": "Cursor",
    "codebuddy": "Codebuddy",
}

SCRIPT_TYPE_CHOICES = {"sh": "POSIX Shell (bash/zsh)", "ps": "PowerShell"}

WORKFLOW_CHOICES = {
    "roadmap": "Roadmap-driven modules (specs/roadmap.md + specs/modules/)",
    "legacy": "Single feature flow (specify -> plan -> tasks)",
}

DEFAULT_WORKFLOW = "roadmap"

# Script dialect -> subdirectory under scripts/
SCRIPT_VARIANT_DIRS = {"sh": "bash", "ps": "powershell"}

AGENT_COMMAND_CONFIG: dict[str, dict[str, str]] = {
    "claude": {"dir": ".claude/commands", "ext": "md", "arg_format": "$ARGUMENTS"},
    "copilot": {"dir": ".github/prompts", "ext": "prompt.md", "arg_format": "$ARGUMENTS"},
    "gemini": {"dir": ".gemini/commands", "ext": "toml", "arg_format": "{{args}}"},
    "cursor": {"dir": ".cursor/commands", "ext": "md", "arg_format": "$ARGUMENTS"},
    "codebuddy": {"dir": ".codebuddy/commands", "ext": "md", "arg_format": "$ARGUMENTS"},
}

# Template subdirectories rendered by dedicated steps, never copied verbatim
# to the project root.
RESERVED_TEMPLATE_DIRS: tuple[str, ...] = ("commands", "scripts", "memory", "templates", "rules")

BASE_TEMPLATE_FILES: tuple[str, ...] = (
    "roadmap-template.md",
    "spec-template.md",
    "plan-template.md",
    "tasks-template.md",
)

DEFAULT_NPM_REGISTRY = "https://npm.tencent.com"
DEFAULT_TEMPLATE_PACKAGE = "@tencent/rod-cli-templates"
DEFAULT_TEMPLATE_VERSION = "latest"
INSTALL_TIMEOUT_SECONDS = 60

__all__ = [
    "AGENT_COMMAND_CONFIG",
    "AI_CHOICES",
    "BASE_TEMPLATE_FILES",
    "DEFAULT_NPM_REGISTRY",
    "DEFAULT_TEMPLATE_PACKAGE",
    "DEFAULT_TEMPLATE_VERSION",
    "DEFAULT_WORKFLOW",
    "INSTALL_TIMEOUT_SECONDS",
    "RESERVED_TEMPLATE_DIRS",
    "SCRIPT_TYPE_CHOICES",
    "SCRIPT_VARIANT_DIRS",
    "WORKFLOW_CHOICES",
]
