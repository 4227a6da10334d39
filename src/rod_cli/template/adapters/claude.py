"""Claude Code adapter.

Writes ``.claude/commands/<name>.md`` plus a ``.claude-config.json`` that
points Claude at the project rules and ``.specify`` assets.
"""

from __future__ import annotations

from typing import Any

from rod_cli.template.adapters.base import BaseAssistantAdapter, base_config_payload
from rod_cli.template.models import AIAssistant, GenerationConfig


class ClaudeAdapter(BaseAssistantAdapter):
    assistant = AIAssistant.CLAUDE
    config_filename = ".claude-config.json"
    instructions = (
        "<!-- Instructions for Claude Code -->\n"
        "<!-- This command is optimized for Claude Code. Use the built-in file operations "
        "and avoid external tools when possible. -->"
    )

    def config_payload(self, config: GenerationConfig) -> dict[str, Any]:
        payload = base_config_payload(config, self)
        payload["features"] = {
            "specDriven": True,
            "fileOperations": True,
            "codeGeneration": True,
        }
        return payload
