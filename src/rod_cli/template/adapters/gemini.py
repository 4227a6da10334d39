"""Gemini CLI adapter.

Writes ``.gemini/commands/<name>.toml`` plus ``.gemini-config.json``.

The TOML is assembled by hand::

    description = "<header description>"

    prompt = \"\"\"
    <body>
    \"\"\"

Neither value is escaped. A body containing ``\"\"\"`` or a description
containing ``"`` produces invalid TOML; existing consumers read this exact
form, so it is kept as-is.
"""

from __future__ import annotations

from typing import Any

from rod_cli.template.adapters.base import BaseAssistantAdapter, base_config_payload
from rod_cli.template.models import AIAssistant, CommandFile, GenerationConfig


def to_toml(description: str, body: str) -> str:
    return f'description = "{description}"\n\nprompt = """\n{body.rstrip()}\n"""\n'


class GeminiAdapter(BaseAssistantAdapter):
    assistant = AIAssistant.GEMINI
    config_filename = ".gemini-config.json"

    def format_command(self, command: CommandFile, config: GenerationConfig) -> str:
        return to_toml(command.description, command.body)

    def config_payload(self, config: GenerationConfig) -> dict[str, Any]:
        payload = base_config_payload(config, self)
        payload["commands"]["format"] = "toml"
        payload["gemini"] = {
            "model": "gemini-pro",
            "temperature": 0.1,
            "maxTokens": 4096,
        }
        return payload
