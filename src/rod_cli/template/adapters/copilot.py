"""GitHub Copilot adapter.

Writes ``.github/prompts/<name>.prompt.md``. The source header is replaced
by Copilot prompt metadata and bracketed argument names such as
``[feature]`` become ``<feature>``.
"""

from __future__ import annotations

import json
import re

from rod_cli.template.adapters.base import BaseAssistantAdapter
from rod_cli.template.models import AIAssistant, CommandFile, GenerationConfig

DEFAULT_PROMPT_TITLE = "ROD Development Assistant"
DEFAULT_PROMPT_DESCRIPTION = "Assists with rule-oriented development workflow"

# Markdown links ``[text](url)`` and task boxes ``[ ]``/``[x]`` are left alone.
_BRACKET_ARGUMENT = re.compile(r"\[(?![ xX]\])([^\]\n]+)\](?!\()")


def rewrite_bracket_arguments(text: str) -> str:
    return _BRACKET_ARGUMENT.sub(r"<\1>", text)


class CopilotAdapter(BaseAssistantAdapter):
    assistant = AIAssistant.COPILOT
    instructions = (
        "<!-- Instructions for GitHub Copilot -->\n"
        "<!-- This command works with GitHub Copilot Chat. Use @workspace commands for better context. -->"
    )

    def prompt_header(self, command: CommandFile) -> str:
        description = command.description or DEFAULT_PROMPT_DESCRIPTION
        return (
            "---\n"
            f"title: {DEFAULT_PROMPT_TITLE}\n"
            f"description: {json.dumps(description, ensure_ascii=False)}\n"
            "authors:\n"
            "  - ROD CLI\n"
            "tags:\n"
            "  - development\n"
            "  - specifications\n"
            "  - architecture\n"
            "---\n\n"
        )

    def format_command(self, command: CommandFile, config: GenerationConfig) -> str:
        body = rewrite_bracket_arguments(command.body)
        content = f"{self.prompt_header(command)}{self.instructions}\n\n{body}"
        return content if content.endswith("\n") else content + "\n"
