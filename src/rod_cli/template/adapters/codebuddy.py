"""Codebuddy adapter: ``.codebuddy/commands/<name>.md``, no sidecar config."""

from __future__ import annotations

from rod_cli.template.adapters.base import BaseAssistantAdapter
from rod_cli.template.models import AIAssistant


class CodebuddyAdapter(BaseAssistantAdapter):
    assistant = AIAssistant.CODEBUDDY
    instructions = (
        "<!-- Instructions for Codebuddy -->\n"
        "<!-- This command is designed for use with Codebuddy. -->"
    )
