"""Cursor adapter: ``.cursor/commands/<name>.md``, no sidecar config."""

from __future__ import annotations

from rod_cli.template.adapters.base import BaseAssistantAdapter
from rod_cli.template.models import AIAssistant


class CursorAdapter(BaseAssistantAdapter):
    assistant = AIAssistant.CURSOR
    instructions = (
        "<!-- Instructions for Cursor -->\n"
        "<!-- This command is optimized for Cursor IDE. Use Ctrl+K or Cmd+K for code generation. -->"
    )
