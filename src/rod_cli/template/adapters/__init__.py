"""Assistant format adapters.

Each adapter knows, for one AI assistant:
    - the directory its commands live in
    - the command file extension and body format
    - its optional sidecar configuration file

Supported assistants: claude, copilot, gemini, cursor, codebuddy.
"""

from __future__ import annotations

from pathlib import Path

from rod_cli.template.adapters.base import BaseAssistantAdapter
from rod_cli.template.adapters.claude import ClaudeAdapter
from rod_cli.template.adapters.codebuddy import CodebuddyAdapter
from rod_cli.template.adapters.copilot import CopilotAdapter
from rod_cli.template.adapters.cursor import CursorAdapter
from rod_cli.template.adapters.gemini import GeminiAdapter
from rod_cli.template.models import AIAssistant

ADAPTER_REGISTRY: dict[AIAssistant, type[BaseAssistantAdapter]] = {
    AIAssistant.CLAUDE: ClaudeAdapter,
    AIAssistant.COPILOT: CopilotAdapter,
    AIAssistant.GEMINI: GeminiAdapter,
    AIAssistant.CURSOR: CursorAdapter,
    AIAssistant.CODEBUDDY: CodebuddyAdapter,
}


def get_adapter(assistant: AIAssistant | str, template_base_path: Path) -> BaseAssistantAdapter:
    """Instantiate the adapter for ``assistant``.

    Raises:
        ValueError: If the assistant is not supported.
    """
    try:
        key = AIAssistant(assistant)
    except ValueError:
        key = None
    adapter_class = ADAPTER_REGISTRY.get(key) if key is not None else None
    if adapter_class is None:
        valid = ", ".join(sorted(a.value for a in ADAPTER_REGISTRY))
        raise ValueError(f"Unsupported AI assistant: {assistant}. Valid assistants: {valid}")
    return adapter_class(template_base_path)


__all__ = [
    "ADAPTER_REGISTRY",
    "BaseAssistantAdapter",
    "ClaudeAdapter",
    "CodebuddyAdapter",
    "CopilotAdapter",
    "CursorAdapter",
    "GeminiAdapter",
    "get_adapter",
]
