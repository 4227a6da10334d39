"""Command template parsing and placeholder rendering.

A command template is Markdown with an optional header block delimited
by lines consisting solely of ``---``. Rendering runs in a fixed order:

1. parse the header (``scripts`` is a nested map keyed by ``sh``/``ps``)
2. substitute ``{SCRIPT}`` with the script for the active dialect
3. substitute ``{ARGS}`` with the assistant's argument token
4. substitute ``__AGENT__`` with the assistant key
5. rewrite bare ``memory/``, ``scripts/``, ``templates/`` paths into ``.specify/``
6. drop the ``scripts:`` block from the emitted header

Files without a well-formed header skip steps 1, 2 and 6.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Any, Mapping

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from rod_cli.core.config import AGENT_COMMAND_CONFIG
from rod_cli.core.constants import SPECIFY_DIR
from rod_cli.template.models import AIAssistant, CommandFile, GenerationConfig

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"

DEFAULT_PATH_PATTERNS: dict[str, str] = {
    r"(?<![\w./-])memory/": f"{SPECIFY_DIR}/memory/",
    r"(?<![\w./-])scripts/": f"{SPECIFY_DIR}/scripts/",
    r"(?<![\w./-])templates/": f"{SPECIFY_DIR}/templates/",
}

_INTERNAL_HEADER_KEYS = ("scripts:",)


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Split ``text`` into (header, body).

    Returns ``(None, text)`` unless the first line and a later line are both
    exactly ``---``.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != FRONTMATTER_DELIMITER:
        return None, text

    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n") == FRONTMATTER_DELIMITER:
            header = "".join(lines[1:index]).rstrip("\r\n")
            body = "".join(lines[index + 1 :]).lstrip("\r\n")
            return header, body

    return None, text


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value


def parse_header_lines(header_text: str) -> dict[str, Any]:
    """Loose ``key: value`` parse for headers that are not valid YAML.

    Only the first colon on a line separates key from value. Indented lines
    under a key with no value form a nested mapping (e.g. ``scripts``).
    """
    data: dict[str, Any] = {}
    block: dict[str, str] | None = None
    for line in header_text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition(":")
        if not sep or not key.strip():
            continue
        if line.startswith((" ", "\t")):
            if block is not None:
                block[key.strip()] = _unquote(value)
            continue
        if value.strip():
            data[key.strip()] = _unquote(value)
            block = None
        else:
            block = {}
            data[key.strip()] = block
    return data


def parse_header(header_text: str) -> dict[str, Any]:
    """Parse header text into a plain mapping.

    Strict YAML first; a header YAML rejects (an unquoted second colon in
    ``description`` is the usual case) goes through :func:`parse_header_lines`.
    """
    if not header_text.strip():
        return {}
    yaml = YAML(typ="safe")
    try:
        data = yaml.load(header_text)
    except YAMLError as exc:
        logger.debug("Header is not valid YAML, using line parser: %s", exc)
        return parse_header_lines(header_text)
    if not isinstance(data, dict):
        return parse_header_lines(header_text)
    return {str(key): value for key, value in data.items()}


def parse_command(text: str, name: str = "command") -> CommandFile:
    header_text, body = split_frontmatter(text)
    if header_text is None:
        return CommandFile(name=name, header={}, raw_header=None, body=text)
    return CommandFile(
        name=name,
        header=parse_header(header_text),
        raw_header=header_text,
        body=body,
    )


def read_command(path: Path) -> CommandFile:
    return parse_command(path.read_text(encoding="utf-8"), name=path.stem)


def filter_frontmatter(frontmatter_text: str) -> str:
    """Remove internal-only keys (and their indented children) from a header."""
    filtered_lines: list[str] = []
    skipping_block = False
    for line in frontmatter_text.splitlines():
        stripped = line.strip()
        if skipping_block:
            if line.startswith((" ", "\t")) or not stripped:
                continue
            skipping_block = False
        if stripped in _INTERNAL_HEADER_KEYS:
            skipping_block = True
            continue
        filtered_lines.append(line)
    return "\n".join(filtered_lines)


def rewrite_paths(text: str, patterns: Mapping[str, str] | None = None) -> str:
    """Point bare asset paths at the project-local ``.specify`` copies."""
    for pattern, replacement in (patterns or DEFAULT_PATH_PATTERNS).items():
        text = re.sub(pattern, replacement, text)
    return text


def argument_token(assistant: AIAssistant | str) -> str:
    return AGENT_COMMAND_CONFIG[AIAssistant(assistant).value]["arg_format"]


def project_placeholders(config: GenerationConfig, today: date | None = None) -> dict[str, str]:
    """Placeholder table for project-level values."""
    today = today or date.today()
    date_str = today.isoformat()
    return {
        "{{PROJECT_NAME}}": config.project_name,
        "{{AI_ASSISTANT}}": AIAssistant(config.ai_assistant).value,
        "{{SCRIPT_TYPE}}": str(getattr(config.script_type, "value", config.script_type)),
        "{{DATE}}": date_str,
        "{{YEAR}}": str(today.year),
        "[项目名称]": config.project_name,
        "[Project Name]": config.project_name,
        "[创建时间]": date_str,
        "[Creation Date]": date_str,
    }


def replace_placeholders(text: str, replacements: Mapping[str, str]) -> str:
    for placeholder, value in replacements.items():
        text = text.replace(placeholder, value)
    return text


def render_command(
    command: CommandFile,
    config: GenerationConfig,
    today: date | None = None,
) -> CommandFile:
    """Apply the substitution pipeline and return a new ``CommandFile``."""
    assistant = AIAssistant(config.ai_assistant)
    body = command.body

    if command.has_header:
        script = command.script_for(config.script_type)
        if script is not None:
            body = body.replace("{SCRIPT}", script)
        else:
            logger.debug("%s has no script for %s; {SCRIPT} left as-is", command.name, config.script_type)

    body = body.replace("{ARGS}", argument_token(assistant))
    body = body.replace("__AGENT__", assistant.value)
    body = replace_placeholders(body, project_placeholders(config, today))
    body = rewrite_paths(body)

    raw_header = command.raw_header
    if raw_header is not None:
        raw_header = rewrite_paths(filter_frontmatter(raw_header))

    return CommandFile(
        name=command.name,
        header=dict(command.header),
        raw_header=raw_header,
        body=body,
    )


def render_template(path: Path, config: GenerationConfig, today: date | None = None) -> CommandFile:
    """Read and render a single command template file."""
    return render_command(read_command(path), config, today)


def compose_markdown(command: CommandFile, preamble: str = "") -> str:
    """Serialise a rendered command back to Markdown.

    ``preamble`` is inserted between the header and the body.
    """
    body = command.body
    if preamble:
        body = f"{preamble}\n\n{body}"
    header = (command.raw_header or "").strip("\n")
    if header.strip():
        result = f"{FRONTMATTER_DELIMITER}\n{header}\n{FRONTMATTER_DELIMITER}\n\n{body}"
    else:
        result = body
    return result if result.endswith("\n") else result + "\n"


__all__ = [
    "DEFAULT_PATH_PATTERNS",
    "FRONTMATTER_DELIMITER",
    "argument_token",
    "compose_markdown",
    "filter_frontmatter",
    "parse_command",
    "parse_header",
    "parse_header_lines",
    "project_placeholders",
    "read_command",
    "render_command",
    "render_template",
    "replace_placeholders",
    "rewrite_paths",
    "split_frontmatter",
]
