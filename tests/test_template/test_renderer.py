from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from rod_cli.template.models import AIAssistant, GenerationConfig, ScriptType
from rod_cli.template.renderer import (
    compose_markdown,
    filter_frontmatter,
    parse_command,
    render_command,
    render_template,
    rewrite_paths,
    split_frontmatter,
)

TEMPLATE = """---
description: Demo Template
scripts:
  sh: scripts/bash/run.sh --json "{ARGS}"
  ps: scripts/powershell/run.ps1 -Json "{ARGS}"
---

Run {SCRIPT} for __AGENT__.
See memory/constitution.md and templates/spec-template.md.
"""

TODAY = date(2025, 3, 14)


def _config(tmp_path: Path, ai: AIAssistant = AIAssistant.CLAUDE, script: ScriptType = ScriptType.POSIX) -> GenerationConfig:
    return GenerationConfig(
        ai_assistant=ai,
        script_type=script,
        project_path=tmp_path / "proj",
        project_name="demo",
    )


def test_split_frontmatter_separates_header_and_body() -> None:
    header, body = split_frontmatter(TEMPLATE)

    assert header is not None
    assert header.startswith("description: Demo Template")
    assert body.startswith("Run {SCRIPT}")


@pytest.mark.parametrize(
    "text",
    [
        "No header at all\n",
        "---\ndescription: unterminated\nbody text\n",
        "",
    ],
)
def test_split_frontmatter_without_two_delimiters_returns_whole_text(text: str) -> None:
    header, body = split_frontmatter(text)

    assert header is None
    assert body == text


def test_parse_command_reads_nested_scripts() -> None:
    command = parse_command(TEMPLATE, name="demo")

    assert command.description == "Demo Template"
    assert command.script_for(ScriptType.POSIX) == 'scripts/bash/run.sh --json "{ARGS}"'
    assert command.script_for("ps") == 'scripts/powershell/run.ps1 -Json "{ARGS}"'


def test_unparsable_header_yields_empty_mapping() -> None:
    command = parse_command("---\n[unclosed\n---\nBody {SCRIPT}\n")

    assert command.has_header
    assert command.header == {}
    assert command.body == "Body {SCRIPT}\n"


def test_header_with_colon_in_description_still_resolves_scripts(tmp_path: Path) -> None:
    text = (
        "---\n"
        "description: Plan: produce the design document\n"
        "scripts:\n"
        "  sh: scripts/bash/plan.sh --json\n"
        "  ps: \"scripts/powershell/plan.ps1 -Json\"\n"
        "---\n"
        "Run {SCRIPT} now.\n"
    )

    command = parse_command(text, "plan")

    assert command.description == "Plan: produce the design document"
    assert command.script_for("ps") == "scripts/powershell/plan.ps1 -Json"
    rendered = render_command(command, _config(tmp_path), TODAY)
    assert rendered.body == "Run .specify/scripts/bash/plan.sh --json now.\n"
    assert rendered.raw_header == "description: Plan: produce the design document"


def test_render_runs_substitutions_in_order(tmp_path: Path) -> None:
    rendered = render_command(parse_command(TEMPLATE, "demo"), _config(tmp_path), TODAY)

    assert 'Run .specify/scripts/bash/run.sh --json "$ARGUMENTS" for claude.' in rendered.body
    assert ".specify/memory/constitution.md" in rendered.body
    assert ".specify/templates/spec-template.md" in rendered.body
    assert "scripts:" not in rendered.raw_header


def test_render_uses_gemini_argument_token(tmp_path: Path) -> None:
    config = _config(tmp_path, ai=AIAssistant.GEMINI, script=ScriptType.POWERSHELL)
    rendered = render_command(parse_command(TEMPLATE, "demo"), config, TODAY)

    assert '.specify/scripts/powershell/run.ps1 -Json "{{args}}"' in rendered.body
    assert "for gemini." in rendered.body


def test_missing_dialect_leaves_script_placeholder(tmp_path: Path) -> None:
    text = "---\ndescription: only sh\nscripts:\n  sh: run.sh\n---\nRun {SCRIPT}\n"
    config = _config(tmp_path, script=ScriptType.POWERSHELL)

    rendered = render_command(parse_command(text), config, TODAY)

    assert "Run {SCRIPT}" in rendered.body


def test_headerless_file_is_processed_as_body(tmp_path: Path) -> None:
    rendered = render_command(parse_command("Use {ARGS} with {SCRIPT} for __AGENT__\n"), _config(tmp_path), TODAY)

    assert rendered.raw_header is None
    assert rendered.body == "Use $ARGUMENTS with {SCRIPT} for claude\n"


def test_rendering_twice_is_a_no_op(tmp_path: Path) -> None:
    config = _config(tmp_path)
    once = compose_markdown(render_command(parse_command(TEMPLATE), config, TODAY))
    twice = compose_markdown(render_command(parse_command(once), config, TODAY))

    assert once == twice


def test_rewrite_paths_is_idempotent_and_skips_prefixed_paths() -> None:
    text = "memory/a.md .specify/memory/b.md docs/scripts/c.sh templates/d.md"

    once = rewrite_paths(text)

    assert once == ".specify/memory/a.md .specify/memory/b.md docs/scripts/c.sh .specify/templates/d.md"
    assert rewrite_paths(once) == once


def test_filter_frontmatter_drops_scripts_block_only() -> None:
    header = "description: x\nscripts:\n  sh: a\n  ps: b\ntags: [one]"

    assert filter_frontmatter(header) == "description: x\ntags: [one]"


def test_project_placeholders_are_substituted(tmp_path: Path) -> None:
    text = "{{PROJECT_NAME}} [项目名称] [Project Name] {{DATE}} [Creation Date] {{YEAR}} {{SCRIPT_TYPE}}"

    rendered = render_command(parse_command(text), _config(tmp_path), TODAY)

    assert rendered.body == "demo demo demo 2025-03-14 2025-03-14 2025 sh"


def test_render_template_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "plan.md"
    path.write_text(TEMPLATE, encoding="utf-8")

    rendered = render_template(path, _config(tmp_path), TODAY)

    assert rendered.name == "plan"
    assert rendered.description == "Demo Template"


def test_compose_markdown_places_preamble_between_header_and_body(tmp_path: Path) -> None:
    rendered = render_command(parse_command(TEMPLATE), _config(tmp_path), TODAY)

    output = compose_markdown(rendered, preamble="<!-- note -->")

    assert output.startswith("---\ndescription: Demo Template\n---\n\n<!-- note -->\n\nRun ")
    assert output.endswith("\n")
