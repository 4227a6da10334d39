from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Sequence

import pytest

from rod_cli.core.executor import CommandOutcome
from rod_cli.core.settings import TemplateSettings
from rod_cli.template.resolver import GlobalRootCache, TemplatePackageResolver

PACKAGE_NAME = "@acme/rod-templates"

COMMAND_TEMPLATE = """---
description: Demo command
scripts:
  sh: scripts/bash/demo.sh --json "{ARGS}"
  ps: scripts/powershell/demo.ps1 -Json "{ARGS}"
---

Run `{SCRIPT}` for __AGENT__ in {{PROJECT_NAME}}.
Read memory/constitution.md first.
"""


class FakeExecutor:
    """Canned ``npm`` responses; records every call."""

    def __init__(self, global_root: Path, install: Callable[[list[str]], CommandOutcome] | None = None):
        self.global_root = global_root
        self.install = install
        self.calls: list[tuple[list[str], float | None]] = []

    def run(self, args: Sequence[str], timeout: float | None = None) -> CommandOutcome:
        argv = list(args)
        self.calls.append((argv, timeout))
        if argv[:3] == ["npm", "root", "-g"]:
            return CommandOutcome(returncode=0, stdout=f"{self.global_root}\n")
        if argv[:3] == ["npm", "install", "-g"]:
            if self.install is None:
                return CommandOutcome(returncode=1, stderr="npm ERR! 404 Not Found")
            return self.install(argv)
        return CommandOutcome(returncode=127, stderr=f"unexpected command: {argv}")

    def count(self, *prefix: str) -> int:
        return sum(1 for argv, _ in self.calls if argv[: len(prefix)] == list(prefix))


def write_package(global_root: Path, templates: dict[str, dict[str, str]], version: str = "1.2.3") -> Path:
    """Lay out an installed template package: ``{template: {relpath: content}}``."""
    package = global_root / PACKAGE_NAME
    package.mkdir(parents=True, exist_ok=True)
    (package / "package.json").write_text(json.dumps({"name": PACKAGE_NAME, "version": version}), encoding="utf-8")
    for template, files in templates.items():
        (package / template).mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            target = package / template / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
    return package


@pytest.fixture()
def settings() -> TemplateSettings:
    return TemplateSettings(registry="https://registry.example.com", package_name=PACKAGE_NAME)


@pytest.fixture()
def global_root(tmp_path: Path) -> Path:
    root = tmp_path / "global" / "node_modules"
    root.mkdir(parents=True)
    return root


@pytest.fixture()
def make_package(global_root: Path) -> Callable[..., Path]:
    def _make(templates: dict[str, dict[str, str]], version: str = "1.2.3") -> Path:
        return write_package(global_root, templates, version)

    return _make


@pytest.fixture()
def executor(global_root: Path) -> FakeExecutor:
    return FakeExecutor(global_root)


@pytest.fixture()
def resolver(settings: TemplateSettings, executor: FakeExecutor) -> TemplatePackageResolver:
    return TemplatePackageResolver(settings=settings, executor=executor, root_cache=GlobalRootCache())


@pytest.fixture()
def template_base(tmp_path: Path) -> Path:
    """A small bundled template tree with two commands and both script dialects."""
    base = tmp_path / "bundled"
    (base / "commands").mkdir(parents=True)
    (base / "commands" / "demo.md").write_text(COMMAND_TEMPLATE, encoding="utf-8")
    (base / "commands" / "plain.md").write_text("No header here. Use {ARGS}.\n", encoding="utf-8")
    (base / "scripts" / "bash").mkdir(parents=True)
    (base / "scripts" / "bash" / "demo.sh").write_text("#!/usr/bin/env bash\necho demo\n", encoding="utf-8")
    (base / "scripts" / "powershell").mkdir(parents=True)
    (base / "scripts" / "powershell" / "demo.ps1").write_text("Write-Output demo\n", encoding="utf-8")
    (base / "memory").mkdir()
    (base / "memory" / "constitution.md").write_text("# [Project Name] Constitution\n", encoding="utf-8")
    (base / "roadmap-template.md").write_text(
        "# [Project Name] Roadmap\n\n项目: [项目名称]\nCreated: [Creation Date] / [创建时间]\n",
        encoding="utf-8",
    )
    (base / "spec-template.md").write_text("# Spec\n", encoding="utf-8")
    return base
