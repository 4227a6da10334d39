"""Template discovery and copy helpers.

Every function that writes a file appends the destination path to the
caller-owned ``files_created`` list; nothing here removes or reorders
existing entries.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Iterable

from rod_cli.core.config import BASE_TEMPLATE_FILES, SCRIPT_VARIANT_DIRS
from rod_cli.core.constants import README_NAME, SPECIFY_DIR
from rod_cli.template.models import GenerationConfig, ScriptType
from rod_cli.template.renderer import project_placeholders, replace_placeholders

logger = logging.getLogger(__name__)

README_SEPARATOR = "\n\n---\n\n"

_EXECUTABLE_SUFFIXES = (".sh", ".js")


def copy_tree(
    source: Path,
    dest: Path,
    files_created: list[Path],
    exclude_dirs: Iterable[str] = (),
    exclude_files: Iterable[str] = (),
) -> None:
    """Recursively copy ``source`` into ``dest``, depth first.

    Excluded directory names are skipped without descending; excluded file
    names are skipped at every level. A missing ``source`` is a no-op.
    """
    if not source.is_dir():
        return

    excluded_dirs = set(exclude_dirs)
    excluded_files = set(exclude_files)
    dest.mkdir(parents=True, exist_ok=True)

    for entry in sorted(source.iterdir(), key=lambda p: p.name):
        target = dest / entry.name
        if entry.is_dir():
            if entry.name in excluded_dirs:
                logger.debug("Skipping reserved directory %s", entry)
                continue
            copy_tree(entry, target, files_created, excluded_dirs, excluded_files)
        elif entry.is_file():
            if entry.name in excluded_files:
                continue
            shutil.copy2(entry, target)
            files_created.append(target)


def _make_executable(path: Path) -> None:
    if os.name == "nt":
        return
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def process_template_variables(config: GenerationConfig, paths: Iterable[Path]) -> None:
    """Substitute project placeholders in already-copied text files.

    Files that are not UTF-8 text are left untouched.
    """
    replacements = project_placeholders(config)
    for path in list(paths):
        if not path.is_file():
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError):
            logger.debug("Skipping non-text file %s", path)
            continue
        updated = replace_placeholders(content, replacements)
        if updated != content:
            path.write_text(updated, encoding="utf-8")


def preserve_existing_readme(project_path: Path) -> str | None:
    """Return the trimmed content of an existing project README, if any."""
    readme = project_path / README_NAME
    if not readme.is_file():
        return None
    content = readme.read_text(encoding="utf-8").strip()
    return content or None


def merge_readme(
    template_path: Path,
    project_path: Path,
    files_created: list[Path],
    existing_content: str | None = None,
) -> Path | None:
    """Merge the template README into the project README.

    The project's existing README is read first (unless ``existing_content``
    is supplied). When both exist the result is existing content, a ``---``
    rule, then the template content. A template-only README is copied
    verbatim. Returns the written path, or None when the template ships no
    README.
    """
    if existing_content is None:
        existing_content = preserve_existing_readme(project_path)

    template_readme = template_path / README_NAME
    if not template_readme.is_file():
        return None

    project_readme = project_path / README_NAME
    if existing_content:
        template_content = template_readme.read_text(encoding="utf-8")
        project_readme.write_text(existing_content + README_SEPARATOR + template_content, encoding="utf-8")
    else:
        shutil.copy2(template_readme, project_readme)

    if project_readme not in files_created:
        files_created.append(project_readme)
    return project_readme


def copy_optional_file(
    template_path: Path,
    project_path: Path,
    name: str,
    files_created: list[Path],
) -> Path | None:
    """Copy ``name`` from the template root if it exists; absence is silent."""
    source = template_path / name
    if not source.is_file():
        return None
    dest = project_path / name
    shutil.copy2(source, dest)
    files_created.append(dest)
    return dest


def copy_base_templates(template_base: Path, templates_dir: Path, files_created: list[Path]) -> None:
    """Copy the bundled roadmap/spec/plan/tasks templates; each one is optional."""
    templates_dir.mkdir(parents=True, exist_ok=True)
    for name in BASE_TEMPLATE_FILES:
        source = template_base / name
        if not source.is_file():
            logger.debug("Bundled template %s not present, skipping", name)
            continue
        dest = templates_dir / name
        shutil.copy2(source, dest)
        files_created.append(dest)


def copy_scripts(
    template_base: Path,
    project_path: Path,
    script_type: ScriptType | str,
    files_created: list[Path],
) -> None:
    """Copy the bundled scripts for one dialect into ``.specify/scripts/<variant>``."""
    variant = SCRIPT_VARIANT_DIRS[ScriptType(script_type).value]
    source_dir = template_base / "scripts" / variant
    if not source_dir.is_dir():
        logger.debug("No bundled %s scripts at %s", variant, source_dir)
        return

    dest_dir = project_path / SPECIFY_DIR / "scripts" / variant
    start = len(files_created)
    copy_tree(source_dir, dest_dir, files_created)
    if ScriptType(script_type) is ScriptType.POSIX:
        for path in files_created[start:]:
            _make_executable(path)


def copy_memory_files(template_base: Path, memory_dest: Path, files_created: list[Path]) -> None:
    """Copy top-level memory files; a missing memory directory is fine."""
    memory_src = template_base / "memory"
    if not memory_src.is_dir():
        return
    memory_dest.mkdir(parents=True, exist_ok=True)
    for entry in sorted(memory_src.iterdir(), key=lambda p: p.name):
        if entry.is_file():
            dest = memory_dest / entry.name
            shutil.copy2(entry, dest)
            files_created.append(dest)


def create_specify_directory(template_base: Path, config: GenerationConfig, files_created: list[Path]) -> Path:
    """Materialize ``.specify/{templates,scripts,memory}`` from the bundled template."""
    specify_dir = config.project_path / SPECIFY_DIR
    specify_dir.mkdir(parents=True, exist_ok=True)

    copy_base_templates(template_base, specify_dir / "templates", files_created)
    copy_scripts(template_base, config.project_path, config.script_type, files_created)
    copy_memory_files(template_base, specify_dir / "memory", files_created)
    return specify_dir


def copy_external_templates(
    template_path: Path,
    template_base: Path,
    templates_dir: Path,
    files_created: list[Path],
) -> None:
    """Copy the external template's ``templates/*.md``, else the bundled ones."""
    source_dir = template_path / "templates"
    if not source_dir.is_dir():
        copy_base_templates(template_base, templates_dir, files_created)
        return

    templates_dir.mkdir(parents=True, exist_ok=True)
    for entry in sorted(source_dir.iterdir(), key=lambda p: p.name):
        if entry.is_file() and entry.suffix == ".md":
            dest = templates_dir / entry.name
            shutil.copy2(entry, dest)
            files_created.append(dest)


def copy_external_scripts(
    template_path: Path,
    template_base: Path,
    config: GenerationConfig,
    files_created: list[Path],
) -> None:
    """Copy the external template's ``scripts/`` tree, else the bundled dialect scripts."""
    source_dir = template_path / "scripts"
    if not source_dir.is_dir():
        copy_scripts(template_base, config.project_path, config.script_type, files_created)
        return

    dest_dir = config.project_path / SPECIFY_DIR / "scripts"
    start = len(files_created)
    copy_tree(source_dir, dest_dir, files_created)
    for path in files_created[start:]:
        if path.suffix in _EXECUTABLE_SUFFIXES:
            _make_executable(path)


def copy_external_memory(
    template_path: Path,
    template_base: Path,
    memory_dest: Path,
    files_created: list[Path],
) -> None:
    """Copy the external template's memory files, else the bundled ones."""
    if (template_path / "memory").is_dir():
        copy_memory_files(template_path, memory_dest, files_created)
    else:
        copy_memory_files(template_base, memory_dest, files_created)


def create_external_specify_directory(
    template_path: Path,
    template_base: Path,
    config: GenerationConfig,
    files_created: list[Path],
) -> Path:
    """Materialize ``.specify`` preferring the external template's own assets."""
    specify_dir = config.project_path / SPECIFY_DIR
    specify_dir.mkdir(parents=True, exist_ok=True)

    copy_external_templates(template_path, template_base, specify_dir / "templates", files_created)
    copy_external_scripts(template_path, template_base, config, files_created)
    copy_external_memory(template_path, template_base, specify_dir / "memory", files_created)
    return specify_dir


def list_local_templates(root: Path, exclude: Iterable[str] = ()) -> list[str]:
    """Names of template directories directly under ``root``."""
    excluded = set(exclude)
    if not root.is_dir():
        return []
    return sorted(
        entry.name
        for entry in root.iterdir()
        if entry.is_dir()
        and not entry.name.startswith(".")
        and entry.name != "node_modules"
        and entry.name not in excluded
    )


__all__ = [
    "README_SEPARATOR",
    "copy_base_templates",
    "copy_external_memory",
    "copy_external_scripts",
    "copy_external_templates",
    "copy_memory_files",
    "copy_optional_file",
    "copy_scripts",
    "copy_tree",
    "create_external_specify_directory",
    "create_specify_directory",
    "list_local_templates",
    "merge_readme",
    "preserve_existing_readme",
    "process_template_variables",
]
