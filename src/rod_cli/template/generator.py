"""Project scaffolding orchestrator.

``TemplateGenerator.generate`` is the single entry point used by the CLI.
It never raises for expected failures: validation, package resolution and
filesystem problems are all reported through ``GenerationResult``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from rod_cli.core.config import RESERVED_TEMPLATE_DIRS
from rod_cli.core.constants import MCP_CONFIG_NAME, README_NAME
from rod_cli.core.settings import TemplateSettings
from rod_cli.runtime.home import get_package_asset_root
from rod_cli.template.adapters import get_adapter
from rod_cli.template.exceptions import ConfigurationInvalid, GenerationAborted
from rod_cli.template.manager import (
    copy_optional_file,
    copy_tree,
    create_external_specify_directory,
    create_specify_directory,
    list_local_templates,
    merge_readme,
    preserve_existing_readme,
    process_template_variables,
)
from rod_cli.template.models import (
    ExternalPackageDescriptor,
    GenerationConfig,
    GenerationResult,
    WorkflowMode,
    validate_config,
)
from rod_cli.template.resolver import TemplatePackageResolver
from rod_cli.template.roadmap import generate_roadmap_workflow

logger = logging.getLogger(__name__)


def calculate_total_size(paths: Iterable[Path]) -> tuple[int, list[str]]:
    """Sum file sizes; paths that cannot be stat'ed count as 0 with a warning."""
    total = 0
    warnings: list[str] = []
    for path in paths:
        try:
            total += path.stat().st_size
        except OSError:
            warnings.append(f"Could not stat file: {path}")
    return total, warnings


class TemplateGenerator:
    """Scaffold a project from the bundled or an external template."""

    def __init__(
        self,
        template_base_path: Path | None = None,
        resolver: TemplatePackageResolver | None = None,
        settings: TemplateSettings | None = None,
    ) -> None:
        self.template_base_path = template_base_path or get_package_asset_root()
        self.settings = settings or (resolver.settings if resolver else TemplateSettings())
        self.resolver = resolver or TemplatePackageResolver(settings=self.settings)

    def generate(self, config: GenerationConfig) -> GenerationResult:
        files_created: list[Path] = []
        warnings: list[str] = []

        try:
            validate_config(config)
        except ConfigurationInvalid as exc:
            logger.error("%s", exc)
            return GenerationResult(success=False, errors=[str(exc)])
        config = config.normalized()

        template_path: Path | None = None
        if config.template_name:
            descriptor = ExternalPackageDescriptor(
                template_name=config.template_name,
                registry=self.settings.registry,
                version=self.settings.version,
            )
            install = self.resolver.ensure(descriptor)
            if not install.success:
                return GenerationResult(success=False, errors=list(install.errors))
            template_path = install.template_path
            logger.info("Using external template %s (%s)", config.template_name, install.version)

        try:
            config.project_path.mkdir(parents=True, exist_ok=True)
            if template_path is None:
                self._generate_default(config, files_created)
            else:
                self._generate_external(config, template_path, files_created)

            total_size, size_warnings = calculate_total_size(files_created)
            warnings.extend(size_warnings)
        except Exception as exc:
            error = GenerationAborted(str(exc))
            logger.exception("%s", error)
            return GenerationResult(
                success=False,
                files_created=files_created,
                total_files=len(files_created),
                errors=[str(error)],
                warnings=warnings,
            )

        for warning in warnings:
            logger.warning("%s", warning)
        return GenerationResult(
            success=True,
            files_created=files_created,
            total_files=len(files_created),
            total_size=total_size,
            warnings=warnings,
        )

    def _generate_default(self, config: GenerationConfig, files_created: list[Path]) -> None:
        create_specify_directory(self.template_base_path, config, files_created)

        adapter = get_adapter(config.ai_assistant, self.template_base_path)
        adapter.generate_commands(config, files_created)
        adapter.generate_config(config, files_created)

        if config.workflow_mode is WorkflowMode.ROADMAP:
            generate_roadmap_workflow(
                config.project_path,
                config.project_name,
                self.template_base_path,
                files_created,
            )

    def _generate_external(
        self,
        config: GenerationConfig,
        template_path: Path,
        files_created: list[Path],
    ) -> None:
        existing_readme = preserve_existing_readme(config.project_path)

        start = len(files_created)
        copy_tree(
            template_path,
            config.project_path,
            files_created,
            exclude_dirs=RESERVED_TEMPLATE_DIRS,
            exclude_files=(README_NAME, MCP_CONFIG_NAME),
        )
        process_template_variables(config, files_created[start:])
        merge_readme(template_path, config.project_path, files_created, existing_content=existing_readme)
        copy_optional_file(template_path, config.project_path, MCP_CONFIG_NAME, files_created)

        create_external_specify_directory(template_path, self.template_base_path, config, files_created)

        adapter = get_adapter(config.ai_assistant, self.template_base_path)
        adapter.generate_commands(config, files_created, template_path=template_path)
        adapter.generate_config(config, files_created)

    def list_all_templates(self) -> dict[str, list[str]]:
        """Template names grouped by source: ``local`` (bundled) and ``npm``."""
        return {
            "local": list_local_templates(self.template_base_path, exclude=RESERVED_TEMPLATE_DIRS),
            "npm": self.resolver.list_available_templates(),
        }


__all__ = ["TemplateGenerator", "calculate_total_size"]
