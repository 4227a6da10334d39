"""External template package resolution.

External templates live in one globally installed npm package that holds
one directory per template name::

    <npm root -g>/<package>/<template>/{commands,scripts,memory,templates,rules}

The resolver checks what is installed, installs the package on demand
(one ``npm install -g`` call, 60 second timeout, never retried) and
reports which templates the package provides.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from rod_cli.core.config import INSTALL_TIMEOUT_SECONDS
from rod_cli.core.executor import CommandExecutor, SubprocessExecutor
from rod_cli.core.settings import TemplateSettings
from rod_cli.template.exceptions import PackageInstallFailed, TemplateNotFound
from rod_cli.template.models import ExternalPackageDescriptor, TemplateInstallResult

logger = logging.getLogger(__name__)


@dataclass
class GlobalRootCache:
    """Memoized ``npm root -g`` result.

    With ``ttl=None`` the first resolved value is kept for the lifetime of
    the cache object.
    """

    ttl: float | None = None
    value: Path | None = None
    resolved_at: float | None = None

    def get(self, loader: Callable[[], Path]) -> Path:
        if self.value is not None and not self._expired():
            return self.value
        self.value = loader()
        self.resolved_at = time.monotonic()
        return self.value

    def clear(self) -> None:
        self.value = None
        self.resolved_at = None

    def _expired(self) -> bool:
        if self.ttl is None or self.resolved_at is None:
            return False
        return time.monotonic() - self.resolved_at > self.ttl


# Shared by resolvers that are not handed their own cache.
PROCESS_ROOT_CACHE = GlobalRootCache()


class TemplatePackageResolver:
    """Locate, inspect and install the external template package."""

    def __init__(
        self,
        settings: TemplateSettings | None = None,
        executor: CommandExecutor | None = None,
        root_cache: GlobalRootCache | None = None,
    ) -> None:
        self.settings = settings or TemplateSettings()
        self.executor = executor or SubprocessExecutor()
        self.root_cache = root_cache if root_cache is not None else PROCESS_ROOT_CACHE

    @property
    def package_name(self) -> str:
        return self.settings.package_name

    def global_modules_root(self) -> Path:
        """Return the global node_modules directory.

        Raises:
            RuntimeError: If ``npm root -g`` fails.
        """
        return self.root_cache.get(self._lookup_global_root)

    def _lookup_global_root(self) -> Path:
        outcome = self.executor.run(["npm", "root", "-g"], timeout=INSTALL_TIMEOUT_SECONDS)
        if not outcome.ok or not outcome.stdout.strip():
            raise RuntimeError(f"Failed to get global node_modules path: {outcome.error_text}")
        root = Path(outcome.stdout.strip().splitlines()[-1])
        logger.debug("Global node_modules resolved to %s", root)
        return root

    def package_path(self) -> Path:
        return self.global_modules_root() / self.package_name

    def template_path(self, template_name: str) -> Path:
        return self.package_path() / template_name

    def is_package_installed(self) -> bool:
        try:
            return self.package_path().is_dir()
        except (RuntimeError, OSError) as exc:
            logger.debug("Template package lookup failed: %s", exc)
            return False

    def is_template_available(self, template_name: str) -> bool:
        if not template_name or template_name.startswith("."):
            return False
        try:
            return self.template_path(template_name).is_dir()
        except (RuntimeError, OSError):
            return False

    def list_available_templates(self) -> list[str]:
        """Sorted template names in the installed package (empty if absent)."""
        try:
            package_path = self.package_path()
            entries = list(package_path.iterdir())
        except (RuntimeError, OSError):
            return []
        return sorted(
            entry.name
            for entry in entries
            if entry.is_dir() and not entry.name.startswith(".") and entry.name != "node_modules"
        )

    def installed_version(self) -> str:
        manifest = self.package_path() / "package.json"
        data = json.loads(manifest.read_text(encoding="utf-8"))
        return str(data.get("version", ""))

    def install(self, descriptor: ExternalPackageDescriptor) -> TemplateInstallResult:
        """Install the template package globally.

        The reported version is read back from the installed ``package.json``
        because the requested version may be a tag such as ``latest``.
        """
        registry = descriptor.registry or self.settings.registry
        version = descriptor.version or self.settings.version
        package_spec = f"{self.package_name}@{version}"
        logger.info("Installing template package %s from %s", package_spec, registry)

        outcome = self.executor.run(
            ["npm", "install", "-g", package_spec, f"--registry={registry}"],
            timeout=INSTALL_TIMEOUT_SECONDS,
        )
        try:
            if not outcome.ok:
                raise PackageInstallFailed(package_spec, outcome.error_text, timed_out=outcome.timed_out)
            if not self.is_package_installed():
                raise PackageInstallFailed(
                    package_spec,
                    f"Package {self.package_name} not found after global installation",
                )
            actual_version = self.installed_version()
        except PackageInstallFailed as exc:
            logger.error("%s", exc)
            return TemplateInstallResult(success=False, errors=[str(exc)])
        except (OSError, ValueError, RuntimeError) as exc:
            error = PackageInstallFailed(package_spec, str(exc))
            logger.error("%s", error)
            return TemplateInstallResult(success=False, errors=[str(error)])

        logger.info("Template package %s@%s installed globally", self.package_name, actual_version)
        return TemplateInstallResult(
            success=True,
            template_path=self.template_path(descriptor.template_name),
            package_path=self.package_path(),
            version=actual_version,
        )

    def ensure(self, descriptor: ExternalPackageDescriptor) -> TemplateInstallResult:
        """Make ``descriptor.template_name`` available, installing only if needed.

        An installed package that lacks the template fails immediately with
        every available template name in the error message.
        """
        name = descriptor.template_name
        if self.is_package_installed():
            if self.is_template_available(name):
                return TemplateInstallResult(
                    success=True,
                    template_path=self.template_path(name),
                    package_path=self.package_path(),
                    version="installed",
                )
            return self._not_found(name)

        result = self.install(descriptor)
        if result.success and not self.is_template_available(name):
            return self._not_found(name)
        return result

    def _not_found(self, template_name: str) -> TemplateInstallResult:
        error = TemplateNotFound(template_name, self.list_available_templates())
        logger.error("%s", error)
        return TemplateInstallResult(success=False, errors=[str(error)])


__all__ = [
    "GlobalRootCache",
    "PROCESS_ROOT_CACHE",
    "TemplatePackageResolver",
]
