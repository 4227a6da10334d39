"""User settings stored in ~/.rod/config.toml."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import toml  # type: ignore[import-untyped]

from rod_cli.core.config import (
    DEFAULT_NPM_REGISTRY,
    DEFAULT_TEMPLATE_PACKAGE,
    DEFAULT_TEMPLATE_VERSION,
)
from rod_cli.runtime.home import get_rod_home

logger = logging.getLogger(__name__)


class SettingsError(RuntimeError):
    """Raised when ~/.rod/config.toml cannot be parsed."""


@dataclass(frozen=True)
class TemplateSettings:
    """Where external template packages come from."""

    registry: str = DEFAULT_NPM_REGISTRY
    package_name: str = DEFAULT_TEMPLATE_PACKAGE
    version: str = DEFAULT_TEMPLATE_VERSION

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "TemplateSettings":
        if not isinstance(data, dict):
            return cls()

        def _text(key: str, default: str) -> str:
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            return default

        return cls(
            registry=_text("registry", DEFAULT_NPM_REGISTRY),
            package_name=_text("package_name", DEFAULT_TEMPLATE_PACKAGE),
            version=_text("version", DEFAULT_TEMPLATE_VERSION),
        )


def settings_path(home: Path | None = None) -> Path:
    return (home or get_rod_home()) / "config.toml"


def load_settings(home: Path | None = None) -> TemplateSettings:
    """Load the ``[templates]`` section, then apply environment overrides.

    ROD_NPM_REGISTRY and ROD_TEMPLATE_PACKAGE take precedence over the file.
    """
    config_file = settings_path(home)
    data: dict[str, Any] = {}
    if config_file.exists():
        try:
            data = toml.load(config_file)
        except (toml.TomlDecodeError, OSError) as exc:
            raise SettingsError(f"Invalid settings file {config_file}: {exc}") from exc
        logger.debug("Loaded settings from %s", config_file)

    settings = TemplateSettings.from_dict(data.get("templates"))

    overrides: dict[str, Any] = {}
    if registry := os.environ.get("ROD_NPM_REGISTRY"):
        overrides["registry"] = registry
    if package_name := os.environ.get("ROD_TEMPLATE_PACKAGE"):
        overrides["package_name"] = package_name
    if overrides:
        settings = TemplateSettings.from_dict({**_as_dict(settings), **overrides})
    return settings


def _as_dict(settings: TemplateSettings) -> dict[str, Any]:
    return {
        "registry": settings.registry,
        "package_name": settings.package_name,
        "version": settings.version,
    }


__all__ = [
    "SettingsError",
    "TemplateSettings",
    "load_settings",
    "settings_path",
]
