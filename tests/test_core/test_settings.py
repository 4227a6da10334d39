from __future__ import annotations

from pathlib import Path

import pytest

from rod_cli.core.config import DEFAULT_NPM_REGISTRY, DEFAULT_TEMPLATE_PACKAGE
from rod_cli.core.settings import SettingsError, TemplateSettings, load_settings, settings_path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ROD_NPM_REGISTRY", raising=False)
    monkeypatch.delenv("ROD_TEMPLATE_PACKAGE", raising=False)


def test_defaults_without_config_file(tmp_path: Path) -> None:
    settings = load_settings(tmp_path)

    assert settings == TemplateSettings()
    assert settings.registry == DEFAULT_NPM_REGISTRY
    assert settings.package_name == DEFAULT_TEMPLATE_PACKAGE


def test_reads_templates_section(tmp_path: Path) -> None:
    settings_path(tmp_path).write_text(
        '[templates]\nregistry = "https://npm.example.com"\nversion = "2.1.0"\n',
        encoding="utf-8",
    )

    settings = load_settings(tmp_path)

    assert settings.registry == "https://npm.example.com"
    assert settings.version == "2.1.0"
    assert settings.package_name == DEFAULT_TEMPLATE_PACKAGE


def test_install_timeout_is_not_configurable(tmp_path: Path) -> None:
    settings_path(tmp_path).write_text("[templates]\ninstall_timeout = 5\n", encoding="utf-8")

    settings = load_settings(tmp_path)

    assert settings == TemplateSettings()
    assert not hasattr(settings, "install_timeout")


def test_environment_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    settings_path(tmp_path).write_text('[templates]\nregistry = "https://file.example.com"\n', encoding="utf-8")
    monkeypatch.setenv("ROD_NPM_REGISTRY", "https://env.example.com")
    monkeypatch.setenv("ROD_TEMPLATE_PACKAGE", "@acme/templates")

    settings = load_settings(tmp_path)

    assert settings.registry == "https://env.example.com"
    assert settings.package_name == "@acme/templates"


def test_malformed_file_raises(tmp_path: Path) -> None:
    settings_path(tmp_path).write_text("[templates\nregistry = ", encoding="utf-8")

    with pytest.raises(SettingsError, match="Invalid settings file"):
        load_settings(tmp_path)
