"""Exception hierarchy for the template generation pipeline."""

from __future__ import annotations

from typing import Iterable


class TemplateGenerationError(Exception):
    """Base exception for template generation errors."""
    pass


class ConfigurationInvalid(TemplateGenerationError):
    """Generation config failed validation; nothing was written."""

    def __init__(self, problems: Iterable[str]):
        self.problems = list(problems)
        super().__init__(f"Invalid configuration: {', '.join(self.problems)}")


class TemplateNotFound(TemplateGenerationError):
    """Requested template is missing from the installed template package."""

    def __init__(self, template_name: str, available: Iterable[str]):
        self.template_name = template_name
        self.available = sorted(available)
        listing = ", ".join(self.available) if self.available else "(none)"
        super().__init__(
            f"Template '{template_name}' not found. Available templates: {listing}"
        )


class PackageInstallFailed(TemplateGenerationError):
    """The package installer failed or timed out.

    ``raw_output`` is the installer's own text, passed through unmodified.
    """

    def __init__(self, package_spec: str, raw_output: str, timed_out: bool = False):
        self.package_spec = package_spec
        self.raw_output = raw_output
        self.timed_out = timed_out
        super().__init__(f"Failed to install template package globally: {raw_output}")


class GenerationAborted(TemplateGenerationError):
    """Catch-all for unexpected failures while writing the project."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Template generation failed: {reason}")


__all__ = [
    "ConfigurationInvalid",
    "GenerationAborted",
    "PackageInstallFailed",
    "TemplateGenerationError",
    "TemplateNotFound",
]
