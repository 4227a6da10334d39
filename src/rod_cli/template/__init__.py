"""Template generation pipeline: resolve, materialize, render, adapt."""

from .exceptions import (
    ConfigurationInvalid,
    GenerationAborted,
    PackageInstallFailed,
    TemplateGenerationError,
    TemplateNotFound,
)
from .generator import TemplateGenerator, calculate_total_size
from .models import (
    AIAssistant,
    CommandFile,
    ExternalPackageDescriptor,
    GenerationConfig,
    GenerationResult,
    ScriptType,
    TemplateInstallResult,
    WorkflowMode,
    validate_config,
)
from .resolver import GlobalRootCache, TemplatePackageResolver

__all__ = [
    "AIAssistant",
    "CommandFile",
    "ConfigurationInvalid",
    "ExternalPackageDescriptor",
    "GenerationAborted",
    "GenerationConfig",
    "GenerationResult",
    "GlobalRootCache",
    "PackageInstallFailed",
    "ScriptType",
    "TemplateGenerationError",
    "TemplateGenerator",
    "TemplateInstallResult",
    "TemplateNotFound",
    "TemplatePackageResolver",
    "WorkflowMode",
    "calculate_total_size",
    "validate_config",
]
