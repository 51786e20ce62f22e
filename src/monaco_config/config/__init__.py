"""
monaco-config settings package public API.

File: src/monaco_config/config/__init__.py

Purpose
- Export settings loading/validation entrypoints and public error types.

Functional requirements
- Support loading from ``monaco.toml`` + ``MONACO_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from monaco_config.config.loader import (
    ConfigLoadError,
    dump_effective_settings,
    load_settings,
    normalize_paths,
)
from monaco_config.config.schema import (
    DEFAULT_SETTINGS,
    PATH_FIELDS,
    ConfigValidationError,
    ConfigValidationIssue,
    ConfigValidationResult,
    EngineSettings,
    SettingsSchemaVersion,
    assert_valid_settings,
    default_settings,
    merge_settings,
    migration_guidance,
    redact_settings,
    validate_settings,
)

__all__ = [
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "DEFAULT_SETTINGS",
    "EngineSettings",
    "PATH_FIELDS",
    "SettingsSchemaVersion",
    "assert_valid_settings",
    "default_settings",
    "dump_effective_settings",
    "load_settings",
    "merge_settings",
    "migration_guidance",
    "normalize_paths",
    "redact_settings",
    "validate_settings",
]
