"""Stable constants shared across the resolution engine."""

from __future__ import annotations

from typing import Final

# Directive property names looked up hierarchically per environment.
SKIP_DEPLOYMENT_PARAMETER: Final[str] = "skipDeployment"
NAME_PARAMETER: Final[str] = "name"

# Scope keys are "<configId>[.<groupId>|.<environmentId>]".
SCOPE_SEPARATOR: Final[str] = "."

# Reference expressions and deployed-entity keys are "/"-joined paths.
PATH_SEPARATOR: Final[str] = "/"
REFERENCE_ATTRIBUTES: Final[tuple[str, ...]] = ("id", "name")

# Monitored-entity ids: type tag, dash, 16 uppercase hex characters.
ME_ID_PATTERN: Final[str] = r"^[A-Z_]+-[0-9A-F]{16}$"

# Template namespace for process environment variables ({{ .Env.NAME }}).
ENV_NAMESPACE: Final[str] = "Env"

# Settings.
SETTINGS_SCHEMA_VERSION: Final[int] = 1
DEFAULT_SETTINGS_FILE: Final[str] = "monaco.toml"
ENV_PREFIX: Final[str] = "MONACO_"

__all__ = [
    "DEFAULT_SETTINGS_FILE",
    "ENV_NAMESPACE",
    "ENV_PREFIX",
    "ME_ID_PATTERN",
    "NAME_PARAMETER",
    "PATH_SEPARATOR",
    "REFERENCE_ATTRIBUTES",
    "SCOPE_SEPARATOR",
    "SETTINGS_SCHEMA_VERSION",
    "SKIP_DEPLOYMENT_PARAMETER",
]
