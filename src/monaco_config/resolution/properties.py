"""
monaco-config — scope-hierarchical property resolution.

File: src/monaco_config/resolution/properties.py

Purpose
- Merge the raw per-scope property maps of one configuration into the
  effective property map for a single environment.

Functional requirements
- Overlay order is base, then group (when the environment has one), then
  environment; a key present at a higher scope replaces the lower value.
- Scopes are merged per key, never wholesale.
- Inputs are never mutated; every call returns fresh dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from monaco_config.domain.scope import scope_keys

if TYPE_CHECKING:
    from monaco_config.domain.environment import Environment

ScopedProperties = Mapping[str, Mapping[str, str]]


def resolve_properties(
    config_id: str,
    properties: ScopedProperties,
    environment: Environment,
) -> dict[str, str]:
    """Return the effective property map of ``config_id`` for ``environment``."""

    merged: dict[str, str] = {}
    for key in scope_keys(config_id, environment):
        scope = properties.get(str(key))
        if scope is None:
            continue
        for name, value in scope.items():
            merged[name] = value
    return merged


def resolve_scoped_properties(
    config_id: str,
    properties: ScopedProperties,
    environment: Environment,
) -> dict[str, dict[str, str]]:
    """Return ``{config_id: effective}`` for code operating on scope-level structures."""

    return {config_id: resolve_properties(config_id, properties, environment)}


def filter_properties(
    scope_key_prefix: str, properties: ScopedProperties
) -> dict[str, dict[str, str]]:
    """Return the scopes whose key equals ``scope_key_prefix`` exactly."""

    return {
        key: dict(scope)
        for key, scope in properties.items()
        if key == scope_key_prefix
    }


def copy_properties(properties: ScopedProperties) -> dict[str, dict[str, str]]:
    """Deterministic two-level copy of a scoped property structure."""

    return {key: dict(properties[key]) for key in sorted(properties)}


__all__ = [
    "ScopedProperties",
    "copy_properties",
    "filter_properties",
    "resolve_properties",
    "resolve_scoped_properties",
]
