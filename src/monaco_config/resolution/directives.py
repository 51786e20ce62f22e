"""
monaco-config — deployment directive resolution.

File: src/monaco_config/resolution/directives.py

Purpose
- Hierarchical lookup of the two control properties every configuration may
  carry: the skip-deployment flag and the object name.

Functional requirements
- Lookup order is environment, group, base; the first scope defining the
  property wins.
- A missing skip flag means "deploy"; only the exact string ``"true"`` means
  "skip".
- A missing object name is a ``MissingRequiredPropertyError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from monaco_config.constants import NAME_PARAMETER, SKIP_DEPLOYMENT_PARAMETER
from monaco_config.domain.scope import scope_keys
from monaco_config.errors import MissingRequiredPropertyError

if TYPE_CHECKING:
    from monaco_config.domain.environment import Environment


def lookup_directive(
    config_id: str,
    properties: Mapping[str, Mapping[str, str]],
    environment: Environment,
    parameter: str,
) -> str | None:
    """Return the most specific value of ``parameter`` or ``None`` when undefined."""

    for key in reversed(scope_keys(config_id, environment)):
        scope = properties.get(str(key))
        if scope is not None and parameter in scope:
            return scope[parameter]
    return None


def is_skip_deployment(
    config_id: str,
    properties: Mapping[str, Mapping[str, str]],
    environment: Environment,
    *,
    parameter: str = SKIP_DEPLOYMENT_PARAMETER,
) -> bool:
    """Return whether deployment of ``config_id`` to ``environment`` is skipped."""

    value = lookup_directive(config_id, properties, environment, parameter)
    if value is None:
        return False
    return value == "true"


def object_name(
    config_path: str,
    resolved: Mapping[str, str],
    *,
    parameter: str = NAME_PARAMETER,
) -> str:
    """Return the name property of an already resolved property map.

    ``config_path`` is the ``project/api/id`` path used in the error message.
    """

    value = resolved.get(parameter)
    if value is None:
        raise MissingRequiredPropertyError(config_path, parameter)
    return value


__all__ = ["is_skip_deployment", "lookup_directive", "object_name"]
