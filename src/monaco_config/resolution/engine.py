"""
monaco-config — settings-driven resolution entrypoint.

File: src/monaco_config/resolution/engine.py

Purpose
- Turn one ``Config`` plus one ``Environment`` into a ``ResolvedConfig``:
  skip decision, object name and rendered payload.

Functional requirements
- Directive parameter names and reference strictness come from the
  ``[resolution]`` settings section.
- A skipped configuration is neither resolved nor rendered.
- Every resolution logs inside a correlation scope naming the config path
  and environment id.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from monaco_config.config.schema import assert_valid_settings, default_settings, merge_settings
from monaco_config.observability.logging import correlation_scope
from monaco_config.resolution import directives
from monaco_config.resolution.references import DeployedEntities

if TYPE_CHECKING:
    from monaco_config.domain.environment import Environment
    from monaco_config.resolution.configuration import Config

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedConfig:
    """Outcome of resolving one configuration for one environment."""

    config_path: str
    environment_id: str
    object_name: str | None
    payload: str | None
    skip: bool = False


class ResolutionEngine:
    """Resolves configurations with parameters taken from engine settings."""

    def __init__(
        self,
        settings: Mapping[str, object] | None = None,
        environ: Mapping[str, str] | None = None,
        *,
        logger: Any | None = None,
    ) -> None:
        merged = merge_settings(default_settings(), settings or {})
        validated = assert_valid_settings(merged)
        resolution = validated["resolution"]
        self._skip_parameter: str = resolution["skip_parameter"]
        self._name_parameter: str = resolution["name_parameter"]
        self._strict: bool = resolution["strict_references"]
        self._environ = None if environ is None else dict(environ)
        self._decisions = logger if logger is not None else structlog.get_logger(__name__)

    @property
    def skip_parameter(self) -> str:
        return self._skip_parameter

    @property
    def name_parameter(self) -> str:
        return self._name_parameter

    @property
    def strict_references(self) -> bool:
        return self._strict

    def resolve(
        self,
        config: Config,
        environment: Environment,
        deployed_entities: DeployedEntities,
    ) -> ResolvedConfig:
        config_path = config.full_path
        with correlation_scope(config_path=config_path, environment_id=environment.id):
            if config.is_skip_deployment(environment, parameter=self._skip_parameter):
                self._decisions.info(
                    "resolution_decision",
                    action="skip",
                    config_path=config_path,
                    environment_id=environment.id,
                )
                return ResolvedConfig(
                    config_path=config_path,
                    environment_id=environment.id,
                    object_name=None,
                    payload=None,
                    skip=True,
                )

            resolved = config.resolve_properties(
                environment, deployed_entities, strict=self._strict
            )
            name = directives.object_name(config_path, resolved, parameter=self._name_parameter)
            payload = config.template.render(resolved, self._environ)
            logger.debug(
                "resolved %s for %s",
                config_path,
                environment.id,
                extra={"object_name": name, "property_count": len(resolved)},
            )
            self._decisions.info(
                "resolution_decision",
                action="deploy",
                config_path=config_path,
                environment_id=environment.id,
                object_name=name,
            )
            return ResolvedConfig(
                config_path=config_path,
                environment_id=environment.id,
                object_name=name,
                payload=payload,
            )

    def resolve_all(
        self,
        configs: list[Config],
        environment: Environment,
        deployed_entities: DeployedEntities,
    ) -> list[ResolvedConfig]:
        """Resolve ``configs`` in the given order against one environment."""

        return [self.resolve(config, environment, deployed_entities) for config in configs]


__all__ = ["ResolutionEngine", "ResolvedConfig"]
