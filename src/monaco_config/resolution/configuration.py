"""Immutable configuration object and its per-environment operations."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from monaco_config.constants import NAME_PARAMETER, PATH_SEPARATOR, SKIP_DEPLOYMENT_PARAMETER
from monaco_config.resolution import dependencies, directives, entities
from monaco_config.resolution.properties import copy_properties, resolve_scoped_properties
from monaco_config.resolution.references import DeployedEntities, replace_dependencies

if TYPE_CHECKING:
    from monaco_config.domain.api import Api
    from monaco_config.domain.environment import Environment
    from monaco_config.resolution.templates import Template


class Config:
    """A named template plus scoped properties, bound to one target API.

    ``properties`` maps scope keys (``"<id>"``, ``"<id>.<group>"``,
    ``"<id>.<environment>"``) to raw string properties. The mapping is copied
    on construction and exposed read-only.
    """

    __slots__ = ("_id", "_project", "_template", "_properties", "_api", "_file_name")

    def __init__(
        self,
        id: str,
        project: str,
        template: Template,
        properties: Mapping[str, Mapping[str, str]],
        api: Api,
        file_name: str = "",
    ) -> None:
        if not id or not id.strip():
            raise ValueError("config id must be non-empty")
        self._id = id
        self._project = project.strip(PATH_SEPARATOR)
        self._template = template
        self._properties: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {
                key: MappingProxyType(scope)
                for key, scope in copy_properties(properties).items()
            }
        )
        self._api = api
        self._file_name = file_name

    @property
    def id(self) -> str:
        return self._id

    @property
    def project(self) -> str:
        return self._project

    @property
    def template(self) -> Template:
        return self._template

    @property
    def api(self) -> Api:
        return self._api

    @property
    def type(self) -> str:
        return self._api.name

    @property
    def file_name(self) -> str:
        return self._file_name

    @property
    def properties(self) -> Mapping[str, Mapping[str, str]]:
        """Read-only view of the raw scoped properties."""
        return self._properties

    @property
    def full_path(self) -> str:
        """``project/api/id``; the deployed-entity key and dependency target of this config."""
        return PATH_SEPARATOR.join(
            part for part in (self._project, self._api.name, self._id) if part
        )

    def get_properties(self) -> dict[str, dict[str, str]]:
        """Mutable deep copy of the raw scoped properties."""
        return copy_properties(self._properties)

    def resolve_properties(
        self,
        environment: Environment,
        deployed_entities: DeployedEntities,
        *,
        strict: bool = False,
    ) -> dict[str, str]:
        """Effective properties for ``environment`` with references substituted."""

        scoped = resolve_scoped_properties(self._id, self._properties, environment)
        replaced = replace_dependencies(
            scoped,
            deployed_entities,
            project=self._project,
            api_name=self._api.name,
            strict=strict,
        )
        return replaced[self._id]

    def get_config_for_environment(
        self,
        environment: Environment,
        deployed_entities: DeployedEntities,
        *,
        environ: Mapping[str, str] | None = None,
        strict: bool = False,
    ) -> str:
        """Render the deployable payload for ``environment``."""

        resolved = self.resolve_properties(environment, deployed_entities, strict=strict)
        return self._template.render(resolved, environ)

    def get_object_name_for_environment(
        self,
        environment: Environment,
        deployed_entities: DeployedEntities,
        *,
        parameter: str = NAME_PARAMETER,
        strict: bool = False,
    ) -> str:
        resolved = self.resolve_properties(environment, deployed_entities, strict=strict)
        return directives.object_name(self.full_path, resolved, parameter=parameter)

    def is_skip_deployment(
        self,
        environment: Environment,
        *,
        parameter: str = SKIP_DEPLOYMENT_PARAMETER,
    ) -> bool:
        return directives.is_skip_deployment(
            self._id, self._properties, environment, parameter=parameter
        )

    def has_dependency_on(self, other: Config) -> bool:
        return dependencies.has_dependency_on(self, other)

    def get_me_ids_of_environment(self, environment: Environment) -> dict[str, dict[str, str]]:
        return entities.me_ids_of_environment(self._properties, environment)

    def __repr__(self) -> str:
        return f"Config(path={self.full_path!r}, file_name={self._file_name!r})"


__all__ = ["Config"]
