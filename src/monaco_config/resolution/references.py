"""
monaco-config — cross-configuration reference substitution.

File: src/monaco_config/resolution/references.py

Purpose
- Recognize property values of the form ``[/]<path>.<id|name>`` and rewrite
  them to the runtime id or name of an already deployed entity.

Functional requirements
- Parsing is pure and needs no lookup table.
- Only values whose path is present in the deployed-entity table are rewritten;
  everything else passes through unchanged.
- Strict mode turns unresolved qualified paths (``project/api/id``) into
  ``UnresolvableReferenceError``; bare ids always pass through.

Non-functional requirements
- Absolute (leading separator) and relative references into the same project
  resolve identically, on every platform.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from monaco_config.constants import PATH_SEPARATOR, REFERENCE_ATTRIBUTES
from monaco_config.domain.api import DeployedEntity
from monaco_config.errors import UnresolvableReferenceError
from monaco_config.resolution.properties import ScopedProperties

logger = logging.getLogger(__name__)

DeployedEntities = Mapping[str, DeployedEntity]

_REFERENCE_RE: Final[re.Pattern[str]] = re.compile(
    r"^(?P<path>.+)\.(?P<attribute>" + "|".join(REFERENCE_ATTRIBUTES) + r")$",
    re.DOTALL,
)
_LEADING_SEPARATORS: Final[tuple[str, ...]] = (
    (PATH_SEPARATOR,) if os.sep == PATH_SEPARATOR else (PATH_SEPARATOR, os.sep)
)


@dataclass(frozen=True, slots=True)
class ReferenceExpression:
    """Parsed ``<path>.<attribute>`` reference with the separator prefix removed."""

    raw: str
    path: str
    attribute: str

    @property
    def is_qualified(self) -> bool:
        """``True`` for ``project/api/id`` paths, ``False`` for bare config ids."""
        return PATH_SEPARATOR in self.path

    def target_path(self, *, project: str = "", api_name: str = "") -> str:
        """Project-relative path of the referenced config.

        Bare ids are qualified with the referencing config's project and API.
        """
        if self.is_qualified or not project or not api_name:
            return self.path
        return PATH_SEPARATOR.join((project, api_name, self.path))


def parse_reference(value: object) -> ReferenceExpression | None:
    """Parse ``value`` as a reference expression; ``None`` when it does not have the shape."""

    if not isinstance(value, str):
        return None

    match = _REFERENCE_RE.match(value)
    if match is None:
        return None

    path = match.group("path")
    for separator in _LEADING_SEPARATORS:
        if path.startswith(separator):
            path = path[len(separator) :]
            break
    if os.sep != PATH_SEPARATOR:
        path = path.replace(os.sep, PATH_SEPARATOR)

    if not path or path.endswith(PATH_SEPARATOR):
        return None

    return ReferenceExpression(raw=value, path=path, attribute=match.group("attribute"))


def resolve_reference(
    expression: ReferenceExpression,
    deployed_entities: DeployedEntities,
    *,
    project: str = "",
    api_name: str = "",
) -> str:
    """Return the referenced entity's id or name or raise ``UnresolvableReferenceError``."""

    candidates = [expression.path]
    qualified = expression.target_path(project=project, api_name=api_name)
    if qualified != expression.path:
        candidates.append(qualified)

    for candidate in candidates:
        entity = deployed_entities.get(candidate)
        if entity is None:
            continue
        if expression.attribute == "id":
            return entity.id
        return entity.name

    raise UnresolvableReferenceError(expression.raw, detail=f"looked up {', '.join(candidates)}")


def parse_dependency(
    value: str,
    deployed_entities: DeployedEntities,
    *,
    project: str = "",
    api_name: str = "",
) -> str:
    """Resolve a value that is required to be a reference.

    Unlike :func:`replace_dependencies`, a value that is not reference-shaped
    or that points at no deployed entity is an error.
    """

    expression = parse_reference(value)
    if expression is None:
        raise UnresolvableReferenceError(value, detail="not a <path>.id or <path>.name expression")
    return resolve_reference(expression, deployed_entities, project=project, api_name=api_name)


def replace_dependencies(
    properties: ScopedProperties,
    deployed_entities: DeployedEntities,
    *,
    project: str = "",
    api_name: str = "",
    strict: bool = False,
) -> dict[str, dict[str, str]]:
    """Return a copy of ``properties`` with every resolvable reference substituted."""

    replaced: dict[str, dict[str, str]] = {}
    for scope_key in sorted(properties):
        scope: dict[str, str] = {}
        for name, value in properties[scope_key].items():
            scope[name] = _substitute(
                value,
                deployed_entities,
                project=project,
                api_name=api_name,
                strict=strict,
            )
        replaced[scope_key] = scope
    return replaced


def _substitute(
    value: str,
    deployed_entities: DeployedEntities,
    *,
    project: str,
    api_name: str,
    strict: bool,
) -> str:
    expression = parse_reference(value)
    if expression is None:
        return value

    try:
        resolved = resolve_reference(
            expression, deployed_entities, project=project, api_name=api_name
        )
    except UnresolvableReferenceError:
        if strict and expression.is_qualified:
            raise
        logger.debug("value %r looks like a reference but matches no deployed entity", value)
        return value

    logger.debug(
        "substituted reference", extra={"reference": value, "attribute": expression.attribute}
    )
    return resolved


__all__ = [
    "DeployedEntities",
    "ReferenceExpression",
    "parse_dependency",
    "parse_reference",
    "replace_dependencies",
    "resolve_reference",
]
