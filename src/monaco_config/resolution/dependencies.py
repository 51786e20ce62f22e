"""Static dependency detection between configurations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from monaco_config.errors import SelfReferenceError
from monaco_config.resolution.references import parse_reference

if TYPE_CHECKING:
    from monaco_config.resolution.configuration import Config


def referenced_paths(config: Config) -> tuple[str, ...]:
    """Project-relative paths of every config referenced by ``config``'s raw properties."""

    paths: set[str] = set()
    properties = config.properties
    for scope_key in properties:
        for value in properties[scope_key].values():
            expression = parse_reference(value)
            if expression is None:
                continue
            paths.add(expression.target_path(project=config.project, api_name=config.api.name))
    return tuple(sorted(paths))


def has_dependency_on(config: Config, other: Config) -> bool:
    """Return whether ``config`` references ``other`` in any scope.

    Self-references are reported as ``True``; callers building a graph must
    reject them (see :func:`dependency_edges`).
    """

    return other.full_path in referenced_paths(config)


def dependency_edges(configs: Iterable[Config]) -> Iterator[tuple[str, str]]:
    """Yield ``(dependency, dependent)`` path pairs across ``configs``.

    Edges point from the referenced config to the one referencing it, so a
    scheduler deploys the edge source first. Raises ``SelfReferenceError``
    for a config that references itself.
    """

    ordered = sorted(configs, key=lambda item: item.full_path)
    for dependent in ordered:
        targets = set(referenced_paths(dependent))
        if dependent.full_path in targets:
            raise SelfReferenceError(dependent.full_path)
        for dependency in ordered:
            if dependency is dependent:
                continue
            if dependency.full_path in targets:
                yield dependency.full_path, dependent.full_path


__all__ = ["dependency_edges", "has_dependency_on", "referenced_paths"]
