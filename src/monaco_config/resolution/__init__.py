"""Property resolution, reference substitution and template rendering."""

from monaco_config.resolution.configuration import Config
from monaco_config.resolution.dependencies import (
    dependency_edges,
    has_dependency_on,
    referenced_paths,
)
from monaco_config.resolution.directives import is_skip_deployment, lookup_directive, object_name
from monaco_config.resolution.engine import ResolutionEngine, ResolvedConfig
from monaco_config.resolution.entities import is_me_id, me_ids_of_environment
from monaco_config.resolution.properties import (
    ScopedProperties,
    copy_properties,
    filter_properties,
    resolve_properties,
    resolve_scoped_properties,
)
from monaco_config.resolution.references import (
    DeployedEntities,
    ReferenceExpression,
    parse_dependency,
    parse_reference,
    replace_dependencies,
    resolve_reference,
)
from monaco_config.resolution.templates import Template, render, translate_placeholders

__all__ = [
    "Config",
    "DeployedEntities",
    "ReferenceExpression",
    "ResolutionEngine",
    "ResolvedConfig",
    "ScopedProperties",
    "Template",
    "copy_properties",
    "dependency_edges",
    "filter_properties",
    "has_dependency_on",
    "is_me_id",
    "is_skip_deployment",
    "lookup_directive",
    "me_ids_of_environment",
    "object_name",
    "parse_dependency",
    "parse_reference",
    "referenced_paths",
    "render",
    "replace_dependencies",
    "resolve_properties",
    "resolve_reference",
    "resolve_scoped_properties",
    "translate_placeholders",
]
