"""
monaco-config — payload template rendering.

File: src/monaco_config/resolution/templates.py

Purpose
- Render configuration templates written in the ``{{.name}}`` placeholder
  dialect against an effective property map and the process environment
  (``{{ .Env.NAME }}``).

Functional requirements
- A placeholder naming an undefined property or environment variable fails
  with ``MissingTemplateKeyError`` naming the key; there is no empty fallback.
- Rendering is deterministic for the same template, properties and environ.

Non-functional requirements
- Templates are compiled once per ``Template`` instance.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, UndefinedError, meta, nodes

from monaco_config.constants import ENV_NAMESPACE
from monaco_config.errors import (
    InvalidTemplateError,
    MissingTemplateKeyError,
    ReservedPropertyError,
)

_ACTION_RE: Final[re.Pattern[str]] = re.compile(r"\{\{(.*?)\}\}", re.DOTALL)
_ENV_FIELD_RE: Final[re.Pattern[str]] = re.compile(
    r"(^|[\s(|,])\." + ENV_NAMESPACE + r"\.([A-Za-z_][A-Za-z0-9_]*)"
)
_FIELD_RE: Final[re.Pattern[str]] = re.compile(r"(^|[\s(|,])\.([A-Za-z_][A-Za-z0-9_]*)")
_UNDEFINED_NAME_RE: Final[re.Pattern[str]] = re.compile(
    r"'([^']+)' is undefined|has no attribute '([^']+)'"
)

# Payload text may contain "{%" or "{#" (URL-encoded JSON, markdown anchors);
# only "{{ }}" actions are template syntax.
_ENVIRONMENT: Final[Environment] = Environment(
    block_start_string="\x00{%",
    block_end_string="%}\x00",
    comment_start_string="\x00{#",
    comment_end_string="#}\x00",
    line_statement_prefix=None,
    line_comment_prefix=None,
    undefined=StrictUndefined,
    autoescape=False,
    trim_blocks=False,
    lstrip_blocks=False,
    newline_sequence="\n",
    keep_trailing_newline=True,
)


def translate_placeholders(source: str) -> str:
    """Rewrite ``{{ .field }}`` actions into jinja2 expressions (``{{ field }}``).

    ``.Env.NAME`` becomes an item lookup so variable names never resolve to
    mapping methods.
    """

    def _rewrite(match: re.Match[str]) -> str:
        action = _ENV_FIELD_RE.sub(r"\1" + ENV_NAMESPACE + r'["\2"]', match.group(1))
        return "{{" + _FIELD_RE.sub(r"\1\2", action) + "}}"

    return _ACTION_RE.sub(_rewrite, source)


class Template:
    """Compiled configuration template."""

    __slots__ = ("_name", "_source", "_compiled", "_properties", "_env_vars")

    def __init__(self, name: str, source: str) -> None:
        self._name = name
        self._source = source
        translated = translate_placeholders(source)
        try:
            parsed = _ENVIRONMENT.parse(translated)
            self._compiled = _ENVIRONMENT.from_string(translated)
        except TemplateSyntaxError as exc:
            raise InvalidTemplateError(name, str(exc)) from exc

        undeclared = meta.find_undeclared_variables(parsed)
        self._properties = tuple(sorted(undeclared - {ENV_NAMESPACE}))
        env_vars: set[str] = set()
        for node in parsed.find_all(nodes.Getitem):
            if (
                isinstance(node.node, nodes.Name)
                and node.node.name == ENV_NAMESPACE
                and isinstance(node.arg, nodes.Const)
                and isinstance(node.arg.value, str)
            ):
                env_vars.add(node.arg.value)
        self._env_vars = tuple(sorted(env_vars))

    @classmethod
    def from_file(cls, path: str | Path, *, name: str | None = None) -> Template:
        """Load a template file as UTF-8."""

        template_path = Path(path)
        return cls(name or template_path.name, template_path.read_text(encoding="utf-8"))

    @property
    def name(self) -> str:
        return self._name

    @property
    def source(self) -> str:
        return self._source

    @property
    def referenced_properties(self) -> tuple[str, ...]:
        """Property names used by the template, sorted."""
        return self._properties

    @property
    def referenced_env_vars(self) -> tuple[str, ...]:
        """Environment variable names used by the template, sorted."""
        return self._env_vars

    def render(
        self,
        properties: Mapping[str, str],
        environ: Mapping[str, str] | None = None,
    ) -> str:
        """Render with ``properties`` and ``environ`` (defaults to ``os.environ``)."""

        if ENV_NAMESPACE in properties:
            raise ReservedPropertyError(ENV_NAMESPACE, template_name=self._name)
        env_map = dict(os.environ if environ is None else environ)

        for key in self._properties:
            if key not in properties:
                raise MissingTemplateKeyError(key, template_name=self._name)
        for key in self._env_vars:
            if key not in env_map:
                raise MissingTemplateKeyError(key, template_name=self._name)

        context: dict[str, object] = dict(properties)
        context[ENV_NAMESPACE] = env_map
        try:
            return self._compiled.render(context)
        except UndefinedError as exc:
            raise MissingTemplateKeyError(
                _undefined_name(exc), template_name=self._name
            ) from exc

    def __repr__(self) -> str:
        return f"Template(name={self._name!r})"


def render(
    template: Template,
    properties: Mapping[str, str],
    environ: Mapping[str, str] | None = None,
) -> str:
    """Render ``template`` against an effective property map."""

    return template.render(properties, environ)


def _undefined_name(exc: UndefinedError) -> str:
    message = str(exc)
    match = _UNDEFINED_NAME_RE.search(message)
    if match is None:
        return message
    return match.group(1) or match.group(2)


__all__ = ["Template", "render", "translate_placeholders"]
