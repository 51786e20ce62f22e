"""Deployment environment value object."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from monaco_config.errors import MissingTokenError


@dataclass(frozen=True, slots=True)
class Environment:
    """One target tenant of the monitoring platform.

    ``group`` is shared by environments that receive the same group-scoped
    overrides; an empty string means "no group". ``token_name`` names the
    process environment variable holding the API token, never the token itself.
    """

    id: str
    name: str = ""
    group: str | None = None
    url: str = ""
    token_name: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("environment id must be a non-empty string")
        object.__setattr__(self, "id", self.id.strip())
        group = self.group.strip() if isinstance(self.group, str) else None
        object.__setattr__(self, "group", group or None)
        object.__setattr__(self, "name", self.name or self.id)
        object.__setattr__(self, "url", self.url.rstrip("/"))

    def token(self, environ: Mapping[str, str] | None = None) -> str:
        """Return the API token from ``token_name`` or raise ``MissingTokenError``."""

        env_map = os.environ if environ is None else environ
        value = env_map.get(self.token_name, "") if self.token_name else ""
        if not value.strip():
            raise MissingTokenError(self.id, self.token_name)
        return value.strip()


__all__ = ["Environment"]
