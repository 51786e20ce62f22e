"""Scope keys for hierarchical property lookup.

A configuration's properties are grouped under three kinds of scope key:

- ``"<configId>"``: base scope
- ``"<configId>.<groupId>"``: environment-group scope
- ``"<configId>.<environmentId>"``: environment scope

Precedence, highest first: environment > group > base.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from monaco_config.constants import SCOPE_SEPARATOR

if TYPE_CHECKING:
    from monaco_config.domain.environment import Environment


@dataclass(frozen=True, slots=True)
class ScopeKey:
    """Structured scope key; at most one of ``group_id``/``environment_id`` is set."""

    config_id: str
    group_id: str | None = None
    environment_id: str | None = None

    def __post_init__(self) -> None:
        if not self.config_id:
            raise ValueError("scope key requires a config id")
        if self.group_id is not None and self.environment_id is not None:
            raise ValueError("scope key cannot be both group and environment scoped")

    @property
    def qualifier(self) -> str | None:
        return self.environment_id if self.environment_id is not None else self.group_id

    def __str__(self) -> str:
        qualifier = self.qualifier
        if qualifier is None:
            return self.config_id
        return f"{self.config_id}{SCOPE_SEPARATOR}{qualifier}"


def scope_keys(config_id: str, environment: Environment) -> tuple[ScopeKey, ...]:
    """Return the applicable scope keys in ascending precedence (base, group, environment)."""

    keys: list[ScopeKey] = [ScopeKey(config_id)]
    if environment.group:
        keys.append(ScopeKey(config_id, group_id=environment.group))
    keys.append(ScopeKey(config_id, environment_id=environment.id))
    return tuple(keys)


def belongs_to_environment(scope_key: str, environment: Environment) -> bool:
    """Return whether a raw scope key string is qualified with ``environment``'s id."""

    return scope_key.endswith(f"{SCOPE_SEPARATOR}{environment.id}")


__all__ = ["ScopeKey", "belongs_to_environment", "scope_keys"]
