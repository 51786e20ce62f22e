"""Monitored-entity id recognition."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Final

from monaco_config.constants import ME_ID_PATTERN
from monaco_config.domain.scope import belongs_to_environment

if TYPE_CHECKING:
    from monaco_config.domain.environment import Environment

_ME_ID_RE: Final[re.Pattern[str]] = re.compile(ME_ID_PATTERN)


def is_me_id(value: object) -> bool:
    """``HOST_GROUP-95BEC188F318D09C`` style ids: type tag, dash, 16 uppercase hex chars."""
    return isinstance(value, str) and _ME_ID_RE.fullmatch(value) is not None


def me_ids_of_environment(
    properties: Mapping[str, Mapping[str, str]],
    environment: Environment,
) -> dict[str, dict[str, str]]:
    """Return the monitored-entity id properties of ``environment``'s scopes.

    Base and group scopes and scopes of other environments are skipped;
    scopes without a matching value are omitted.
    """

    result: dict[str, dict[str, str]] = {}
    for scope_key in sorted(properties):
        if not belongs_to_environment(scope_key, environment):
            continue
        matches = {
            name: value for name, value in properties[scope_key].items() if is_me_id(value)
        }
        if matches:
            result[scope_key] = matches
    return result


__all__ = ["is_me_id", "me_ids_of_environment"]
