"""Target API descriptors and deployed-entity records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Api:
    """Management API a configuration is deployed to. Passed through opaquely."""

    name: str
    rest_path: str

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("api name must be non-empty")


@dataclass(frozen=True, slots=True)
class DeployedEntity:
    """Result of a prior deployment, as returned by the management API."""

    id: str
    name: str = ""
    description: str = ""


def deployed_entity_from_payload(payload: Mapping[str, object]) -> DeployedEntity:
    """Build a ``DeployedEntity`` from an API response object (``id``/``name``/``description``)."""

    raw_id = payload.get("id")
    if not isinstance(raw_id, str) or not raw_id:
        raise ValueError("deployed entity payload requires a non-empty string 'id'")

    name = payload.get("name")
    description = payload.get("description")
    return DeployedEntity(
        id=raw_id,
        name=name if isinstance(name, str) else "",
        description=description if isinstance(description, str) else "",
    )


__all__ = ["Api", "DeployedEntity", "deployed_entity_from_payload"]
