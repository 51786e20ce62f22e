"""Domain value objects: environments, API descriptors, deployed entities, scope keys."""

from monaco_config.domain.api import Api, DeployedEntity, deployed_entity_from_payload
from monaco_config.domain.environment import Environment
from monaco_config.domain.scope import ScopeKey, belongs_to_environment, scope_keys

__all__ = [
    "Api",
    "DeployedEntity",
    "Environment",
    "ScopeKey",
    "belongs_to_environment",
    "deployed_entity_from_payload",
    "scope_keys",
]
