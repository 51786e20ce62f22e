"""Typed errors raised while resolving configuration objects."""

from __future__ import annotations


class ResolutionError(RuntimeError):
    """Base error for property resolution, substitution and rendering."""


class MissingTemplateKeyError(ResolutionError):
    """Raised when a template placeholder references an undefined property or env var."""

    def __init__(self, key: str, *, template_name: str | None = None) -> None:
        self.key = key
        self.template_name = template_name
        message = f'map has no entry for key "{key}"'
        if template_name:
            message = f"template {template_name!r}: {message}"
        super().__init__(message)


class InvalidTemplateError(ResolutionError, ValueError):
    """Raised when a template cannot be compiled."""

    def __init__(self, template_name: str, detail: str) -> None:
        self.template_name = template_name
        super().__init__(f"invalid template {template_name!r}: {detail}")


class ReservedPropertyError(ResolutionError, ValueError):
    """Raised when a property uses a name the template namespace reserves."""

    def __init__(self, property_name: str, *, template_name: str | None = None) -> None:
        self.property_name = property_name
        self.template_name = template_name
        message = f"property name {property_name!r} is reserved for environment variables"
        if template_name:
            message = f"template {template_name!r}: {message}"
        super().__init__(message)


class MissingRequiredPropertyError(ResolutionError, LookupError):
    """Raised when a required directive property is defined at no applicable scope."""

    def __init__(self, config_path: str, property_name: str) -> None:
        self.config_path = config_path
        self.property_name = property_name
        super().__init__(
            f"could not find {property_name} property in config {config_path}, "
            f"please make sure `{property_name}` is defined"
        )


class UnresolvableReferenceError(ResolutionError, LookupError):
    """Raised when a reference expression points at no deployed entity."""

    def __init__(self, reference: str, *, detail: str | None = None) -> None:
        self.reference = reference
        message = f"no deployed entity found for dependency {reference!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class SelfReferenceError(ResolutionError, ValueError):
    """Raised when a configuration references its own deployed identity."""

    def __init__(self, config_path: str) -> None:
        self.config_path = config_path
        super().__init__(f"config {config_path} references itself")


class MissingTokenError(ResolutionError, LookupError):
    """Raised when an environment's API token variable is not set."""

    def __init__(self, environment_id: str, token_name: str) -> None:
        self.environment_id = environment_id
        self.token_name = token_name
        super().__init__(
            f"no token found for environment {environment_id!r}: "
            f"environment variable {token_name!r} is not set"
        )


__all__ = [
    "InvalidTemplateError",
    "MissingRequiredPropertyError",
    "MissingTemplateKeyError",
    "MissingTokenError",
    "ReservedPropertyError",
    "ResolutionError",
    "SelfReferenceError",
    "UnresolvableReferenceError",
]
