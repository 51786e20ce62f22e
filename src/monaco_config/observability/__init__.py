"""Observability helpers: structured JSON-lines logging with correlation scopes."""

from monaco_config.observability.logging import (
    LOG_FILENAME,
    REDACTED,
    ROOT_LOGGER_NAME,
    CorrelationFilter,
    JsonLineFormatter,
    correlation_scope,
    default_log_redactor,
    get_correlation_context,
    log_path,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "LOG_FILENAME",
    "REDACTED",
    "ROOT_LOGGER_NAME",
    "CorrelationFilter",
    "JsonLineFormatter",
    "correlation_scope",
    "default_log_redactor",
    "get_correlation_context",
    "log_path",
    "setup_logging",
    "shutdown_logging",
]
