"""
monaco-config — structured logging for resolution runs.

File: src/monaco_config/observability/logging.py

Purpose
- Write one JSON object per log record to ``<log_dir>/<run_id>/monaco.jsonl``.
- Stamp every record with the active correlation fields (``run_id``,
  ``project``, ``config_path``, ``environment_id``).

Functional requirements
- API tokens never reach a sink: ``dt0c01.`` tokens, ``Api-Token`` headers,
  ``token=`` pairs and values under secret-looking keys are masked.
"""

from __future__ import annotations

import contextvars
import json
import logging
import re
import sys
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Final

LogRedactor = Callable[[Any], Any]

REDACTED: Final[str] = "***REDACTED***"
LOG_FILENAME: Final[str] = "monaco.jsonl"
ROOT_LOGGER_NAME: Final[str] = "monaco_config"

_HANDLER_NAME: Final[str] = "monaco_config.jsonl"
_SECRET_KEY_TERMS: Final[tuple[str, ...]] = (
    "token",
    "secret",
    "password",
    "authorization",
    "credential",
    "apikey",
    "api_key",
)
_TOKEN_ASSIGNMENT_RE: Final[re.Pattern[str]] = re.compile(
    r"(?i)\b(api[_-]?token|api[_-]?key|token|password|secret)(\s*[:=]\s*)[^\s,;\"']+"
)
_API_TOKEN_HEADER_RE: Final[re.Pattern[str]] = re.compile(r"(?i)\b(api-token)\s+[A-Za-z0-9._-]+")
_PLATFORM_TOKEN_RE: Final[re.Pattern[str]] = re.compile(
    r"\bdt0[a-z]\d{2}\.[A-Za-z0-9]{16,}(?:\.[A-Za-z0-9]{16,})?\b"
)
_RECORD_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName", "correlation"}

_CORRELATION: contextvars.ContextVar[tuple[tuple[str, str], ...]] = contextvars.ContextVar(
    "monaco_correlation", default=()
)


def get_correlation_context() -> dict[str, str]:
    """Return the correlation fields bound in the current context."""
    return dict(_CORRELATION.get())


@contextmanager
def correlation_scope(**fields: str | None) -> Iterator[None]:
    """Bind correlation fields for the duration of the block; ``None`` unbinds a field."""
    state = get_correlation_context()
    for key, value in fields.items():
        if value is None:
            state.pop(key, None)
            continue
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"correlation value for {key!r} must be a non-empty string")
        state[key] = value.strip()
    token = _CORRELATION.set(tuple(state.items()))
    try:
        yield
    finally:
        _CORRELATION.reset(token)


def default_log_redactor(value: Any) -> Any:
    """Mask API tokens in strings and values under secret-looking keys, recursively."""
    if isinstance(value, str):
        return _redact_text(value)
    if isinstance(value, Mapping):
        return {
            key: REDACTED if _is_secret_key(str(key)) else default_log_redactor(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [default_log_redactor(item) for item in value]
    return value


class CorrelationFilter(logging.Filter):
    """Attach the run id and the active correlation fields to each record."""

    def __init__(self, run_id: str) -> None:
        super().__init__()
        self._run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation = {"run_id": self._run_id, **get_correlation_context()}
        return True


class JsonLineFormatter(logging.Formatter):
    """Render a record as one sorted, redacted JSON object."""

    def __init__(self, redactor: LogRedactor = default_log_redactor) -> None:
        super().__init__()
        self._redactor = redactor

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        event: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": self._redactor(record.getMessage()),
        }
        event.update(getattr(record, "correlation", {}))

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
        }
        if extras:
            # Round-trip through JSON so the redactor only sees plain containers.
            plain = json.loads(json.dumps(extras, default=str))
            event["fields"] = self._redactor(plain)
        if record.exc_info:
            event["exception"] = self._redactor(self.formatException(record.exc_info))

        return json.dumps(event, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def log_path(log_dir: str | Path, run_id: str) -> Path:
    """Location of the JSON-lines file for ``run_id``."""
    return Path(log_dir) / run_id / LOG_FILENAME


def setup_logging(
    observability_settings: Mapping[str, object] | None = None,
    *,
    run_id: str,
    log_dir: str | Path | None = None,
    logger_name: str = ROOT_LOGGER_NAME,
) -> logging.Logger:
    """Attach the JSON-lines sinks described by the ``[observability]`` settings.

    Calling it again for the same logger replaces the previous sinks.
    """

    settings = dict(observability_settings or {})
    run = run_id.strip()
    if not run:
        raise ValueError("run_id must not be empty")
    level = _parse_level(settings.get("log_level", "INFO"))
    base_dir = log_dir if log_dir is not None else str(settings.get("log_dir", "logs"))
    path = log_path(base_dir, run)
    path.parent.mkdir(parents=True, exist_ok=True)

    redactor: LogRedactor = (
        default_log_redactor if settings.get("redact_secrets", True) else _keep
    )
    formatter = JsonLineFormatter(redactor)
    correlation = CorrelationFilter(run)

    handlers: list[logging.Handler] = [logging.FileHandler(path, encoding="utf-8")]
    if settings.get("log_to_stdout", False):
        handlers.append(logging.StreamHandler(sys.stdout))

    logger = logging.getLogger(logger_name)
    shutdown_logging(logger_name)
    for handler in handlers:
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(formatter)
        handler.addFilter(correlation)
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def shutdown_logging(logger_name: str = ROOT_LOGGER_NAME) -> None:
    """Flush and detach the sinks installed by :func:`setup_logging`.

    Records propagate to the parent loggers again afterwards.
    """
    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        if handler.get_name() != _HANDLER_NAME:
            continue
        logger.removeHandler(handler)
        handler.flush()
        handler.close()
    logger.propagate = True


def _parse_level(value: object) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelNamesMapping().get(str(value).strip().upper())
    if level is None:
        raise ValueError(f"unsupported logging level {value!r}")
    return level


def _keep(value: Any) -> Any:
    return value


def _is_secret_key(key: str) -> bool:
    lowered = key.lower()
    if lowered.endswith("_name"):
        # token_name holds an environment variable name
        return False
    return any(term in lowered for term in _SECRET_KEY_TERMS)


def _redact_text(text: str) -> str:
    text = _TOKEN_ASSIGNMENT_RE.sub(
        lambda match: f"{match.group(1)}{match.group(2)}{REDACTED}", text
    )
    text = _API_TOKEN_HEADER_RE.sub(lambda match: f"{match.group(1)} {REDACTED}", text)
    return _PLATFORM_TOKEN_RE.sub(REDACTED, text)


__all__ = [
    "LOG_FILENAME",
    "REDACTED",
    "ROOT_LOGGER_NAME",
    "CorrelationFilter",
    "JsonLineFormatter",
    "LogRedactor",
    "correlation_scope",
    "default_log_redactor",
    "get_correlation_context",
    "log_path",
    "setup_logging",
    "shutdown_logging",
]
