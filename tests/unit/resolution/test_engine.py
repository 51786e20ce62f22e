"""
monaco-config — unit tests for the settings-driven resolution engine

File: tests/unit/resolution/test_engine.py

Purpose
- Validate that ``[resolution]`` settings drive directive names and
  reference strictness, and that resolution is logged with correlation.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from structlog.testing import capture_logs

from monaco_config.config.schema import ConfigValidationError
from monaco_config.domain.api import Api, DeployedEntity
from monaco_config.domain.environment import Environment
from monaco_config.errors import UnresolvableReferenceError
from monaco_config.observability.logging import log_path, setup_logging, shutdown_logging
from monaco_config.resolution.configuration import Config
from monaco_config.resolution.engine import ResolutionEngine, ResolvedConfig
from monaco_config.resolution.templates import Template

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

MANAGEMENT_ZONE = Api("management-zone", "/api/config/v1/managementZones")
DEV = Environment(id="development", name="dev")
PROD = Environment(id="prod-environment", name="prod", group="production")


@pytest.fixture(autouse=True)
def _cleanup_logging() -> Iterator[None]:
    yield
    shutdown_logging()


def _config(properties: dict[str, dict[str, str]]) -> Config:
    template = Template("zone", '{"name": "{{.name}}", "rule": "{{.rule}}"}')
    return Config("zone", "infra", template, properties, MANAGEMENT_ZONE, "zone.json")


@pytest.mark.unit
def test_resolve_renders_payload_and_name() -> None:
    config = _config(
        {
            "zone": {"name": "Zone", "rule": "default"},
            "zone.development": {"rule": "dev"},
        }
    )

    result = ResolutionEngine().resolve(config, DEV, {})

    assert result == ResolvedConfig(
        config_path="infra/management-zone/zone",
        environment_id="development",
        object_name="Zone",
        payload='{"name": "Zone", "rule": "dev"}',
        skip=False,
    )


@pytest.mark.unit
def test_skipped_config_is_not_rendered() -> None:
    # No "rule" property: rendering would fail if it were attempted.
    config = _config(
        {"zone": {"name": "Zone"}, "zone.prod-environment": {"skipDeployment": "true"}}
    )

    result = ResolutionEngine().resolve(config, PROD, {})

    assert result.skip
    assert result.payload is None
    assert result.object_name is None


@pytest.mark.unit
def test_settings_rename_directive_parameters() -> None:
    config = _config(
        {"zone": {"title": "Titled", "name": "ignored", "rule": "r", "skipDeployment": "true"}}
    )
    engine = ResolutionEngine(
        {"resolution": {"name_parameter": "title", "skip_parameter": "disabled"}}
    )

    result = engine.resolve(config, DEV, {})

    assert engine.name_parameter == "title"
    assert not result.skip
    assert result.object_name == "Titled"


@pytest.mark.unit
def test_strict_references_setting() -> None:
    config = _config({"zone": {"name": "Zone", "rule": "infra/alerting-profile/missing.id"}})

    lenient = ResolutionEngine().resolve(config, DEV, {})
    assert lenient.payload == '{"name": "Zone", "rule": "infra/alerting-profile/missing.id"}'

    strict = ResolutionEngine({"resolution": {"strict_references": True}})
    with pytest.raises(UnresolvableReferenceError):
        strict.resolve(config, DEV, {})


@pytest.mark.unit
def test_invalid_settings_are_rejected() -> None:
    with pytest.raises(ConfigValidationError):
        ResolutionEngine({"resolution": {"name_parameter": "skipDeployment"}})


@pytest.mark.unit
def test_resolve_all_keeps_order_and_uses_deployed_entities() -> None:
    first = _config({"zone": {"name": "Zone", "rule": "infra/management-zone/base.id"}})
    second = Config(
        "other", "infra", Template("o", "{{.name}}"), {"other": {"name": "Other"}}, MANAGEMENT_ZONE
    )
    deployed = {"infra/management-zone/base": DeployedEntity(id="BASE-1", name="Base")}

    results = ResolutionEngine().resolve_all([first, second], DEV, deployed)

    assert [item.config_path for item in results] == [
        "infra/management-zone/zone",
        "infra/management-zone/other",
    ]
    assert results[0].payload == '{"name": "Zone", "rule": "BASE-1"}'
    assert results[1].payload == "Other"


@pytest.mark.unit
def test_resolution_logs_carry_correlation_fields(tmp_path: Path) -> None:
    setup_logging({"log_level": "DEBUG"}, run_id="run-engine", log_dir=tmp_path)
    config = _config({"zone": {"name": "Zone", "rule": "r"}})

    ResolutionEngine().resolve(config, DEV, {})
    shutdown_logging()

    lines = log_path(tmp_path, "run-engine").read_text(encoding="utf-8").splitlines()
    events = [json.loads(line) for line in lines]
    resolved = [event for event in events if event["message"].startswith("resolved ")]
    assert len(resolved) == 1
    assert resolved[0]["config_path"] == "infra/management-zone/zone"
    assert resolved[0]["environment_id"] == "development"
    assert resolved[0]["run_id"] == "run-engine"
    assert resolved[0]["fields"]["object_name"] == "Zone"


@pytest.mark.unit
def test_decisions_are_logged_as_structured_events() -> None:
    engine = ResolutionEngine()
    deployed: dict[str, DeployedEntity] = {}

    with capture_logs() as captured:
        engine.resolve(_config({"zone": {"name": "Zone", "rule": "r"}}), DEV, deployed)
        engine.resolve(
            _config({"zone": {"name": "Zone", "skipDeployment": "true"}}), DEV, deployed
        )

    assert [(event["event"], event["action"]) for event in captured] == [
        ("resolution_decision", "deploy"),
        ("resolution_decision", "skip"),
    ]
    assert captured[0]["object_name"] == "Zone"
    assert captured[1]["config_path"] == "infra/management-zone/zone"
