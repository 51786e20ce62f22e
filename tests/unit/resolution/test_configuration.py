"""
monaco-config — unit tests for the configuration object

File: tests/unit/resolution/test_configuration.py

Purpose
- Exercise per-environment rendering, object names, skip flags and the
  read-only properties contract end to end.

Functional requirements
- Offline only; environment variables are passed explicitly.
"""

from __future__ import annotations

import pytest

from monaco_config.domain.api import Api, DeployedEntity
from monaco_config.domain.environment import Environment
from monaco_config.errors import MissingRequiredPropertyError, MissingTemplateKeyError
from monaco_config.resolution.configuration import Config
from monaco_config.resolution.templates import Template

MANAGEMENT_ZONE = Api("management-zone", "/api/config/v1/managementZones")
DEV = Environment(id="development", name="dev")
HARDENING = Environment(id="hardening", name="hardening")
PROD = Environment(id="prod-environment", name="prod", group="production")

TEST_TEMPLATE = "Follow the {{.color}} {{.animalType}}"
ENV_TEMPLATE = "Follow the {{.color}} {{ .Env.ANIMAL }}"


def _properties() -> dict[str, dict[str, str]]:
    return {
        "test": {"color": "white", "animalType": "rabbit"},
        "test.development": {"color": "black", "animalType": "squid"},
        "test.production": {"color": "brown", "animalType": "dog"},
    }


def _properties_with_group_and_environment() -> dict[str, dict[str, str]]:
    properties = _properties()
    properties["test"]["name"] = "Config name"
    properties["test.production"]["name"] = "Production config name"
    properties["test.prod-environment"] = {
        "name": "Prod environment config name",
        "color": "red",
        "animalType": "cat",
        "skipDeployment": "true",
    }
    return properties


def _config(
    properties: dict[str, dict[str, str]],
    source: str = TEST_TEMPLATE,
) -> Config:
    return Config("test", "testproject", Template("test", source), properties, MANAGEMENT_ZONE)


@pytest.mark.unit
def test_environment_override() -> None:
    assert _config(_properties()).get_config_for_environment(DEV, {}) == "Follow the black squid"


@pytest.mark.unit
def test_no_environment_override() -> None:
    result = _config(_properties()).get_config_for_environment(HARDENING, {})

    assert result == "Follow the white rabbit"


@pytest.mark.unit
def test_group_override() -> None:
    assert _config(_properties()).get_config_for_environment(PROD, {}) == "Follow the brown dog"


@pytest.mark.unit
def test_group_and_environment_override() -> None:
    config = _config(_properties_with_group_and_environment())

    assert config.get_config_for_environment(PROD, {}) == "Follow the red cat"
    assert config.get_object_name_for_environment(PROD, {}) == "Prod environment config name"
    assert config.is_skip_deployment(PROD)


@pytest.mark.unit
def test_environment_scope_merges_with_group_per_key() -> None:
    properties = _properties_with_group_and_environment()
    del properties["test.prod-environment"]["color"]

    assert _config(properties).get_config_for_environment(PROD, {}) == "Follow the brown cat"


@pytest.mark.unit
def test_object_name_falls_back_through_scopes() -> None:
    config = _config(_properties_with_group_and_environment())

    assert config.get_object_name_for_environment(DEV, {}) == "Config name"
    assert not config.is_skip_deployment(DEV)


@pytest.mark.unit
def test_missing_object_name() -> None:
    with pytest.raises(MissingRequiredPropertyError, match="testproject/management-zone/test"):
        _config(_properties()).get_object_name_for_environment(DEV, {})


@pytest.mark.unit
def test_environment_variable_in_template() -> None:
    config = _config(_properties(), ENV_TEMPLATE)

    assert config.get_config_for_environment(DEV, {}, environ={"ANIMAL": "cow"}) == (
        "Follow the black cow"
    )


@pytest.mark.unit
def test_missing_environment_variable_in_template() -> None:
    config = _config(_properties(), ENV_TEMPLATE)

    with pytest.raises(MissingTemplateKeyError, match='map has no entry for key "ANIMAL"'):
        config.get_config_for_environment(DEV, {}, environ={})


@pytest.mark.unit
def test_references_are_substituted_before_rendering() -> None:
    properties = {
        "test": {
            "color": "testproject/management-zone/zone.name",
            "animalType": "/testproject/management-zone/zone.id",
        }
    }
    deployed = {"testproject/management-zone/zone": DeployedEntity(id="ZONE-1", name="blue")}

    assert _config(properties).get_config_for_environment(HARDENING, deployed) == (
        "Follow the blue ZONE-1"
    )


@pytest.mark.unit
def test_properties_are_read_only_and_copies_are_independent() -> None:
    source = _properties()
    config = _config(source)
    source["test"]["color"] = "mutated"

    assert config.properties["test"]["color"] == "white"
    with pytest.raises(TypeError):
        config.properties["test"]["color"] = "x"  # type: ignore[index]

    copied = config.get_properties()
    copied["test"]["color"] = "green"
    assert config.properties["test"]["color"] == "white"


@pytest.mark.unit
def test_me_ids_and_identity_accessors() -> None:
    properties = _properties()
    properties["test.development"]["app"] = "APPLICATION-95BEC188F318D09C"
    config = Config(
        "test",
        "/testproject/",
        Template("t", TEST_TEMPLATE),
        properties,
        MANAGEMENT_ZONE,
        "test.json",
    )

    assert config.get_me_ids_of_environment(DEV) == {
        "test.development": {"app": "APPLICATION-95BEC188F318D09C"}
    }
    assert config.full_path == "testproject/management-zone/test"
    assert config.type == "management-zone"
    assert config.file_name == "test.json"


@pytest.mark.unit
def test_blank_id_is_rejected() -> None:
    with pytest.raises(ValueError, match="config id"):
        Config(" ", "p", Template("t", "x"), {}, MANAGEMENT_ZONE)
