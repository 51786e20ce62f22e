"""
monaco-config — unit tests for payload template rendering

File: tests/unit/resolution/test_templates.py

Purpose
- Validate placeholder translation, strict missing-key failures and
  environment variable access through ``{{ .Env.NAME }}``.

Non-functional requirements
- Deterministic output for equivalent inputs.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from monaco_config.errors import (
    InvalidTemplateError,
    MissingTemplateKeyError,
    ReservedPropertyError,
)
from monaco_config.resolution.templates import Template, render, translate_placeholders

TEST_TEMPLATE = "Follow the {{.color}} {{.animalType}}"
ENV_TEMPLATE = "Follow the {{.color}} {{ .Env.ANIMAL }}"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("{{.color}}", "{{color}}"),
        ("{{ .color }}", "{{ color }}"),
        ("{{ .Env.ANIMAL }}", '{{ Env["ANIMAL"] }}'),
        ('{"a": "{{.x}}", "b": {{.y}}}', '{"a": "{{x}}", "b": {{y}}}'),
        ("no placeholders. at all.", "no placeholders. at all."),
    ],
)
def test_translate_placeholders(source: str, expected: str) -> None:
    assert translate_placeholders(source) == expected


@pytest.mark.unit
def test_render_substitutes_properties() -> None:
    template = Template("test", TEST_TEMPLATE)

    assert template.render({"color": "black", "animalType": "squid"}, {}) == (
        "Follow the black squid"
    )
    assert render(template, {"color": "white", "animalType": "rabbit"}, {}) == (
        "Follow the white rabbit"
    )


@pytest.mark.unit
def test_render_ignores_unused_properties() -> None:
    template = Template("test", TEST_TEMPLATE)

    rendered = template.render({"color": "red", "animalType": "cat", "name": "unused"}, {})

    assert rendered == "Follow the red cat"


@pytest.mark.unit
def test_missing_property_names_the_key() -> None:
    template = Template("test", TEST_TEMPLATE)

    missing = 'map has no entry for key "animalType"'
    with pytest.raises(MissingTemplateKeyError, match=missing) as info:
        template.render({"color": "red"}, {})

    assert info.value.key == "animalType"
    assert info.value.template_name == "test"


@pytest.mark.unit
def test_environment_variables_are_rendered() -> None:
    template = Template("test", ENV_TEMPLATE)

    assert template.render({"color": "black"}, {"ANIMAL": "cow"}) == "Follow the black cow"


@pytest.mark.unit
def test_missing_environment_variable_fails() -> None:
    template = Template("test", ENV_TEMPLATE)

    with pytest.raises(MissingTemplateKeyError, match='map has no entry for key "ANIMAL"'):
        template.render({"color": "black"}, {})


@pytest.mark.unit
def test_process_environment_is_the_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANIMAL", "horse")
    template = Template("test", ENV_TEMPLATE)

    assert template.render({"color": "grey"}) == "Follow the grey horse"


@pytest.mark.unit
def test_referenced_names_are_reported() -> None:
    template = Template("test", "{{.b}} {{.a}} {{ .Env.Z }} {{ .Env.Y }} {{.a}}")

    assert template.referenced_properties == ("a", "b")
    assert template.referenced_env_vars == ("Y", "Z")


@pytest.mark.unit
def test_invalid_template_is_rejected_at_construction() -> None:
    with pytest.raises(InvalidTemplateError, match="broken"):
        Template("broken", "{{ .color ")


@pytest.mark.unit
def test_from_file_reads_utf8(tmp_path: Path) -> None:
    path = tmp_path / "zone.json"
    path.write_text('{"name": "{{.name}}"}\n', encoding="utf-8")

    template = Template.from_file(path)

    assert template.name == "zone.json"
    assert template.render({"name": "Zoné"}, {}) == '{"name": "Zoné"}\n'


@pytest.mark.unit
@pytest.mark.parametrize(
    "literal",
    [
        "filter={%22a%22:1}",
        "## {#anchor} see",
        "and more#}",
        "{% raw %}",
        "100%} done",
    ],
)
def test_block_and_comment_markers_are_payload_text(literal: str) -> None:
    template = Template("dashboard", '{"markdown": "' + literal + ' {{.name}}"}')

    assert template.render({"name": "n"}, {}) == '{"markdown": "' + literal + ' n"}'


@pytest.mark.unit
def test_comment_markers_around_a_placeholder_keep_all_text() -> None:
    template = Template("dashboard", '{"markdown": "## {#anchor} see {{.name}} and more#}"}')

    assert template.render({"name": "n"}, {}) == '{"markdown": "## {#anchor} see n and more#}"}'


@pytest.mark.unit
@pytest.mark.parametrize("variable", ["items", "keys", "values", "get"])
def test_environment_variables_named_like_mapping_methods(variable: str) -> None:
    template = Template("test", "{{ .Env." + variable + " }}")

    assert template.referenced_env_vars == (variable,)
    assert template.render({}, {variable: "x"}) == "x"
    with pytest.raises(MissingTemplateKeyError, match=f'key "{variable}"'):
        template.render({}, {})


@pytest.mark.unit
def test_property_named_env_is_rejected() -> None:
    template = Template("test", "{{.color}}")

    with pytest.raises(ReservedPropertyError, match="'Env' is reserved") as info:
        template.render({"color": "red", "Env": "v"}, {})

    assert info.value.property_name == "Env"


@pytest.mark.unit
@settings(max_examples=40, deadline=None)
@given(value=st.text(alphabet=st.characters(blacklist_characters="{}"), max_size=40))
def test_rendering_is_deterministic_and_verbatim(value: str) -> None:
    template = Template("test", "[{{.value}}]")

    first = template.render({"value": value}, {})
    second = template.render({"value": value}, {})

    assert first == second == f"[{value}]"
