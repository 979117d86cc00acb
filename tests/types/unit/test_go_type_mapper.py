"""Basic type mapper tests."""

from __future__ import annotations

import pytest
from api_bindgen.codegen.core.config import ConfigError, GeneratorConfig
from api_bindgen.codegen.languages.go.config import build_type_config
from api_bindgen.codegen.languages.go.types import GoTypeConfig, GoTypeMapper

JS_IMPORT = "github.com/gopherjs/gopherjs/js"


@pytest.mark.parametrize(
    ("tag", "go_type"),
    [
        ("String", "string"),
        ("", "string"),
        ("Integer", "int64"),
        ("Number", "float64"),
        ("Double", "float64"),
        ("Float", "float64"),
        ("Boolean", "bool"),
        ("BOOLEAN", "bool"),
    ],
)
def test_primitive_tags(tag: str, go_type: str) -> None:
    mapped = GoTypeMapper().basic_type(tag)

    assert mapped.name == go_type
    assert not mapped.is_dynamic
    assert mapped.imports_needed == frozenset()


def test_unknown_tags_map_to_the_dynamic_handle() -> None:
    mapped = GoTypeMapper().basic_type("WebContents")

    assert mapped.name == "*js.Object"
    assert mapped.is_dynamic
    assert mapped.imports_needed == frozenset({JS_IMPORT})


def test_malformed_type_maps_to_dynamic_with_hint() -> None:
    mapped = GoTypeMapper().basic_type(None)

    assert mapped.is_dynamic
    assert mapped.validation_hints


def test_overrides_win_over_primitives() -> None:
    mapper = GoTypeMapper(
        GoTypeConfig(type_overrides={"Buffer": "[]byte", "Integer": "int"})
    )

    assert mapper.basic_type("Buffer").name == "[]byte"
    assert mapper.basic_type("Buffer").imports_needed == frozenset()
    assert mapper.basic_type("Integer").name == "int"


def test_override_to_host_type_needs_the_host_import() -> None:
    mapper = GoTypeMapper(GoTypeConfig(type_overrides={"Menu": "[]*js.Object"}))

    assert mapper.basic_type("Menu").imports_needed == frozenset({JS_IMPORT})


def test_host_handle_type() -> None:
    handle = GoTypeMapper().host_handle()

    assert handle.name == "*js.Object"
    assert handle.imports_needed == frozenset({JS_IMPORT})


def test_get_all_imports() -> None:
    mapper = GoTypeMapper()
    types = [mapper.basic_type("String"), mapper.basic_type("Event")]

    assert mapper.get_all_imports(types) == {JS_IMPORT}


def test_build_type_config_from_custom_settings() -> None:
    config = GeneratorConfig(custom={"int_type": "int32", "float_type": "float32"})

    type_config = build_type_config(config)

    assert type_config.int_type == "int32"
    assert type_config.float_type == "float32"
    assert type_config.string_type == "string"
    assert type_config.dynamic_type == "*js.Object"


def test_build_type_config_rejects_unknown_numeric_types() -> None:
    with pytest.raises(ConfigError, match="int_type"):
        build_type_config(GeneratorConfig(custom={"int_type": "long"}))

    with pytest.raises(ConfigError, match="float_type"):
        build_type_config(GeneratorConfig(custom={"float_type": "double"}))
