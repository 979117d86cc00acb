"""Public API convenience helpers."""

from __future__ import annotations

import json

import pytest
from api_bindgen.codegen import generate_from_schema, quick_generate
from api_bindgen.codegen.languages.go import GoTypeConfig, create_generator
from api_bindgen.codegen.registry import GeneratorRegistry, get_registry

RECTANGLE = [
    {
        "name": "Rectangle",
        "type": "Structure",
        "properties": [{"name": "width", "type": "Integer"}],
    }
]


def test_quick_generate_from_json_text() -> None:
    code = quick_generate(json.dumps(RECTANGLE), package_name="shapes")

    assert "package shapes\n" in code
    assert '\tWidth int64 `js:"width"`\n' in code


def test_quick_generate_raises_on_failure() -> None:
    with pytest.raises(RuntimeError, match="no blocks"):
        quick_generate("[]")


def test_generate_from_schema_reports_metadata() -> None:
    result = generate_from_schema(RECTANGLE, source="shapes.json")

    assert result.success
    assert result.metadata["source"] == "shapes.json"
    assert result.metadata["block_count"] == 1
    assert result.metadata["generated_blocks"] == 1


def test_create_generator_with_type_config() -> None:
    generator = create_generator(
        GoTypeConfig(int_type="int32", type_overrides={"Buffer": "[]byte"}),
        package_name="shapes",
    )

    assert generator.config.package_name == "shapes"
    assert generator.type_mapper.basic_type("Integer").name == "int32"
    assert generator.type_mapper.basic_type("Buffer").name == "[]byte"


def test_global_registry_is_created_once() -> None:
    registry = get_registry()

    assert isinstance(registry, GeneratorRegistry)
    assert get_registry() is registry
    assert registry.get_aliases_for_language("go") == ["golang"]
