"""Generator registry tests."""

from __future__ import annotations

import pytest
from api_bindgen.codegen.core.config import load_config
from api_bindgen.codegen.languages.go import GoGenerator
from api_bindgen.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)


def test_go_is_registered_with_its_alias() -> None:
    assert list_supported_languages() == ["go"]
    assert is_language_supported("go")
    assert is_language_supported("GoLang")
    assert not is_language_supported("cobol")


def test_get_generator_by_alias_uses_go_defaults() -> None:
    generator = get_generator("golang")

    assert isinstance(generator, GoGenerator)
    assert generator.config.package_name == "electron"
    assert generator.config.custom["int_type"] == "int64"


def test_get_generator_with_overrides() -> None:
    generator = get_generator("go", {"package_name": "bindings", "int_type": "int32"})

    assert generator.config.package_name == "bindings"
    assert generator.type_config.int_type == "int32"


def test_get_generator_with_config_file(tmp_path) -> None:
    config_file = tmp_path / "go.json"
    config_file.write_text('{"tag_key": "jsx"}', encoding="utf-8")

    generator = get_generator("go", config_file)

    assert generator.config.tag_key == "jsx"


def test_invalid_type_settings_surface_as_registry_errors() -> None:
    with pytest.raises(RegistryError, match="Invalid int_type"):
        get_generator("go", {"int_type": "huge"})


def test_unknown_language() -> None:
    with pytest.raises(RegistryError, match="No generator registered for language: cobol"):
        get_generator("cobol")


def test_language_info() -> None:
    info = get_language_info("golang")

    assert info["name"] == "go"
    assert info["class"] == "GoGenerator"
    assert info["file_extension"] == ".go"
    assert info["aliases"] == ["golang"]
    assert "struct.go.j2" in info["templates"]


def test_registration_rules() -> None:
    registry = GeneratorRegistry()
    registry.register("go", GoGenerator, aliases=["golang"])

    # Re-registering keeps the first registration and its aliases
    registry.register("go", GoGenerator, aliases=["gopher"])
    assert registry.list_languages() == ["go"]
    assert registry.get_aliases_for_language("go") == ["golang"]
    assert registry.resolve("GOLANG") == "go"

    with pytest.raises(RegistryError):
        registry.register("other", GoGenerator, aliases=["go"])

    with pytest.raises(RegistryError):
        registry.register("bad", object)

    # A failed registration leaves nothing behind
    assert registry.list_languages() == ["go"]
    assert not registry.is_supported("other")
    assert registry.is_supported("golang")


def test_generator_accepts_a_prepared_config() -> None:
    config = load_config("go", custom_config={"event_prefix": "Event"})

    generator = GoGenerator(config)

    assert generator.config is config
    assert generator.language_name == "go"
    assert generator.file_extension == ".go"
