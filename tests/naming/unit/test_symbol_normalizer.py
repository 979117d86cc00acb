"""Symbol normalizer tests."""

from __future__ import annotations

import pytest
from api_bindgen.codegen.core.naming import (
    DEFAULT_NORMALIZER,
    SymbolNormalizer,
    normalize,
    strip_suffix,
)
from api_bindgen.codegen.core.schema import Block, RawType
from api_bindgen.codegen.languages.go.naming import (
    create_go_normalizer,
    validate_go_package_name,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("background-color", "BackgroundColor"),
        ("will-navigate", "WillNavigate"),
        ("will-finish-launching", "WillFinishLaunching"),
        ("request.url", "RequestURL"),
        ("baseUrl", "BaseURL"),
        ("`options`", "Options"),
        ("some_snake_name", "SomeSnakeName"),
        ("width (optional)", "WidthOptional"),
        ("getPath", "GetPath"),
        ("alreadyCamelCase", "AlreadyCamelCase"),
    ],
)
def test_symbol_maps_raw_names_to_identifiers(raw: str, expected: str) -> None:
    assert normalize(raw) == expected


def test_title_case_only_touches_first_character_of_each_word() -> None:
    assert normalize("setHTML") == "SetHTML"
    assert normalize("x-IPC") == "XIPC"


def test_url_correction_is_applied_once_per_occurrence() -> None:
    assert normalize("url") == "URL"
    assert normalize("loadURL") == "LoadURL"
    assert normalize("urlurl") == "URLURL"


def test_empty_and_symbol_only_names_fall_back_to_obj() -> None:
    assert normalize("") == "Obj"
    assert normalize("--") == "Obj"
    assert normalize("+") == "Obj"


def test_names_starting_with_a_digit_get_a_prefix() -> None:
    assert normalize("3d-touch") == "X3dTouch"


def test_invalid_identifier_characters_are_removed() -> None:
    assert normalize("size+offset") == "Sizeoffset"
    assert normalize("a/b") == "Ab"


def test_normalizer_is_pure() -> None:
    first = normalize("will-quit")
    second = normalize("will-quit")
    assert first == second == "WillQuit"
    assert DEFAULT_NORMALIZER.symbol("will-quit") == first


def test_module_blocks_get_the_module_suffix() -> None:
    module = Block(name="app", raw_type=RawType.parse("Module"))
    cls = Block(name="BrowserWindow", raw_type=RawType.parse("Class"))

    assert DEFAULT_NORMALIZER.base_symbol(module) == "AppModule"
    assert DEFAULT_NORMALIZER.stem(module) == "App"
    assert DEFAULT_NORMALIZER.base_symbol(cls) == "BrowserWindow"
    assert DEFAULT_NORMALIZER.stem(cls) == "BrowserWindow"


def test_strip_suffix_keeps_a_bare_suffix() -> None:
    assert strip_suffix("AppModule", "Module") == "App"
    assert strip_suffix("Module", "Module") == "Module"
    assert strip_suffix("App", "Module") == "App"


def test_custom_module_suffix() -> None:
    normalizer = SymbolNormalizer(module_suffix="Mod")
    module = Block(name="app", raw_type=RawType.parse("Module"))

    assert normalizer.base_symbol(module) == "AppMod"
    assert normalizer.stem(module) == "App"


def test_go_normalizer_accepts_extra_corrections() -> None:
    normalizer = create_go_normalizer([("Id", "ID")])

    assert normalizer.symbol("webContentsId") == "WebContentsID"
    assert normalizer.symbol("request.url") == "RequestURL"


def test_go_package_name_validation() -> None:
    assert validate_go_package_name("electron") == []
    assert validate_go_package_name("") == ["Package name cannot be empty"]
    assert "Package names should be lowercase" in validate_go_package_name("Electron")
    assert "'type' is a Go reserved word" in validate_go_package_name("type")
