"""
Go-specific configuration and validation.

Extends the base configuration system with Go-specific settings.
"""

from typing import Any, Dict

from ...core.config import ConfigError, GeneratorConfig
from .types import GoTypeConfig


GO_CUSTOM_DEFAULTS: Dict[str, Any] = {
    "string_type": "string",
    "int_type": "int64",
    "float_type": "float64",
    "bool_type": "bool",
    "dynamic_type": "*js.Object",
    "host_handle_type": "*js.Object",
    "host_import": "github.com/gopherjs/gopherjs/js",
}

VALID_INT_TYPES = {"int", "int8", "int16", "int32", "int64"}
VALID_FLOAT_TYPES = {"float32", "float64"}


def go_custom_settings(config: GeneratorConfig) -> Dict[str, Any]:
    """Go settings from the config's custom section, defaults filled in."""
    settings = dict(GO_CUSTOM_DEFAULTS)
    settings.update(config.custom or {})
    return settings


def validate_go_settings(settings: Dict[str, Any]) -> None:
    """
    Validate Go-specific configuration.

    Raises:
        ConfigError: On an unsupported numeric type or malformed overrides
    """
    int_type = settings.get("int_type")
    if int_type and int_type not in VALID_INT_TYPES:
        raise ConfigError(f"Invalid int_type: {int_type}")

    float_type = settings.get("float_type")
    if float_type and float_type not in VALID_FLOAT_TYPES:
        raise ConfigError(f"Invalid float_type: {float_type}")

    overrides = settings.get("type_overrides") or {}
    if not isinstance(overrides, dict):
        raise ConfigError("type_overrides must be an object mapping tags to Go types")


def build_type_config(config: GeneratorConfig) -> GoTypeConfig:
    """Build GoTypeConfig from generator config."""
    settings = go_custom_settings(config)
    validate_go_settings(settings)

    return GoTypeConfig(
        string_type=settings["string_type"],
        int_type=settings["int_type"],
        float_type=settings["float_type"],
        bool_type=settings["bool_type"],
        dynamic_type=settings["dynamic_type"],
        host_handle_type=settings["host_handle_type"],
        host_import=settings["host_import"],
        type_overrides=dict(settings.get("type_overrides") or {}),
    )
