"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import copy
import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


EVENT_LITERAL_MODES = {"lenient", "strict"}
PROCESS_FILTERS = {"main", "renderer"}


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    package_name: str = "electron"
    per_block_output: bool = False

    # Comments and annotations
    add_comments: bool = True
    generate_tags: bool = True
    tag_key: str = "js"

    # Host handle field embedded in every generated struct;
    # an empty name embeds the handle anonymously
    host_handle_field: str = "HostHandle"

    # Naming
    event_prefix: str = "Evt"
    module_suffix: str = "Module"

    # Event literal policy: "lenient" passes suspicious literals through
    # with a warning, "strict" fails the block
    event_literal_mode: str = "lenient"

    # Only emit blocks available in this host process ("main"/"renderer")
    process_filter: Optional[str] = None

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        # Go defaults
        self._configs["go"] = {
            "package_name": "electron",
            "add_comments": True,
            "generate_tags": True,
            "tag_key": "js",
            "host_handle_field": "HostHandle",
            "custom": {
                "string_type": "string",
                "int_type": "int64",
                "float_type": "float64",
                "bool_type": "bool",
                "dynamic_type": "*js.Object",
                "host_handle_type": "*js.Object",
                "host_import": "github.com/gopherjs/gopherjs/js",
                "type_overrides": {},
            },
        }

    def get_config(
        self,
        language: str = "go",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        # Start with defaults
        base_config = copy.deepcopy(self._configs.get(language.lower(), {}))

        # Load from file if provided
        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        # Apply custom overrides
        if custom_config:
            self._merge(base_config, custom_config)

        # Create GeneratorConfig instance
        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(target: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """Merge overrides into target; the custom section merges key by key."""
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                target.setdefault("custom", {}).update(value)
            else:
                target[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        # Extract known fields
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Add custom fields to the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

    def list_languages(self) -> list[str]:
        """Get list of languages with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str) -> list[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings/errors
        """
        warnings = []

        if config.event_literal_mode not in EVENT_LITERAL_MODES:
            warnings.append(f"Invalid event_literal_mode: {config.event_literal_mode}")

        if config.process_filter and config.process_filter not in PROCESS_FILTERS:
            warnings.append(f"Invalid process_filter: {config.process_filter}")

        if config.generate_tags and not config.tag_key:
            warnings.append("generate_tags is set but tag_key is empty")

        if config.host_handle_field and not config.host_handle_field.isidentifier():
            warnings.append(f"Invalid host_handle_field: {config.host_handle_field}")

        # Language-specific validations
        if language == "go":
            from ..languages.go.naming import validate_go_package_name

            warnings.extend(validate_go_package_name(config.package_name))

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "go",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)

