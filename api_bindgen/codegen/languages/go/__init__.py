"""
Go code generator module.

Generates GopherJS bindings (structs over ``*js.Object`` handles, event
constants, nested types and enums) from API schema blocks.
"""

from .config import GO_CUSTOM_DEFAULTS, build_type_config
from .generator import GoGenerator, create_go_generator
from .naming import create_go_normalizer, validate_go_package_name
from .types import GoType, GoTypeConfig, GoTypeMapper

__all__ = [
    "GoGenerator",
    "GoType",
    "GoTypeConfig",
    "GoTypeMapper",
    "GO_CUSTOM_DEFAULTS",
    "build_type_config",
    "create_go_normalizer",
    "validate_go_package_name",
    # Factory functions
    "create_generator",
    "create_go_generator",
]


def create_generator(type_config: GoTypeConfig = None, **kwargs):
    """
    Create a Go generator with type configuration.

    Args:
        type_config: GoTypeConfig instance for type mapping behavior
        **kwargs: Additional generator options (package_name, add_comments, etc.)

    Returns:
        Configured GoGenerator instance
    """
    generator_config = dict(kwargs)

    if type_config is not None:
        custom = dict(generator_config.get("custom", {}))
        custom.update(
            {
                "string_type": type_config.string_type,
                "int_type": type_config.int_type,
                "float_type": type_config.float_type,
                "bool_type": type_config.bool_type,
                "dynamic_type": type_config.dynamic_type,
                "host_handle_type": type_config.host_handle_type,
                "host_import": type_config.host_import,
                "type_overrides": dict(type_config.type_overrides),
            }
        )
        generator_config["custom"] = custom

    return GoGenerator(generator_config)
