"""
API Bindgen Code Generation Module

Generates typed bindings in various languages from API schema documents.
"""

from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.generator import (
    CodeGenerator,
    GenerationResult,
    generate_block_files,
    generate_code,
)
from .core.schema import SchemaFile, parse_schema_file
from .registry import GeneratorRegistry, get_generator, list_supported_languages


def generate_from_schema(data, language="go", config=None, source="<memory>"):
    """
    Generate code from a decoded schema document.

    Args:
        data: Decoded JSON document (list of blocks)
        language: Target language name
        config: Generator configuration dict or path
        source: Name reported for the document

    Returns:
        GenerationResult with generated code
    """
    schema_file = parse_schema_file(data, source)
    generator = get_generator(language, config)
    return generate_code(generator, schema_file)


def quick_generate(schema_data, language="go", **options):
    """
    Quick code generation from schema data.

    Args:
        schema_data: Schema document (list or JSON string)
        language: Target language
        **options: Generator options

    Returns:
        Generated code string
    """
    # Convert string to list if needed
    if isinstance(schema_data, str):
        import json

        schema_data = json.loads(schema_data)

    result = generate_from_schema(schema_data, language, options)

    if result.success:
        return result.code
    else:
        raise RuntimeError(f"Code generation failed: {result.error_message}")


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "CodeGenerator",
    "ConfigManager",
    "GenerationResult",
    "GeneratorConfig",
    "SchemaFile",
    "generate_block_files",
    "generate_code",
    "generate_from_schema",
    "get_generator",
    "list_supported_languages",
    "load_config",
    "parse_schema_file",
    "quick_generate",
]
