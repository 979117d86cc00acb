"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .context import DeclarationContext, PendingDecl, PendingKind
from .driver import BlockOutcome, BlockStatus, DriverReport, FileDriver
from .generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    generate_block_files,
    generate_code,
)
from .kinds import Kind, classify, classify_tag
from .naming import DEFAULT_NORMALIZER, SymbolNormalizer, normalize
from .schema import (
    Base,
    Block,
    Event,
    Method,
    PossibleValue,
    Property,
    RawType,
    SchemaError,
    SchemaFile,
    parse_schema_file,
)
from .sinks import (
    DeclarationSink,
    DeclarationUnit,
    FileSink,
    SinkError,
    UnitSink,
    directory_sink_factory,
    unit_sink_factory,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    "generate_block_files",
    # Schema model
    "Base",
    "Block",
    "Event",
    "Method",
    "PossibleValue",
    "Property",
    "RawType",
    "SchemaError",
    "SchemaFile",
    "parse_schema_file",
    # Classification and naming
    "Kind",
    "classify",
    "classify_tag",
    "SymbolNormalizer",
    "DEFAULT_NORMALIZER",
    "normalize",
    # Emission pipeline
    "DeclarationContext",
    "PendingDecl",
    "PendingKind",
    "FileDriver",
    "DriverReport",
    "BlockOutcome",
    "BlockStatus",
    # Output sinks
    "DeclarationSink",
    "DeclarationUnit",
    "FileSink",
    "UnitSink",
    "SinkError",
    "unit_sink_factory",
    "directory_sink_factory",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
