"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger
from .config import GeneratorConfig, load_config
from .context import DeclarationContext, PendingDecl
from .driver import DriverReport, FileDriver
from .kinds import Kind
from .naming import SymbolNormalizer
from .schema import Base, Block, Property, SchemaFile
from .sinks import DeclarationUnit, directory_sink_factory, unit_sink_factory
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None):
        """Initialize generator with optional configuration."""
        if config is None:
            config = load_config(self.language_name)
        elif isinstance(config, dict):
            config = load_config(self.language_name, custom_config=config)
        self.config: GeneratorConfig = config
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            # Fallback to in-memory templates
            self._template_engine = create_template_engine()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

    @property
    @abstractmethod
    def normalizer(self) -> SymbolNormalizer:
        """Symbol normalizer producing this language's identifiers."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.

        Returns:
            Path to template directory or None
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def declare_block(self, block: Block, ctx: DeclarationContext) -> None:
        """
        Emit the primary declarations of one block into its context.

        Nested types discovered on the way are registered with the context,
        which emits them afterwards through ``declare_pending``.
        """
        pass

    @abstractmethod
    def declare_pending(self, pending: PendingDecl, ctx: DeclarationContext) -> None:
        """Emit one declaration queued in the context."""
        pass

    @abstractmethod
    def render_file_header(
        self,
        package: str,
        imports: List[str],
        source: str = "",
        metadata: Optional[Base] = None,
    ) -> str:
        """
        Render the preamble of an output file.

        Args:
            package: Package/namespace name
            imports: Required imports, sorted
            source: Name of the schema file the code was generated from
            metadata: Entity carrying package metadata (version, repo URL)

        Returns:
            Header text (package clause, imports, generated-code notice)
        """
        pass

    def block_package_name(self, block: Block) -> str:
        """
        Package name used when a block is written to its own file.

        Derived from the base symbol, so a module and a class sharing a name
        (``webContents`` and ``WebContents``) land in different packages.
        """
        return self.normalizer.base_symbol(block).lower()

    def block_output_path(self, block: Block, out_dir: Path) -> Path:
        """File a block is written to in per-block output mode."""
        package = self.block_package_name(block)
        return out_dir / package / f"{package}{self.file_extension}"

    def render_unit(self, unit: DeclarationUnit, metadata: Optional[Base] = None) -> str:
        """Assemble a whole-file output from its committed block sections."""
        header = self.render_file_header(
            self.config.package_name,
            sorted(unit.imports),
            source=unit.source,
            metadata=metadata,
        )
        return header.rstrip("\n") + "\n\n" + unit.body + "\n"

    def validate_schema(self, schema_file: SchemaFile) -> List[str]:
        """
        Validate a schema file for structural issues worth reporting.

        Language generators may override this to add language-specific checks.

        Args:
            schema_file: Parsed schema file

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        seen: Dict[str, str] = {}

        for block in schema_file:
            symbol = self.normalizer.base_symbol(block)
            if symbol in seen:
                warnings.append(
                    f"Blocks '{seen[symbol]}' and '{block.name}' both declare {symbol}"
                )
            seen.setdefault(symbol, block.name)

            if not block.name:
                warnings.append(f"Unnamed block in {schema_file.source}")

            if block.raw_type.is_malformed:
                warnings.append(f"Malformed type on block {block.name}")

            if block.kind is Kind.BASIC:
                warnings.append(
                    f"Block {block.name} has basic type '{block.type_tag}' - "
                    f"generating a plain struct"
                )

            if block.kind is Kind.CLASS and (
                block.static_methods or block.constructor_method
            ):
                warnings.append(
                    f"Static methods and constructor of {block.name} are not rendered"
                )

            for path, prop in _walk_properties(block):
                if prop.raw_type.is_malformed:
                    warnings.append(
                        f"Malformed type on {block.name}.{path} - using dynamic handle"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


def _walk_properties(block: Block):
    """Yield (dotted path, property) for every property below a block."""

    def walk(prefix: str, props: List[Property]):
        for prop in props:
            path = f"{prefix}{prop.name or '<unnamed>'}"
            yield path, prop
            yield from walk(f"{path}.", prop.properties)
            yield from walk(f"{path}.", prop.parameters)

    yield from walk("", block.properties)
    yield from walk("", block.instance_properties)
    for method in block.methods + block.instance_methods + block.static_methods:
        yield from walk(f"{method.name}.", method.parameters)
        if method.returns is not None:
            yield from walk(f"{method.name}.", [method.returns])
    for event in block.events + block.instance_events:
        yield from walk(f"{event.name}.", event.returns)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
        report: Optional[DriverReport] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
            report: Per-block outcomes from the file driver
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.report = report
        self.success = True
        self.error_message = ""
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def _metadata(
    generator: CodeGenerator, schema_file: SchemaFile, report: DriverReport
) -> Dict[str, Any]:
    return {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "source": schema_file.source,
        "block_count": len(schema_file),
        "generated_blocks": len(report.generated),
        "skipped_blocks": len(report.skipped),
        "failed_blocks": len(report.failed),
        "nested_types": sum(outcome.nested_types for outcome in report.outcomes),
    }


def generate_code(
    generator: CodeGenerator, schema_file: SchemaFile
) -> GenerationResult:
    """
    Generate one output unit for a whole schema file.

    Block failures are reported in the result; only a file without any
    block is an error.

    Args:
        generator: Code generator instance
        schema_file: Parsed schema file

    Returns:
        GenerationResult with code, warnings, metadata and the driver report
    """
    if not schema_file.blocks:
        return GenerationResult.error(f"{schema_file.source}: no blocks to process")

    try:
        warnings = generator.validate_schema(schema_file)

        unit = DeclarationUnit(schema_file.source)
        driver = FileDriver(
            generator, unit_sink_factory(unit), generator.config.process_filter
        )
        report = driver.run(schema_file)
        warnings.extend(report.warnings)

        code = ""
        if unit.sections:
            code = generator.format_code(
                generator.render_unit(unit, schema_file.metadata_block)
            )

        return GenerationResult(
            code, warnings, _metadata(generator, schema_file, report), report
        )

    except Exception as e:
        logger.error("Code generation failed for %s: %s", schema_file.source, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)


def generate_block_files(
    generator: CodeGenerator, schema_file: SchemaFile, out_dir: Path
) -> GenerationResult:
    """
    Generate one standalone output file per block below ``out_dir``.

    Returns:
        GenerationResult without code; the files are written by the sinks
    """
    if not schema_file.blocks:
        return GenerationResult.error(f"{schema_file.source}: no blocks to process")

    try:
        warnings = generator.validate_schema(schema_file)
        driver = FileDriver(
            generator,
            directory_sink_factory(Path(out_dir), generator, schema_file.source),
            generator.config.process_filter,
            shared_namespace=False,
        )
        report = driver.run(schema_file)
        warnings.extend(report.warnings)
        return GenerationResult(
            "", warnings, _metadata(generator, schema_file, report), report
        )

    except Exception as e:
        logger.error("Code generation failed for %s: %s", schema_file.source, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
