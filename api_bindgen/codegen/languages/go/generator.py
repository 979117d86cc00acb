"""
Go code generator implementation.

Generates GopherJS bindings from API schema blocks: one struct per block
wrapping the host object handle, event name constants, and the nested
struct, function and enum types discovered along the way.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.context import DeclarationContext, PendingDecl, PendingKind
from ...core.generator import CodeGenerator, GeneratorError
from ...core.kinds import Kind
from ...core.naming import SymbolNormalizer
from ...core.schema import Base, Block, Event, Method, Property, SchemaFile
from ...core.templates import comment_lines, quote_literal
from .config import build_type_config
from .naming import create_go_normalizer, validate_go_package_name
from .types import GoType, GoTypeMapper

logger = get_logger(__name__)

# Event names that are safe to pass through as string literals
_EVENT_LITERAL = re.compile(r"^[A-Za-z0-9_:.-]+$")

_INT_LITERAL = re.compile(r"^-?\d+$")
_FLOAT_LITERAL = re.compile(r"^-?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")

TEMPLATES = (
    "file_header.go.j2",
    "struct.go.j2",
    "const_block.go.j2",
    "enum.go.j2",
    "func_type.go.j2",
)


class GoGenerator(CodeGenerator):
    """Code generator for GopherJS bindings."""

    def __init__(self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None):
        """Initialize Go generator with configuration."""
        super().__init__(config)

        # Initialize naming
        self._normalizer = create_go_normalizer(
            self.config.custom.get("acronyms"), self.config.module_suffix
        )

        # Initialize type system
        self.type_config = build_type_config(self.config)
        self.type_mapper = GoTypeMapper(self.type_config)

    def get_template_directory(self) -> Optional[Path]:
        """Return the Go templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"

    @property
    def normalizer(self) -> SymbolNormalizer:
        return self._normalizer

    # Blocks

    def declare_block(self, block: Block, ctx: DeclarationContext) -> None:
        """Emit the primary declarations of a block, dispatching on its kind."""
        kind = block.kind
        if kind is Kind.MODULE:
            self._declare_members(
                block, ctx, block.events, block.properties, block.methods
            )
        elif kind is Kind.CLASS:
            if block.static_methods or block.constructor_method is not None:
                logger.debug(
                    "%s: static methods and constructor are not rendered", block.name
                )
            self._declare_members(
                block,
                ctx,
                block.instance_events,
                block.instance_properties,
                block.instance_methods,
            )
        elif kind in (Kind.STRUCTURE, Kind.OBJECT, Kind.FUNCTION, Kind.BASIC):
            self._declare_members(block, ctx, [], block.properties, [])
        else:
            raise GeneratorError(f"Unhandled block kind {kind} for {block.name}")

    def _declare_members(
        self,
        block: Block,
        ctx: DeclarationContext,
        events: List[Event],
        properties: List[Property],
        methods: List[Method],
    ) -> None:
        if events:
            ctx.write_section(self._render_events(events, ctx))

        lines = [self.host_handle_line(ctx)]
        for prop in properties:
            lines.extend(self._field_lines(prop, block, ctx))
        for method in methods:
            lines.extend(self._method_lines(method, block, ctx))

        ctx.write_section(
            self.render_template(
                "struct.go.j2",
                {
                    "comments": self._doc_lines(block),
                    "struct_name": ctx.block_symbol,
                    "lines": lines,
                },
            )
        )

    # Events

    def _render_events(self, events: List[Event], ctx: DeclarationContext) -> str:
        lines = []
        for event in events:
            self._check_event_literal(event, ctx)
            lines.extend(self._doc_lines(event))
            lines.append(self.declare_event(event, ctx))

        comments = []
        if self.config.add_comments:
            comments.append(f"// Events emitted by {ctx.block_symbol}.")
        return self.render_template(
            "const_block.go.j2", {"comments": comments, "lines": lines}
        )

    def declare_event(self, event: Event, ctx: DeclarationContext) -> str:
        """
        Declare one event name constant.

        The identifier is built from the block name without its module suffix;
        the value is the raw event name.
        """
        identifier = ctx.reserve(
            self.config.event_prefix
            + ctx.block_stem
            + self.normalizer.symbol(event.name)
        )
        return f"{identifier} = {quote_literal(event.name)}"

    def _check_event_literal(self, event: Event, ctx: DeclarationContext) -> None:
        if _EVENT_LITERAL.match(event.name):
            return

        message = f"suspicious event name {event.name!r}"
        if self.config.event_literal_mode == "strict":
            raise GeneratorError(message)
        ctx.warn(message)

    # Fields

    def declare_property(
        self, prop: Property, parent: Optional[Base], ctx: DeclarationContext
    ) -> str:
        """
        Declare a property as ``Name Type``.

        Args:
            prop: Property to declare
            parent: Entity owning the property; scopes generated type names
            ctx: Context of the block being emitted

        Returns:
            Declaration without annotation
        """
        field_name = self.normalizer.base_symbol(prop)

        if prop.is_enum:
            return f"{field_name} {ctx.new_const(prop, parent)}"

        kind = prop.kind
        if kind is Kind.BASIC:
            go_type = self.type_mapper.basic_type(prop.type_tag)
            self._use_type(go_type, ctx)
            return f"{field_name} {go_type.name}"
        elif kind in (
            Kind.MODULE,
            Kind.CLASS,
            Kind.STRUCTURE,
            Kind.OBJECT,
            Kind.FUNCTION,
        ):
            return f"{field_name} {ctx.new_type(prop, parent)}"
        else:
            raise GeneratorError(f"Unhandled property kind {kind} for {prop.name}")

    def declare_method(self, method: Method, ctx: DeclarationContext) -> str:
        """
        Declare a method as a function-typed field.

        Every parameter is followed by a separator:
        ``Name func(A string, B int64,) (Obj bool)``.
        """
        signature = self._signature(method, method.parameters, method.returns, ctx)
        return f"{self.normalizer.base_symbol(method)} {signature}"

    def _signature(
        self,
        owner: Base,
        parameters: List[Property],
        returns: Optional[Property],
        ctx: DeclarationContext,
    ) -> str:
        params = " ".join(
            f"{self.declare_property(param, owner, ctx)}," for param in parameters
        )
        signature = f"func({params})"
        if returns is not None:
            signature += f" ({self.declare_property(returns, owner, ctx)})"
        return signature

    def annotate(self, entity: Base, parent: Optional[Base]) -> str:
        """Source-name tag for a struct field, empty where none applies."""
        if not self.config.generate_tags or not self.config.tag_key:
            return ""
        if parent is None or parent.kind is Kind.FUNCTION:
            return ""
        source_name = (entity.name or "obj").replace("\\", "\\\\").replace('"', '\\"')
        return f' `{self.config.tag_key}:"{source_name}"`'

    def host_handle_line(self, ctx: DeclarationContext) -> str:
        """Opaque handle to the wrapped host object."""
        handle = self.type_mapper.host_handle()
        self._use_type(handle, ctx)
        if self.config.host_handle_field:
            return f"{self.config.host_handle_field} {handle.name}"
        return handle.name

    def _field_lines(
        self, prop: Property, parent: Base, ctx: DeclarationContext
    ) -> List[str]:
        declaration = self.declare_property(prop, parent, ctx)
        return self._doc_lines(prop) + [declaration + self.annotate(prop, parent)]

    def _method_lines(
        self, method: Method, parent: Base, ctx: DeclarationContext
    ) -> List[str]:
        declaration = self.declare_method(method, ctx)
        return self._doc_lines(method) + [declaration + self.annotate(method, parent)]

    def _use_type(self, go_type: GoType, ctx: DeclarationContext) -> None:
        for path in go_type.imports_needed:
            ctx.require_import(path)

    def _doc_lines(self, entity: Base) -> List[str]:
        """Description and platform comments for a declaration."""
        if not self.config.add_comments:
            return []
        lines = []
        if entity.description:
            lines.extend(comment_lines(entity.description))
        if entity.platforms:
            lines.append(f"// Platforms: {', '.join(entity.platforms)}")
        return lines

    # Queued declarations

    def declare_pending(self, pending: PendingDecl, ctx: DeclarationContext) -> None:
        """Emit a nested type or enum allocated while the block was emitted."""
        if pending.kind is PendingKind.CONST:
            ctx.write_section(self._render_enum(pending, ctx))
            return

        kind = pending.prop.kind
        if kind is Kind.FUNCTION:
            signature = self._signature(
                pending.prop, pending.prop.parameters, None, ctx
            )
            ctx.write_section(
                self.render_template(
                    "func_type.go.j2",
                    {
                        "comments": self._doc_lines(pending.prop),
                        "type_name": pending.name,
                        "signature": signature,
                    },
                )
            )
        elif kind in (Kind.MODULE, Kind.CLASS, Kind.STRUCTURE, Kind.OBJECT):
            lines = [self.host_handle_line(ctx)]
            for child in pending.prop.properties:
                lines.extend(self._field_lines(child, pending.prop, ctx))
            ctx.write_section(
                self.render_template(
                    "struct.go.j2",
                    {
                        "comments": self._doc_lines(pending.prop),
                        "struct_name": pending.name,
                        "lines": lines,
                    },
                )
            )
        else:
            raise GeneratorError(
                f"Cannot declare {kind.value} type {pending.name} as a composite"
            )

    def _render_enum(self, pending: PendingDecl, ctx: DeclarationContext) -> str:
        prop = pending.prop
        base_type = self._enum_base_type(pending, ctx)
        quoted = base_type == self.type_config.string_type

        lines = []
        for value in prop.possible_values:
            member = ctx.reserve(
                pending.name + self.normalizer.symbol(value.name or value.literal)
            )
            literal = quote_literal(value.literal) if quoted else value.literal
            lines.extend(self._doc_lines(value))
            lines.append(f"{member} {pending.name} = {literal}")

        return self.render_template(
            "enum.go.j2",
            {
                "comments": self._doc_lines(prop),
                "type_name": pending.name,
                "base_type": base_type,
                "lines": lines,
            },
        )

    def _enum_base_type(self, pending: PendingDecl, ctx: DeclarationContext) -> str:
        """Underlying type of an enum; string unless every literal fits the tag."""
        go_type = self.type_mapper.basic_type(pending.prop.type_tag)
        literals = [value.literal for value in pending.prop.possible_values]

        if go_type.name == self.type_config.int_type:
            valid = all(_INT_LITERAL.match(literal) for literal in literals)
        elif go_type.name == self.type_config.float_type:
            valid = all(_FLOAT_LITERAL.match(literal) for literal in literals)
        elif go_type.name == self.type_config.bool_type:
            valid = all(literal in ("true", "false") for literal in literals)
        else:
            return self.type_config.string_type

        if not valid:
            ctx.warn(
                f"values of {pending.name} do not fit {go_type.name}, using "
                f"{self.type_config.string_type}"
            )
            return self.type_config.string_type
        return go_type.name

    # Files

    def render_file_header(
        self,
        package: str,
        imports: List[str],
        source: str = "",
        metadata: Optional[Base] = None,
    ) -> str:
        """Render the generated-code notice, package clause and imports."""
        if source:
            notice = [f"Code generated by api-bindgen from {source}. DO NOT EDIT."]
        else:
            notice = ["Code generated by api-bindgen. DO NOT EDIT."]

        if metadata is not None and self.config.add_comments:
            if metadata.version:
                notice.append(f"Version: {metadata.version}")
            if metadata.repo_url:
                notice.append(f"Repository: {metadata.repo_url}")
            if metadata.website_url:
                notice.append(f"Website: {metadata.website_url}")

        return self.render_template(
            "file_header.go.j2",
            {"notice": notice, "package_name": package, "imports": sorted(imports)},
        )

    def block_package_name(self, block: Block) -> str:
        """Lower-case base symbol, the Go package of a per-block file."""
        name = re.sub(r"[^a-z0-9]", "", self.normalizer.base_symbol(block).lower())
        if not name or name[0].isdigit():
            name = f"x{name}"
        return name

    def validate_schema(self, schema_file: SchemaFile) -> List[str]:
        """Validate schema blocks and Go-specific settings."""
        warnings = super().validate_schema(schema_file)

        for error in validate_go_package_name(self.config.package_name):
            warnings.append(f"Package name: {error}")

        for template in TEMPLATES:
            if not self.template_exists(template):
                warnings.append(f"Missing template {template}")

        return warnings


def create_go_generator(
    config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
) -> GoGenerator:
    """
    Create a Go generator.

    Args:
        config: Generator configuration, or a dict of overrides applied to the
            Go defaults

    Returns:
        Configured GoGenerator instance
    """
    return GoGenerator(config)
