"""
Go-specific type system for code generation.

Maps the primitive type tags of the API schema onto Go types. Tags that do
not name a primitive refer to host objects the schema does not describe
further; those become the dynamic handle type.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Set


@dataclass(frozen=True)
class GoType:
    """
    Immutable representation of a Go type.

    Carries the imports the type needs so the file header can be built from
    the types actually used.
    """

    name: str  # The Go type name (e.g., "string", "*js.Object")
    imports_needed: FrozenSet[str] = field(default_factory=frozenset)
    is_dynamic: bool = False  # Fallback handle for unknown tags
    validation_hints: tuple = ()

    def with_validation_hint(self, hint: str) -> "GoType":
        """Add a validation hint to this type."""
        return GoType(
            name=self.name,
            imports_needed=self.imports_needed,
            is_dynamic=self.is_dynamic,
            validation_hints=self.validation_hints + (hint,),
        )


@dataclass
class GoTypeConfig:
    """Configuration for Go type mapping behavior."""

    # Primitive type preferences
    string_type: str = "string"
    int_type: str = "int64"
    float_type: str = "float64"
    bool_type: str = "bool"

    # Opaque host objects
    dynamic_type: str = "*js.Object"
    host_handle_type: str = "*js.Object"
    host_import: str = "github.com/gopherjs/gopherjs/js"

    # Custom per-tag overrides, e.g. {"Buffer": "[]byte"}
    type_overrides: Dict[str, str] = field(default_factory=dict)

    def imports_for(self, type_name: str) -> FrozenSet[str]:
        """Imports needed by a type expression built from the host package."""
        if self.host_import and type_name.lstrip("*[]").startswith("js."):
            return frozenset({self.host_import})
        return frozenset()


# Primitive tags, including the upper-case spellings found in older dumps
STRING_TAGS = {"", "String", "STRING"}
INTEGER_TAGS = {"Integer", "INTEGER"}
FLOAT_TAGS = {"Number", "NUMBER", "Double", "DOUBLE", "Float", "FLOAT"}
BOOLEAN_TAGS = {"Boolean", "BOOLEAN"}


class GoTypeMapper:
    """Maps basic schema type tags to Go types."""

    def __init__(self, config: Optional[GoTypeConfig] = None):
        """Initialize with type configuration."""
        self.config = config or GoTypeConfig()
        self._primitive_types = self._build_primitive_type_map()

    def _build_primitive_type_map(self) -> Dict[str, GoType]:
        """Build mapping of primitive tags to Go types."""
        mapping: Dict[str, GoType] = {}
        for tags, type_name in (
            (STRING_TAGS, self.config.string_type),
            (INTEGER_TAGS, self.config.int_type),
            (FLOAT_TAGS, self.config.float_type),
            (BOOLEAN_TAGS, self.config.bool_type),
        ):
            for tag in tags:
                mapping[tag] = GoType(name=type_name)
        return mapping

    def basic_type(self, tag: Optional[str]) -> GoType:
        """
        Map a basic type tag to a Go type.

        Args:
            tag: Resolved type tag; None for a malformed type field

        Returns:
            GoType for the tag, the dynamic handle when unrecognized
        """
        if tag is None:
            return self.dynamic().with_validation_hint(
                "Malformed type field, using dynamic handle"
            )

        if tag in self.config.type_overrides:
            type_name = self.config.type_overrides[tag]
            return GoType(name=type_name, imports_needed=self.config.imports_for(type_name))

        if tag in self._primitive_types:
            return self._primitive_types[tag]

        return self.dynamic()

    def dynamic(self) -> GoType:
        """Fallback type for host objects the schema leaves opaque."""
        return GoType(
            name=self.config.dynamic_type,
            imports_needed=self.config.imports_for(self.config.dynamic_type),
            is_dynamic=True,
        )

    def host_handle(self) -> GoType:
        """Type of the handle field embedded in every generated struct."""
        return GoType(
            name=self.config.host_handle_type,
            imports_needed=self.config.imports_for(self.config.host_handle_type),
        )

    def get_all_imports(self, types: List[GoType]) -> Set[str]:
        """Extract all unique imports needed for a list of types."""
        imports = set()
        for go_type in types:
            imports.update(go_type.imports_needed)
        return imports
