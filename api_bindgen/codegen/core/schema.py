"""
Schema model for API description files.

Deserializes the JSON description of an API surface (modules, classes,
structures, their properties, methods and events) into a tree of plain
dataclasses that the generators walk. The model is built once per schema
file and treated as read-only afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .kinds import Kind, classify


class SchemaError(Exception):
    """Raised when a schema document is not structurally well-formed."""

    pass


class RawTypeForm(Enum):
    """Shapes the ``type`` field of a schema node can take."""

    ABSENT = "absent"
    SINGLE = "single"
    LIST = "list"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class RawType:
    """Tagged union over the dynamic ``type`` field."""

    form: RawTypeForm = RawTypeForm.ABSENT
    names: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, value: Any) -> "RawType":
        """Build a raw type from the JSON value of a ``type`` field."""
        if value is None:
            return cls(RawTypeForm.ABSENT)
        if isinstance(value, str):
            return cls(RawTypeForm.SINGLE, (value,))
        if (
            isinstance(value, list)
            and value
            and all(isinstance(item, str) for item in value)
        ):
            return cls(RawTypeForm.LIST, tuple(value))
        return cls(RawTypeForm.MALFORMED)

    @property
    def tag(self) -> Optional[str]:
        """
        Resolved type tag.

        Empty string when absent, the first member of a union, and None when
        the field was malformed.
        """
        if self.form is RawTypeForm.ABSENT:
            return ""
        if self.form is RawTypeForm.MALFORMED:
            return None
        return self.names[0]

    @property
    def is_malformed(self) -> bool:
        return self.form is RawTypeForm.MALFORMED


@dataclass
class ProcessContext:
    """Which host processes an entity is available in."""

    main: bool = False
    renderer: bool = False

    @property
    def restricted(self) -> bool:
        return self.main or self.renderer


@dataclass
class Base:
    """Fields shared by every schema entity."""

    name: str = ""
    raw_type: RawType = field(default_factory=RawType)
    description: str = ""

    platforms: List[str] = field(default_factory=list)
    process: ProcessContext = field(default_factory=ProcessContext)
    required: bool = False

    # Package metadata, usually only present on top-level blocks
    version: str = ""
    repo_url: str = ""
    website_url: str = ""
    slug: str = ""

    @property
    def kind(self) -> Kind:
        """Classified kind of this entity."""
        return classify(self.raw_type)

    @property
    def type_tag(self) -> Optional[str]:
        return self.raw_type.tag

    def available_in(self, process: Optional[str]) -> bool:
        """
        Check whether the entity applies to a host process.

        Entities without process flags are available everywhere.
        """
        if not process or not self.process.restricted:
            return True
        return bool(getattr(self.process, process, False))


@dataclass
class PossibleValue(Base):
    """One member of an enumerated constant set."""

    value: str = ""

    @property
    def literal(self) -> str:
        """Value written into generated code; falls back to the name."""
        return self.value if self.value != "" else self.name


@dataclass
class Property(Base):
    """A field, parameter or nested composite."""

    properties: List["Property"] = field(default_factory=list)
    parameters: List["Property"] = field(default_factory=list)
    possible_values: List[PossibleValue] = field(default_factory=list)

    @property
    def is_enum(self) -> bool:
        return bool(self.possible_values)

    def shape(self) -> Tuple:
        """
        Structural signature of this property.

        Two properties with equal shapes generate identical declarations,
        which lets the type registry reuse one generated type for both.
        """
        return (
            self.kind.value,
            self.type_tag,
            tuple((child.name, child.shape()) for child in self.properties),
            tuple((param.name, param.shape()) for param in self.parameters),
            tuple((value.name, value.literal) for value in self.possible_values),
        )


@dataclass
class Event(Base):
    """A named notification and its payload."""

    returns: List[Property] = field(default_factory=list)


@dataclass
class Method(Base):
    """A callable member."""

    signature: str = ""
    parameters: List[Property] = field(default_factory=list)
    returns: Optional[Property] = None


@dataclass
class Block(Base):
    """Top-level unit of a schema file."""

    # module shape
    events: List[Event] = field(default_factory=list)
    properties: List[Property] = field(default_factory=list)
    methods: List[Method] = field(default_factory=list)

    # class shape
    instance_name: str = ""
    instance_events: List[Event] = field(default_factory=list)
    instance_properties: List[Property] = field(default_factory=list)
    instance_methods: List[Method] = field(default_factory=list)
    constructor_method: Optional[Method] = None
    static_methods: List[Method] = field(default_factory=list)


@dataclass
class SchemaFile:
    """Ordered blocks of one schema document."""

    source: str
    blocks: List[Block] = field(default_factory=list)

    def __iter__(self):
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    @property
    def metadata_block(self) -> Optional[Block]:
        """First block carrying package metadata, if any."""
        for block in self.blocks:
            if block.version or block.repo_url or block.website_url:
                return block
        return None


# Deserialization


def _lookup(data: Dict[str, Any], key: str) -> Any:
    """Read a key, tolerating a capitalised variant of it."""
    if key in data:
        return data[key]
    return data.get(key[:1].upper() + key[1:])


def _expect_object(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(
            f"{path}: expected an object, got {type(value).__name__}"
        )
    return value


def _expect_list(data: Dict[str, Any], key: str, path: str) -> List[Any]:
    value = _lookup(data, key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise SchemaError(
            f"{path}.{key}: expected a list, got {type(value).__name__}"
        )
    return value


def _text(data: Dict[str, Any], key: str) -> str:
    value = _lookup(data, key)
    if value is None:
        return ""
    return str(value)


def _base_fields(data: Dict[str, Any], path: str) -> Dict[str, Any]:
    """Collect the shared Base fields of a schema node."""
    process_data = data.get("process") or {}
    if not isinstance(process_data, dict):
        raise SchemaError(f"{path}.process: expected an object")

    platforms = data.get("platforms") or []
    if not isinstance(platforms, list):
        raise SchemaError(f"{path}.platforms: expected a list")

    return {
        "name": _text(data, "name"),
        "raw_type": RawType.parse(data.get("type")),
        "description": _text(data, "description"),
        "platforms": [str(platform) for platform in platforms],
        "process": ProcessContext(
            main=bool(process_data.get("main", False)),
            renderer=bool(process_data.get("renderer", False)),
        ),
        "required": bool(data.get("required", False)),
        "version": _text(data, "version"),
        "repo_url": _text(data, "repoUrl"),
        "website_url": _text(data, "websiteUrl"),
        "slug": _text(data, "slug"),
    }


def parse_possible_value(value: Any, path: str) -> PossibleValue:
    data = _expect_object(value, path)
    return PossibleValue(**_base_fields(data, path), value=_text(data, "value"))


def parse_property(value: Any, path: str) -> Property:
    """Recursively deserialize a property node."""
    data = _expect_object(value, path)
    return Property(
        **_base_fields(data, path),
        properties=[
            parse_property(item, f"{path}.properties[{index}]")
            for index, item in enumerate(_expect_list(data, "properties", path))
        ],
        parameters=[
            parse_property(item, f"{path}.parameters[{index}]")
            for index, item in enumerate(_expect_list(data, "parameters", path))
        ],
        possible_values=[
            parse_possible_value(item, f"{path}.possibleValues[{index}]")
            for index, item in enumerate(
                _expect_list(data, "possibleValues", path)
            )
        ],
    )


def parse_event(value: Any, path: str) -> Event:
    data = _expect_object(value, path)
    return Event(
        **_base_fields(data, path),
        returns=[
            parse_property(item, f"{path}.returns[{index}]")
            for index, item in enumerate(_expect_list(data, "returns", path))
        ],
    )


def parse_method(value: Any, path: str) -> Method:
    data = _expect_object(value, path)

    returns = _lookup(data, "returns")
    if returns is not None:
        returns = parse_property(returns, f"{path}.returns")

    return Method(
        **_base_fields(data, path),
        signature=_text(data, "signature"),
        parameters=[
            parse_property(item, f"{path}.parameters[{index}]")
            for index, item in enumerate(_expect_list(data, "parameters", path))
        ],
        returns=returns,
    )


def _parse_many(parser, data: Dict[str, Any], key: str, path: str) -> list:
    return [
        parser(item, f"{path}.{key}[{index}]")
        for index, item in enumerate(_expect_list(data, key, path))
    ]


def parse_block(value: Any, path: str) -> Block:
    """Deserialize one top-level block, module or class shaped."""
    data = _expect_object(value, path)

    constructor = _lookup(data, "constructorMethod")
    if constructor is not None:
        constructor = parse_method(constructor, f"{path}.constructorMethod")

    return Block(
        **_base_fields(data, path),
        events=_parse_many(parse_event, data, "events", path),
        properties=_parse_many(parse_property, data, "properties", path),
        methods=_parse_many(parse_method, data, "methods", path),
        instance_name=_text(data, "instanceName"),
        instance_events=_parse_many(parse_event, data, "instanceEvents", path),
        instance_properties=_parse_many(
            parse_property, data, "instanceProperties", path
        ),
        instance_methods=_parse_many(parse_method, data, "instanceMethods", path),
        constructor_method=constructor,
        static_methods=_parse_many(parse_method, data, "staticMethods", path),
    )


def parse_schema_file(data: Any, source: str = "<memory>") -> SchemaFile:
    """
    Convert a decoded JSON document into a SchemaFile.

    Args:
        data: Decoded JSON, expected to be a list of block objects
        source: Name of the document, used in messages and output headers

    Returns:
        SchemaFile with blocks in document order

    Raises:
        SchemaError: If the document is not structurally well-formed
    """
    if not isinstance(data, list):
        raise SchemaError(
            f"{source}: expected a list of blocks, got {type(data).__name__}"
        )

    return SchemaFile(
        source=source,
        blocks=[
            parse_block(item, f"{source}[{index}]") for index, item in enumerate(data)
        ],
    )
