"""
Per-block declaration context.

Owns the type namespace of one block's emission pass: nested anonymous
composites and enumerated constants discovered while the block is emitted
get unique generated names here, and their declarations are queued until
the primary declaration has been written.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Deque, Dict, Iterable, List, Optional, Set, Tuple

from ...logging_config import get_logger
from .naming import SymbolNormalizer
from .schema import Base, Block, Property
from .sinks import SinkFactory

if TYPE_CHECKING:
    from .generator import CodeGenerator

logger = get_logger(__name__)


class PendingKind(Enum):
    """What a queued declaration describes."""

    TYPE = "type"  # nested composite (struct or function type)
    CONST = "const"  # enumerated constant set


@dataclass
class PendingDecl:
    """A generated name waiting for its declaration to be emitted."""

    kind: PendingKind
    name: str
    prop: Property
    parent: Optional[Base]


class DeclarationContext:
    """Naming registry and pending-declaration queue for one block."""

    def __init__(
        self,
        block: Block,
        generator: "CodeGenerator",
        open_sink: SinkFactory,
        normalizer: SymbolNormalizer,
        reserved: Iterable[str] = (),
    ):
        """
        Open the block's sink and set up an empty namespace.

        Args:
            block: Block being emitted
            generator: Emitter that renders queued declarations
            open_sink: Factory returning the block's output sink
            normalizer: Symbol normalizer used for generated names
            reserved: Names already taken in the output unit (other blocks'
                top-level declarations)

        Raises:
            SinkError: If the output sink cannot be opened
        """
        self.block = block
        self.generator = generator
        self.normalizer = normalizer
        self.block_symbol = normalizer.base_symbol(block)
        self.block_stem = normalizer.stem(block)

        self._names: Set[str] = set(reserved)
        self._names.add(self.block_symbol)
        self._by_shape: Dict[Tuple, str] = {}
        self._scopes: Dict[int, str] = {}
        self._pending: Deque[PendingDecl] = deque()
        self._sections = 0

        self.declared: List[PendingDecl] = []
        self.warnings: List[str] = []

        self.sink = open_sink(block)

    # Naming

    def scope_for(self, parent: Optional[Base]) -> str:
        """Prefix for types nested below ``parent``."""
        if parent is None or parent is self.block:
            return self.block_stem
        allocated = self._scopes.get(id(parent))
        if allocated:
            return allocated
        return self.block_stem + self.normalizer.symbol(parent.name)

    def reserve(self, candidate: str) -> str:
        """
        Claim a name, appending the smallest free ordinal when taken.

        Returns:
            The name actually claimed
        """
        name = candidate
        ordinal = 2
        while name in self._names:
            name = f"{candidate}{ordinal}"
            ordinal += 1
        if name != candidate:
            logger.debug("Name %s taken, using %s", candidate, name)
        self._names.add(name)
        return name

    def is_taken(self, name: str) -> bool:
        return name in self._names

    def new_type(self, prop: Property, parent: Optional[Base]) -> str:
        """Allocate a named composite type for a nested property."""
        return self._register(PendingKind.TYPE, prop, parent)

    def new_const(self, prop: Property, parent: Optional[Base]) -> str:
        """Allocate a named constant-set type for an enumerated property."""
        return self._register(PendingKind.CONST, prop, parent)

    def _register(
        self, kind: PendingKind, prop: Property, parent: Optional[Base]
    ) -> str:
        symbol = self.normalizer.symbol(prop.name)

        # Same name and same structure anywhere in the block: one declaration
        key = (kind, symbol, prop.shape())
        existing = self._by_shape.get(key)
        if existing is not None:
            logger.debug("Reusing %s for %s", existing, prop.name or "<unnamed>")
            return existing

        name = self.reserve(self.scope_for(parent) + symbol)
        self._by_shape[key] = name
        self._scopes[id(prop)] = name
        self._pending.append(PendingDecl(kind, name, prop, parent))
        return name

    @property
    def pending(self) -> List[PendingDecl]:
        return list(self._pending)

    @property
    def names(self) -> Set[str]:
        return set(self._names)

    # Output

    def write_section(self, text: str) -> None:
        """Write one top-level declaration, separated by a blank line."""
        text = text.strip("\n")
        if not text:
            return
        if self._sections:
            self.sink.write("\n\n")
        self.sink.write(text)
        self._sections += 1

    def require_import(self, path: str) -> None:
        if path:
            self.sink.add_import(path)

    def warn(self, message: str) -> None:
        logger.warning("%s: %s", self.block.name, message)
        self.warnings.append(message)

    def decl_new_types(self) -> int:
        """
        Emit every queued declaration in discovery order.

        Declarations emitted here may queue further ones; those are drained
        in the same call.

        Returns:
            Number of declarations emitted
        """
        count = 0
        while self._pending:
            pending = self._pending.popleft()
            self.generator.declare_pending(pending, self)
            self.declared.append(pending)
            count += 1
        return count

    def close(self) -> None:
        """
        Finalize the block's output.

        Raises:
            SinkError: If the sink cannot be finalized
        """
        if self._pending:
            logger.warning(
                "%s: closing with %d undeclared types",
                self.block.name,
                len(self._pending),
            )
        self.sink.close()

    def abandon(self) -> None:
        """Release the sink, dropping everything written so far."""
        self.sink.discard()
