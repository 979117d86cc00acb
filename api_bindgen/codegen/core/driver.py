"""
File driver.

Walks the blocks of one schema file in order and runs one emission pass per
block: open a declaration context, emit the primary declaration, drain the
queued nested declarations, and close. Failures stay local to their block.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Set

from ...logging_config import get_logger
from .context import DeclarationContext
from .schema import Block, SchemaFile
from .sinks import SinkError, SinkFactory

if TYPE_CHECKING:
    from .generator import CodeGenerator

logger = get_logger(__name__)


class BlockStatus(Enum):
    GENERATED = "generated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class BlockOutcome:
    """Result of one block's emission pass."""

    name: str
    status: BlockStatus
    reason: str = ""
    nested_types: int = 0


@dataclass
class DriverReport:
    """Per-block results for one schema file."""

    source: str
    outcomes: List[BlockOutcome] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def _with_status(self, status: BlockStatus) -> List[BlockOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is status]

    @property
    def generated(self) -> List[BlockOutcome]:
        return self._with_status(BlockStatus.GENERATED)

    @property
    def skipped(self) -> List[BlockOutcome]:
        return self._with_status(BlockStatus.SKIPPED)

    @property
    def failed(self) -> List[BlockOutcome]:
        return self._with_status(BlockStatus.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        text = (
            f"{self.source}: {len(self.generated)} generated, "
            f"{len(self.skipped)} skipped, {len(self.failed)} failed"
        )
        for outcome in self.failed:
            text += f"\n  {outcome.name}: {outcome.reason}"
        return text


class FileDriver:
    """Runs the per-block emission passes of a schema file."""

    def __init__(
        self,
        generator: "CodeGenerator",
        open_sink: SinkFactory,
        process_filter: Optional[str] = None,
        shared_namespace: bool = True,
    ):
        """
        Args:
            generator: Emitter for the target language
            open_sink: Factory opening each block's output sink
            process_filter: Only emit blocks available in this process
            shared_namespace: Blocks share one output package, so every name a
                committed block declared is reserved for the blocks after it
        """
        self.generator = generator
        self.open_sink = open_sink
        self.process_filter = process_filter
        self.shared_namespace = shared_namespace

    def run(self, schema_file: SchemaFile) -> DriverReport:
        """Process every block, strictly in schema order."""
        report = DriverReport(source=schema_file.source)
        normalizer = self.generator.normalizer
        reserved = {normalizer.base_symbol(block) for block in schema_file}

        for block in schema_file:
            outcome = self._process_block(block, reserved, report)
            report.outcomes.append(outcome)

        logger.info(report.summary())
        return report

    def _process_block(
        self, block: Block, reserved: Set[str], report: DriverReport
    ) -> BlockOutcome:
        logger.info("Processing %s", block.name)

        if not block.available_in(self.process_filter):
            logger.info(
                "Skipping %s: not available in %s process",
                block.name,
                self.process_filter,
            )
            return BlockOutcome(
                block.name,
                BlockStatus.SKIPPED,
                f"not available in {self.process_filter} process",
            )

        try:
            ctx = DeclarationContext(
                block,
                self.generator,
                self.open_sink,
                self.generator.normalizer,
                reserved,
            )
        except SinkError as e:
            logger.error("%s: %s", block.name, e)
            return BlockOutcome(block.name, BlockStatus.FAILED, str(e))

        try:
            self.generator.declare_block(block, ctx)
            nested = ctx.decl_new_types()
        except Exception as e:
            logger.error("%s: emission failed: %s", block.name, e, exc_info=True)
            ctx.abandon()
            report.warnings.extend(ctx.warnings)
            return BlockOutcome(block.name, BlockStatus.FAILED, str(e))

        report.warnings.extend(ctx.warnings)

        try:
            ctx.close()
        except SinkError as e:
            logger.error("%s: %s", block.name, e)
            return BlockOutcome(block.name, BlockStatus.FAILED, str(e))

        if self.shared_namespace:
            reserved.update(ctx.names)
        return BlockOutcome(block.name, BlockStatus.GENERATED, nested_types=nested)
