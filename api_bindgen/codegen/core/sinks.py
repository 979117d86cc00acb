"""
Output sinks for generated declarations.

A sink receives the text of exactly one block's emission pass. Text is
buffered while the block is emitted and only handed to its destination on
close, so a block that fails half way never leaves partial output behind.
"""

import io
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, List, Set

from ...logging_config import get_logger

if TYPE_CHECKING:
    from .generator import CodeGenerator
    from .schema import Block

logger = get_logger(__name__)


class SinkError(Exception):
    """Raised when an output destination cannot be opened, written or closed."""

    pass


class DeclarationSink(ABC):
    """Buffered destination for one block's declarations."""

    def __init__(self, block_name: str):
        self.block_name = block_name
        self.imports: Set[str] = set()
        self._buffer = io.StringIO()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def text(self) -> str:
        return self._buffer.getvalue()

    def write(self, text: str) -> None:
        if self._closed:
            raise SinkError(f"Sink for {self.block_name} is already closed")
        self._buffer.write(text)

    def add_import(self, path: str) -> None:
        self.imports.add(path)

    def close(self) -> None:
        """
        Hand the buffered text to the destination.

        The sink is released even when committing fails.

        Raises:
            SinkError: If the destination rejects the text
        """
        if self._closed:
            return
        try:
            self._commit(self.text)
        except Exception as e:
            raise SinkError(
                f"Failed to write output for {self.block_name}: {e}"
            ) from e
        finally:
            self._closed = True
            self._buffer.close()

    def discard(self) -> None:
        """Release the sink without committing anything."""
        if self._closed:
            return
        self._closed = True
        self._buffer.close()
        self._release()

    @abstractmethod
    def _commit(self, text: str) -> None:
        """Deliver the final text to the destination."""
        pass

    def _release(self) -> None:
        """Free destination resources after a discard."""
        pass


@dataclass
class Section:
    """Committed output of one block."""

    block_name: str
    text: str


class DeclarationUnit:
    """Generated output of one schema file, assembled from block sections."""

    def __init__(self, source: str):
        self.source = source
        self.sections: List[Section] = []
        self.imports: Set[str] = set()

    def commit(self, block_name: str, text: str, imports: Set[str]) -> None:
        self.sections.append(Section(block_name, text))
        self.imports.update(imports)

    @property
    def block_names(self) -> List[str]:
        return [section.block_name for section in self.sections]

    @property
    def body(self) -> str:
        return "\n\n".join(
            section.text.strip("\n") for section in self.sections if section.text
        )


class UnitSink(DeclarationSink):
    """Sink committing into an in-memory DeclarationUnit."""

    def __init__(self, unit: DeclarationUnit, block_name: str):
        super().__init__(block_name)
        self.unit = unit

    def _commit(self, text: str) -> None:
        self.unit.commit(self.block_name, text, self.imports)


class FileSink(DeclarationSink):
    """
    Sink writing one standalone file per block.

    Output goes to a temporary file next to the destination, created on
    construction so an unwritable destination is reported before any
    emission work is done. The destination itself is only replaced once the
    whole file has been written.
    """

    def __init__(
        self,
        path: Path,
        block_name: str,
        render_header: Callable[[List[str]], str],
    ):
        super().__init__(block_name)
        self.path = Path(path)
        self._render_header = render_header
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            self._tmp_path = Path(tmp_name)
            self._handle = os.fdopen(fd, "w", encoding="utf-8")
        except OSError as e:
            raise SinkError(f"Cannot open {self.path}: {e}") from e
        logger.debug("Opened %s for %s", self._tmp_path, block_name)

    def _commit(self, text: str) -> None:
        try:
            header = self._render_header(sorted(self.imports))
            self._handle.write(header.rstrip("\n") + "\n\n" + text.strip("\n") + "\n")
            self._handle.flush()
            self._handle.close()
            os.chmod(self._tmp_path, 0o644)
            os.replace(self._tmp_path, self.path)
        except Exception:
            self._release()
            raise

    def _release(self) -> None:
        self._handle.close()
        try:
            self._tmp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove partial output %s: %s", self._tmp_path, e)


SinkFactory = Callable[["Block"], DeclarationSink]


def unit_sink_factory(unit: DeclarationUnit) -> SinkFactory:
    """Factory committing every block into one shared unit."""

    def open_sink(block: "Block") -> DeclarationSink:
        return UnitSink(unit, block.name)

    return open_sink


def directory_sink_factory(
    out_dir: Path, generator: "CodeGenerator", source: str = ""
) -> SinkFactory:
    """
    Factory writing each block to its own file below ``out_dir``.

    A path is claimed by the first block that maps to it; a later block with
    the same path fails instead of overwriting that output.
    """
    claimed: Dict[Path, str] = {}

    def open_sink(block: "Block") -> DeclarationSink:
        path = generator.block_output_path(block, Path(out_dir))
        if path in claimed:
            raise SinkError(f"{path} is already written by block {claimed[path]}")
        package = generator.block_package_name(block)
        sink = FileSink(
            path,
            block.name,
            lambda imports: generator.render_file_header(
                package, imports, source=source, metadata=block
            ),
        )
        claimed[path] = block.name
        return sink

    return open_sink
