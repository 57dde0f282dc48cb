# topmark:header:start
#
#   project      : ProfMark
#   file         : processor.py
#   file_relpath : src/profmark/processor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File processor: scan, instrument and write back source files.

For each file the processor:

1. reads the text into a `LineBuffer` (see `profmark.file_io`),
2. runs the `MethodScanner` over every line in one forward pass,
3. instruments every finished, non-iterator `MethodBlock` in discovery order,
4. truncates the file and writes the final line sequence back.

Files are independent units of work processed one after the other. The
processor is not idempotent: running it on an already instrumented file
detects the same signatures again and inserts a second set of markers.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from profmark.config import Config, MutableConfig
from profmark.config.logging import get_logger
from profmark.engine.buffer import LineBuffer
from profmark.engine.scanner import MethodScanner, ScanResult
from profmark.errors import InvalidPathError
from profmark.file_io import SourceImage, read_source, write_source
from profmark.file_resolver import resolve_target_files

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from profmark.config.logging import ProfmarkLogger
    from profmark.engine.method import MethodBlock

logger: ProfmarkLogger = get_logger(__name__)

__all__ = [
    "FileProcessor",
    "FileResult",
    "InvalidPathError",
    "MethodOutcome",
    "MethodStatus",
    "instrument_lines",
]


class MethodStatus(str, Enum):
    """What happened to a finished method block."""

    INSTRUMENTED = "instrumented"
    SKIPPED_ITERATOR = "skipped (iterator)"


@dataclass(frozen=True)
class MethodOutcome:
    """Per-method result.

    Attributes:
        name (str): Method name captured from the signature.
        status (MethodStatus): Whether markers were inserted.
        inserted_lines (int): Number of marker lines inserted.
        line (int): 1-based line number of the signature in the original file.
        block_text (tuple[str, ...]): Original text from signature to closing line.
    """

    name: str
    status: MethodStatus
    inserted_lines: int
    line: int = 0
    block_text: tuple[str, ...] = ()


@dataclass
class FileResult:
    """Outcome of processing one file.

    Attributes:
        path (Path | None): Processed file (None for in-memory runs).
        original_lines (list[str]): Lines before instrumentation.
        updated_lines (list[str]): Lines after instrumentation.
        methods (list[MethodOutcome]): Finished methods in discovery order.
        unfinished (str | None): Name of a method whose block never closed.
        mixed_newlines (bool): Whether the file mixed newline styles (normalized on write).
        written (bool): Whether the file was rewritten on disk.
        bytes_written (int): Size of the written file.
    """

    path: Path | None
    original_lines: list[str]
    updated_lines: list[str]
    methods: list[MethodOutcome] = field(default_factory=lambda: [])
    unfinished: str | None = None
    mixed_newlines: bool = False
    written: bool = False
    bytes_written: int = 0

    @property
    def changed(self) -> bool:
        """Whether instrumentation altered the line sequence."""
        return self.updated_lines != self.original_lines

    @property
    def instrumented(self) -> list[MethodOutcome]:
        """Methods that received markers."""
        return [m for m in self.methods if m.status is MethodStatus.INSTRUMENTED]

    @property
    def skipped(self) -> list[MethodOutcome]:
        """Iterator-shaped methods left untouched."""
        return [m for m in self.methods if m.status is MethodStatus.SKIPPED_ITERATOR]

    @property
    def inserted_lines(self) -> int:
        """Total number of inserted marker lines."""
        return sum(m.inserted_lines for m in self.methods)

    def unified_diff(self) -> str:
        """Unified diff between the original and updated lines."""
        name: str = str(self.path) if self.path is not None else "<buffer>"
        return "".join(
            difflib.unified_diff(
                [f"{line}\n" for line in self.original_lines],
                [f"{line}\n" for line in self.updated_lines],
                fromfile=f"{name} (original)",
                tofile=f"{name} (instrumented)",
            )
        )


def _instrument_blocks(
    buffer: LineBuffer, config: Config, blocks: Iterable[MethodBlock]
) -> list[MethodOutcome]:
    # Line numbers must be taken before the first insertion shifts them.
    numbers: dict[int, int] = {id(node): i for i, node in enumerate(buffer.nodes(), start=1)}
    outcomes: list[MethodOutcome] = []
    for block in blocks:
        if block.start_line is None or block.end_line is None:
            logger.warning(
                "%s: %s closed without opening a body, left untouched",
                buffer.path,
                block.method_name,
            )
            continue
        text: tuple[str, ...] = tuple(block.block_text())
        if block.is_iterator_shaped(config.iterator_markers):
            logger.info("%s: %s is iterator-shaped, left untouched", buffer.path, block.method_name)
            status: MethodStatus = MethodStatus.SKIPPED_ITERATOR
            inserted: int = 0
        else:
            status = MethodStatus.INSTRUMENTED
            inserted = block.instrument(config.markers, config.iterator_markers)
        line: int = numbers.get(id(block.define_line), 0)
        outcomes.append(MethodOutcome(block.method_name, status, inserted, line, text))
    return outcomes


def instrument_lines(
    lines: Iterable[str],
    path: Path | str | None = None,
    config: Config | None = None,
) -> FileResult:
    """Instrument an in-memory sequence of lines.

    Args:
        lines (Iterable[str]): Line texts without terminators.
        path (Path | str | None): File name used for sample labels.
        config (Config | None): Marker templates and iterator markers.

    Returns:
        FileResult: The result; ``written`` is always False.
    """
    config = config or MutableConfig().freeze()
    buffer = LineBuffer(path)
    scanner = MethodScanner(buffer)
    original: list[str] = []
    for text in lines:
        original.append(text)
        scanner.push(buffer.append(text))
    scan: ScanResult = scanner.result()

    outcomes: list[MethodOutcome] = _instrument_blocks(buffer, config, scan.finished)
    return FileResult(
        path=buffer.path,
        original_lines=original,
        updated_lines=buffer.lines(),
        methods=outcomes,
        unfinished=scan.pending.method_name if scan.pending is not None else None,
    )


class FileProcessor:
    """Instrument files or directory trees in place.

    Args:
        config (Config | None): Runtime configuration (defaults when None).
        dry_run (bool): Compute results without writing files.
    """

    def __init__(self, config: Config | None = None, *, dry_run: bool = False) -> None:
        self.config: Config = config or MutableConfig().freeze()
        self.dry_run: bool = dry_run

    def resolve(self, target: Path | str) -> list[Path]:
        """Return the files ``process`` would handle for ``target``.

        Raises:
            InvalidPathError: If ``target`` is neither a file nor a directory.
        """
        return resolve_target_files(target, self.config)

    def process(self, target: Path | str) -> list[FileResult]:
        """Process a single file or every matching file below a directory.

        Args:
            target (Path | str): File or directory path.

        Returns:
            list[FileResult]: One result per processed file, in processing order.

        Raises:
            InvalidPathError: If ``target`` is neither a file nor a directory;
                no file is touched in that case.
        """
        return list(self.iter_process(target))

    def iter_process(self, target: Path | str) -> Iterator[FileResult]:
        """Yield one result per file as soon as that file has been written.

        The target is resolved eagerly, so an invalid path raises before any
        file is touched.

        Raises:
            InvalidPathError: If ``target`` is neither a file nor a directory.
        """
        files: list[Path] = self.resolve(target)
        if not files:
            logger.info("No matching files under %s", target)
        return (self.process_one_file(path) for path in files)

    def process_one_file(self, path: Path | str) -> FileResult:
        """Read, instrument and rewrite one file.

        Args:
            path (Path | str): File to process.

        Returns:
            FileResult: The per-file outcome.

        Raises:
            OSError: If the file cannot be read or written.
            UnicodeDecodeError: If the file cannot be decoded.
        """
        path = Path(path)
        logger.info("Processing file: %s", path)
        image: SourceImage = read_source(path, self.config.encoding)
        result: FileResult = instrument_lines(image.lines, path, self.config)
        result.mixed_newlines = image.mixed_newlines

        if result.unfinished is not None:
            logger.debug("%s: method %s never closed", path, result.unfinished)

        if self.dry_run:
            logger.debug("Dry run: %s not written", path)
            return result

        result.bytes_written = write_source(image, result.updated_lines)
        result.written = True
        return result
