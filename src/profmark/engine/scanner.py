# topmark:header:start
#
#   project      : ProfMark
#   file         : scanner.py
#   file_relpath : src/profmark/engine/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Single-pass method scanner.

`MethodScanner` is a two-state machine fed one line at a time:

* ``IDLE``: the line is checked with the signature heuristic; a candidate
  line creates a `MethodBlock` and switches to ``ACTIVE``.
* ``ACTIVE``: the line is fed to the active block only. Nested local
  functions and lambdas are never detected on their own; they just count
  braces for the enclosing method.

When the active block closes it is appended to `MethodScanner.finished_blocks`
and the scanner returns to ``IDLE``. A block still active at end of input is
left in `MethodScanner.pending` and is never instrumented.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from profmark.config.logging import get_logger
from profmark.engine.method import MethodBlock
from profmark.engine.signature import SignatureMatch, match_signature

if TYPE_CHECKING:
    from profmark.config.logging import ProfmarkLogger
    from profmark.engine.buffer import LineBuffer, LineNode

logger: ProfmarkLogger = get_logger(__name__)


class ScanState(str, Enum):
    """Scanner state."""

    IDLE = "idle"
    ACTIVE = "active"


@dataclass
class ScanResult:
    """Outcome of scanning a whole buffer.

    Attributes:
        finished (list[MethodBlock]): Closed method blocks in discovery order.
        pending (MethodBlock | None): Block left open at end of input, if any.
    """

    finished: list[MethodBlock] = field(default_factory=lambda: [])
    pending: MethodBlock | None = None


class MethodScanner:
    """Feed lines of one buffer and collect finished method blocks."""

    def __init__(self, buffer: LineBuffer) -> None:
        self.buffer: LineBuffer = buffer
        self.state: ScanState = ScanState.IDLE
        self.finished_blocks: list[MethodBlock] = []
        self._active: MethodBlock | None = None

    @property
    def active(self) -> MethodBlock | None:
        """Block currently being tracked (None while idle)."""
        return self._active

    @property
    def pending(self) -> MethodBlock | None:
        """Unfinished block at the current point of the scan."""
        return self._active

    def push(self, node: LineNode) -> MethodBlock | None:
        """Process the next line of the buffer.

        Args:
            node (LineNode): The next line, already part of ``self.buffer``.

        Returns:
            MethodBlock | None: The block that finished on this line, if any.
        """
        if self.state is ScanState.IDLE:
            match: SignatureMatch | None = match_signature(node.text)
            if match is None:
                return None
            logger.debug("Candidate method %r at %r", match.method_name, node.text)
            self._active = MethodBlock(self.buffer, match.method_name)
            self.state = ScanState.ACTIVE
            done: bool = self._active.start(node)
        else:
            assert self._active is not None
            done = self._active.feed(node)

        if not done:
            return None
        return self._finish()

    def _finish(self) -> MethodBlock:
        block: MethodBlock | None = self._active
        assert block is not None
        self.finished_blocks.append(block)
        self._active = None
        self.state = ScanState.IDLE
        logger.debug(
            "Finished method %s:\n%s", block.method_name, "\n".join(block.block_text())
        )
        return block

    def result(self) -> ScanResult:
        """Snapshot of finished and pending blocks."""
        if self._active is not None:
            logger.debug(
                "Method %s never closed before end of input; left untouched",
                self._active.method_name,
            )
        return ScanResult(finished=list(self.finished_blocks), pending=self._active)


def scan_buffer(buffer: LineBuffer) -> ScanResult:
    """Scan every line of ``buffer`` in one forward pass.

    Args:
        buffer (LineBuffer): Buffer to scan; it is not modified.

    Returns:
        ScanResult: Finished blocks and the pending block, if any.
    """
    scanner = MethodScanner(buffer)
    for node in list(buffer.nodes()):
        scanner.push(node)
    return scanner.result()
