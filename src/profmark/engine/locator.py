# topmark:header:start
#
#   project      : ProfMark
#   file         : locator.py
#   file_relpath : src/profmark/engine/locator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Brace-depth block locator.

`BlockLocator` follows a brace-delimited block across consecutive lines:
it starts at a definition line, counts ``{`` and ``}`` character by
character, and reports the line that opened the block and the line whose
closing brace brought the depth back to zero.

Braces inside string or comment literals are counted like any other brace.
A line such as ``var s = "{";`` therefore desynchronizes the counter; the
scanner accepts this heuristic cost rather than tokenizing the source.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from profmark.config.logging import get_logger

if TYPE_CHECKING:
    from profmark.config.logging import ProfmarkLogger
    from profmark.engine.buffer import LineBuffer, LineNode

logger: ProfmarkLogger = get_logger(__name__)


class BlockLocator:
    """Track nested brace depth until a block closes.

    Attributes:
        buffer (LineBuffer): Buffer the tracked lines belong to.
        define_line (LineNode | None): Line where tracking started.
        start_line (LineNode | None): Line holding the first brace that took the depth from 0 to 1.
        end_line (LineNode | None): Line whose closing brace returned the depth to 0.
        depth (int): Current brace depth.
        finished (bool): True once the block has closed; further lines are ignored.
    """

    def __init__(self, buffer: LineBuffer) -> None:
        self.buffer: LineBuffer = buffer
        self.define_line: LineNode | None = None
        self.start_line: LineNode | None = None
        self.end_line: LineNode | None = None
        self.depth: int = 0
        self.finished: bool = False
        self._opened: bool = False
        self._last_fed: LineNode | None = None

    def start(self, line: LineNode) -> bool:
        """Begin tracking at ``line`` and feed it.

        Args:
            line (LineNode): The definition (signature) line.

        Returns:
            bool: Whether the block already closed on the definition line.
        """
        self.define_line = line
        self.start_line = None
        self.end_line = None
        self.depth = 0
        self.finished = False
        self._opened = False
        self._last_fed = None
        return self.feed(line)

    def feed(self, line: LineNode) -> bool:
        """Consume one line; each line must be fed exactly once, in order.

        Args:
            line (LineNode): The next line of the file.

        Returns:
            bool: Whether the block is now finished.

        Raises:
            RuntimeError: If called before `start`.
        """
        if self.define_line is None:
            raise RuntimeError("BlockLocator.feed() called before start()")
        if self.finished:
            return True

        self._last_fed = line
        saw_close: bool = False
        for ch in line.text:
            if ch == "{":
                if self.depth == 0 and self.start_line is None:
                    self.start_line = line
                self.depth += 1
                if self.depth > 0:
                    self._opened = True
            elif ch == "}":
                saw_close = True
                self.depth -= 1

        if self.depth == 0 and saw_close and self._opened:
            self.end_line = line
            self.finished = True
            logger.trace("Block closed at %r", line.text)
        return self.finished

    def block_text(self) -> list[str]:
        """Return the tracked text from the definition line to the closing line.

        For an unfinished block the text runs up to the last line fed.
        """
        if self.define_line is None:
            return []
        end: LineNode | None = self.end_line or self._last_fed
        if end is None:
            return [self.define_line.text]
        return [node.text for node in self.buffer.iter_range(self.define_line, end)]
