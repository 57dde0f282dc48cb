# topmark:header:start
#
#   project      : ProfMark
#   file         : method.py
#   file_relpath : src/profmark/engine/method.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Method blocks: iterator detection and marker insertion.

`MethodBlock` is a `BlockLocator` that knows which method it tracks. Once
the block has closed, `MethodBlock.instrument` rewrites the shared
`LineBuffer` in place:

* a begin-sample line right after the line that opened the body,
* an end-sample line right before the closing line (natural exit),
* an end-sample line right before every line mentioning ``return``
  (early exits; no begin marker follows since the method is leaving).

All insertion points are collected before the first insertion, and every
inserted line is indented with the opening line's indentation plus one
indent unit. Iterator-shaped methods (``yield return`` / ``yield break``)
are left untouched.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from profmark.config.logging import get_logger
from profmark.constants import DEFAULT_ITERATOR_MARKERS
from profmark.engine.buffer import leading_whitespace
from profmark.engine.locator import BlockLocator
from profmark.engine.markers import ProfilerMarkers, sample_label

if TYPE_CHECKING:
    from collections.abc import Iterable

    from profmark.config.logging import ProfmarkLogger
    from profmark.engine.buffer import LineBuffer, LineNode

logger: ProfmarkLogger = get_logger(__name__)

_RETURN_TOKEN_RE: Final[re.Pattern[str]] = re.compile(r"\breturn\b")


class MethodBlock(BlockLocator):
    """A method body located in a `LineBuffer`.

    Attributes:
        method_name (str): Name captured from the signature line.
    """

    def __init__(self, buffer: LineBuffer, method_name: str) -> None:
        super().__init__(buffer)
        self.method_name: str = method_name

    def __repr__(self) -> str:
        return f"MethodBlock({self.method_name!r}, finished={self.finished})"

    @property
    def label(self) -> str:
        """Sample label: ``"<file base name> <method name>"``."""
        return sample_label(self.buffer.file_name, self.method_name)

    def body_nodes(self) -> list[LineNode]:
        """Nodes from the opening line to the closing line inclusive.

        Raises:
            RuntimeError: If the block has not finished or lacks a start or end line.
        """
        if not self.finished:
            raise RuntimeError(f"{self!r} has not finished")
        if self.start_line is None or self.end_line is None:
            missing: str = "start_line" if self.start_line is None else "end_line"
            raise RuntimeError(f"{self!r} has no {missing}")
        return list(self.buffer.iter_range(self.start_line, self.end_line))

    def is_iterator_shaped(self, markers: Iterable[str] = DEFAULT_ITERATOR_MARKERS) -> bool:
        """Return True when the body contains a coroutine marker such as ``yield return``."""
        needles: tuple[str, ...] = tuple(markers)
        return any(
            needle in node.text for node in self.body_nodes() for needle in needles
        )

    def early_exit_lines(self) -> list[LineNode]:
        """Body lines holding a ``return`` token."""
        return [node for node in self.body_nodes() if _RETURN_TOKEN_RE.search(node.text)]

    def instrument(
        self,
        markers: ProfilerMarkers | None = None,
        iterator_markers: Iterable[str] = DEFAULT_ITERATOR_MARKERS,
    ) -> int:
        """Insert begin/end sample markers around the method body.

        Args:
            markers (ProfilerMarkers | None): Marker templates (defaults when None).
            iterator_markers (Iterable[str]): Substrings marking iterator-shaped bodies.

        Returns:
            int: Number of inserted lines (0 for iterator-shaped methods).

        Raises:
            RuntimeError: If the block has not finished.
        """
        markers = markers or ProfilerMarkers()
        if self.is_iterator_shaped(iterator_markers):
            logger.debug("Skipping iterator-shaped method %s", self.method_name)
            return 0

        assert self.start_line is not None and self.end_line is not None
        early_exits: list[LineNode] = self.early_exit_lines()

        line_start: str = leading_whitespace(self.start_line.text) + markers.indent_unit
        self.buffer.insert_after(self.start_line, markers.begin_line(line_start, self.label))
        self.buffer.insert_before(self.end_line, markers.end_line(line_start))
        for node in early_exits:
            self.buffer.insert_before(node, markers.end_line(line_start))

        inserted: int = 2 + len(early_exits)
        logger.debug(
            "Instrumented %s: %d line(s) inserted (%d early exit(s))",
            self.label,
            inserted,
            len(early_exits),
        )
        return inserted
