# topmark:header:start
#
#   project      : ProfMark
#   file         : buffer.py
#   file_relpath : src/profmark/engine/buffer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Linked line buffer holding one source file in memory.

The buffer is a doubly linked list of `LineNode` records. Node references
handed out by `LineBuffer.append` stay valid across later insertions, so
insertion points computed for one method remain usable after markers have
been inserted for another.

The buffer never deletes or rewrites a line; the only mutations are the
`insert_before` / `insert_after` operations.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class LineNode:
    """One line of text linked to its neighbours."""

    __slots__ = ("text", "prev", "next", "owner")

    def __init__(self, text: str, owner: LineBuffer) -> None:
        self.text: str = text
        self.prev: LineNode | None = None
        self.next: LineNode | None = None
        self.owner: LineBuffer = owner

    def __repr__(self) -> str:
        return f"LineNode({self.text!r})"


class LineBuffer:
    """Ordered, mutable sequence of text lines for one file.

    Attributes:
        path (Path | None): File the lines were read from, if any.
    """

    def __init__(self, path: Path | str | None = None, lines: Iterable[str] = ()) -> None:
        self.path: Path | None = Path(path) if path is not None else None
        self._first: LineNode | None = None
        self._last: LineNode | None = None
        self._size: int = 0
        for text in lines:
            self.append(text)

    @property
    def first(self) -> LineNode | None:
        """First node, or None for an empty buffer."""
        return self._first

    @property
    def last(self) -> LineNode | None:
        """Last node, or None for an empty buffer."""
        return self._last

    @property
    def file_name(self) -> str:
        """Base name of the backing file (empty when the buffer has no path)."""
        return self.path.name if self.path is not None else ""

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[str]:
        return (node.text for node in self.nodes())

    def __repr__(self) -> str:
        return f"LineBuffer(path={self.path!r}, lines={self._size})"

    def nodes(self) -> Iterator[LineNode]:
        """Iterate over all nodes in order."""
        node: LineNode | None = self._first
        while node is not None:
            yield node
            node = node.next

    def iter_range(self, start: LineNode, end: LineNode) -> Iterator[LineNode]:
        """Iterate from ``start`` to ``end`` inclusive.

        If ``end`` does not follow ``start`` the walk stops at the last line.
        """
        self._check_owned(start)
        node: LineNode | None = start
        while node is not None:
            yield node
            if node is end:
                return
            node = node.next

    def lines(self) -> list[str]:
        """Return the current line texts as a list."""
        return list(self)

    def append(self, text: str) -> LineNode:
        """Add a line at the end and return its node."""
        node = LineNode(text, self)
        if self._last is None:
            self._first = self._last = node
        else:
            node.prev = self._last
            self._last.next = node
            self._last = node
        self._size += 1
        return node

    def insert_after(self, ref: LineNode, text: str) -> LineNode:
        """Insert ``text`` right after ``ref``; ``ref`` stays valid."""
        self._check_owned(ref)
        node = LineNode(text, self)
        node.prev = ref
        node.next = ref.next
        if ref.next is None:
            self._last = node
        else:
            ref.next.prev = node
        ref.next = node
        self._size += 1
        return node

    def insert_before(self, ref: LineNode, text: str) -> LineNode:
        """Insert ``text`` right before ``ref``; ``ref`` stays valid."""
        self._check_owned(ref)
        node = LineNode(text, self)
        node.next = ref
        node.prev = ref.prev
        if ref.prev is None:
            self._first = node
        else:
            ref.prev.next = node
        ref.prev = node
        self._size += 1
        return node

    def _check_owned(self, ref: LineNode) -> None:
        if ref.owner is not self:
            raise ValueError(f"{ref!r} does not belong to {self!r}")


def leading_whitespace(line: str) -> str:
    """Return the leading run of spaces and tabs of ``line``.

    Args:
        line (str): Line text without its terminator.

    Returns:
        str: The exact indentation prefix (empty when the line is not indented).
    """
    end: int = 0
    for ch in line:
        if ch not in (" ", "\t"):
            break
        end += 1
    return line[:end]
