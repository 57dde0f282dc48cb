# topmark:header:start
#
#   project      : ProfMark
#   file         : test_buffer.py
#   file_relpath : tests/engine/test_buffer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the linked `LineBuffer`."""

from __future__ import annotations

from pathlib import Path

import pytest

from profmark.engine.buffer import LineBuffer, LineNode, leading_whitespace
from tests.conftest import mark_engine, parametrize


@mark_engine
def test_append_preserves_order_and_size() -> None:
    buf = LineBuffer(lines=["a", "b"])
    buf.append("c")
    assert buf.lines() == ["a", "b", "c"]
    assert len(buf) == 3
    assert buf.first is not None and buf.first.text == "a"
    assert buf.last is not None and buf.last.text == "c"


@mark_engine
def test_empty_buffer() -> None:
    buf = LineBuffer()
    assert buf.first is None
    assert buf.last is None
    assert buf.lines() == []
    assert buf.file_name == ""


@mark_engine
def test_file_name_is_base_name() -> None:
    buf = LineBuffer(Path("Assets") / "Scripts" / "Player.cs")
    assert buf.file_name == "Player.cs"


@mark_engine
def test_insert_after_and_before_keep_references_valid() -> None:
    buf = LineBuffer()
    a: LineNode = buf.append("a")
    c: LineNode = buf.append("c")
    b: LineNode = buf.insert_after(a, "b")
    buf.insert_before(a, "start")
    buf.insert_after(c, "end")
    buf.insert_before(c, "before-c")

    assert buf.lines() == ["start", "a", "b", "before-c", "c", "end"]
    assert b.prev is a and a.next is b
    assert buf.first is not None and buf.first.text == "start"
    assert buf.last is not None and buf.last.text == "end"
    assert len(buf) == 6


@mark_engine
def test_insertions_never_touch_existing_text() -> None:
    buf = LineBuffer(lines=["x", "y"])
    nodes: list[LineNode] = list(buf.nodes())
    buf.insert_after(nodes[0], "z")
    assert [n.text for n in nodes] == ["x", "y"]


@mark_engine
def test_iter_range_is_inclusive() -> None:
    buf = LineBuffer(lines=["0", "1", "2", "3"])
    nodes: list[LineNode] = list(buf.nodes())
    assert [n.text for n in buf.iter_range(nodes[1], nodes[2])] == ["1", "2"]
    assert [n.text for n in buf.iter_range(nodes[3], nodes[3])] == ["3"]


@mark_engine
def test_foreign_node_is_rejected() -> None:
    other = LineBuffer(lines=["foreign"])
    buf = LineBuffer(lines=["mine"])
    assert other.first is not None
    with pytest.raises(ValueError):
        buf.insert_after(other.first, "x")


@mark_engine
@parametrize(
    "line,expected",
    [
        ("", ""),
        ("code", ""),
        ("    code", "    "),
        ("\t\tcode", "\t\t"),
        (" \t mixed", " \t "),
        ("   ", "   "),
    ],
)
def test_leading_whitespace(line: str, expected: str) -> None:
    assert leading_whitespace(line) == expected
