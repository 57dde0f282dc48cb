# topmark:header:start
#
#   project      : ProfMark
#   file         : test_locator.py
#   file_relpath : tests/engine/test_locator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the brace-depth `BlockLocator`."""

from __future__ import annotations

import pytest

from profmark.engine.buffer import LineBuffer, LineNode
from profmark.engine.locator import BlockLocator
from tests.conftest import mark_engine


def _track(lines: list[str]) -> tuple[BlockLocator, list[LineNode]]:
    buf = LineBuffer(lines=lines)
    nodes: list[LineNode] = list(buf.nodes())
    loc = BlockLocator(buf)
    done: bool = loc.start(nodes[0])
    for node in nodes[1:]:
        if done:
            break
        done = loc.feed(node)
    return loc, nodes


@mark_engine
def test_brace_on_next_line() -> None:
    loc, nodes = _track(["void Foo()", "{", "    Bar();", "}", "int x;"])
    assert loc.finished
    assert loc.define_line is nodes[0]
    assert loc.start_line is nodes[1]
    assert loc.end_line is nodes[3]
    assert loc.depth == 0


@mark_engine
def test_nested_blocks_close_on_outer_brace() -> None:
    loc, nodes = _track(
        [
            "void Foo()",
            "{",
            "    if (x)",
            "    {",
            "        Bar();",
            "    }",
            "}",
        ]
    )
    assert loc.start_line is nodes[1]
    assert loc.end_line is nodes[6]


@mark_engine
def test_one_line_block_closes_on_definition_line() -> None:
    buf = LineBuffer(lines=["int Foo() { return 1; }"])
    assert buf.first is not None
    loc = BlockLocator(buf)
    assert loc.start(buf.first) is True
    assert loc.start_line is buf.first
    assert loc.end_line is buf.first


@mark_engine
def test_close_then_reopen_on_same_line_keeps_tracking() -> None:
    loc, nodes = _track(["void Foo()", "{", "    } else {", "}"])
    assert loc.start_line is nodes[1]
    assert loc.end_line is nodes[3]


@mark_engine
def test_block_without_close_stays_open() -> None:
    loc, _ = _track(["void Foo()", "{", "    Bar();"])
    assert not loc.finished
    assert loc.end_line is None
    assert loc.block_text() == ["void Foo()", "{", "    Bar();"]


@mark_engine
def test_brace_inside_string_desynchronizes() -> None:
    loc, nodes = _track(["void Foo()", "{", '    var s = "{";', "}", "void Bar()", "{", "}"])
    # The literal brace is counted, so the block swallows the next method.
    assert not loc.finished
    assert loc.depth == 1
    assert loc.block_text()[-1] == nodes[-1].text


@mark_engine
def test_finished_locator_ignores_further_lines() -> None:
    loc, nodes = _track(["void Foo()", "{", "}", "{", "{"])
    assert loc.finished
    assert loc.feed(nodes[3]) is True
    assert loc.end_line is nodes[2]
    assert loc.depth == 0


@mark_engine
def test_feed_before_start_raises() -> None:
    buf = LineBuffer(lines=["{"])
    assert buf.first is not None
    with pytest.raises(RuntimeError):
        BlockLocator(buf).feed(buf.first)


@mark_engine
def test_block_text_spans_definition_to_close() -> None:
    loc, _ = _track(["void Foo()", "{", "    Bar();", "}", "after"])
    assert loc.block_text() == ["void Foo()", "{", "    Bar();", "}"]


@mark_engine
def test_close_before_open_does_not_finish() -> None:
    loc, _ = _track(["    await Fetch(a)", "        .ConfigureAwait(false);", "    } else {", "    }"])
    assert not loc.finished
    assert loc.start_line is None
    assert loc.end_line is None
    assert loc.depth == -1


@mark_engine
def test_negative_depth_then_real_block_finishes() -> None:
    loc, nodes = _track(["Fetch(a)", "} {", "{", "}"])
    assert loc.finished
    assert loc.start_line is nodes[2]
    assert loc.end_line is nodes[3]
