# topmark:header:start
#
#   project      : ProfMark
#   file         : test_diff_render.py
#   file_relpath : tests/utils/test_diff_render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diff utils: rendering from text or sequences and empty inputs."""

from __future__ import annotations

from profmark.processor import FileResult, instrument_lines
from profmark.utils.diff import render_patch


def test_render_patch_accepts_str_and_list() -> None:
    """`render_patch` should accept both a diff string and an iterable of lines."""
    diff_text = "--- a\n+++ b\n-foo\n+bar\n"
    s1 = render_patch(diff_text)
    s2 = render_patch(diff_text.splitlines(False))

    assert isinstance(s1, str) and isinstance(s2, str) and s1 and s2
    assert s1 == s2


def test_render_patch_empty_input_is_safe() -> None:
    """Empty diff input should not raise and should return a string."""
    assert render_patch("") == ""


def test_render_instrumentation_diff() -> None:
    result: FileResult = instrument_lines(["void Foo()", "{", "}"], "Foo.cs")
    rendered: str = render_patch(result.unified_diff())
    assert "BeginSample" in rendered
    assert "Foo.cs (instrumented)" in rendered
