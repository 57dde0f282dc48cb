# topmark:header:start
#
#   project      : ProfMark
#   file         : test_processor.py
#   file_relpath : tests/test_processor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end tests for `FileProcessor` and `instrument_lines`."""

from __future__ import annotations

from pathlib import Path

import pytest

from profmark.constants import DEFAULT_END_MARKER
from profmark.errors import InvalidPathError
from profmark.processor import FileProcessor, FileResult, MethodStatus, instrument_lines
from tests.conftest import make_config, mark_integration, read_lines, write_source

BEGIN = 'UnityEngine.Profiling.Profiler.BeginSample("{}");'
END = DEFAULT_END_MARKER

TWO_METHODS: list[str] = [
    "using UnityEngine;",
    "",
    "public class Player : MonoBehaviour",
    "{",
    "    void Start()",
    "    {",
    "        Init();",
    "    }",
    "",
    "    int Score()",
    "    {",
    "        if (dead)",
    "        {",
    "            return 0;",
    "        }",
    "        Tally();",
    "    }",
    "}",
]


@mark_integration
def test_two_sibling_methods(tmp_path: Path) -> None:
    src: Path = write_source(tmp_path / "Player.cs", TWO_METHODS)
    results: list[FileResult] = FileProcessor().process(src)

    assert len(results) == 1
    result: FileResult = results[0]
    assert [m.inserted_lines for m in result.methods] == [2, 3]
    assert [m.line for m in result.methods] == [5, 10]
    assert result.written
    assert read_lines(src) == [
        "using UnityEngine;",
        "",
        "public class Player : MonoBehaviour",
        "{",
        "    void Start()",
        "    {",
        "    \t" + BEGIN.format("Player.cs Start"),
        "        Init();",
        "    \t" + END,
        "    }",
        "",
        "    int Score()",
        "    {",
        "    \t" + BEGIN.format("Player.cs Score"),
        "        if (dead)",
        "        {",
        "    \t" + END,
        "            return 0;",
        "        }",
        "        Tally();",
        "    \t" + END,
        "    }",
        "}",
    ]


@mark_integration
def test_original_lines_keep_relative_order(tmp_path: Path) -> None:
    src: Path = write_source(tmp_path / "Player.cs", TWO_METHODS)
    FileProcessor().process(src)
    remaining: list[str] = [
        line for line in read_lines(src) if "UnityEngine.Profiling.Profiler" not in line
    ]
    assert remaining == TWO_METHODS


@mark_integration
def test_file_without_methods_is_unchanged(tmp_path: Path) -> None:
    raw: bytes = b"using UnityEngine;\r\n\r\npublic enum Mode { A, B }\r\n"
    src: Path = tmp_path / "Mode.cs"
    src.write_bytes(raw)

    result: FileResult = FileProcessor().process_one_file(src)

    assert not result.changed
    assert result.methods == []
    assert src.read_bytes() == raw


@mark_integration
def test_second_run_inserts_markers_again(tmp_path: Path) -> None:
    src: Path = write_source(tmp_path / "Player.cs", TWO_METHODS)
    processor = FileProcessor()
    processor.process(src)
    once: list[str] = read_lines(src)
    processor.process(src)
    twice: list[str] = read_lines(src)

    begin_start: str = "    \t" + BEGIN.format("Player.cs Start")
    assert once.count(begin_start) == 1
    assert twice.count(begin_start) == 2
    assert len(twice) == len(once) + 5


@mark_integration
def test_iterator_method_is_reported_and_untouched(tmp_path: Path) -> None:
    lines: list[str] = [
        "class Fader",
        "{",
        "    IEnumerator Fade()",
        "    {",
        "        yield return null;",
        "    }",
        "    void Stop()",
        "    {",
        "    }",
        "}",
    ]
    src: Path = write_source(tmp_path / "Fader.cs", lines)
    result: FileResult = FileProcessor().process_one_file(src)

    assert [m.status for m in result.methods] == [
        MethodStatus.SKIPPED_ITERATOR,
        MethodStatus.INSTRUMENTED,
    ]
    assert [m.name for m in result.skipped] == ["Fade"]
    out: list[str] = read_lines(src)
    assert out[:6] == lines[:6]
    assert result.inserted_lines == 2


@mark_integration
def test_unbalanced_method_is_skipped_silently(tmp_path: Path) -> None:
    lines: list[str] = ["void Foo()", "{", "    Bar();"]
    src: Path = write_source(tmp_path / "Broken.cs", lines)
    result: FileResult = FileProcessor().process_one_file(src)

    assert result.methods == []
    assert result.unfinished == "Foo"
    assert read_lines(src) == lines


@mark_integration
def test_dry_run_does_not_write(tmp_path: Path) -> None:
    src: Path = write_source(tmp_path / "Player.cs", TWO_METHODS)
    before: bytes = src.read_bytes()

    result: FileResult = FileProcessor(dry_run=True).process_one_file(src)

    assert result.changed
    assert not result.written
    assert src.read_bytes() == before
    diff: str = result.unified_diff()
    assert "+    \t" + BEGIN.format("Player.cs Start") in diff


@mark_integration
def test_directory_processes_matching_files_only(tmp_path: Path) -> None:
    a: Path = write_source(tmp_path / "A.cs", ["void A()", "{", "}"])
    b: Path = write_source(tmp_path / "sub" / "B.cs", ["void B()", "{", "}"])
    txt: Path = write_source(tmp_path / "notes.txt", ["void C()", "{", "}"])

    results: list[FileResult] = FileProcessor().process(tmp_path)

    assert [r.path for r in results] == [a, b]
    assert len(read_lines(a)) == 5
    assert len(read_lines(b)) == 5
    assert read_lines(txt) == ["void C()", "{", "}"]


@mark_integration
def test_single_file_target_ignores_extension(tmp_path: Path) -> None:
    src: Path = write_source(tmp_path / "Snippet.txt", ["void A()", "{", "}"])
    FileProcessor().process(src)
    assert len(read_lines(src)) == 5


@mark_integration
def test_empty_directory_is_not_an_error(tmp_path: Path) -> None:
    assert FileProcessor().process(tmp_path) == []


@mark_integration
def test_invalid_path_aborts_before_touching_files(tmp_path: Path) -> None:
    with pytest.raises(InvalidPathError) as excinfo:
        FileProcessor().process(tmp_path / "missing")
    assert "is not a file's nor a folder's path" in str(excinfo.value)


@mark_integration
def test_custom_markers_from_config(tmp_path: Path) -> None:
    config = make_config(begin_marker='Probe.Begin("{label}");', end_marker="Probe.End();")
    src: Path = write_source(tmp_path / "Loop.cs", ["void Tick()", "{", "}"])
    FileProcessor(config).process_one_file(src)
    assert read_lines(src) == [
        "void Tick()",
        "{",
        '\tProbe.Begin("Loop.cs Tick");',
        "\tProbe.End();",
        "}",
    ]


def test_instrument_lines_in_memory() -> None:
    result: FileResult = instrument_lines(["int Foo() { return 1; }"], "Math.cs")
    assert result.updated_lines == [
        "\t" + END,
        "\t" + END,
        "int Foo() { return 1; }",
        "\t" + BEGIN.format("Math.cs Foo"),
    ]
    assert not result.written


def test_call_inside_async_body_does_not_abort_the_run() -> None:
    lines: list[str] = [
        "class A",
        "{",
        "    private async void Load()",
        "    {",
        "        if (a) {",
        "            await Fetch(a)",
        "                .ConfigureAwait(false);",
        "        } else {",
        "            Skip();",
        "        }",
        "    }",
        "}",
    ]
    result: FileResult = instrument_lines(lines, "A.cs")

    assert result.methods == []
    assert result.unfinished == "Fetch"
    assert result.updated_lines == lines

@mark_integration
def test_mixed_newlines_flag_is_carried_to_the_result(tmp_path: Path) -> None:
    src: Path = tmp_path / "Loop.cs"
    src.write_bytes(b"void Tick()\r\n{\r\n}\n")
    result: FileResult = FileProcessor().process_one_file(src)

    assert result.mixed_newlines
    assert src.read_bytes().count(b"\r\n") == 5
