# topmark:header:start
#
#   project      : ProfMark
#   file         : diff.py
#   file_relpath : src/profmark/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Colorized rendering of unified diffs."""

from __future__ import annotations

from typing import Sequence

from yachalk import chalk


def render_patch(patch: Sequence[str] | str) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch: A unified diff as either a sequence of lines or a single
            multiline string.

    Returns:
        The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=False)
    else:
        lines = [line.rstrip("\n") for line in patch]

    def process_line(line: str) -> str:
        content = line.replace("\r", "\\r").replace("\t", "    ")
        if line.startswith(("+++", "---")):
            return chalk.bold.white(content)
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.white(content)

    return "".join(f"{process_line(line)}\n" for line in lines)
