# topmark:header:start
#
#   project      : ProfMark
#   file         : markers.py
#   file_relpath : src/profmark/engine/markers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Profiler marker statements inserted around method bodies."""

from __future__ import annotations

from dataclasses import dataclass

from profmark.constants import (
    DEFAULT_BEGIN_MARKER,
    DEFAULT_END_MARKER,
    DEFAULT_INDENT_UNIT,
    LABEL_PLACEHOLDER,
)


@dataclass(frozen=True, slots=True)
class ProfilerMarkers:
    """Statement templates for the begin/end sample markers.

    Attributes:
        begin (str): Begin-sample statement; ``{label}`` is replaced literally with
            the sample label (other braces are left alone).
        end (str): End-sample statement.
        indent_unit (str): Extra indentation added to the body's opening line
            indentation.
    """

    begin: str = DEFAULT_BEGIN_MARKER
    end: str = DEFAULT_END_MARKER
    indent_unit: str = DEFAULT_INDENT_UNIT

    def begin_line(self, indent: str, label: str) -> str:
        """Render the begin-sample line for ``label``."""
        return f"{indent}{self.begin.replace(LABEL_PLACEHOLDER, label)}"

    def end_line(self, indent: str) -> str:
        """Render the end-sample line."""
        return f"{indent}{self.end}"


def sample_label(file_name: str, method_name: str) -> str:
    """Return the sample label ``"<file name> <method name>"``."""
    return f"{file_name} {method_name}"
