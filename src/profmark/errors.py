# topmark:header:start
#
#   project      : ProfMark
#   file         : errors.py
#   file_relpath : src/profmark/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the ProfMark core.

These are framework-agnostic; the CLI layer translates them into Click
exceptions with sysexits-aligned exit codes (see `profmark.cli.errors`).
"""

from __future__ import annotations

from pathlib import Path


class ProfmarkError(Exception):
    """Base class for all ProfMark core errors."""


class InvalidPathError(ProfmarkError):
    """Raised when a target path is neither an existing file nor a directory."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Path {self.path} is not a file's nor a folder's path")


class ConfigError(ProfmarkError):
    """Raised for malformed or invalid configuration sources."""
