# topmark:header:start
#
#   project      : ProfMark
#   file         : errors.py
#   file_relpath : src/profmark/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the ProfMark CLI.

Each exception carries a sysexits-aligned exit code. Core exceptions from
`profmark.errors` and OS-level failures are translated by
`translate_error` at the CLI boundary.
"""

from __future__ import annotations

from typing import IO, Any

import click

from profmark.cli.exit_codes import ExitCode
from profmark.errors import ConfigError, InvalidPathError


class ProfmarkCliError(click.ClickException):
    """Base class for all ProfMark CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class ProfmarkUsageError(ProfmarkCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class ProfmarkConfigError(ProfmarkCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class ProfmarkFileNotFoundError(ProfmarkCliError):
    """Error when the target path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class ProfmarkPermissionDeniedError(ProfmarkCliError):
    """Error for insufficient permissions (read/write)."""

    exit_code = ExitCode.PERMISSION_DENIED


class ProfmarkIOError(ProfmarkCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class ProfmarkEncodingError(ProfmarkCliError):
    """Error for text decoding/encoding errors."""

    exit_code = ExitCode.ENCODING_ERROR


def translate_error(exc: Exception) -> ProfmarkCliError:
    """Map a core or OS exception to the matching CLI error.

    Args:
        exc (Exception): The exception raised while processing.

    Returns:
        ProfmarkCliError: The CLI error to raise (chained by the caller).
    """
    if isinstance(exc, InvalidPathError):
        return ProfmarkFileNotFoundError(str(exc))
    if isinstance(exc, ConfigError):
        return ProfmarkConfigError(str(exc))
    if isinstance(exc, UnicodeError):
        return ProfmarkEncodingError(f"Cannot decode file: {exc}")
    if isinstance(exc, PermissionError):
        return ProfmarkPermissionDeniedError(f"Permission denied: {exc.filename}")
    if isinstance(exc, FileNotFoundError):
        return ProfmarkFileNotFoundError(f"No such file or directory: {exc.filename}")
    if isinstance(exc, OSError):
        return ProfmarkIOError(f"I/O error: {exc}")
    error = ProfmarkCliError(f"Unexpected error: {exc}")
    error.exit_code = ExitCode.UNEXPECTED_ERROR
    return error
