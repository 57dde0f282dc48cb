# topmark:header:start
#
#   project      : ProfMark
#   file         : exit_codes.py
#   file_relpath : src/profmark/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the ProfMark CLI.

ProfMark aligns with the BSD `sysexits` convention where practical. The one
deliberate divergence is `WOULD_CHANGE=2`, returned by ``--dry-run`` when at
least one file would be instrumented.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the ProfMark CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error).
        WOULD_CHANGE: Dry-run: files would change without ``--dry-run``.
        USAGE_ERROR: Invalid or missing arguments. Mirrors ``EX_USAGE (64)``.
        ENCODING_ERROR: Text decoding error. Mirrors ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Target path does not exist. Mirrors ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions. Mirrors ``EX_NOPERM (77)``.
        CONFIG_ERROR: Invalid configuration. Mirrors ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # deliberate divergence from sysexits; see module docstring

    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
