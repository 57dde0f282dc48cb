# topmark:header:start
#
#   project      : ProfMark
#   file         : options.py
#   file_relpath : src/profmark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

Verbosity flags control program output only; internal logging is driven by
the ``PROFMARK_LOG_LEVEL`` environment variable.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ParamSpec, TypeVar

import click

from profmark.cli.errors import ProfmarkUsageError
from profmark.config.logging import TRACE_LEVEL

P = ParamSpec("P")
R = TypeVar("R")

#: Click context settings shared by every command.
CONTEXT_SETTINGS: dict[str, Any] = {
    "help_option_names": ["-h", "--help"],
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output level from ``-v`` and ``-q`` counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        The level as an integer: TRACE for three or more ``-v``, DEBUG for two,
        INFO for one, ERROR for any ``-q`` and WARNING by default.

    Raises:
        ProfmarkUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise ProfmarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return TRACE_LEVEL
    if verbose_count == 2:  # -vv
        return logging.DEBUG
    if verbose_count == 1:  # -v
        return logging.INFO
    if quiet_count >= 1:  # -q
        return logging.ERROR
    return logging.WARNING


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` counting options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase output detail: -v lists methods, -vv also prints their bodies.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress progress output.",
    )(f)
    return f
