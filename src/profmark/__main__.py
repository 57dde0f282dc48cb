# topmark:header:start
#
#   project      : ProfMark
#   file         : __main__.py
#   file_relpath : src/profmark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running ProfMark via ``python -m profmark``.

Delegates to :func:`profmark.cli.main.cli`, the same entry point as the
``profmark`` console script.

Examples:
    Instrument every ``.cs`` file below ``Assets/Scripts``::

        python -m profmark --path Assets/Scripts
"""

from __future__ import annotations

from profmark.cli.main import cli

if __name__ == "__main__":
    cli()
