# topmark:header:start
#
#   project      : ProfMark
#   file         : __init__.py
#   file_relpath : src/profmark/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command line interface for ProfMark."""

from __future__ import annotations
