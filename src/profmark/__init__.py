# topmark:header:start
#
#   project      : ProfMark
#   file         : __init__.py
#   file_relpath : src/profmark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProfMark package.

ProfMark instruments C#-like source trees with profiler sample markers. It
discovers source files, locates method bodies with a line-oriented brace
scanner, and wraps each ordinary method in begin/end sample statements,
leaving iterator-shaped methods untouched.
"""

from __future__ import annotations
