# topmark:header:start
#
#   project      : ProfMark
#   file         : keys.py
#   file_relpath : src/profmark/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for ProfMark configuration.

These constants define the external configuration schema as it appears in
``profmark.toml`` and in ``[tool.profmark]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by ProfMark configuration."""

    # [markers]
    SECTION_MARKERS: Final[str] = "markers"

    KEY_BEGIN: Final[str] = "begin"
    KEY_END: Final[str] = "end"
    KEY_INDENT_UNIT: Final[str] = "indent_unit"

    # [scanner]
    SECTION_SCANNER: Final[str] = "scanner"

    KEY_ITERATOR_MARKERS: Final[str] = "iterator_markers"

    # [files]
    SECTION_FILES: Final[str] = "files"

    KEY_EXTENSIONS: Final[str] = "extensions"
    KEY_INCLUDE_PATTERNS: Final[str] = "include_patterns"
    KEY_EXCLUDE_PATTERNS: Final[str] = "exclude_patterns"
    KEY_ENCODING: Final[str] = "encoding"

    #: Known keys per section, used to warn about typos.
    KNOWN_KEYS: Final[dict[str, frozenset[str]]] = {
        SECTION_MARKERS: frozenset({KEY_BEGIN, KEY_END, KEY_INDENT_UNIT}),
        SECTION_SCANNER: frozenset({KEY_ITERATOR_MARKERS}),
        SECTION_FILES: frozenset(
            {KEY_EXTENSIONS, KEY_INCLUDE_PATTERNS, KEY_EXCLUDE_PATTERNS, KEY_ENCODING}
        ),
    }
