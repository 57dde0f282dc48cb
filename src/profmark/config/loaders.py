# topmark:header:start
#
#   project      : ProfMark
#   file         : loaders.py
#   file_relpath : src/profmark/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load, query and render TOML configuration sources.

This module provides I/O helpers for reading ProfMark configuration from
on-disk TOML files (``profmark.toml`` / ``[tool.profmark]`` in
``pyproject.toml``), typed value getters for parsed tables, and rendering of
configuration dicts back to TOML text.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from profmark.config.logging import get_logger
from profmark.constants import (
    PROFMARK_TOML_NAME,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_SECTION,
)
from profmark.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from profmark.config.logging import ProfmarkLogger

TomlTable = dict[str, Any]

logger: ProfmarkLogger = get_logger(__name__)


def parse_toml_text(text: str, *, source: str = "<string>") -> TomlTable:
    """Parse TOML text into a plain dict.

    Args:
        text (str): TOML document text.
        source (str): Name of the source, used in error messages.

    Returns:
        TomlTable: The parsed document, unwrapped from tomlkit containers.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc = tomlkit.parse(text)
    except TomlkitParseError as e:
        raise ConfigError(f"Invalid TOML in {source}: {e}") from e
    return cast("TomlTable", doc.unwrap())


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    data: TomlTable = parse_toml_text(text, source=str(path))
    logger.debug("Loaded TOML from %s (%d top-level keys)", path, len(data))
    return data


def extract_tool_section(data: TomlTable) -> TomlTable | None:
    """Return the ``[tool.profmark]`` table from a parsed ``pyproject.toml``.

    Args:
        data (TomlTable): Parsed ``pyproject.toml`` content.

    Returns:
        TomlTable | None: The nested table, or None when the section is absent.
    """
    node: Any = data
    for part in PYPROJECT_TOOL_SECTION.split("."):
        if not isinstance(node, Mapping):
            return None
        node = cast("Mapping[str, Any]", node).get(part)
    if isinstance(node, Mapping):
        return dict(cast("Mapping[str, Any]", node))
    return None


def load_config_source(path: Path) -> TomlTable:
    """Load the ProfMark table from a config file.

    ``pyproject.toml`` files contribute their ``[tool.profmark]`` table (or
    nothing); any other file is treated as a standalone ``profmark.toml``.

    Args:
        path (Path): Config file to load.

    Returns:
        TomlTable: The ProfMark configuration table (possibly empty).
    """
    data: TomlTable = load_toml_dict(path)
    if path.name == PYPROJECT_TOML_NAME:
        section: TomlTable | None = extract_tool_section(data)
        if section is None:
            logger.debug("No [%s] section in %s", PYPROJECT_TOOL_SECTION, path)
            return {}
        return section
    return data


def discover_config_file(directory: Path) -> Path | None:
    """Find the project config file in ``directory``.

    ``profmark.toml`` takes precedence over a ``pyproject.toml`` that carries
    a ``[tool.profmark]`` section.

    Args:
        directory (Path): Directory to inspect (usually the working directory).

    Returns:
        Path | None: The config file to use, or None when none applies.
    """
    candidate: Path = directory / PROFMARK_TOML_NAME
    if candidate.is_file():
        return candidate
    pyproject: Path = directory / PYPROJECT_TOML_NAME
    if pyproject.is_file() and extract_tool_section(load_toml_dict(pyproject)) is not None:
        return pyproject
    return None


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table stored under ``key`` (empty when missing).

    Raises:
        ConfigError: If the value exists but is not a table.
    """
    value: Any = table.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"[{key}] must be a table, got {type(value).__name__}")
    return dict(cast("Mapping[str, Any]", value))


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        str | None: The string value, or None when the key is absent.

    Raises:
        ConfigError: If the key is present with a non-string value.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {value!r}")
    return value


def get_string_list_or_none(table: TomlTable, key: str) -> list[str] | None:
    """Extract an optional list of strings from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        list[str] | None: The list, or None when the key is absent.

    Raises:
        ConfigError: If the value is not a list of strings.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings, got {value!r}")
    return list(cast("list[str]", value))


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string.

    TOML has no ``null``; keys holding None are dropped.

    Args:
        toml_dict (TomlTable): Mapping to serialize.

    Returns:
        str: The TOML document text.
    """
    cleaned: TomlTable = {
        section: {k: v for k, v in values.items() if v is not None}
        if isinstance(values, Mapping)
        else values
        for section, values in toml_dict.items()
        if values is not None
    }
    return tomlkit.dumps(cleaned)
