# topmark:header:start
#
#   project      : ProfMark
#   file         : model.py
#   file_relpath : src/profmark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot used by the processor.
    - `MutableConfig`: a mutable builder used during discovery/merge; it can be
      frozen into `Config` and thawed back for edits.

Layering (lowest to highest precedence):
    1. built-in defaults (`MutableConfig.from_defaults`),
    2. the discovered project file (``profmark.toml`` or ``[tool.profmark]``),
    3. files passed explicitly with ``--config``,
    4. CLI / API overrides.

TOML I/O lives in `profmark.config.loaders`; this module only shapes values.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from profmark.config.keys import Toml
from profmark.config.loaders import (
    discover_config_file,
    get_string_list_or_none,
    get_string_value_or_none,
    get_table_value,
    load_config_source,
    to_toml,
)
from profmark.config.logging import get_logger
from profmark.constants import (
    DEFAULT_BEGIN_MARKER,
    DEFAULT_ENCODING,
    DEFAULT_END_MARKER,
    DEFAULT_EXTENSIONS,
    DEFAULT_INDENT_UNIT,
    DEFAULT_ITERATOR_MARKERS,
)
from profmark.engine.markers import ProfilerMarkers
from profmark.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from profmark.config.loaders import TomlTable
    from profmark.config.logging import ProfmarkLogger

logger: ProfmarkLogger = get_logger(__name__)


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for ProfMark.

    Attributes:
        begin_marker (str): Begin-sample statement template (``{label}`` placeholder).
        end_marker (str): End-sample statement.
        indent_unit (str): Indentation added on top of the body's opening line.
        iterator_markers (tuple[str, ...]): Substrings marking iterator-shaped bodies.
        extensions (tuple[str, ...]): Source file suffixes discovered in directories.
        include_patterns (tuple[str, ...]): Gitignore-style patterns to keep.
        exclude_patterns (tuple[str, ...]): Gitignore-style patterns to drop.
        encoding (str): Text encoding of source files.
        config_files (tuple[Path, ...]): Config sources merged into this snapshot.
    """

    begin_marker: str
    end_marker: str
    indent_unit: str
    iterator_markers: tuple[str, ...]
    extensions: tuple[str, ...]
    include_patterns: tuple[str, ...]
    exclude_patterns: tuple[str, ...]
    encoding: str
    config_files: tuple[Path, ...]

    @property
    def markers(self) -> ProfilerMarkers:
        """Marker templates used for instrumentation."""
        return ProfilerMarkers(
            begin=self.begin_marker, end=self.end_marker, indent_unit=self.indent_unit
        )

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this configuration."""
        return MutableConfig(
            begin_marker=self.begin_marker,
            end_marker=self.end_marker,
            indent_unit=self.indent_unit,
            iterator_markers=list(self.iterator_markers),
            extensions=list(self.extensions),
            include_patterns=list(self.include_patterns),
            exclude_patterns=list(self.exclude_patterns),
            encoding=self.encoding,
            config_files=list(self.config_files),
        )

    def to_toml_dict(self) -> TomlTable:
        """Render the configuration as a TOML-shaped dict."""
        return {
            Toml.SECTION_MARKERS: {
                Toml.KEY_BEGIN: self.begin_marker,
                Toml.KEY_END: self.end_marker,
                Toml.KEY_INDENT_UNIT: self.indent_unit,
            },
            Toml.SECTION_SCANNER: {
                Toml.KEY_ITERATOR_MARKERS: list(self.iterator_markers),
            },
            Toml.SECTION_FILES: {
                Toml.KEY_EXTENSIONS: list(self.extensions),
                Toml.KEY_INCLUDE_PATTERNS: list(self.include_patterns),
                Toml.KEY_EXCLUDE_PATTERNS: list(self.exclude_patterns),
                Toml.KEY_ENCODING: self.encoding,
            },
        }

    def to_toml(self) -> str:
        """Render the configuration as TOML text."""
        return to_toml(self.to_toml_dict())


@dataclass
class MutableConfig:
    """Mutable configuration builder.

    Fields left at None are "unset" and do not override lower layers in
    `merge_with`; `freeze` fills any remaining gaps with the defaults.
    """

    begin_marker: str | None = None
    end_marker: str | None = None
    indent_unit: str | None = None
    iterator_markers: list[str] | None = None
    extensions: list[str] | None = None
    include_patterns: list[str] | None = None
    exclude_patterns: list[str] | None = None
    encoding: str | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with the built-in defaults."""
        return cls(
            begin_marker=DEFAULT_BEGIN_MARKER,
            end_marker=DEFAULT_END_MARKER,
            indent_unit=DEFAULT_INDENT_UNIT,
            iterator_markers=list(DEFAULT_ITERATOR_MARKERS),
            extensions=list(DEFAULT_EXTENSIONS),
            include_patterns=[],
            exclude_patterns=[],
            encoding=DEFAULT_ENCODING,
        )

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, source: Path | None = None) -> MutableConfig:
        """Build a partial builder from a ProfMark TOML table.

        Unknown sections and keys are logged as warnings and otherwise ignored.

        Args:
            data (TomlTable): The ProfMark table (``profmark.toml`` root or
                ``[tool.profmark]``).
            source (Path | None): File the table came from, recorded for provenance.

        Returns:
            MutableConfig: A builder holding only the values present in ``data``.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        where: str = str(source) if source is not None else "<config>"
        for section, value in data.items():
            known: frozenset[str] | None = Toml.KNOWN_KEYS.get(section)
            if known is None:
                logger.warning("Unknown config section [%s] in %s", section, where)
                continue
            if isinstance(value, dict):
                for key in value:
                    if key not in known:
                        logger.warning("Unknown config key '%s.%s' in %s", section, key, where)

        try:
            markers: TomlTable = get_table_value(data, Toml.SECTION_MARKERS)
            scanner: TomlTable = get_table_value(data, Toml.SECTION_SCANNER)
            files: TomlTable = get_table_value(data, Toml.SECTION_FILES)

            extensions: list[str] | None = get_string_list_or_none(files, Toml.KEY_EXTENSIONS)
            draft = cls(
                begin_marker=get_string_value_or_none(markers, Toml.KEY_BEGIN),
                end_marker=get_string_value_or_none(markers, Toml.KEY_END),
                indent_unit=get_string_value_or_none(markers, Toml.KEY_INDENT_UNIT),
                iterator_markers=get_string_list_or_none(scanner, Toml.KEY_ITERATOR_MARKERS),
                extensions=[_normalize_extension(e) for e in extensions]
                if extensions is not None
                else None,
                include_patterns=get_string_list_or_none(files, Toml.KEY_INCLUDE_PATTERNS),
                exclude_patterns=get_string_list_or_none(files, Toml.KEY_EXCLUDE_PATTERNS),
                encoding=get_string_value_or_none(files, Toml.KEY_ENCODING),
                config_files=[source] if source is not None else [],
            )
        except ConfigError as e:
            raise ConfigError(f"{where}: {e}") from e
        return draft

    @classmethod
    def from_file(cls, path: Path) -> MutableConfig:
        """Load a builder from ``profmark.toml`` or a ``pyproject.toml``."""
        return cls.from_toml_dict(load_config_source(path), source=path)

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Overlay ``other`` on top of ``self`` (set fields in ``other`` win).

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        for name in (
            "begin_marker",
            "end_marker",
            "indent_unit",
            "iterator_markers",
            "extensions",
            "include_patterns",
            "exclude_patterns",
            "encoding",
        ):
            value: Any = getattr(other, name)
            if value is not None:
                setattr(self, name, value)
        self.config_files.extend(other.config_files)
        return self

    def apply_overrides(self, **overrides: Any) -> MutableConfig:
        """Set fields from keyword overrides, ignoring None values.

        Raises:
            ConfigError: If an override names an unknown field.
        """
        for name, value in overrides.items():
            if not hasattr(self, name) or name == "config_files":
                raise ConfigError(f"Unknown config override: {name}")
            if value is None:
                continue
            if name == "extensions":
                value = [_normalize_extension(e) for e in value]
            setattr(self, name, list(value) if isinstance(value, tuple) else value)
        return self

    def freeze(self) -> Config:
        """Return an immutable `Config`, filling unset fields with defaults."""
        base: MutableConfig = MutableConfig.from_defaults()
        base.merge_with(replace(self, config_files=[]))
        assert base.begin_marker is not None and base.end_marker is not None
        assert base.indent_unit is not None and base.encoding is not None
        return Config(
            begin_marker=base.begin_marker,
            end_marker=base.end_marker,
            indent_unit=base.indent_unit,
            iterator_markers=tuple(base.iterator_markers or ()),
            extensions=tuple(base.extensions or ()),
            include_patterns=tuple(base.include_patterns or ()),
            exclude_patterns=tuple(base.exclude_patterns or ()),
            encoding=base.encoding,
            config_files=tuple(self.config_files),
        )


def load_config(
    *,
    config_paths: Iterable[Path | str] = (),
    no_config: bool = False,
    cwd: Path | None = None,
    **overrides: Any,
) -> Config:
    """Resolve the effective configuration.

    Args:
        config_paths (Iterable[Path | str]): Extra config files, applied in order.
        no_config (bool): Skip discovery of a project config file in ``cwd``.
        cwd (Path | None): Directory searched for the project config (default: CWD).
        **overrides (Any): Highest-precedence field values (None values are ignored).

    Returns:
        Config: The frozen configuration.

    Raises:
        ConfigError: If a config source is unreadable or invalid.
    """
    draft: MutableConfig = MutableConfig.from_defaults()

    if not no_config:
        discovered: Path | None = discover_config_file(cwd or Path.cwd())
        if discovered is not None:
            logger.info("Using project config %s", discovered)
            draft.merge_with(MutableConfig.from_file(discovered))

    for raw in config_paths:
        path = Path(raw)
        logger.info("Merging config file %s", path)
        draft.merge_with(MutableConfig.from_file(path))

    draft.apply_overrides(**overrides)
    config: Config = draft.freeze()
    logger.debug("Effective config: %s", config)
    return config
