# topmark:header:start
#
#   project      : ProfMark
#   file         : file_resolver.py
#   file_relpath : src/profmark/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the source files ProfMark should process.

A target path is either a single file (processed whatever its extension)
or a directory walked recursively for files with one of the configured
extensions. Directory results are filtered with gitignore-style include
patterns (intersection) and exclude patterns (subtraction), matched against
the path relative to the directory. The result is sorted for deterministic
processing order.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from profmark.config.logging import get_logger
from profmark.constants import DEFAULT_EXTENSIONS
from profmark.errors import InvalidPathError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from profmark.config import Config
    from profmark.config.logging import ProfmarkLogger

logger: ProfmarkLogger = get_logger(__name__)


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def _build_spec(patterns: Iterable[str]) -> PathSpec | None:
    lines: list[str] = [p for p in patterns if p.strip()]
    if not lines:
        return None
    return PathSpec.from_lines(GitWildMatchPattern, lines)


def discover_source_files(
    directory: Path,
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    include_patterns: Iterable[str] = (),
    exclude_patterns: Iterable[str] = (),
) -> list[Path]:
    """Recursively collect source files below ``directory``.

    Args:
        directory (Path): Directory to walk.
        extensions (Iterable[str]): Accepted suffixes (compared case-insensitively).
        include_patterns (Iterable[str]): Keep only files matching any of these.
        exclude_patterns (Iterable[str]): Drop files matching any of these.

    Returns:
        list[Path]: Sorted list of matching files (possibly empty).
    """
    suffixes: frozenset[str] = frozenset(e.lower() for e in extensions)
    candidates: list[Path] = [
        p for p in directory.rglob("*") if p.is_file() and p.suffix.lower() in suffixes
    ]
    logger.debug("Found %d candidate file(s) below %s", len(candidates), directory)

    include_spec: PathSpec | None = _build_spec(include_patterns)
    if include_spec is not None:
        candidates = [
            p for p in candidates if include_spec.match_file(_rel_for_match(p, directory))
        ]

    exclude_spec: PathSpec | None = _build_spec(exclude_patterns)
    if exclude_spec is not None:
        candidates = [
            p for p in candidates if not exclude_spec.match_file(_rel_for_match(p, directory))
        ]

    files: list[Path] = sorted(candidates)
    logger.trace("Files to process: %d -- %s", len(files), files)
    return files


def resolve_target_files(target: Path | str, config: Config | None = None) -> list[Path]:
    """Return the files to process for ``target``.

    Args:
        target (Path | str): A file or a directory.
        config (Config | None): Supplies extensions and include/exclude patterns
            for directory targets (defaults when None).

    Returns:
        list[Path]: ``[target]`` for a file; the sorted discovery result for a
        directory (an empty list is not an error).

    Raises:
        InvalidPathError: If ``target`` is neither a file nor a directory.
    """
    path = Path(target)
    if path.is_file():
        return [path]
    if path.is_dir():
        if config is None:
            return discover_source_files(path)
        return discover_source_files(
            path,
            extensions=config.extensions,
            include_patterns=config.include_patterns,
            exclude_patterns=config.exclude_patterns,
        )
    raise InvalidPathError(path)
