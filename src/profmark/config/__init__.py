# topmark:header:start
#
#   project      : ProfMark
#   file         : __init__.py
#   file_relpath : src/profmark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProfMark configuration: runtime model, TOML loading and logging setup."""

from __future__ import annotations

from profmark.config.model import Config, MutableConfig, load_config

__all__ = [
    "Config",
    "MutableConfig",
    "load_config",
]
