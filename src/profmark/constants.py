# topmark:header:start
#
#   project      : ProfMark
#   file         : constants.py
#   file_relpath : src/profmark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProfMark Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

PROFMARK_VERSION: str = get_version("profmark")

# Config files discovered in the working directory (first match wins).
PROFMARK_TOML_NAME: str = "profmark.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "tool.profmark"

# Environment variable consulted by `profmark.config.logging.resolve_env_log_level`.
LOG_LEVEL_ENV_VAR: str = "PROFMARK_LOG_LEVEL"

DEFAULT_BEGIN_MARKER: str = 'UnityEngine.Profiling.Profiler.BeginSample("{label}");'
DEFAULT_END_MARKER: str = "UnityEngine.Profiling.Profiler.EndSample();"
DEFAULT_INDENT_UNIT: str = "\t"

# Placeholder replaced with "<file name> <method name>" in the begin marker.
LABEL_PLACEHOLDER: str = "{label}"

DEFAULT_ITERATOR_MARKERS: tuple[str, ...] = ("yield return", "yield break")
DEFAULT_EXTENSIONS: tuple[str, ...] = (".cs",)
DEFAULT_ENCODING: str = "utf-8"
