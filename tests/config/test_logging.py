# topmark:header:start
#
#   project      : ProfMark
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for environment-driven logging configuration."""

from __future__ import annotations

import logging

import pytest

from profmark.config.logging import TRACE_LEVEL, get_logger, resolve_env_log_level
from profmark.constants import LOG_LEVEL_ENV_VAR
from tests.conftest import parametrize


def test_env_unset_resolves_to_none() -> None:
    assert resolve_env_log_level() is None


@parametrize(
    "value,level",
    [
        ("TRACE", TRACE_LEVEL),
        ("debug", logging.DEBUG),
        (" info ", logging.INFO),
        ("10", 10),
        ("chatty", None),
    ],
)
def test_env_levels(monkeypatch: pytest.MonkeyPatch, value: str, level: int | None) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, value)
    assert resolve_env_log_level() == level


def test_trace_is_emitted_below_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(TRACE_LEVEL)
    get_logger("profmark.tests").trace("traced %d", 1)
    assert "traced 1" in caplog.text
