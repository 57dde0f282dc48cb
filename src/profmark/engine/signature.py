# topmark:header:start
#
#   project      : ProfMark
#   file         : signature.py
#   file_relpath : src/profmark/engine/signature.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Method signature heuristic.

A line is a *candidate definition line* when a permissive signature pattern
matches its head and none of the exclusion rules fire. The head is the text
before the first ``{``. Only the ``return`` rule looks at the head alone, so
that one-line bodies such as ``int Foo() { return 1; }`` stay candidates;
every other rule looks at the whole line.

The pattern alone also matches call expressions, control statements and
field initializers; the exclusion rules filter those out. Each rule is a
plain predicate over ``(line, head)`` and is applied in `EXCLUSION_RULES`
order.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from profmark.config.logging import get_logger

if TYPE_CHECKING:
    from profmark.config.logging import ProfmarkLogger

logger: ProfmarkLogger = get_logger(__name__)

#: ``[access] [static] ReturnType methodName(params) [{...]``
METHOD_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?:(?P<access>public|private|internal|protected)\s+)?"
    r"(?:(?P<static>static)\s+)?"
    r"[\w<>\[\]]+\s+"
    r"(?P<name>[\w<>]+)\s*"
    r"\([^)]*\)\s*\{*"
)

_NEW_RE: Final[re.Pattern[str]] = re.compile(r"\bnew\b")
_RETURN_RE: Final[re.Pattern[str]] = re.compile(r"\breturn\b")
_CONTROL_RE: Final[re.Pattern[str]] = re.compile(r"\b(?:if|foreach)\b")
_ASYNC_RE: Final[re.Pattern[str]] = re.compile(r"\basync\b")


@dataclass(frozen=True, slots=True)
class SignatureMatch:
    """Result of a successful signature match.

    Attributes:
        method_name (str): Identifier captured as the method name (may be odd for
            unusual lines; this is accepted heuristic imprecision).
        access (str | None): Access modifier when present.
        is_static (bool): Whether ``static`` preceded the return type.
    """

    method_name: str
    access: str | None = None
    is_static: bool = False


def signature_head(line: str) -> str:
    """Return the part of ``line`` before its first opening brace."""
    index: int = line.find("{")
    return line if index < 0 else line[:index]


def ends_with_terminator(line: str, head: str) -> bool:
    """Statements and argument lists end with ``;`` or ``,``."""
    return line.rstrip().endswith((";", ","))


def constructs_object(line: str, head: str) -> bool:
    """Object construction (``new Foo(...)``)."""
    return _NEW_RE.search(line) is not None


def contains_return(line: str, head: str) -> bool:
    """Returned call expressions (``return Foo(x)``)."""
    return _RETURN_RE.search(head) is not None


def contains_control_keyword(line: str, head: str) -> bool:
    """Conditionals and loops (``} else if (x)``, ``foreach (var a in Get(b))``)."""
    return _CONTROL_RE.search(line) is not None


def contains_comment(line: str, head: str) -> bool:
    """Commented-out code and doc comments."""
    return "//" in line or "/*" in line or line.lstrip().startswith("*")


def is_async(line: str, head: str) -> bool:
    """Asynchronous methods are never instrumented."""
    return _ASYNC_RE.search(line) is not None


ExclusionRule = Callable[[str, str], bool]

EXCLUSION_RULES: Final[tuple[tuple[str, ExclusionRule], ...]] = (
    ("ends_with_terminator", ends_with_terminator),
    ("constructs_object", constructs_object),
    ("contains_return", contains_return),
    ("contains_control_keyword", contains_control_keyword),
    ("contains_comment", contains_comment),
    ("is_async", is_async),
)


def find_exclusion(line: str) -> str | None:
    """Return the name of the first exclusion rule rejecting ``line``.

    Args:
        line (str): Line text without its terminator.

    Returns:
        str | None: The rule name, or None when no rule fires.
    """
    head: str = signature_head(line)
    for name, rule in EXCLUSION_RULES:
        if rule(line, head):
            return name
    return None


def match_signature(line: str) -> SignatureMatch | None:
    """Apply the pattern and the exclusion rules to ``line``.

    Args:
        line (str): Line text without its terminator.

    Returns:
        SignatureMatch | None: The match for a candidate definition line, else None.
    """
    head: str = signature_head(line)
    match: re.Match[str] | None = METHOD_PATTERN.search(head)
    if match is None:
        return None
    excluded_by: str | None = find_exclusion(line)
    if excluded_by is not None:
        logger.trace("Signature-like line rejected by %s: %r", excluded_by, line)
        return None
    return SignatureMatch(
        method_name=match.group("name"),
        access=match.group("access"),
        is_static=match.group("static") is not None,
    )


def is_candidate_line(line: str) -> bool:
    """Return True when ``line`` is a candidate method definition line."""
    return match_signature(line) is not None
